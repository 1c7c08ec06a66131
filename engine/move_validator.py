"""
Move validator for the TicTacToe engine.
Validates that a human move follows the rules before it is applied.
"""

from dataclasses import dataclass
from typing import List, Optional

from .board import check_index
from .errors import (
    CellOccupiedError,
    GameAlreadyOverError,
    InvalidMoveError,
    NotYourTurnError,
)
from .game_state import GameState


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error: Optional[InvalidMoveError] = None

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


class MoveValidator:
    """
    Validates TicTacToe moves.

    Rules:
    1. The index must be a cell number 0-8
    2. Game must not be over
    3. It must be the human's turn
    4. Can only place on empty cells
    """

    def validate_move(
        self,
        game_state: GameState,
        index: int,
        humans_turn: bool = True
    ) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            index: Cell to place a mark on (0-8).
            humans_turn: False while the computer is thinking.

        Returns:
            ValidationResult with is_valid and the error that would be raised.
        """
        try:
            check_index(index)
        except InvalidMoveError as e:
            return ValidationResult(is_valid=False, error=e)

        if game_state.is_game_over:
            return ValidationResult(is_valid=False, error=GameAlreadyOverError(index))

        if not humans_turn:
            return ValidationResult(is_valid=False, error=NotYourTurnError(index))

        occupant = game_state.board[index]
        if not game_state.board.is_empty(index):
            return ValidationResult(is_valid=False, error=CellOccupiedError(index, occupant))

        return ValidationResult(is_valid=True)

    def get_valid_moves(self, game_state: GameState) -> List[int]:
        """All cells the side to move may play."""
        if game_state.is_game_over:
            return []
        return game_state.board.empty_cells()
