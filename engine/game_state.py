"""
Game state management for the TicTacToe engine.
Tracks the board, whose turn it is, the move history and the outcome.
"""

from dataclasses import dataclass, field
from typing import List

from .board import Board, Mark
from .win_checker import IN_PROGRESS, GameOutcome


@dataclass(frozen=True)
class Move:
    """
    A move in the game.
    """
    mark: Mark              # Who made the move
    index: int              # Cell (0-8)
    move_number: int        # Ply number, starting at 0
    by_ai: bool = False     # True if the computer played it


@dataclass
class GameState:
    """
    The complete state of one TicTacToe game.

    Tracks:
    - The 3x3 board
    - Whose turn it is
    - Move history
    - Game outcome (in progress, won, draw)
    """

    board: Board = field(default_factory=Board)

    # Mark of the side to move
    current_mover: Mark = Mark.X

    moves: List[Move] = field(default_factory=list)

    outcome: GameOutcome = IN_PROGRESS

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_terminal

    def make_move(self, index: int, by_ai: bool = False) -> Move:
        """
        Place the current mover's mark and pass the turn.

        The outcome is not updated here; WinChecker.update_game_state does that.

        Args:
            index: Cell (0-8).
            by_ai: Whether the computer is making this move.

        Returns:
            The recorded Move.

        Raises:
            InvalidMoveError: see Board.place.
        """
        self.board.place(index, self.current_mover)

        move = Move(
            mark=self.current_mover,
            index=index,
            move_number=len(self.moves),
            by_ai=by_ai,
        )
        self.moves.append(move)

        self.current_mover = self.current_mover.opponent()
        return move

    def copy(self) -> "GameState":
        """Create a deep copy of the game state."""
        return GameState(
            board=self.board.copy(),
            current_mover=self.current_mover,
            moves=list(self.moves),
            outcome=self.outcome,
        )
