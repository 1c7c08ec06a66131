"""
Win checker for the TicTacToe engine.
Decides whether a board is won, drawn, or still being played.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from .board import Board, Mark, WinPattern, find_winner

if TYPE_CHECKING:
    from .game_state import GameState


class OutcomeStatus(Enum):
    IN_PROGRESS = "in_progress"
    WINNER = "winner"
    DRAW = "draw"


@dataclass(frozen=True)
class GameOutcome:
    """
    Result of looking at a board.

    For a win, `winner` is the winning mark and `pattern` the completed line.
    Both are None otherwise.
    """
    status: OutcomeStatus
    winner: Optional[Mark] = None
    pattern: Optional[WinPattern] = None

    @classmethod
    def in_progress(cls) -> "GameOutcome":
        return IN_PROGRESS

    @classmethod
    def draw(cls) -> "GameOutcome":
        return DRAW

    @classmethod
    def won(cls, mark: Mark, pattern: WinPattern) -> "GameOutcome":
        return cls(OutcomeStatus.WINNER, mark, pattern)

    @property
    def is_terminal(self) -> bool:
        return self.status is not OutcomeStatus.IN_PROGRESS

    @property
    def is_draw(self) -> bool:
        return self.status is OutcomeStatus.DRAW

    @property
    def is_win(self) -> bool:
        return self.status is OutcomeStatus.WINNER

    def describe(self) -> str:
        """Short human-readable result, e.g. "X wins!"."""
        if self.is_win:
            return f"{self.winner} wins!"
        if self.is_draw:
            return "It's a tie!"
        return "Game in progress"


IN_PROGRESS = GameOutcome(OutcomeStatus.IN_PROGRESS)
DRAW = GameOutcome(OutcomeStatus.DRAW)


def detect_outcome(board: Board) -> GameOutcome:
    """
    Look at a board and report its outcome.

    Patterns are checked rows, then columns, then diagonals, and the first
    completed one is reported. A full board with no completed line is a draw.
    """
    pattern = find_winner(board.cells)
    if pattern is not None:
        return GameOutcome.won(board.cells[pattern.a], pattern)
    if board.is_full():
        return DRAW
    return IN_PROGRESS


class WinChecker:
    """
    Checks for win conditions on a game state.

    Win condition: 3 of the same mark in a row
    (horizontally, vertically, or diagonally).
    """

    def update_game_state(self, game_state: "GameState") -> GameOutcome:
        """
        Store the board's outcome on the game state.

        Returns:
            The outcome that was stored.
        """
        game_state.outcome = detect_outcome(game_state.board)
        return game_state.outcome
