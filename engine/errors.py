"""
Errors raised by the TicTacToe engine.

InvalidMoveError and its subclasses are recoverable: the move is rejected and
the game is left as it was. StrategyPreconditionError means the engine itself
is broken and should not be caught by a front end.
"""

from typing import Any, Optional


class TicTacToeError(Exception):
    """Base class for all engine errors."""


class InvalidMoveError(TicTacToeError):
    """A move was rejected. The game state is unchanged."""

    def __init__(self, index: Any, message: Optional[str] = None):
        self.index = index
        super().__init__(message or f"Invalid move at cell {index!r}")


class InvalidCellIndexError(InvalidMoveError):
    """The cell index is not 0-8."""

    def __init__(self, index: Any):
        super().__init__(index, f"Invalid cell {index!r}. Must be 0-8.")


class CellOccupiedError(InvalidMoveError):
    """The cell already holds a mark."""

    def __init__(self, index: int, occupant: Any = None):
        self.occupant = occupant
        message = f"Cell {index} is already occupied"
        if occupant is not None:
            message += f" by {occupant}"
        super().__init__(index, message)


class GameAlreadyOverError(InvalidMoveError):
    """The game has been won or drawn; reset before playing again."""

    def __init__(self, index: Any = None):
        super().__init__(index, "Game is already over!")


class NotYourTurnError(InvalidMoveError):
    """The human tried to move while the AI is thinking."""

    def __init__(self, index: Any = None):
        super().__init__(index, "Wait for the computer to finish its move")


class StrategyPreconditionError(TicTacToeError, AssertionError):
    """A strategy was asked to move on a finished board."""
