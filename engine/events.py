"""
Events the controller sends to the front end.

The controller never touches presentation objects. A front end subscribes a
callable and redraws cells, shows the result, draws the winning line or plays
a sound when these arrive.
"""

from dataclasses import dataclass
from typing import Callable, Union

from .board import Mark
from .win_checker import GameOutcome


@dataclass(frozen=True)
class CellUpdated:
    """A mark was placed on a cell."""
    index: int
    mark: Mark
    by_ai: bool = False


@dataclass(frozen=True)
class GameEnded:
    """The game was won or drawn. outcome.pattern is the line to highlight."""
    outcome: GameOutcome


@dataclass(frozen=True)
class BoardCleared:
    """The board was reset for a new game."""


GameEvent = Union[CellUpdated, GameEnded, BoardCleared]
Listener = Callable[[GameEvent], None]
