import random
from typing import Dict, List, Tuple

import pytest

from engine import Board, GameConfig, ManualScheduler, Mark, TurnController
from engine.board import find_winner


def reachable_boards() -> List[Board]:
    """Every board reachable in legal play with X moving first."""
    seen: Dict[str, Board] = {}

    def walk(board: Board, to_move: Mark) -> None:
        key = str(board)
        if key in seen:
            return
        seen[key] = board
        if find_winner(board.cells) is not None or board.is_full():
            return
        for i in board.empty_cells():
            child = board.copy()
            child.cells[i] = to_move
            walk(child, to_move.opponent())

    walk(Board(), Mark.X)
    return list(seen.values())


@pytest.fixture(scope="session")
def all_reachable_boards() -> List[Board]:
    return reachable_boards()


class EventRecorder:
    """Listener that keeps every event it receives."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def of_type(self, kind) -> list:
        return [e for e in self.events if isinstance(e, kind)]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def make_controller(recorder):
    """Build a controller on a ManualScheduler with an event recorder attached."""

    def _make(strategy=None, **config) -> Tuple[TurnController, ManualScheduler]:
        config.setdefault("seed", 1234)
        scheduler = ManualScheduler()
        controller = TurnController(
            GameConfig(**config),
            strategy=strategy,
            scheduler=scheduler,
            listeners=[recorder],
        )
        return controller, scheduler

    return _make


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)
