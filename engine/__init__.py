"""
TicTacToe game engine.
Board, win detection, computer opponents and the turn controller that ties
them together. Front ends drive it through TurnController and redraw from
its events.
"""

__version__ = "1.0.0"

from .board import Board, Mark, WinPattern, WIN_PATTERNS
from .win_checker import GameOutcome, OutcomeStatus, WinChecker, detect_outcome
from .errors import (
    TicTacToeError,
    InvalidMoveError,
    InvalidCellIndexError,
    CellOccupiedError,
    GameAlreadyOverError,
    NotYourTurnError,
    StrategyPreconditionError,
)
from .game_state import GameState, Move
from .move_validator import MoveValidator, ValidationResult
from .ai_player import (
    Difficulty,
    MoveStrategy,
    RandomStrategy,
    HeuristicStrategy,
    MinimaxStrategy,
    make_strategy,
)
from .events import BoardCleared, CellUpdated, GameEnded
from .scheduler import ManualScheduler, PendingMove, ThreadingScheduler
from .config import FirstMover, GameConfig, Opening
from .controller import TurnController, TurnState
