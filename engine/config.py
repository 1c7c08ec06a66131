"""
Game configuration for the TicTacToe engine.
Who moves first, how strong the computer is, and how long it "thinks".
"""

from enum import Enum
from typing import Optional

from .ai_player import Difficulty
from .board import Mark


class FirstMover(Enum):
    HUMAN = "human"
    AI = "ai"


class Opening(Enum):
    """How the computer makes its first move when it moves first."""
    SCHEDULED = "scheduled"   # Normal turn, after the thinking delay
    IMMEDIATE = "immediate"   # Strategy move, no delay
    RANDOM = "random"         # Random cell, no delay


class GameConfig:
    """
    Configuration class for a game session.

    The class attributes are the defaults. Override any of them by keyword:

        GameConfig(difficulty=Difficulty.MEDIUM, first_mover=FirstMover.AI)
    """

    # ==================== PLAYERS ====================
    FIRST_MOVER = FirstMover.HUMAN

    # Mark the human plays. None = X if the human moves first, else O
    HUMAN_MARK: Optional[Mark] = None

    # ==================== COMPUTER OPPONENT ====================
    DIFFICULTY = Difficulty.HARD

    # Chance (0-1) that the medium AI passes over a better-scoring cell.
    # 0.2 reproduces the sloppy medium opponent.
    FALLIBILITY = 0.0

    # Opening policy when FIRST_MOVER is AI
    OPENING = Opening.SCHEDULED

    # ==================== TIMING ====================
    # Seconds the computer "thinks" before each move
    THINKING_DELAY = 1.0

    # ==================== RANDOMNESS ====================
    # Seed for the random and medium players (None = unseeded)
    SEED: Optional[int] = None

    def __init__(self, **overrides):
        for key, value in overrides.items():
            attr = key.upper()
            if attr.startswith("_") or not hasattr(GameConfig, attr) or callable(getattr(GameConfig, attr)):
                raise ValueError(f"Unknown config option: {key}")
            setattr(self, attr, value)
        self.validate()

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range."""
        if not isinstance(self.FIRST_MOVER, FirstMover):
            raise ValueError(f"first_mover must be a FirstMover, got {self.FIRST_MOVER!r}")
        if not isinstance(self.DIFFICULTY, Difficulty):
            raise ValueError(f"difficulty must be a Difficulty, got {self.DIFFICULTY!r}")
        if not isinstance(self.OPENING, Opening):
            raise ValueError(f"opening must be an Opening, got {self.OPENING!r}")
        if self.HUMAN_MARK is not None and self.HUMAN_MARK not in (Mark.X, Mark.O):
            raise ValueError(f"human_mark must be X or O, got {self.HUMAN_MARK!r}")
        for name in ("THINKING_DELAY", "FALLIBILITY"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name.lower()} must be a number, got {value!r}")
        if self.THINKING_DELAY < 0:
            raise ValueError(f"thinking_delay cannot be negative, got {self.THINKING_DELAY}")
        if not 0.0 <= self.FALLIBILITY <= 1.0:
            raise ValueError(f"fallibility must be between 0 and 1, got {self.FALLIBILITY}")

    @property
    def human_mark(self) -> Mark:
        """The human's mark, resolving the default from FIRST_MOVER."""
        if self.HUMAN_MARK is not None:
            return self.HUMAN_MARK
        return Mark.X if self.FIRST_MOVER == FirstMover.HUMAN else Mark.O

    @property
    def ai_mark(self) -> Mark:
        return self.human_mark.opponent()

    def __repr__(self) -> str:
        return (
            f"GameConfig(first_mover={self.FIRST_MOVER.value}, "
            f"difficulty={self.DIFFICULTY.name}, human_mark={self.human_mark}, "
            f"thinking_delay={self.THINKING_DELAY}, fallibility={self.FALLIBILITY}, "
            f"opening={self.OPENING.value}, seed={self.SEED})"
        )
