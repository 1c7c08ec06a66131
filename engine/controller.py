"""
Turn controller for the TicTacToe engine.

Alternates between a human, who submits moves, and a computer strategy,
which answers after a short "thinking" pause. The controller owns the game
state and reports everything that happens through events.

Game flow:
1. Human submits a cell
2. Move is validated and applied, the board is checked for a result
3. If the game goes on, the computer's move is scheduled after the delay
4. The computer's move is applied and checked
5. Repeat until someone wins or the board is full
"""

import functools
import logging
import random
import threading
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .ai_player import MoveStrategy, make_strategy
from .board import Board, Mark
from .config import FirstMover, GameConfig, Opening
from .events import BoardCleared, CellUpdated, GameEnded, GameEvent, Listener
from .game_state import GameState, Move
from .move_validator import MoveValidator
from .scheduler import PendingMove, ThreadingScheduler
from .win_checker import GameOutcome, WinChecker

logger = logging.getLogger(__name__)


class TurnState(Enum):
    AWAITING_HUMAN = "awaiting_human"
    AI_THINKING = "ai_thinking"
    TERMINAL = "terminal"


class TurnController:
    """
    Main controller for a human-vs-computer game.

    All public methods and the computer's deferred move run under one
    re-entrant lock, so the controller can be driven from a UI thread while
    a ThreadingScheduler fires timers on another. The strategy's search is
    the exception: it runs on a board copy with the lock released.

    Events are queued while the state changes and delivered once it is
    consistent again, so a listener that raises cannot leave a half-applied
    turn behind.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        strategy: Optional[MoveStrategy] = None,
        scheduler=None,
        listeners: Iterable[Listener] = ()
    ):
        """
        Set up a session and start the first game.

        Args:
            config: Game settings. Uses defaults if not provided.
            strategy: Computer opponent. Built from config.DIFFICULTY if not provided.
            scheduler: Anything with call_later(delay, callback) -> PendingMove.
                Uses a ThreadingScheduler if not provided.
            listeners: Callables that receive every GameEvent. Passed here so
                they also see an opening move made during construction.
        """
        self.config = config or GameConfig()
        self.rng = random.Random(self.config.SEED)
        self.strategy = strategy or make_strategy(
            self.config.DIFFICULTY,
            rng=self.rng,
            fallibility=self.config.FALLIBILITY,
        )
        self.scheduler = scheduler if scheduler is not None else ThreadingScheduler()

        self.human_mark = self.config.human_mark
        self.ai_mark = self.config.ai_mark

        self.validator = MoveValidator()
        self.win_checker = WinChecker()

        self._listeners: List[Listener] = list(listeners)
        self._outbox: List[GameEvent] = []
        self._lock = threading.RLock()
        self._pending: Optional[PendingMove] = None
        # Bumped whenever a computer move is scheduled or the game is reset;
        # a computer move only lands if its token is still current
        self._turn_token = 0

        self.game_state = GameState()
        self._state = TurnState.AWAITING_HUMAN

        logger.info(
            "New session: human plays %s, computer plays %s (%s)",
            self.human_mark, self.ai_mark, self.strategy,
        )

        self._start_game()

    # ==================== LISTENERS ====================

    def subscribe(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            self._listeners.remove(listener)

    def _emit(self, event: GameEvent) -> None:
        """Queue an event. It is delivered by _flush once the state is settled."""
        self._outbox.append(event)

    def _flush(self) -> None:
        events, self._outbox = self._outbox, []
        for event in events:
            for listener in list(self._listeners):
                listener(event)

    # ==================== STATE ====================

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def board(self) -> Board:
        """A copy of the current board."""
        with self._lock:
            return self.game_state.board.copy()

    @property
    def outcome(self) -> GameOutcome:
        return self.game_state.outcome

    @property
    def current_mover(self) -> Mark:
        return self.game_state.current_mover

    @property
    def moves(self) -> Tuple[Move, ...]:
        with self._lock:
            return tuple(self.game_state.moves)

    @property
    def has_pending_move(self) -> bool:
        return self._pending is not None and self._pending.active

    # ==================== HUMAN MOVES ====================

    def submit_human_move(self, index: int) -> Move:
        """
        Play the human's mark on a cell.

        Args:
            index: Cell number (0-8).

        Returns:
            The recorded Move.

        Raises:
            InvalidMoveError: the move was rejected (bad index, occupied cell,
                game over, or the computer is still thinking). Nothing changed.
        """
        with self._lock:
            result = self.validator.validate_move(
                self.game_state,
                index,
                humans_turn=self._state == TurnState.AWAITING_HUMAN,
            )
            if not result.is_valid:
                logger.debug("Rejected human move at %r: %s", index, result.error_message)
                raise result.error

            move = self.game_state.make_move(index)
            logger.debug("Human placed %s at %d", move.mark, index)
            self._emit(CellUpdated(index, move.mark))

            if not self._check_outcome():
                self._schedule_ai_move()

            self._flush()
            return move

    # ==================== COMPUTER MOVES ====================

    def _schedule_ai_move(self) -> None:
        """Enter AI_THINKING and schedule the computer's move after the delay."""
        self._state = TurnState.AI_THINKING
        self._turn_token += 1
        callback = functools.partial(self._ai_turn, self._turn_token)
        self._pending = self.scheduler.call_later(self.config.THINKING_DELAY, callback)
        logger.debug("Computer is thinking (%.2fs)", self.config.THINKING_DELAY)

    def _is_stale(self, token: int) -> bool:
        return token != self._turn_token or self._state != TurnState.AI_THINKING

    def _ai_turn(self, token: int) -> None:
        """
        Computer move for the turn identified by token.

        The search runs on a copy of the board without holding the lock, so
        reset() and the accessors stay responsive. The move is applied only
        if no reset happened meanwhile.
        """
        with self._lock:
            if self._is_stale(token):
                logger.debug("Discarding stale computer move (token %d)", token)
                return
            self._pending = None
            board = self.game_state.board.copy()

        try:
            index = self.strategy.select_move(board, self.ai_mark)
        except Exception:
            with self._lock:
                if not self._is_stale(token):
                    # No move can follow a failed search; reset() starts over
                    self._turn_token += 1
                    self._state = TurnState.TERMINAL
                    logger.error("%s failed to move, game abandoned", self.strategy)
            raise

        with self._lock:
            if self._is_stale(token):
                logger.debug("Discarding computer move for a finished turn (token %d)", token)
                return
            self._apply_ai_move(index)
            self._flush()

    def _apply_ai_move(self, index: int) -> None:
        move = self.game_state.make_move(index, by_ai=True)
        logger.debug("Computer placed %s at %d", move.mark, index)
        self._emit(CellUpdated(index, move.mark, by_ai=True))

        if not self._check_outcome():
            self._state = TurnState.AWAITING_HUMAN

    def _open(self) -> Optional[int]:
        """
        Make the computer's first move according to the opening policy.

        Returns:
            The turn token of an IMMEDIATE opening, which the caller plays
            through _ai_turn once the lock is released. None otherwise.
        """
        opening = self.config.OPENING

        if opening == Opening.SCHEDULED:
            self._schedule_ai_move()
        elif opening == Opening.IMMEDIATE:
            self._state = TurnState.AI_THINKING
            self._turn_token += 1
            return self._turn_token
        elif opening == Opening.RANDOM:
            self._apply_ai_move(self.rng.choice(self.validator.get_valid_moves(self.game_state)))
        else:
            raise ValueError(f"Unknown opening: {opening!r}")
        return None

    # ==================== RESULT ====================

    def _check_outcome(self) -> bool:
        """Update the outcome; on a finished game go TERMINAL and announce it."""
        outcome = self.win_checker.update_game_state(self.game_state)
        if not outcome.is_terminal:
            return False

        self._state = TurnState.TERMINAL
        logger.info("Game over: %s", outcome.describe())
        self._emit(GameEnded(outcome))
        return True

    # ==================== LIFECYCLE ====================

    def _new_game(self) -> Optional[int]:
        first = self.human_mark if self.config.FIRST_MOVER == FirstMover.HUMAN else self.ai_mark
        self.game_state = GameState(current_mover=first)
        self._state = TurnState.AWAITING_HUMAN
        logger.info("New game: %s moves first", self.config.FIRST_MOVER.value)

        if self.config.FIRST_MOVER == FirstMover.AI:
            return self._open()
        return None

    def _cancel_pending(self) -> None:
        self._turn_token += 1
        if self._pending is not None:
            self._pending.cancel()
            logger.debug("Cancelled pending computer move")
            self._pending = None

    def _start_game(self, cleared: bool = False) -> None:
        token = None
        try:
            with self._lock:
                self._cancel_pending()
                if cleared:
                    self._emit(BoardCleared())
                token = self._new_game()
                self._flush()
        finally:
            # An IMMEDIATE opening still gets played if a listener raised
            if token is not None:
                self._ai_turn(token)

    def reset(self) -> None:
        """
        Start a new game. Allowed in any state.

        A computer move that was still pending, or still being searched, is
        dropped and never lands on the new board.
        """
        logger.info("Resetting game...")
        self._start_game(cleared=True)

    def close(self) -> None:
        """Cancel any pending computer move. The controller stays readable."""
        with self._lock:
            self._cancel_pending()
