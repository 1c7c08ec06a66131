"""
Computer opponents for the TicTacToe engine.

Three interchangeable strategies, one per difficulty:
- EASY:   RandomStrategy, any empty cell
- MEDIUM: HeuristicStrategy, win / block / best-scoring cell
- HARD:   MinimaxStrategy, full game-tree search, never loses
"""

import logging
import random
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .board import WIN_PATTERNS, Board, Mark
from .errors import StrategyPreconditionError
from .win_checker import detect_outcome

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """AI difficulty levels."""
    EASY = 1      # Random moves
    MEDIUM = 2    # Win, block, otherwise heuristic score
    HARD = 3      # Full minimax


class MoveStrategy:
    """
    Base class for computer opponents.

    Subclasses implement select_move. The board handed in must not be
    finished; asking for a move on a won or full board is a bug in the caller.
    """

    name = "strategy"

    def select_move(self, board: Board, mark: Mark) -> int:
        """
        Choose a cell for `mark` to play.

        Args:
            board: Current board. Not modified.
            mark: The mark the computer is playing.

        Returns:
            Index (0-8) of an empty cell.
        """
        raise NotImplementedError

    def _check_playable(self, board: Board, mark: Mark) -> List[int]:
        if mark is Mark.EMPTY:
            raise StrategyPreconditionError("Strategy asked to play the EMPTY mark")
        outcome = detect_outcome(board)
        if outcome.is_terminal:
            raise StrategyPreconditionError(
                f"{self.name} asked to move on a finished board {board} ({outcome.describe()})"
            )
        return board.empty_cells()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class RandomStrategy(MoveStrategy):
    """Picks uniformly among the empty cells."""

    name = "random"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def select_move(self, board: Board, mark: Mark) -> int:
        candidates = self._check_playable(board, mark)
        if len(candidates) == 1:
            return candidates[0]
        return self.rng.choice(candidates)


# Heuristic weight of a line by how many of one mark it holds
LINE_WEIGHTS = (0, 1, 10, 100)


def find_winning_move(cells: Sequence[Mark], mark: Mark) -> Optional[int]:
    """
    Find a cell that completes a line for `mark`.

    Lines are scanned in WIN_PATTERNS order and the gap in the first line
    holding two of `mark` and one empty cell is returned.
    """
    for pattern in WIN_PATTERNS:
        marks = [cells[i] for i in pattern]
        if marks.count(mark) == 2 and marks.count(Mark.EMPTY) == 1:
            return pattern[marks.index(Mark.EMPTY)]
    return None


def score_position(cells: Sequence[Mark], mark: Mark) -> int:
    """
    Heuristic value of a position for `mark`.

    Every line adds 1, 10 or 100 for holding one, two or three of `mark`,
    and subtracts the same for the opponent's mark.
    """
    score = 0
    for player, sign in ((mark, 1), (mark.opponent(), -1)):
        for pattern in WIN_PATTERNS:
            count = 0
            for i in pattern:
                if cells[i] is player:
                    count += 1
            score += sign * LINE_WEIGHTS[count]
    return score


class HeuristicStrategy(MoveStrategy):
    """
    Single-ply "medium" opponent.

    In strict order:
    1. Win now if possible.
    2. Otherwise block the opponent's immediate win.
    3. Otherwise play the cell with the best heuristic score
       (lowest index on ties).

    `fallibility` makes the third step sloppy: each cell that would beat the
    best score so far is passed over with that probability. It never touches
    the win and block steps.
    """

    name = "heuristic"

    def __init__(self, fallibility: float = 0.0, rng: Optional[random.Random] = None):
        if not 0.0 <= fallibility <= 1.0:
            raise ValueError(f"fallibility must be between 0 and 1, got {fallibility}")
        self.fallibility = fallibility
        self.rng = rng or random.Random()

    def select_move(self, board: Board, mark: Mark) -> int:
        candidates = self._check_playable(board, mark)

        win = find_winning_move(board.cells, mark)
        if win is not None:
            logger.debug("%s: %s wins at %d", self.name, mark, win)
            return win

        block = find_winning_move(board.cells, mark.opponent())
        if block is not None:
            logger.debug("%s: %s blocks at %d", self.name, mark, block)
            return block

        return self._best_scored(board, mark, candidates)

    def _best_scored(self, board: Board, mark: Mark, candidates: List[int]) -> int:
        cells = list(board.cells)

        best_move: Optional[int] = None
        best_score = float("-inf")
        # Best move ignoring fallibility, played if every improvement was passed over
        true_best: Optional[int] = None
        true_best_score = float("-inf")

        for index in candidates:
            cells[index] = mark
            score = score_position(cells, mark)
            cells[index] = Mark.EMPTY

            if score > true_best_score:
                true_best, true_best_score = index, score

            if score > best_score:
                if self.fallibility and self.rng.random() < self.fallibility:
                    continue
                best_move, best_score = index, score

        if best_move is None:
            best_move = true_best

        logger.debug("%s: %s plays %d (score %s)", self.name, mark, best_move, best_score)
        return best_move

    def __repr__(self) -> str:
        return f"HeuristicStrategy(fallibility={self.fallibility})"


class MinimaxStrategy(MoveStrategy):
    """
    An AI that plays TicTacToe using the Minimax algorithm.

    Searches every continuation to the end of the game, assuming both sides
    play perfectly from the position handed in. Leaves score +1 for a win,
    -1 for a loss and 0 for a draw. The first cell with the best value wins
    ties. Against any opponent the result is at worst a draw.
    """

    name = "minimax"

    def __init__(self):
        # Positions visited by the last search (for debugging)
        self.nodes_evaluated = 0

    def select_move(self, board: Board, mark: Mark) -> int:
        candidates = self._check_playable(board, mark)

        # The search writes straight into a private copy and undoes each move
        scratch = board.copy()
        opponent = mark.opponent()
        nodes = 0
        best_move = candidates[0]
        best_value = None

        for index in candidates:
            scratch.cells[index] = mark
            value, visited = self._minimax(scratch, mark, opponent, maximizing=False)
            scratch.cells[index] = Mark.EMPTY
            nodes += visited

            if best_value is None or value > best_value:
                best_value, best_move = value, index

        self.nodes_evaluated = nodes
        logger.debug(
            "%s: evaluated %d positions. Best move for %s: %d (value %d)",
            self.name, nodes, mark, best_move, best_value,
        )
        return best_move

    def _minimax(
        self,
        board: Board,
        me: Mark,
        opponent: Mark,
        maximizing: bool
    ) -> Tuple[int, int]:
        """
        Value of a position for `me`.

        Returns:
            (value, number of positions visited)
        """
        outcome = detect_outcome(board)
        if outcome.is_terminal:
            if outcome.winner is me:
                return 1, 1
            if outcome.winner is opponent:
                return -1, 1
            return 0, 1

        to_move = me if maximizing else opponent
        visited = 1
        best = None

        for index in board.empty_cells():
            board.cells[index] = to_move
            value, count = self._minimax(board, me, opponent, not maximizing)
            board.cells[index] = Mark.EMPTY
            visited += count

            if best is None or (value > best if maximizing else value < best):
                best = value

        return best, visited


def make_strategy(
    difficulty: Difficulty,
    rng: Optional[random.Random] = None,
    fallibility: float = 0.0
) -> MoveStrategy:
    """
    Build the opponent for a difficulty level.

    Args:
        difficulty: EASY, MEDIUM or HARD.
        rng: Random source for the random and heuristic players.
        fallibility: Only used by MEDIUM.
    """
    if difficulty == Difficulty.EASY:
        return RandomStrategy(rng)
    if difficulty == Difficulty.MEDIUM:
        return HeuristicStrategy(fallibility=fallibility, rng=rng)
    if difficulty == Difficulty.HARD:
        return MinimaxStrategy()
    raise ValueError(f"Unknown difficulty: {difficulty!r}")
