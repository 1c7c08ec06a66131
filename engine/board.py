"""
Board model for the TicTacToe engine.
A fixed 3x3 grid of marks, stored row-major as 9 cells.
"""

from enum import Enum
from typing import List, NamedTuple, Optional, Sequence

from .errors import CellOccupiedError, GameAlreadyOverError, InvalidCellIndexError


BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE


class Mark(Enum):
    """What a cell can hold."""
    EMPTY = "."
    X = "X"
    O = "O"

    def opponent(self) -> "Mark":
        """Get the other player's mark."""
        if self == Mark.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return Mark.O if self == Mark.X else Mark.X

    def __str__(self) -> str:
        return self.value


class WinPattern(NamedTuple):
    """Three cell indices that form a line."""
    a: int
    b: int
    c: int

    @property
    def start(self) -> int:
        """First cell of the line (used to draw the highlight)."""
        return self.a

    @property
    def end(self) -> int:
        """Last cell of the line."""
        return self.c


# Scan order matters: the first completed pattern is the one reported
WIN_PATTERNS = (
    # Rows
    WinPattern(0, 1, 2),
    WinPattern(3, 4, 5),
    WinPattern(6, 7, 8),
    # Columns
    WinPattern(0, 3, 6),
    WinPattern(1, 4, 7),
    WinPattern(2, 5, 8),
    # Diagonals
    WinPattern(0, 4, 8),
    WinPattern(2, 4, 6),
)

# Characters accepted as an empty cell by Board.from_string
_EMPTY_CHARS = ".-_ "


def find_winner(cells: Sequence[Mark]) -> Optional[WinPattern]:
    """
    Find the first completed line on a row of 9 cells.

    Args:
        cells: The 9 cells, row-major.

    Returns:
        The first WinPattern whose three cells hold the same non-empty mark,
        or None.
    """
    for pattern in WIN_PATTERNS:
        a, b, c = pattern
        first = cells[a]
        if first is not Mark.EMPTY and first is cells[b] and first is cells[c]:
            return pattern
    return None


def check_index(index: int) -> None:
    """Raise InvalidCellIndexError unless index is a cell number 0-8."""
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < CELL_COUNT:
        raise InvalidCellIndexError(index)


class Board:
    """
    The 3x3 TicTacToe grid.

    Cells are indexed 0-8:

        0 | 1 | 2
        ---------
        3 | 4 | 5
        ---------
        6 | 7 | 8

    A cell only ever goes from EMPTY to X or O. The board never clears a
    cell; a new game gets a new board.
    """

    def __init__(self, cells: Optional[Sequence[Mark]] = None):
        if cells is None:
            self.cells: List[Mark] = [Mark.EMPTY] * CELL_COUNT
        else:
            if len(cells) != CELL_COUNT:
                raise ValueError(f"A board has {CELL_COUNT} cells, got {len(cells)}")
            self.cells = list(cells)

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Build a board from 9 characters, e.g. "XX.OO....".

        X and O are marks; '.', '-', '_' and space are empty cells.
        """
        if len(text) != CELL_COUNT:
            raise ValueError(f"Expected {CELL_COUNT} characters, got {len(text)}: {text!r}")

        cells = []
        for char in text.upper():
            if char in _EMPTY_CHARS:
                cells.append(Mark.EMPTY)
            elif char in ("X", "O"):
                cells.append(Mark(char))
            else:
                raise ValueError(f"Invalid board character {char!r}")
        return cls(cells)

    def __getitem__(self, index: int) -> Mark:
        return self.cells[index]

    def __iter__(self):
        return iter(self.cells)

    def __len__(self) -> int:
        return CELL_COUNT

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def __str__(self) -> str:
        return "".join(mark.value for mark in self.cells)

    def __repr__(self) -> str:
        return f"Board({str(self)!r})"

    def place(self, index: int, mark: Mark) -> None:
        """
        Put a mark on an empty cell.

        Args:
            index: Cell number (0-8).
            mark: X or O.

        Raises:
            InvalidCellIndexError: index is not 0-8.
            GameAlreadyOverError: the board already has a winner or is full.
            CellOccupiedError: the cell already holds a mark.
        """
        if mark is Mark.EMPTY:
            raise ValueError("Cannot place an EMPTY mark")

        check_index(index)

        if self.is_terminal():
            raise GameAlreadyOverError(index)

        if self.cells[index] is not Mark.EMPTY:
            raise CellOccupiedError(index, self.cells[index])

        self.cells[index] = mark

    def is_empty(self, index: int) -> bool:
        return self.cells[index] is Mark.EMPTY

    def is_full(self) -> bool:
        """True if no cell is empty."""
        return Mark.EMPTY not in self.cells

    def is_terminal(self) -> bool:
        """True if someone has won or the board is full."""
        return find_winner(self.cells) is not None or self.is_full()

    def empty_cells(self) -> List[int]:
        """Indices of all empty cells, lowest first."""
        return [i for i, mark in enumerate(self.cells) if mark is Mark.EMPTY]

    def count(self, mark: Mark) -> int:
        return self.cells.count(mark)

    def copy(self) -> "Board":
        """Create an independent copy of the board."""
        return Board(self.cells)

    def rows(self) -> List[List[Mark]]:
        """The board as 3 rows of 3 marks."""
        return [self.cells[r * BOARD_SIZE:(r + 1) * BOARD_SIZE] for r in range(BOARD_SIZE)]

    def pretty(self) -> str:
        """Multi-line drawing of the board for console output."""
        lines = []
        for r, row in enumerate(self.rows()):
            lines.append(" " + " | ".join(
                mark.value if mark is not Mark.EMPTY else str(r * BOARD_SIZE + c + 1)
                for c, mark in enumerate(row)
            ))
            if r < BOARD_SIZE - 1:
                lines.append("---+---+---")
        return "\n".join(lines)
