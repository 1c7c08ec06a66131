import random
from typing import List

from hypothesis import given, settings, strategies as st

from engine import WIN_PATTERNS, Board, InvalidMoveError, Mark, RandomStrategy, detect_outcome


marks = st.sampled_from([Mark.EMPTY, Mark.X, Mark.O])


@given(st.lists(marks, min_size=9, max_size=9))
def test_draw_iff_full_and_no_line(cells: List[Mark]):
    board = Board(cells)
    outcome = detect_outcome(board)

    has_line = any(
        cells[a] is not Mark.EMPTY and cells[a] == cells[b] == cells[c]
        for a, b, c in WIN_PATTERNS
    )
    assert outcome.is_draw == (board.is_full() and not has_line)
    assert outcome.is_win == has_line


@given(st.lists(marks, min_size=9, max_size=9))
def test_reported_pattern_is_the_first_complete_line(cells: List[Mark]):
    outcome = detect_outcome(Board(cells))
    if outcome.is_win:
        first = next(
            p for p in WIN_PATTERNS
            if cells[p.a] is not Mark.EMPTY and cells[p.a] == cells[p.b] == cells[p.c]
        )
        assert outcome.pattern == first
        assert outcome.winner is cells[first.a]


@given(st.lists(st.integers(min_value=-2, max_value=10), max_size=20))
def test_cells_only_go_from_empty_to_a_mark(indices: List[int]):
    board = Board()
    to_move = Mark.X
    for index in indices:
        before = list(board.cells)
        try:
            board.place(index, to_move)
        except InvalidMoveError:
            assert board.cells == before
            continue
        changed = [i for i in range(9) if board.cells[i] != before[i]]
        assert changed == [index]
        assert before[index] is Mark.EMPTY
        to_move = to_move.opponent()


@settings(max_examples=200)
@given(st.permutations(list(range(9))), st.integers(min_value=0, max_value=8), st.integers())
def test_random_strategy_picks_an_empty_cell(order: List[int], filled: int, seed: int):
    board = Board()
    to_move = Mark.X
    for index in order[:filled]:
        if detect_outcome(board).is_terminal:
            break
        board.place(index, to_move)
        to_move = to_move.opponent()

    if detect_outcome(board).is_terminal:
        return

    pick = RandomStrategy(random.Random(seed)).select_move(board, to_move)
    assert pick in board.empty_cells()
