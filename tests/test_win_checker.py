import pytest

from engine import WIN_PATTERNS, Board, GameOutcome, GameState, Mark, OutcomeStatus, WinChecker, detect_outcome


def brute_force_winners(board: Board):
    winners = set()
    for a, b, c in WIN_PATTERNS:
        if board[a] is not Mark.EMPTY and board[a] == board[b] == board[c]:
            winners.add(board[a])
    return winners


@pytest.mark.parametrize(
    "text, winner, pattern",
    [
        ("XXXOO....", Mark.X, (0, 1, 2)),      # row
        ("OX.OX.O..", Mark.O, (0, 3, 6)),      # column
        ("X.O.XO..X", Mark.X, (0, 4, 8)),      # diagonal
        ("XXO.OXO..", Mark.O, (2, 4, 6)),      # anti-diagonal
    ],
)
def test_detect_winner(text, winner, pattern):
    outcome = detect_outcome(Board.from_string(text))
    assert outcome.status is OutcomeStatus.WINNER
    assert outcome.winner is winner
    assert tuple(outcome.pattern) == pattern
    assert outcome.is_terminal


def test_detect_draw():
    outcome = detect_outcome(Board.from_string("XOXXOOOXX"))
    assert outcome == GameOutcome.draw()
    assert outcome.is_draw
    assert outcome.winner is None
    assert outcome.pattern is None


def test_detect_in_progress():
    outcome = detect_outcome(Board.from_string("XO......."))
    assert outcome == GameOutcome.in_progress()
    assert not outcome.is_terminal


def test_full_board_with_a_line_is_a_win_not_a_draw():
    outcome = detect_outcome(Board.from_string("XXXOOXXOO"))
    assert outcome.is_win
    assert outcome.winner is Mark.X


def test_first_pattern_in_scan_order_is_reported():
    # Completes both the top row and the left column
    outcome = detect_outcome(Board.from_string("XXXXOOXOO"))
    assert tuple(outcome.pattern) == (0, 1, 2)


def test_outcome_matches_brute_force_on_every_reachable_board(all_reachable_boards):
    assert len(all_reachable_boards) == 5478

    for board in all_reachable_boards:
        outcome = detect_outcome(board)
        winners = brute_force_winners(board)

        if winners:
            assert outcome.is_win
            assert winners == {outcome.winner}
            assert all(board[i] is outcome.winner for i in outcome.pattern)
        elif board.is_full():
            assert outcome.is_draw
        else:
            assert outcome.status is OutcomeStatus.IN_PROGRESS


def test_describe():
    assert detect_outcome(Board.from_string("XXXOO....")).describe() == "X wins!"
    assert detect_outcome(Board.from_string("XOXXOOOXX")).describe() == "It's a tie!"


def test_win_checker_updates_game_state():
    state = GameState(board=Board.from_string("OOO.XX.X."))
    checker = WinChecker()

    outcome = checker.update_game_state(state)
    assert state.outcome is outcome
    assert state.is_game_over
    assert outcome.winner is Mark.O
    assert tuple(outcome.pattern) == (0, 1, 2)
