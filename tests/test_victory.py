from sevenwonders.core import (
    GameResult,
    PlayerColor,
    WinReason,
    evaluate_terminal,
    new_game,
    piece_counts,
    victory_progress,
)
from sevenwonders.variants import PYRAMID

W = PlayerColor.WHITE
B = PlayerColor.BLACK
CORNERS = [(2, 0, 0), (2, 0, 2), (2, 2, 0), (2, 2, 2)]


def board_with(white, black):
    board = new_game().board
    board.clear()
    for pos in white:
        board.set_piece(*pos, W)
    for pos in black:
        board.set_piece(*pos, B)
    return board


FOUR_WHITE = [(0, 6, c) for c in range(4)]
FOUR_BLACK = [(0, 0, c) for c in range(3, 7)]


def test_starting_position_is_ongoing() -> None:
    assert evaluate_terminal(new_game().board, PYRAMID) == (GameResult.ONGOING, None)


def test_all_victory_fields_win() -> None:
    board = board_with(CORNERS, FOUR_BLACK)

    assert evaluate_terminal(board, PYRAMID) == (GameResult.WHITE_WIN, WinReason.VICTORY_FIELDS)


def test_black_victory_fields_win() -> None:
    board = board_with(FOUR_WHITE, CORNERS)

    assert evaluate_terminal(board, PYRAMID) == (GameResult.BLACK_WIN, WinReason.VICTORY_FIELDS)


def test_three_victory_fields_is_not_enough() -> None:
    board = board_with(CORNERS[:3] + [(0, 6, 0)], FOUR_BLACK)

    assert evaluate_terminal(board, PYRAMID) == (GameResult.ONGOING, None)


def test_victory_fields_take_precedence_over_elimination() -> None:
    board = board_with(CORNERS, [(0, 0, 3), (0, 0, 4)])

    assert evaluate_terminal(board, PYRAMID) == (GameResult.WHITE_WIN, WinReason.VICTORY_FIELDS)


def test_both_below_minimum_is_draw() -> None:
    board = board_with([(0, 6, 0), (0, 6, 1), (0, 6, 2)], [(0, 0, 4), (0, 0, 5), (0, 0, 6)])

    assert evaluate_terminal(board, PYRAMID) == (GameResult.DRAW, WinReason.BOTH_ELIMINATED)


def test_black_below_minimum_loses() -> None:
    board = board_with(FOUR_WHITE, [(0, 0, 4), (0, 0, 5), (0, 0, 6)])

    assert evaluate_terminal(board, PYRAMID) == (GameResult.WHITE_WIN, WinReason.ELIMINATION)


def test_white_below_minimum_loses() -> None:
    board = board_with([(0, 6, 0), (0, 6, 1), (0, 6, 2)], FOUR_BLACK)

    assert evaluate_terminal(board, PYRAMID) == (GameResult.BLACK_WIN, WinReason.ELIMINATION)


def test_piece_counts_and_progress() -> None:
    board = board_with(CORNERS[:2] + [(0, 6, 0)], CORNERS[2:] + FOUR_BLACK)

    counts = piece_counts(board)

    assert counts.totals == {W: 3, B: 6}
    assert counts.on_victory_fields == {W: 2, B: 2}
    assert victory_progress(board, PYRAMID) == "4/4"
