from sevenwonders.core import (
    GameResult,
    GameState,
    MoveKind,
    PlayerColor,
    Rejection,
    TurnPhase,
    WinReason,
    board_snapshot,
    cancel_selection,
    choose_move,
    enumerate_legal_moves,
    handle_click,
    new_game,
    result_message,
    select_cell,
    status_message,
)

W = PlayerColor.WHITE
B = PlayerColor.BLACK


def custom_state(white, black, current=W) -> GameState:
    state = new_game()
    state.board.clear()
    for pos in white:
        state.board.set_piece(*pos, W)
    for pos in black:
        state.board.set_piece(*pos, B)
    state.current_player = current
    return state


def test_new_game_starts_with_white_selecting() -> None:
    state = new_game()

    assert state.phase == TurnPhase.SELECT_STONE
    assert state.current_player == W
    assert state.result == GameResult.ONGOING
    assert state.last_push is None
    assert status_message(state) == "White to move. Select a stone to move."


def test_select_own_stone_enters_select_move() -> None:
    state = new_game()

    result = select_cell(state, 0, 6, 0)

    assert result.ok
    assert result.state.phase == TurnPhase.SELECT_MOVE
    assert result.state.selected == (0, 6, 0)
    assert result.moves == result.state.legal_moves
    assert any(m.kind == MoveKind.RUN and m.destination == (0, 5, 0) for m in result.moves)
    assert status_message(result.state) == "White selected. Choose where to move."
    # The caller's state is left untouched.
    assert state.phase == TurnPhase.SELECT_STONE
    assert state.selected is None


def test_select_rejects_empty_opponent_and_unplayable_cells() -> None:
    state = new_game()

    for coords in [(0, 5, 0), (0, 0, 0), (0, 3, 3), (9, 9, 9)]:
        result = select_cell(state, *coords)
        assert result.rejection == Rejection.INVALID_SELECTION
        assert result.state is state


def test_select_blocked_stone_reports_no_legal_moves() -> None:
    state = custom_state(
        white=[(0, 6, 0), (0, 5, 0), (0, 6, 1), (0, 4, 0), (0, 6, 2)],
        black=[(0, 0, c) for c in range(3, 7)],
    )

    result = select_cell(state, 0, 6, 0)

    assert result.rejection == Rejection.NO_LEGAL_MOVES
    assert result.state.phase == TurnPhase.SELECT_STONE
    assert result.moves == ()


def test_reselecting_blocked_stone_returns_to_select_stone() -> None:
    state = custom_state(
        white=[(0, 6, 0), (0, 5, 0), (0, 6, 1), (0, 4, 0), (0, 6, 2)],
        black=[(0, 0, c) for c in range(3, 7)],
    )
    selected = select_cell(state, 0, 6, 2).state

    result = choose_move(selected, 0, 6, 0)

    assert result.rejection == Rejection.NO_LEGAL_MOVES
    assert result.state.phase == TurnPhase.SELECT_STONE
    assert result.state.selected is None


def test_choose_unknown_target_is_rejected() -> None:
    state = select_cell(new_game(), 0, 6, 0).state

    for coords in [(0, 3, 3), (0, 0, 6)]:
        result = choose_move(state, *coords)
        assert result.rejection == Rejection.INVALID_MOVE_TARGET
        assert result.state is state


def test_choose_before_selecting_is_rejected() -> None:
    state = new_game()

    assert choose_move(state, 0, 5, 0).rejection == Rejection.INVALID_MOVE_TARGET


def test_clicking_another_own_stone_reselects() -> None:
    state = select_cell(new_game(), 0, 6, 0).state

    result = choose_move(state, 0, 6, 3)

    assert result.reselected
    assert result.state.selected == (0, 6, 3)
    assert result.state.phase == TurnPhase.SELECT_MOVE
    assert [m.destination for m in result.moves] == [(1, 4, 2)]


def test_cancel_keeps_player() -> None:
    state = select_cell(new_game(), 0, 6, 0).state

    cancelled = cancel_selection(state)

    assert cancelled.phase == TurnPhase.SELECT_STONE
    assert cancelled.selected is None
    assert cancelled.legal_moves == ()
    assert cancelled.current_player == W


def test_completed_move_switches_player() -> None:
    state = select_cell(new_game(), 0, 6, 0).state

    result = choose_move(state, 0, 3, 0)

    assert result.ok
    assert result.outcome.move.kind == MoveKind.RUN
    next_state = result.state
    assert next_state.board.piece_at(0, 3, 0) == W
    assert next_state.current_player == B
    assert next_state.phase == TurnPhase.SELECT_STONE
    assert next_state.ply_count == 1
    assert next_state.last_outcome is result.outcome


def test_handle_click_dispatches_by_phase() -> None:
    state = handle_click(new_game(), 0, 6, 0).state
    assert state.phase == TurnPhase.SELECT_MOVE

    state = handle_click(state, 0, 2, 0).state
    assert state.current_player == B
    assert state.board.piece_at(0, 2, 0) == W


def test_pushed_piece_cannot_push_back_next_turn() -> None:
    state = custom_state(
        white=[(0, 3, 0), (0, 6, 2), (0, 6, 3), (0, 6, 4)],
        black=[(0, 2, 0), (0, 0, 4), (0, 0, 5), (0, 0, 6)],
    )
    state = select_cell(state, 0, 3, 0).state
    result = choose_move(state, 0, 2, 0)

    assert result.outcome.move.kind == MoveKind.PUSH
    state = result.state
    assert state.last_push.pusher == (0, 2, 0)
    assert state.last_push.pushed == (0, 1, 0)

    reply = select_cell(state, 0, 1, 0)
    assert reply.ok
    assert all(m.kind != MoveKind.PUSH for m in reply.moves)

    state = choose_move(reply.state, 0, 0, 0).state
    assert state.last_push is None


def test_capture_to_three_black_stones_ends_game() -> None:
    state = custom_state(
        white=[(0, 6, 1), (1, 4, 2), (0, 6, 5), (0, 6, 6)],
        black=[(0, 6, 2), (0, 0, 4), (0, 0, 5), (0, 0, 6)],
    )
    state = select_cell(state, 1, 4, 2).state

    result = choose_move(state, 0, 6, 3)

    assert result.outcome.captured_positions == ((0, 6, 2),)
    final = result.state
    assert final.board.count(B) == 3
    assert final.phase == TurnPhase.GAME_OVER
    assert final.result == GameResult.WHITE_WIN
    assert final.win_reason == WinReason.ELIMINATION
    assert final.winner == W
    assert result.outcome.resulted_in == GameResult.WHITE_WIN
    assert status_message(final) == "Game Over! White wins!"
    assert result_message(final) == "White wins! Black has fewer than 4 stones."


def test_filling_the_last_victory_field_ends_game() -> None:
    state = custom_state(
        white=[(2, 0, 0), (2, 2, 0), (2, 2, 2), (2, 0, 1)],
        black=[(0, 0, 0), (0, 0, 1), (0, 0, 2), (0, 0, 3)],
    )
    state = select_cell(state, 2, 0, 1).state

    result = choose_move(state, 2, 0, 2)

    assert result.outcome.move.kind == MoveKind.RUN
    final = result.state
    assert final.phase == TurnPhase.GAME_OVER
    assert final.result == GameResult.WHITE_WIN
    assert final.win_reason == WinReason.VICTORY_FIELDS
    assert status_message(final) == "Game Over! White wins!"
    assert result_message(final) == "White wins by occupying all 4 victory fields!"


def test_both_sides_below_minimum_is_a_draw() -> None:
    state = custom_state(
        white=[(1, 4, 2), (0, 3, 0), (0, 3, 6)],
        black=[(0, 6, 3), (0, 0, 4), (0, 0, 5), (0, 0, 6)],
    )
    state = select_cell(state, 1, 4, 2).state

    result = choose_move(state, 0, 6, 3)

    assert result.outcome.move.kind == MoveKind.SMASH
    final = result.state
    assert final.board.count(W) == 3
    assert final.board.count(B) == 3
    assert final.result == GameResult.DRAW
    assert final.win_reason == WinReason.BOTH_ELIMINATED
    assert final.winner is None
    assert status_message(final) == "Game Over! Draw!"
    assert result_message(final) == "Both players have fewer than 4 stones."


def test_actions_after_game_over_are_rejected() -> None:
    state = custom_state(
        white=[(0, 6, 1), (1, 4, 2), (0, 6, 5), (0, 6, 6)],
        black=[(0, 6, 2), (0, 0, 4), (0, 0, 5), (0, 0, 6)],
    )
    final = choose_move(select_cell(state, 1, 4, 2).state, 0, 6, 3).state

    assert select_cell(final, 0, 6, 1).rejection == Rejection.ACTION_AFTER_GAME_OVER
    assert choose_move(final, 0, 6, 1).rejection == Rejection.ACTION_AFTER_GAME_OVER
    assert cancel_selection(final) is final
    assert enumerate_legal_moves(final) == []


def test_enumerate_legal_moves_at_start() -> None:
    moves = enumerate_legal_moves(new_game())

    assert {m.origin[0] for m in moves} == {0}
    assert all(m.origin[1] == 6 for m in moves)
    # Two corners run five cells, five inner stones jump, two push a corner off.
    assert len(moves) == 5 * 2 + 5 + 2


def test_board_snapshot_lists_every_cell() -> None:
    cells = board_snapshot(new_game())

    assert len(cells) == 84
    assert sum(1 for c in cells if c.playable) == 49
    assert sum(1 for c in cells if c.victory) == 4
    assert sum(1 for c in cells if c.piece == W) == 7
    assert all(c.piece is None for c in cells if not c.playable)
