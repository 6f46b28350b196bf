import numpy as np
import pytest

from sevenwonders.core import (
    BoardLayout,
    GameState,
    LevelSpec,
    PlayerColor,
    StartRow,
    VariantConfig,
    choose_move,
    enumerate_legal_moves,
    legal_moves,
    new_game,
    select_cell,
)
from sevenwonders.features import (
    Transform,
    all_transforms,
    build_aux_vector,
    build_board_tensor,
    layout_is_symmetric,
    state_to_numpy,
    transform_move,
    transform_position,
    transform_state,
)
from sevenwonders.variants import PYRAMID


def play_random(state: GameState, plies: int, seed: int) -> GameState:
    rng = np.random.default_rng(seed)
    for _ in range(plies):
        moves = enumerate_legal_moves(state)
        if not moves:
            break
        move = moves[int(rng.integers(len(moves)))]
        state = choose_move(select_cell(state, *move.origin).state, *move.destination).state
    return state


def test_pyramid_layout_is_symmetric_under_every_transform() -> None:
    layout = BoardLayout(PYRAMID)

    assert all(layout_is_symmetric(layout, t) for t in all_transforms())


def test_transform_position_uses_level_size() -> None:
    layout = BoardLayout(PYRAMID)

    assert transform_position(Transform.FLIP_V, layout, (0, 6, 2)) == (0, 0, 2)
    assert transform_position(Transform.FLIP_V, layout, (2, 0, 1)) == (2, 2, 1)
    assert transform_position(Transform.ROT90, layout, (1, 0, 0)) == (1, 0, 4)
    assert transform_position(Transform.ROT180, layout, (3, 0, 0)) == (3, 0, 0)


def test_colour_swap_mirror_maps_start_onto_itself() -> None:
    state = new_game()

    mirrored = transform_state(state, Transform.FLIP_V, swap_colors=True)

    assert mirrored.board == state.board
    assert mirrored.current_player == PlayerColor.BLACK


@pytest.mark.parametrize("swap_colors", [False, True])
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_move_sets_commute_with_symmetries(seed: int, swap_colors: bool) -> None:
    state = play_random(new_game(), plies=12, seed=seed)
    layout = state.board.layout

    for transform in all_transforms():
        mirrored = transform_state(state, transform, swap_colors=swap_colors)
        for position in state.board.occupied_positions():
            expected = {
                transform_move(transform, layout, m)
                for m in legal_moves(state.board, position, state.last_push)
            }
            actual = set(
                legal_moves(
                    mirrored.board,
                    transform_position(transform, layout, position),
                    mirrored.last_push,
                )
            )
            assert actual == expected


def test_asymmetric_layout_cannot_be_transformed() -> None:
    config = VariantConfig(
        name="lopsided",
        levels=(LevelSpec(size=3, layout="rim", victory=((0, 0),)),),
        starting_rows=(StartRow(PlayerColor.WHITE, 0, 2), StartRow(PlayerColor.BLACK, 0, 0)),
    )
    state = new_game(config)

    assert not layout_is_symmetric(state.board.layout, Transform.FLIP_H)
    with pytest.raises(ValueError):
        transform_state(state, Transform.FLIP_H)


def test_board_tensor_initial_planes() -> None:
    board = build_board_tensor(new_game())

    assert board.shape == (12, 7, 7)
    assert board[0].sum() == 7  # level 0 white
    assert board[1].sum() == 7  # level 0 black
    assert board[2].sum() == 24  # level 0 playable
    assert board[0, 6].sum() == 7
    assert board[5].sum() == 16
    assert board[11, 3, 3] == 1.0
    assert board[11].sum() == 1


def test_aux_vector_tracks_player_and_push() -> None:
    state = new_game()
    _, aux = state_to_numpy(state)

    assert aux.tolist() == [1.0, 0.0, 0.0]

    state.current_player = PlayerColor.BLACK
    assert build_aux_vector(state).tolist() == [0.0, 1.0, 0.0]
