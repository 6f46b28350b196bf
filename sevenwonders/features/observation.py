from __future__ import annotations

from typing import Tuple

import numpy as np

from sevenwonders.core import GameState, PlayerColor

PLANES_PER_LEVEL = 3  # white, black, playable
AUX_VECTOR_SIZE = 3  # current player one-hot (2) + last push flag


def board_channels(num_levels: int) -> int:
    return PLANES_PER_LEVEL * num_levels


def build_board_tensor(state: GameState) -> np.ndarray:
    """Return (3 * levels, ref, ref) planes with every level centred in the reference frame."""
    layout = state.board.layout
    ref = layout.reference_size
    tensor = np.zeros((board_channels(layout.num_levels), ref, ref), dtype=np.float32)
    for level, grid in enumerate(state.board.cells):
        offset = layout.offsets[level]
        size = layout.sizes[level]
        window = (slice(offset, offset + size), slice(offset, offset + size))
        base = level * PLANES_PER_LEVEL
        tensor[(base,) + window] = grid == int(PlayerColor.WHITE)
        tensor[(base + 1,) + window] = grid == int(PlayerColor.BLACK)
        tensor[(base + 2,) + window] = layout.playable[level]
    return tensor


def build_aux_vector(state: GameState) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[int(state.current_player) - 1] = 1.0
    aux[2] = 0.0 if state.last_push is None else 1.0
    return aux


def state_to_numpy(state: GameState) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(state), build_aux_vector(state)
