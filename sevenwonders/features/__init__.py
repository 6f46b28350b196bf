"""Board symmetries and array views of a game state."""

from .observation import (
    AUX_VECTOR_SIZE,
    PLANES_PER_LEVEL,
    board_channels,
    build_aux_vector,
    build_board_tensor,
    state_to_numpy,
)
from .symmetry import (
    Transform,
    all_transforms,
    layout_is_symmetric,
    transform_board,
    transform_move,
    transform_position,
    transform_state,
)

__all__ = [
    "AUX_VECTOR_SIZE",
    "PLANES_PER_LEVEL",
    "board_channels",
    "build_aux_vector",
    "build_board_tensor",
    "state_to_numpy",
    "Transform",
    "all_transforms",
    "layout_is_symmetric",
    "transform_board",
    "transform_move",
    "transform_position",
    "transform_state",
]
