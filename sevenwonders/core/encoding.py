from __future__ import annotations

from functools import lru_cache
from typing import Tuple

import numpy as np

from .board import BoardLayout
from .game import enumerate_legal_moves
from .state import GameState, Position


@lru_cache(maxsize=None)
def _level_bases(sizes: Tuple[int, ...]) -> Tuple[int, ...]:
    bases = [0]
    for size in sizes[:-1]:
        bases.append(bases[-1] + size * size)
    return tuple(bases)


def cell_index(layout: BoardLayout, position: Position) -> int:
    level, row, col = position
    if not layout.in_grid(level, row, col):
        raise ValueError(f"Position {position} is outside the board.")
    size = layout.sizes[level]
    return _level_bases(layout.sizes)[level] + row * size + col


def position_from_index(layout: BoardLayout, index: int) -> Position:
    if not 0 <= index < layout.num_cells:
        raise ValueError("Cell index out of range.")
    bases = _level_bases(layout.sizes)
    level = max(lvl for lvl, base in enumerate(bases) if base <= index)
    local = index - bases[level]
    size = layout.sizes[level]
    return level, local // size, local % size


def action_space_size(layout: BoardLayout) -> int:
    return layout.num_cells * layout.num_cells


def encode_action(layout: BoardLayout, origin: Position, destination: Position) -> int:
    return cell_index(layout, origin) * layout.num_cells + cell_index(layout, destination)


def decode_action(layout: BoardLayout, index: int) -> Tuple[Position, Position]:
    if not 0 <= index < action_space_size(layout):
        raise ValueError("Action index out of range.")
    origin, destination = divmod(index, layout.num_cells)
    return position_from_index(layout, origin), position_from_index(layout, destination)


def legal_action_mask(state: GameState) -> np.ndarray:
    layout = state.board.layout
    mask = np.zeros(action_space_size(layout), dtype=np.int8)
    for move in enumerate_legal_moves(state):
        mask[encode_action(layout, move.origin, move.destination)] = 1
    return mask
