from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Iterable, Optional, Tuple

import numpy as np

from sevenwonders.core import (
    Board,
    BoardLayout,
    GameResult,
    GameState,
    LastPush,
    Move,
    Position,
)


class Transform(Enum):
    IDENTITY = auto()
    ROT90 = auto()
    ROT180 = auto()
    ROT270 = auto()
    FLIP_H = auto()
    FLIP_V = auto()
    FLIP_MAIN_DIAG = auto()
    FLIP_ANTI_DIAG = auto()


PositionFn = Callable[[int, int, int], Tuple[int, int]]


@dataclass(frozen=True)
class SymmetrySpec:
    name: str
    transform: Transform
    position_fn: PositionFn


def _identity(r: int, c: int, n: int) -> Tuple[int, int]:
    return r, c


def _rot90(r: int, c: int, n: int) -> Tuple[int, int]:
    return c, n - 1 - r


def _rot180(r: int, c: int, n: int) -> Tuple[int, int]:
    return n - 1 - r, n - 1 - c


def _rot270(r: int, c: int, n: int) -> Tuple[int, int]:
    return n - 1 - c, r


def _flip_h(r: int, c: int, n: int) -> Tuple[int, int]:
    return r, n - 1 - c


def _flip_v(r: int, c: int, n: int) -> Tuple[int, int]:
    return n - 1 - r, c


def _flip_main_diag(r: int, c: int, n: int) -> Tuple[int, int]:
    return c, r


def _flip_anti_diag(r: int, c: int, n: int) -> Tuple[int, int]:
    return n - 1 - c, n - 1 - r


_SPECS: Dict[Transform, SymmetrySpec] = {
    Transform.IDENTITY: SymmetrySpec("identity", Transform.IDENTITY, _identity),
    Transform.ROT90: SymmetrySpec("rot90", Transform.ROT90, _rot90),
    Transform.ROT180: SymmetrySpec("rot180", Transform.ROT180, _rot180),
    Transform.ROT270: SymmetrySpec("rot270", Transform.ROT270, _rot270),
    Transform.FLIP_H: SymmetrySpec("flip_h", Transform.FLIP_H, _flip_h),
    Transform.FLIP_V: SymmetrySpec("flip_v", Transform.FLIP_V, _flip_v),
    Transform.FLIP_MAIN_DIAG: SymmetrySpec("flip_main_diag", Transform.FLIP_MAIN_DIAG, _flip_main_diag),
    Transform.FLIP_ANTI_DIAG: SymmetrySpec("flip_anti_diag", Transform.FLIP_ANTI_DIAG, _flip_anti_diag),
}


def get_spec(transform: Transform) -> SymmetrySpec:
    return _SPECS[transform]


def all_transforms() -> Iterable[Transform]:
    return list(_SPECS.keys())


def transform_position(transform: Transform, layout: BoardLayout, position: Position) -> Position:
    level, row, col = position
    r, c = get_spec(transform).position_fn(row, col, layout.sizes[level])
    return level, r, c


def transform_move(transform: Transform, layout: BoardLayout, move: Move) -> Move:
    push_to = None if move.push_to is None else transform_position(transform, layout, move.push_to)
    return Move(
        kind=move.kind,
        origin=transform_position(transform, layout, move.origin),
        destination=transform_position(transform, layout, move.destination),
        push_to=push_to,
    )


def layout_is_symmetric(layout: BoardLayout, transform: Transform) -> bool:
    for level, (playable, victory) in enumerate(zip(layout.playable, layout.victory)):
        for (row, col), value in np.ndenumerate(playable):
            _, r, c = transform_position(transform, layout, (level, row, col))
            if playable[r, c] != value or victory[r, c] != victory[row, col]:
                return False
    return True


def transform_board(board: Board, transform: Transform, *, swap_colors: bool = False) -> Board:
    layout = board.layout
    result = Board(layout)
    for level, row, col in board.occupied_positions():
        color = board.piece_at(level, row, col)
        if swap_colors:
            color = color.opponent()
        result.set_piece(*transform_position(transform, layout, (level, row, col)), color)
    return result


def _swap_result(result: GameResult) -> GameResult:
    if result == GameResult.WHITE_WIN:
        return GameResult.BLACK_WIN
    if result == GameResult.BLACK_WIN:
        return GameResult.WHITE_WIN
    return result


def transform_state(state: GameState, transform: Transform, *, swap_colors: bool = False) -> GameState:
    """Map a whole game state through a board symmetry.

    The last outcome is dropped; everything the rules consult is carried over.
    """
    layout = state.board.layout
    if not layout_is_symmetric(layout, transform):
        raise ValueError(f"Layout '{layout.config.name}' is not invariant under {transform.name}.")

    def pos(position: Optional[Position]) -> Optional[Position]:
        return None if position is None else transform_position(transform, layout, position)

    last_push = None
    if state.last_push is not None:
        last_push = LastPush(pusher=pos(state.last_push.pusher), pushed=pos(state.last_push.pushed))

    result = state.copy()
    result.board = transform_board(state.board, transform, swap_colors=swap_colors)
    result.selected = pos(state.selected)
    result.legal_moves = tuple(transform_move(transform, layout, move) for move in state.legal_moves)
    result.last_push = last_push
    result.last_outcome = None
    if swap_colors:
        result.current_player = state.current_player.opponent()
        result.result = _swap_result(state.result)
    return result
