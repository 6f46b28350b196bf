from __future__ import annotations

from typing import List, Optional, Tuple

from .board import Board
from .state import LastPush, Move, MoveKind, Position

DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def legal_moves(board: Board, position: Position, last_push: Optional[LastPush] = None) -> List[Move]:
    """All run, jump and push moves for the piece at ``position``.

    Ownership and turn order are the caller's concern; an empty cell yields no moves.
    """
    if board.piece_at(*position) is None:
        return []
    moves: List[Move] = []
    moves.extend(run_moves(board, position))
    moves.extend(jump_moves(board, position))
    moves.extend(push_moves(board, position, last_push))
    return moves


def run_moves(board: Board, position: Position) -> List[Move]:
    layout = board.layout
    moves: List[Move] = []
    for dr, dc in DIRECTIONS:
        current = position
        while True:
            level, row, col = current
            target: Position = (level, row + dr, col + dc)
            if not layout.is_playable(*target):
                if level == 0:
                    break
                # Off this level's footprint: step down through the shared frame.
                target = layout.shift_to_level(current, dr, dc, level - 1)
            if not layout.is_playable(*target):
                break
            if board.piece_at(*target) is not None:
                # Landing on a piece only smashes after a drop; same level just blocks.
                if target[0] < level:
                    moves.append(Move(MoveKind.SMASH, position, target))
                break
            moves.append(Move(MoveKind.RUN, position, target))
            current = target
    return moves


def jump_moves(board: Board, position: Position) -> List[Move]:
    layout = board.layout
    level = position[0]
    if level >= layout.top_level:
        return []
    moves: List[Move] = []
    for dr, dc in DIRECTIONS:
        target = layout.shift_to_level(position, dr, dc, level + 1)
        if layout.is_playable(*target) and board.piece_at(*target) is None:
            moves.append(Move(MoveKind.JUMP, position, target))
    return moves


def push_moves(board: Board, position: Position, last_push: Optional[LastPush] = None) -> List[Move]:
    layout = board.layout
    level, row, col = position
    moves: List[Move] = []
    for dr, dc in DIRECTIONS:
        adjacent: Position = (level, row + dr, col + dc)
        if not layout.is_playable(*adjacent) or board.piece_at(*adjacent) is None:
            continue
        beyond: Position = (level, row + 2 * dr, col + 2 * dc)
        if layout.is_playable(*beyond):
            if board.piece_at(*beyond) is None and not is_push_back(position, adjacent, last_push):
                moves.append(Move(MoveKind.PUSH, position, adjacent, push_to=beyond))
        elif level > 0:
            lower = layout.shift_to_level(adjacent, dr, dc, level - 1)
            if layout.is_playable(*lower):
                moves.append(Move(MoveKind.PUSH, position, adjacent, push_to=lower))
        else:
            moves.append(Move(MoveKind.PUSH_FALL, position, adjacent))
    return moves


def is_push_back(pusher: Position, target: Position, last_push: Optional[LastPush]) -> bool:
    """True when the piece just pushed would shove its pusher straight back."""
    if last_push is None:
        return False
    return pusher == last_push.pushed and target == last_push.pusher
