from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .board import Board
from .state import Effect, EffectKind, LastPush, Move, MoveKind, MoveOutcome, PlayerColor, Position

logger = logging.getLogger("sevenwonders.execute")

Step = Tuple[Position, Optional[Position]]


def apply_move(board: Board, move: Move) -> Tuple[MoveOutcome, Optional[LastPush]]:
    """Mutate ``board`` according to ``move``.

    Returns the outcome (steps and effects, no captures yet) together with the
    push record the next turn should see. Raises ``ValueError`` for a move that
    does not fit the board, which only happens when it was not produced by the
    move generator for this position.
    """
    mover = board.piece_at(*move.origin)
    if mover is None:
        raise ValueError(f"No piece at move origin {move.origin}.")

    steps: List[Step] = []
    effects: List[Effect] = []
    last_push: Optional[LastPush] = None

    if move.kind in (MoveKind.RUN, MoveKind.JUMP):
        if board.piece_at(*move.destination) is not None:
            raise ValueError(f"{move.kind.value} destination {move.destination} is occupied.")
        _relocate(board, move.origin, move.destination, mover, steps)
    elif move.kind == MoveKind.SMASH:
        victim = board.piece_at(*move.destination)
        if victim is None:
            raise ValueError(f"Nothing to smash at {move.destination}.")
        board.clear_piece(*move.destination)
        effects.append(Effect(EffectKind.SMASH, move.destination, victim))
        _relocate(board, move.origin, move.destination, mover, steps)
    elif move.kind == MoveKind.PUSH:
        if move.push_to is None:
            raise ValueError("Push move needs a push_to position.")
        pushed = board.piece_at(*move.destination)
        if pushed is None:
            raise ValueError(f"Nothing to push at {move.destination}.")
        crushed = board.piece_at(*move.push_to)
        if crushed is not None:
            effects.append(Effect(EffectKind.SMASH, move.push_to, crushed))
        if move.is_drop:
            effects.append(Effect(EffectKind.DROP, move.push_to, pushed))
        board.clear_piece(*move.destination)
        board.set_piece(*move.push_to, pushed)
        steps.append((move.destination, move.push_to))
        _relocate(board, move.origin, move.destination, mover, steps)
        last_push = LastPush(pusher=move.destination, pushed=move.push_to)
    elif move.kind == MoveKind.PUSH_FALL:
        pushed = board.piece_at(*move.destination)
        if pushed is None:
            raise ValueError(f"Nothing to push at {move.destination}.")
        board.clear_piece(*move.destination)
        steps.append((move.destination, None))
        effects.append(Effect(EffectKind.FALL, move.destination, pushed))
        _relocate(board, move.origin, move.destination, mover, steps)
    else:  # pragma: no cover
        raise ValueError(f"Unknown move kind {move.kind!r}.")

    logger.debug("%s %s %s -> %s", mover.name, move.kind.value, move.origin, move.destination)
    outcome = MoveOutcome(move=move, mover=mover, steps=tuple(steps), effects=tuple(effects))
    return outcome, last_push


def _relocate(board: Board, origin: Position, destination: Position, color: PlayerColor, steps: List[Step]) -> None:
    board.clear_piece(*origin)
    board.set_piece(*destination, color)
    steps.append((origin, destination))
