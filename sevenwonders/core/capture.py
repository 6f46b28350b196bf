"""Osiris line capture.

After a move, every row and column of every level is scanned on its own.
Opposing pieces sitting in an unbroken run between two consecutive pieces of
the same colour are removed. Both colours are checked, so a mover can lose
pieces to a bracket they completed for the opponent. Captures never span
levels and the scan runs once per move.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Set, Tuple

import numpy as np

from .board import EMPTY, Board
from .state import Effect, EffectKind, PlayerColor, Position

logger = logging.getLogger("sevenwonders.capture")


def bracketed_indices(line: np.ndarray, player: PlayerColor) -> List[int]:
    """Indices in ``line`` enclosed by consecutive ``player`` pieces."""
    opponent = int(player.opponent())
    anchors = np.flatnonzero(line == int(player))
    captured: List[int] = []
    for start, end in zip(anchors[:-1], anchors[1:]):
        if end - start < 2:
            continue
        gap = line[start + 1 : end]
        if np.all(gap == opponent):
            captured.extend(range(int(start) + 1, int(end)))
    return captured


def _lines(grid: np.ndarray) -> Iterable[Tuple[np.ndarray, List[Tuple[int, int]]]]:
    size = grid.shape[0]
    for r in range(size):
        yield grid[r, :], [(r, c) for c in range(size)]
    for c in range(size):
        yield grid[:, c], [(r, c) for r in range(size)]


def find_captures(board: Board) -> List[Position]:
    found: Set[Position] = set()
    for level, grid in enumerate(board.cells):
        for line, coords in _lines(grid):
            if np.count_nonzero(line != EMPTY) < 3:
                continue
            for player in PlayerColor:
                for index in bracketed_indices(line, player):
                    row, col = coords[index]
                    found.add((level, row, col))
    return sorted(found)


def resolve_captures(board: Board) -> Tuple[Effect, ...]:
    """Remove every bracketed piece from ``board`` and report each removal once."""
    effects: List[Effect] = []
    for position in find_captures(board):
        color = board.piece_at(*position)
        if color is None:
            continue
        board.clear_piece(*position)
        effects.append(Effect(EffectKind.CAPTURE, position, color))
        logger.debug("captured %s at %s", color.name, position)
    return tuple(effects)
