from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .board import Board, VariantConfig
from .state import GameResult, PlayerColor, WinReason


@dataclass(frozen=True)
class PieceCounts:
    totals: Dict[PlayerColor, int]
    on_victory_fields: Dict[PlayerColor, int]

    @property
    def victory_total(self) -> int:
        return sum(self.on_victory_fields.values())


def piece_counts(board: Board) -> PieceCounts:
    return PieceCounts(
        totals={color: board.count(color) for color in PlayerColor},
        on_victory_fields={color: board.victory_count(color) for color in PlayerColor},
    )


def victory_progress(board: Board, config: VariantConfig) -> str:
    return f"{piece_counts(board).victory_total}/{config.victory_threshold}"


def evaluate_terminal(board: Board, config: VariantConfig) -> Tuple[GameResult, Optional[WinReason]]:
    """Victory fields first, then the double elimination draw, then single elimination."""
    counts = piece_counts(board)
    for color in PlayerColor:
        if counts.on_victory_fields[color] >= config.victory_threshold:
            return GameResult.win_for(color), WinReason.VICTORY_FIELDS

    short = [color for color in PlayerColor if counts.totals[color] < config.min_pieces]
    if len(short) == len(PlayerColor):
        return GameResult.DRAW, WinReason.BOTH_ELIMINATED
    if short:
        return GameResult.win_for(short[0].opponent()), WinReason.ELIMINATION
    return GameResult.ONGOING, None
