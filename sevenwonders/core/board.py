"""Stacked level grids, playability masks and cross-level coordinate mapping.

Every level is a square grid centred on the largest one. A shared reference
frame (offset ``(reference_size - size) // 2``) lets positions on levels of
different widths be compared, which is what lets a run step down off the
edge of a level or a jump land on the level above.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from sevenwonders.validation.config_checks import validate_variant_config

from .state import PlayerColor, Position

BoardArray = NDArray[np.int8]
BoolArray = NDArray[np.bool_]

EMPTY = 0
LAYOUT_RIM = "rim"
LAYOUT_FULL = "full"
VICTORY_NONE = "none"
VICTORY_CORNERS = "corners"
VICTORY_ALL = "all"

VictorySpec = Union[str, Tuple[Tuple[int, int], ...]]


@dataclass(frozen=True)
class LevelSpec:
    size: int
    layout: str = LAYOUT_RIM
    victory: VictorySpec = VICTORY_NONE


@dataclass(frozen=True)
class StartRow:
    color: PlayerColor
    level: int
    row: int


@dataclass(frozen=True)
class VariantConfig:
    name: str
    levels: Tuple[LevelSpec, ...]
    starting_rows: Tuple[StartRow, ...] = field(default_factory=tuple)
    victory_threshold: int = 4
    min_pieces: int = 4
    first_player: PlayerColor = PlayerColor.WHITE

    @property
    def reference_size(self) -> int:
        return max(level.size for level in self.levels)


def playable_mask(spec: LevelSpec) -> BoolArray:
    size = spec.size
    if spec.layout == LAYOUT_FULL:
        return np.ones((size, size), dtype=bool)
    mask = np.zeros((size, size), dtype=bool)
    mask[0, :] = True
    mask[-1, :] = True
    mask[:, 0] = True
    mask[:, -1] = True
    return mask


def victory_cells(spec: LevelSpec) -> List[Tuple[int, int]]:
    last = spec.size - 1
    if spec.victory == VICTORY_NONE:
        return []
    if spec.victory == VICTORY_CORNERS:
        return sorted({(0, 0), (0, last), (last, 0), (last, last)})
    if spec.victory == VICTORY_ALL:
        mask = playable_mask(spec)
        return [(int(r), int(c)) for r, c in np.argwhere(mask)]
    return [(int(r), int(c)) for r, c in spec.victory]


class BoardLayout:
    """Immutable per-variant geometry shared by every board of that variant."""

    def __init__(self, config: VariantConfig) -> None:
        validate_variant_config(config)
        self.config = config
        self.sizes: Tuple[int, ...] = tuple(level.size for level in config.levels)
        self.reference_size = config.reference_size
        self.offsets: Tuple[int, ...] = tuple((self.reference_size - size) // 2 for size in self.sizes)

        playable: List[BoolArray] = []
        victory: List[BoolArray] = []
        for spec in config.levels:
            mask = playable_mask(spec)
            mask.setflags(write=False)
            playable.append(mask)
            vmask = np.zeros_like(mask)
            for r, c in victory_cells(spec):
                vmask[r, c] = True
            vmask.setflags(write=False)
            victory.append(vmask)
        self.playable: Tuple[BoolArray, ...] = tuple(playable)
        self.victory: Tuple[BoolArray, ...] = tuple(victory)

    @property
    def num_levels(self) -> int:
        return len(self.sizes)

    @property
    def top_level(self) -> int:
        return len(self.sizes) - 1

    @property
    def num_cells(self) -> int:
        return sum(size * size for size in self.sizes)

    def in_grid(self, level: int, row: int, col: int) -> bool:
        if not 0 <= level < len(self.sizes):
            return False
        size = self.sizes[level]
        return 0 <= row < size and 0 <= col < size

    def is_playable(self, level: int, row: int, col: int) -> bool:
        return self.in_grid(level, row, col) and bool(self.playable[level][row, col])

    def is_victory(self, level: int, row: int, col: int) -> bool:
        return self.in_grid(level, row, col) and bool(self.victory[level][row, col])

    def to_global(self, level: int, row: int, col: int) -> Tuple[int, int]:
        offset = self.offsets[level]
        return row + offset, col + offset

    def to_local(self, level: int, global_row: int, global_col: int) -> Tuple[int, int]:
        offset = self.offsets[level]
        return global_row - offset, global_col - offset

    def shift_to_level(self, position: Position, dr: int, dc: int, target_level: int) -> Position:
        """Step ``(dr, dc)`` from ``position`` and express the result on ``target_level``.

        The result may lie outside the target grid; check ``is_playable``.
        """
        level, row, col = position
        global_row, global_col = self.to_global(level, row, col)
        row, col = self.to_local(target_level, global_row + dr, global_col + dc)
        return target_level, row, col

    def positions(self, *, playable_only: bool = True) -> Iterator[Position]:
        for level, size in enumerate(self.sizes):
            for row in range(size):
                for col in range(size):
                    if not playable_only or self.playable[level][row, col]:
                        yield level, row, col

    def victory_positions(self) -> List[Position]:
        return [
            (level, int(r), int(c))
            for level, mask in enumerate(self.victory)
            for r, c in np.argwhere(mask)
        ]


class Board:
    def __init__(self, layout: BoardLayout, cells: Optional[Sequence[BoardArray]] = None) -> None:
        self.layout = layout
        if cells is None:
            cells = [np.zeros((size, size), dtype=np.int8) for size in layout.sizes]
        self.cells: List[BoardArray] = list(cells)

    @classmethod
    def initial(cls, config_or_layout: Union[VariantConfig, BoardLayout]) -> "Board":
        layout = config_or_layout if isinstance(config_or_layout, BoardLayout) else BoardLayout(config_or_layout)
        board = cls(layout)
        for start in layout.config.starting_rows:
            row_mask = layout.playable[start.level][start.row]
            board.cells[start.level][start.row, row_mask] = int(start.color)
        return board

    def copy(self) -> "Board":
        return Board(self.layout, [grid.copy() for grid in self.cells])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_playable(self, level: int, row: int, col: int) -> bool:
        return self.layout.is_playable(level, row, col)

    def is_victory(self, level: int, row: int, col: int) -> bool:
        return self.layout.is_victory(level, row, col)

    def piece_at(self, level: int, row: int, col: int) -> Optional[PlayerColor]:
        if not self.layout.in_grid(level, row, col):
            return None
        value = int(self.cells[level][row, col])
        return PlayerColor(value) if value != EMPTY else None

    def is_empty(self, level: int, row: int, col: int) -> bool:
        return self.piece_at(level, row, col) is None

    def occupied_positions(self, color: Optional[PlayerColor] = None) -> Iterator[Position]:
        for level, grid in enumerate(self.cells):
            hits = np.argwhere(grid != EMPTY) if color is None else np.argwhere(grid == int(color))
            for r, c in hits:
                yield level, int(r), int(c)

    def count(self, color: PlayerColor) -> int:
        return sum(int(np.count_nonzero(grid == int(color))) for grid in self.cells)

    def victory_count(self, color: PlayerColor) -> int:
        return sum(
            int(np.count_nonzero((grid == int(color)) & mask))
            for grid, mask in zip(self.cells, self.layout.victory)
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def set_piece(self, level: int, row: int, col: int, color: PlayerColor) -> None:
        if not self.is_playable(level, row, col):
            raise ValueError(f"Cell {(level, row, col)} is not playable.")
        self.cells[level][row, col] = int(color)

    def clear_piece(self, level: int, row: int, col: int) -> None:
        if not self.is_playable(level, row, col):
            raise ValueError(f"Cell {(level, row, col)} is not playable.")
        self.cells[level][row, col] = EMPTY

    def clear(self) -> None:
        for grid in self.cells:
            grid[:, :] = EMPTY

    def render(self) -> str:
        symbols = {EMPTY: ".", int(PlayerColor.WHITE): "W", int(PlayerColor.BLACK): "B"}
        lines: List[str] = []
        for level in reversed(range(self.layout.num_levels)):
            size = self.layout.sizes[level]
            pad = " " * self.layout.offsets[level]
            lines.append(f"Level {level} ({size}x{size})")
            for r in range(size):
                row_chars = []
                for c in range(size):
                    if not self.layout.playable[level][r, c]:
                        row_chars.append(" ")
                        continue
                    value = int(self.cells[level][r, c])
                    if value == EMPTY and self.layout.victory[level][r, c]:
                        row_chars.append("*")
                    else:
                        row_chars.append(symbols[value])
                lines.append(pad + "".join(row_chars))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.layout.sizes == other.layout.sizes and all(
            np.array_equal(a, b) for a, b in zip(self.cells, other.cells)
        )

    __hash__ = None  # type: ignore[assignment]
