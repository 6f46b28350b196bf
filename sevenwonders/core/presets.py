from __future__ import annotations

from .board import LevelSpec, StartRow, VariantConfig
from .state import PlayerColor

# Four stacked rims: 7x7, 5x5, 3x3 and the 1x1 apex. The corners of the 3x3
# level are the victory fields; the apex is an ordinary cell.
PYRAMID = VariantConfig(
    name="pyramid",
    levels=(
        LevelSpec(size=7, layout="rim"),
        LevelSpec(size=5, layout="rim"),
        LevelSpec(size=3, layout="rim", victory="corners"),
        LevelSpec(size=1, layout="full"),
    ),
    starting_rows=(
        StartRow(PlayerColor.WHITE, level=0, row=6),
        StartRow(PlayerColor.BLACK, level=0, row=0),
    ),
    victory_threshold=4,
    min_pieces=4,
    first_player=PlayerColor.WHITE,
)
