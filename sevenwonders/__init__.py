"""Seven Wonders board games: rules engine and tooling."""

from . import core, variants, validation, features, env
from .core import (
    GameResult,
    GameState,
    Move,
    MoveKind,
    PlayerColor,
    Rejection,
    TurnPhase,
    board_snapshot,
    cancel_selection,
    choose_move,
    new_game,
    select_cell,
)
from .env import PyramidEnv
from .features import Transform, transform_state
from .validation import VariantConfigError
from .variants import PYRAMID, available_variants, get_variant, load_variant_config

__all__ = [
    "core",
    "variants",
    "validation",
    "features",
    "env",
    "GameResult",
    "GameState",
    "Move",
    "MoveKind",
    "PlayerColor",
    "Rejection",
    "TurnPhase",
    "board_snapshot",
    "cancel_selection",
    "choose_move",
    "new_game",
    "select_cell",
    "PyramidEnv",
    "Transform",
    "transform_state",
    "VariantConfigError",
    "PYRAMID",
    "available_variants",
    "get_variant",
    "load_variant_config",
]
