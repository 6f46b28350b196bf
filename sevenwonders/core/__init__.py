"""Rules engine for the Seven Wonders board games."""

from .state import (
    CellView,
    Effect,
    EffectKind,
    GameResult,
    GameState,
    LastPush,
    Move,
    MoveKind,
    MoveOutcome,
    PlayerColor,
    Position,
    TurnPhase,
    WinReason,
)
from .board import Board, BoardLayout, LevelSpec, StartRow, VariantConfig
from .presets import PYRAMID
from .moves import DIRECTIONS, jump_moves, legal_moves, push_moves, run_moves
from .execute import apply_move
from .capture import find_captures, resolve_captures
from .victory import PieceCounts, evaluate_terminal, piece_counts, victory_progress
from .game import (
    MoveResult,
    Rejection,
    SelectResult,
    board_snapshot,
    cancel_selection,
    choose_move,
    describe_outcome,
    enumerate_legal_moves,
    handle_click,
    moves_for,
    new_game,
    result_message,
    select_cell,
    status_message,
)
from .encoding import (
    action_space_size,
    cell_index,
    decode_action,
    encode_action,
    legal_action_mask,
    position_from_index,
)

__all__ = [
    "Board",
    "BoardLayout",
    "CellView",
    "DIRECTIONS",
    "Effect",
    "EffectKind",
    "GameResult",
    "GameState",
    "LastPush",
    "LevelSpec",
    "Move",
    "MoveKind",
    "MoveOutcome",
    "MoveResult",
    "PieceCounts",
    "PYRAMID",
    "PlayerColor",
    "Position",
    "Rejection",
    "SelectResult",
    "StartRow",
    "TurnPhase",
    "VariantConfig",
    "WinReason",
    "action_space_size",
    "apply_move",
    "board_snapshot",
    "cancel_selection",
    "cell_index",
    "choose_move",
    "decode_action",
    "describe_outcome",
    "encode_action",
    "enumerate_legal_moves",
    "evaluate_terminal",
    "find_captures",
    "handle_click",
    "jump_moves",
    "legal_action_mask",
    "legal_moves",
    "moves_for",
    "new_game",
    "piece_counts",
    "position_from_index",
    "push_moves",
    "resolve_captures",
    "result_message",
    "run_moves",
    "select_cell",
    "status_message",
    "victory_progress",
]
