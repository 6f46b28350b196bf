"""Turn state machine and the request/response surface used by front ends.

Every operation takes a caller-owned :class:`GameState` and returns a result
holding the next state; the input state is never mutated. Rejections are
reported as :class:`Rejection` values, the state stays as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple, Union

from .board import Board, BoardLayout, VariantConfig
from .capture import resolve_captures
from .execute import apply_move
from .moves import legal_moves
from .presets import PYRAMID
from .state import (
    CellView,
    EffectKind,
    GameResult,
    GameState,
    Move,
    MoveKind,
    MoveOutcome,
    Position,
    TurnPhase,
    WinReason,
)
from .victory import evaluate_terminal

logger = logging.getLogger("sevenwonders.game")


class Rejection(Enum):
    INVALID_SELECTION = "invalid_selection"
    NO_LEGAL_MOVES = "no_legal_moves"
    INVALID_MOVE_TARGET = "invalid_move_target"
    ACTION_AFTER_GAME_OVER = "action_after_game_over"

    @property
    def message(self) -> str:
        return _REJECTION_MESSAGES[self]


_REJECTION_MESSAGES = {
    Rejection.INVALID_SELECTION: "Select one of your own stones.",
    Rejection.NO_LEGAL_MOVES: "This stone has no valid moves.",
    Rejection.INVALID_MOVE_TARGET: "That is not a valid move for the selected stone.",
    Rejection.ACTION_AFTER_GAME_OVER: "Game Over! Start a new game to play again.",
}


@dataclass(frozen=True)
class SelectResult:
    state: GameState
    moves: Tuple[Move, ...] = ()
    rejection: Optional[Rejection] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None


@dataclass(frozen=True)
class MoveResult:
    state: GameState
    outcome: Optional[MoveOutcome] = None
    moves: Tuple[Move, ...] = ()
    rejection: Optional[Rejection] = None

    @property
    def ok(self) -> bool:
        return self.rejection is None

    @property
    def reselected(self) -> bool:
        return self.ok and self.outcome is None


def new_game(config: Union[VariantConfig, BoardLayout] = PYRAMID) -> GameState:
    """Fresh game; raises ``VariantConfigError`` for a malformed variant."""
    board = Board.initial(config)
    return GameState(board=board, current_player=board.layout.config.first_player)


def moves_for(state: GameState, position: Position) -> List[Move]:
    return legal_moves(state.board, position, state.last_push)


def enumerate_legal_moves(state: GameState) -> List[Move]:
    if state.is_terminal:
        return []
    moves: List[Move] = []
    for position in state.board.occupied_positions(state.current_player):
        moves.extend(moves_for(state, position))
    return moves


def select_cell(state: GameState, level: int, row: int, col: int) -> SelectResult:
    if state.is_terminal:
        return SelectResult(state, rejection=Rejection.ACTION_AFTER_GAME_OVER)
    if state.board.piece_at(level, row, col) != state.current_player or not state.board.is_playable(
        level, row, col
    ):
        return SelectResult(state, rejection=Rejection.INVALID_SELECTION)

    position = (level, row, col)
    moves = tuple(moves_for(state, position))
    if not moves:
        if state.phase == TurnPhase.SELECT_MOVE:
            return SelectResult(cancel_selection(state), rejection=Rejection.NO_LEGAL_MOVES)
        return SelectResult(state, rejection=Rejection.NO_LEGAL_MOVES)

    logger.debug("%s selected %s with %d moves", state.current_player.name, position, len(moves))
    next_state = state.copy()
    next_state.phase = TurnPhase.SELECT_MOVE
    next_state.selected = position
    next_state.legal_moves = moves
    return SelectResult(next_state, moves=moves)


def choose_move(state: GameState, level: int, row: int, col: int) -> MoveResult:
    if state.is_terminal:
        return MoveResult(state, rejection=Rejection.ACTION_AFTER_GAME_OVER)
    if state.phase != TurnPhase.SELECT_MOVE:
        return MoveResult(state, rejection=Rejection.INVALID_MOVE_TARGET)

    target = (level, row, col)
    move = next((m for m in state.legal_moves if m.destination == target), None)
    if move is not None:
        next_state, outcome = _complete_turn(state, move)
        return MoveResult(next_state, outcome=outcome)

    if state.board.piece_at(*target) == state.current_player:
        reselect = select_cell(state, *target)
        return MoveResult(reselect.state, moves=reselect.moves, rejection=reselect.rejection)
    return MoveResult(state, rejection=Rejection.INVALID_MOVE_TARGET)


def handle_click(state: GameState, level: int, row: int, col: int) -> Union[SelectResult, MoveResult]:
    if state.phase == TurnPhase.SELECT_MOVE:
        return choose_move(state, level, row, col)
    return select_cell(state, level, row, col)


def cancel_selection(state: GameState) -> GameState:
    if state.is_terminal:
        return state
    next_state = state.copy()
    next_state.phase = TurnPhase.SELECT_STONE
    next_state.selected = None
    next_state.legal_moves = ()
    return next_state


def board_snapshot(state: GameState) -> Tuple[CellView, ...]:
    board = state.board
    return tuple(
        CellView(
            level=level,
            row=row,
            col=col,
            playable=board.is_playable(level, row, col),
            victory=board.is_victory(level, row, col),
            piece=board.piece_at(level, row, col),
        )
        for level, row, col in board.layout.positions(playable_only=False)
    )


def _complete_turn(state: GameState, move: Move) -> Tuple[GameState, MoveOutcome]:
    next_state = state.copy()
    board = next_state.board
    outcome, last_push = apply_move(board, move)
    captures = resolve_captures(board)
    result, reason = evaluate_terminal(board, board.layout.config)
    outcome = replace(outcome, effects=outcome.effects + captures, resulted_in=result, win_reason=reason)

    next_state.last_push = last_push
    next_state.selected = None
    next_state.legal_moves = ()
    next_state.ply_count += 1
    next_state.last_outcome = outcome
    next_state.result = result
    next_state.win_reason = reason

    if result == GameResult.ONGOING:
        next_state.current_player = state.current_player.opponent()
        next_state.phase = TurnPhase.SELECT_STONE
    else:
        next_state.phase = TurnPhase.GAME_OVER
        logger.info("game over after %d plies: %s (%s)", next_state.ply_count, result.value, reason.value)
    return next_state, outcome


# ----------------------------------------------------------------------
# Status text
# ----------------------------------------------------------------------
def status_message(state: GameState) -> str:
    name = state.current_player.label
    if state.phase == TurnPhase.GAME_OVER:
        if state.result == GameResult.DRAW:
            return "Game Over! Draw!"
        return f"Game Over! {state.winner.label} wins!"
    if state.phase == TurnPhase.SELECT_MOVE:
        return f"{name} selected. Choose where to move."
    return f"{name} to move. Select a stone to move."


def result_message(state: GameState) -> Optional[str]:
    if state.result == GameResult.ONGOING:
        return None
    config = state.board.layout.config
    if state.win_reason == WinReason.BOTH_ELIMINATED:
        return f"Both players have fewer than {config.min_pieces} stones."
    winner = state.winner
    if state.win_reason == WinReason.VICTORY_FIELDS:
        return f"{winner.label} wins by occupying all {config.victory_threshold} victory fields!"
    return f"{winner.label} wins! {winner.opponent().label} has fewer than {config.min_pieces} stones."


def describe_outcome(outcome: MoveOutcome, config: VariantConfig = PYRAMID) -> List[str]:
    messages: List[str] = []
    move = outcome.move
    mover = outcome.mover.name.lower()
    if move.kind == MoveKind.SMASH:
        victim = outcome.effects_of(EffectKind.SMASH)[0].color.name.lower()
        messages.append(f"{mover} smashed {victim}!")
    elif move.kind == MoveKind.PUSH and move.is_drop:
        level = move.push_to[0]
        crushed = outcome.effects_of(EffectKind.SMASH)
        if crushed:
            messages.append(
                f"DROP and SMASH! Stone dropped to level {level} and smashed {crushed[0].color.name.lower()}!"
            )
        else:
            messages.append(f"DROP! Stone dropped to level {level}.")
    elif move.kind == MoveKind.PUSH_FALL:
        messages.append(f"FALL! Stone pushed off the {config.name}!")

    captured = outcome.captured_positions
    if captured:
        messages.append(f"Osiris! {len(captured)} stones captured!")
    return messages
