from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from .board import Board

# (level, row, col); level 0 is the base of the stack.
Position = Tuple[int, int, int]


class PlayerColor(IntEnum):
    WHITE = 1
    BLACK = 2

    def opponent(self) -> "PlayerColor":
        return PlayerColor.BLACK if self == PlayerColor.WHITE else PlayerColor.WHITE

    @property
    def label(self) -> str:
        return self.name.capitalize()


class TurnPhase(Enum):
    SELECT_STONE = "select_stone"
    SELECT_MOVE = "select_move"
    GAME_OVER = "game_over"


class GameResult(Enum):
    ONGOING = "ongoing"
    WHITE_WIN = "white_win"
    BLACK_WIN = "black_win"
    DRAW = "draw"

    @staticmethod
    def win_for(color: PlayerColor) -> "GameResult":
        return GameResult.WHITE_WIN if color == PlayerColor.WHITE else GameResult.BLACK_WIN


class WinReason(Enum):
    VICTORY_FIELDS = "victory_fields"
    ELIMINATION = "elimination"
    BOTH_ELIMINATED = "both_eliminated"


class MoveKind(Enum):
    RUN = "run"
    JUMP = "jump"
    SMASH = "smash"
    PUSH = "push"
    PUSH_FALL = "push_fall"


class EffectKind(Enum):
    SMASH = "smash"
    DROP = "drop"
    FALL = "fall"
    CAPTURE = "capture"


@dataclass(frozen=True)
class Move:
    kind: MoveKind
    origin: Position
    destination: Position
    push_to: Optional[Position] = None

    @property
    def is_push(self) -> bool:
        return self.kind in (MoveKind.PUSH, MoveKind.PUSH_FALL)

    @property
    def is_drop(self) -> bool:
        return self.push_to is not None and self.push_to[0] < self.destination[0]


@dataclass(frozen=True)
class LastPush:
    pusher: Position  # where the pushing piece ended up
    pushed: Position  # where the pushed piece ended up


@dataclass(frozen=True)
class Effect:
    kind: EffectKind
    position: Position
    color: PlayerColor  # colour of the piece that was removed or displaced


@dataclass(frozen=True)
class MoveOutcome:
    """What a single executed move did to the board.

    ``steps`` lists the atomic displacements in the order a renderer would
    animate them; a ``None`` target means the piece left the board.
    """

    move: Move
    mover: PlayerColor
    steps: Tuple[Tuple[Position, Optional[Position]], ...] = field(default_factory=tuple)
    effects: Tuple[Effect, ...] = field(default_factory=tuple)
    resulted_in: GameResult = GameResult.ONGOING
    win_reason: Optional[WinReason] = None

    @property
    def captured_positions(self) -> Tuple[Position, ...]:
        return tuple(e.position for e in self.effects if e.kind == EffectKind.CAPTURE)

    def effects_of(self, kind: EffectKind) -> Tuple[Effect, ...]:
        return tuple(e for e in self.effects if e.kind == kind)


@dataclass(frozen=True)
class CellView:
    level: int
    row: int
    col: int
    playable: bool
    victory: bool
    piece: Optional[PlayerColor]


@dataclass
class GameState:
    board: "Board"
    current_player: PlayerColor = PlayerColor.WHITE
    phase: TurnPhase = TurnPhase.SELECT_STONE
    selected: Optional[Position] = None
    legal_moves: Tuple[Move, ...] = field(default_factory=tuple)
    last_push: Optional[LastPush] = None
    result: GameResult = GameResult.ONGOING
    win_reason: Optional[WinReason] = None
    ply_count: int = 0
    last_outcome: Optional[MoveOutcome] = None

    def copy(self) -> "GameState":
        return GameState(
            board=self.board.copy(),
            current_player=self.current_player,
            phase=self.phase,
            selected=self.selected,
            legal_moves=self.legal_moves,
            last_push=self.last_push,
            result=self.result,
            win_reason=self.win_reason,
            ply_count=self.ply_count,
            last_outcome=self.last_outcome,
        )

    @property
    def is_terminal(self) -> bool:
        return self.phase == TurnPhase.GAME_OVER

    @property
    def winner(self) -> Optional[PlayerColor]:
        if self.result == GameResult.WHITE_WIN:
            return PlayerColor.WHITE
        if self.result == GameResult.BLACK_WIN:
            return PlayerColor.BLACK
        return None

    def __repr__(self) -> str:
        return (
            f"GameState(current={self.current_player.name}, phase={self.phase.value}, "
            f"result={self.result.value}, ply={self.ply_count})\n{self.board.render()}"
        )
