"""Game state — phase, result, side to move and move history."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesslink.core.enums import Color, GameResult
from chesslink.core.move import Move
from chesslink.core.piece import Piece
from chesslink.core.types import Square
from chesslink.game.interfaces import GameEndReason, GamePhase


@dataclass(frozen=True, slots=True)
class PieceMoves:
    """Legal moves of one piece, as listed for a side."""

    position: Square
    moves: tuple[Move, ...]

    @property
    def destinations(self) -> list[Square]:
        return [move.to_sq for move in self.moves]


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """What a committed move did, for mirroring on observers' views."""

    move: Move
    mover: Color
    captured: Piece | None = None
    castling: tuple[Square, Square] | None = None  # rook (from, to)
    check: bool = False
    result: GameResult = GameResult.IN_PROGRESS
    end_reason: GameEndReason = GameEndReason.NONE

    @property
    def result_tag(self) -> str | None:
        return self.result.tag


@dataclass
class MoveRecord:
    """A single entry in the move history, with everything undo needs."""

    move: Move
    captured: Piece | None
    had_moved: bool
    castling: tuple[Square, Square] | None = None


@dataclass
class GameState:
    """Manages game lifecycle: identities, phase, result, move history.

    This is a pure data class — no threading, no UI.
    """

    white: str = ""
    black: str = ""
    side_to_move: Color = Color.WHITE
    phase: GamePhase = GamePhase.NOT_STARTED
    result: GameResult = GameResult.IN_PROGRESS
    end_reason: GameEndReason = GameEndReason.NONE
    move_history: list[MoveRecord] = field(default_factory=list)

    def player(self, color: Color) -> str:
        return self.white if color == Color.WHITE else self.black

    def color_of(self, name: str) -> Color | None:
        """Side played by *name*, or ``None`` for a spectator."""
        if name == self.white:
            return Color.WHITE
        if name == self.black:
            return Color.BLACK
        return None

    def finish(self, result: GameResult, reason: GameEndReason) -> None:
        self.result = result
        self.end_reason = reason
        self.phase = GamePhase.GAME_OVER

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)
