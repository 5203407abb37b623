"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @classmethod
    def from_home_row(cls, row: int) -> Color:
        """Side owning a piece that starts on *row* (0–1 black, 6–7 white)."""
        if row <= 1:
            return cls.BLACK
        if row >= 6:
            return cls.WHITE
        raise ValueError(f"Row {row} is not a starting row")

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    def __str__(self) -> str:
        return self.name.lower()


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    CASTLE_KINGSIDE = 2
    CASTLE_QUEENSIDE = 3


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @classmethod
    def win_for(cls, color: Color) -> GameResult:
        return cls.WHITE_WINS if color == Color.WHITE else cls.BLACK_WINS

    @property
    def tag(self) -> str | None:
        """Human-readable result line, e.g. ``"Black wins"``."""
        return _RESULT_TAGS.get(self)


_RESULT_TAGS: dict[GameResult, str] = {
    GameResult.WHITE_WINS: "White wins",
    GameResult.BLACK_WINS: "Black wins",
    GameResult.DRAW: "Draw",
}
