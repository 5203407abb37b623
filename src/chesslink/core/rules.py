"""Rule switches and castling geometry shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass

from chesslink.core.enums import Color, MoveFlag
from chesslink.core.types import Square

# Row each side's back rank starts on.
HOME_ROW: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}

KING_START_COL = 4


@dataclass(frozen=True, slots=True)
class CastlingGeometry:
    """Column layout of one castling wing, relative to the home row."""

    flag: MoveFlag
    rook_from_col: int
    rook_to_col: int
    between_cols: tuple[int, ...]  # must be empty (strict rules)
    transit_col: int  # square the king passes over

    def rook_move(self, row: int) -> tuple[Square, Square]:
        return (row, self.rook_from_col), (row, self.rook_to_col)


# Keyed by the king's column delta.
CASTLING: dict[int, CastlingGeometry] = {
    2: CastlingGeometry(
        flag=MoveFlag.CASTLE_KINGSIDE,
        rook_from_col=7,
        rook_to_col=5,
        between_cols=(5, 6),
        transit_col=5,
    ),
    -2: CastlingGeometry(
        flag=MoveFlag.CASTLE_QUEENSIDE,
        rook_from_col=0,
        rook_to_col=3,
        between_cols=(1, 2, 3),
        transit_col=3,
    ),
}


@dataclass(frozen=True, slots=True)
class RuleOptions:
    """Engine rule switches.

    Attributes:
        strict_castling: Require empty squares between king and rook, and
            forbid castling out of, or through, an attacked square. When
            ``False`` only the has-moved and rook-presence checks apply.
    """

    strict_castling: bool = True
