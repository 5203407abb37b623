"""Movement catalog: per piece-kind movement vectors.

Pure data. Every kind maps to an ordered tuple of ``(d_row, d_col)``
vectors plus a *sliding* flag: sliding vectors repeat until blocked,
stepping vectors are applied once.
"""

from __future__ import annotations

from dataclasses import dataclass

from chesslink.core.enums import Color, PieceType
from chesslink.core.piece import Piece
from chesslink.core.types import Vector

KNIGHT_OFFSETS: tuple[Vector, ...] = (
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
)

ROOK_DIRS: tuple[Vector, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
BISHOP_DIRS: tuple[Vector, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
QUEEN_DIRS: tuple[Vector, ...] = ROOK_DIRS + BISHOP_DIRS
KING_OFFSETS: tuple[Vector, ...] = QUEEN_DIRS
CASTLING_OFFSETS: tuple[Vector, ...] = ((0, 2), (0, -2))

# White pawns advance towards row 0.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}


@dataclass(frozen=True, slots=True)
class MovementPattern:
    """Ordered movement vectors of one piece kind."""

    vectors: tuple[Vector, ...]
    sliding: bool


def _pawn_pattern(color: Color) -> MovementPattern:
    d = PAWN_DIRECTION[color]
    return MovementPattern(vectors=((d, 0), (2 * d, 0), (d, 1), (d, -1)), sliding=False)


MOVEMENT_CATALOG: dict[PieceType, MovementPattern] = {
    PieceType.KNIGHT: MovementPattern(KNIGHT_OFFSETS, sliding=False),
    PieceType.BISHOP: MovementPattern(BISHOP_DIRS, sliding=True),
    PieceType.ROOK: MovementPattern(ROOK_DIRS, sliding=True),
    PieceType.QUEEN: MovementPattern(QUEEN_DIRS, sliding=True),
    PieceType.KING: MovementPattern(KING_OFFSETS + CASTLING_OFFSETS, sliding=False),
}

_PAWN_PATTERNS: dict[Color, MovementPattern] = {
    color: _pawn_pattern(color) for color in Color
}


def movement_for(piece: Piece) -> MovementPattern:
    """Catalog entry for *piece* (pawn direction depends on color)."""
    if piece.piece_type == PieceType.PAWN:
        return _PAWN_PATTERNS[piece.color]
    return MOVEMENT_CATALOG[piece.piece_type]
