"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesslink.core.enums import Color, PieceType

_FEN_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

# Pieces whose first move changes what they may do later.
FIRST_MOVE_TRACKED: frozenset[PieceType] = frozenset(
    {PieceType.PAWN, PieceType.ROOK, PieceType.KING}
)


@dataclass(slots=True)
class Piece:
    """A chess piece owned by exactly one board cell.

    ``has_moved`` is the only mutable field; it matters for pawns
    (double step) and for kings and rooks (castling rights).
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = False

    @property
    def tracks_first_move(self) -> bool:
        return self.piece_type in FIRST_MOVE_TRACKED

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        char = _FEN_CHARS[self.piece_type]
        return char.upper() if self.color == Color.WHITE else char

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]
