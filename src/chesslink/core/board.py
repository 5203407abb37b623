"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from dataclasses import replace

from chesslink.core.enums import Color, PieceType
from chesslink.core.errors import InvariantViolationError
from chesslink.core.piece import Piece
from chesslink.core.types import BOARD_SIZE, Square, square_name

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8×8 grid of optional pieces. Pure storage, no rule knowledge."""

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        row, col = sq
        return self._grid[row][col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        row, col = sq
        self._grid[row][col] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def relocate(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Move whatever occupies *from_sq* onto *to_sq*, overwriting it.

        Performs no legality check. Returns the overwritten occupant.
        """
        displaced = self[to_sq]
        self[to_sq] = self[from_sq]
        self[from_sq] = None
        return displaced

    # -- Query helpers ------------------------------------------------------

    def pieces_of(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, in row-major order."""
        return [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if (piece := self._grid[row][col]) is not None and piece.color == color
        ]

    def occupied(self) -> list[tuple[Square, Piece]]:
        """Every occupied square with its piece, in row-major order."""
        return [
            ((row, col), piece)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if (piece := self._grid[row][col]) is not None
        ]

    def find_king(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        kings = [
            sq
            for sq in self.pieces_of(color)
            if self[sq].piece_type == PieceType.KING  # type: ignore[union-attr]
        ]
        if len(kings) != 1:
            raise InvariantViolationError(
                f"Expected one {color.name} king, found {len(kings)}"
            )
        return kings[0]

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        """Deep copy: pieces are duplicated so ``has_moved`` stays independent."""
        b = Board()
        b._grid = [
            [replace(piece) if piece is not None else None for piece in row]
            for row in self._grid
        ]
        return b

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position (Black on rows 0–1, White on rows 6–7)."""
        b = cls()
        for row in (1, 6):
            for col in range(BOARD_SIZE):
                b[row, col] = Piece(Color.from_home_row(row), PieceType.PAWN)
        for row in (0, 7):
            for col, pt in enumerate(_BACK_RANK):
                b[row, col] = Piece(Color.from_home_row(row), pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)

    def describe(self, sq: Square) -> str:
        piece = self[sq]
        what = f"{piece.color} {piece.piece_type}" if piece else "empty"
        return f"{square_name(sq)} ({what})"
