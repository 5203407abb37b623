"""Tests for the movement catalog."""

from chesslink.core.enums import Color, PieceType
from chesslink.core.movement import (
    BISHOP_DIRS,
    MOVEMENT_CATALOG,
    ROOK_DIRS,
    movement_for,
)
from chesslink.core.piece import Piece


class TestPawnVectors:
    def test_white_pawn_moves_up(self) -> None:
        pattern = movement_for(Piece(Color.WHITE, PieceType.PAWN))
        assert pattern.vectors == ((-1, 0), (-2, 0), (-1, 1), (-1, -1))
        assert not pattern.sliding

    def test_black_pawn_moves_down(self) -> None:
        pattern = movement_for(Piece(Color.BLACK, PieceType.PAWN))
        assert pattern.vectors == ((1, 0), (2, 0), (1, 1), (1, -1))


class TestCatalog:
    def test_sliding_flags(self) -> None:
        sliding = {pt for pt, pattern in MOVEMENT_CATALOG.items() if pattern.sliding}
        assert sliding == {PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN}

    def test_queen_is_rook_plus_bishop(self) -> None:
        queen = MOVEMENT_CATALOG[PieceType.QUEEN]
        assert set(queen.vectors) == set(ROOK_DIRS) | set(BISHOP_DIRS)
        assert len(queen.vectors) == 8

    def test_knight_l_shapes(self) -> None:
        vectors = MOVEMENT_CATALOG[PieceType.KNIGHT].vectors
        assert len(set(vectors)) == 8
        assert all(sorted((abs(dr), abs(dc))) == [1, 2] for dr, dc in vectors)

    def test_king_includes_castling_leaps(self) -> None:
        vectors = MOVEMENT_CATALOG[PieceType.KING].vectors
        assert len(vectors) == 10
        assert vectors[-2:] == ((0, 2), (0, -2))

    def test_same_pattern_for_both_colors(self) -> None:
        white = movement_for(Piece(Color.WHITE, PieceType.ROOK))
        black = movement_for(Piece(Color.BLACK, PieceType.ROOK))
        assert white is black
