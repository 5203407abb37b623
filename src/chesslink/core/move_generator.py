"""Pseudo-legal move generation.

Destinations respect board bounds, occupancy and piece shape rules, but
not king safety; see :mod:`chesslink.core.legality` for that.
"""

from __future__ import annotations

from chesslink.core.board import Board
from chesslink.core.enums import MoveFlag, PieceType
from chesslink.core.move import Move
from chesslink.core.movement import movement_for
from chesslink.core.piece import Piece
from chesslink.core.rules import CASTLING, HOME_ROW, KING_START_COL, RuleOptions
from chesslink.core.types import Square, Vector, is_on_board, offset


class MoveGenerator:
    """Expands catalog vectors against the current board.

    Never consults coverage or legality, so the coverage tracker can
    call it freely without recursion.
    """

    __slots__ = ("_board", "_options")

    def __init__(self, board: Board, options: RuleOptions | None = None) -> None:
        self._board = board
        self._options = options if options is not None else RuleOptions()

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, sq: Square) -> list[Move]:
        """All pseudo-legal moves of the piece on *sq*, in catalog order.

        Sliding vectors are followed ray by ray; a ray stops at the first
        occupied square, which is included only when it holds an opponent.
        """
        piece = self._board[sq]
        if piece is None:
            return []

        pattern = movement_for(piece)
        moves: list[Move] = []
        for vector in pattern.vectors:
            current = sq
            while True:
                dest = self.valid_destination(piece, current, vector)
                if dest is None:
                    break
                moves.append(Move(sq, dest, self._flag_for(piece, vector)))
                if not pattern.sliding or self._board[dest] is not None:
                    break
                current = dest
        return moves

    def destinations(self, sq: Square) -> list[Square]:
        return [move.to_sq for move in self.pseudo_legal_moves(sq)]

    def valid_destination(
        self, piece: Piece, sq: Square, vector: Vector
    ) -> Square | None:
        """Square reached from *sq* by *vector*, or ``None`` if not allowed."""
        dest = offset(sq, vector)
        if not is_on_board(*dest):
            return None

        target = self._board[dest]
        if target is not None and target.color == piece.color:
            return None

        if piece.piece_type == PieceType.PAWN:
            if not self._pawn_step_allowed(piece, sq, vector, target):
                return None
        elif piece.piece_type == PieceType.KING and abs(vector[1]) == 2:
            if not self._castling_allowed(piece, sq, vector):
                return None

        return dest

    # -- Piece-specific rules (private) --------------------------------------

    def _pawn_step_allowed(
        self, pawn: Piece, sq: Square, vector: Vector, target: Piece | None
    ) -> bool:
        d_row, d_col = vector
        if d_col != 0:
            # Diagonals are capture-only.
            return target is not None
        if target is not None:
            return False
        if abs(d_row) == 2:
            if pawn.has_moved:
                return False
            jumped = offset(sq, (d_row // 2, 0))
            return self._board.is_empty(jumped)
        return True

    def _castling_allowed(self, king: Piece, sq: Square, vector: Vector) -> bool:
        if king.has_moved:
            return False
        row = HOME_ROW[king.color]
        if sq != (row, KING_START_COL):
            return False

        wing = CASTLING[vector[1]]
        rook = self._board[row, wing.rook_from_col]
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != king.color
            or rook.has_moved
        ):
            return False

        if self._options.strict_castling:
            return all(self._board.is_empty((row, col)) for col in wing.between_cols)
        return True

    @staticmethod
    def _flag_for(piece: Piece, vector: Vector) -> MoveFlag:
        if piece.piece_type == PieceType.PAWN and abs(vector[0]) == 2:
            return MoveFlag.DOUBLE_PAWN
        if piece.piece_type == PieceType.KING and abs(vector[1]) == 2:
            return CASTLING[vector[1]].flag
        return MoveFlag.NORMAL
