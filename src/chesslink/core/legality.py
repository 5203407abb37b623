"""Legal move filtering by simulate-and-undo."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from chesslink.core.board import Board
from chesslink.core.coverage import CoverageTracker
from chesslink.core.enums import Color
from chesslink.core.errors import InvariantViolationError
from chesslink.core.move import Move
from chesslink.core.move_generator import MoveGenerator
from chesslink.core.rules import CASTLING, RuleOptions
from chesslink.core.types import Square


class LegalityFilter:
    """Removes pseudo-legal moves that would leave the mover's king attacked.

    Each candidate is played on the real board, coverage is rebuilt, the
    king is tested, and the board is restored. The restore step always
    runs, even if the check raises.
    """

    __slots__ = ("_board", "_generator", "_coverage", "_options")

    def __init__(
        self,
        board: Board,
        generator: MoveGenerator,
        coverage: CoverageTracker,
        options: RuleOptions | None = None,
    ) -> None:
        self._board = board
        self._generator = generator
        self._coverage = coverage
        self._options = options if options is not None else RuleOptions()

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: Square) -> list[Move]:
        """Pseudo-legal moves of the piece on *sq* that keep its king safe."""
        piece = self._board[sq]
        if piece is None:
            return []

        legal: list[Move] = []
        for move in self._generator.pseudo_legal_moves(sq):
            if move.is_castling and not self._castling_path_safe(move, piece.color):
                continue
            if not self.leaves_king_in_check(move):
                legal.append(move)
        return legal

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king on a square covered by the opponent?"""
        king_sq = self._board.find_king(color)
        return self._coverage.is_covered(king_sq, color.opposite)

    def leaves_king_in_check(self, move: Move) -> bool:
        piece = self._board[move.from_sq]
        if piece is None:
            raise InvariantViolationError(f"No piece to simulate on {move.from_sq}")
        with self.simulate(move.from_sq, move.to_sq):
            return self.is_in_check(piece.color)

    @contextmanager
    def simulate(self, from_sq: Square, to_sq: Square) -> Iterator[None]:
        """Temporarily relocate a piece; the board is restored on exit."""
        displaced = self._board.relocate(from_sq, to_sq)
        try:
            self._coverage.recompute_all()
            yield
        finally:
            self._board.relocate(to_sq, from_sq)
            self._board[to_sq] = displaced
            self._coverage.recompute_all()

    # -- Castling (strict rules only) ---------------------------------------

    def _castling_path_safe(self, move: Move, color: Color) -> bool:
        if not self._options.strict_castling:
            return True
        if self.is_in_check(color):
            return False
        row = move.from_sq[0]
        wing = CASTLING[move.to_sq[1] - move.from_sq[1]]
        return not self._coverage.is_covered((row, wing.transit_col), color.opposite)
