"""Coverage tracking: squares each side reaches pseudo-legally."""

from __future__ import annotations

from chesslink.core.board import Board
from chesslink.core.enums import Color
from chesslink.core.move_generator import MoveGenerator
from chesslink.core.types import Square


class CoverageTracker:
    """Cached per-side set of covered squares.

    The sets are derived from the board's physical state and must be
    rebuilt (:meth:`recompute_all`) after every board mutation,
    including throwaway mutations made while testing legality.
    """

    __slots__ = ("_board", "_generator", "_covered")

    def __init__(self, board: Board, generator: MoveGenerator) -> None:
        self._board = board
        self._generator = generator
        self._covered: dict[Color, frozenset[Square]] = {
            Color.WHITE: frozenset(),
            Color.BLACK: frozenset(),
        }

    def recompute(self, color: Color) -> frozenset[Square]:
        """Rebuild the coverage set of *color* from scratch."""
        covered: set[Square] = set()
        for sq in self._board.pieces_of(color):
            covered.update(self._generator.destinations(sq))
        self._covered[color] = frozenset(covered)
        return self._covered[color]

    def recompute_all(self) -> None:
        self.recompute(Color.WHITE)
        self.recompute(Color.BLACK)

    def covered(self, color: Color) -> frozenset[Square]:
        """Squares covered by *color* as of the last recomputation."""
        return self._covered[color]

    def is_covered(self, sq: Square, by_color: Color) -> bool:
        return sq in self._covered[by_color]

    def snapshot(self) -> dict[Color, frozenset[Square]]:
        return dict(self._covered)
