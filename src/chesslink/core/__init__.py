"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chesslink.core import Board, CoverageTracker, LegalityFilter, MoveGenerator

    board = Board.initial()
    gen = MoveGenerator(board)
    coverage = CoverageTracker(board, gen)
    coverage.recompute_all()
    legality = LegalityFilter(board, gen, coverage)
    print(legality.legal_moves((6, 4)))  # e2 pawn
"""

from chesslink.core.board import Board
from chesslink.core.coverage import CoverageTracker
from chesslink.core.enums import Color, GameResult, MoveFlag, PieceType
from chesslink.core.errors import (
    ChessError,
    GameAlreadyEndedError,
    IllegalMoveError,
    InvariantViolationError,
)
from chesslink.core.legality import LegalityFilter
from chesslink.core.move import Move
from chesslink.core.move_generator import MoveGenerator
from chesslink.core.movement import MovementPattern, movement_for
from chesslink.core.piece import Piece
from chesslink.core.rules import RuleOptions
from chesslink.core.types import Square, is_on_board, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "is_on_board",
    "parse_square",
    "square_name",
    # Errors
    "ChessError",
    "GameAlreadyEndedError",
    "IllegalMoveError",
    "InvariantViolationError",
    # Domain objects
    "Board",
    "CoverageTracker",
    "LegalityFilter",
    "Move",
    "MoveGenerator",
    "MovementPattern",
    "Piece",
    "RuleOptions",
    "movement_for",
]
