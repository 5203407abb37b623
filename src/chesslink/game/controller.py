"""GameController — the central orchestrator of a chess game.

Coordinates: Board, MoveGenerator, CoverageTracker, LegalityFilter, GameState.
Emits events via simple callbacks so the UI / session layer can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesslink.core.board import Board
from chesslink.core.coverage import CoverageTracker
from chesslink.core.enums import Color, GameResult
from chesslink.core.errors import GameAlreadyEndedError, IllegalMoveError
from chesslink.core.legality import LegalityFilter
from chesslink.core.move import Move
from chesslink.core.move_generator import MoveGenerator
from chesslink.core.piece import Piece
from chesslink.core.rules import CASTLING, RuleOptions
from chesslink.core.types import Square, square_name
from chesslink.game.interfaces import GameEndReason, GamePhase, IGameController
from chesslink.game.state import GameState, MoveOutcome, MoveRecord, PieceMoves

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveOutcome], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns one match: validates moves, applies castling side effects,
    switches turns, detects checkmate and stalemate, notifies listeners.

    Not thread-safe. The owner must serialize calls per game; during a
    legality check the board briefly holds a simulated position.
    """

    __slots__ = (
        "_options",
        "_board",
        "_generator",
        "_coverage",
        "_legality",
        "_state",
        "events",
    )

    def __init__(self, options: RuleOptions | None = None) -> None:
        self._options = options if options is not None else RuleOptions()
        self._state = GameState()
        self.events = GameEvents()
        self._install_board(Board.initial())

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> Board:
        return self._board

    @property
    def coverage(self) -> CoverageTracker:
        return self._coverage

    @property
    def options(self) -> RuleOptions:
        return self._options

    @property
    def side_to_move(self) -> Color:
        return self._state.side_to_move

    # ── Lifecycle ────────────────────────────────────────────────────────

    def new_game(
        self,
        white: str,
        black: str,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
    ) -> None:
        """Start a match. *board* defaults to the standard starting position."""
        self._install_board(board if board is not None else Board.initial())
        self._state = GameState(
            white=white,
            black=black,
            side_to_move=side_to_move,
            phase=GamePhase.AWAITING_MOVE,
        )
        _LOGGER.info("New game: %s (white) vs %s (black)", white, black)
        self._emit_phase(GamePhase.AWAITING_MOVE)

    # ── Moves ────────────────────────────────────────────────────────────

    def move_piece(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Relocate unconditionally and rebuild coverage for both sides.

        Returns the piece that was overwritten on *to_sq*, if any.
        """
        if self._board.is_empty(from_sq):
            raise IllegalMoveError(f"No piece on {square_name(from_sq)}")
        captured = self._board.relocate(from_sq, to_sq)
        self._coverage.recompute_all()
        return captured

    def play_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        if self._state.is_game_over:
            raise GameAlreadyEndedError(
                f"Game is over: {self._state.result.tag}"
            )
        if self._state.phase != GamePhase.AWAITING_MOVE:
            raise IllegalMoveError("Game has not started")

        move = self._find_legal_move(from_sq, to_sq)
        piece = self._board[from_sq]
        assert piece is not None
        mover = piece.color

        had_moved = piece.has_moved
        captured = self.move_piece(from_sq, to_sq)
        if piece.tracks_first_move:
            piece.has_moved = True

        castling: tuple[Square, Square] | None = None
        if move.is_castling:
            wing = CASTLING[to_sq[1] - from_sq[1]]
            rook_from, rook_to = wing.rook_move(from_sq[0])
            rook = self._board[rook_from]
            assert rook is not None
            self.move_piece(rook_from, rook_to)
            rook.has_moved = True
            castling = (rook_from, rook_to)
            _LOGGER.debug(
                "Castling rook %s -> %s", square_name(rook_from), square_name(rook_to)
            )

        self._state.move_history.append(
            MoveRecord(move=move, captured=captured, had_moved=had_moved, castling=castling)
        )
        _LOGGER.debug("%s plays %s", mover, move)

        opponent = mover.opposite
        self._state.side_to_move = opponent
        check = self.is_in_check(opponent)
        if not self.has_any_legal_move(opponent):
            if check:
                self._state.finish(GameResult.win_for(mover), GameEndReason.CHECKMATE)
            else:
                self._state.finish(GameResult.DRAW, GameEndReason.STALEMATE)

        outcome = MoveOutcome(
            move=move,
            mover=mover,
            captured=captured,
            castling=castling,
            check=check,
            result=self._state.result,
            end_reason=self._state.end_reason,
        )

        self._emit_move(outcome)
        if self._state.is_game_over:
            _LOGGER.info(
                "Game over: %s (%s)",
                self._state.result.tag,
                self._state.end_reason.name.lower(),
            )
            self._emit_game_over(self._state.result)
        return outcome

    def undo_move(self) -> bool:
        if self._state.is_game_over or not self._state.move_history:
            return False

        record = self._state.move_history.pop()
        move = record.move
        if record.castling is not None:
            rook_from, rook_to = record.castling
            self._board.relocate(rook_to, rook_from)
            rook = self._board[rook_from]
            if rook is not None:
                rook.has_moved = False

        self._board.relocate(move.to_sq, move.from_sq)
        self._board[move.to_sq] = record.captured
        piece = self._board[move.from_sq]
        if piece is not None:
            piece.has_moved = record.had_moved
        self._coverage.recompute_all()

        self._state.side_to_move = self._state.side_to_move.opposite
        _LOGGER.debug("Undid %s", move)
        self._emit_phase(GamePhase.AWAITING_MOVE)
        return True

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> list[Move]:
        return self._legality.legal_moves(sq)

    def legal_moves_for_side(self, color: Color) -> list[PieceMoves]:
        return [
            PieceMoves(position=sq, moves=tuple(self._legality.legal_moves(sq)))
            for sq in self._board.pieces_of(color)
        ]

    def has_any_legal_move(self, color: Color) -> bool:
        return any(self._legality.legal_moves(sq) for sq in self._board.pieces_of(color))

    def is_in_check(self, color: Color) -> bool:
        return self._legality.is_in_check(color)

    def is_checkmate(self, color: Color) -> bool:
        king_sq = self._board.find_king(color)
        if self._legality.legal_moves(king_sq):
            return False
        if not self.is_in_check(color):
            return False
        return not self.has_any_legal_move(color)

    def is_stalemate(self, color: Color) -> bool:
        if self.is_in_check(color):
            return False
        return not self.has_any_legal_move(color)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _install_board(self, board: Board) -> None:
        self._board = board
        self._generator = MoveGenerator(board, self._options)
        self._coverage = CoverageTracker(board, self._generator)
        self._legality = LegalityFilter(
            board, self._generator, self._coverage, self._options
        )
        self._coverage.recompute_all()

    def _find_legal_move(self, from_sq: Square, to_sq: Square) -> Move:
        piece = self._board[from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on {square_name(from_sq)}")
        if piece.color != self._state.side_to_move:
            raise IllegalMoveError(
                f"It is {self._state.side_to_move}'s turn, "
                f"not {piece.color}'s"
            )
        for move in self._legality.legal_moves(from_sq):
            if move.to_sq == to_sq:
                return move
        raise IllegalMoveError(
            f"{self._board.describe(from_sq)} cannot move to {square_name(to_sq)}"
        )

    def _emit_move(self, outcome: MoveOutcome) -> None:
        for cb in self.events.on_move:
            cb(outcome)

    def _emit_game_over(self, result: GameResult) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)


def create_game(
    white: str, black: str, options: RuleOptions | None = None
) -> GameController:
    """Create a controller with a fresh match between *white* and *black*."""
    ctrl = GameController(options)
    ctrl.new_game(white, black)
    return ctrl
