"""Tests for GameController — the orchestrator."""

from collections.abc import Callable

import pytest

from chesslink.core.board import Board
from chesslink.core.enums import Color, GameResult, MoveFlag, PieceType
from chesslink.core.errors import GameAlreadyEndedError, IllegalMoveError
from chesslink.core.rules import RuleOptions
from chesslink.core.types import E1, E2, E7, E8, parse_square
from chesslink.game.controller import GameController, create_game
from chesslink.game.interfaces import GameEndReason, GamePhase

BoardBuilder = Callable[[dict[str, str]], Board]

FOOLS_MATE = [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]


def _sq(name: str):
    return parse_square(name)


def _play(ctrl: GameController, moves: list[tuple[str, str]]) -> None:
    for frm, to in moves:
        ctrl.play_move(_sq(frm), _sq(to))


def _controller(board: Board | None = None, options: RuleOptions | None = None) -> GameController:
    ctrl = GameController(options)
    ctrl.new_game("alice", "bob", board=board)
    return ctrl


class TestNewGame:
    def test_phase_awaiting(self) -> None:
        ctrl = _controller()
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        assert ctrl.side_to_move == Color.WHITE

    def test_players_assigned(self) -> None:
        ctrl = _controller()
        assert ctrl.state.player(Color.WHITE) == "alice"
        assert ctrl.state.player(Color.BLACK) == "bob"
        assert ctrl.state.color_of("bob") == Color.BLACK
        assert ctrl.state.color_of("carol") is None

    def test_standard_position(self) -> None:
        assert _controller().board == Board.initial()

    def test_custom_board_and_side(self, build_board: BoardBuilder) -> None:
        board = build_board({"e1": "K", "e8": "k", "d7": "p"})
        ctrl = GameController()
        ctrl.new_game("alice", "bob", board=board, side_to_move=Color.BLACK)
        assert ctrl.board is board
        assert ctrl.side_to_move == Color.BLACK
        ctrl.play_move(_sq("d7"), _sq("d5"))
        assert ctrl.side_to_move == Color.WHITE

    def test_play_before_start_rejected(self) -> None:
        with pytest.raises(IllegalMoveError):
            GameController().play_move(E2, _sq("e4"))

    def test_create_game(self) -> None:
        ctrl = create_game("alice", "bob")
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        assert ctrl.options.strict_castling


class TestQueries:
    def test_initial_moves_for_white(self) -> None:
        entries = _controller().legal_moves_for_side(Color.WHITE)
        assert len(entries) == 16
        assert sum(len(e.moves) for e in entries) == 20

    def test_pawn_double_step_flag(self) -> None:
        moves = _controller().legal_moves(E2)
        assert [(m.to_sq, m.flag) for m in moves] == [
            (_sq("e3"), MoveFlag.NORMAL),
            (_sq("e4"), MoveFlag.DOUBLE_PAWN),
        ]

    def test_no_check_at_start(self) -> None:
        ctrl = _controller()
        assert not ctrl.is_in_check(Color.WHITE)
        assert not ctrl.is_checkmate(Color.WHITE)
        assert not ctrl.is_stalemate(Color.WHITE)
        assert ctrl.has_any_legal_move(Color.BLACK)

    def test_move_piece_requires_a_piece(self) -> None:
        with pytest.raises(IllegalMoveError):
            _controller().move_piece(_sq("e4"), _sq("e5"))


class TestPlayMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _controller()
        outcome = ctrl.play_move(E2, _sq("e4"))
        assert outcome.mover == Color.WHITE
        assert outcome.captured is None
        assert not outcome.check
        assert outcome.result == GameResult.IN_PROGRESS
        assert ctrl.side_to_move == Color.BLACK
        assert ctrl.board[_sq("e4")].has_moved
        assert ctrl.board.is_empty(E2)
        assert ctrl.state.ply_count == 1

    def test_coverage_follows_the_move(self) -> None:
        ctrl = _controller()
        ctrl.play_move(E2, _sq("e4"))
        assert ctrl.coverage.is_covered(_sq("d5"), Color.WHITE) is False
        assert ctrl.coverage.is_covered(_sq("e5"), Color.WHITE)

    @pytest.mark.parametrize(
        ("frm", "to"),
        [("e2", "e5"), ("e4", "e5"), ("e7", "e5"), ("b1", "d2")],
    )
    def test_illegal_move_leaves_state_untouched(self, frm: str, to: str) -> None:
        ctrl = _controller()
        before = ctrl.coverage.snapshot()
        with pytest.raises(IllegalMoveError):
            ctrl.play_move(_sq(frm), _sq(to))
        assert ctrl.board == Board.initial()
        assert ctrl.coverage.snapshot() == before
        assert ctrl.side_to_move == Color.WHITE
        assert ctrl.state.ply_count == 0

    def test_capture_reported(self) -> None:
        ctrl = _controller()
        _play(ctrl, [("e2", "e4"), ("d7", "d5")])
        outcome = ctrl.play_move(_sq("e4"), _sq("d5"))
        assert outcome.captured is not None
        assert outcome.captured.color == Color.BLACK
        assert outcome.captured.piece_type == PieceType.PAWN
        assert len(ctrl.board.pieces_of(Color.BLACK)) == 15

    def test_check_reported(self, build_board: BoardBuilder) -> None:
        ctrl = _controller(build_board({"e1": "K", "a1": "R", "h8": "k", "a7": "p"}))
        outcome = ctrl.play_move(_sq("a1"), _sq("a6"))
        assert not outcome.check
        ctrl.play_move(_sq("h8"), _sq("g8"))
        outcome = ctrl.play_move(_sq("a6"), _sq("g6"))
        assert outcome.check
        assert ctrl.is_in_check(Color.BLACK)


class TestCheckmate:
    def test_fools_mate(self) -> None:
        ctrl = _controller()
        _play(ctrl, FOOLS_MATE[:-1])
        outcome = ctrl.play_move(_sq("d8"), _sq("h4"))
        assert outcome.check
        assert outcome.result == GameResult.BLACK_WINS
        assert outcome.end_reason == GameEndReason.CHECKMATE
        assert outcome.result_tag == "Black wins"
        assert ctrl.state.is_game_over
        assert ctrl.is_checkmate(Color.WHITE)
        assert all(not entry.moves for entry in ctrl.legal_moves_for_side(Color.WHITE))

    def test_moves_after_mate_rejected(self) -> None:
        ctrl = _controller()
        _play(ctrl, FOOLS_MATE)
        with pytest.raises(GameAlreadyEndedError):
            ctrl.play_move(_sq("a2"), _sq("a3"))

    def test_check_with_escape_is_not_mate(self, build_board: BoardBuilder) -> None:
        ctrl = _controller(build_board({"e1": "K", "e8": "r", "a8": "k"}))
        assert ctrl.is_in_check(Color.WHITE)
        assert not ctrl.is_checkmate(Color.WHITE)


class TestStalemate:
    def test_stalemate_is_a_draw(self, build_board: BoardBuilder) -> None:
        ctrl = _controller(build_board({"a8": "k", "b5": "Q", "h1": "K"}))
        outcome = ctrl.play_move(_sq("b5"), _sq("b6"))
        assert not outcome.check
        assert outcome.result == GameResult.DRAW
        assert outcome.end_reason == GameEndReason.STALEMATE
        assert ctrl.is_stalemate(Color.BLACK)
        assert not ctrl.is_checkmate(Color.BLACK)


class TestCastling:
    def test_kingside(self, build_board: BoardBuilder) -> None:
        ctrl = _controller(build_board({"e1": "K", "h1": "R", "e8": "k"}))
        outcome = ctrl.play_move(E1, _sq("g1"))
        assert outcome.move.flag == MoveFlag.CASTLE_KINGSIDE
        assert outcome.castling == (_sq("h1"), _sq("f1"))
        rook = ctrl.board[_sq("f1")]
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert rook.has_moved
        assert ctrl.board.is_empty(_sq("h1"))
        assert ctrl.side_to_move == Color.BLACK

    def test_queenside(self, build_board: BoardBuilder) -> None:
        ctrl = _controller(build_board({"e1": "K", "a1": "R", "e8": "k"}))
        outcome = ctrl.play_move(E1, _sq("c1"))
        assert outcome.castling == (_sq("a1"), _sq("d1"))
        assert ctrl.board[_sq("d1")].piece_type == PieceType.ROOK
        assert ctrl.board[_sq("c1")].piece_type == PieceType.KING

    def test_black_castles(self, build_board: BoardBuilder) -> None:
        ctrl = GameController()
        ctrl.new_game(
            "alice", "bob",
            board=build_board({"e1": "K", "e8": "k", "h8": "r"}),
            side_to_move=Color.BLACK,
        )
        outcome = ctrl.play_move(E8, _sq("g8"))
        assert outcome.castling == (_sq("h8"), _sq("f8"))

    def test_rejected_after_king_returns(self, build_board: BoardBuilder) -> None:
        ctrl = _controller(build_board({"e1": "K", "h1": "R", "a1": "R", "e8": "k"}))
        _play(ctrl, [("e1", "f1"), ("e8", "e7"), ("f1", "e1"), ("e7", "e8")])
        with pytest.raises(IllegalMoveError):
            ctrl.play_move(E1, _sq("g1"))
        with pytest.raises(IllegalMoveError):
            ctrl.play_move(E1, _sq("c1"))

    def test_rejected_after_rook_returns(self, build_board: BoardBuilder) -> None:
        ctrl = _controller(build_board({"e1": "K", "h1": "R", "a1": "R", "e8": "k"}))
        _play(ctrl, [("h1", "h2"), ("e8", "e7"), ("h2", "h1"), ("e7", "e8")])
        with pytest.raises(IllegalMoveError):
            ctrl.play_move(E1, _sq("g1"))
        ctrl.play_move(E1, _sq("c1"))

    def test_through_covered_square_strict(self, build_board: BoardBuilder) -> None:
        board = build_board({"e1": "K", "h1": "R", "a8": "k", "f8": "r"})
        ctrl = _controller(board)
        with pytest.raises(IllegalMoveError):
            ctrl.play_move(E1, _sq("g1"))

    def test_through_covered_square_permissive(self, build_board: BoardBuilder) -> None:
        board = build_board({"e1": "K", "h1": "R", "a8": "k", "f8": "r"})
        ctrl = _controller(board, RuleOptions(strict_castling=False))
        outcome = ctrl.play_move(E1, _sq("g1"))
        assert outcome.castling is not None


class TestUndo:
    def test_nothing_to_undo(self) -> None:
        assert _controller().undo_move() is False

    def test_round_trip(self) -> None:
        ctrl = _controller()
        before = ctrl.coverage.snapshot()
        ctrl.play_move(E2, _sq("e4"))
        assert ctrl.undo_move()
        assert ctrl.board == Board.initial()
        assert not ctrl.board[E2].has_moved
        assert ctrl.coverage.snapshot() == before
        assert ctrl.side_to_move == Color.WHITE
        assert ctrl.state.ply_count == 0

    def test_restores_capture(self) -> None:
        ctrl = _controller()
        _play(ctrl, [("e2", "e4"), ("d7", "d5"), ("e4", "d5")])
        victim_count = len(ctrl.board.pieces_of(Color.BLACK))
        assert ctrl.undo_move()
        assert len(ctrl.board.pieces_of(Color.BLACK)) == victim_count + 1
        assert ctrl.board[_sq("d5")].color == Color.BLACK
        assert ctrl.board[_sq("e4")].color == Color.WHITE

    def test_restores_castling(self, build_board: BoardBuilder) -> None:
        board = build_board({"e1": "K", "h1": "R", "e8": "k"})
        ctrl = _controller(board)
        ctrl.play_move(E1, _sq("g1"))
        assert ctrl.undo_move()
        assert ctrl.board[_sq("h1")].piece_type == PieceType.ROOK
        assert not ctrl.board[_sq("h1")].has_moved
        assert not ctrl.board[E1].has_moved
        ctrl.play_move(E1, _sq("g1"))

    def test_not_after_game_over(self) -> None:
        ctrl = _controller()
        _play(ctrl, FOOLS_MATE)
        assert ctrl.undo_move() is False


class TestEvents:
    def test_move_and_game_over_callbacks(self) -> None:
        ctrl = _controller()
        outcomes = []
        results = []
        phases = []
        ctrl.events.on_move.append(outcomes.append)
        ctrl.events.on_game_over.append(results.append)
        ctrl.events.on_phase_changed.append(phases.append)

        _play(ctrl, FOOLS_MATE)

        assert len(outcomes) == 4
        assert outcomes[-1].move.from_sq == _sq("d8")
        assert results == [GameResult.BLACK_WINS]
        assert phases == [GamePhase.GAME_OVER]

    def test_new_game_emits_phase(self) -> None:
        ctrl = GameController()
        phases = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.new_game("alice", "bob")
        assert phases == [GamePhase.AWAITING_MOVE]

    def test_rejected_move_emits_nothing(self) -> None:
        ctrl = _controller()
        outcomes = []
        ctrl.events.on_move.append(outcomes.append)
        with pytest.raises(IllegalMoveError):
            ctrl.play_move(E7, _sq("e5"))
        assert outcomes == []
