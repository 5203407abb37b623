"""MainWindow — hot-seat board with a status line and game actions."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

from chesslink.core.errors import ChessError
from chesslink.core.types import Square
from chesslink.game.controller import GameController
from chesslink.game.state import MoveOutcome
from chesslink.settings import AppSettings
from chesslink.ui.board_view import BoardView
from chesslink.ui.theme import BoardTheme

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Two players sharing one board; every move goes through the controller."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        super().__init__()
        self._settings = settings if settings is not None else AppSettings()
        self._controller = GameController(self._settings.rule_options())
        self._controller.events.on_move.append(self._on_move)

        self.setWindowTitle("chesslink")

        self._board_view = BoardView()
        self._status = QLabel()
        self._status.setObjectName("statusLine")

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.addWidget(self._board_view)
        layout.addWidget(self._status)
        self.setCentralWidget(central)

        self._build_toolbar()
        self._apply_settings()
        self._board_view.move_requested.connect(self._on_move_requested)
        self.new_game()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def status_text(self) -> str:
        return self._status.text()

    # ── Actions ──────────────────────────────────────────────────────────

    def new_game(self) -> None:
        self._controller.new_game("White", "Black")
        scene = self._board_view.board_scene
        scene.set_controller(self._controller)
        scene.highlight_last_move(None)
        self._update_status()

    def undo(self) -> None:
        if self._controller.undo_move():
            scene = self._board_view.board_scene
            scene.refresh()
            scene.highlight_last_move(None)
            self._update_status()

    def flip(self) -> None:
        self._board_view.flip()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _build_toolbar(self) -> None:
        toolbar = self.addToolBar("Game")
        for label, slot in (
            ("New Game", self.new_game),
            ("Undo", self.undo),
            ("Flip Board", self.flip),
        ):
            action = QAction(label, self)
            action.triggered.connect(slot)
            toolbar.addAction(action)

    def _apply_settings(self) -> None:
        s = self._settings
        scene = self._board_view.board_scene
        scene.set_theme(BoardTheme.named(s.board_theme))
        scene.set_show_coordinates(s.show_coordinates)
        scene.set_show_legal_moves(s.show_legal_moves)
        if s.flipped:
            scene.set_flipped(True)

    def _on_move_requested(self, from_sq: Square, to_sq: Square) -> None:
        try:
            self._controller.play_move(from_sq, to_sq)
        except ChessError as exc:
            _LOGGER.warning("Move rejected: %s", exc)
            self._status.setText(str(exc))

    def _on_move(self, outcome: MoveOutcome) -> None:
        scene = self._board_view.board_scene
        scene.refresh()
        scene.highlight_last_move(outcome.move)
        self._update_status()

    def _update_status(self) -> None:
        state = self._controller.state
        if state.is_game_over:
            self._status.setText(
                f"{state.result.tag} by {state.end_reason.name.lower()}"
            )
            return
        side = self._controller.side_to_move
        text = f"{str(side).capitalize()} to move"
        if self._controller.is_in_check(side):
            text += " (check)"
        self._status.setText(text)
