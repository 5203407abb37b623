"""Scaled viewport onto a :class:`BoardScene`."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QPainter, QResizeEvent, QShowEvent
from PyQt6.QtWidgets import QGraphicsView, QSizePolicy, QWidget

from chesslink.ui.board_scene import BoardScene

_MIN_SIDE = 320


class BoardView(QGraphicsView):
    """Keeps the whole board visible at any window size.

    Clicks are handled by the scene; ``move_requested(from_sq, to_sq)``
    is re-emitted here so windows only need to know about the view.
    """

    move_requested = pyqtSignal(object, object)

    def __init__(
        self, scene: BoardScene | None = None, parent: QWidget | None = None
    ) -> None:
        self._scene = scene if scene is not None else BoardScene()
        super().__init__(self._scene, parent)

        for set_policy in (
            self.setHorizontalScrollBarPolicy,
            self.setVerticalScrollBarPolicy,
        ):
            set_policy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setRenderHints(
            QPainter.RenderHint.Antialiasing | QPainter.RenderHint.TextAntialiasing
        )
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(_MIN_SIDE, _MIN_SIDE)

        self._scene.move_requested.connect(self.move_requested)

    @property
    def board_scene(self) -> BoardScene:
        return self._scene

    def flip(self) -> bool:
        """Toggle orientation; returns ``True`` when Black is at the bottom."""
        flipped = not self._scene.is_flipped()
        self._scene.set_flipped(flipped)
        self._fit()
        return flipped

    # ── Qt overrides ─────────────────────────────────────────────────────

    def resizeEvent(self, event: QResizeEvent | None) -> None:
        super().resizeEvent(event)
        self._fit()

    def showEvent(self, event: QShowEvent | None) -> None:
        super().showEvent(event)
        self._fit()

    def _fit(self) -> None:
        self.fitInView(self._scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)
