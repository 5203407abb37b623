"""BoardScene — QGraphicsScene that draws the chessboard and pieces."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chesslink.core.move import Move
from chesslink.core.types import BOARD_SIZE, Square
from chesslink.ui.theme import BoardTheme

if TYPE_CHECKING:
    from chesslink.game.controller import GameController


class BoardScene(QGraphicsScene):
    """Renders the board, coordinates, highlights, and piece glyphs.

    Signals:
        move_requested(object, object): ``(from_sq, to_sq)`` picked by clicks.
    """

    move_requested = pyqtSignal(object, object)

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._controller: GameController | None = None
        self._flipped = False

        # Interaction state
        self._selected_sq: Square | None = None
        self._legal_moves: list[Move] = []
        self._interactive = True
        self._show_coordinates = True
        self._show_legal_moves = True

        # Visual layers
        self._square_items: dict[Square, QGraphicsRectItem] = {}
        self._highlight_items: list[QGraphicsItem] = []
        self._last_move_highlights: list[QGraphicsItem] = []
        self._legal_dot_items: list[QGraphicsItem] = []
        self._piece_items: dict[Square, QGraphicsSimpleTextItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    def set_controller(self, controller: GameController) -> None:
        """Display the game owned by *controller* (full redraw of pieces)."""
        self._controller = controller
        self.refresh()

    def refresh(self) -> None:
        self._clear_selection()
        self._sync_pieces()
        self.highlight_check()

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation (Black at the bottom)."""
        self._flipped = flipped
        self._draw_board()
        self.refresh()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        self.refresh()

    def set_show_coordinates(self, visible: bool) -> None:
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_legal_moves(self, visible: bool) -> None:
        self._show_legal_moves = visible
        if not visible:
            self._clear_items(self._legal_dot_items)

    def highlight_last_move(self, move: Move | None) -> None:
        """Highlight origin/destination of the last played move."""
        self._clear_items(self._last_move_highlights)
        if move is None:
            return
        for sq in (move.from_sq, move.to_sq):
            rect = self._make_highlight(sq, self._theme.last_move)
            rect.setZValue(0.5)
            self._last_move_highlights.append(rect)

    def highlight_check(self) -> None:
        """Highlight the king of the side to move when it is in check."""
        self._clear_items(self._highlight_items)
        ctrl = self._controller
        if ctrl is None:
            return
        color = ctrl.side_to_move
        if ctrl.is_in_check(color):
            rect = self._make_highlight(
                ctrl.board.find_king(color), self._theme.highlight_check
            )
            rect.setZValue(0.6)
            self._highlight_items.append(rect)

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        for coord_item in self._coord_items:
            self.removeItem(coord_item)
        self._coord_items.clear()

        t = self.TILE
        font = QFont("Sans Serif", max(9, t // 8))

        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                vc, vr = self._visual_coords((row, col))
                is_light = (row + col) % 2 == 0
                color = self._theme.light_square if is_light else self._theme.dark_square
                rect = QGraphicsRectItem(vc * t, vr * t, t, t)
                rect.setBrush(QBrush(color))
                rect.setPen(QPen(Qt.PenStyle.NoPen))
                rect.setZValue(0)
                self.addItem(rect)
                self._square_items[row, col] = rect

                text_color = self._theme.coord_dark if is_light else self._theme.coord_light
                if vc == 0:
                    self._add_coord(str(BOARD_SIZE - row), font, text_color, vc * t + 2, vr * t + 1)
                if vr == BOARD_SIZE - 1:
                    self._add_coord(
                        chr(ord("a") + col), font, text_color, vc * t + t - 12, vr * t + t - 16
                    )

        self.setSceneRect(0, 0, BOARD_SIZE * t, BOARD_SIZE * t)

    def _add_coord(self, label: str, font: QFont, color: QColor, x: float, y: float) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(x, y)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece glyphs from the controller's board."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        if self._controller is None:
            return

        t = self.TILE
        font = QFont("DejaVu Sans", int(t * 0.6))
        for sq, piece in self._controller.board.occupied():
            item = QGraphicsSimpleTextItem(piece.symbol)
            item.setFont(font)
            vc, vr = self._visual_coords(sq)
            bounds = item.boundingRect()
            item.setPos(
                vc * t + (t - bounds.width()) / 2,
                vr * t + (t - bounds.height()) / 2,
            )
            item.setZValue(1)
            self.addItem(item)
            self._piece_items[sq] = item

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if not self._interactive or self._controller is None or event is None:
            return super().mousePressEvent(event)
        self.click_square(self._pos_to_square(event.scenePos()))

    def click_square(self, sq: Square | None) -> None:
        """Select an own piece, or move the selected piece onto *sq*."""
        ctrl = self._controller
        if sq is None or ctrl is None or ctrl.state.is_game_over:
            self._clear_selection()
            return

        if self._selected_sq is not None:
            from_sq = self._selected_sq
            if any(m.to_sq == sq for m in self._legal_moves):
                self._clear_selection()
                self.move_requested.emit(from_sq, sq)
                return

        piece = ctrl.board[sq]
        if piece is not None and piece.color == ctrl.side_to_move:
            self._select_square(sq)
        else:
            self._clear_selection()

    # ── Selection / highlights ───────────────────────────────────────────

    def _select_square(self, sq: Square) -> None:
        self._clear_selection()
        self._selected_sq = sq
        self._highlight_items.append(self._make_highlight(sq, self._theme.highlight_from))

        assert self._controller is not None
        self._legal_moves = self._controller.legal_moves(sq)
        if self._show_legal_moves:
            t = self.TILE
            for m in self._legal_moves:
                vc, vr = self._visual_coords(m.to_sq)
                dot = QGraphicsEllipseItem(vc * t + t * 0.35, vr * t + t * 0.35, t * 0.3, t * 0.3)
                dot.setBrush(QBrush(self._theme.highlight_to))
                dot.setPen(QPen(Qt.PenStyle.NoPen))
                dot.setZValue(2)
                self.addItem(dot)
                self._legal_dot_items.append(dot)

    def _clear_selection(self) -> None:
        self._selected_sq = None
        self._legal_moves = []
        self._clear_items(self._highlight_items)
        self._clear_items(self._legal_dot_items)

    def _clear_items(self, items: list[QGraphicsItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, sq: Square) -> tuple[int, int]:
        """Board square → visual (column, row)."""
        row, col = sq
        if self._flipped:
            return BOARD_SIZE - 1 - col, BOARD_SIZE - 1 - row
        return col, row

    def _pos_to_square(self, pos: QPointF) -> Square | None:
        """Scene position → board square."""
        t = self.TILE
        vc = int(pos.x() // t)
        vr = int(pos.y() // t)
        if not (0 <= vc < BOARD_SIZE and 0 <= vr < BOARD_SIZE):
            return None
        if self._flipped:
            return (BOARD_SIZE - 1 - vr, BOARD_SIZE - 1 - vc)
        return (vr, vc)

    def _make_highlight(self, sq: Square, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t = self.TILE
        vc, vr = self._visual_coords(sq)
        rect = QGraphicsRectItem(vc * t, vr * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
