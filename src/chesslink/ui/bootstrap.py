"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from chesslink.settings import AppSettings

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Install a root handler once; later calls only adjust the level."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from chesslink.ui.theme import APP_STYLE

    app.setApplicationName("chesslink")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(
    argv: list[str] | None = None, settings: AppSettings | None = None
) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from chesslink.ui.main_window import MainWindow

    settings = settings if settings is not None else AppSettings.from_env()
    configure_logging(settings.log_level)
    _LOGGER.info("Starting chesslink (strict castling: %s)", settings.strict_castling)

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    window = MainWindow(settings)
    window.show()

    return app.exec()
