"""Application settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from chesslink.core.rules import RuleOptions

BOARD_THEMES = ("Classic", "Blue", "Green")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Board
    board_theme: str = "Classic"
    show_coordinates: bool = True
    show_legal_moves: bool = True
    flipped: bool = False

    # Rules
    strict_castling: bool = True

    # Diagnostics
    log_level: str = "INFO"

    def rule_options(self) -> RuleOptions:
        return RuleOptions(strict_castling=self.strict_castling)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        """Defaults overridden by ``CHESSLINK_*`` variables; bad values are ignored."""
        env = os.environ if environ is None else environ
        settings = cls()

        level = env.get("CHESSLINK_LOG_LEVEL", "").upper()
        if level in LOG_LEVELS:
            settings.log_level = level

        theme = env.get("CHESSLINK_BOARD_THEME", "").capitalize()
        if theme in BOARD_THEMES:
            settings.board_theme = theme

        strict = env.get("CHESSLINK_STRICT_CASTLING", "").lower()
        if strict in _TRUE:
            settings.strict_castling = True
        elif strict in _FALSE:
            settings.strict_castling = False

        return settings
