"""Abstract interfaces and FSM states for the game layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chesslink.core.enums import Color

if TYPE_CHECKING:
    from chesslink.core.move import Move
    from chesslink.core.types import Square
    from chesslink.game.state import MoveOutcome, PieceMoves


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game.

    Check is a derived query, not a phase.
    """

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class GameEndReason(IntEnum):
    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Synchronous API the transport and UI collaborators call into."""

    @abstractmethod
    def new_game(self, white: str, black: str) -> None:
        """Set up a new game between two identities."""

    @abstractmethod
    def play_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        """Validate and commit a move for the side to move."""

    @abstractmethod
    def legal_moves(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq*."""

    @abstractmethod
    def legal_moves_for_side(self, color: Color) -> list[PieceMoves]:
        """Legal moves of every piece of *color*."""

    @abstractmethod
    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked?"""

    @abstractmethod
    def is_checkmate(self, color: Color) -> bool:
        """Is *color* in check with no legal move?"""

    @abstractmethod
    def undo_move(self) -> bool:
        """Undo the last move. Returns True on success."""
