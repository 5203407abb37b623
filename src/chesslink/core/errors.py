"""Exception taxonomy for the rules engine."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for every error raised by the engine."""


class IllegalMoveError(ChessError, ValueError):
    """Requested destination is not a legal move for the piece on the origin.

    Raised before any state is touched, so the game is unchanged.
    """


class GameAlreadyEndedError(ChessError):
    """A move was submitted after the game reached a terminal result."""


class InvariantViolationError(ChessError, RuntimeError):
    """Engine state is corrupted (e.g. a side has no king).

    Not recoverable: the owning match must be aborted.
    """
