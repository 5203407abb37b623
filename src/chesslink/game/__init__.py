"""Game management layer — controller, state machine, outbound payloads.

Quick start::

    from chesslink.game import create_game

    ctrl = create_game("Alice", "Bob")
    outcome = ctrl.play_move((6, 4), (4, 4))  # e2-e4
"""

from chesslink.game.controller import GameController, GameEvents, create_game
from chesslink.game.interfaces import GameEndReason, GamePhase, IGameController
from chesslink.game.state import GameState, MoveOutcome, MoveRecord, PieceMoves

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "IGameController",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "MoveOutcome",
    "MoveRecord",
    "PieceMoves",
    "create_game",
]
