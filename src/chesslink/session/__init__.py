"""Session layer — lobby, rooms and per-match move serialization."""

from chesslink.session.lobby import (
    Lobby,
    MoveReply,
    NameTakenError,
    NotInRoomError,
    Room,
    RoomNotFoundError,
    SessionError,
)

__all__ = [
    "Lobby",
    "MoveReply",
    "NameTakenError",
    "NotInRoomError",
    "Room",
    "RoomNotFoundError",
    "SessionError",
]
