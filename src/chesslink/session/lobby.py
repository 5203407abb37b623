"""In-process lobby: player names, open rooms and running matches.

The lobby is process-wide state owned by whatever transport serves the
clients. It is created explicitly at startup and never shared with the
engine's internals; each room serializes its own moves.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any

from chesslink.core.enums import Color
from chesslink.core.errors import (
    GameAlreadyEndedError,
    IllegalMoveError,
    InvariantViolationError,
)
from chesslink.core.rules import RuleOptions
from chesslink.core.types import Square
from chesslink.game.controller import GameController
from chesslink.game.snapshot import (
    board_snapshot,
    encode_square,
    legal_moves_payload,
)

_LOGGER = logging.getLogger(__name__)


class SessionError(Exception):
    """Base class for lobby and room errors."""


class NameTakenError(SessionError):
    pass


class RoomNotFoundError(SessionError):
    pass


class NotInRoomError(SessionError):
    pass


@dataclass(frozen=True, slots=True)
class MoveReply:
    """Messages produced by one move request.

    A rejected move only ever produces ``to_mover``.
    """

    accepted: bool
    to_mover: dict[str, Any] | None = None
    to_opponent: dict[str, Any] | None = None
    broadcast: dict[str, Any] | None = None


class Room:
    """A match between a host (White) and a guest (Black)."""

    __slots__ = ("name", "host", "guest", "controller", "closed", "_options", "_lock")

    def __init__(self, host: str, options: RuleOptions | None = None) -> None:
        self.name = host
        self.host = host
        self.guest: str | None = None
        self.controller: GameController | None = None
        self.closed = False
        self._options = options
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self.guest is None and not self.closed

    @property
    def is_finished(self) -> bool:
        """The match has been decided; the host may open a new room."""
        return self.controller is not None and self.controller.state.is_game_over

    def start(self, guest: str) -> GameController:
        with self._lock:
            self.guest = guest
            self.controller = GameController(self._options)
            self.controller.new_game(white=self.host, black=guest)
            return self.controller

    def initial_payload(self, player: str) -> dict[str, Any]:
        """Board, legal moves and turn flag sent when a player enters the game."""
        with self._lock:
            ctrl = self._require_game()
            color = self._color_of(ctrl, player)
            return {
                "type": "board",
                "color": str(color),
                "board": board_snapshot(ctrl.board),
                "legal_moves": legal_moves_payload(ctrl.legal_moves_for_side(color)),
                "move_next": ctrl.side_to_move == color,
            }

    def submit_move(self, player: str, from_sq: Square, to_sq: Square) -> MoveReply:
        """Apply *player*'s move; at most one move is processed at a time."""
        with self._lock:
            ctrl = self._require_game()
            color = self._color_of(ctrl, player)
            try:
                if color != ctrl.side_to_move and not ctrl.state.is_game_over:
                    raise IllegalMoveError(f"It is not {player}'s turn")
                outcome = ctrl.play_move(from_sq, to_sq)
            except (IllegalMoveError, GameAlreadyEndedError) as exc:
                _LOGGER.warning("Room %s: rejected move from %s: %s", self.name, player, exc)
                return MoveReply(
                    accepted=False,
                    to_mover={"type": "rejected", "reason": str(exc)},
                )
            except InvariantViolationError:
                _LOGGER.exception("Room %s: engine invariant broken, aborting", self.name)
                self.closed = True
                raise

            castling = (
                [encode_square(sq) for sq in outcome.castling]
                if outcome.castling is not None
                else None
            )
            opponent_move: dict[str, Any] = {
                "type": "opponent move",
                "from": encode_square(from_sq),
                "to": encode_square(to_sq),
                "castling": castling,
            }
            if outcome.result_tag is not None:
                return MoveReply(
                    accepted=True,
                    to_mover={"type": "castling", "castling": castling} if castling else None,
                    to_opponent=opponent_move,
                    broadcast={"type": "result", "result": outcome.result_tag},
                )

            opponent_move["check"] = outcome.check
            opponent_move["legal_moves"] = legal_moves_payload(
                ctrl.legal_moves_for_side(color.opposite)
            )
            return MoveReply(
                accepted=True,
                to_mover={"type": "castling", "castling": castling} if castling else None,
                to_opponent=opponent_move,
            )

    def _require_game(self) -> GameController:
        if self.closed:
            raise SessionError(f"Room {self.name} is closed")
        if self.controller is None:
            raise SessionError(f"Room {self.name} is waiting for a guest")
        return self.controller

    def _color_of(self, ctrl: GameController, player: str) -> Color:
        color = ctrl.state.color_of(player)
        if color is None:
            raise NotInRoomError(f"{player} is not playing in room {self.name}")
        return color


class Lobby:
    """Registry of connected names, open hosts and rooms."""

    __slots__ = ("_options", "_names", "_hosts", "_rooms", "_lock")

    def __init__(self, options: RuleOptions | None = None) -> None:
        self._options = options
        self._names: set[str] = set()
        self._hosts: list[str] = []  # open rooms, oldest first
        self._rooms: dict[str, Room] = {}
        self._lock = threading.Lock()

    # ── Names ────────────────────────────────────────────────────────────

    def register_name(self, name: str) -> None:
        if not name:
            raise ValueError("A name is required")
        with self._lock:
            if name in self._names:
                raise NameTakenError(f"The username {name} is taken")
            self._names.add(name)
        _LOGGER.info("User connected: %s", name)

    def release_name(self, name: str) -> None:
        """Forget *name* (client disconnected) and withdraw its open room."""
        with self._lock:
            self._names.discard(name)
            self._withdraw_host(name)

    def is_registered(self, name: str) -> bool:
        return name in self._names

    # ── Rooms ────────────────────────────────────────────────────────────

    def create_room(self, host: str) -> Room:
        with self._lock:
            existing = self._rooms.get(host)
            if existing is not None and not (existing.closed or existing.is_finished):
                raise SessionError(f"{host} already has a room")
            if existing is not None:
                existing.closed = True
            room = Room(host, self._options)
            self._rooms[host] = room
            self._hosts.append(host)
        _LOGGER.info("Room created by %s", host)
        return room

    def join_room(self, guest: str, host: str) -> Room:
        """Seat *guest* in *host*'s room and start the match (host is White)."""
        with self._lock:
            room = self._rooms.get(host)
            if room is None:
                raise RoomNotFoundError(f"No room hosted by {host}")
            if not room.is_open:
                raise SessionError(f"Room {host} is not open")
            if guest == host:
                raise SessionError("Cannot join your own room")
            room.guest = guest  # claimed before the lobby lock is released
            self._withdraw_host(host, close=False)
            self._withdraw_host(guest)
        room.start(guest)
        _LOGGER.info("%s joined %s's room", guest, host)
        return room

    def open_rooms(self) -> list[str]:
        with self._lock:
            return list(self._hosts)

    def room(self, name: str) -> Room:
        with self._lock:
            room = self._rooms.get(name)
        if room is None:
            raise RoomNotFoundError(f"No room named {name}")
        return room

    def close_room(self, name: str) -> None:
        with self._lock:
            room = self._rooms.pop(name, None)
            if name in self._hosts:
                self._hosts.remove(name)
        if room is not None:
            room.closed = True
            _LOGGER.info("Room %s closed", name)

    # ── Internal ─────────────────────────────────────────────────────────

    def _withdraw_host(self, name: str, close: bool = True) -> None:
        """Drop *name* from the open-host list; caller holds the lock."""
        if name not in self._hosts:
            return
        self._hosts.remove(name)
        if close:
            room = self._rooms.pop(name, None)
            if room is not None:
                room.closed = True
