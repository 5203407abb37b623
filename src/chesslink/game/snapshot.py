"""JSON-ready payloads handed to the transport layer.

Squares are encoded as ``[row, col]``. ``[0, 0]`` is a8, the corner on
White's far left; rows grow towards White.
"""

from __future__ import annotations

import json
from typing import Any

from chesslink.core.board import Board
from chesslink.core.piece import Piece
from chesslink.core.types import BOARD_SIZE, Square
from chesslink.game.state import MoveOutcome, PieceMoves


def encode_square(sq: Square) -> list[int]:
    return [sq[0], sq[1]]


def decode_square(value: Any) -> Square:
    """Parse a ``[row, col]`` pair received from a client."""
    try:
        row, col = value
        row, col = int(row), int(col)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid square payload: {value!r}") from None
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        raise ValueError(f"Square out of range: {value!r}")
    return (row, col)


def encode_piece(piece: Piece | None) -> dict[str, str] | None:
    if piece is None:
        return None
    return {"kind": str(piece.piece_type), "side": str(piece.color)}


def board_snapshot(board: Board) -> list[list[dict[str, str] | None]]:
    """8×8 rows of ``{"kind", "side"}`` cells, ``None`` where empty."""
    return [
        [encode_piece(board[row, col]) for col in range(BOARD_SIZE)]
        for row in range(BOARD_SIZE)
    ]


def legal_moves_payload(entries: list[PieceMoves]) -> list[dict[str, Any]]:
    return [
        {
            "position": encode_square(entry.position),
            "moves": [encode_square(sq) for sq in entry.destinations],
        }
        for entry in entries
    ]


def outcome_payload(outcome: MoveOutcome) -> dict[str, Any]:
    return {
        "from": encode_square(outcome.move.from_sq),
        "to": encode_square(outcome.move.to_sq),
        "check": outcome.check,
        "castling": (
            [encode_square(sq) for sq in outcome.castling]
            if outcome.castling is not None
            else None
        ),
        "result": outcome.result_tag,
    }


def dumps(payload: Any) -> str:
    """Compact JSON text for the wire."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
