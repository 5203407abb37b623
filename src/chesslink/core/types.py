"""Square type alias and coordinate helpers.

Board layout is row-major, as the client draws it:
    (0, 0) = a8 (Black's queen-side rook, White's far-left corner)
    (0, 7) = h8
    (7, 0) = a1
    (7, 7) = h1 (White's king-side rook)

Rows grow towards White, columns grow towards the h-file.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]  # (row, col), each 0–7
Vector: TypeAlias = tuple[int, int]  # (d_row, d_col)

BOARD_SIZE = 8


def is_on_board(row: int, col: int) -> bool:
    """Whether (*row*, *col*) lies inside the 8×8 grid."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def offset(sq: Square, vector: Vector) -> Square:
    """Square reached from *sq* by one application of *vector* (unchecked)."""
    return (sq[0] + vector[0], sq[1] + vector[1])


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (7, 4) → 'e1', (0, 0) → 'a8'."""
    row, col = sq
    return chr(ord("a") + col) + str(BOARD_SIZE - row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e2' → (6, 4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return (BOARD_SIZE - int(name[1]), ord(name[0]) - ord("a"))


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ((0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = ((1, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = ((6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = ((7, c) for c in range(8))
