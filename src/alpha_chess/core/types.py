"""Coordinate type alias and helpers.

Coordinates are ``(rank, file)`` pairs, both 1-8:
    rank 1 is White's back rank, rank 8 the top row of a FEN placement;
    file 1 is the a-file, file 8 the h-file.

``(0, 0)`` is the off-board sentinel used for captured pieces.
"""

from __future__ import annotations

from typing import Final, TypeAlias

Coordinates: TypeAlias = tuple[int, int]  # (rank, file)

OFF_BOARD: Final[Coordinates] = (0, 0)

_FILES = "abcdefgh"


def is_on_board(rank: int, file: int) -> bool:
    """Whether both rank and file lie in 1-8."""
    return 1 <= rank <= 8 and 1 <= file <= 8


def square_name(rank: int, file: int) -> str:
    """Human-readable name, e.g. (4, 5) -> 'e4'."""
    if not is_on_board(rank, file):
        raise ValueError(f"Coordinates off the board: {(rank, file)!r}")
    return _FILES[file - 1] + str(rank)


def parse_square(name: str) -> Coordinates:
    """Parse square name, e.g. 'e4' -> (4, 5)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return (int(name[1]), _FILES.index(name[0]) + 1)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = ((1, f) for f in range(1, 9))
A2, B2, C2, D2, E2, F2, G2, H2 = ((2, f) for f in range(1, 9))
A3, B3, C3, D3, E3, F3, G3, H3 = ((3, f) for f in range(1, 9))
A4, B4, C4, D4, E4, F4, G4, H4 = ((4, f) for f in range(1, 9))
A5, B5, C5, D5, E5, F5, G5, H5 = ((5, f) for f in range(1, 9))
A6, B6, C6, D6, E6, F6, G6, H6 = ((6, f) for f in range(1, 9))
A7, B7, C7, D7, E7, F7, G7, H7 = ((7, f) for f in range(1, 9))
A8, B8, C8, D8, E8, F8, G8, H8 = ((8, f) for f in range(1, 9))
