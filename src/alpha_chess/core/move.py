"""Move record (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from alpha_chess.core.enums import MoveFlag
from alpha_chess.core.piece import Piece
from alpha_chess.core.types import Coordinates, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of one move: the piece as it stood, and where it went."""

    piece: Piece
    to_sq: Coordinates
    flag: MoveFlag = MoveFlag.NORMAL
    captured: Piece | None = None

    @property
    def from_sq(self) -> Coordinates:
        return self.piece.coordinates

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_castling(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_name(*self.from_sq)}{square_name(*self.to_sq)}"
