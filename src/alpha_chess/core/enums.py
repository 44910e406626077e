"""Core enumerations and flags for the position engine."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        """Side-to-move letter used in FEN field 2."""
        return "w" if self == Color.WHITE else "b"

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece kinds; the order is also the grouping order of a side's pieces."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    CASTLE_KINGSIDE = 2
    CASTLE_QUEENSIDE = 3


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @staticmethod
    def for_side(color: Color, kingside: bool) -> CastlingRights:
        if color == Color.WHITE:
            return (
                CastlingRights.WHITE_KINGSIDE
                if kingside
                else CastlingRights.WHITE_QUEENSIDE
            )
        return (
            CastlingRights.BLACK_KINGSIDE if kingside else CastlingRights.BLACK_QUEENSIDE
        )
