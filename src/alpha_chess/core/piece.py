"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from alpha_chess.core.enums import Color, PieceType
from alpha_chess.core.types import OFF_BOARD, Coordinates, is_on_board

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object for one tracked piece.

    ``slot`` is the piece's index among its side's pieces of the same kind.
    It is fixed when the piece is created and survives moves, so it serves as
    the piece's identity. A piece at ``(0, 0)`` has been captured.
    """

    kind: PieceType
    color: Color
    rank: int = 0
    file: int = 0
    slot: int = 0

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.kind)]

    @classmethod
    def from_char(cls, char: str, rank: int = 0, file: int = 0) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, kind = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(kind, color, rank, file)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.kind)]

    # ── Coordinates ──────────────────────────────────────────────────────

    @property
    def coordinates(self) -> Coordinates:
        return (self.rank, self.file)

    @property
    def on_board(self) -> bool:
        return is_on_board(self.rank, self.file)

    def moved_to(self, rank: int, file: int) -> Piece:
        return replace(self, rank=rank, file=file)

    def captured(self) -> Piece:
        """Same piece flagged as off the board."""
        return replace(self, rank=OFF_BOARD[0], file=OFF_BOARD[1])
