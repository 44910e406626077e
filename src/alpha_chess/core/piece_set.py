"""PieceSet - one side's pieces, kept in fixed per-kind slots."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Final

from alpha_chess.core.enums import Color, PieceType
from alpha_chess.core.piece import Piece
from alpha_chess.core.types import Coordinates, square_name

# Slots per kind for one side: a standard set, no room for promoted pieces.
PIECE_CAPACITY: Final[dict[PieceType, int]] = {
    PieceType.PAWN: 8,
    PieceType.KNIGHT: 2,
    PieceType.BISHOP: 2,
    PieceType.ROOK: 2,
    PieceType.QUEEN: 1,
    PieceType.KING: 1,
}


class PieceSet:
    """Type-keyed slot collection for a single color.

    Every slot exists from creation. Slots for pieces that are not on the board
    hold the ``(0, 0)`` sentinel; pieces are never dropped from the set.
    """

    __slots__ = ("color", "_slots")

    def __init__(self, color: Color, slots: dict[PieceType, list[Piece]]) -> None:
        self.color = color
        self._slots = slots

    @classmethod
    def standard(cls, color: Color) -> PieceSet:
        """Full complement of slots, all off the board."""
        return cls(
            color,
            {
                kind: [Piece(kind, color, slot=i) for i in range(count)]
                for kind, count in PIECE_CAPACITY.items()
            },
        )

    # -- Queries ------------------------------------------------------------

    def __iter__(self) -> Iterator[Piece]:
        for kind in PieceType:
            yield from self._slots[kind]

    def __len__(self) -> int:
        return sum(len(pieces) for pieces in self._slots.values())

    def of_kind(self, kind: PieceType) -> list[Piece]:
        return list(self._slots[kind])

    def grouped(self) -> list[list[Piece]]:
        """Slots grouped per kind, in :class:`PieceType` order."""
        return [list(self._slots[kind]) for kind in PieceType]

    def on_board(self) -> list[Piece]:
        return [piece for piece in self if piece.on_board]

    @staticmethod
    def capacity(kind: PieceType) -> int:
        return PIECE_CAPACITY[kind]

    # -- Re-derivation ------------------------------------------------------

    def reassign(self, placements: Iterable[Piece]) -> PieceSet:
        """New set whose slots sit on *placements* (this side's decoded pieces).

        A slot whose square still holds a piece of its kind keeps that square.
        The remaining squares, in the order given, go to the remaining slots,
        slots that were on the board taking precedence over captured ones.
        Slots left over are moved to the sentinel.
        """
        squares: dict[PieceType, list[Coordinates]] = {kind: [] for kind in PieceType}
        for placed in placements:
            if placed.color != self.color:
                raise ValueError(f"{placed!r} does not belong to {self.color.name}")
            squares[placed.kind].append(placed.coordinates)

        slots: dict[PieceType, list[Piece]] = {}
        for kind, current in self._slots.items():
            targets = squares[kind]
            if len(targets) > len(current):
                raise ValueError(
                    f"{len(targets)} {kind.name} placements for {len(current)} slots"
                )
            claimed = set(targets)
            updated: list[Piece | None] = [None] * len(current)
            for piece in current:
                if piece.coordinates in claimed:
                    updated[piece.slot] = piece
                    claimed.discard(piece.coordinates)

            free = sorted(
                (piece for piece in current if updated[piece.slot] is None),
                key=lambda p: (not p.on_board, p.slot),
            )
            remaining = [sq for sq in targets if sq in claimed]
            for piece in free:
                if remaining:
                    updated[piece.slot] = piece.moved_to(*remaining.pop(0))
                else:
                    updated[piece.slot] = piece.captured()
            slots[kind] = [piece for piece in updated if piece is not None]
        return PieceSet(self.color, slots)

    # -- Copying ------------------------------------------------------------

    def copy(self) -> PieceSet:
        return PieceSet(
            self.color, {kind: pieces.copy() for kind, pieces in self._slots.items()}
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PieceSet):
            return NotImplemented
        return self.color == other.color and self._slots == other._slots

    def __repr__(self) -> str:
        placed = ", ".join(
            f"{piece}@{square_name(*piece.coordinates)}" for piece in self.on_board()
        )
        return f"PieceSet({self.color.name}: {placed})"
