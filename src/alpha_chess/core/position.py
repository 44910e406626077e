"""Position - FEN text kept in step with per-side piece collections."""

from __future__ import annotations

import logging
from dataclasses import replace

from alpha_chess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from alpha_chess.core.move import Move
from alpha_chess.core.move_generator import (
    BACK_RANK,
    CASTLING_FILES,
    MoveGenerator,
)
from alpha_chess.core.notation.fen import (
    STARTING_FEN,
    FenFields,
    decode_fen,
    encode_placement,
    format_fen,
)
from alpha_chess.core.piece import Piece
from alpha_chess.core.piece_set import PieceSet
from alpha_chess.core.types import Coordinates

_LOGGER = logging.getLogger(__name__)

# Rook corners and the right lost when anything leaves or lands on them.
_ROOK_CORNERS: dict[Coordinates, CastlingRights] = {
    (1, 1): CastlingRights.WHITE_QUEENSIDE,
    (1, 8): CastlingRights.WHITE_KINGSIDE,
    (8, 1): CastlingRights.BLACK_QUEENSIDE,
    (8, 8): CastlingRights.BLACK_KINGSIDE,
}

# Rook (from, to) files when castling.
_CASTLING_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (CASTLING_FILES[True][0], 6),
    MoveFlag.CASTLE_QUEENSIDE: (CASTLING_FILES[False][0], 4),
}


class Position:
    """A board position held both as FEN text and as two piece collections.

    Every mutation goes through :meth:`resynchronize`, which re-derives all
    piece coordinates from FEN text, so the two views never drift apart.
    A position carries no locking; callers sharing one across threads must
    serialise access themselves.
    """

    __slots__ = ("_fen", "_fields", "_white", "_black", "_occupancy", "_history")

    def __init__(self, fen: str = "") -> None:
        self._white = PieceSet.standard(Color.WHITE)
        self._black = PieceSet.standard(Color.BLACK)
        fields, self._white, self._black, self._occupancy = self._derive(
            fen or STARTING_FEN
        )
        self._fields: FenFields = fields
        self._fen = format_fen(fields)
        self._history: list[Move] = []

    # ── FEN access ───────────────────────────────────────────────────────

    @property
    def fen(self) -> str:
        return self._fen

    def get_fen(self) -> str:
        return self._fen

    def set_fen(self, fen: str) -> None:
        """Replace the position with *fen* and forget the move history.

        Raises :class:`~alpha_chess.core.errors.MalformedFen` or
        :class:`~alpha_chess.core.errors.OutOfCapacity`; the current state is
        kept on failure.
        """
        self.resynchronize(fen)
        self._history.clear()

    def resynchronize(self, fen: str) -> None:
        """Re-derive every piece's coordinates from *fen* and adopt it.

        Slots keep their identity: a piece whose square is unchanged keeps it,
        moved pieces take the squares left over, and slots with nothing left
        to take are flagged captured. Decoding happens before any state is
        touched. The stored text is re-encoded from the pieces, so equivalent
        spellings of a placement (``44`` for ``8``) come out canonical.
        """
        fields, white, black, occupancy = self._derive(fen)
        self._fields = fields
        self._fen = format_fen(fields)
        self._white = white
        self._black = black
        self._occupancy = occupancy
        _LOGGER.debug("Resynchronized position to %s", self._fen)

    def _derive(
        self, fen: str
    ) -> tuple[FenFields, PieceSet, PieceSet, dict[Coordinates, Piece]]:
        fields, placed = decode_fen(fen)
        white = self._white.reassign(p for p in placed if p.color == Color.WHITE)
        black = self._black.reassign(p for p in placed if p.color == Color.BLACK)

        occupancy: dict[Coordinates, Piece] = {}
        for piece_set in (white, black):
            for piece in piece_set.on_board():
                occupancy[piece.coordinates] = piece
        fields = replace(fields, placement=encode_placement(occupancy))
        return fields, white, black, occupancy

    # ── Decoded fields ───────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self._fields.side_to_move

    @property
    def castling(self) -> CastlingRights:
        return self._fields.castling

    @property
    def en_passant(self) -> Coordinates | None:
        return self._fields.en_passant

    @property
    def halfmove_clock(self) -> int:
        return self._fields.halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self._fields.fullmove_number

    @property
    def history(self) -> tuple[Move, ...]:
        """Moves applied since the last :meth:`set_fen`."""
        return tuple(self._history)

    # ── Piece access ─────────────────────────────────────────────────────

    def get_white_pieces(self) -> list[Piece]:
        return list(self._white)

    def get_black_pieces(self) -> list[Piece]:
        return list(self._black)

    def pieces(self, color: Color) -> list[Piece]:
        """All slots of *color*, captured ones included, in kind order."""
        return list(self._white if color == Color.WHITE else self._black)

    def pieces_by_kind(self, color: Color) -> list[list[Piece]]:
        """Slots of *color* grouped per :class:`PieceType` (pawns first)."""
        piece_set = self._white if color == Color.WHITE else self._black
        return piece_set.grouped()

    def find_piece_by_coordinates(self, rank: int, file: int) -> Piece | None:
        return self._occupancy.get((rank, file))

    def get_valid_moves(self, piece: Piece) -> list[Coordinates]:
        """Destinations for *piece*; empty unless it still stands where it claims."""
        current = self._resolve(piece)
        if current is None:
            return []
        return MoveGenerator(self).valid_moves(current)

    def _resolve(self, piece: Piece) -> Piece | None:
        current = self._occupancy.get(piece.coordinates)
        if current is None or (current.kind, current.color) != (piece.kind, piece.color):
            return None
        return current

    # ── Move application ─────────────────────────────────────────────────

    def make_move(self, piece: Piece, target_rank: int, target_file: int) -> bool:
        """Move *piece* to the target square; ``False`` leaves the position as is.

        The move is rejected when *piece* is not the side to move, is not
        standing where it claims to be, or cannot reach the target.
        """
        state = self._fields
        target = (target_rank, target_file)

        if piece.color != state.side_to_move:
            _LOGGER.debug(
                "Rejected %s to %s: %s to move", piece, target, state.side_to_move
            )
            return False

        current = self._resolve(piece)
        if current is None:
            _LOGGER.debug(
                "Rejected %s to %s: not on %s", piece, target, piece.coordinates
            )
            return False

        generator = MoveGenerator(self)
        if target not in generator.valid_moves(current):
            _LOGGER.debug("Rejected %s to %s: unreachable", piece, target)
            return False

        move = generator.build_move(current, target)
        occupancy = dict(self._occupancy)
        del occupancy[current.coordinates]
        occupancy[target] = current

        if move.is_castling:
            rook_from, rook_to = _CASTLING_ROOK_FILES[move.flag]
            rank = BACK_RANK[current.color]
            occupancy[(rank, rook_to)] = occupancy.pop((rank, rook_from))

        next_en_passant: Coordinates | None = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            next_en_passant = ((current.rank + target_rank) // 2, current.file)

        if current.kind == PieceType.PAWN or move.is_capture:
            halfmove_clock = 0
        else:
            halfmove_clock = state.halfmove_clock + 1

        fullmove_number = state.fullmove_number
        if current.color == Color.BLACK:
            fullmove_number += 1

        fields = replace(
            state,
            placement=encode_placement(occupancy),
            side_to_move=state.side_to_move.opposite,
            castling=self._castling_after(move),
            en_passant=next_en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )
        self.resynchronize(format_fen(fields))
        self._history.append(move)
        return True

    def _castling_after(self, move: Move) -> CastlingRights:
        castling = self.castling
        if move.piece.kind == PieceType.KING:
            castling &= ~(
                CastlingRights.WHITE_BOTH
                if move.piece.color == Color.WHITE
                else CastlingRights.BLACK_BOTH
            )
        for sq in (move.from_sq, move.to_sq):
            if sq in _ROOK_CORNERS:
                castling &= ~_ROOK_CORNERS[sq]
        return castling

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy, history included."""
        pos = Position.__new__(Position)
        pos._fen = self._fen
        pos._fields = self._fields
        pos._white = self._white.copy()
        pos._black = self._black.copy()
        pos._occupancy = self._occupancy.copy()
        pos._history = self._history.copy()
        return pos

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8, 0, -1):
            row = []
            for file in range(1, 9):
                p = self.find_piece_by_coordinates(rank, file)
                row.append(str(p) if p else ".")
            rows.append(f"{rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
