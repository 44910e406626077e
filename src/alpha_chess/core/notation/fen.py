"""FEN parsing and serialization."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field

from alpha_chess.core.enums import CastlingRights, Color, PieceType
from alpha_chess.core.errors import MalformedFen, OutOfCapacity
from alpha_chess.core.piece import Piece
from alpha_chess.core.piece_set import PieceSet
from alpha_chess.core.types import Coordinates, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
FEN_FIELD_COUNT = 6

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


@dataclass(frozen=True, slots=True)
class FenFields:
    """The six FEN fields, decoded except for the piece placement."""

    placement: str
    side_to_move: Color
    castling: CastlingRights
    en_passant: Coordinates | None
    halfmove_clock: int
    fullmove_number: int

    def __str__(self) -> str:
        return format_fen(self)


@dataclass(slots=True)
class _ScanState:
    """Cursor and per-piece counters threaded through the placement scan."""

    rank: int = 8
    file: int = 0
    counts: Counter[tuple[Color, PieceType]] = field(default_factory=Counter)


# ── Decoding ────────────────────────────────────────────────────────────────


def split_fen(fen: str) -> FenFields:
    """Split *fen* into its six fields and validate all but the placement."""
    parts = fen.split()
    if len(parts) != FEN_FIELD_COUNT:
        raise MalformedFen(f"Invalid FEN (need {FEN_FIELD_COUNT} fields): {fen!r}")

    placement, side_part, castling_part, ep_part, halfmove_part, fullmove_part = parts

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise MalformedFen(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = castling_from_fen(castling_part)

    # 4. En passant
    ep: Coordinates | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise MalformedFen(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_rank = 6 if side == Color.WHITE else 3
        if ep[0] != expected_rank:
            raise MalformedFen(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5–6. Clocks
    if not halfmove_part.isdecimal():
        raise MalformedFen(f"Invalid FEN halfmove clock: {halfmove_part!r}")
    if not fullmove_part.isdecimal() or int(fullmove_part) < 1:
        raise MalformedFen(f"Invalid FEN fullmove number: {fullmove_part!r}")

    return FenFields(
        placement, side, castling, ep, int(halfmove_part), int(fullmove_part)
    )


def castling_from_fen(text: str) -> CastlingRights:
    """Parse the castling field, e.g. 'Kq'."""
    castling = CastlingRights.NONE
    if text == "-":
        return castling
    rights = dict(_CASTLING_CHARS)
    seen: set[str] = set()
    for ch in text:
        right = rights.get(ch)
        if right is None or ch in seen:
            raise MalformedFen(f"Invalid FEN castling field: {text!r}")
        seen.add(ch)
        castling |= right
    return castling


def decode_placement(placement: str) -> list[Piece]:
    """Decode the placement field into pieces, in scan order (a8 … h1).

    The returned pieces carry coordinates but no slot assignment.
    """
    state = _ScanState()
    pieces: list[Piece] = []

    for ch in placement:
        if ch == "/":
            _close_rank(state, placement)
            if state.rank == 1:
                raise MalformedFen(
                    f"Invalid FEN board (must contain 8 ranks): {placement!r}"
                )
            state.rank -= 1
            state.file = 0
        elif ch in "0123456789":
            step = int(ch)
            if not (1 <= step <= 8):
                raise MalformedFen(f"Invalid FEN digit {ch!r}: {placement!r}")
            state.file += step
        else:
            try:
                piece = Piece.from_char(ch)
            except ValueError:
                raise MalformedFen(
                    f"Invalid FEN piece character {ch!r}: {placement!r}"
                ) from None
            state.file += 1
            key = (piece.color, piece.kind)
            state.counts[key] += 1
            if state.counts[key] > PieceSet.capacity(piece.kind):
                raise OutOfCapacity(
                    f"Too many {piece.color.name} {piece.kind.name} pieces "
                    f"(at most {PieceSet.capacity(piece.kind)}): {placement!r}"
                )
            pieces.append(piece.moved_to(state.rank, state.file))
        if state.file > 8:
            raise MalformedFen(f"Invalid FEN rank width: {placement!r}")

    _close_rank(state, placement)
    if state.rank != 1:
        raise MalformedFen(f"Invalid FEN board (must contain 8 ranks): {placement!r}")
    return pieces


def _close_rank(state: _ScanState, placement: str) -> None:
    if state.file != 8:
        raise MalformedFen(f"Invalid FEN rank width: {placement!r}")


def decode_fen(fen: str) -> tuple[FenFields, list[Piece]]:
    """Fully decode *fen*; nothing is returned unless every field is valid."""
    fields = split_fen(fen)
    return fields, decode_placement(fields.placement)


# ── Encoding ────────────────────────────────────────────────────────────────


def encode_placement(occupancy: Mapping[Coordinates, Piece]) -> str:
    """Encode the occupied squares of *occupancy* as a FEN placement field."""
    rows: list[str] = []
    for rank in range(8, 0, -1):
        empty = 0
        row = ""
        for file in range(1, 9):
            piece = occupancy.get((rank, file))
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def castling_to_fen(castling: CastlingRights) -> str:
    text = "".join(ch for ch, right in _CASTLING_CHARS if castling & right)
    return text or "-"


def format_fen(fields: FenFields) -> str:
    """Join decoded fields back into FEN text."""
    ep_str = square_name(*fields.en_passant) if fields.en_passant is not None else "-"
    return (
        f"{fields.placement} {fields.side_to_move.fen_char} "
        f"{castling_to_fen(fields.castling)} {ep_str} "
        f"{fields.halfmove_clock} {fields.fullmove_number}"
    )
