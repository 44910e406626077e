"""Notation package: FEN parsing and serialization."""

from alpha_chess.core.notation.fen import (
    FEN_FIELD_COUNT,
    STARTING_FEN,
    FenFields,
    castling_from_fen,
    castling_to_fen,
    decode_fen,
    decode_placement,
    encode_placement,
    format_fen,
    split_fen,
)

__all__ = [
    "FEN_FIELD_COUNT",
    "STARTING_FEN",
    "FenFields",
    "castling_from_fen",
    "castling_to_fen",
    "decode_fen",
    "decode_placement",
    "encode_placement",
    "format_fen",
    "split_fen",
]
