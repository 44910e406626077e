"""Core domain layer - pure chess position logic with zero external dependencies.

Quick start::

    from alpha_chess.core import Position

    pos = Position()  # standard starting position
    pawn = pos.find_piece_by_coordinates(2, 5)
    pos.make_move(pawn, 4, 5)
    print(pos.get_fen())
"""

from alpha_chess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from alpha_chess.core.errors import FenError, MalformedFen, OutOfCapacity
from alpha_chess.core.move import Move
from alpha_chess.core.move_generator import MoveGenerator
from alpha_chess.core.notation import (
    STARTING_FEN,
    FenFields,
    decode_fen,
    decode_placement,
    encode_placement,
    format_fen,
    split_fen,
)
from alpha_chess.core.piece import Piece
from alpha_chess.core.piece_set import PIECE_CAPACITY, PieceSet
from alpha_chess.core.position import Position
from alpha_chess.core.types import (
    OFF_BOARD,
    Coordinates,
    is_on_board,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "MoveFlag",
    "PieceType",
    # Errors
    "FenError",
    "MalformedFen",
    "OutOfCapacity",
    # Types / helpers
    "Coordinates",
    "OFF_BOARD",
    "is_on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Move",
    "MoveGenerator",
    "PIECE_CAPACITY",
    "Piece",
    "PieceSet",
    "Position",
    # Notation
    "STARTING_FEN",
    "FenFields",
    "decode_fen",
    "decode_placement",
    "encode_placement",
    "format_fen",
    "split_fen",
]
