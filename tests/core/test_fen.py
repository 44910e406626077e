"""Tests for FEN decoding and encoding."""

import pytest

from alpha_chess.core.enums import CastlingRights, Color, PieceType
from alpha_chess.core.errors import FenError, MalformedFen, OutOfCapacity
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
from alpha_chess.core.types import E3, E4


class TestSplitFen:
    def test_starting_side(self) -> None:
        assert split_fen(STARTING_FEN).side_to_move == Color.WHITE

    def test_starting_castling(self) -> None:
        assert split_fen(STARTING_FEN).castling == CastlingRights.ALL

    def test_starting_en_passant(self) -> None:
        assert split_fen(STARTING_FEN).en_passant is None

    def test_starting_clocks(self) -> None:
        fields = split_fen(STARTING_FEN)
        assert fields.halfmove_clock == 0
        assert fields.fullmove_number == 1

    def test_en_passant_square(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        assert split_fen(fen).en_passant == E3

    def test_partial_castling(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w Kq - 0 1"
        assert split_fen(fen).castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )

    def test_no_castling(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"
        assert split_fen(fen).castling == CastlingRights.NONE

    @pytest.mark.parametrize(
        "fen",
        [
            "invalid",
            "8/8/8/8/8/8/8/8 w - - 0",
            "8/8/8/8/8/8/8/8 w - - 0 1 extra",
            "",
        ],
    )
    def test_wrong_field_count_raises(self, fen: str) -> None:
        with pytest.raises(MalformedFen, match="6 fields"):
            split_fen(fen)

    def test_invalid_side_to_move_raises(self) -> None:
        with pytest.raises(MalformedFen, match="side-to-move"):
            split_fen("8/8/8/8/8/8/8/8 x - - 0 1")

    def test_invalid_castling_field_raises(self) -> None:
        with pytest.raises(MalformedFen, match="castling"):
            split_fen("8/8/8/8/8/8/8/8 w Kx - 0 1")

    def test_duplicate_castling_right_raises(self) -> None:
        with pytest.raises(MalformedFen, match="castling"):
            split_fen("8/8/8/8/8/8/8/8 w KK - 0 1")

    def test_invalid_en_passant_for_side_raises(self) -> None:
        with pytest.raises(MalformedFen, match="en-passant"):
            split_fen("8/8/8/8/8/8/8/8 w - e3 0 1")

    def test_garbage_en_passant_raises(self) -> None:
        with pytest.raises(MalformedFen, match="en-passant"):
            split_fen("8/8/8/8/8/8/8/8 w - z9 0 1")

    def test_negative_halfmove_raises(self) -> None:
        with pytest.raises(MalformedFen, match="halfmove"):
            split_fen("8/8/8/8/8/8/8/8 w - - -1 1")

    def test_zero_fullmove_raises(self) -> None:
        with pytest.raises(MalformedFen, match="fullmove"):
            split_fen("8/8/8/8/8/8/8/8 w - - 0 0")

    def test_errors_are_value_errors(self) -> None:
        assert issubclass(MalformedFen, FenError)
        assert issubclass(OutOfCapacity, FenError)
        assert issubclass(FenError, ValueError)


class TestDecodePlacement:
    def test_starting_piece_count(self) -> None:
        pieces = decode_placement(split_fen(STARTING_FEN).placement)
        assert len(pieces) == 32

    def test_scan_order_starts_at_a8(self) -> None:
        pieces = decode_placement(split_fen(STARTING_FEN).placement)
        assert pieces[0] == Piece(PieceType.ROOK, Color.BLACK, 8, 1)
        assert pieces[-1] == Piece(PieceType.ROOK, Color.WHITE, 1, 8)

    def test_digits_skip_files(self) -> None:
        pieces = decode_placement("8/8/8/8/4P3/8/8/8")
        assert pieces == [Piece(PieceType.PAWN, Color.WHITE, *E4)]

    def test_empty_board(self) -> None:
        assert decode_placement("8/8/8/8/8/8/8/8") == []

    def test_too_few_ranks_raises(self) -> None:
        with pytest.raises(MalformedFen, match="8 ranks"):
            decode_placement("8/8/8/8/8/8/8")

    def test_too_many_ranks_raises(self) -> None:
        with pytest.raises(MalformedFen, match="8 ranks"):
            decode_placement("8/8/8/8/8/8/8/8/8")

    @pytest.mark.parametrize("placement", ["9/8/8/8/8/8/8/8", "0p7/8/8/8/8/8/8/8"])
    def test_bad_digit_raises(self, placement: str) -> None:
        with pytest.raises(MalformedFen, match="digit"):
            decode_placement(placement)

    @pytest.mark.parametrize(
        "placement",
        ["7/8/8/8/8/8/8/8", "44p/8/8/8/8/8/8/8", "ppppppppp/8/8/8/8/8/8/8"],
    )
    def test_bad_rank_width_raises(self, placement: str) -> None:
        with pytest.raises(FenError):
            decode_placement(placement)

    def test_short_rank_width_message(self) -> None:
        with pytest.raises(MalformedFen, match="rank width"):
            decode_placement("7/8/8/8/8/8/8/8")

    def test_invalid_character_raises(self) -> None:
        with pytest.raises(MalformedFen, match="piece character"):
            decode_placement("7x/8/8/8/8/8/8/8")

    def test_nine_pawns_out_of_capacity(self) -> None:
        with pytest.raises(OutOfCapacity, match="PAWN"):
            decode_placement("8/8/8/8/8/P7/PPPPPPPP/8")

    def test_two_kings_out_of_capacity(self) -> None:
        with pytest.raises(OutOfCapacity, match="KING"):
            decode_placement("k6k/8/8/8/8/8/8/8")

    def test_third_knight_out_of_capacity(self) -> None:
        with pytest.raises(OutOfCapacity):
            decode_placement("8/8/8/8/8/8/8/NNN5")

    def test_capacity_is_per_color(self) -> None:
        pieces = decode_placement("8/pppppppp/8/8/8/8/PPPPPPPP/8")
        assert len(pieces) == 16


class TestEncode:
    def test_roundtrip_starting(self) -> None:
        fields, pieces = decode_fen(STARTING_FEN)
        occupancy = {piece.coordinates: piece for piece in pieces}
        assert encode_placement(occupancy) == fields.placement
        assert format_fen(fields) == STARTING_FEN

    @pytest.mark.parametrize(
        "fen",
        [
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/8/4k3/8/8/4K3/8/8 w - - 0 1",
            "rnbqkbnr/pp1ppppp/8/2p5/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2",
        ],
    )
    def test_roundtrip(self, fen: str) -> None:
        fields, pieces = decode_fen(fen)
        occupancy = {piece.coordinates: piece for piece in pieces}
        rebuilt = format_fen(
            FenFields(
                encode_placement(occupancy),
                fields.side_to_move,
                fields.castling,
                fields.en_passant,
                fields.halfmove_clock,
                fields.fullmove_number,
            )
        )
        assert rebuilt == fen

    def test_empty_board(self) -> None:
        assert encode_placement({}) == "8/8/8/8/8/8/8/8"

    def test_empty_runs_flush_before_letters(self) -> None:
        occupancy = {
            (8, 2): Piece(PieceType.KING, Color.BLACK),
            (8, 8): Piece(PieceType.ROOK, Color.BLACK),
            (1, 1): Piece(PieceType.KING, Color.WHITE),
        }
        assert encode_placement(occupancy) == "1k5r/8/8/8/8/8/8/K7"

    def test_fields_str(self) -> None:
        assert str(split_fen(STARTING_FEN)) == STARTING_FEN

    def test_extra_whitespace_normalised(self) -> None:
        fen = "  8/8/4k3/8/8/4K3/8/8   w  -  -  0  1 "
        assert format_fen(split_fen(fen)) == "8/8/4k3/8/8/4K3/8/8 w - - 0 1"

    def test_castling_written_in_canonical_order(self) -> None:
        fields = split_fen("8/8/8/8/8/8/8/8 w qK - 0 1")
        assert format_fen(fields) == "8/8/8/8/8/8/8/8 w Kq - 0 1"
