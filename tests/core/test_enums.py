"""Tests for core enums."""

from alpha_chess.core.enums import CastlingRights, Color


class TestColor:
    def test_opposite(self) -> None:
        assert Color.WHITE.opposite == Color.BLACK
        assert Color.BLACK.opposite == Color.WHITE

    def test_fen_char(self) -> None:
        assert Color.WHITE.fen_char == "w"
        assert Color.BLACK.fen_char == "b"

    def test_str(self) -> None:
        assert str(Color.BLACK) == "black"


class TestCastlingRights:
    def test_for_side(self) -> None:
        white_k = CastlingRights.for_side(Color.WHITE, kingside=True)
        black_q = CastlingRights.for_side(Color.BLACK, kingside=False)
        assert white_k == CastlingRights.WHITE_KINGSIDE
        assert black_q == CastlingRights.BLACK_QUEENSIDE

    def test_groups(self) -> None:
        both = CastlingRights.WHITE_BOTH | CastlingRights.BLACK_BOTH
        assert CastlingRights.ALL == both
        assert not (CastlingRights.WHITE_BOTH & CastlingRights.BLACK_BOTH)
