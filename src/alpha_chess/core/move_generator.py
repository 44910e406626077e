"""Pseudo-legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from alpha_chess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from alpha_chess.core.move import Move
from alpha_chess.core.piece import Piece
from alpha_chess.core.types import Coordinates, is_on_board

if TYPE_CHECKING:
    from alpha_chess.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

PAWN_HOME_RANK: dict[Color, int] = {Color.WHITE: 2, Color.BLACK: 7}
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
BACK_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 8}

KING_HOME_FILE = 5
# kingside -> (rook file, king destination file, files that must be empty)
CASTLING_FILES: dict[bool, tuple[int, int, tuple[int, ...]]] = {
    True: (8, 7, (6, 7)),
    False: (1, 3, (2, 3, 4)),
}

_ALL_SQUARES: tuple[Coordinates, ...] = tuple(
    (rank, file) for rank in range(1, 9) for file in range(1, 9)
)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Coordinates, tuple[Coordinates, ...]]:
    targets: dict[Coordinates, tuple[Coordinates, ...]] = {}
    for rank, file in _ALL_SQUARES:
        targets[(rank, file)] = tuple(
            (rank + dr, file + df)
            for dr, df in offsets
            if is_on_board(rank + dr, file + df)
        )
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Coordinates, tuple[tuple[Coordinates, ...], ...]]:
    rays_per_square: dict[Coordinates, tuple[tuple[Coordinates, ...], ...]] = {}
    for rank, file in _ALL_SQUARES:
        square_rays: list[tuple[Coordinates, ...]] = []
        for dr, df in directions:
            ar = rank + dr
            af = file + df
            ray: list[Coordinates] = []
            while is_on_board(ar, af):
                ray.append((ar, af))
                ar += dr
                af += df
            square_rays.append(tuple(ray))
        rays_per_square[(rank, file)] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)


class MoveGenerator:
    """Generates pseudo-legal destinations for pieces of a :class:`Position`.

    Moves obey each piece's geometry and square occupancy only. Nothing checks
    whether the mover's own king is left attacked. The position is never
    mutated.
    """

    __slots__ = ("_pos",)

    def __init__(self, position: Position) -> None:
        self._pos = position

    # -- Public API ---------------------------------------------------------

    def valid_moves(self, piece: Piece) -> list[Coordinates]:
        """Destinations available to *piece*; empty when it is off the board."""
        if not piece.on_board:
            return []

        moves: list[Coordinates] = []
        sq = piece.coordinates
        kind = piece.kind
        if kind == PieceType.PAWN:
            self._gen_pawn(piece, moves)
        elif kind == PieceType.KNIGHT:
            self._gen_steps(piece, _KNIGHT_TARGETS[sq], moves)
        elif kind == PieceType.BISHOP:
            self._gen_sliding(piece, _BISHOP_RAYS[sq], moves)
        elif kind == PieceType.ROOK:
            self._gen_sliding(piece, _ROOK_RAYS[sq], moves)
        elif kind == PieceType.QUEEN:
            self._gen_sliding(piece, _QUEEN_RAYS[sq], moves)
        else:
            self._gen_steps(piece, _KING_TARGETS[sq], moves)
            self._gen_castling(piece, moves)
        return moves

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """Every candidate move for the side to move."""
        color = self._pos.side_to_move
        return [
            self.build_move(piece, target)
            for piece in self._pos.pieces(color)
            for target in self.valid_moves(piece)
        ]

    def build_move(self, piece: Piece, target: Coordinates) -> Move:
        """Classify *piece* going to *target* (no legality check)."""
        flag = MoveFlag.NORMAL
        if piece.kind == PieceType.PAWN and abs(target[0] - piece.rank) == 2:
            flag = MoveFlag.DOUBLE_PAWN
        elif piece.kind == PieceType.KING and abs(target[1] - piece.file) == 2:
            flag = (
                MoveFlag.CASTLE_KINGSIDE
                if target[1] > piece.file
                else MoveFlag.CASTLE_QUEENSIDE
            )
        return Move(piece, target, flag, self._pos.find_piece_by_coordinates(*target))

    def can_castle(self, color: Color, kingside: bool) -> bool:
        """Whether *color* may castle on the given wing.

        The FEN castling field must still grant the right, king and rook must
        stand on their original squares, and every square between them must be
        empty. Attacked squares are not considered.
        """
        if not self._pos.castling & CastlingRights.for_side(color, kingside):
            return False

        pos = self._pos
        rank = BACK_RANK[color]
        rook_file, _, between = CASTLING_FILES[kingside]

        king = pos.find_piece_by_coordinates(rank, KING_HOME_FILE)
        if king is None or king.kind != PieceType.KING or king.color != color:
            return False
        rook = pos.find_piece_by_coordinates(rank, rook_file)
        if rook is None or rook.kind != PieceType.ROOK or rook.color != color:
            return False
        return all(pos.find_piece_by_coordinates(rank, f) is None for f in between)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, piece: Piece, moves: list[Coordinates]) -> None:
        occupant = self._pos.find_piece_by_coordinates
        step = PAWN_DIRECTION[piece.color]
        rank = piece.rank + step

        if not 1 <= rank <= 8:
            return

        one_step = (rank, piece.file)
        if occupant(*one_step) is None:
            moves.append(one_step)
            if piece.rank == PAWN_HOME_RANK[piece.color]:
                two_step = (rank + step, piece.file)
                if occupant(*two_step) is None:
                    moves.append(two_step)

        for file in (piece.file - 1, piece.file + 1):
            if not 1 <= file <= 8:
                continue
            target = occupant(rank, file)
            if target is not None and target.color != piece.color:
                moves.append((rank, file))

    def _gen_steps(
        self,
        piece: Piece,
        targets: tuple[Coordinates, ...],
        moves: list[Coordinates],
    ) -> None:
        occupant = self._pos.find_piece_by_coordinates
        for to_sq in targets:
            target = occupant(*to_sq)
            if target is None or target.color != piece.color:
                moves.append(to_sq)

    def _gen_sliding(
        self,
        piece: Piece,
        rays: tuple[tuple[Coordinates, ...], ...],
        moves: list[Coordinates],
    ) -> None:
        occupant = self._pos.find_piece_by_coordinates
        for ray in rays:
            for to_sq in ray:
                target = occupant(*to_sq)
                if target is None:
                    moves.append(to_sq)
                    continue
                if target.color != piece.color:
                    moves.append(to_sq)
                break

    def _gen_castling(self, king: Piece, moves: list[Coordinates]) -> None:
        if king.coordinates != (BACK_RANK[king.color], KING_HOME_FILE):
            return
        for kingside in (True, False):
            if self.can_castle(king.color, kingside):
                moves.append((king.rank, CASTLING_FILES[kingside][1]))
