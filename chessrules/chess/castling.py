"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum

from chessrules.chess.pieces import HOME_RANK
from chessrules.chess.square import Square
from chessrules.core.shared_types import Color


class CastlingSide(Enum):
    QUEEN_SIDE = "queen side"
    KING_SIDE = "king side"


@dataclass(frozen=True)
class CastlingFiles:
    """
    Store the files where king/rook start from/end up in by castling.
    The rank is always the home rank of the color castling.
    """

    king_from: int
    king_to: int
    rook_from: int
    rook_to: int


@dataclass(frozen=True)
class CastlingSquares:
    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @property
    def passes_through(self) -> Square:
        """The square the king crosses on its way. It is the one the rook lands on."""
        return self.rook_to

    @property
    def between(self) -> list[Square]:
        """Squares between king and rook: all of them must be empty"""
        return squares_between_on_rank(self.king_from, self.rook_from)


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingSide, CastlingFiles] = {
    CastlingSide.QUEEN_SIDE: CastlingFiles(king_from=4, king_to=2, rook_from=0, rook_to=3),
    CastlingSide.KING_SIDE: CastlingFiles(king_from=4, king_to=6, rook_from=7, rook_to=5),
}


def castling_squares(side: CastlingSide, color: Color) -> CastlingSquares:
    files = CASTLING_RULES[side]
    rank = HOME_RANK[color]
    return CastlingSquares(
        king_from=Square(files.king_from, rank),
        king_to=Square(files.king_to, rank),
        rook_from=Square(files.rook_from, rank),
        rook_to=Square(files.rook_to, rank),
    )


def squares_between_on_rank(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares in between the two squares specified that are on the same rank

    Needed for checking if you can still castle (the Board will check which of those are empty etc.)
    """
    # both squares come from CASTLING_RULES, so this can only fail on a programming error
    assert from_square.rank == to_square.rank, (
        f"squares_between_on_rank requires both squares to lie on the same rank. \n from: {from_square}\n to:{to_square}"
    )
    df = 1 if to_square.file > from_square.file else -1
    return [
        Square(file, from_square.rank)
        for file in range(from_square.file + df, to_square.file, df)
    ]
