"""Defines the units (chess pieces) standing on the board, and where each color starts"""

from dataclasses import dataclass

from chessrules.chess.square import Square
from chessrules.core.models import ChessPiece
from chessrules.core.shared_types import Color, Direction, Role

# Back rank from the a-file to the h-file
STARTING_BACK_RANK: tuple[Role, ...] = (
    Role.ROOK,
    Role.KNIGHT,
    Role.BISHOP,
    Role.QUEEN,
    Role.KING,
    Role.BISHOP,
    Role.KNIGHT,
    Role.ROOK,
)

# Rank holding the king and rooks at the start. A pawn promotes on the opponent's home rank.
HOME_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}

# Pawns start here, and can advance two squares from here.
PAWN_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}

# White moves UP the board, Black moves DOWN.
FORWARD: dict[Color, Direction] = {Color.WHITE: Direction.UP, Color.BLACK: Direction.DOWN}

PAWN_CAPTURE_DIRECTIONS: dict[Color, tuple[Direction, Direction]] = {
    Color.WHITE: (Direction.UP_LEFT, Direction.UP_RIGHT),
    Color.BLACK: (Direction.DOWN_LEFT, Direction.DOWN_RIGHT),
}

# The rank a pawn of this color skips when advancing two squares. En passant flags get placed on this rank.
EN_PASSANT_RANK: dict[Color, int] = {Color.WHITE: 2, Color.BLACK: 5}


@dataclass
class Unit:
    color: Color
    role: Role
    file: int
    rank: int
    # castling and the two-square pawn advance are only allowed for units that never moved
    has_moved: bool = False

    @property
    def square(self) -> Square:
        return Square(self.file, self.rank)

    def to_piece(self) -> ChessPiece:
        """What the outside world gets to see: just the color and the role"""
        return ChessPiece(color=self.color, role=self.role)
