"""
Type definitions used across layers
"""

from enum import Enum, StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    CHECK = "check"
    CHECKMATE = "checkmate"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.WHITE if self == Color.BLACK else Color.BLACK


class Role(StrEnum):
    KING = "king"
    QUEEN = "queen"
    BISHOP = "bishop"
    KNIGHT = "knight"
    ROOK = "rook"
    PAWN = "pawn"


# A pawn can never turn into one of these
NON_PROMOTION_ROLES: tuple[Role, ...] = (Role.KING, Role.PAWN)


class Direction(Enum):
    """The 8 compass directions. Values are (file delta, rank delta); White plays UP the board."""

    UP = (0, 1)
    UP_RIGHT = (1, 1)
    RIGHT = (1, 0)
    DOWN_RIGHT = (1, -1)
    DOWN = (0, -1)
    DOWN_LEFT = (-1, -1)
    LEFT = (-1, 0)
    UP_LEFT = (-1, 1)

    @property
    def df(self) -> int:
        return self.value[0]

    @property
    def dr(self) -> int:
        return self.value[1]
