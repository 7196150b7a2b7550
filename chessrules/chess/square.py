"""
A square on the board, and the cell standing on it.

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

from chessrules.core.shared_types import Direction

if TYPE_CHECKING:
    from chessrules.chess.pieces import Unit

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)
NUM_SQUARES = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]


@dataclass(frozen=True)
class Square:
    """Zero-based coordinates: a1 is (0, 0), h8 is (7, 7)."""

    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        file = ord(sq[0]) - ord("a")
        rank = int(sq[1]) - 1
        return cls(file, rank)

    @classmethod
    def from_index(cls, index: int) -> Square:
        assert 0 <= index < NUM_SQUARES, f"Board index {index} out of range."
        return cls(index % BOARD_DIMENSIONS[0], index // BOARD_DIMENSIONS[0])

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    @property
    def index(self) -> int:
        """Position in the rank-major list of cells"""
        assert self.is_within_bounds(), f"{self} is not on the board."
        return self.rank * BOARD_DIMENSIONS[0] + self.file

    def shift(self, direction: Direction) -> Square:
        """Neighbor in the given direction. Might be off the board: check with `is_within_bounds()`"""
        return Square(self.file + direction.df, self.rank + direction.dr)


@dataclass
class Cell:
    """
    One of the 64 cells of the board.

    The en passant flag marks the cells diagonally next to a pawn that just advanced two squares (on the rank it
    skipped). Only lives for a single turn.
    """

    file: int
    rank: int
    unit: Optional[Unit] = None
    en_passant: bool = False

    @property
    def square(self) -> Square:
        return Square(self.file, self.rank)

    def is_empty(self) -> bool:
        return self.unit is None

    def set_unit(self, unit: Optional[Unit]) -> Optional[Unit]:
        """Put a unit on this cell (or clear it with None). Returns whatever was standing here before."""
        previous = self.unit
        self.unit = unit
        if unit is not None:
            # the unit's cached coordinates always follow the cell holding it
            unit.file = self.file
            unit.rank = self.rank
        return previous


class CellLookup(Protocol):
    """Just the part of the board the geometry needs"""

    def cell(self, square: Square) -> Cell: ...


def step(cell: Cell, direction: Direction, board: CellLookup) -> Optional[Cell]:
    """
    Geometry primitive: the neighboring cell in the given compass direction.
    ---

    Returns None when the step falls off the board. Every other movement rule is built from (repeated) calls to this one.
    """
    target = cell.square.shift(direction)
    if not target.is_within_bounds():
        return None
    return board.cell(target)
