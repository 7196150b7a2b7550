"""The Game board: the 64 cells, and the rules that change what stands on them"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Optional, Self, Sequence

from chessrules.chess.castling import CastlingSide, castling_squares
from chessrules.chess.moves import Move
from chessrules.chess.pieces import (
    EN_PASSANT_RANK,
    HOME_RANK,
    PAWN_RANK,
    STARTING_BACK_RANK,
    Unit,
)
from chessrules.chess.square import BOARD_DIMENSIONS, NUM_SQUARES, Cell, Square
from chessrules.core.exceptions import CastlingError, InvalidBoardSizeError
from chessrules.core.shared_types import Color, Role

# What the board looks like to the outside: per square, the color and role of the unit on it (if any)
PieceLayout = Sequence[Optional[tuple[Color, Role]]]


def starting_layout() -> list[Optional[tuple[Color, Role]]]:
    """The standard starting position, rank-major (a1, b1, ..., h1, a2, ..., h8)"""
    layout: list[Optional[tuple[Color, Role]]] = []
    for rank in range(BOARD_DIMENSIONS[1]):
        for file in range(BOARD_DIMENSIONS[0]):
            if rank in HOME_RANK.values():
                color = Color.WHITE if rank == HOME_RANK[Color.WHITE] else Color.BLACK
                layout.append((color, STARTING_BACK_RANK[file]))
            elif rank in PAWN_RANK.values():
                color = Color.WHITE if rank == PAWN_RANK[Color.WHITE] else Color.BLACK
                layout.append((color, Role.PAWN))
            else:
                layout.append(None)
    return layout


@dataclass
class Board:
    cells: list[Cell]

    @classmethod
    def standard(cls) -> Self:
        return cls.from_layout(starting_layout())

    @classmethod
    def from_layout(cls, layout: PieceLayout) -> Self:
        """
        Construct a board from 64 optional (color, role) pairs.

        The list is rank-major: index = rank * 8 + file. All units start out as never having moved.
        """
        if len(layout) != NUM_SQUARES:
            raise InvalidBoardSizeError(
                f"A board needs exactly {NUM_SQUARES} squares, got {len(layout)}."
            )

        cells: list[Cell] = []
        for index, entry in enumerate(layout):
            square = Square.from_index(index)
            cell = Cell(square.file, square.rank)
            if entry is not None:
                color, role = entry
                cell.set_unit(Unit(color, role, square.file, square.rank))
            cells.append(cell)
        return cls(cells)

    def to_layout(self) -> list[Optional[tuple[Color, Role]]]:
        """reverse operation of `from_layout()`"""
        return [
            (cell.unit.color, cell.unit.role) if cell.unit is not None else None
            for cell in self.cells
        ]

    def copy(self) -> Self:
        """Scratch copy to try out moves on. Nothing done to the copy leaks back into this board."""
        return deepcopy(self)

    # --- LOOKUPS ---
    def cell(self, square: Square) -> Cell:
        return self.cells[square.index]

    def unit(self, square: Square) -> Optional[Unit]:
        return self.cell(square).unit

    def units(self, color: Optional[Color] = None) -> list[Unit]:
        """All units on the board, or only those of one color"""
        return [
            cell.unit
            for cell in self.cells
            if cell.unit is not None and (color is None or cell.unit.color == color)
        ]

    def locate_king(self, color: Color) -> Optional[Square]:
        """Exactly one king per color is expected, but a custom position might have none"""
        return next(
            (unit.square for unit in self.units(color) if unit.role == Role.KING),
            None,
        )

    def en_passant_file(self, rank: int) -> Optional[int]:
        """
        The file of the pawn that just advanced two squares, derived from the flags it left on the rank it skipped.

        The flags sit diagonally next to the pawn: two of them, or a single one when the pawn is on the edge of the board.
        """
        flagged = [
            file
            for file in range(BOARD_DIMENSIONS[0])
            if self.cell(Square(file, rank)).en_passant
        ]
        if len(flagged) == 2 and flagged[1] - flagged[0] == 2:
            return flagged[0] + 1
        if flagged == [1]:
            return 0
        if flagged == [BOARD_DIMENSIONS[0] - 2]:
            return BOARD_DIMENSIONS[0] - 1
        return None

    # --- UPDATES ---
    def place_unit(self, unit: Unit, square: Square) -> Optional[Unit]:
        """Returns the unit that got replaced"""
        return self.cell(square).set_unit(unit)

    def remove_unit(self, square: Square) -> Optional[Unit]:
        return self.cell(square).set_unit(None)

    def move_unit(self, from_square: Square, to_square: Square) -> Optional[Unit]:
        """Relocate a unit. Returns the unit standing on the target square before (if any)."""
        unit = self.remove_unit(from_square)
        assert unit is not None, f"No unit on {from_square.to_algebraic()} to move."
        unit.has_moved = True
        return self.place_unit(unit, to_square)

    def promote_unit(self, square: Square, role: Role) -> None:
        """Swap the pawn on the square for a new unit of the given role"""
        pawn = self.unit(square)
        assert pawn is not None and pawn.role == Role.PAWN
        self.place_unit(
            Unit(pawn.color, role, square.file, square.rank, has_moved=True), square
        )

    def apply_move(self, move: Move) -> Optional[Unit]:
        """
        Update the board with the move, including all of its side effects
        ---

        1. clear the en passant flags the mover could have used (left behind by the opponent's last move)
        2. castling: move the rook as well
        3. move the unit, taking whatever stood on the target square
        4. en passant: take the pawn that got jumped past instead (it is not on the target square)
        5. two-square pawn advance: flag the cells next to the skipped square

        Returns the captured unit, if any.
        """
        unit = self.unit(move.from_square)
        assert unit is not None, f"No unit on {move.from_square.to_algebraic()} to move."
        color = unit.color

        self.clear_en_passant_flags(EN_PASSANT_RANK[color.opponent])

        if move.castling_side is not None:
            self._move_castling_rook(move.castling_side, color)

        captured = self.move_unit(move.from_square, move.to_square)

        if move.is_en_passant:
            # the pawn taken stands in the target's file, on the rank the moving pawn came from
            captured = self.remove_unit(
                Square(move.to_square.file, move.from_square.rank)
            )

        if move.is_double_push:
            self._flag_en_passant(move.to_square, color)

        return captured

    def clear_en_passant_flags(self, rank: int) -> None:
        for file in range(BOARD_DIMENSIONS[0]):
            self.cell(Square(file, rank)).en_passant = False

    def _flag_en_passant(self, pawn_square: Square, color: Color) -> None:
        """Flag the cells diagonally adjacent to the pawn's new square, on the rank it skipped"""
        rank = EN_PASSANT_RANK[color]
        for df in [-1, 1]:
            square = Square(pawn_square.file + df, rank)
            if square.is_within_bounds():
                self.cell(square).en_passant = True

    def _move_castling_rook(self, side: CastlingSide, color: Color) -> None:
        squares = castling_squares(side, color)
        rook = self.unit(squares.rook_from)
        if rook is None or rook.role != Role.ROOK or rook.color != color:
            raise CastlingError(
                f"No {color} rook on {squares.rook_from.to_algebraic()} to castle with."
            )
        if self.unit(squares.rook_to) is not None:
            raise CastlingError(
                f"Rook cannot land on {squares.rook_to.to_algebraic()}: square is occupied."
            )
        self.move_unit(squares.rook_from, squares.rook_to)
