"""
Boundary layer data model(s).

These are the only objects a caller (GUI, CLI, network layer, ...) exchanges with the engine.
They carry no game logic: the board keeps its own internal representation (see chessrules/chess).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from chessrules.chess.square import BOARD_DIMENSIONS
from chessrules.core.exceptions import InvalidSquareError
from chessrules.core.shared_types import Color, Role, Status


class ChessSquare(BaseModel):
    """Zero-based file/rank pair. Anything outside the board is rejected on construction (not clamped)."""

    model_config = ConfigDict(frozen=True)

    file: int
    rank: int

    @field_validator("file", "rank")
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not 0 <= value < BOARD_DIMENSIONS[0]:
            raise InvalidSquareError(
                f"Coordinate {value} is off the board. Must lie in [0, {BOARD_DIMENSIONS[0]})."
            )
        return value

    @classmethod
    def from_algebraic(cls, sq: str) -> ChessSquare:
        """'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(sq) < 2 or not (sq[1:].isascii() and sq[1:].isdigit()):
            raise InvalidSquareError(f"'{sq}' is not a square in algebraic notation.")
        return cls(file=ord(sq[0]) - ord("a"), rank=int(sq[1:]) - 1)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{self.rank + 1}"


class ChessPiece(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: Color
    role: Role


@dataclass(frozen=True)
class MoveOutcome:
    """
    Result of an accepted move.

    Capturing a unit and delivering checkmate are reported separately: a single move can do both.
    """

    captured: Optional[ChessPiece]
    checkmated: Optional[Color]
    status: Status

    @property
    def is_checkmate(self) -> bool:
        return self.checkmated is not None
