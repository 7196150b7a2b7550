"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from chessrules.chess.square import NUM_SQUARES
from chessrules.core.exceptions import InvalidBoardSizeError, InvalidPromotionError
from chessrules.core.models import ChessPiece, ChessSquare
from chessrules.core.shared_types import NON_PROMOTION_ROLES, Color, Role, Status


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    """No pieces: the standard starting position. Otherwise 64 squares, rank-major."""

    pieces: Optional[list[Optional[ChessPiece]]] = None
    active_color: Color = Color.WHITE

    @field_validator("pieces")
    @classmethod
    def validate_pieces(
        cls, value: Optional[list[Optional[ChessPiece]]]
    ) -> Optional[list[Optional[ChessPiece]]]:
        if value is not None and len(value) != NUM_SQUARES:
            raise InvalidBoardSizeError(
                f"A custom position must list exactly {NUM_SQUARES} squares, got {len(value)}."
            )
        return value


class LegalMovesRequest(BaseModel):
    square: ChessSquare


class MoveRequest(BaseModel):
    from_square: ChessSquare
    to_square: ChessSquare


class PromotionRequest(BaseModel):
    color: Color
    role: Role

    @field_validator("role")
    @classmethod
    def validate_role(cls, value: Role) -> Role:
        if value in NON_PROMOTION_ROLES:
            raise InvalidPromotionError(f"A pawn cannot be promoted to a {value}.")
        return value


# --- RESPONSE MODELS ---
class BoardResponse(BaseModel):
    pieces: list[Optional[ChessPiece]]
    active_color: Color
    promotions: dict[Color, Role]
    status: Status


class LegalMovesResponse(BaseModel):
    square: ChessSquare
    destinations: list[ChessSquare]


class MoveResponse(BaseModel):
    captured: Optional[ChessPiece]
    checkmated: Optional[Color]
    status: Status
    active_color: Color
