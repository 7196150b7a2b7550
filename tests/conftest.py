"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.

Positions are described the way you would write them down: {"e1": "K", "e8": "k"}.
Upper case: White units, lower case: Black units (same letters as in FEN).
"""

from typing import Callable, Optional

import pytest

from chessrules.chess.board import Board
from chessrules.chess.game import Position
from chessrules.core.config import Settings
from chessrules.core.models import ChessPiece
from chessrules.core.shared_types import Color, Role

Placements = dict[str, str]

CHAR_TO_ROLE: dict[str, Role] = {
    "k": Role.KING,
    "q": Role.QUEEN,
    "b": Role.BISHOP,
    "n": Role.KNIGHT,
    "r": Role.ROOK,
    "p": Role.PAWN,
}


def _pieces_from_placements(placements: Placements) -> list[Optional[ChessPiece]]:
    pieces: list[Optional[ChessPiece]] = [None] * 64
    for square_name, character in placements.items():
        file = ord(square_name[0]) - ord("a")
        rank = int(square_name[1]) - 1
        color = Color.WHITE if character.isupper() else Color.BLACK
        pieces[rank * 8 + file] = ChessPiece(
            color=color, role=CHAR_TO_ROLE[character.lower()]
        )
    return pieces


@pytest.fixture
def settings() -> Settings:
    """Defaults, independent of whatever environment the tests run in"""
    return Settings(default_promotion_role=Role.QUEEN, pawn_push_requires_empty=True)


@pytest.fixture
def pieces_from() -> Callable[[Placements], list[Optional[ChessPiece]]]:
    return _pieces_from_placements


@pytest.fixture
def board_from() -> Callable[[Placements], Board]:
    """Call the inner function with the placements of the units"""

    def _create_board(placements: Placements) -> Board:
        return Board.from_layout(
            [
                (piece.color, piece.role) if piece is not None else None
                for piece in _pieces_from_placements(placements)
            ]
        )

    return _create_board


@pytest.fixture
def position_from(settings: Settings) -> Callable[..., Position]:
    """Call the inner function with the placements, optionally the color to move and different settings"""

    def _create_position(
        placements: Placements,
        active_color: Color = Color.WHITE,
        settings: Settings = settings,
    ) -> Position:
        return Position.custom(
            _pieces_from_placements(placements),
            active_color=active_color,
            settings=settings,
        )

    return _create_position


@pytest.fixture
def standard_position(settings: Settings) -> Position:
    return Position.standard(settings)
