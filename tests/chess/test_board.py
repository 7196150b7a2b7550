"""Unit tests for /chessrules/chess/board.py"""

from typing import Callable

import pytest

from chessrules.chess.board import Board, starting_layout
from chessrules.chess.castling import CastlingSide
from chessrules.chess.moves import Move
from chessrules.chess.square import Square
from chessrules.core.exceptions import CastlingError, InvalidBoardSizeError
from chessrules.core.shared_types import Color, Role

BoardFactory = Callable[[dict[str, str]], Board]


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


# --- CONSTRUCTION ---
def test_standard_board_back_ranks() -> None:
    board = Board.standard()
    back_rank = [
        Role.ROOK,
        Role.KNIGHT,
        Role.BISHOP,
        Role.QUEEN,
        Role.KING,
        Role.BISHOP,
        Role.KNIGHT,
        Role.ROOK,
    ]
    for file, role in enumerate(back_rank):
        white = board.unit(Square(file, 0))
        black = board.unit(Square(file, 7))
        assert white is not None and (white.color, white.role) == (Color.WHITE, role)
        assert black is not None and (black.color, black.role) == (Color.BLACK, role)


def test_standard_board_pawns_and_empty_middle() -> None:
    board = Board.standard()
    for file in range(8):
        white_pawn = board.unit(Square(file, 1))
        black_pawn = board.unit(Square(file, 6))
        assert white_pawn is not None and (white_pawn.color, white_pawn.role) == (Color.WHITE, Role.PAWN)
        assert black_pawn is not None and (black_pawn.color, black_pawn.role) == (Color.BLACK, Role.PAWN)
        for rank in range(2, 6):
            assert board.unit(Square(file, rank)) is None


def test_units_know_where_they_stand() -> None:
    board = Board.standard()
    for cell in board.cells:
        if cell.unit is not None:
            assert (cell.unit.file, cell.unit.rank) == (cell.file, cell.rank)
            assert not cell.unit.has_moved


def test_layout_round_trip() -> None:
    layout = starting_layout()
    assert Board.from_layout(layout).to_layout() == layout


@pytest.mark.parametrize("size", [0, 63, 65])
def test_wrong_board_size(size: int) -> None:
    with pytest.raises(InvalidBoardSizeError):
        Board.from_layout([None] * size)


def test_copy_is_independent() -> None:
    board = Board.standard()
    scratch = board.copy()
    scratch.move_unit(sq("e2"), sq("e4"))
    assert board.unit(sq("e2")) is not None
    assert board.unit(sq("e4")) is None
    pawn = board.unit(sq("e2"))
    assert pawn is not None and not pawn.has_moved


# --- LOOKUPS ---
def test_units_by_color(board_from: BoardFactory) -> None:
    board = board_from({"e1": "K", "d1": "Q", "e8": "k"})
    assert len(board.units()) == 3
    assert {unit.role for unit in board.units(Color.WHITE)} == {Role.KING, Role.QUEEN}
    assert [unit.role for unit in board.units(Color.BLACK)] == [Role.KING]


def test_locate_king(board_from: BoardFactory) -> None:
    board = board_from({"g1": "K", "c6": "k"})
    assert board.locate_king(Color.WHITE) == sq("g1")
    assert board.locate_king(Color.BLACK) == sq("c6")


def test_locate_missing_king(board_from: BoardFactory) -> None:
    board = board_from({"g1": "K"})
    assert board.locate_king(Color.BLACK) is None


# --- UPDATES ---
def test_move_unit_returns_captured(board_from: BoardFactory) -> None:
    board = board_from({"d1": "R", "d7": "n"})
    captured = board.move_unit(sq("d1"), sq("d7"))
    assert captured is not None and captured.role == Role.KNIGHT
    rook = board.unit(sq("d7"))
    assert rook is not None and rook.role == Role.ROOK
    assert rook.has_moved
    assert board.unit(sq("d1")) is None


def test_promote_unit(board_from: BoardFactory) -> None:
    board = board_from({"b8": "P"})
    board.promote_unit(sq("b8"), Role.KNIGHT)
    unit = board.unit(sq("b8"))
    assert unit is not None
    assert (unit.color, unit.role) == (Color.WHITE, Role.KNIGHT)


def test_double_push_flags_skipped_rank() -> None:
    """e2-e4: the cells d3 and f3 (diagonally next to e4, on the rank the pawn skipped) get flagged"""
    board = Board.standard()
    board.apply_move(Move(sq("e2"), sq("e4"), is_double_push=True))
    flagged = [cell.square for cell in board.cells if cell.en_passant]
    assert flagged == [Square(3, 2), Square(5, 2)]
    assert board.en_passant_file(2) == 4


@pytest.mark.parametrize(
    "from_name, to_name, expected_flags, expected_file",
    [
        ("a2", "a4", [Square(1, 2)], 0),
        ("h2", "h4", [Square(6, 2)], 7),
    ],
)
def test_double_push_on_the_edge(
    from_name: str,
    to_name: str,
    expected_flags: list[Square],
    expected_file: int,
) -> None:
    board = Board.standard()
    board.apply_move(Move(sq(from_name), sq(to_name), is_double_push=True))
    assert [cell.square for cell in board.cells if cell.en_passant] == expected_flags
    assert board.en_passant_file(2) == expected_file


def test_opponent_move_clears_flags() -> None:
    board = Board.standard()
    board.apply_move(Move(sq("e2"), sq("e4"), is_double_push=True))
    board.apply_move(Move(sq("g8"), sq("f6")))
    assert not any(cell.en_passant for cell in board.cells)
    assert board.en_passant_file(2) is None


def test_black_double_push_flags() -> None:
    board = Board.standard()
    board.apply_move(Move(sq("d7"), sq("d5"), is_double_push=True))
    flagged = [cell.square for cell in board.cells if cell.en_passant]
    assert flagged == [Square(2, 5), Square(4, 5)]
    assert board.en_passant_file(5) == 3


def test_apply_en_passant_removes_jumped_pawn(board_from: BoardFactory) -> None:
    board = board_from({"e5": "P", "d5": "p"})
    captured = board.apply_move(Move(sq("e5"), sq("d6"), is_en_passant=True))
    assert captured is not None
    assert (captured.color, captured.role) == (Color.BLACK, Role.PAWN)
    assert board.unit(sq("d5")) is None
    assert board.unit(sq("d6")) is not None


@pytest.mark.parametrize(
    "side, king_to, rook_from, rook_to",
    [
        (CastlingSide.KING_SIDE, "g1", "h1", "f1"),
        (CastlingSide.QUEEN_SIDE, "c1", "a1", "d1"),
    ],
)
def test_apply_castling_moves_both(
    board_from: BoardFactory,
    side: CastlingSide,
    king_to: str,
    rook_from: str,
    rook_to: str,
) -> None:
    board = board_from({"e1": "K", "a1": "R", "h1": "R"})
    captured = board.apply_move(Move(sq("e1"), sq(king_to), castling_side=side))
    assert captured is None
    king = board.unit(sq(king_to))
    assert king is not None and king.role == Role.KING
    rook = board.unit(sq(rook_to))
    assert rook is not None and rook.role == Role.ROOK and rook.has_moved
    assert board.unit(sq(rook_from)) is None


def test_apply_castling_without_rook(board_from: BoardFactory) -> None:
    board = board_from({"e1": "K"})
    with pytest.raises(CastlingError):
        board.apply_move(
            Move(sq("e1"), sq("g1"), castling_side=CastlingSide.KING_SIDE)
        )
