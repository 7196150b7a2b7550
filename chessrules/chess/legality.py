"""
From candidate moves to legal moves.

A candidate (pseudo-legal) move is only legal if it does not put (or leave) your own king in check.
We find out by playing the move on a scratch copy of the board and looking at the king afterwards.

`pawn_push_requires_empty` is threaded through everything: when pawn pushes may take, a pawn also attacks the square
in front of it.
"""

from chessrules.chess.board import Board
from chessrules.chess.castling import castling_squares
from chessrules.chess.moves import Move, is_attacked, pseudo_legal_moves
from chessrules.chess.square import Square
from chessrules.core.shared_types import Color


def is_putting_yourself_in_check(
    board: Board, move: Move, pawn_push_requires_empty: bool = True
) -> bool:
    """Return True if the move puts you in check

    plan:
    1. Copy the board
    2. make the candidate move (with its side effects: a castling rook or a pawn taken en passant matter here)
    3. determine if king is in check on the new board
    """
    mover = board.unit(move.from_square)
    assert mover is not None

    scratch = board.copy()
    scratch.apply_move(move)
    king_square = scratch.locate_king(mover.color)
    if king_square is None:
        # nothing to protect
        return False
    return is_attacked(scratch, king_square, mover.color, pawn_push_requires_empty)


def is_castling_through_check(
    board: Board, move: Move, pawn_push_requires_empty: bool = True
) -> bool:
    """The king may not pass through an attacked square (landing on one is covered by the regular check)"""
    assert move.castling_side is not None
    mover = board.unit(move.from_square)
    assert mover is not None

    squares = castling_squares(move.castling_side, mover.color)
    return is_attacked(
        board, squares.passes_through, mover.color, pawn_push_requires_empty
    )


def legal_moves(
    board: Board, square: Square, pawn_push_requires_empty: bool = True
) -> list[Move]:
    """
    Legal moves of the unit on the given square, in the order they were generated
    ----

    1. generate candidate moves, using the basic movement rules of its role
    2. castling: drop it if the king would cross an attacked square
    3. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.
    """
    candidates = pseudo_legal_moves(
        square, board, pawn_push_requires_empty=pawn_push_requires_empty
    )
    return [
        move
        for move in candidates
        if not (
            move.castling_side is not None
            and is_castling_through_check(board, move, pawn_push_requires_empty)
        )
        and not is_putting_yourself_in_check(board, move, pawn_push_requires_empty)
    ]


def has_legal_move(
    board: Board, color: Color, pawn_push_requires_empty: bool = True
) -> bool:
    return any(
        legal_moves(board, unit.square, pawn_push_requires_empty)
        for unit in board.units(color)
    )
