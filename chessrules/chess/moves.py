"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the candidate (pseudo-legal) move sets for each role.
Every role except the pawn is described by its direction paths, walked by one shared traversal.


Legality is checked later (see legality.py)
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from chessrules.chess.castling import CASTLING_RULES, CastlingSide, castling_squares
from chessrules.chess.pieces import (
    EN_PASSANT_RANK,
    FORWARD,
    HOME_RANK,
    PAWN_CAPTURE_DIRECTIONS,
    PAWN_RANK,
    Unit,
)
from chessrules.chess.square import Cell, Square, step
from chessrules.core.shared_types import Color, Direction, Role


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def cell(self, square: Square) -> Cell: ...
    def unit(self, square: Square) -> Optional[Unit]: ...
    def units(self, color: Optional[Color] = None) -> list[Unit]: ...
    def en_passant_file(self, rank: int) -> Optional[int]: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made, including the special moves it triggers"""

    from_square: Square
    to_square: Square
    castling_side: Optional[CastlingSide] = None
    is_en_passant: bool = False
    is_double_push: bool = False


# A path is the sequence of directions walked to reach the next candidate square.
# Knights need two of them, every other role needs one.
Path = tuple[Direction, ...]

ORTHOGONAL_PATHS: list[Path] = [
    (Direction.UP,),
    (Direction.DOWN,),
    (Direction.LEFT,),
    (Direction.RIGHT,),
]
DIAGONAL_PATHS: list[Path] = [
    (Direction.UP_LEFT,),
    (Direction.UP_RIGHT,),
    (Direction.DOWN_LEFT,),
    (Direction.DOWN_RIGHT,),
]
ALL_DIRECTION_PATHS: list[Path] = ORTHOGONAL_PATHS + DIAGONAL_PATHS
KNIGHT_PATHS: list[Path] = [
    (Direction.UP_LEFT, Direction.UP),
    (Direction.UP_RIGHT, Direction.UP),
    (Direction.DOWN_LEFT, Direction.DOWN),
    (Direction.DOWN_RIGHT, Direction.DOWN),
    (Direction.LEFT, Direction.UP_LEFT),
    (Direction.LEFT, Direction.DOWN_LEFT),
    (Direction.RIGHT, Direction.UP_RIGHT),
    (Direction.RIGHT, Direction.DOWN_RIGHT),
]


# --- MOVEMENT RULES ---
def walk_path(cell: Cell, path: Path, board: Board) -> Optional[Cell]:
    """Follow all directions of the path. None if any of the steps falls off the board."""
    current: Optional[Cell] = cell
    for direction in path:
        assert current is not None
        current = step(current, direction, board)
        if current is None:
            return None
    return current


def traverse(
    square: Square, board: Board, paths: list[Path], sliding: bool
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We walk each path until we hit another unit or the edge of the board.

    * own unit: stop, the square is not available
    * opponent's unit: the square is available (capture), then stop
    * empty square: available. Sliding roles keep going along the same path, stepping roles stop here.
    """
    mover = board.unit(square)
    assert mover is not None, f"No unit on {square.to_algebraic()} to traverse from."

    moves: list[Move] = []
    for path in paths:
        current = board.cell(square)
        while True:
            next_cell = walk_path(current, path, board)
            if next_cell is None:
                break
            current = next_cell

            if current.unit is not None:
                if current.unit.color != mover.color:
                    moves.append(Move(from_square=square, to_square=current.square))
                break

            moves.append(Move(from_square=square, to_square=current.square))
            if not sliding:
                break
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights jump: two steps, the first diagonal and the second straight"""
    return traverse(square, board, KNIGHT_PATHS, sliding=False)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return traverse(square, board, DIAGONAL_PATHS, sliding=True)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return traverse(square, board, ORTHOGONAL_PATHS, sliding=True)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return traverse(square, board, ALL_DIRECTION_PATHS, sliding=True)


def candidate_king_moves(
    square: Square, board: Board, pawn_push_requires_empty: bool = True
) -> list[Move]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move.
    """
    moves = traverse(square, board, ALL_DIRECTION_PATHS, sliding=False)
    moves.extend(
        candidate_castling_moves(
            square, board, pawn_push_requires_empty=pawn_push_requires_empty
        )
    )
    return moves


def candidate_pawn_moves(
    square: Square, board: Board, push_requires_empty: bool = True
) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two in their first move (so when on their starting rank)
    - takes diagonally
    - takes en passant

    With `push_requires_empty` switched off, the single forward push may also land on (and take) an opponent's unit.
    The two-square advance never takes, and never jumps over a unit.
    """
    pawn = board.unit(square)
    assert pawn is not None, f"No pawn on {square.to_algebraic()}."

    def _can_push_onto(cell: Cell) -> bool:
        if cell.unit is None:
            return True
        return not push_requires_empty and cell.unit.color != pawn.color

    moves: list[Move] = []
    origin = board.cell(square)

    # Pawn pushes
    one_ahead = step(origin, FORWARD[pawn.color], board)
    if one_ahead is not None and _can_push_onto(one_ahead):
        moves.append(Move(from_square=square, to_square=one_ahead.square))

        if square.rank == PAWN_RANK[pawn.color] and one_ahead.unit is None:
            two_ahead = step(one_ahead, FORWARD[pawn.color], board)
            if two_ahead is not None and two_ahead.unit is None:
                moves.append(
                    Move(
                        from_square=square,
                        to_square=two_ahead.square,
                        is_double_push=True,
                    )
                )

    # pawns take diagonally:
    for direction in PAWN_CAPTURE_DIRECTIONS[pawn.color]:
        target = step(origin, direction, board)
        if target is None or target.unit is None:
            continue
        if target.unit.color != pawn.color:
            moves.append(Move(from_square=square, to_square=target.square))

    moves.extend(en_passant_moves(square, board))
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[Role, CandidateMovesFn] = {
    Role.PAWN: candidate_pawn_moves,
    Role.KNIGHT: candidate_knight_moves,
    Role.BISHOP: candidate_bishop_moves,
    Role.ROOK: candidate_rook_moves,
    Role.QUEEN: candidate_queen_moves,
    Role.KING: candidate_king_moves,
}


def pseudo_legal_moves(
    square: Square, board: Board, pawn_push_requires_empty: bool = True
) -> list[Move]:
    """Candidate moves of whatever unit stands on the square (none for an empty square)."""
    unit = board.unit(square)
    if unit is None:
        return []
    if unit.role == Role.PAWN:
        return candidate_pawn_moves(
            square, board, push_requires_empty=pawn_push_requires_empty
        )
    if unit.role == Role.KING:
        return candidate_king_moves(
            square, board, pawn_push_requires_empty=pawn_push_requires_empty
        )
    return MOVEMENT_RULES[unit.role](square, board)


# --- CAPTURING RULES / ATTACKING RULES ---
def pawn_attacked_squares(
    square: Square, color: Color, push_requires_empty: bool = True
) -> list[Square]:
    """
    Pawns take diagonally forward, whether or not something stands there right now.

    NOTE: the push square is only attacked when pushes may take (`push_requires_empty` switched off).
    """
    directions = list(PAWN_CAPTURE_DIRECTIONS[color])
    if not push_requires_empty:
        directions.append(FORWARD[color])
    targets = [square.shift(direction) for direction in directions]
    return [target for target in targets if target.is_within_bounds()]


def is_adjacent(square: Square, other: Square) -> bool:
    """One king step away"""
    return square != other and max(
        abs(square.file - other.file), abs(square.rank - other.rank)
    ) == 1


def is_attacked(
    board: Board,
    square: Square,
    defending_color: Color,
    pawn_push_requires_empty: bool = True,
) -> bool:
    """
    Is the square in the line-of-sight of any unit of the opponent?
    ---

    Answers "is the square geometrically reachable": it does not care whether the attacking unit would expose its
    own king by going there.

    * opponent's king: attacks the 8 squares around it
    * opponent's pawns: attack the two squares diagonally forward (and the square in front, if pushes may take)
    * everything else: attacks its candidate destinations
    """
    for attacker in board.units(defending_color.opponent):
        if attacker.role == Role.KING:
            if is_adjacent(attacker.square, square):
                return True
            continue

        if attacker.role == Role.PAWN:
            targets = pawn_attacked_squares(
                attacker.square, attacker.color, pawn_push_requires_empty
            )
        else:
            targets = [
                move.to_square
                for move in MOVEMENT_RULES[attacker.role](attacker.square, board)
            ]

        if square in targets:
            return True
    return False


# -- CASTLING MOVES ---
def candidate_castling_moves(
    square: Square, board: Board, pawn_push_requires_empty: bool = True
) -> list[Move]:
    """
    Castling candidates for the king on the given square
    ---

    **you may try to castle if**

    * The king never moved, and stands on its starting square.
    * The king is not in check right now (you cannot castle out of a check).
    * The rook on that side never moved.
    * All squares between king and rook are empty.

    Whether the king passes through an attacked square is checked by the legality filter.
    """
    king = board.unit(square)
    assert king is not None and king.role == Role.KING

    if king.has_moved or square.rank != HOME_RANK[king.color]:
        return []

    moves: list[Move] = []
    for side in CASTLING_RULES:
        squares = castling_squares(side, king.color)
        if square != squares.king_from:
            continue

        rook = board.unit(squares.rook_from)
        if rook is None or rook.role != Role.ROOK or rook.color != king.color:
            continue
        if rook.has_moved:
            continue

        if any(board.unit(between) is not None for between in squares.between):
            continue

        moves.append(
            Move(from_square=square, to_square=squares.king_to, castling_side=side)
        )

    # only pay for the attack scan if there is something to offer
    if moves and is_attacked(board, square, king.color, pawn_push_requires_empty):
        return []
    return moves


# -- EN PASSANT MOVES ---
def en_passant_moves(square: Square, board: Board) -> list[Move]:
    """
    Take the opponent's pawn that just advanced two squares, as if it only advanced one.
    ---

    The square right in front of our pawn carries the en passant flag when an opponent's pawn just jumped next to us.
    The flags on that rank tell which file the jump happened on. We land on the square it skipped.
    """
    pawn = board.unit(square)
    assert pawn is not None

    ahead = step(board.cell(square), FORWARD[pawn.color], board)
    if ahead is None or not ahead.en_passant:
        return []

    # flags we are allowed to use are the ones the opponent's jump left behind
    if ahead.rank != EN_PASSANT_RANK[pawn.color.opponent]:
        return []

    jumped_file = board.en_passant_file(ahead.rank)
    if jumped_file is None or abs(jumped_file - square.file) != 1:
        return []

    jumped = board.unit(Square(jumped_file, square.rank))
    if jumped is None or jumped.role != Role.PAWN or jumped.color == pawn.color:
        return []

    target = Square(jumped_file, ahead.rank)
    if board.unit(target) is not None:
        return []
    return [Move(from_square=square, to_square=target, is_en_passant=True)]
