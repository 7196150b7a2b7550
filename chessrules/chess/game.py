"""
The Position is the entrypoint into the rules engine.
It is responsible for orchestrating all the business logic required to play a turn:
validating the requested move, updating the board, promoting pawns, passing the turn and probing for checkmate.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self, Sequence

from chessrules.chess.board import Board
from chessrules.chess.legality import has_legal_move, legal_moves
from chessrules.chess.moves import Move, is_attacked
from chessrules.chess.pieces import HOME_RANK, Unit
from chessrules.chess.square import Square
from chessrules.core.config import Settings, get_settings
from chessrules.core.exceptions import (
    IllegalMoveError,
    InvalidPromotionError,
    NotYourTurnError,
    NoUnitError,
)
from chessrules.core.models import ChessPiece, ChessSquare, MoveOutcome
from chessrules.core.shared_types import NON_PROMOTION_ROLES, Color, Role, Status

logger = logging.getLogger(__name__)


def _to_square(square: ChessSquare) -> Square:
    return Square(square.file, square.rank)


def _to_chess_square(square: Square) -> ChessSquare:
    return ChessSquare(file=square.file, rank=square.rank)


@dataclass
class Position:
    # --- ENGINE API CALLED BY THE HOST APPLICATION ---

    board: Board
    active_color: Color = Color.WHITE
    settings: Settings = field(default_factory=get_settings)
    promotions: dict[Color, Role] = field(default_factory=dict)
    status: Status = Status.IN_PROGRESS

    def __post_init__(self) -> None:
        for color in Color:
            self.promotions.setdefault(color, self.settings.default_promotion_role)

    @classmethod
    def standard(cls, settings: Optional[Settings] = None) -> Self:
        """A new game from the standard starting position. White to move."""
        return cls(board=Board.standard(), settings=settings or get_settings())

    @classmethod
    def custom(
        cls,
        pieces: Sequence[Optional[ChessPiece]],
        active_color: Color = Color.WHITE,
        settings: Optional[Settings] = None,
    ) -> Self:
        """
        Start from a position of your own choice.

        `pieces` lists the 64 squares rank-major (index = rank * 8 + file), None for an empty square.
        Same format as `snapshot()` returns.
        """
        layout = [
            (piece.color, piece.role) if piece is not None else None for piece in pieces
        ]
        position = cls(
            board=Board.from_layout(layout),
            active_color=active_color,
            settings=settings or get_settings(),
        )
        position._update_status(active_color)
        return position

    # --- QUERIES ---
    def snapshot(self) -> list[Optional[ChessPiece]]:
        """The 64 squares rank-major: color and role of the unit on it, None if empty"""
        return [
            cell.unit.to_piece() if cell.unit is not None else None
            for cell in self.board.cells
        ]

    def promotion_role(self, color: Color) -> Role:
        return self.promotions[color]

    def legal_destinations(self, square: ChessSquare) -> list[ChessSquare]:
        """
        Squares the unit on the given square can legally move to.
        ----

        Empty list if the square is empty or the unit is stuck. Works for either color, not just the one to move
        (so a GUI can show the options while waiting for the opponent).
        """
        return [
            _to_chess_square(move.to_square)
            for move in self._legal_moves(_to_square(square))
        ]

    def is_check(self, color: Color) -> bool:
        """Is the king of the given color under attack right now?"""
        king_square = self.board.locate_king(color)
        if king_square is None:
            return False
        return is_attacked(
            self.board, king_square, color, self.settings.pawn_push_requires_empty
        )

    def is_checkmate(self, color: Color) -> bool:
        return self.is_check(color) and not self._has_legal_move(color)

    # --- MUTATIONS ---
    def set_promotion_role(self, color: Color, role: Role) -> None:
        """Pick what the pawns of the given color turn into. King and Pawn are refused (configuration stays as it was)."""
        if role in NON_PROMOTION_ROLES:
            raise InvalidPromotionError(f"A pawn cannot be promoted to a {role}.")
        self.promotions[color] = role
        logger.debug("%s pawns now promote to %s", color, role)

    def request_move(
        self, from_square: ChessSquare, to_square: ChessSquare
    ) -> MoveOutcome:
        """
        Attempt to make a move
        -----

        1. find the unit to move, and make sure it is its turn
        2. make sure the target square is among its legal destinations
        3. update the board (castling: king and rook, en passant: take the jumped pawn) on a copy, then commit it
        4. promote the pawn if it reached the last rank
        5. check whether the opponent got mated
        6. pass the turn to the opponent (also when mated: whether to keep playing is up to the caller)

        Rejected requests raise and leave the position untouched.
        """
        origin = _to_square(from_square)
        destination = _to_square(to_square)

        unit = self.board.unit(origin)
        if unit is None:
            raise NoUnitError(f"No unit found on {origin.to_algebraic()}.")

        if unit.color != self.active_color:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.active_color} to make a move first."
            )

        move = self._find_legal_move(origin, destination)
        if move is None:
            raise IllegalMoveError(
                f"Move not allowed: {unit.role} {origin.to_algebraic()}{destination.to_algebraic()}"
            )

        # transactional: any failure while updating the board leaves the live board as it was
        board = self.board.copy()
        captured = board.apply_move(move)
        if self._reaches_last_rank(unit, destination):
            board.promote_unit(destination, self.promotions[unit.color])
        self.board = board
        logger.debug(
            "%s played %s%s", unit.color, origin.to_algebraic(), destination.to_algebraic()
        )

        opponent = self.active_color.opponent
        self._update_status(opponent)
        checkmated = opponent if self.status == Status.CHECKMATE else None
        if checkmated is not None:
            logger.info("%s is checkmated", checkmated)

        # NOTE update color to move AFTER the checks that depend on the color that just moved
        self.active_color = opponent

        return MoveOutcome(
            captured=captured.to_piece() if captured is not None else None,
            checkmated=checkmated,
            status=self.status,
        )

    # -- PRIVATE HELPERS ---
    def _legal_moves(self, square: Square) -> list[Move]:
        return legal_moves(
            self.board,
            square,
            pawn_push_requires_empty=self.settings.pawn_push_requires_empty,
        )

    def _has_legal_move(self, color: Color) -> bool:
        return has_legal_move(
            self.board,
            color,
            pawn_push_requires_empty=self.settings.pawn_push_requires_empty,
        )

    def _find_legal_move(self, origin: Square, destination: Square) -> Optional[Move]:
        return next(
            (move for move in self._legal_moves(origin) if move.to_square == destination),
            None,
        )

    def _reaches_last_rank(self, unit: Unit, destination: Square) -> bool:
        """Pawns promote on the opponent's home rank"""
        return (
            unit.role == Role.PAWN
            and destination.rank == HOME_RANK[unit.color.opponent]
        )

    def _update_status(self, color: Color) -> None:
        """
        Performs checks to see if the given color (the one about to move) is mated, or in check.

        Mate means: the king is attacked and none of that color's units (not just the king) has a legal move.
        A check that another unit can block or take away is only a check.
        """
        if not self.is_check(color):
            self.status = Status.IN_PROGRESS
        elif self._has_legal_move(color):
            self.status = Status.CHECK
        else:
            self.status = Status.CHECKMATE
