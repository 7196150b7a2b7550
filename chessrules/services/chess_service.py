"""Orchestration of communication from a host application (GUI, CLI, network layer) to the rules engine."""

import logging
import threading
from typing import Optional

from chessrules.api.models import (
    BoardResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    NewGameRequest,
    PromotionRequest,
)
from chessrules.chess.game import Position
from chessrules.core.config import Settings, get_settings
from chessrules.core.exceptions import ChessError

logger = logging.getLogger(__name__)


class ChessService:
    """
    One game, safe to share between threads.

    The engine itself assumes a single caller at a time. Every call goes through one lock per game, so several viewers
    (or players) can poke at the same game concurrently.
    """

    def __init__(
        self, position: Optional[Position] = None, settings: Optional[Settings] = None
    ) -> None:
        self.settings = settings or get_settings()
        self.position = position or Position.standard(self.settings)
        self._lock = threading.Lock()

    # -- Host facing logic ---
    def new_game(self, request: NewGameRequest) -> BoardResponse:
        """Throw away the current game and start a fresh one."""
        if request.pieces is None:
            position = Position.standard(self.settings)
        else:
            position = Position.custom(
                request.pieces, active_color=request.active_color, settings=self.settings
            )
        with self._lock:
            self.position = position
            return self._create_board_response()

    def board_state(self) -> BoardResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by a frontend to check when it is the player's turn for instance.
        """
        with self._lock:
            return self._create_board_response()

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve the legal destinations of the unit on the requested square."""
        with self._lock:
            destinations = self.position.legal_destinations(request.square)
        return LegalMovesResponse(square=request.square, destinations=destinations)

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt."""
        with self._lock:
            try:
                outcome = self.position.request_move(
                    request.from_square, request.to_square
                )
            except ChessError as err:
                logger.info(
                    "Rejected move %s%s: %s",
                    request.from_square.to_algebraic(),
                    request.to_square.to_algebraic(),
                    err,
                )
                raise
            return MoveResponse(
                captured=outcome.captured,
                checkmated=outcome.checkmated,
                status=outcome.status,
                active_color=self.position.active_color,
            )

    def set_promotion(self, request: PromotionRequest) -> BoardResponse:
        """Change the role pawns of one color promote to."""
        with self._lock:
            self.position.set_promotion_role(request.color, request.role)
            return self._create_board_response()

    # -- Internal helpers --
    def _create_board_response(self) -> BoardResponse:
        """NOTE: caller holds the lock"""
        return BoardResponse(
            pieces=self.position.snapshot(),
            active_color=self.position.active_color,
            promotions=dict(self.position.promotions),
            status=self.position.status,
        )
