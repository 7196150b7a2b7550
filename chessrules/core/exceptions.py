"""
Errors raised by the rules engine.

Every rejected request surfaces as one of these. None of them is fatal: the board is left unchanged and the caller can
try again. (Programming mistakes inside the engine are asserts instead, those should never happen.)
"""


class ChessError(Exception):
    """Base class: catch this one to handle any rejected request."""


class InvalidSquareError(ChessError):
    """File or rank outside of the board."""


class InvalidBoardSizeError(ChessError):
    """A custom position must describe exactly 64 squares."""


class InvalidPromotionError(ChessError):
    """Pawns cannot promote into a king or another pawn."""


class NoUnitError(ChessError):
    """Requested to move from an empty square."""


class NotYourTurnError(ChessError):
    """Requested to move a unit of the color that is not to move."""


class IllegalMoveError(ChessError):
    """The destination is not among the legal destinations of the unit."""


class CastlingError(ChessError):
    """The rook that goes with a castling move could not be moved. The whole move is rolled back."""
