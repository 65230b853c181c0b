"""Exceptions raised by the rules engine."""


class XiangqiError(Exception):
    """Base class for every engine error."""


class InvalidSquare(XiangqiError, ValueError):
    """Malformed or out-of-range coordinate text or pair."""


class InvalidShift(XiangqiError, ValueError):
    """A relative offset would leave the board."""


class WrongPieceKind(XiangqiError, ValueError):
    """Move generation asked for a square that does not hold the expected piece."""


class MissingGeneral(XiangqiError, LookupError):
    """A side's General is not on the board (corrupted position)."""


class IllegalMove(XiangqiError, ValueError):
    """A move was applied that is not in the mover's legal-move set."""
