"""
Xiangqi piece definitions.
Pieces: 將/帥(General), 士/仕(Advisor), 象/相(Elephant), 馬/傌(Horse),
        車/俥(Chariot), 炮/砲(Cannon), 卒/兵(Pawn)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Side(IntEnum):
    RED = 1
    BLACK = -1

    @property
    def opponent(self) -> Side:
        return Side.BLACK if self is Side.RED else Side.RED


class PieceKind(IntEnum):
    GENERAL = 1  # 將/帥
    ADVISOR = 2  # 士/仕
    ELEPHANT = 3  # 象/相
    HORSE = 4  # 馬/傌
    CHARIOT = 5  # 車/俥
    CANNON = 6  # 炮/砲
    PAWN = 7  # 卒/兵

    @property
    def char(self) -> str:
        return KIND_CHARS[self]

    @classmethod
    def from_char(cls, ch: str) -> PieceKind:
        try:
            return _CHAR_KINDS[ch.upper()]
        except KeyError:
            raise ValueError(f"Unknown piece character: {ch!r}") from None


KIND_CHARS: dict[PieceKind, str] = {
    PieceKind.GENERAL: "G",
    PieceKind.ADVISOR: "A",
    PieceKind.ELEPHANT: "E",
    PieceKind.HORSE: "H",
    PieceKind.CHARIOT: "R",
    PieceKind.CANNON: "C",
    PieceKind.PAWN: "P",
}
_CHAR_KINDS: dict[str, PieceKind] = {ch: kind for kind, ch in KIND_CHARS.items()}

PIECE_SYMBOLS = {
    (Side.RED, PieceKind.GENERAL): "帥",
    (Side.RED, PieceKind.ADVISOR): "仕",
    (Side.RED, PieceKind.ELEPHANT): "相",
    (Side.RED, PieceKind.HORSE): "傌",
    (Side.RED, PieceKind.CHARIOT): "俥",
    (Side.RED, PieceKind.CANNON): "砲",
    (Side.RED, PieceKind.PAWN): "兵",
    (Side.BLACK, PieceKind.GENERAL): "將",
    (Side.BLACK, PieceKind.ADVISOR): "士",
    (Side.BLACK, PieceKind.ELEPHANT): "象",
    (Side.BLACK, PieceKind.HORSE): "馬",
    (Side.BLACK, PieceKind.CHARIOT): "車",
    (Side.BLACK, PieceKind.CANNON): "炮",
    (Side.BLACK, PieceKind.PAWN): "卒",
}


@dataclass(frozen=True, slots=True)
class Piece:
    kind: PieceKind
    side: Side

    @property
    def char(self) -> str:
        """Kind identifier, uppercase for RED and lowercase for BLACK."""
        ch = self.kind.char
        return ch if self.side is Side.RED else ch.lower()

    @property
    def symbol(self) -> str:
        return PIECE_SYMBOLS[(self.side, self.kind)]

    # Board encoding: kind * side  (RED=+, BLACK=-), 0 = empty
    def encode(self) -> int:
        return int(self.side) * int(self.kind)

    @classmethod
    def decode(cls, val: int) -> Piece:
        assert val != 0, "Cannot decode empty square"
        side = Side.RED if val > 0 else Side.BLACK
        return cls(PieceKind(abs(val)), side)

    @classmethod
    def from_char(cls, ch: str) -> Piece:
        side = Side.RED if ch.isupper() else Side.BLACK
        return cls(PieceKind.from_char(ch), side)

    def __str__(self) -> str:
        return self.char
