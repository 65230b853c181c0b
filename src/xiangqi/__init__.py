from .board import Board, encode
from .errors import (
    IllegalMove,
    InvalidShift,
    InvalidSquare,
    MissingGeneral,
    WrongPieceKind,
    XiangqiError,
)
from .game import GameState
from .movegen import legal_captures, pseudo_legal_moves
from .pieces import Piece, PieceKind, Side
from .rules import all_legal_moves, attackers, in_check, is_legal_move, legal_moves
from .squares import Square, parse_square, to_square

__all__ = [
    "Board",
    "GameState",
    "Piece",
    "PieceKind",
    "Side",
    "Square",
    "encode",
    "to_square",
    "parse_square",
    "pseudo_legal_moves",
    "legal_captures",
    "legal_moves",
    "is_legal_move",
    "all_legal_moves",
    "in_check",
    "attackers",
    "XiangqiError",
    "InvalidSquare",
    "InvalidShift",
    "WrongPieceKind",
    "MissingGeneral",
    "IllegalMove",
]
