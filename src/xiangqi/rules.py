"""
Check detection and the legality filter.

`in_check` only ever consults pseudo-legal generation; `legal_moves` builds
on `in_check`.  Keeping that direction one-way is what stops the recursion.
"""

from __future__ import annotations

from loguru import logger

from .board import Board
from .movegen import GENERATORS, pseudo_legal_moves
from .pieces import Side
from .squares import Square, as_square

Move = tuple[Square, Square]


def attackers(board: Board, side: Side) -> list[Square]:
    """Squares of every enemy piece whose pseudo-legal moves reach `side`'s General."""
    target = board.general_square(side)
    return [
        sq
        for sq, piece in board.pieces(side.opponent)
        if target in GENERATORS[piece.kind](board, sq)
    ]


def in_check(board: Board, side: Side) -> bool:
    """Return True if `side`'s General is attacked.

    Scans enemy pieces in board order and stops at the first one whose
    pseudo-legal destinations include the General's square.  The
    flying-general face-off counts: the enemy General "attacks" along an
    open file.  Raises MissingGeneral if `side` has no General.
    """
    target = board.general_square(side)
    for sq, piece in board.pieces(side.opponent):
        if target in GENERATORS[piece.kind](board, sq):
            return True
    return False


def legal_moves(board: Board, square: Square | str) -> list[Square]:
    """Pseudo-legal destinations that do not leave the mover in check.

    Each candidate is tried on a fresh copy of `board`; `board` itself is
    never modified.
    """
    src = as_square(square)
    candidates = pseudo_legal_moves(board, src)
    side = board.piece_at(src).side  # type: ignore[union-attr]
    moves = [dst for dst in candidates if not in_check(board.with_move(src, dst), side)]
    if len(moves) != len(candidates):
        logger.debug(
            "{} on {}: {} of {} candidate(s) leave the General in check",
            side.name,
            src,
            len(candidates) - len(moves),
            len(candidates),
        )
    return moves


def is_legal_move(board: Board, src: Square | str, dst: Square | str) -> bool:
    src_sq = as_square(src)
    if board.piece_at(src_sq) is None:
        return False
    return as_square(dst) in legal_moves(board, src_sq)


def all_legal_moves(board: Board, side: Side) -> list[Move]:
    """Every legal (from, to) pair for `side`, in board order."""
    moves: list[Move] = []
    for sq, _ in board.pieces(side):
        for dst in legal_moves(board, sq):
            moves.append((sq, dst))
    return moves
