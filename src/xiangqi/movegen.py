"""
Pseudo-legal move generation.

Each generator returns the destinations reachable by one piece's movement
pattern, honouring blocking and capture rules but not whether the move
leaves the mover's own General in check (see `rules.legal_moves`).
"""

from __future__ import annotations

from collections.abc import Callable

from .board import Board
from .errors import WrongPieceKind
from .pieces import Piece, PieceKind, Side
from .squares import FILES, RANKS, Square, behind_river, in_fortress

Generator = Callable[[Board, Square], list[Square]]

_ORTHOGONAL: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))
_DIAGONAL: tuple[tuple[int, int], ...] = ((-1, -1), (1, -1), (-1, 1), (1, 1))
# (d_file, d_rank, leg_file, leg_rank): the leg is the orthogonal step first taken.
_HORSE_JUMPS: tuple[tuple[int, int, int, int], ...] = (
    (1, -2, 0, -1),
    (-1, -2, 0, -1),
    (1, 2, 0, 1),
    (-1, 2, 0, 1),
    (2, -1, 1, 0),
    (2, 1, 1, 0),
    (-2, -1, -1, 0),
    (-2, 1, -1, 0),
)


def _in_bounds(file: int, rank: int) -> bool:
    return 0 <= file < FILES and 0 <= rank < RANKS


def _side_of(board: Board, square: Square, kind: PieceKind) -> Side:
    """Side of the `kind` piece on `square`; WrongPieceKind if it is not there."""
    piece = board.piece_at(square)
    if piece is None or piece.kind is not kind:
        raise WrongPieceKind(f"Expected a {kind.name.lower()} on {square}, found {piece}")
    return piece.side


def general_moves(board: Board, square: Square) -> list[Square]:
    side = _side_of(board, square, PieceKind.GENERAL)
    dests: list[Square] = []
    for df, dr in _ORTHOGONAL:
        dst = Square(square.file + df, square.rank + dr)
        if _in_bounds(*dst) and in_fortress(dst, side) and not board.is_friendly(dst, side):
            dests.append(dst)

    # Flying general: facing the enemy General on an open file.
    enemy = board.find_general(side.opponent)
    if enemy is not None and enemy.file == square.file and enemy not in dests:
        lo, hi = sorted((square.rank, enemy.rank))
        if all(board.is_empty(Square(square.file, r)) for r in range(lo + 1, hi)):
            dests.append(enemy)
    return dests


def advisor_moves(board: Board, square: Square) -> list[Square]:
    side = _side_of(board, square, PieceKind.ADVISOR)
    dests: list[Square] = []
    for df, dr in _DIAGONAL:
        dst = Square(square.file + df, square.rank + dr)
        if _in_bounds(*dst) and in_fortress(dst, side) and not board.is_friendly(dst, side):
            dests.append(dst)
    return dests


def elephant_moves(board: Board, square: Square) -> list[Square]:
    side = _side_of(board, square, PieceKind.ELEPHANT)
    dests: list[Square] = []
    for df, dr in _DIAGONAL:
        dst = Square(square.file + 2 * df, square.rank + 2 * dr)
        if not _in_bounds(*dst) or not behind_river(dst, side):
            continue
        eye = Square(square.file + df, square.rank + dr)
        if board.is_empty(eye) and not board.is_friendly(dst, side):
            dests.append(dst)
    return dests


def horse_moves(board: Board, square: Square) -> list[Square]:
    side = _side_of(board, square, PieceKind.HORSE)
    dests: list[Square] = []
    for df, dr, lf, lr in _HORSE_JUMPS:
        dst = Square(square.file + df, square.rank + dr)
        if not _in_bounds(*dst):
            continue
        leg = Square(square.file + lf, square.rank + lr)
        if board.is_empty(leg) and not board.is_friendly(dst, side):
            dests.append(dst)
    return dests


def chariot_moves(board: Board, square: Square) -> list[Square]:
    side = _side_of(board, square, PieceKind.CHARIOT)
    dests: list[Square] = []
    for df, dr in _ORTHOGONAL:
        f, r = square.file + df, square.rank + dr
        while _in_bounds(f, r):
            dst = Square(f, r)
            if board.is_empty(dst):
                dests.append(dst)
            else:
                if board.is_enemy(dst, side):
                    dests.append(dst)
                break
            f += df
            r += dr
    return dests


def cannon_moves(board: Board, square: Square) -> list[Square]:
    side = _side_of(board, square, PieceKind.CANNON)
    dests: list[Square] = []
    for df, dr in _ORTHOGONAL:
        f, r = square.file + df, square.rank + dr
        screen = False
        while _in_bounds(f, r):
            dst = Square(f, r)
            if not screen:
                if board.is_empty(dst):
                    dests.append(dst)
                else:
                    screen = True
            elif not board.is_empty(dst):
                if board.is_enemy(dst, side):
                    dests.append(dst)
                break
            f += df
            r += dr
    return dests


def pawn_moves(board: Board, square: Square) -> list[Square]:
    side = _side_of(board, square, PieceKind.PAWN)
    forward = -1 if side is Side.RED else 1
    candidates = [Square(square.file, square.rank + forward)]
    if not behind_river(square, side):
        candidates += [Square(square.file - 1, square.rank), Square(square.file + 1, square.rank)]
    return [
        dst for dst in candidates if _in_bounds(*dst) and not board.is_friendly(dst, side)
    ]


GENERATORS: dict[PieceKind, Generator] = {
    PieceKind.GENERAL: general_moves,
    PieceKind.ADVISOR: advisor_moves,
    PieceKind.ELEPHANT: elephant_moves,
    PieceKind.HORSE: horse_moves,
    PieceKind.CHARIOT: chariot_moves,
    PieceKind.CANNON: cannon_moves,
    PieceKind.PAWN: pawn_moves,
}


def pseudo_legal_moves(board: Board, square: Square, expected: Piece | None = None) -> list[Square]:
    """Destinations for the piece on `square`, ignoring self-check.

    When `expected` is given the square must hold exactly that piece (kind
    and side); otherwise WrongPieceKind is raised.
    """
    piece = board.piece_at(square)
    if piece is None:
        raise WrongPieceKind(f"No piece on {square}")
    if expected is not None and piece != expected:
        raise WrongPieceKind(f"Expected {expected.char} on {square}, found {piece.char}")
    return GENERATORS[piece.kind](board, square)


def legal_captures(board: Board, square: Square) -> list[Square]:
    """Capture squares for the piece on `square`.

    Every kind captures the way it moves (the cannon's screen jump is already
    capture-only), so this is the full pseudo-legal destination set.
    """
    piece = board.piece_at(square)
    if piece is None:
        raise WrongPieceKind(f"No piece on {square}")
    return GENERATORS[piece.kind](board, square)
