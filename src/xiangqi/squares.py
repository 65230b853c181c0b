"""
Square coordinates and algebraic notation.

Internal form is (file, rank): file 0-8 = columns a-i, rank 0-9 with rank 0
the BLACK back rank and rank 9 the RED back rank.  Algebraic text numbers
ranks from the RED edge, so display rank = 10 - rank ("a1" = (0, 9),
"e10" = (4, 0)).
"""

from __future__ import annotations

from typing import NamedTuple, overload

from .errors import InvalidShift, InvalidSquare
from .pieces import Side

FILES = 9
RANKS = 10
FILE_LETTERS = "abcdefghi"

# Palace bounds
RED_PALACE_RANKS = (7, 9)
BLACK_PALACE_RANKS = (0, 2)
PALACE_FILES = (3, 5)

# River: ranks 0-4 = BLACK territory, ranks 5-9 = RED territory
RED_SIDE = range(5, 10)
BLACK_SIDE = range(0, 5)


class Square(NamedTuple):
    file: int
    rank: int

    def __str__(self) -> str:
        return square_name(self)


def to_square(file: int, rank: int) -> Square:
    if not is_valid_square(file, rank):
        raise InvalidSquare(f"Square out of range: file={file}, rank={rank}")
    return Square(file, rank)


@overload
def is_valid_square(file: int, rank: int) -> bool: ...
@overload
def is_valid_square(file: object) -> bool: ...


def is_valid_square(file: object, rank: object = None) -> bool:
    """Bounds check for a (file, rank) pair, or format check for algebraic text."""
    if rank is not None:
        return (
            isinstance(file, int)
            and isinstance(rank, int)
            and not isinstance(file, bool)
            and not isinstance(rank, bool)
            and 0 <= file < FILES
            and 0 <= rank < RANKS
        )
    if not isinstance(file, str) or len(file) not in (2, 3):
        return False
    letter, digits = file[0], file[1:]
    if letter not in FILE_LETTERS or not digits.isascii() or not digits.isdigit():
        return False
    if digits.startswith("0"):
        return False
    return 1 <= int(digits) <= RANKS


def get_column(text: str) -> int:
    if not is_valid_square(text):
        raise InvalidSquare(f"Invalid square: {text!r}")
    return FILE_LETTERS.index(text[0])


def get_row(text: str) -> int:
    if not is_valid_square(text):
        raise InvalidSquare(f"Invalid square: {text!r}")
    return RANKS - int(text[1:])


def parse_square(text: str) -> Square:
    return Square(get_column(text), get_row(text))


def square_name(square: Square) -> str:
    file, rank = square
    if not is_valid_square(file, rank):
        raise InvalidSquare(f"Square out of range: file={file}, rank={rank}")
    return f"{FILE_LETTERS[file]}{RANKS - rank}"


def as_square(value: Square | str | tuple[int, int]) -> Square:
    """Accept a Square, an algebraic string or a raw (file, rank) pair."""
    if isinstance(value, str):
        return parse_square(value)
    file, rank = value
    return to_square(file, rank)


def is_valid_shift(square: Square, d_file: int, d_rank: int) -> bool:
    return is_valid_square(square.file + d_file, square.rank + d_rank)


def shift(square: Square, d_file: int, d_rank: int) -> Square:
    if not is_valid_shift(square, d_file, d_rank):
        raise InvalidShift(f"Shift ({d_file}, {d_rank}) from {square} leaves the board")
    return Square(square.file + d_file, square.rank + d_rank)


def in_fortress(square: Square, side: Side) -> bool:
    r0, r1 = RED_PALACE_RANKS if side is Side.RED else BLACK_PALACE_RANKS
    return PALACE_FILES[0] <= square.file <= PALACE_FILES[1] and r0 <= square.rank <= r1


def behind_river(square: Square, side: Side) -> bool:
    """True when `square` lies on `side`'s own half of the board."""
    return square.rank in (RED_SIDE if side is Side.RED else BLACK_SIDE)
