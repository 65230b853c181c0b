"""
Xiangqi board representation.
Board: 10 ranks x 9 files (rank 0 = BLACK side top, rank 9 = RED side bottom)
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

import numpy as np
from numpy.typing import NDArray

from .errors import MissingGeneral
from .pieces import Piece, PieceKind, Side
from .squares import FILES, RANKS, Square, as_square

# ---------------------------------------------------------------------------
# Pre-encoded General values: encode = int(side) * int(kind), RED=+1, BLACK=-1.
# ---------------------------------------------------------------------------
_RED_GENERAL: int = 1
_BLACK_GENERAL: int = -1

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.CHARIOT,
    PieceKind.HORSE,
    PieceKind.ELEPHANT,
    PieceKind.ADVISOR,
    PieceKind.GENERAL,
    PieceKind.ADVISOR,
    PieceKind.ELEPHANT,
    PieceKind.HORSE,
    PieceKind.CHARIOT,
)


def encode(side: Side, kind: PieceKind) -> int:
    return int(side) * int(kind)


class Board:
    """A 9x10 grid of optional pieces.

    The General squares are kept in step with the grid: every write goes
    through `_write`, which updates the lookup in the same step, so the two
    can never disagree.
    """

    def __init__(self) -> None:
        self._grid: NDArray[np.int8] = np.zeros((RANKS, FILES), dtype=np.int8)
        self._generals: dict[Side, Square | None] = {Side.RED: None, Side.BLACK: None}

    @property
    def grid(self) -> NDArray[np.int8]:
        """Read-only view of the encoded grid; writes go through place/remove/move_piece."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    def _recompute_generals(self) -> None:
        """Rebuild the General lookup from scratch."""
        self._generals = {Side.RED: None, Side.BLACK: None}
        for rank in range(RANKS):
            for file in range(FILES):
                v = int(self._grid[rank, file])
                if v == _RED_GENERAL or v == _BLACK_GENERAL:
                    side = Side.RED if v > 0 else Side.BLACK
                    if self._generals[side] is not None:
                        raise ValueError(f"{side.name} has more than one General")
                    self._generals[side] = Square(file, rank)

    def _write(self, square: Square, val: int) -> None:
        file, rank = square
        old = int(self._grid[rank, file])
        if old in (_RED_GENERAL, _BLACK_GENERAL) and old != val:
            self._generals[Side.RED if old > 0 else Side.BLACK] = None
        if val in (_RED_GENERAL, _BLACK_GENERAL):
            side = Side.RED if val > 0 else Side.BLACK
            current = self._generals[side]
            if current is not None and current != square:
                raise ValueError(f"{side.name} already has a General at {current}")
            self._generals[side] = square
        self._grid[rank, file] = val

    @classmethod
    def from_array(cls, grid: list[list[int]] | NDArray[np.int8]) -> Board:
        """Build a board from a 10x9 array of encoded pieces (rank-major)."""
        b = cls()
        arr = np.array(grid, dtype=np.int8)
        if arr.shape != (RANKS, FILES):
            raise ValueError(f"Board array must be {RANKS}x{FILES}, got {arr.shape}")
        if np.any(np.abs(arr) > int(PieceKind.PAWN)):
            raise ValueError("Board array holds an unknown piece code")
        b._grid = arr
        b._recompute_generals()
        return b

    @classmethod
    def from_pieces(cls, pieces: Mapping[Square | str, Piece]) -> Board:
        """Build a board from a {square: piece} mapping; squares may be algebraic."""
        b = cls()
        for sq, piece in pieces.items():
            b.place(as_square(sq), piece)
        return b

    @classmethod
    def start_position(cls) -> Board:
        b = cls()
        g = b._grid
        # BLACK pieces (top)
        g[0] = [encode(Side.BLACK, kind) for kind in _BACK_RANK]
        g[2, 1] = encode(Side.BLACK, PieceKind.CANNON)
        g[2, 7] = encode(Side.BLACK, PieceKind.CANNON)
        for f in range(0, FILES, 2):
            g[3, f] = encode(Side.BLACK, PieceKind.PAWN)
        # RED pieces (bottom)
        g[9] = [encode(Side.RED, kind) for kind in _BACK_RANK]
        g[7, 1] = encode(Side.RED, PieceKind.CANNON)
        g[7, 7] = encode(Side.RED, PieceKind.CANNON)
        for f in range(0, FILES, 2):
            g[6, f] = encode(Side.RED, PieceKind.PAWN)
        b._recompute_generals()
        return b

    def copy(self) -> Board:
        b = Board()
        b._grid = self._grid.copy()
        b._generals = dict(self._generals)
        return b

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._grid, other._grid))

    __hash__ = None  # type: ignore[assignment]

    # -- lookup --------------------------------------------------------------

    def code_at(self, square: Square) -> int:
        """Raw encoded value at `square` (0 = empty)."""
        return int(self._grid[square.rank, square.file])

    def piece_at(self, square: Square | str) -> Piece | None:
        val = self.code_at(as_square(square))
        return Piece.decode(val) if val != 0 else None

    def is_empty(self, square: Square) -> bool:
        return self.code_at(square) == 0

    def is_enemy(self, square: Square, side: Side) -> bool:
        return (int(side) * self.code_at(square)) < 0

    def is_friendly(self, square: Square, side: Side) -> bool:
        return (int(side) * self.code_at(square)) > 0

    def find_general(self, side: Side) -> Square | None:
        return self._generals[side]

    def general_square(self, side: Side) -> Square:
        sq = self._generals[side]
        if sq is None:
            raise MissingGeneral(f"{side.name} General is not on the board")
        return sq

    def pieces(self, side: Side | None = None) -> Iterator[tuple[Square, Piece]]:
        """Yield occupied squares in board order: files ascending, then ranks ascending."""
        for file in range(FILES):
            for rank in range(RANKS):
                val = int(self._grid[rank, file])
                if val == 0:
                    continue
                if side is not None and (int(side) * val) < 0:
                    continue
                yield Square(file, rank), Piece.decode(val)

    # -- mutation ------------------------------------------------------------

    def place(self, square: Square | str, piece: Piece) -> Piece | None:
        """Put `piece` on `square`; returns whatever was there before."""
        sq = as_square(square)
        previous = self.piece_at(sq)
        self._write(sq, piece.encode())
        return previous

    def remove(self, square: Square | str) -> Piece | None:
        sq = as_square(square)
        previous = self.piece_at(sq)
        self._write(sq, 0)
        return previous

    def move_piece(self, src: Square, dst: Square) -> Piece | None:
        """Relocate the piece on `src` in-place. Returns the captured piece (None if none)."""
        val = self.code_at(src)
        assert val != 0, f"No piece on {src}"
        captured = self.code_at(dst)
        self._write(src, 0)
        self._write(dst, val)
        return Piece.decode(captured) if captured != 0 else None

    def with_move(self, src: Square, dst: Square) -> Board:
        """Return a new board with the move applied; this board is untouched."""
        b = self.copy()
        b.move_piece(src, dst)
        return b

    def display(self) -> str:
        lines = []
        lines.append("    a b c d e f g h i")
        lines.append("   ╔═══════════════════╗")
        for rank in range(RANKS):
            row_str = f"{RANKS - rank:>2} ║"
            for file in range(FILES):
                val = int(self._grid[rank, file])
                if val == 0:
                    row_str += " ·"
                else:
                    row_str += " " + Piece.decode(val).char
            row_str += " ║"
            lines.append(row_str)
        lines.append("   ╚═══════════════════╝")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        placed = ", ".join(f"{sq}={p.char}" for sq, p in self.pieces())
        return f"Board({placed})"
