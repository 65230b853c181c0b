"""
Game state: a board plus the side to move.

`GameState.apply_move` is the only operation that mutates a position; every
other query works on the board as it stands.
"""

from __future__ import annotations

from loguru import logger

from . import rules
from .board import Board
from .errors import IllegalMove
from .pieces import Piece, Side
from .settings import get_settings
from .squares import Square, as_square


class GameState:
    def __init__(self, board: Board | None = None, turn: Side = Side.RED) -> None:
        self.board = board if board is not None else Board.start_position()
        self.turn = turn

    @classmethod
    def new(cls) -> GameState:
        """Standard starting position, RED to move."""
        logger.info("New game | turn={}", Side.RED.name)
        return cls(Board.start_position(), Side.RED)

    def copy(self) -> GameState:
        return GameState(self.board.copy(), self.turn)

    # -- queries -------------------------------------------------------------

    def piece_at(self, square: Square | str) -> Piece | None:
        return self.board.piece_at(square)

    def legal_moves(self, square: Square | str) -> list[Square]:
        return rules.legal_moves(self.board, square)

    def is_legal_move(self, src: Square | str, dst: Square | str) -> bool:
        """True if the side to move may play src -> dst."""
        piece = self.board.piece_at(src)
        if piece is None or piece.side is not self.turn:
            return False
        return rules.is_legal_move(self.board, src, dst)

    def in_check(self, side: Side | None = None) -> bool:
        return rules.in_check(self.board, self.turn if side is None else side)

    def all_legal_moves(self) -> list[rules.Move]:
        return rules.all_legal_moves(self.board, self.turn)

    # -- command -------------------------------------------------------------

    def apply_move(
        self, src: Square | str, dst: Square | str, validate: bool | None = None
    ) -> Piece | None:
        """Play src -> dst for the side to move. Returns the captured piece, if any.

        With `validate` (default from settings.strict_moves) the move must be
        in the legal-move set of a piece belonging to the side to move, else
        IllegalMove is raised and nothing changes.  With validation off the
        move is applied as given and the caller owns its legality.
        """
        src_sq, dst_sq = as_square(src), as_square(dst)
        if validate is None:
            validate = get_settings().strict_moves

        piece = self.board.piece_at(src_sq)
        if validate:
            if piece is None:
                raise IllegalMove(f"No piece on {src_sq}")
            if piece.side is not self.turn:
                raise IllegalMove(
                    f"{src_sq} holds a {piece.side.name} piece but {self.turn.name} is to move"
                )
            if dst_sq not in rules.legal_moves(self.board, src_sq):
                raise IllegalMove(f"{piece.char} {src_sq}-{dst_sq} is not legal")
        elif piece is None:
            raise IllegalMove(f"No piece on {src_sq}")

        captured = self.board.move_piece(src_sq, dst_sq)
        self.turn = self.turn.opponent
        logger.info(
            "{} {} {}-{}{}",
            piece.side.name,
            piece.char,
            src_sq,
            dst_sq,
            f" x{captured.char}" if captured is not None else "",
        )
        if self.board.find_general(self.turn) is not None and self.in_check():
            logger.info("{} is in check", self.turn.name)
        return captured

    def display(self) -> str:
        return self.board.display() + f"\n  Turn: {'RED (紅)' if self.turn is Side.RED else 'BLACK (黑)'}"

    def __str__(self) -> str:
        return self.display()
