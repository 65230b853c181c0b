"""Tests for check detection and the legality filter."""

import os
import random
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from xiangqi import (
    Board,
    GameState,
    MissingGeneral,
    Piece,
    PieceKind,
    Side,
    all_legal_moves,
    attackers,
    in_check,
    is_legal_move,
    legal_moves,
    pseudo_legal_moves,
)
from xiangqi import rules
from xiangqi.squares import behind_river, in_fortress, parse_square

RED = Side.RED
BLACK = Side.BLACK


def _board(layout: dict[str, str]) -> Board:
    return Board.from_pieces({sq: Piece.from_char(ch) for sq, ch in layout.items()})


def _names(squares: list) -> set[str]:
    return {str(sq) for sq in squares}


# --- Opening position ----------------------------------------------------------

OPENING_COUNTS = {
    "a1": 2,  # chariot
    "b1": 2,  # horse
    "c1": 2,  # elephant
    "d1": 1,  # advisor
    "e1": 1,  # general
    "f1": 1,
    "g1": 2,
    "h1": 2,
    "i1": 2,
    "b3": 12,  # cannon
    "h3": 12,
    "a4": 1,  # pawns
    "c4": 1,
    "e4": 1,
    "g4": 1,
    "i4": 1,
}


@pytest.mark.parametrize("square,count", sorted(OPENING_COUNTS.items()))
def test_red_opening_move_counts(square: str, count: int) -> None:
    assert len(legal_moves(Board.start_position(), square)) == count


def test_black_opening_mirrors_red() -> None:
    board = Board.start_position()
    for square, count in OPENING_COUNTS.items():
        mirrored = square[0] + str(11 - int(square[1:]))
        assert len(legal_moves(board, mirrored)) == count


def test_opening_total() -> None:
    board = Board.start_position()
    assert len(all_legal_moves(board, RED)) == 44
    assert len(all_legal_moves(board, BLACK)) == 44
    assert not in_check(board, RED)
    assert not in_check(board, BLACK)


def test_horse_opening_destinations() -> None:
    assert _names(legal_moves(Board.start_position(), "b1")) == {"a3", "c3"}


# --- Flying general ------------------------------------------------------------


def test_flying_generals_are_mutually_in_check() -> None:
    board = _board({"e1": "G", "e10": "g"})
    assert in_check(board, RED)
    assert in_check(board, BLACK)
    assert "e10" in _names(legal_moves(board, "e1"))
    assert "e1" in _names(legal_moves(board, "e10"))


def test_blocked_file_is_not_check() -> None:
    board = _board({"e1": "G", "e10": "g", "e5": "P"})
    assert not in_check(board, RED)
    assert not in_check(board, BLACK)


def test_general_may_not_step_onto_open_file_facing_enemy() -> None:
    board = _board({"e2": "G", "f10": "g"})
    assert "f2" in _names(pseudo_legal_moves(board, parse_square("e2")))
    assert _names(legal_moves(board, "e2")) == {"e1", "e3", "d2"}


def test_piece_pinned_by_flying_general() -> None:
    # the cannon is the only piece between the Generals and must stay on the file
    board = _board({"e1": "G", "e10": "g", "e5": "C"})
    assert _names(legal_moves(board, "e5")) == {"e2", "e3", "e4", "e6", "e7", "e8", "e9"}


# --- Check by each attacker ------------------------------------------------------


def test_chariot_check() -> None:
    board = _board({"d1": "G", "e10": "g", "e3": "R"})
    assert in_check(board, BLACK)
    assert _names(attackers(board, BLACK)) == {"e3"}


def test_cannon_check_needs_exactly_one_screen() -> None:
    assert not in_check(_board({"d1": "G", "e10": "g", "e3": "C"}), BLACK)
    board = _board({"d1": "G", "e10": "g", "e3": "C", "e9": "a"})
    assert in_check(board, BLACK)
    assert _names(attackers(board, BLACK)) == {"e3"}
    assert not in_check(_board({"d1": "G", "e10": "g", "e3": "C", "e9": "a", "e6": "P"}), BLACK)


def test_horse_check_and_hobbled_leg() -> None:
    assert in_check(_board({"d1": "G", "e10": "g", "d8": "H"}), BLACK)
    assert not in_check(_board({"d1": "G", "e10": "g", "d8": "H", "d9": "a"}), BLACK)


def test_pawn_check_from_front_and_side() -> None:
    assert in_check(_board({"d1": "G", "e10": "g", "e9": "P"}), BLACK)
    assert in_check(_board({"d1": "G", "e10": "g", "d10": "P"}), BLACK)


def test_missing_general_raises() -> None:
    board = _board({"e1": "G"})
    with pytest.raises(MissingGeneral):
        in_check(board, BLACK)


def test_in_check_does_not_use_the_legality_filter(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*args: object) -> None:
        raise AssertionError("in_check must not call legal_moves")

    monkeypatch.setattr(rules, "legal_moves", _boom)
    assert not in_check(Board.start_position(), RED)


# --- Legality filter -------------------------------------------------------------


def test_pinned_chariot_stays_on_file() -> None:
    board = _board({"e1": "G", "e3": "R", "e8": "r", "d10": "g"})
    assert _names(legal_moves(board, "e3")) == {"e2", "e4", "e5", "e6", "e7", "e8"}
    assert "d3" in _names(pseudo_legal_moves(board, parse_square("e3")))


def test_legality_filter_leaves_board_untouched() -> None:
    board = _board({"e1": "G", "e3": "R", "e8": "r", "d10": "g"})
    before = board.copy()
    legal_moves(board, "e3")
    legal_moves(board, "e1")
    assert board == before
    assert board.general_square(RED) == parse_square("e1")


def test_must_answer_check() -> None:
    # black chariot on e8 checks; red can only block or step aside
    board = _board({"e1": "G", "e8": "r", "d10": "g", "a3": "R"})
    assert in_check(board, RED)
    assert _names(legal_moves(board, "a3")) == {"e3"}
    # e2 stays on the checking file, d1 faces the black General
    assert _names(legal_moves(board, "e1")) == {"f1"}


def test_is_legal_move() -> None:
    board = Board.start_position()
    assert is_legal_move(board, "b1", "c3")
    assert not is_legal_move(board, "b1", "d2")
    assert not is_legal_move(board, "e5", "e6")


# --- Properties over random play --------------------------------------------------


def _confined(board: Board, piece: Piece, dst) -> bool:
    if piece.kind is PieceKind.ADVISOR:
        return in_fortress(dst, piece.side)
    if piece.kind is PieceKind.GENERAL:
        return in_fortress(dst, piece.side) or dst == board.find_general(piece.side.opponent)
    if piece.kind is PieceKind.ELEPHANT:
        return behind_river(dst, piece.side)
    return True


@pytest.mark.parametrize("seed", [1, 7, 2024])
def test_random_play_keeps_invariants(seed: int) -> None:
    rng = random.Random(seed)
    state = GameState.new()
    for _ in range(40):
        for sq, piece in state.board.pieces():
            for dst in pseudo_legal_moves(state.board, sq):
                assert _confined(state.board, piece, dst)
        moves = state.all_legal_moves()
        if not moves:
            break
        src, dst = rng.choice(moves)
        mover = state.turn
        state.apply_move(src, dst)
        assert not in_check(state.board, mover)
        assert state.board.piece_at(state.board.general_square(mover)) == Piece(PieceKind.GENERAL, mover)
