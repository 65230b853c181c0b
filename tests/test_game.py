"""Tests for game state and move application."""

import os
import sys

import pytest
from loguru import logger

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from xiangqi import Board, GameState, IllegalMove, Piece, PieceKind, Side
from xiangqi.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_new_game() -> None:
    state = GameState.new()
    assert state.turn is Side.RED
    assert state.board == Board.start_position()
    assert not state.in_check()


def test_horse_opening_move() -> None:
    state = GameState.new()
    captured = state.apply_move("b1", "c3")
    assert captured is None
    assert state.piece_at("c3") == Piece(PieceKind.HORSE, Side.RED)
    assert state.piece_at("b1") is None
    assert state.turn is Side.BLACK


def test_capture_is_returned_and_removed() -> None:
    state = GameState.new()
    state.apply_move("h3", "e3")
    state.apply_move("h10", "g8")
    captured = state.apply_move("e3", "e7")
    assert captured == Piece(PieceKind.PAWN, Side.BLACK)
    assert state.piece_at("e7") == Piece(PieceKind.CANNON, Side.RED)
    assert len(list(state.board.pieces(Side.BLACK))) == 15


def test_illegal_destination_rejected() -> None:
    state = GameState.new()
    with pytest.raises(IllegalMove):
        state.apply_move("b1", "d2")
    assert state.piece_at("b1") == Piece(PieceKind.HORSE, Side.RED)
    assert state.turn is Side.RED


def test_wrong_side_rejected() -> None:
    state = GameState.new()
    with pytest.raises(IllegalMove):
        state.apply_move("b10", "c8")
    assert not state.is_legal_move("b10", "c8")
    assert state.is_legal_move("b1", "c3")


def test_empty_origin_rejected_even_unvalidated() -> None:
    state = GameState.new()
    with pytest.raises(IllegalMove):
        state.apply_move("e5", "e6", validate=False)


def test_unvalidated_move_is_applied_as_given() -> None:
    state = GameState.new()
    state.apply_move("a1", "a5", validate=False)
    assert state.piece_at("a5") == Piece(PieceKind.CHARIOT, Side.RED)
    assert state.turn is Side.BLACK


def test_unvalidated_move_logs_the_piece_owner() -> None:
    state = GameState.new()
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="INFO", format="{message}")
    try:
        state.apply_move("b10", "c8", validate=False)
    finally:
        logger.remove(handler_id)
    assert state.piece_at("c8") == Piece(PieceKind.HORSE, Side.BLACK)
    assert any(m.startswith("BLACK h b10-c8") for m in messages)
    assert not any(m.startswith("RED h") for m in messages)


def test_strict_moves_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XIANGQI_STRICT_MOVES", "false")
    assert Settings().strict_moves is False
    state = GameState.new()
    state.apply_move("a1", "a5")
    assert state.piece_at("a5") == Piece(PieceKind.CHARIOT, Side.RED)


def test_default_settings() -> None:
    settings = Settings()
    assert settings.strict_moves is True
    assert settings.log_level == "INFO"


def test_check_is_reported() -> None:
    board = Board.from_pieces(
        {
            "d1": Piece(PieceKind.GENERAL, Side.RED),
            "e10": Piece(PieceKind.GENERAL, Side.BLACK),
            "a3": Piece(PieceKind.CHARIOT, Side.RED),
        }
    )
    state = GameState(board, Side.RED)
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="INFO", format="{message}")
    try:
        state.apply_move("a3", "e3")
    finally:
        logger.remove(handler_id)
    assert state.in_check()
    assert state.in_check(Side.BLACK)
    assert any("BLACK is in check" in m for m in messages)


def test_all_legal_moves_follow_side_to_move() -> None:
    state = GameState.new()
    state.apply_move("b1", "c3")
    moves = state.all_legal_moves()
    assert len(moves) == 43  # the b8 cannon lost its capture on b1
    assert all(state.piece_at(src).side is Side.BLACK for src, _ in moves)
