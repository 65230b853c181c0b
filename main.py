"""
Xiangqi rules engine — console demo
Plays a short opening, printing the board, legal moves and check status.
"""

import sys

from colorama import Fore, Style, init
from loguru import logger

from xiangqi import GameState, Side
from xiangqi.settings import get_settings
from xiangqi.squares import FILES, RANKS, Square, parse_square

init(autoreset=True)

# ── Color palette ──────────────────────────────────────────────────────────────
RED_PIECE = Fore.RED + Style.BRIGHT
BLACK_PIECE = Fore.CYAN + Style.BRIGHT
BOARD_FG = Fore.WHITE
DIM = Style.DIM
GOLD = Fore.YELLOW + Style.BRIGHT
GREEN = Fore.GREEN + Style.BRIGHT
RESET = Style.RESET_ALL

# Short opening: central cannon against screen horse.
OPENING = [
    ("h3", "e3"),
    ("h10", "g8"),
    ("b1", "c3"),
    ("b10", "c8"),
    ("e3", "e7"),
]


def colored_board(state: GameState, highlight: set[Square] | None = None) -> str:
    """Return a colored board string; `highlight` squares are marked in green."""
    highlight = highlight or set()
    lines = []
    lines.append(BOARD_FG + "    a b c d e f g h i" + RESET)
    lines.append(BOARD_FG + "   ╔═══════════════════╗" + RESET)
    for rank in range(RANKS):
        row_str = BOARD_FG + f"{RANKS - rank:>2} ║" + RESET
        for file in range(FILES):
            sq = Square(file, rank)
            piece = state.piece_at(sq)
            if piece is None:
                row_str += (GREEN + " *" if sq in highlight else DIM + " ·") + RESET
            else:
                color_code = RED_PIECE if piece.side is Side.RED else BLACK_PIECE
                if sq in highlight:
                    color_code = GREEN
                row_str += " " + color_code + piece.symbol + RESET
        row_str += BOARD_FG + " ║" + RESET
        lines.append(row_str)
    lines.append(BOARD_FG + "   ╚═══════════════════╝" + RESET)
    turn_label = (
        RED_PIECE + "RED (紅)" if state.turn is Side.RED else BLACK_PIECE + "BLACK (黑)"
    ) + RESET
    lines.append(f"  Turn: {turn_label}")
    return "\n".join(lines)


def play_through(state: GameState, moves: list[tuple[str, str]]) -> None:
    W = 50
    sep = BOARD_FG + "─" * W + RESET
    heading = GOLD + "=" * W + RESET

    print(heading)
    print(GOLD + "    Xiangqi Rules Engine — Opening Replay" + RESET)
    print(heading)

    print("\nInitial position:")
    print(colored_board(state))
    print(f"\n{DIM}{len(state.all_legal_moves())} legal moves for RED{RESET}")
    print(sep)

    for i, (src, dst) in enumerate(moves):
        is_red = state.turn is Side.RED
        side_col = RED_PIECE if is_red else BLACK_PIECE
        side_lbl = "RED  (紅)" if is_red else "BLACK (黑)"
        piece = state.piece_at(src)
        targets = set(state.legal_moves(src))

        prefix = GREEN + f"Move {i // 2 + 1}" + RESET if i % 2 == 0 else "      …"
        print(f"{prefix}  [{side_col}{side_lbl}{RESET}]  {Style.BRIGHT}{piece.symbol} {src}-{dst}{RESET}")
        print(f"  {DIM}{piece.symbol} on {src} can reach: {' '.join(sorted(map(str, targets)))}{RESET}")

        captured = state.apply_move(src, dst)
        print(colored_board(state, highlight={parse_square(dst)}))
        if captured is not None:
            print(GOLD + f"  captured {captured.symbol}" + RESET)
        if state.in_check():
            print(GOLD + f"\n  ★  {state.turn.name} is in check  ★" + RESET)

        print(sep)


if __name__ == "__main__":
    logger.remove()
    logger.add(sys.stderr, level=get_settings().log_level)
    play_through(GameState.new(), OPENING)
