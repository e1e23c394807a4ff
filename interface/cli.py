"""Terminal game against the computer.

Usage
-----
    python -m interface.cli                 # medium, computer plays Black
    python -m interface.cli 3               # hard
    python -m interface.cli 1 white         # easy, computer plays White
"""

import logging
import sys
import time

import chess

from gambit.commentary import CommentaryService
from gambit.config import CONFIG
from gambit.main import Engine

HELP = "Commands: a move (e4 / e2e4), 'hint', 'undo', 'board', 'quit'"


def play(engine: Engine, computer: chess.Color = chess.BLACK,
         read=input, write=print, delay_ms: int = 0,
         commentator: CommentaryService = None) -> str:
    """Run a game loop until it ends or the player quits. Returns the final status."""
    commentator = commentator or CommentaryService()
    board = engine.board
    write(HELP)
    while not board.is_game_over():
        if board.board.turn == computer:
            if delay_ms:
                time.sleep(delay_ms / 1000)
            uci, san = engine.play_ai_move()
            write(f"Engine plays: {san} ({uci}) | Eval: {engine.evaluate()}")
            continue

        write(str(board.board))
        write("----------------------------")
        try:
            command = read("Your move: ").strip()
        except EOFError:
            return "Aborted"

        if command == "quit":
            return "Aborted"
        if command == "board":
            continue
        if command == "hint":
            turn = "w" if board.board.turn == chess.WHITE else "b"
            write(f"Coach: {commentator.hint(board.get_fen(), turn)}")
            continue
        if command == "undo":
            # take back the computer's reply as well as the player's move
            board.undo_move()
            board.undo_move()
            continue
        if not board.make_move(command):
            write("Illegal move, try again.")
            continue
        if board.status() == "Check!":
            write("Check!")

    write(str(board.board))
    write(f"Game Over: {board.status()}")
    write(f"Result: {board.board.result()}")
    return board.status()


def main() -> None:
    logging.basicConfig(level=CONFIG.log_level)
    args = [a.lower() for a in sys.argv[1:]]
    difficulty = CONFIG.search.depth
    computer = chess.WHITE if CONFIG.ui.computer_side == "white" else chess.BLACK
    for arg in args:
        if arg.isdigit():
            difficulty = int(arg)
        elif arg in ("white", "black"):
            computer = chess.WHITE if arg == "white" else chess.BLACK
        else:
            print(f"Unknown argument: {arg}")
            print("Usage: python -m interface.cli [1|2|3] [white|black]")
            sys.exit(1)

    try:
        engine = Engine(difficulty)
    except ValueError:
        print(f"Difficulty must be 1, 2 or 3, got {difficulty}")
        sys.exit(1)
    play(engine, computer, delay_ms=CONFIG.ui.ai_delay_ms)


if __name__ == "__main__":
    main()
