import logging
from typing import Optional, Tuple

import chess

from gambit.config import CONFIG
from gambit.core.board import ChessBoard
from gambit.core.evaluator import Evaluator
from gambit.core.policy import Difficulty, make_rng, select_move

_log = logging.getLogger(__name__)


class Engine:
    def __init__(self, difficulty=None, seed: Optional[int] = None, fen: str = None):
        self.board = ChessBoard(fen)
        self.evaluator = Evaluator()
        self.rng = make_rng(seed)
        self.difficulty = Difficulty(CONFIG.search.depth if difficulty is None else difficulty)

    def set_difficulty(self, difficulty):
        self.difficulty = Difficulty(difficulty)

    def get_best_move(self, difficulty=None) -> Optional[chess.Move]:
        """Choose the computer's move without playing it.

        ``difficulty`` applies to this call only; the engine keeps its own level.
        """
        level = self.difficulty if difficulty is None else Difficulty(difficulty)
        return select_move(self.board.board, level, rng=self.rng,
                           evaluator=self.evaluator)

    def play_ai_move(self, difficulty=None) -> Optional[Tuple[str, str]]:
        """Choose and play the computer's move. Returns (uci, san) or None if the game is over."""
        if self.board.is_game_over():
            return None
        move = self.get_best_move(difficulty)
        if move is None:
            return None
        uci = move.uci()
        san = self.board.push(move)
        level = self.difficulty if difficulty is None else Difficulty(difficulty)
        _log.info("%s plays %s at %s", CONFIG.ui.engine_name, san, level.name.lower())
        return uci, san

    def make_move(self, move_str: str) -> bool:
        return self.board.make_move(move_str)

    def evaluate(self) -> int:
        return self.evaluator.evaluate(self.board.board)

    def print_board(self):
        self.board.print_board()
