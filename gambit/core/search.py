import logging
import random
import time
from typing import List, Optional, Tuple

import chess

from gambit.config import CONFIG, SearchConfig
from gambit.core.evaluator import Evaluator

_log = logging.getLogger(__name__)

INF = 100000
MATE_SCORE = 50000


class SearchEngine:
    """Fixed-depth minimax with alpha-beta pruning.

    The root loop maximizes over the side to move; the first recursive layer
    is the opponent and minimizes, and the layers alternate from there. All
    scores inside one search are seen from the root mover's side.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None, depth: int = 2,
                 rng: Optional[random.Random] = None,
                 cfg: Optional[SearchConfig] = None):
        self.evaluator = evaluator or Evaluator()
        self.max_depth = depth
        self.cfg = cfg or CONFIG.search
        self.rng = rng or random.Random(self.cfg.seed)
        self.nodes = 0
        # Black is the side the computer plays by default.
        self._perspective = chess.BLACK

    def search_best_move(self, board: chess.Board) -> Tuple[Optional[chess.Move], int]:
        """Return ``(move, score)`` for the side to move, ``(None, 0)`` if it has no moves.

        ``board`` is mutated during the search and restored before returning.
        """
        moves = list(board.legal_moves)
        if not moves:
            return None, 0

        if self.cfg.shuffle_moves:
            self.rng.shuffle(moves)

        self.nodes = 0
        self._perspective = board.turn
        start_time = time.time()

        best_move = None
        best_value = -INF - 1
        for move in moves:
            board.push(move)
            try:
                value = self._minimax(board, self.max_depth - 1, -INF, INF, False)
            finally:
                board.pop()
            # strict: ties keep the earlier move in shuffled order
            if value > best_value:
                best_value = value
                best_move = move

        elapsed = time.time() - start_time
        _log.debug("depth %d best %s score %d nodes %d time %.3fs",
                   self.max_depth, best_move, best_value, self.nodes, elapsed)
        return best_move or moves[0], best_value

    def root_scores(self, board: chess.Board) -> List[Tuple[chess.Move, int]]:
        """Score every root move in generation order, without shuffling."""
        self._perspective = board.turn
        scores = []
        for move in list(board.legal_moves):
            board.push(move)
            try:
                scores.append((move, self._minimax(board, self.max_depth - 1, -INF, INF, False)))
            finally:
                board.pop()
        return scores

    def _minimax(self, board: chess.Board, depth: int, alpha: int, beta: int,
                 maximizing: bool) -> int:
        self.nodes += 1
        if depth <= 0 or board.is_game_over():
            return self._leaf_score(board)

        if maximizing:
            best = -INF
            for move in list(board.legal_moves):
                board.push(move)
                try:
                    value = self._minimax(board, depth - 1, alpha, beta, False)
                finally:
                    board.pop()
                best = max(best, value)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return best

        best = INF
        for move in list(board.legal_moves):
            board.push(move)
            try:
                value = self._minimax(board, depth - 1, alpha, beta, True)
            finally:
                board.pop()
            best = min(best, value)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return best

    def _leaf_score(self, board: chess.Board) -> int:
        """Score a leaf for the root mover.

        The evaluator is White-centric, so this is the one place a score is
        negated: a Black root mover gets ``-evaluate(board)``. A White root
        mover gets ``+evaluate(board)`` unchanged, so searching for White is
        not the always-negated Black case with the colours swapped.
        """
        if self.cfg.score_checkmate and board.is_checkmate():
            # the side to move is mated
            return -MATE_SCORE if board.turn == self._perspective else MATE_SCORE
        score = self.evaluator.evaluate(board)
        return score if self._perspective == chess.WHITE else -score
