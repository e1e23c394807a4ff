"""Difficulty tiers and the move-selection entry point used by callers."""

import enum
import logging
import random
from typing import Optional

import chess

from gambit.config import CONFIG, SearchConfig
from gambit.core.evaluator import Evaluator
from gambit.core.search import SearchEngine

_log = logging.getLogger(__name__)


class Difficulty(enum.IntEnum):
    """Difficulty doubles as search depth in plies."""
    EASY = 1
    MEDIUM = 2
    HARD = 3


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Seeded source when ``seed`` is given, otherwise the configured seed (or none)."""
    return random.Random(CONFIG.search.seed if seed is None else seed)


def select_move(board: chess.Board, difficulty: int, *,
                rng: Optional[random.Random] = None,
                cfg: Optional[SearchConfig] = None,
                evaluator: Optional[Evaluator] = None) -> Optional[chess.Move]:
    """Pick the computer's move, or ``None`` when the side to move has no legal move.

    The board is left exactly as it was passed in; applying the returned move
    is up to the caller.
    """
    level = Difficulty(difficulty)
    cfg = cfg or CONFIG.search
    rng = rng or make_rng()

    moves = list(board.legal_moves)
    if not moves:
        return None

    if level == Difficulty.EASY and rng.random() < cfg.easy_random_rate:
        move = rng.choice(moves)
        _log.debug("easy tier random move %s", move)
        return move

    engine = SearchEngine(evaluator, depth=int(level), rng=rng, cfg=cfg)
    move, _score = engine.search_best_move(board)
    return move
