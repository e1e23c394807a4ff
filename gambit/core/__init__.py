"""Core engine components: board, evaluator, search, and difficulty policy."""

from .board import ChessBoard
from .evaluator import Evaluator
from .search import SearchEngine
from .policy import Difficulty, select_move
