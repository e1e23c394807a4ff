"""Static evaluation: material plus pawn/knight/bishop piece-square tables.

Scores are always from White's point of view (positive = White is ahead).
Turning that into the value for the side the search is playing happens in
exactly one place, ``SearchEngine._leaf_score``.
"""

from typing import Dict, Optional

import chess

from gambit.config import CONFIG, EvalConfig


class Evaluator:
    def __init__(self, cfg: Optional[EvalConfig] = None):
        self.cfg = cfg or CONFIG.eval
        self.values = {
            pt: self.cfg.piece_values[chess.piece_name(pt).upper()]
            for pt in chess.PIECE_TYPES
        }
        self.tables = {
            chess.PAWN: self.cfg.pawn_table,
            chess.KNIGHT: self.cfg.knight_table,
            chess.BISHOP: self.cfg.bishop_table,
        }

    def evaluate(self, board: chess.Board) -> int:
        score = 0
        for sq, piece in board.piece_map().items():
            value = self.values.get(piece.piece_type, 0) + self.positional(piece, sq)
            score += value if piece.color == chess.WHITE else -value
        return score

    def positional(self, piece: chess.Piece, sq: chess.Square) -> int:
        """Table bonus for ``piece`` standing on ``sq``.

        Tables are written a8-first, so White flips the rank of the
        python-chess square (a1 = 0) and Black uses it unchanged.
        """
        if not self.cfg.use_positional:
            return 0
        table = self.tables.get(piece.piece_type)
        if not table:
            return 0
        idx = sq ^ 56 if piece.color == chess.WHITE else sq
        return table[idx]

    def material(self, board: chess.Board, color: chess.Color) -> int:
        """Plain material sum for one side, kings excluded."""
        return sum(
            self.values[pt] * len(board.pieces(pt, color))
            for pt in chess.PIECE_TYPES
            if pt != chess.KING
        )

    def breakdown(self, board: chess.Board) -> Dict[str, int]:
        out = {"white_material": 0, "black_material": 0,
               "white_positional": 0, "black_positional": 0}
        for sq, piece in board.piece_map().items():
            side = "white" if piece.color == chess.WHITE else "black"
            if piece.piece_type != chess.KING:
                out[f"{side}_material"] += self.values[piece.piece_type]
            out[f"{side}_positional"] += self.positional(piece, sq)
        out["total"] = self.evaluate(board)
        return out
