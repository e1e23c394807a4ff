"""Board wrapper over python-chess providing SAN history and game status."""

from typing import Dict, List, Optional

import chess

# Starting army per side, kings excluded.
STARTING_COUNTS = {
    chess.PAWN: 8,
    chess.KNIGHT: 2,
    chess.BISHOP: 2,
    chess.ROOK: 2,
    chess.QUEEN: 1,
}


class ChessBoard:
    def __init__(self, fen: str = None):
        """Initialize from FEN or the standard starting position."""
        self.board = chess.Board(fen) if fen else chess.Board()
        self.move_history: List[str] = []

    def reset(self):
        """Reset to the initial position."""
        self.board.reset()
        self.move_history.clear()

    def set_fen(self, fen: str):
        """Set board state from a FEN string. Raises ValueError on a bad FEN."""
        self.board.set_fen(fen)
        self.move_history.clear()

    def get_fen(self) -> str:
        """Return the current FEN."""
        return self.board.fen()

    def parse_move(self, move_str: str) -> Optional[chess.Move]:
        """Resolve a UCI or SAN string to a legal move, or None."""
        move_str = (move_str or "").strip()
        if not move_str:
            return None
        try:
            move = chess.Move.from_uci(move_str)
        except ValueError:
            move = None
        if move is not None:
            if move not in self.board.legal_moves and self._is_bare_promotion(move):
                move = chess.Move(move.from_square, move.to_square, promotion=chess.QUEEN)
            return move if move in self.board.legal_moves else None
        try:
            return self.board.parse_san(move_str)
        except ValueError:
            return None

    def _is_bare_promotion(self, move: chess.Move) -> bool:
        piece = self.board.piece_at(move.from_square)
        return (move.promotion is None and piece is not None
                and piece.piece_type == chess.PAWN
                and chess.square_rank(move.to_square) in (0, 7))

    def make_move(self, move_str: str) -> bool:
        """Push a UCI ('e2e4') or SAN ('e4') move. Returns True if legal."""
        move = self.parse_move(move_str)
        if move is None:
            return False
        self.push(move)
        return True

    def push(self, move: chess.Move) -> str:
        """Push an already-legal move and record its SAN."""
        san = self.board.san(move)
        self.board.push(move)
        self.move_history.append(san)
        return san

    def undo_move(self):
        """Pop the last move."""
        if self.board.move_stack:
            self.board.pop()
        if self.move_history:
            self.move_history.pop()

    def get_legal_moves(self) -> List[str]:
        """Return legal moves as UCI strings."""
        return [m.uci() for m in self.board.legal_moves]

    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self.board.is_game_over()

    def winner(self) -> Optional[str]:
        if not self.board.is_game_over():
            return None
        outcome = self.board.outcome()
        if outcome is None or outcome.winner is None:
            return "draw"
        return "white" if outcome.winner == chess.WHITE else "black"

    def status(self) -> str:
        b = self.board
        if b.is_checkmate():
            return f"Checkmate! {'Black' if b.turn == chess.WHITE else 'White'} wins."
        if b.is_stalemate():
            return "Stalemate!"
        if b.is_game_over():
            return "Draw!"
        if b.is_check():
            return "Check!"
        return "Active"

    def captured_pieces(self) -> Dict[str, List[str]]:
        """Piece symbols each side has lost, compared to the starting army."""
        captured = {}
        for color, name in ((chess.WHITE, "white"), (chess.BLACK, "black")):
            lost = []
            for pt, count in STARTING_COUNTS.items():
                missing = max(0, count - len(self.board.pieces(pt, color)))
                lost.extend([chess.piece_symbol(pt)] * missing)
            captured[name] = lost
        return captured

    def print_board(self):
        """Print ASCII representation."""
        print(self.board)
