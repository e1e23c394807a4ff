"""FastAPI REST interface for playing against the engine."""

import logging
import threading
from typing import Optional

import chess
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from gambit.commentary import CommentaryService
from gambit.config import CONFIG
from gambit.core.policy import Difficulty
from gambit.main import Engine

logging.basicConfig(level=CONFIG.log_level)
_log = logging.getLogger(__name__)

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared game instance; every handler touches it under the lock.
engine = Engine()
board = engine.board
commentator = CommentaryService()
_board_lock = threading.Lock()


def _check_difficulty(v: Optional[int]) -> Optional[int]:
    if v is not None and v not in [d.value for d in Difficulty]:
        raise ValueError("difficulty must be 1 (easy), 2 (medium) or 3 (hard)")
    return v


class FenRequest(BaseModel):
    fen: str


class MoveRequest(BaseModel):
    move: str  # UCI "e2e4" or SAN "e4"


class SearchRequest(BaseModel):
    difficulty: Optional[int] = None

    @field_validator("difficulty")
    @classmethod
    def valid_difficulty(cls, v: Optional[int]) -> Optional[int]:
        return _check_difficulty(v)


class DifficultyRequest(BaseModel):
    difficulty: int

    @field_validator("difficulty")
    @classmethod
    def valid_difficulty(cls, v: int) -> int:
        return _check_difficulty(v)


def _state() -> dict:
    b = board.board
    return {
        "fen": b.fen(),
        "turn": "white" if b.turn == chess.WHITE else "black",
        "legal_moves": board.get_legal_moves(),
        "history": list(board.move_history),
        "status": board.status(),
        "in_check": b.is_check(),
        "captured": board.captured_pieces(),
        "is_game_over": b.is_game_over(),
        "winner": board.winner(),
        "evaluation": engine.evaluate(),
        "difficulty": int(engine.difficulty),
    }


@app.get("/board")
def get_board():
    with _board_lock:
        return _state()


@app.post("/position")
def set_position(req: FenRequest):
    with _board_lock:
        try:
            board.set_fen(req.fen)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Invalid FEN: {e}")
        return {"fen": board.get_fen()}


@app.post("/move")
def make_move(req: MoveRequest):
    with _board_lock:
        if board.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        if not board.make_move(req.move):
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        return {"fen": board.get_fen(), "move": req.move, "san": board.move_history[-1],
                "status": board.status()}


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    with _board_lock:
        if board.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        level = engine.difficulty if req.difficulty is None else Difficulty(req.difficulty)
        best = engine.get_best_move(level)
        return {
            "best_move": best.uci() if best else None,
            "san": board.board.san(best) if best else None,
            "difficulty": int(level),
            "fen": board.get_fen(),
        }


@app.post("/ai-move")
def ai_move(req: SearchRequest = SearchRequest()):
    with _board_lock:
        played = engine.play_ai_move(req.difficulty)
        if played is None:
            raise HTTPException(status_code=400, detail="Game is already over")
        uci, san = played
        return {"move": uci, "san": san, "fen": board.get_fen(), "status": board.status()}


@app.post("/difficulty")
def set_difficulty(req: DifficultyRequest):
    with _board_lock:
        engine.set_difficulty(req.difficulty)
        return {"difficulty": int(engine.difficulty), "name": engine.difficulty.name.lower()}


@app.post("/undo")
def undo_move():
    with _board_lock:
        board.undo_move()
        return {"fen": board.get_fen(), "history": list(board.move_history)}


@app.post("/reset")
def reset_board():
    with _board_lock:
        board.reset()
        return {"fen": board.get_fen()}


@app.post("/commentary")
def get_commentary():
    with _board_lock:
        fen = board.get_fen()
        history = list(board.move_history)
    last_move = history[-1] if history else "(none)"
    return {"text": commentator.commentary(fen, last_move, history)}


@app.post("/hint")
def get_hint():
    with _board_lock:
        fen = board.get_fen()
        turn = "w" if board.board.turn == chess.WHITE else "b"
    return {"text": commentator.hint(fen, turn)}
