"""Game commentary and hints from a remote text-generation API.

The service posts a short prompt to the Gemini ``generateContent`` REST
endpoint and returns the reply text. It never raises to the caller: a missing
API key, a network error, or an unreadable reply all come back as a canned
line so the game keeps going.

Usage
-----
    service = CommentaryService()
    service.commentary(board.fen(), "Nf3", ["e4", "e5", "Nf3"])
    service.hint(board.fen(), "w")
"""

import http.client
import json
import logging
import os
import urllib.error
import urllib.request
from typing import Optional, Sequence

from gambit.config import CONFIG, CommentaryConfig

_log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Canned replies
# ---------------------------------------------------------------------------

NO_KEY_COMMENTARY = "Gemini API Key missing. Add it to enable commentary."
NO_KEY_HINT = "Gemini API Key missing."
EMPTY_COMMENTARY = "Analyzing position..."
EMPTY_HINT = "Think about controlling the center."
FAILED_COMMENTARY = "The Grandmaster is silent (Network Error)."
FAILED_HINT = "Focus on your piece development."

COMMENTARY_PROMPT = """\
You are a witty, sarcastic, yet insightful Chess Grandmaster commentator.
Current Board FEN: {fen}
Last Move: {last_move}
Game History: {history}...

Provide a very short (max 2 sentences) commentary on the current situation.
Focus on who is winning or if a blunder was made. Be expressive but concise.
Do not explain rules. Just react to the move.
"""

HINT_PROMPT = """\
You are a Chess Coach.
FEN: {fen}
Turn: {side}

Suggest 1 good strategic idea or move for the current player. Keep it under 30 words.
"""


class CommentaryError(Exception):
    """The text-generation request failed or returned something unreadable."""


class CommentaryService:
    def __init__(self, cfg: Optional[CommentaryConfig] = None, api_key: Optional[str] = None):
        self.cfg = cfg or CONFIG.commentary
        self._api_key = api_key

    @property
    def api_key(self) -> Optional[str]:
        if self._api_key:
            return self._api_key
        return os.environ.get(self.cfg.api_key_env) or os.environ.get("API_KEY")

    @property
    def available(self) -> bool:
        return self.cfg.enabled and bool(self.api_key)

    def commentary(self, fen: str, last_move: str, history: Sequence[str]) -> str:
        if not self.available:
            return NO_KEY_COMMENTARY
        recent = list(history)[-self.cfg.history_window:]
        prompt = COMMENTARY_PROMPT.format(fen=fen, last_move=last_move, history=", ".join(recent))
        try:
            return self.generate(prompt) or EMPTY_COMMENTARY
        except CommentaryError as e:
            _log.warning("Commentary request failed: %s", e)
            return FAILED_COMMENTARY

    def hint(self, fen: str, turn: str) -> str:
        if not self.available:
            return NO_KEY_HINT
        side = "White" if turn in ("w", "white") else "Black"
        try:
            return self.generate(HINT_PROMPT.format(fen=fen, side=side)) or EMPTY_HINT
        except CommentaryError as e:
            _log.warning("Hint request failed: %s", e)
            return FAILED_HINT

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the first candidate's text ('' if none)."""
        url = f"{self.cfg.endpoint}/{self.cfg.model}:generateContent"
        body = json.dumps({"contents": [{"parts": [{"text": prompt}]}]}).encode("utf-8")
        request = urllib.request.Request(
            url,
            data=body,
            headers={"Content-Type": "application/json", "x-goog-api-key": self.api_key},
            method="POST",
        )
        try:
            with urllib.request.urlopen(request, timeout=self.cfg.timeout_s) as resp:
                payload = json.loads(resp.read().decode("utf-8"))
        except (urllib.error.URLError, http.client.HTTPException, TimeoutError, OSError,
                ValueError) as e:
            raise CommentaryError(str(e)) from e
        return _extract_text(payload)


def _extract_text(payload: dict) -> str:
    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()
