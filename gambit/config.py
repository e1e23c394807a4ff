# gambit/config.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging
import os
import tomllib

_log = logging.getLogger(__name__)

# Defaults (centipawns)
PIECE_VALUES = {
    "PAWN": 100,
    "KNIGHT": 320,
    "BISHOP": 330,
    "ROOK": 500,
    "QUEEN": 900,
    "KING": 20000,
}

# Piece-square tables, a8 first, read as stored by White and mirrored for Black.
PAWN_TABLE = [
     0,  0,   0,   0,   0,   0,  0,  0,
    50, 50,  50,  50,  50,  50, 50, 50,
    10, 10,  20,  30,  30,  20, 10, 10,
     5,  5,  10,  25,  25,  10,  5,  5,
     0,  0,   0,  20,  20,   0,  0,  0,
     5, -5, -10,   0,   0, -10, -5,  5,
     5, 10,  10, -20, -20,  10, 10,  5,
     0,  0,   0,   0,   0,   0,  0,  0,
]

KNIGHT_TABLE = [
    -50, -40, -30, -30, -30, -30, -40, -50,
    -40, -20,   0,   0,   0,   0, -20, -40,
    -30,   0,  10,  15,  15,  10,   0, -30,
    -30,   5,  15,  20,  20,  15,   5, -30,
    -30,   0,  15,  20,  20,  15,   0, -30,
    -30,   5,  10,  15,  15,  10,   5, -30,
    -40, -20,   0,   5,   5,   0, -20, -40,
    -50, -40, -30, -30, -30, -30, -40, -50,
]

BISHOP_TABLE = [
    -20, -10, -10, -10, -10, -10, -10, -20,
    -10,   0,   0,   0,   0,   0,   0, -10,
    -10,   0,   5,  10,  10,   5,   0, -10,
    -10,   5,   5,  10,  10,   5,   5, -10,
    -10,   0,  10,  10,  10,  10,   0, -10,
    -10,  10,  10,  10,  10,  10,  10, -10,
    -10,   5,   0,   0,   0,   0,   5, -10,
    -20, -10, -10, -10, -10, -10, -10, -20,
]

@dataclass
class SearchConfig:
    depth: int = 2                   # default difficulty (1 easy, 2 medium, 3 hard)
    easy_random_rate: float = 0.3    # chance the easy tier plays a random legal move
    shuffle_moves: bool = True       # shuffle root moves so equal scores vary between games
    score_checkmate: bool = True     # mated leaves score as a win/loss instead of material
    seed: Optional[int] = None       # None means non-deterministic

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    use_positional: bool = True
    pawn_table: List[int] = field(default_factory=lambda: list(PAWN_TABLE))
    knight_table: List[int] = field(default_factory=lambda: list(KNIGHT_TABLE))
    bishop_table: List[int] = field(default_factory=lambda: list(BISHOP_TABLE))

@dataclass
class CommentaryConfig:
    enabled: bool = True
    model: str = "gemini-2.5-flash"
    endpoint: str = "https://generativelanguage.googleapis.com/v1beta/models"
    timeout_s: float = 10.0
    api_key_env: str = "GEMINI_API_KEY"
    history_window: int = 5

@dataclass
class UIConfig:
    engine_name: str = "Gambit"
    ai_delay_ms: int = 500           # pause before the computer replies (callers only)
    computer_side: str = "black"

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    commentary: CommentaryConfig = field(default_factory=CommentaryConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "commentary", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if not hasattr(target, k):
                    _log.warning("Unknown config key [%s] %s ignored", section, k)
                elif isinstance(v, dict):
                    # partial tables override single entries of the defaults
                    setattr(target, k, {**getattr(target, k), **v})
                else:
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"]).upper()
        return cfg

def apply_env_overrides(cfg: Config, environ=os.environ) -> Config:
    """Apply GAMBIT_DIFFICULTY / GAMBIT_SEED; bad values are ignored with a warning."""
    for name, attr in (("GAMBIT_DIFFICULTY", "depth"), ("GAMBIT_SEED", "seed")):
        raw = environ.get(name)
        if not raw:
            continue
        try:
            value = int(raw)
        except ValueError:
            _log.warning("Ignoring %s=%r: not an integer", name, raw)
            continue
        if attr == "depth" and value not in (1, 2, 3):
            _log.warning("Ignoring %s=%r: difficulty must be 1, 2 or 3", name, raw)
            continue
        setattr(cfg.search, attr, value)
    return cfg

# single globally importable config instance, with env overrides for quick debugging
CONFIG = apply_env_overrides(
    Config.load_from_toml(os.environ.get("GAMBIT_CONFIG_TOML", "config.toml")))
