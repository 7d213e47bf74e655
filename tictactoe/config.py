# tictactoe/config.py
from dataclasses import dataclass, field
from typing import Mapping, Optional
import os
import tomllib  # python >=3.11

from tictactoe.core.board import MAX_DIMENSION, MIN_DIMENSION
from tictactoe.core.search import DEFAULT_DEPTH_LIMIT
from tictactoe.errors import ConfigurationError


@dataclass
class BoardConfig:
    dimension: int = 3
    score_per_mark: float = 1.0


@dataclass
class SearchConfig:
    depth_limit: Optional[int] = DEFAULT_DEPTH_LIMIT  # None means full-depth search
    workers: int = 1  # >1 evaluates root moves in separate processes


@dataclass
class UIConfig:
    x_player: str = "h"
    o_player: str = "h"


# Accepted TOML value types per section and key.
FIELD_TYPES = {
    "board": {"dimension": int, "score_per_mark": float},
    "search": {"depth_limit": int, "workers": int},
    "ui": {"x_player": str, "o_player": str},
}


def _coerce(where: str, value, expected):
    # bool is an int subclass, but `dimension = true` is still a mistake
    if isinstance(value, bool):
        raise ConfigurationError(f"{where} must be {expected.__name__}, got bool")
    if expected is float and isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, expected):
        raise ConfigurationError(
            f"{where} must be {expected.__name__}, got {type(value).__name__}: {value!r}"
        )
    return value


@dataclass
class Config:
    board: BoardConfig = field(default_factory=BoardConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "WARNING"

    def validate(self) -> "Config":
        b = self.board
        if not MIN_DIMENSION <= b.dimension <= MAX_DIMENSION:
            raise ConfigurationError(
                f"Dimension outside of range [{MIN_DIMENSION}, {MAX_DIMENSION}]: {b.dimension}"
            )
        s = self.search
        if s.depth_limit is not None and s.depth_limit < 1:
            raise ConfigurationError(f"Depth limit must be at least 1 (or unlimited): {s.depth_limit}")
        if s.workers < 1:
            raise ConfigurationError(f"Worker count must be at least 1: {s.workers}")
        return self

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        try:
            with open(path, "rb") as f:
                raw = tomllib.load(f)
        except FileNotFoundError:
            return cfg
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Malformed config file {path}: {e}") from None

        for section, types in FIELD_TYPES.items():
            if section not in raw:
                continue
            values = raw[section]
            if not isinstance(values, dict):
                raise ConfigurationError(f"[{section}] must be a table")
            target = getattr(cfg, section)
            for key, value in values.items():
                if key in types:
                    setattr(target, key, _coerce(f"{section}.{key}", value, types[key]))

        # 0 in the file means no depth limit
        if cfg.search.depth_limit == 0:
            cfg.search.depth_limit = None
        if "log_level" in raw:
            cfg.log_level = _coerce("log_level", raw["log_level"], str)
        return cfg


def apply_env_overrides(cfg: Config, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Apply TICTACTOE_SEARCH_DEPTH (0 = unlimited) on top of ``cfg``."""
    environ = os.environ if environ is None else environ
    override_depth = environ.get("TICTACTOE_SEARCH_DEPTH")
    if override_depth:
        try:
            cfg.search.depth_limit = int(override_depth) or None
        except ValueError:
            raise ConfigurationError(
                f"TICTACTOE_SEARCH_DEPTH must be an integer: {override_depth!r}"
            ) from None
    return cfg


def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Config from ``path`` (or $TICTACTOE_CONFIG_TOML, default config.toml) plus env overrides."""
    environ = os.environ if environ is None else environ
    if path is None:
        path = environ.get("TICTACTOE_CONFIG_TOML", "config.toml")
    return apply_env_overrides(Config.load_from_toml(path), environ)
