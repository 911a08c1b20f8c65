"""
config.py - Tunable constants for the ranking engine

Settings are resolved in three layers, lowest priority first:
- dataclass defaults (the constants below)
- a YAML file (``config/ranking.yaml`` or ``--config``)
- ``SHOWRANK_*`` environment variables, with ``.env`` loaded first
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv

from showrank.utils import paths

# Ratings
INITIAL_SCORE = 1200.0
K_BASE = 32.0
K_SETTLE_COMPARISONS = 10

# Pair selection
MAX_IMPLICATION_DEPTH = 3
GENERAL_TOP_K = 5
FOCUS_TOP_K = 3
FOCUS_THRESHOLD = 3
ESTABLISHED_BONUS = 0.5

# Anchors
ANCHOR_TOP_K = 3

# Completion
MIN_TOTAL_COMPARISONS = 15
MIN_AVG_COMPARISONS = 3.0
HIGH_VALUE_SCORE = 0.3

DEFAULT_POOL = "set"

SKIP_POLICIES = ("block", "retry")


@dataclass
class RankingConfig:
    """Configuration for a ranking session."""

    initial_score: float = INITIAL_SCORE
    k_base: float = K_BASE
    k_settle_comparisons: int = K_SETTLE_COMPARISONS

    max_depth: int = MAX_IMPLICATION_DEPTH
    general_top_k: int = GENERAL_TOP_K
    focus_top_k: int = FOCUS_TOP_K
    focus_threshold: int = FOCUS_THRESHOLD
    established_bonus: float = ESTABLISHED_BONUS
    focus_under_ranked: bool = False

    anchor_top_k: int = ANCHOR_TOP_K

    min_total_comparisons: int = MIN_TOTAL_COMPARISONS
    min_avg_comparisons: float = MIN_AVG_COMPARISONS
    high_value_score: float = HIGH_VALUE_SCORE

    # "block": a skipped pair is never offered again; "retry": it may come back
    skip_policy: str = "block"
    # legacy behaviour: a skip still bumps comparisons_seen on both items
    count_skips: bool = False

    default_pool: str = DEFAULT_POOL
    pool: Optional[str] = None

    def validate(self) -> "RankingConfig":
        """Raise ValueError on out-of-range settings; return self for chaining."""
        if self.skip_policy not in SKIP_POLICIES:
            raise ValueError(f"skip_policy must be one of {SKIP_POLICIES}, got {self.skip_policy!r}")
        if self.k_base <= 0:
            raise ValueError(f"k_base must be positive, got {self.k_base}")
        if self.k_settle_comparisons < 1:
            raise ValueError(f"k_settle_comparisons must be >= 1, got {self.k_settle_comparisons}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        for name in ("general_top_k", "focus_top_k", "anchor_top_k"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RankingConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown ranking settings: {', '.join(sorted(unknown))}")
        return cls(**data).validate()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RankingConfig":
        """Create config from a YAML file; settings may sit under a ``ranking:`` key."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")
        section = data.get("ranking", data)
        if section is None:
            section = {}
        if not isinstance(section, dict):
            raise ValueError(f"{path}: the ranking section must be a mapping, got {type(section).__name__}")
        return cls.from_dict(section)

    def with_env(self) -> "RankingConfig":
        """Return a copy overridden by ``SHOWRANK_<FIELD>`` environment variables."""
        overrides: Dict[str, Any] = {}
        for f in fields(self):
            raw = os.environ.get(f"SHOWRANK_{f.name.upper()}")
            if raw is None:
                continue
            overrides[f.name] = _coerce(raw, getattr(self, f.name), f.name)
        return replace(self, **overrides).validate()

    @classmethod
    def from_env(cls) -> "RankingConfig":
        """Create config from environment variables."""
        return cls().with_env()


def _coerce(raw: str, current: Any, name: str) -> Any:
    if isinstance(current, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    try:
        if isinstance(current, int):
            return int(raw)
        if isinstance(current, float):
            return float(raw)
    except ValueError as e:
        raise ValueError(f"SHOWRANK_{name.upper()}={raw!r} is not a valid number") from e
    return raw


def load_config(path: Optional[Union[str, Path]] = None) -> RankingConfig:
    """
    Resolve the effective configuration.

    Args:
        path: Optional YAML file. When omitted, ``config/ranking.yaml`` under
              the project root is used if it exists.

    Returns:
        A validated RankingConfig.
    """
    load_dotenv()
    if path is None and paths.DEFAULT_CONFIG.exists():
        path = paths.DEFAULT_CONFIG
    config = RankingConfig.from_yaml(path) if path else RankingConfig()
    return config.with_env()
