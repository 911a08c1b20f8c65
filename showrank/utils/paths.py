#!/usr/bin/env python
"""
paths.py – single source of truth for project folders.
           Import these constants everywhere.
"""

import os
from pathlib import Path


def find_root() -> Path:
    """Return the project root: $SHOWRANK_ROOT, else the nearest marker dir, else cwd."""
    env_root = os.environ.get('SHOWRANK_ROOT')
    if env_root:
        return Path(env_root).resolve()

    # look for a marker file (like .git or pyproject.toml) in parent directories
    current = Path.cwd().resolve()
    for candidate in (current, *current.parents):
        if any((candidate / marker).exists() for marker in ['.git', 'pyproject.toml']):
            return candidate
    return current


ROOT        = find_root()
DATA        = ROOT / "data"
CONFIG_DIR  = ROOT / "config"

DEFAULT_COLLECTION = DATA / "shows.json"
DEFAULT_CONFIG     = CONFIG_DIR / "ranking.yaml"
