#!/usr/bin/env python
"""
logging_helper.py – one-call setup: file + stdout.

Usage:
    from showrank.utils.logging_helper import get_logger
    log = get_logger()                  # derives name from caller's module
    log.info("It works")
"""

from __future__ import annotations
import inspect, logging, sys, os
from pathlib import Path

DEF_FMT  = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEF_DATE = "%Y-%m-%d %H:%M:%S"


def _env_level(default: int) -> int:
    name = os.getenv("SHOWRANK_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def get_logger(level: int = logging.INFO,
               log_dir: str | Path | None = None) -> logging.Logger:
    """
    Create (or return existing) logger whose name is the caller's module
    (e.g. 'pairing'). Writes to <log_dir>/<name>.log and echoes to stdout.

    ``log_dir`` defaults to $SHOWRANK_LOG_DIR, then ``logs``.
    """
    # ── derive name from caller ───────────────────────────────────────────
    caller = inspect.stack()[1]
    module = inspect.getmodule(caller[0])
    if module and module.__name__ != "__main__":
        name = module.__name__.split(".")[-1]
    else:
        # called as a script: use the file-stem (e.g., rank_shows)
        name = os.path.splitext(os.path.basename(caller.filename))[0]

    logger = logging.getLogger(f"showrank.{name}")
    if logger.handlers:                 # already initialised
        return logger

    level = _env_level(level)
    logger.setLevel(level)

    log_dir = Path(log_dir or os.getenv("SHOWRANK_LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{name}.log"

    # file handler
    fh = logging.FileHandler(log_path, encoding="utf-8")
    fh.setFormatter(logging.Formatter(DEF_FMT, DEF_DATE))
    fh.setLevel(level)

    # console handler
    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    ch.setLevel(max(level, logging.INFO))

    logger.addHandler(fh)
    logger.addHandler(ch)
    logger.propagate = False
    return logger
