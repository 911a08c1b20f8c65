import os
import sys
import tempfile
from pathlib import Path

import pytest

# Keep log files out of the working tree; loggers are created at import time
os.environ.setdefault("SHOWRANK_LOG_DIR", tempfile.mkdtemp(prefix="showrank-logs-"))

# Ensure project root itself is importable so the "showrank" package can be found
repo_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(repo_root))

from showrank.core.models import Item, RatingRecord


class FirstChoice:
    """Stand-in random source that always takes the best candidate."""

    def choice(self, seq):
        return seq[0]


class LastChoice:
    """Stand-in random source that always takes the worst of the top candidates."""

    def choice(self, seq):
        return seq[-1]


@pytest.fixture()
def first():
    return FirstChoice()


@pytest.fixture()
def last():
    return LastChoice()


def make_items(*ids, pool="set"):
    return [Item(i, pool, {"title": f"Show {i}"}) for i in ids]


def make_ratings(**records):
    """make_ratings(A=(1200, 5)) -> {"A": RatingRecord("A", 1200, 5)}"""
    return {k: RatingRecord(k, float(score), seen) for k, (score, seen) in records.items()}
