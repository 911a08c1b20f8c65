#!/usr/bin/env python
"""
io_helpers.py – tiny utilities for BOM-safe UTF-8 reading / writing.

All project code should import these instead of calling Path.read_text().
"""

from pathlib import Path
from typing import Any
import json
import os
import sys
import unicodedata

BOM = b"\xef\xbb\xbf"

# ── public API ─────────────────────────────────────────────────────────────
def read_utf8(path: Path) -> str:
    """
    Return file contents as str, decoded UTF-8, stripping BOM if present.
    """
    raw = path.read_bytes()
    if raw.startswith(BOM):
        raw = raw[len(BOM):]
    return unicodedata.normalize('NFC', raw.decode("utf-8"))

def write_utf8(path: Path, text: str) -> None:
    """Write text atomically: write a sibling temp file, then replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(unicodedata.normalize('NFC', text), encoding="utf-8")
    os.replace(tmp, path)

def read_json(path: Path) -> Any:
    """Load JSON from *path*; a decode error is re-raised as ValueError naming the file."""
    try:
        return json.loads(read_utf8(path))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"Could not parse {path}: {e}") from e

def write_json(path: Path, data: Any) -> None:
    write_utf8(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")

def ensure_utf8_windows() -> None:
    """Force UTF-8 on Windows terminals so Unicode output is readable."""
    if sys.platform == "win32":
        for stream in (sys.stdout, sys.stderr):
            if stream.encoding != "utf-8":
                stream.reconfigure(encoding="utf-8")
        os.environ["PYTHONIOENCODING"] = "utf-8"
