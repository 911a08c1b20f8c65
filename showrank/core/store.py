"""
store.py - JSON file holding a collection of shows, ratings and comparisons

Stands in for the rating store and comparison log of a host application.
File layout:

    {
      "items":       [{"id": "...", "pool": "set", "metadata": {...}}],
      "ratings":     [{"item_id": "...", "score": 1200, "comparisons_seen": 0}],
      "comparisons": [{"item_a": "...", "item_b": "...", "winner": "..." | null}]
    }
"""

import pathlib
from dataclasses import asdict
from typing import Any, Dict, List

from .config import DEFAULT_POOL
from .models import Comparison, Item, RatingRecord
from showrank.utils.io_helpers import read_json, write_json
from showrank.utils.logging_helper import get_logger

log = get_logger()


class CollectionStore:
    """Load and save one collection file."""

    def __init__(self, path: pathlib.Path) -> None:
        self.path = pathlib.Path(path)
        self.items: List[Item] = []
        self.ratings: Dict[str, RatingRecord] = {}
        self.comparisons: List[Comparison] = []

    def load(self) -> "CollectionStore":
        if not self.path.exists():
            log.info("No collection at %s yet; starting empty", self.path)
            return self

        data = read_json(self.path)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a JSON object")
        try:
            self.items = [
                Item(str(d["id"]), d.get("pool") or DEFAULT_POOL, d.get("metadata") or {})
                for d in data.get("items", [])
            ]
            self.ratings = {
                str(d["item_id"]): RatingRecord(str(d["item_id"]), float(d["score"]), int(d["comparisons_seen"]))
                for d in data.get("ratings", [])
            }
            self.comparisons = [
                Comparison(str(d["item_a"]), str(d["item_b"]),
                           None if d.get("winner") is None else str(d["winner"]))
                for d in data.get("comparisons", [])
            ]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed entry in {self.path}: {e!r}") from e

        log.info("Loaded %d items, %d ratings, %d comparisons from %s",
                 len(self.items), len(self.ratings), len(self.comparisons), self.path)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return self._serialise(self.ratings, self.comparisons)

    def _serialise(self, ratings: Dict[str, RatingRecord],
                   comparisons: List[Comparison]) -> Dict[str, Any]:
        return {
            "items": [{"id": i.id, "pool": i.pool, "metadata": i.metadata} for i in self.items],
            "ratings": [asdict(r) for r in ratings.values()],
            "comparisons": [asdict(c) for c in comparisons],
        }

    def save(self) -> None:
        write_json(self.path, self.to_dict())

    def add_item(self, item: Item) -> None:
        if any(existing.id == item.id for existing in self.items):
            raise ValueError(f"Item already exists: {item.id}")
        self.items.append(item)

    def save_decision(self, records: List[RatingRecord], comparison: Comparison) -> None:
        """Persistence callback for RankingSession: merge the decision and write the file.

        The in-memory collection only changes once the write succeeds, so a
        retried decision is logged exactly once.
        """
        ratings = dict(self.ratings)
        for record in records:
            ratings[record.item_id] = record
        comparisons = self.comparisons + [comparison]
        write_json(self.path, self._serialise(ratings, comparisons))
        self.ratings, self.comparisons = ratings, comparisons
