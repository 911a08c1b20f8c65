"""
models.py - Data contracts shared by the ranking engine

Items and comparisons are owned by the host application; the engine only
reads them. Rating records are created lazily with default values the first
time an item is needed.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .config import DEFAULT_POOL, INITIAL_SCORE

PairKey = Tuple[str, str]


@dataclass(frozen=True)
class Item:
    """A rankable show. ``metadata`` is carried along untouched."""
    id: str
    pool: str = DEFAULT_POOL
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def label(self) -> str:
        return str(self.metadata.get("title") or self.id)


@dataclass
class RatingRecord:
    item_id: str
    score: float = INITIAL_SCORE
    comparisons_seen: int = 0


@dataclass(frozen=True)
class Comparison:
    """One logged decision. ``winner`` is None for a skip."""
    item_a: str
    item_b: str
    winner: Optional[str] = None

    def __post_init__(self) -> None:
        if self.item_a == self.item_b:
            raise ValueError(f"An item cannot be compared with itself: {self.item_a}")
        if self.winner is not None and self.winner not in (self.item_a, self.item_b):
            raise ValueError(
                f"Winner {self.winner} is not part of the pair ({self.item_a}, {self.item_b})"
            )

    @property
    def is_skip(self) -> bool:
        return self.winner is None

    @property
    def loser(self) -> Optional[str]:
        if self.winner is None:
            return None
        return self.item_b if self.winner == self.item_a else self.item_a

    @property
    def key(self) -> PairKey:
        return pair_key(self.item_a, self.item_b)


def pair_key(a: str, b: str) -> PairKey:
    """Order-independent key for a pair of item ids."""
    return (a, b) if a <= b else (b, a)


def compared_pairs(comparisons: Iterable[Comparison], include_skips: bool = True) -> Set[PairKey]:
    """
    Pairs that must not be offered again.

    Every logged comparison contributes its pair; with ``include_skips=False``
    skipped pairs stay eligible.
    """
    return {c.key for c in comparisons if include_skips or not c.is_skip}


def rating_lookup(
    items: Iterable[Item],
    ratings: Any,
    initial_score: float = INITIAL_SCORE,
) -> Dict[str, RatingRecord]:
    """
    Map item id -> rating record for every item, filling defaults for items
    without a record. The caller's records are not modified.
    """
    lookup = dict(as_mapping(ratings))
    for item in items:
        if item.id not in lookup:
            lookup[item.id] = RatingRecord(item.id, initial_score, 0)
    return lookup


def ensure_ratings(
    items: Iterable[Item],
    ratings: Dict[str, RatingRecord],
    initial_score: float = INITIAL_SCORE,
) -> List[RatingRecord]:
    """Create missing records in place; return the ones that were created."""
    created = []
    for item in items:
        if item.id not in ratings:
            record = RatingRecord(item.id, initial_score, 0)
            ratings[item.id] = record
            created.append(record)
    return created


def comparisons_within(comparisons: Iterable[Comparison], item_ids: Set[str]) -> List[Comparison]:
    """Comparisons whose two items both belong to ``item_ids``."""
    return [c for c in comparisons if c.item_a in item_ids and c.item_b in item_ids]


def as_mapping(ratings: Any) -> Mapping[str, RatingRecord]:
    """Accept either a mapping keyed by item id or an iterable of records."""
    if isinstance(ratings, Mapping):
        return ratings
    return {r.item_id: r for r in ratings}
