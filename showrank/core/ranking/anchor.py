"""
anchor.py - First comparison partner for a newly added show

A new show is compared first against an established, middle-of-the-pack
show so its first result says as much as possible about where it belongs.
"""

import random
from typing import Any, List, Optional, Sequence, Tuple

from ..config import ANCHOR_TOP_K, INITIAL_SCORE
from ..models import Item, as_mapping
from showrank.utils.logging_helper import get_logger

log = get_logger()

MEDIAN_SPAN = 300.0
STABLE_AFTER = 5
PROXIMITY_WEIGHT = 0.6
STABILITY_WEIGHT = 0.4


def median_score(ratings: Any, default: float = INITIAL_SCORE) -> float:
    """Upper median of all known scores, or ``default`` when there are none."""
    scores = sorted(r.score for r in as_mapping(ratings).values())
    if not scores:
        return default
    return scores[len(scores) // 2]


def select_anchor(
    new_item_id: str,
    existing_items: Sequence[Item],
    ratings: Any,
    rng: Any = None,
    top_k: int = ANCHOR_TOP_K,
    initial_score: float = INITIAL_SCORE,
) -> Optional[Item]:
    """
    Choose an existing item to compare a new item against.

    Args:
        new_item_id: Id of the freshly added item (excluded from candidates)
        existing_items: Items already in the pool
        ratings: Rating records of the existing items
        rng: Anything with ``choice(seq)``; defaults to the ``random`` module
        top_k: Size of the random pick among the best candidates

    Returns:
        The anchor item, or None if there is nothing to compare against.
    """
    candidates = [item for item in existing_items if item.id != new_item_id]
    if not candidates:
        return None

    ratings = as_mapping(ratings)
    median = median_score(ratings, initial_score)

    scored: List[Tuple[Item, float]] = []
    for item in candidates:
        record = ratings.get(item.id)
        score = record.score if record else initial_score
        seen = record.comparisons_seen if record else 0

        proximity = max(0.0, 1.0 - abs(score - median) / MEDIAN_SPAN)
        stability = min(1.0, seen / STABLE_AFTER)
        scored.append((item, proximity * PROXIMITY_WEIGHT + stability * STABILITY_WEIGHT))

    scored.sort(key=lambda c: c[1], reverse=True)
    anchor = (rng or random).choice(scored[:top_k])[0]
    log.debug("Anchor for %s: %s (median %.0f)", new_item_id, anchor.id, median)
    return anchor
