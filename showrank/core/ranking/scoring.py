"""
scoring.py - Information value of a candidate pair

Higher is better. A pair whose outcome is already implied by the beats graph
gets the IMPLIED_PAIR sentinel and must not be offered.
"""

from typing import Any

from ..config import MAX_IMPLICATION_DEPTH
from ..models import as_mapping
from .graph import BeatsGraph, is_pair_implied

IMPLIED_PAIR = -1.0

# Rating gap at which proximity reaches zero, and the gap past which the
# outcome counts as predictable.
PROXIMITY_SPAN = 400.0
LARGE_GAP = 200.0
LARGE_GAP_PENALTY = 0.3

# Comparisons after which an item no longer counts as uncertain.
UNCERTAINTY_HORIZON = 10.0
INFORMATION_MIN_SEEN = 3
INFORMATION_BONUS = 0.2

PROXIMITY_WEIGHT = 0.5
UNCERTAINTY_WEIGHT = 0.3
INFORMATION_WEIGHT = 0.2


def score_pair(
    item_a: str,
    item_b: str,
    ratings: Any,
    graph: BeatsGraph,
    max_depth: int = MAX_IMPLICATION_DEPTH,
) -> float:
    """
    Score the pair (item_a, item_b).

    Args:
        item_a: First item id
        item_b: Second item id
        ratings: Mapping of item id -> RatingRecord (or an iterable of records)
        graph: Beats graph from build_beats_graph()
        max_depth: Depth bound for the transitive implication check

    Returns:
        IMPLIED_PAIR (-1.0) if the outcome is implied, 0.0 if either item has
        no rating record, otherwise a non-negative score.
    """
    if is_pair_implied(item_a, item_b, graph, max_depth):
        return IMPLIED_PAIR

    ratings = as_mapping(ratings)
    rec_a = ratings.get(item_a)
    rec_b = ratings.get(item_b)
    if rec_a is None or rec_b is None:
        return 0.0

    elo_diff = abs(rec_a.score - rec_b.score)
    proximity = max(0.0, 1.0 - elo_diff / PROXIMITY_SPAN)
    if elo_diff > LARGE_GAP:
        proximity *= LARGE_GAP_PENALTY

    avg_seen = (rec_a.comparisons_seen + rec_b.comparisons_seen) / 2
    uncertainty = max(0.0, (UNCERTAINTY_HORIZON - avg_seen) / UNCERTAINTY_HORIZON)

    min_seen = min(rec_a.comparisons_seen, rec_b.comparisons_seen)
    information = INFORMATION_BONUS if min_seen < INFORMATION_MIN_SEEN else 0.0

    return (proximity * PROXIMITY_WEIGHT
            + uncertainty * UNCERTAINTY_WEIGHT
            + information * INFORMATION_WEIGHT)
