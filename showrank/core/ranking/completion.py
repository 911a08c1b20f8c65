"""
completion.py - Is a pool ranked enough?

Read-only checks over the current state. The selector can return None for
local reasons (focus mode has nobody left to focus on) while general pairs
still exist, so callers that need a firm answer should ask here.
"""

from itertools import combinations
from typing import Any, Iterable, Optional, Sequence, Set

from ..config import RankingConfig
from ..models import Comparison, Item, PairKey, compared_pairs, comparisons_within, pair_key, rating_lookup
from .graph import build_beats_graph
from .scoring import score_pair

# The progress estimate aims a little beyond the completion minimum.
PROGRESS_PER_ITEM = 2.5


def is_ranking_complete(
    items: Sequence[Item],
    ratings: Any,
    comparisons: Iterable[Comparison],
    compared: Optional[Set[PairKey]] = None,
    min_total: Optional[int] = None,
    config: Optional[RankingConfig] = None,
) -> bool:
    """
    True when the pool has enough comparisons and no high-value pair is left.

    All of these must hold:
    - total comparisons >= max(15, 2 * pool size) (or ``min_total``)
    - average comparisons per item >= 3
    - no uncompared pair scores above 0.3
    """
    config = config or RankingConfig()
    if len(items) < 2:
        return True

    ids = {item.id for item in items}
    pool_comparisons = comparisons_within(comparisons, ids)
    total = len(pool_comparisons)

    required = min_total if min_total is not None else max(config.min_total_comparisons, 2 * len(items))
    if total < required:
        return False
    if total / len(items) < config.min_avg_comparisons:
        return False

    if compared is None:
        compared = compared_pairs(pool_comparisons, include_skips=config.skip_policy == "block")
    lookup = rating_lookup(items, ratings, config.initial_score)
    graph = build_beats_graph(pool_comparisons)

    for a, b in combinations(items, 2):
        if pair_key(a.id, b.id) in compared:
            continue
        if score_pair(a.id, b.id, lookup, graph, config.max_depth) > config.high_value_score:
            return False
    return True


def progress_target(pool_size: int, config: Optional[RankingConfig] = None) -> float:
    config = config or RankingConfig()
    return max(float(config.min_total_comparisons), pool_size * PROGRESS_PER_ITEM)


def ranking_progress(total_comparisons: int, pool_size: int,
                     config: Optional[RankingConfig] = None) -> float:
    """Fraction in [0, 1] of the comparisons a pool of this size usually needs."""
    return min(1.0, total_comparisons / progress_target(pool_size, config))
