"""
pairing.py - Choosing the next pair to compare

This module provides:
- General selection: best-scoring uncompared pair, randomised among the top few
- Under-ranked focus: pair the least-compared item with a good partner
- Pool partitioning: pick one pool and select within it
"""

import random
from collections import Counter
from itertools import combinations
from typing import Any, Callable, Iterable, List, Optional, Sequence, Set, Tuple

from ..config import DEFAULT_POOL, RankingConfig
from ..models import Comparison, Item, PairKey, compared_pairs, pair_key, rating_lookup
from .graph import build_beats_graph
from .scoring import score_pair
from showrank.utils.logging_helper import get_logger

log = get_logger()

Pair = Tuple[Item, Item]
PoolStrategy = Callable[[Sequence[Item]], Optional[str]]


def _top_choice(candidates: List[Tuple[Any, float]], top_k: int, rng: Any) -> Any:
    """Sort by score (stable, descending) and pick uniformly among the top_k."""
    candidates.sort(key=lambda c: c[1], reverse=True)
    top = candidates[:top_k]
    return (rng or random).choice(top)[0]


def select_pair(
    items: Sequence[Item],
    ratings: Any,
    comparisons: Iterable[Comparison],
    compared: Optional[Set[PairKey]] = None,
    focus_under_ranked: bool = False,
    threshold: Optional[int] = None,
    rng: Any = None,
    config: Optional[RankingConfig] = None,
) -> Optional[Pair]:
    """
    Pick the next pair to present from a single pool.

    Args:
        items: Items of one pool, in a stable order
        ratings: Rating records (mapping by id or iterable); missing ones default
        comparisons: Comparison history for the pool
        compared: Pairs never to offer again; derived from ``comparisons`` when None
        focus_under_ranked: Use under-ranked focus mode instead of general mode
        threshold: Comparisons below which an item counts as under-ranked
        rng: Anything with ``choice(seq)``; defaults to the ``random`` module
        config: Tunables; defaults to RankingConfig()

    Returns:
        (item_a, item_b), or None when nothing worth asking remains.
    """
    config = config or RankingConfig()
    if threshold is None:
        threshold = config.focus_threshold

    if len(items) < 2:
        return None

    comparisons = list(comparisons)
    if compared is None:
        compared = compared_pairs(comparisons, include_skips=config.skip_policy == "block")
    lookup = rating_lookup(items, ratings, config.initial_score)
    graph = build_beats_graph(comparisons)

    if focus_under_ranked:
        return _select_for_under_ranked(items, lookup, graph, compared, threshold, rng, config)

    scored: List[Tuple[Pair, float]] = []
    for a, b in combinations(items, 2):
        if pair_key(a.id, b.id) in compared:
            continue
        score = score_pair(a.id, b.id, lookup, graph, config.max_depth)
        if score < 0:
            continue
        scored.append(((a, b), score))

    if not scored:
        log.debug("No viable pairs among %d items", len(items))
        return None

    pair = _top_choice(scored, config.general_top_k, rng)
    log.debug("Selected %s vs %s from %d candidates", pair[0].id, pair[1].id, len(scored))
    return pair


def _select_for_under_ranked(items, lookup, graph, compared, threshold, rng, config) -> Optional[Pair]:
    under_ranked = [i for i in items if lookup[i.id].comparisons_seen < threshold]
    if not under_ranked:
        log.debug("All %d items have at least %d comparisons", len(items), threshold)
        return None

    # min() keeps the first of equal counts, so ties follow input order
    primary = min(under_ranked, key=lambda i: lookup[i.id].comparisons_seen)

    candidates: List[Tuple[Item, float]] = []
    for partner in items:
        if partner.id == primary.id or pair_key(primary.id, partner.id) in compared:
            continue
        score = score_pair(primary.id, partner.id, lookup, graph, config.max_depth)
        if score < 0:
            continue
        if lookup[partner.id].comparisons_seen >= threshold:
            score += config.established_bonus
        candidates.append((partner, score))

    if not candidates:
        log.debug("No partner left for under-ranked item %s", primary.id)
        return None

    partner = _top_choice(candidates, config.focus_top_k, rng)
    log.debug("Focus pair %s vs %s from %d partners", primary.id, partner.id, len(candidates))
    return primary, partner


# ── pools ─────────────────────────────────────────────────────────────────
def pool_sizes(items: Iterable[Item]) -> Counter:
    return Counter(item.pool or DEFAULT_POOL for item in items)


def pool_members(items: Iterable[Item], pool: str) -> List[Item]:
    return [item for item in items if (item.pool or DEFAULT_POOL) == pool]


def largest_pool(items: Sequence[Item], default: str = DEFAULT_POOL) -> str:
    """Pool key with the most members; the first-seen pool wins ties."""
    sizes = pool_sizes(items)
    if not sizes:
        return default
    return sizes.most_common(1)[0][0]


def fixed_pool(pool: str) -> PoolStrategy:
    """Strategy that always picks ``pool``."""
    def strategy(items: Sequence[Item]) -> str:
        return pool
    return strategy


def resolve_pool(items: Sequence[Item], pool: Optional[str] = None,
                 pool_strategy: Optional[PoolStrategy] = None) -> Optional[str]:
    """An explicit ``pool`` wins; otherwise ask the strategy (largest pool by default)."""
    if pool is not None:
        return pool
    return (pool_strategy or largest_pool)(items)


def select_pool_pair(
    items: Sequence[Item],
    ratings: Any,
    comparisons: Iterable[Comparison],
    pool: Optional[str] = None,
    pool_strategy: Optional[PoolStrategy] = None,
    **kwargs: Any,
) -> Optional[Pair]:
    """Resolve a single pool out of a mixed item set, then select within it."""
    key = resolve_pool(items, pool, pool_strategy)
    members = pool_members(items, key) if key is not None else []
    member_ids = {m.id for m in members}
    pool_comparisons = [c for c in comparisons if c.item_a in member_ids and c.item_b in member_ids]
    log.debug("Pool %r has %d of %d items", key, len(members), len(items))
    return select_pair(members, ratings, pool_comparisons, **kwargs)
