"""
Ranking module - Choosing which shows to compare next

This module provides:
- The beats graph and transitive implication checks
- Pair scoring by expected information
- Pair selection (general and under-ranked focus) within one pool
- Anchor selection for newly added shows
- Completion and progress checks
"""

from .graph import build_beats_graph, beats_transitively, is_pair_implied
from .scoring import score_pair, IMPLIED_PAIR
from .pairing import (
    select_pair,
    select_pool_pair,
    largest_pool,
    fixed_pool,
    pool_members,
    pool_sizes,
    resolve_pool,
)
from .anchor import select_anchor, median_score
from .completion import is_ranking_complete, ranking_progress

__all__ = [
    'build_beats_graph',
    'beats_transitively',
    'is_pair_implied',
    'score_pair',
    'IMPLIED_PAIR',
    'select_pair',
    'select_pool_pair',
    'largest_pool',
    'fixed_pool',
    'pool_members',
    'pool_sizes',
    'resolve_pool',
    'select_anchor',
    'median_score',
    'is_ranking_complete',
    'ranking_progress',
]
