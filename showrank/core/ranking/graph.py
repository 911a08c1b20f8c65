"""
graph.py - "Beats" graph built from the comparison log

A directed edge winner -> loser is recorded for every decided comparison.
The graph is rebuilt from the log on every selection cycle, so nothing here
holds state between calls.
"""

from collections import deque
from typing import Dict, Iterable, Set

from ..config import MAX_IMPLICATION_DEPTH
from ..models import Comparison

BeatsGraph = Dict[str, Set[str]]


def build_beats_graph(comparisons: Iterable[Comparison]) -> BeatsGraph:
    """Map each item id to the set of item ids it has directly beaten. Skips are ignored."""
    graph: BeatsGraph = {}
    for comp in comparisons:
        if comp.winner is None:
            continue
        graph.setdefault(comp.winner, set()).add(comp.loser)
    return graph


def beats_transitively(
    item_a: str,
    item_b: str,
    graph: BeatsGraph,
    max_depth: int = MAX_IMPLICATION_DEPTH,
) -> bool:
    """
    Return True if a chain of recorded wins leads from ``item_a`` to ``item_b``.

    Breadth-first from ``item_a``; every visited node is checked for a direct
    win over ``item_b``, and nodes are only expanded while their depth is
    below ``max_depth``.
    """
    queue = deque([(item_a, 0)])
    visited = {item_a}

    while queue:
        node, depth = queue.popleft()
        beaten = graph.get(node)
        if not beaten:
            continue
        if item_b in beaten:
            return True
        if depth >= max_depth:
            continue
        for nxt in beaten:
            if nxt not in visited:
                visited.add(nxt)
                queue.append((nxt, depth + 1))

    return False


def is_pair_implied(
    item_a: str,
    item_b: str,
    graph: BeatsGraph,
    max_depth: int = MAX_IMPLICATION_DEPTH,
) -> bool:
    """True when the outcome of (a, b) is already implied in either direction."""
    return (beats_transitively(item_a, item_b, graph, max_depth)
            or beats_transitively(item_b, item_a, graph, max_depth))
