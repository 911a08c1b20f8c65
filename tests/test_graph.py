from showrank.core.models import Comparison
from showrank.core.ranking.graph import build_beats_graph, beats_transitively, is_pair_implied


def chain(*ids):
    return [Comparison(a, b, a) for a, b in zip(ids, ids[1:])]


def test_build_beats_graph_records_winner_to_loser():
    graph = build_beats_graph([
        Comparison("A", "B", "A"),
        Comparison("C", "A", "A"),
        Comparison("B", "C", "C"),
    ])
    assert graph == {"A": {"B", "C"}, "C": {"B"}}


def test_build_beats_graph_ignores_skips():
    graph = build_beats_graph([Comparison("A", "B", None), Comparison("B", "C", "B")])
    assert graph == {"B": {"C"}}


def test_transitive_chain_is_detected_in_one_direction_only():
    graph = build_beats_graph(chain("A", "B", "C"))
    assert beats_transitively("A", "C", graph)
    assert not beats_transitively("C", "A", graph)
    assert is_pair_implied("C", "A", graph)


def test_depth_bound_limits_chain_length():
    graph = build_beats_graph(chain("A", "B", "C", "D", "E", "F"))
    assert beats_transitively("A", "E", graph, max_depth=3)
    assert not beats_transitively("A", "F", graph, max_depth=3)
    assert beats_transitively("A", "B", graph, max_depth=0)
    assert not beats_transitively("A", "C", graph, max_depth=0)


def test_cycles_terminate():
    graph = build_beats_graph([Comparison("A", "B", "A"), Comparison("B", "A", "B")])
    assert not beats_transitively("A", "C", graph)
    assert beats_transitively("A", "B", graph)


def test_unknown_items_are_not_implied():
    assert not is_pair_implied("X", "Y", {})
