import pytest

from showrank.core.models import Comparison
from showrank.core.ranking.completion import is_ranking_complete, ranking_progress
from showrank.core.ranking.pairing import select_pair

from conftest import make_items, make_ratings


def test_tiny_pool_is_complete():
    assert is_ranking_complete(make_items("A"), {}, [])


def test_fully_compared_pool_completes_once_thresholds_are_met():
    items = make_items("A", "B", "C")
    ratings = make_ratings(A=(1300, 10), B=(1200, 10), C=(1100, 10))
    once = [Comparison("A", "B", "A"), Comparison("B", "C", "B"), Comparison("A", "C", "A")]

    assert select_pair(items, ratings, once) is None
    assert not is_ranking_complete(items, ratings, once)

    five_times = once * 5
    assert select_pair(items, ratings, five_times) is None
    assert is_ranking_complete(items, ratings, five_times)


@pytest.fixture()
def two_islands():
    items = make_items("A", "B", "C", "D")
    comparisons = [Comparison("A", "B", "A")] * 8 + [Comparison("C", "D", "C")] * 8
    return items, comparisons


def test_high_value_pair_left_means_not_complete(two_islands):
    items, comparisons = two_islands
    assert not is_ranking_complete(items, {}, comparisons)


def test_only_low_value_pairs_left_means_complete(two_islands):
    items, comparisons = two_islands
    ratings = make_ratings(A=(2000, 20), B=(1500, 20), C=(1000, 20), D=(500, 20))
    assert is_ranking_complete(items, ratings, comparisons)


def test_comparisons_outside_pool_do_not_count():
    items = make_items("A", "B")
    ratings = make_ratings(A=(1300, 20), B=(1000, 20))
    outside = [Comparison("A", "Z", "A")] * 20
    assert not is_ranking_complete(items, ratings, outside)
    # the average per item is still zero
    assert not is_ranking_complete(items, ratings, outside, min_total=0)


def test_min_total_override():
    items = make_items("A", "B")
    ratings = make_ratings(A=(1300, 20), B=(1000, 20))
    log = [Comparison("A", "B", "A")] * 6
    assert not is_ranking_complete(items, ratings, log)
    assert is_ranking_complete(items, ratings, log, min_total=6)


def test_progress():
    assert ranking_progress(0, 4) == 0.0
    assert ranking_progress(15, 4) == 1.0
    assert ranking_progress(10, 10) == pytest.approx(0.4)
    assert ranking_progress(100, 10) == 1.0
