import pytest

from showrank.core.models import Comparison, RatingRecord
from showrank.core.ranking.graph import build_beats_graph
from showrank.core.ranking.scoring import IMPLIED_PAIR, score_pair

from conftest import make_ratings


def test_fresh_equal_pair_scores_highest():
    ratings = make_ratings(A=(1200, 0), B=(1200, 0))
    # 0.5 * 1 + 0.3 * 1 + 0.2 * 0.2
    assert score_pair("A", "B", ratings, {}) == pytest.approx(0.84)


def test_large_gap_is_penalised():
    ratings = make_ratings(A=(1200, 5), B=(1500, 5))
    # proximity 0.25 * 0.3, uncertainty 0.5, no information bonus
    assert score_pair("A", "B", ratings, {}) == pytest.approx(0.5 * 0.075 + 0.3 * 0.5)


def test_gap_of_exactly_200_is_not_penalised():
    ratings = make_ratings(A=(1200, 10), B=(1400, 10))
    assert score_pair("A", "B", ratings, {}) == pytest.approx(0.25)


def test_score_never_negative_for_settled_distant_pair():
    ratings = make_ratings(A=(1000, 20), B=(1500, 20))
    assert score_pair("A", "B", ratings, {}) == 0.0


def test_missing_record_scores_zero():
    ratings = make_ratings(A=(1200, 0))
    assert score_pair("A", "B", ratings, {}) == 0.0


def test_implied_pair_returns_sentinel():
    graph = build_beats_graph([Comparison("A", "B", "A"), Comparison("B", "C", "B")])
    ratings = make_ratings(A=(1200, 1), B=(1200, 2), C=(1200, 1))
    assert score_pair("A", "C", ratings, graph) == IMPLIED_PAIR == -1
    assert score_pair("C", "A", ratings, graph, max_depth=2) == -1


def test_accepts_iterable_of_records():
    records = [RatingRecord("A", 1200, 0), RatingRecord("B", 1200, 0)]
    assert score_pair("A", "B", records, {}) == pytest.approx(0.84)
