import pytest

from showrank.core.config import RankingConfig
from showrank.core.models import Comparison, Item, RatingRecord
from showrank.core.session import RankingSession

from conftest import make_items, make_ratings


class Recorder:
    """Persistence callback that can be told to fail."""

    def __init__(self, failures=0):
        self.failures = failures
        self.saved = []

    def __call__(self, records, comparison):
        if self.failures:
            self.failures -= 1
            raise ConnectionError("store unavailable")
        self.saved.append((list(records), comparison))


def test_decision_updates_state_before_persisting(first):
    saved = Recorder()
    session = RankingSession(make_items("A", "B"), rng=first, persist=saved)
    a, b = session.next_pair()

    winner, loser = session.record(a.id)

    assert (winner.score, loser.score) == (1232, 1168)
    assert session.ratings[a.id] is winner
    assert session.comparisons == [Comparison(a.id, b.id, a.id)]
    assert session.current is None
    assert saved.saved == [([winner, loser], Comparison(a.id, b.id, a.id))]


def test_second_selection_sees_the_decision(first):
    session = RankingSession(make_items("A", "B"), rng=first)
    a, _ = session.next_pair()
    session.record(a.id)
    assert session.next_pair() is None


def test_record_requires_a_proposal():
    session = RankingSession(make_items("A", "B"))
    with pytest.raises(RuntimeError):
        session.record("A")
    with pytest.raises(RuntimeError):
        session.skip()


def test_record_rejects_outsider(first):
    session = RankingSession(make_items("A", "B", "C"), rng=first)
    pair = session.next_pair()
    outsider = ({"A", "B", "C"} - {pair[0].id, pair[1].id}).pop()
    with pytest.raises(ValueError):
        session.record(outsider)


def test_skip_leaves_ratings_alone_and_blocks_pair(first):
    saved = Recorder()
    session = RankingSession(make_items("A", "B"), rng=first, persist=saved)
    session.next_pair()
    comparison = session.skip()

    assert comparison.is_skip
    assert session.ratings["A"] == RatingRecord("A", 1200, 0)
    assert saved.saved == [([], comparison)]
    assert session.next_pair() is None


def test_retry_policy_offers_skipped_pair_again(first):
    session = RankingSession(make_items("A", "B"), rng=first, config=RankingConfig(skip_policy="retry"))
    session.next_pair()
    session.skip()
    assert session.next_pair() is not None


def test_counted_skip_bumps_comparisons_seen(first):
    session = RankingSession(make_items("A", "B"), rng=first, config=RankingConfig(count_skips=True))
    session.next_pair()
    session.skip()
    assert session.ratings["A"] == RatingRecord("A", 1200, 1)
    assert session.ratings["B"] == RatingRecord("B", 1200, 1)


def test_pass_is_a_no_op(first):
    session = RankingSession(make_items("A", "B"), rng=first)
    session.next_pair()
    session.pass_pair()
    assert session.current is None
    assert session.comparisons == []
    assert session.next_pair() is not None


def test_failed_write_is_queued_and_retried_in_order(first):
    saved = Recorder(failures=1)
    session = RankingSession(make_items("A", "B", "C"), rng=first, persist=saved)

    a, _ = session.next_pair()
    session.record(a.id)
    assert len(session.pending_writes) == 1
    # state moved on even though the write failed
    assert len(session.comparisons) == 1

    pair = session.next_pair()
    session.record(pair[0].id)
    assert len(session.pending_writes) == 2
    assert saved.saved == []

    assert session.flush_pending() == 2
    assert session.pending_writes == []
    assert [c for _, c in saved.saved] == session.comparisons


def test_flush_stops_at_first_failure(first):
    saved = Recorder(failures=2)
    session = RankingSession(make_items("A", "B"), rng=first, persist=saved)
    session.next_pair()
    session.record("A")
    assert session.flush_pending() == 0
    assert session.pending_writes[0].error == "store unavailable"
    assert session.flush_pending() == 1


def test_session_picks_largest_pool():
    items = make_items("f1", "f2", pool="festival") + make_items("s1", "s2", "s3")
    session = RankingSession(items)
    assert session.pool == "set"
    assert [i.id for i in session.items] == ["s1", "s2", "s3"]
    assert RankingSession(items, pool="festival").pool == "festival"
    assert RankingSession(items, config=RankingConfig(pool="festival")).pool == "festival"


def test_session_drops_comparisons_from_other_pools():
    items = make_items("s1", "s2") + make_items("f1", pool="festival")
    session = RankingSession(items, comparisons=[Comparison("s1", "f1", "s1"), Comparison("s1", "s2", None)])
    assert session.comparisons == [Comparison("s1", "s2", None)]


def test_add_item_proposes_anchor(first):
    ratings = make_ratings(A=(1200, 6), B=(1450, 1), C=(1150, 0))
    session = RankingSession(make_items("A", "B", "C"), ratings.values(), rng=first)
    anchor = session.add_item(Item("N", "set"))
    assert anchor.id == "A"
    assert [i.id for i in session.current] == ["N", "A"]
    assert session.ratings["N"] == RatingRecord("N", 1200, 0)

    with pytest.raises(ValueError):
        session.add_item(Item("N", "set"))


def test_leaderboard_and_completion(first):
    session = RankingSession(make_items("A", "B", "C"), rng=first)
    while session.next_pair() is not None:
        first_item, second_item = session.current
        session.record(min(first_item.id, second_item.id))
    board = [item.id for item, _ in session.leaderboard()]
    assert board[0] == "A"
    assert not session.is_complete()
    assert 0 < session.progress() < 1
