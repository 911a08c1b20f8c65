"""
elo_ranking.py - Adaptive-K Elo updates

New shows move fast: K starts at twice the base and settles to the base
after ten comparisons. Scores are rounded to whole points after each update.
"""

import math
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from .config import K_BASE, K_SETTLE_COMPARISONS, RankingConfig
from .models import RatingRecord


def k_factor(comparisons_seen: int, base: float = K_BASE,
             settle: int = K_SETTLE_COMPARISONS) -> float:
    """K for an item: ``2 * base`` at 0 comparisons, falling linearly to ``base`` at ``settle``."""
    if comparisons_seen >= settle:
        return base
    return base * (1 + (settle - comparisons_seen) / settle)


def expected_score(rating_a: float, rating_b: float) -> float:
    """Probability that A beats B."""
    return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / 400.0))


def round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def apply_result(
    winner: RatingRecord,
    loser: RatingRecord,
    config: Optional[RankingConfig] = None,
) -> Tuple[RatingRecord, RatingRecord]:
    """
    Rate a decided comparison.

    Args:
        winner: Current record of the winning item
        loser: Current record of the losing item
        config: Supplies the K base and settle count

    Returns:
        (new_winner, new_loser) as fresh records; the inputs are left as they were.
    """
    config = config or RankingConfig()
    k_winner = k_factor(winner.comparisons_seen, config.k_base, config.k_settle_comparisons)
    k_loser = k_factor(loser.comparisons_seen, config.k_base, config.k_settle_comparisons)

    expected_winner = expected_score(winner.score, loser.score)
    expected_loser = expected_score(loser.score, winner.score)

    # rounding must never move a fractional score against the result
    new_winner = replace(
        winner,
        score=max(winner.score, round_half_up(winner.score + k_winner * (1.0 - expected_winner))),
        comparisons_seen=winner.comparisons_seen + 1,
    )
    new_loser = replace(
        loser,
        score=min(loser.score, round_half_up(loser.score + k_loser * (0.0 - expected_loser))),
        comparisons_seen=loser.comparisons_seen + 1,
    )
    return new_winner, new_loser


def leaderboard(ratings: Dict[str, RatingRecord]) -> List[RatingRecord]:
    """Records by score, highest first; equal scores by item id."""
    return sorted(ratings.values(), key=lambda r: (-r.score, r.item_id))


class Elo:
    """Minimal in-memory rating table."""

    def __init__(self, config: Optional[RankingConfig] = None) -> None:
        self.config = config or RankingConfig()
        self._records: Dict[str, RatingRecord] = {}

    def record(self, name: str) -> RatingRecord:
        if name not in self._records:
            self._records[name] = RatingRecord(name, self.config.initial_score, 0)
        return self._records[name]

    def rating(self, name: str) -> float:
        return self.record(name).score

    def update(self, winner: str, loser: str) -> Tuple[RatingRecord, RatingRecord]:
        new_winner, new_loser = apply_result(self.record(winner), self.record(loser), self.config)
        self._records[winner] = new_winner
        self._records[loser] = new_loser
        return new_winner, new_loser

    def leaderboard(self) -> List[Tuple[str, float]]:
        return [(r.item_id, r.score) for r in leaderboard(self._records)]
