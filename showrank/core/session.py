"""
session.py - One user ranking one pool, one decision at a time

The session advances its in-memory state as soon as a decision is made so
the next pair can be proposed right away. Writes go to an optional
``persist(records, comparison)`` callback afterwards; a failed write is
logged and kept in ``pending_writes`` until ``flush_pending()`` succeeds.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .config import RankingConfig
from .elo_ranking import apply_result, leaderboard
from .models import Comparison, Item, RatingRecord, compared_pairs, ensure_ratings
from .ranking import (
    is_ranking_complete,
    pool_members,
    ranking_progress,
    resolve_pool,
    select_anchor,
    select_pair,
)
from showrank.utils.logging_helper import get_logger

log = get_logger()

Persist = Callable[[List[RatingRecord], Comparison], None]


@dataclass
class PendingWrite:
    records: List[RatingRecord]
    comparison: Comparison
    error: str = ""


class RankingSession:
    """
    Sequential ranking of one pool: propose a pair, take a decision, repeat.

    Args:
        items: Items of any pool; only the session's pool is used
        ratings: Existing rating records (missing ones are created on demand)
        comparisons: Existing comparison log
        config: Tunables; defaults to RankingConfig()
        rng: Anything with ``choice(seq)`` for the randomised top-K picks
        persist: Called with (changed records, new comparison) after each decision
        pool: Pool to rank; falls back to ``config.pool``, then the largest pool
    """

    def __init__(
        self,
        items: Sequence[Item],
        ratings: Iterable[RatingRecord] = (),
        comparisons: Iterable[Comparison] = (),
        config: Optional[RankingConfig] = None,
        rng: Any = None,
        persist: Optional[Persist] = None,
        pool: Optional[str] = None,
    ) -> None:
        self.config = config or RankingConfig()
        self.rng = rng
        self.persist = persist
        self.pool = resolve_pool(items, pool or self.config.pool) or self.config.default_pool

        self.items: List[Item] = pool_members(items, self.pool)
        self.ratings: Dict[str, RatingRecord] = {r.item_id: r for r in ratings}
        ids = self._ids()
        self.comparisons: List[Comparison] = [
            c for c in comparisons if c.item_a in ids and c.item_b in ids
        ]
        self.current: Optional[Tuple[Item, Item]] = None
        self.pending_writes: List[PendingWrite] = []
        log.info("Session on pool %r with %d items and %d comparisons",
                 self.pool, len(self.items), len(self.comparisons))

    def _ids(self) -> set:
        return {item.id for item in self.items}

    def _item(self, item_id: str) -> Item:
        for item in self.items:
            if item.id == item_id:
                return item
        raise ValueError(f"Unknown item in pool {self.pool!r}: {item_id}")

    def ensure_ratings(self) -> List[RatingRecord]:
        """Create default records for items that have none; return the new ones."""
        return ensure_ratings(self.items, self.ratings, self.config.initial_score)

    @property
    def compared(self) -> set:
        return compared_pairs(self.comparisons, include_skips=self.config.skip_policy == "block")

    # ── proposing ─────────────────────────────────────────────────────────
    def next_pair(self, focus_under_ranked: Optional[bool] = None) -> Optional[Tuple[Item, Item]]:
        """Propose the next pair, or None when nothing worth asking remains."""
        if focus_under_ranked is None:
            focus_under_ranked = self.config.focus_under_ranked
        self.ensure_ratings()
        self.current = select_pair(
            self.items,
            self.ratings,
            self.comparisons,
            compared=self.compared,
            focus_under_ranked=focus_under_ranked,
            rng=self.rng,
            config=self.config,
        )
        return self.current

    def pass_pair(self) -> None:
        """Drop the current proposal without recording anything."""
        self.current = None

    # ── deciding ──────────────────────────────────────────────────────────
    def record(self, winner_id: str) -> Tuple[RatingRecord, RatingRecord]:
        """
        Record that ``winner_id`` beat the other item of the current pair.

        Returns:
            (new_winner_record, new_loser_record)
        """
        if self.current is None:
            raise RuntimeError("No pair has been proposed; call next_pair() first")
        first, second = self.current
        if winner_id not in (first.id, second.id):
            raise ValueError(f"{winner_id} is not in the current pair ({first.id}, {second.id})")
        loser_id = second.id if winner_id == first.id else first.id

        self.ensure_ratings()
        new_winner, new_loser = apply_result(self.ratings[winner_id], self.ratings[loser_id], self.config)
        self.ratings[winner_id] = new_winner
        self.ratings[loser_id] = new_loser

        comparison = Comparison(first.id, second.id, winner_id)
        self.comparisons.append(comparison)
        self.current = None
        log.info("%s beat %s (%.0f / %.0f)", winner_id, loser_id, new_winner.score, new_loser.score)

        self._persist([new_winner, new_loser], comparison)
        return new_winner, new_loser

    def skip(self) -> Comparison:
        """Log the current pair as a skip; ratings stay as they are."""
        if self.current is None:
            raise RuntimeError("No pair has been proposed; call next_pair() first")
        first, second = self.current
        comparison = Comparison(first.id, second.id, None)
        self.comparisons.append(comparison)
        self.current = None

        changed: List[RatingRecord] = []
        if self.config.count_skips:
            self.ensure_ratings()
            for item_id in (first.id, second.id):
                record = self.ratings[item_id]
                self.ratings[item_id] = replace(record, comparisons_seen=record.comparisons_seen + 1)
                changed.append(self.ratings[item_id])
        log.info("Skipped %s vs %s", first.id, second.id)

        self._persist(changed, comparison)
        return comparison

    def add_item(self, item: Item) -> Optional[Item]:
        """Register a newly added item and return the anchor to compare it with first."""
        if item.id in self._ids():
            raise ValueError(f"Item already in pool {self.pool!r}: {item.id}")
        existing = list(self.items)
        self.items.append(item)
        self.ensure_ratings()
        anchor = select_anchor(
            item.id,
            existing,
            {i.id: self.ratings[i.id] for i in existing},
            rng=self.rng,
            top_k=self.config.anchor_top_k,
            initial_score=self.config.initial_score,
        )
        if anchor is not None:
            self.current = (item, anchor)
        return anchor

    # ── persistence ───────────────────────────────────────────────────────
    def _persist(self, records: List[RatingRecord], comparison: Comparison) -> None:
        if self.persist is None:
            return
        if self.pending_writes:
            # keep writes in order behind the ones already waiting
            self.pending_writes.append(PendingWrite(records, comparison, "queued"))
            return
        try:
            self.persist(records, comparison)
        except Exception as e:
            log.warning("Could not save %s vs %s, queued for retry: %s",
                        comparison.item_a, comparison.item_b, e)
            self.pending_writes.append(PendingWrite(records, comparison, str(e)))

    def flush_pending(self) -> int:
        """Retry queued writes in order; stop at the first failure. Returns how many were saved."""
        saved = 0
        while self.pending_writes and self.persist is not None:
            write = self.pending_writes[0]
            try:
                self.persist(write.records, write.comparison)
            except Exception as e:
                write.error = str(e)
                log.error("Retry failed for %s vs %s: %s",
                          write.comparison.item_a, write.comparison.item_b, e)
                break
            self.pending_writes.pop(0)
            saved += 1
        return saved

    # ── reporting ─────────────────────────────────────────────────────────
    def is_complete(self) -> bool:
        return is_ranking_complete(
            self.items, self.ratings, self.comparisons,
            compared=self.compared, config=self.config,
        )

    def progress(self) -> float:
        return ranking_progress(len(self.comparisons), len(self.items), self.config)

    def leaderboard(self) -> List[Tuple[Item, RatingRecord]]:
        self.ensure_ratings()
        ids = self._ids()
        by_id = {item.id: item for item in self.items}
        return [(by_id[r.item_id], r) for r in leaderboard(self.ratings) if r.item_id in ids]
