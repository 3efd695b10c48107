"""
Performance Ledger.

Per-item running counters shared by the selector and the mastery classifier.

Design:
- ItemStat: counters, selection weight and a recency stamp for one item
- PerformanceLedger: explicit id -> ItemStat mapping with lazy default insertion

Entries are created on first sighting and never removed. Counters only grow.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

NEUTRAL_WEIGHT = 1.0


@dataclass
class ItemStat:
    """Running statistics for a single quizzable item."""

    correct: int = 0
    incorrect: int = 0
    weight: float = NEUTRAL_WEIGHT
    last_seen_at: int = 0  # ledger clock tick, 0 = never presented

    @property
    def attempts(self) -> int:
        return self.correct + self.incorrect

    @property
    def accuracy(self) -> float:
        """Fraction correct; 0.0 when the item was never answered."""
        if self.attempts == 0:
            return 0.0
        return self.correct / self.attempts

    def to_dict(self) -> dict[str, int]:
        """Counter view used by mastery classification and persistence."""
        return {"correct": self.correct, "incorrect": self.incorrect}


class PerformanceLedger(Mapping[str, ItemStat]):
    """
    Mapping from item identifier to ItemStat.

    Reads through ``peek`` never insert; ``stat`` inserts a default entry the
    first time an identifier is seen. Recency uses a monotonic clock owned by
    the ledger so that ordering is stable within a session.
    """

    def __init__(self, neutral_weight: float = NEUTRAL_WEIGHT):
        self.neutral_weight = neutral_weight
        self._stats: dict[str, ItemStat] = {}
        self._clock = 0

    def __getitem__(self, item_id: str) -> ItemStat:
        return self._stats[item_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._stats)

    def __len__(self) -> int:
        return len(self._stats)

    @property
    def clock(self) -> int:
        return self._clock

    def peek(self, item_id: str) -> ItemStat:
        """Return the stored stat, or a fresh default without storing it."""
        existing = self._stats.get(item_id)
        if existing is not None:
            return existing
        return ItemStat(weight=self.neutral_weight)

    def stat(self, item_id: str) -> ItemStat:
        """Return the stat for ``item_id``, creating it on first sighting."""
        existing = self._stats.get(item_id)
        if existing is None:
            existing = ItemStat(weight=self.neutral_weight)
            self._stats[item_id] = existing
        return existing

    def mark_seen(self, item_id: str) -> int:
        """Stamp ``item_id`` as just presented. Counters are untouched."""
        self._clock += 1
        self.stat(item_id).last_seen_at = self._clock
        return self._clock

    def record_outcome(self, item_id: str, was_correct: bool) -> ItemStat:
        """Add one answer to the item's all-time counters."""
        entry = self.stat(item_id)
        if was_correct:
            entry.correct += 1
        else:
            entry.incorrect += 1
        return entry

    def counters(self) -> dict[str, dict[str, int]]:
        """Snapshot of ``{id: {correct, incorrect}}`` for every known item."""
        return {item_id: entry.to_dict() for item_id, entry in self._stats.items()}

    @classmethod
    def from_counters(
        cls,
        counters: Mapping[str, Mapping[str, int]],
        neutral_weight: float = NEUTRAL_WEIGHT,
    ) -> PerformanceLedger:
        """Build a ledger from persisted ``{id: {correct, incorrect}}`` counters."""
        ledger = cls(neutral_weight=neutral_weight)
        for item_id, raw in counters.items():
            entry = ledger.stat(item_id)
            entry.correct = max(0, int(raw.get("correct", 0)))
            entry.incorrect = max(0, int(raw.get("incorrect", 0)))
        return ledger
