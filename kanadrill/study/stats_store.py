"""
Persistent answer statistics.

Stores all-time per-character counters and global totals as a JSON file
(default ~/.kanadrill/stats.json). Mastery is always computed from these
counters. The selection weight table is only written here when weight
persistence is enabled.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from kanadrill.core.errors import StatsStoreError
from kanadrill.core.ledger import PerformanceLedger
from kanadrill.data.kana import is_hiragana, is_katakana

# Keep only recent answer times
MAX_ANSWER_TIMES = 100


class CharacterCounts(BaseModel):
    """All-time counters for one character."""

    correct: int = Field(default=0, ge=0)
    incorrect: int = Field(default=0, ge=0)


class StatsSnapshot(BaseModel):
    """Serializable stats file contents."""

    characters: dict[str, CharacterCounts] = Field(default_factory=dict)

    # Global totals (one per question, not per character)
    correct_answers: int = 0
    wrong_answers: int = 0
    current_streak: int = 0
    best_streak: int = 0
    current_wrong_streak: int = 0

    # Per-character script totals
    hiragana_correct: int = 0
    katakana_correct: int = 0

    answer_times_ms: list[int] = Field(default_factory=list)

    # Only populated when weight persistence is on
    weights: dict[str, float] = Field(default_factory=dict)


class StatsStore:
    """
    Manages stats persistence.

    The in-memory snapshot is loaded once and written back on ``save()``.
    """

    def __init__(self, path: Path, snapshot: Optional[StatsSnapshot] = None):
        self.path = Path(path).expanduser()
        self.snapshot = snapshot or StatsSnapshot()

    @classmethod
    def open(cls, path: Path, strict: bool = False) -> StatsStore:
        """Create a store and load its file if one exists."""
        store = cls(path)
        store.load(strict=strict)
        return store

    def load(self, strict: bool = False) -> StatsSnapshot:
        """
        Load the snapshot from disk.

        A missing file yields empty stats. An unreadable file raises
        StatsStoreError when ``strict``; otherwise it is logged and ignored.
        """
        if not self.path.exists():
            self.snapshot = StatsSnapshot()
            return self.snapshot

        try:
            # Bytes, so bad UTF-8 surfaces as a ValidationError
            self.snapshot = StatsSnapshot.model_validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as e:
            if strict:
                raise StatsStoreError(f"Cannot read stats file {self.path}: {e}") from e
            logger.warning(f"Ignoring unreadable stats file {self.path}: {e}")
            self.snapshot = StatsSnapshot()
            return self.snapshot

        logger.info(f"Loaded stats for {len(self.snapshot.characters)} characters from {self.path}")
        return self.snapshot

    def save(self) -> Path:
        """Write the snapshot to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.snapshot.model_dump_json(indent=2), encoding="utf-8")
        logger.debug(f"Saved stats to {self.path}")
        return self.path

    def reset(self) -> None:
        """Clear all stats in memory and on disk."""
        self.snapshot = StatsSnapshot()
        if self.path.exists():
            self.path.unlink()
        logger.info(f"Reset stats at {self.path}")

    def record_outcome(
        self,
        item_ids: Iterable[str],
        was_correct: bool,
        answer_time_ms: Optional[int] = None,
    ) -> None:
        """
        Record one answered question.

        Every item in the question gets a per-character counter; global totals
        and streaks move once per question. Answer time is kept only for
        correct answers.
        """
        snap = self.snapshot
        for item_id in item_ids:
            counts = snap.characters.setdefault(item_id, CharacterCounts())
            if was_correct:
                counts.correct += 1
                if is_hiragana(item_id):
                    snap.hiragana_correct += 1
                elif is_katakana(item_id):
                    snap.katakana_correct += 1
            else:
                counts.incorrect += 1

        if was_correct:
            snap.correct_answers += 1
            snap.current_streak += 1
            snap.best_streak = max(snap.best_streak, snap.current_streak)
            snap.current_wrong_streak = 0
            if answer_time_ms is not None:
                snap.answer_times_ms.append(int(answer_time_ms))
                del snap.answer_times_ms[:-MAX_ANSWER_TIMES]
        else:
            snap.wrong_answers += 1
            snap.current_streak = 0
            snap.current_wrong_streak += 1

    def counters(self) -> dict[str, dict[str, int]]:
        """``{id: {correct, incorrect}}`` for mastery classification."""
        return {
            item_id: counts.model_dump()
            for item_id, counts in self.snapshot.characters.items()
        }

    def ledger(self) -> PerformanceLedger:
        """PerformanceLedger view of the persisted counters."""
        return PerformanceLedger.from_counters(self.counters())

    def average_answer_time_ms(self) -> float:
        times = self.snapshot.answer_times_ms
        if not times:
            return 0.0
        return sum(times) / len(times)

    @property
    def weights(self) -> dict[str, float]:
        return dict(self.snapshot.weights)

    def store_weights(self, weights: dict[str, float]) -> None:
        self.snapshot.weights = dict(weights)
