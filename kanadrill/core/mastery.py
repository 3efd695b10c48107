"""
Core Mastery Module.

Classifies items as mastered from their all-time answer counters.

Design:
- MasteryThresholds: attempt/accuracy thresholds (both inclusive)
- MasteryLevel: display bands for CLI output
- compute_mastered: pure function of ledger counters, recomputed on demand
- MasteryClassifier: thresholds bundled with the helpers callers need

An item is mastered iff attempts >= 10 and accuracy >= 0.90. Selection weights
never enter this calculation.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from kanadrill.config import Settings

ATTEMPT_THRESHOLD = 10
ACCURACY_THRESHOLD = 0.90


@dataclass(frozen=True)
class MasteryThresholds:
    attempts: int = ATTEMPT_THRESHOLD
    accuracy: float = ACCURACY_THRESHOLD

    @classmethod
    def from_settings(cls, settings: Settings) -> MasteryThresholds:
        return cls(**settings.get_mastery_thresholds())


def _counts(record: Any) -> tuple[int, int]:
    """Read (correct, incorrect) from a dict-like record or an ItemStat."""
    if isinstance(record, Mapping):
        return int(record.get("correct", 0)), int(record.get("incorrect", 0))
    return int(record.correct), int(record.incorrect)


def calculate_accuracy(correct: int, incorrect: int) -> float:
    """
    Fraction of correct answers.

    Zero attempts has no defined accuracy and is treated as 0.0.
    """
    total = correct + incorrect
    if total <= 0:
        return 0.0
    return correct / total


def is_mastered(
    correct: int,
    incorrect: int,
    thresholds: MasteryThresholds = MasteryThresholds(),
) -> bool:
    """Check both thresholds; boundaries are inclusive."""
    total = correct + incorrect
    if total < thresholds.attempts:
        return False
    return calculate_accuracy(correct, incorrect) >= thresholds.accuracy


def compute_mastered(
    ledger: Mapping[str, Any],
    thresholds: MasteryThresholds = MasteryThresholds(),
) -> set[str]:
    """
    Derive the mastered set from ``{id: {correct, incorrect}}`` counters.

    Args:
        ledger: Mapping of item id to a counter dict or ItemStat
        thresholds: Attempt and accuracy thresholds

    Returns:
        Set of mastered item ids
    """
    mastered = set()
    for item_id, record in ledger.items():
        correct, incorrect = _counts(record)
        if is_mastered(correct, incorrect, thresholds):
            mastered.add(item_id)
    return mastered


def is_set_mastered(item_ids: Iterable[str], mastered: set[str]) -> bool:
    """
    A set is mastered when every item in it is mastered.

    An empty set is never mastered.
    """
    ids = list(item_ids)
    if not ids:
        return False
    return all(item_id in mastered for item_id in ids)


class MasteryLevel(str, Enum):
    """Mastery level categorization for display."""

    NOT_STARTED = "not_started"  # no attempts
    NOVICE = "novice"  # < 40% accuracy
    DEVELOPING = "developing"  # 40-69%
    PROFICIENT = "proficient"  # 70%+, thresholds not yet met
    MASTERED = "mastered"  # meets both mastery thresholds

    @classmethod
    def from_counts(
        cls,
        correct: int,
        incorrect: int,
        thresholds: MasteryThresholds = MasteryThresholds(),
    ) -> MasteryLevel:
        if correct + incorrect == 0:
            return cls.NOT_STARTED
        if is_mastered(correct, incorrect, thresholds):
            return cls.MASTERED
        accuracy = calculate_accuracy(correct, incorrect)
        if accuracy < 0.4:
            return cls.NOVICE
        elif accuracy < 0.7:
            return cls.DEVELOPING
        return cls.PROFICIENT

    @property
    def display_name(self) -> str:
        return _LEVEL_STYLE[self][0]

    @property
    def badge(self) -> str:
        """Rich markup shown in the stats table, e.g. ``[green]█ Mastered[/]``."""
        label, bar, style = _LEVEL_STYLE[self]
        return f"[{style}]{bar} {label}[/]"


# label, progress bar glyph, rich style
_LEVEL_STYLE: dict[MasteryLevel, tuple[str, str, str]] = {
    MasteryLevel.NOT_STARTED: ("Unseen", "·", "grey50"),
    MasteryLevel.NOVICE: ("Shaky", "▁", "red"),
    MasteryLevel.DEVELOPING: ("Learning", "▃", "yellow"),
    MasteryLevel.PROFICIENT: ("Solid", "▅", "blue"),
    MasteryLevel.MASTERED: ("Mastered", "█", "green"),
}


class MasteryClassifier:
    """
    Read-model over persisted counters.

    Holds only thresholds; every query recomputes from the ledger it is given.
    """

    def __init__(self, thresholds: MasteryThresholds | None = None):
        self.thresholds = thresholds or MasteryThresholds()

    def compute_mastered(self, ledger: Mapping[str, Any]) -> set[str]:
        return compute_mastered(ledger, self.thresholds)

    def is_item_mastered(self, ledger: Mapping[str, Any], item_id: str) -> bool:
        record = ledger.get(item_id)
        if record is None:
            return False
        correct, incorrect = _counts(record)
        return is_mastered(correct, incorrect, self.thresholds)

    def is_set_mastered(self, ledger: Mapping[str, Any], item_ids: Iterable[str]) -> bool:
        return is_set_mastered(item_ids, self.compute_mastered(ledger))

    def level(self, ledger: Mapping[str, Any], item_id: str) -> MasteryLevel:
        record = ledger.get(item_id)
        if record is None:
            return MasteryLevel.NOT_STARTED
        correct, incorrect = _counts(record)
        return MasteryLevel.from_counts(correct, incorrect, self.thresholds)
