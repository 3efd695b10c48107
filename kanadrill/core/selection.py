"""
Adaptive Item Selection.

Picks the next item to quiz with probability proportional to its weight:

    P(c) = weight(c) / sum(weight(candidates))

Weights rise on wrong answers and decay on correct answers, clamped to
[min_weight, max_weight]. The floor is strictly positive, so every candidate
stays reachable while items answered wrong are drawn more often.

Draws use a prefix-sum array and binary search over an injected random source,
which keeps sequences reproducible under a seeded ``random.Random``.
"""
from __future__ import annotations

import bisect
import itertools
import math
import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from kanadrill.config import Settings
from kanadrill.core.errors import InvalidArgumentError
from kanadrill.core.ledger import PerformanceLedger


@dataclass(frozen=True)
class SelectorConfig:
    """Weight parameters for the adaptive selector."""
    neutral_weight: float = 1.0
    min_weight: float = 0.25
    max_weight: float = 8.0
    boost: float = 1.5
    decay: float = 0.8

    def __post_init__(self):
        if self.min_weight <= 0:
            raise InvalidArgumentError("min_weight must be positive")
        if not self.min_weight <= self.neutral_weight <= self.max_weight:
            raise InvalidArgumentError(
                "expected min_weight <= neutral_weight <= max_weight"
            )
        if self.boost <= 1.0 or not 0.0 < self.decay < 1.0:
            raise InvalidArgumentError("boost must exceed 1 and decay must lie in (0, 1)")

    @classmethod
    def from_settings(cls, settings: Settings) -> SelectorConfig:
        return cls(**settings.get_selector_config())

    def clamp(self, weight: float) -> float:
        if not math.isfinite(weight):
            return self.max_weight if weight > 0 else self.min_weight
        return min(self.max_weight, max(self.min_weight, weight))


def _distinct(candidates: Iterable[str]) -> list[str]:
    """Drop repeated ids, keeping first-occurrence order."""
    return list(dict.fromkeys(candidates))


class AdaptiveSelector:
    """
    Weighted random selection over a caller-supplied candidate pool.

    The selector exclusively owns its weight table (a PerformanceLedger used
    for weights and recency). All-time answer counters for mastery live in the
    stats store, not here.
    """

    def __init__(
        self,
        config: Optional[SelectorConfig] = None,
        rng: Optional[random.Random] = None,
        state: Optional[PerformanceLedger] = None,
    ):
        """
        Initialize the selector.

        Args:
            config: SelectorConfig or None for defaults
            rng: Random source; inject a seeded instance for reproducible draws
            state: Existing weight table to continue from
        """
        self.config = config or SelectorConfig()
        self.rng = rng or random.Random()
        if state is None:
            state = PerformanceLedger(neutral_weight=self.config.neutral_weight)
        self.state = state

    def weight_of(self, item_id: str) -> float:
        """Current weight, or the neutral weight for unseen items."""
        return self.state.peek(item_id).weight

    def set_weight(self, item_id: str, weight: float) -> float:
        """Overwrite an item's weight (clamped). Used to restore saved tables."""
        entry = self.state.stat(item_id)
        entry.weight = self.config.clamp(weight)
        return entry.weight

    def select_weighted_character(self, candidates: Iterable[str]) -> str:
        """
        Pick one candidate with probability proportional to its weight.

        Args:
            candidates: Non-empty sequence of item ids; repeats are ignored

        Returns:
            The chosen id

        Raises:
            InvalidArgumentError: if the pool is empty
        """
        pool = _distinct(candidates)
        if not pool:
            raise InvalidArgumentError("cannot select from an empty candidate pool")

        cumulative = list(itertools.accumulate(self.weight_of(c) for c in pool))
        total = cumulative[-1]

        if total <= 0 or not math.isfinite(total):
            # Uniform fallback
            return pool[self.rng.randrange(len(pool))]

        point = self.rng.random() * total
        index = min(bisect.bisect_right(cumulative, point), len(pool) - 1)
        return pool[index]

    def mark_character_seen(self, item_id: str) -> None:
        """Record that ``item_id`` was just presented. Weight and counters are unchanged."""
        self.state.mark_seen(item_id)

    def update_character_weight(self, item_id: str, was_correct: bool) -> float:
        """
        Adjust an item's weight after an answer.

        Wrong answers multiply the weight by ``boost`` (capped at max_weight);
        correct answers multiply it by ``decay`` (floored at min_weight).

        Returns:
            The new weight
        """
        entry = self.state.stat(item_id)
        old = entry.weight
        factor = self.config.decay if was_correct else self.config.boost
        entry.weight = self.config.clamp(old * factor)
        logger.debug(
            f"Weight {item_id!r}: {old:.3f} -> {entry.weight:.3f} "
            f"({'correct' if was_correct else 'wrong'})"
        )
        return entry.weight

    def draw_batch(self, candidates: Iterable[str], count: int) -> list[str]:
        """
        Draw ``count`` distinct items for a multi-slot question.

        Each drawn id is removed from the pool before the next draw and marked
        as seen.

        Raises:
            InvalidArgumentError: if ``count`` exceeds the distinct pool size
        """
        pool = _distinct(candidates)
        if count <= 0:
            return []
        if count > len(pool):
            raise InvalidArgumentError(
                f"cannot draw {count} distinct items from a pool of {len(pool)}"
            )

        drawn: list[str] = []
        for _ in range(count):
            chosen = self.select_weighted_character(pool)
            pool.remove(chosen)
            drawn.append(chosen)
            self.mark_character_seen(chosen)
        return drawn

    def snapshot(self) -> dict[str, float]:
        """Weight table as ``{id: weight}`` for persistence."""
        return {item_id: entry.weight for item_id, entry in self.state.items()}

    def restore(self, weights: Mapping[str, float]) -> None:
        """Load a saved weight table, clamping every value to the configured bounds."""
        for item_id, weight in weights.items():
            self.set_weight(item_id, float(weight))
        logger.debug(f"Restored {len(weights)} selection weights")
