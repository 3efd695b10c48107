"""
Core Module - Adaptive selection, mastery and direction control.

Components:
- ledger: PerformanceLedger / ItemStat (per-item counters and recency)
- selection: AdaptiveSelector (weighted draws, weight updates)
- mastery: MasteryClassifier (accuracy/attempt thresholds)
- direction: DirectionStrategy implementations (smart reverse mode)

The study layer (kanadrill.study) and the CLI import from here rather than
reimplementing these rules.
"""

from kanadrill.core.direction import (
    Direction,
    DirectionStrategy,
    FixedDirection,
    RandomDirection,
    SmartReverseController,
    get_direction_strategy,
)
from kanadrill.core.errors import InvalidArgumentError, KanadrillError, StatsStoreError
from kanadrill.core.ledger import ItemStat, PerformanceLedger
from kanadrill.core.mastery import (
    MasteryClassifier,
    MasteryLevel,
    MasteryThresholds,
    compute_mastered,
    is_set_mastered,
)
from kanadrill.core.selection import AdaptiveSelector, SelectorConfig

__all__ = [
    # Ledger
    "ItemStat",
    "PerformanceLedger",
    # Selection
    "AdaptiveSelector",
    "SelectorConfig",
    # Mastery
    "MasteryClassifier",
    "MasteryLevel",
    "MasteryThresholds",
    "compute_mastered",
    "is_set_mastered",
    # Direction
    "Direction",
    "DirectionStrategy",
    "FixedDirection",
    "RandomDirection",
    "SmartReverseController",
    "get_direction_strategy",
    # Errors
    "KanadrillError",
    "InvalidArgumentError",
    "StatsStoreError",
]
