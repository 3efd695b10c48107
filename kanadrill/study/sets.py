"""
Practice sets.

A collection (e.g. a JLPT kanji level or a vocabulary list) is split into
fixed-size sets. A set is mastered when every item in it is mastered, so the
"hide mastered sets" filter can be computed from the mastered id set alone.
"""
from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from kanadrill.core.mastery import is_set_mastered

ITEMS_PER_SET = 10


@dataclass
class DrillSet:
    name: str
    index: int
    item_ids: list[str]
    is_mastered: bool = False


def partition_sets(
    item_ids: Sequence[str],
    mastered: set[str],
    items_per_set: int = ITEMS_PER_SET,
    prev_length: int = 0,
) -> list[DrillSet]:
    """
    Split a collection into sets and annotate mastery.

    Args:
        item_ids: Collection items in dataset order
        mastered: Mastered ids, from compute_mastered()
        items_per_set: Items per set; the last set may be shorter
        prev_length: Number of sets in earlier collections, for continuous naming

    Returns:
        Sets named "Set N", numbered from ``prev_length + 1``
    """
    if items_per_set < 1:
        raise ValueError("items_per_set must be at least 1")

    count = math.ceil(len(item_ids) / items_per_set)
    sets = []
    for i in range(count):
        chunk = list(item_ids[i * items_per_set:(i + 1) * items_per_set])
        sets.append(
            DrillSet(
                name=f"Set {prev_length + i + 1}",
                index=i,
                item_ids=chunk,
                is_mastered=is_set_mastered(chunk, mastered),
            )
        )
    return sets


def filter_sets(sets: list[DrillSet], hide_mastered: bool) -> list[DrillSet]:
    if not hide_mastered:
        return list(sets)
    return [s for s in sets if not s.is_mastered]


def mastered_count(sets: list[DrillSet]) -> int:
    return sum(1 for s in sets if s.is_mastered)
