"""
Question generation for drill modes.

Two question shapes:
- Word building (kana): several distinct characters drawn adaptively, answered
  by placing tiles in order
- Single choice (kanji/vocabulary): one item drawn adaptively, answered by
  picking one tile

Both draw through the AdaptiveSelector and add distractor tiles. Distractors
may be fewer than requested when the pool is small; that is not an error.
Builders guard pool size up front and return an empty question rather than
raising, so callers rendering questions never see InvalidArgumentError.
"""
from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from loguru import logger

from kanadrill.core.direction import Direction
from kanadrill.core.selection import AdaptiveSelector

DEFAULT_DISTRACTORS = 3


@dataclass
class DrillItem:
    """A kanji or vocabulary entry: stable id plus its meanings."""
    id: str
    meanings: tuple[str, ...]

    @property
    def primary_meaning(self) -> str:
        return self.meanings[0] if self.meanings else ""


@dataclass
class WordQuestion:
    """Word-building question. ``item_ids`` are the drawn source characters."""
    direction: Direction
    item_ids: list[str] = field(default_factory=list)
    prompt: list[str] = field(default_factory=list)
    answer: list[str] = field(default_factory=list)
    tiles: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.item_ids


@dataclass
class ChoiceQuestion:
    """Single-choice question over one drawn item."""
    direction: Direction
    item_ids: list[str] = field(default_factory=list)
    display: str = ""
    answer: list[str] = field(default_factory=list)
    tiles: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.item_ids


def pick_distractors(
    source: Sequence[str],
    exclude: set[str],
    count: int,
    rng: random.Random,
) -> list[str]:
    """Pick up to ``count`` distinct values from ``source`` not in ``exclude``."""
    distractors: list[str] = []
    for _ in range(max(0, count)):
        available = [v for v in dict.fromkeys(source) if v not in exclude and v not in distractors]
        if not available:
            break
        distractors.append(rng.choice(available))
    return distractors


def build_word_question(
    pairs: Mapping[str, str],
    word_length: int,
    direction: Direction,
    selector: AdaptiveSelector,
    rng: random.Random,
    distractor_count: int = DEFAULT_DISTRACTORS,
) -> WordQuestion:
    """
    Build a word of ``word_length`` distinct characters.

    Item ids are always the source characters (the keys of ``pairs``), in
    both directions, so weights and stats for a kana are shared between
    forward and reverse questions.

    Args:
        pairs: Character -> reading (e.g. kana -> romaji); keys are item ids
        word_length: Characters per word
        direction: FORWARD shows characters and expects readings; REVERSE the opposite
        selector: Adaptive selector used for the draw
        rng: Random source for distractors and tile order
        distractor_count: Maximum distractor tiles

    Returns:
        WordQuestion; empty when the pool holds fewer than ``word_length`` items
    """
    items = list(pairs)
    if word_length <= 0 or len(items) < word_length:
        logger.debug(f"Pool of {len(items)} too small for a {word_length}-character word")
        return WordQuestion(direction=direction)

    drawn = selector.draw_batch(items, word_length)
    readings = [pairs[i] for i in drawn]

    if direction.is_reverse:
        prompt, answer = readings, list(drawn)
        distractor_source = items
    else:
        prompt, answer = list(drawn), readings
        distractor_source = [pairs[i] for i in items]

    count = min(distractor_count, len(items) - word_length)
    distractors = pick_distractors(distractor_source, set(answer), count, rng)

    tiles = answer + distractors
    rng.shuffle(tiles)

    return WordQuestion(
        direction=direction,
        item_ids=drawn,
        prompt=prompt,
        answer=answer,
        tiles=tiles,
    )


def build_choice_question(
    items: Sequence[DrillItem],
    direction: Direction,
    selector: AdaptiveSelector,
    rng: random.Random,
    distractor_count: int = DEFAULT_DISTRACTORS,
) -> ChoiceQuestion:
    """
    Build a single-choice question.

    FORWARD shows the item and expects its primary meaning; REVERSE shows the
    meaning and expects the item. Distractors come from the other items.
    """
    by_id = {item.id: item for item in items}
    if not by_id:
        return ChoiceQuestion(direction=direction)

    chosen_id = selector.select_weighted_character(list(by_id))
    selector.mark_character_seen(chosen_id)
    chosen = by_id[chosen_id]

    if direction.is_reverse:
        display, correct = chosen.primary_meaning, chosen.id
        source = [other.id for other in by_id.values() if other.id != chosen_id]
    else:
        display, correct = chosen.id, chosen.primary_meaning
        source = [other.primary_meaning for other in by_id.values() if other.id != chosen_id]

    distractors = pick_distractors(source, {correct}, distractor_count, rng)
    tiles = [correct] + distractors
    rng.shuffle(tiles)

    return ChoiceQuestion(
        direction=direction,
        item_ids=[chosen_id],
        display=display,
        answer=[correct],
        tiles=tiles,
    )


def is_answer_correct(placed: Sequence[str], expected: Sequence[str]) -> bool:
    """Placed tiles must match the expected answer in length and order."""
    return len(placed) == len(expected) and all(
        tile == want for tile, want in zip(placed, expected)
    )
