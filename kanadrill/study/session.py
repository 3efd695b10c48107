"""
Quiz Session: orchestration for one drill session.

Per question:
1. Ask the direction strategy for the current direction
2. Draw the item(s) through the adaptive selector
3. (caller renders and collects tiles)
4. On submit, report the outcome to the selector (weights), the stats store
   (all-time counters) and the direction strategy (streak / flip)

The selector and direction strategy are owned by the session and never see
each other's state.
"""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Optional, Union

from loguru import logger

from kanadrill.config import Settings, get_settings
from kanadrill.core.direction import (
    Direction,
    DirectionStrategy,
    FixedDirection,
    get_direction_strategy,
)
from kanadrill.core.errors import InvalidArgumentError
from kanadrill.core.mastery import MasteryClassifier, MasteryThresholds
from kanadrill.core.selection import AdaptiveSelector, SelectorConfig
from kanadrill.study.question_builder import (
    ChoiceQuestion,
    DrillItem,
    WordQuestion,
    build_choice_question,
    build_word_question,
    is_answer_correct,
)
from kanadrill.study.stats_store import StatsStore

Question = Union[WordQuestion, ChoiceQuestion]


@dataclass
class AnswerResult:
    """Outcome of one submitted answer."""
    correct: bool
    item_ids: list[str]
    expected: list[str]
    placed: list[str]
    score: int
    next_direction: Direction


class QuizSession:
    """
    One drill session over a caller-supplied candidate pool.

    Passing ``direction`` fixes the question direction for the whole session
    and bypasses the configured strategy.
    """

    def __init__(
        self,
        store: StatsStore,
        settings: Optional[Settings] = None,
        selector: Optional[AdaptiveSelector] = None,
        direction: Optional[Direction] = None,
        strategy: Optional[DirectionStrategy] = None,
        rng: Optional[random.Random] = None,
        autosave: bool = True,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.rng = rng or random.Random()
        self.autosave = autosave

        self.selector = selector or AdaptiveSelector(
            SelectorConfig.from_settings(self.settings), rng=self.rng
        )
        if self.settings.persist_weights and store.weights:
            self.selector.restore(store.weights)

        if direction is not None:
            self.strategy: DirectionStrategy = FixedDirection(direction)
        elif strategy is not None:
            self.strategy = strategy
        else:
            self.strategy = get_direction_strategy(
                self.settings.direction_mode, self.settings.flip_streak, self.rng
            )

        self.classifier = MasteryClassifier(MasteryThresholds.from_settings(self.settings))
        self.score = 0
        self.questions_answered = 0
        self.question: Optional[Question] = None

    @property
    def direction(self) -> Direction:
        return self.strategy.current

    def next_word(self, pairs: Mapping[str, str], word_length: Optional[int] = None) -> WordQuestion:
        """Build the next word-building question in the current direction."""
        question = build_word_question(
            pairs,
            word_length if word_length is not None else self.settings.word_length,
            self.direction,
            self.selector,
            self.rng,
            self.settings.distractor_count,
        )
        self.question = question
        return question

    def next_choice(self, items: Sequence[DrillItem]) -> ChoiceQuestion:
        """Build the next single-choice question in the current direction."""
        question = build_choice_question(
            items,
            self.direction,
            self.selector,
            self.rng,
            self.settings.distractor_count,
        )
        self.question = question
        return question

    def submit(
        self,
        placed: Sequence[str],
        answer_time_ms: Optional[int] = None,
    ) -> Optional[AnswerResult]:
        """
        Check the placed tiles against the current question and record the outcome.

        Args:
            placed: Tiles in the order the learner placed them
            answer_time_ms: Elapsed time measured by the caller (stats only)

        Returns:
            AnswerResult, or None when no tile was placed

        Raises:
            InvalidArgumentError: when there is no question to answer
        """
        if self.question is None or self.question.is_empty:
            raise InvalidArgumentError("no question is waiting for an answer")
        if not placed:
            return None

        question = self.question
        correct = is_answer_correct(placed, question.answer)

        for item_id in question.item_ids:
            self.selector.update_character_weight(item_id, correct)
        self.store.record_outcome(question.item_ids, correct, answer_time_ms)

        if correct:
            self.score += len(question.item_ids)
            next_direction = self.strategy.record_correct()
        else:
            self.score = max(0, self.score - 1)
            next_direction = self.strategy.record_wrong()

        self.questions_answered += 1
        self.question = None

        if self.settings.persist_weights:
            self.store.store_weights(self.selector.snapshot())
        if self.autosave:
            self.store.save()

        logger.debug(
            f"Answer {'correct' if correct else 'wrong'} for {question.item_ids}; "
            f"score={self.score}, next direction={next_direction.value}"
        )

        return AnswerResult(
            correct=correct,
            item_ids=list(question.item_ids),
            expected=list(question.answer),
            placed=list(placed),
            score=self.score,
            next_direction=next_direction,
        )

    def mastered(self) -> set[str]:
        """Mastered ids, recomputed from the persisted counters."""
        return self.classifier.compute_mastered(self.store.counters())

    def get_session_summary(self) -> dict:
        snap = self.store.snapshot
        return {
            "questions_answered": self.questions_answered,
            "score": self.score,
            "direction": self.direction.value,
            "best_streak": snap.best_streak,
            "average_answer_ms": self.store.average_answer_time_ms(),
        }
