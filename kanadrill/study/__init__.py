"""
Study Module for kana/kanji drills.

Provides:
- Question generation (word building, single choice)
- Practice set partitioning with mastery annotation
- Persistent answer statistics
- Quiz session orchestration
"""

from kanadrill.study.question_builder import (
    ChoiceQuestion,
    DrillItem,
    WordQuestion,
    build_choice_question,
    build_word_question,
    is_answer_correct,
)
from kanadrill.study.session import AnswerResult, QuizSession
from kanadrill.study.sets import DrillSet, filter_sets, mastered_count, partition_sets
from kanadrill.study.stats_store import StatsSnapshot, StatsStore

__all__ = [
    "AnswerResult",
    "ChoiceQuestion",
    "DrillItem",
    "DrillSet",
    "QuizSession",
    "StatsSnapshot",
    "StatsStore",
    "WordQuestion",
    "build_choice_question",
    "build_word_question",
    "filter_sets",
    "is_answer_correct",
    "mastered_count",
    "partition_sets",
]
