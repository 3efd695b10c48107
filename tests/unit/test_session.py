"""
Unit tests for QuizSession orchestration.

Sessions use a temporary stats file and a seeded random source.
"""

import random

import pytest

from kanadrill.config import Settings
from kanadrill.core.direction import Direction, SmartReverseController
from kanadrill.core.errors import InvalidArgumentError
from kanadrill.study.question_builder import DrillItem
from kanadrill.study.session import QuizSession
from kanadrill.study.stats_store import StatsStore


@pytest.fixture
def session(store, settings):
    return QuizSession(store, settings, rng=random.Random(11))


def answer_correctly(session, pairs, length=3):
    q = session.next_word(pairs, length)
    return q, session.submit(q.answer, answer_time_ms=800)


def answer_wrongly(session, pairs, length=3):
    q = session.next_word(pairs, length)
    return q, session.submit(["wrong"], answer_time_ms=800)


class TestSubmit:
    def test_correct_answer_updates_everything(self, session, sample_pairs, stats_path):
        q, result = answer_correctly(session, sample_pairs)

        assert result.correct is True
        assert result.score == 3
        assert result.item_ids == q.item_ids
        for item_id in q.item_ids:
            assert session.selector.weight_of(item_id) == pytest.approx(0.8)
            assert session.store.snapshot.characters[item_id].correct == 1
        assert stats_path.exists()

    def test_wrong_answer_updates_everything(self, session, sample_pairs):
        q, result = answer_wrongly(session, sample_pairs)

        assert result.correct is False
        assert result.expected == q.answer
        assert result.score == 0
        for item_id in q.item_ids:
            assert session.selector.weight_of(item_id) == pytest.approx(1.5)
            assert session.store.snapshot.characters[item_id].incorrect == 1

    def test_score_never_negative(self, session, sample_pairs):
        answer_correctly(session, sample_pairs)
        for _ in range(5):
            answer_wrongly(session, sample_pairs)
        assert session.score == 0

    def test_wrong_order_is_wrong(self, session, sample_pairs):
        q = session.next_word(sample_pairs, 3)
        result = session.submit(list(reversed(q.answer)))
        assert result.correct is False

    def test_nothing_placed_is_ignored(self, session, sample_pairs):
        session.next_word(sample_pairs, 3)
        assert session.submit([]) is None
        assert session.store.snapshot.wrong_answers == 0

    def test_submit_without_question_raises(self, session):
        with pytest.raises(InvalidArgumentError):
            session.submit(["a"])

    def test_question_answered_only_once(self, session, sample_pairs):
        answer_correctly(session, sample_pairs)
        with pytest.raises(InvalidArgumentError):
            session.submit(["a"])

    def test_autosave_off_leaves_disk_untouched(self, store, settings, sample_pairs, stats_path):
        session = QuizSession(store, settings, rng=random.Random(3), autosave=False)
        answer_correctly(session, sample_pairs)
        assert not stats_path.exists()

    def test_explicit_zero_length_gives_empty_question(self, session, sample_pairs):
        q = session.next_word(sample_pairs, 0)
        assert q.is_empty
        assert session.selector.snapshot() == {}

    def test_default_word_length_from_settings(self, session, sample_pairs, settings):
        q = session.next_word(sample_pairs)
        assert len(q.item_ids) == settings.word_length


class TestDirectionControl:
    def test_streak_flips_to_reverse(self, session, sample_pairs):
        for _ in range(3):
            answer_correctly(session, sample_pairs)

        assert session.direction == Direction.REVERSE
        q = session.next_word(sample_pairs, 3)
        assert q.direction == Direction.REVERSE
        assert q.answer == q.item_ids

    def test_wrong_answer_resets_streak(self, session, sample_pairs):
        answer_correctly(session, sample_pairs)
        answer_correctly(session, sample_pairs)
        answer_wrongly(session, sample_pairs)
        answer_correctly(session, sample_pairs)
        assert session.direction == Direction.FORWARD

    def test_fixed_direction_disables_controller(self, store, settings, sample_pairs):
        session = QuizSession(store, settings, direction=Direction.FORWARD, rng=random.Random(1))
        for _ in range(6):
            answer_correctly(session, sample_pairs)
        assert session.direction == Direction.FORWARD

    def test_direction_mode_from_settings(self, store, stats_path):
        settings = Settings(stats_path=stats_path, direction_mode="reverse", _env_file=None)
        session = QuizSession(store, settings)
        assert session.direction == Direction.REVERSE

    def test_explicit_strategy(self, store, settings, sample_pairs):
        session = QuizSession(
            store, settings, strategy=SmartReverseController(1), rng=random.Random(1)
        )
        answer_correctly(session, sample_pairs)
        assert session.direction == Direction.REVERSE


class TestWeightPersistence:
    def test_ephemeral_by_default(self, session, sample_pairs):
        answer_wrongly(session, sample_pairs)
        assert session.store.weights == {}

    def test_persisted_weights_restored(self, stats_path, sample_pairs):
        settings = Settings(stats_path=stats_path, persist_weights=True, _env_file=None)
        first = QuizSession(StatsStore(stats_path), settings, rng=random.Random(5))
        q, _ = answer_wrongly(first, sample_pairs)

        second = QuizSession(StatsStore.open(stats_path), settings)

        for item_id in q.item_ids:
            assert second.selector.weight_of(item_id) == pytest.approx(1.5)


class TestMasteryAndSummary:
    def test_mastered_after_ten_correct(self, session):
        pairs = {"あ": "a"}
        for _ in range(10):
            q = session.next_word(pairs, 1)
            session.submit(q.answer)
        assert session.mastered() == {"あ"}

    def test_choice_question_flow(self, session):
        items = [DrillItem("日", ("day",)), DrillItem("月", ("moon",))]
        q = session.next_choice(items)
        result = session.submit(q.answer)
        assert result.correct is True
        assert result.score == 1

    def test_summary(self, session, sample_pairs):
        answer_correctly(session, sample_pairs)
        summary = session.get_session_summary()
        assert summary["questions_answered"] == 1
        assert summary["score"] == 3
        assert summary["best_streak"] == 1
        assert summary["average_answer_ms"] == 800
