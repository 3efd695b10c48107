"""
Unit tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from kanadrill.config import Settings, get_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.attempt_threshold == 10
        assert settings.accuracy_threshold == 0.90
        assert settings.flip_streak == 3
        assert settings.direction_mode == "smart"
        assert settings.persist_weights is False
        assert settings.min_weight < settings.neutral_weight < settings.max_weight

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("KANADRILL_FLIP_STREAK", "2")
        monkeypatch.setenv("KANADRILL_DIRECTION_MODE", "random")
        monkeypatch.setenv("KANADRILL_PERSIST_WEIGHTS", "true")

        settings = get_settings()

        assert settings.flip_streak == 2
        assert settings.direction_mode == "random"
        assert settings.persist_weights is True

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_weight": 0.0},
            {"neutral_weight": 20.0},
            {"weight_boost": 0.9},
            {"weight_decay": 1.2},
            {"flip_streak": 0},
            {"accuracy_threshold": 1.5},
            {"direction_mode": "sideways"},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **kwargs)

    def test_component_dicts(self):
        settings = Settings(_env_file=None)
        assert settings.get_mastery_thresholds() == {"attempts": 10, "accuracy": 0.90}
        assert settings.get_selector_config()["boost"] == settings.weight_boost
