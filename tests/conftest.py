"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from kanadrill.config import Settings, get_settings
from kanadrill.core.selection import AdaptiveSelector, SelectorConfig
from kanadrill.study.stats_store import StatsStore


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def rng():
    """Seeded random source so draws are reproducible."""
    return random.Random(1234)


@pytest.fixture
def selector(rng):
    """Selector with default weight parameters."""
    return AdaptiveSelector(SelectorConfig(), rng=rng)


@pytest.fixture
def stats_path(tmp_path):
    return tmp_path / "stats.json"


@pytest.fixture
def store(stats_path):
    return StatsStore(stats_path)


@pytest.fixture
def settings(stats_path):
    """Settings with defaults, pointing at a temporary stats file."""
    return Settings(stats_path=stats_path, _env_file=None)


@pytest.fixture
def sample_pairs():
    """A small kana -> romaji pool."""
    return {
        "あ": "a",
        "い": "i",
        "う": "u",
        "え": "e",
        "お": "o",
        "か": "ka",
    }
