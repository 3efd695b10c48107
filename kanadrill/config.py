"""
Configuration settings for the kanadrill core.

Uses Pydantic Settings for environment variable management with .env file support.
Every variable is prefixed with KANADRILL_ (e.g. KANADRILL_FLIP_STREAK=2).
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KANADRILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Mastery Thresholds
    # ========================================
    attempt_threshold: int = Field(
        default=10,
        ge=1,
        description="Minimum all-time attempts before an item can count as mastered",
    )
    accuracy_threshold: float = Field(
        default=0.90,
        gt=0.0,
        le=1.0,
        description="Minimum all-time accuracy (inclusive) for mastery",
    )

    # ========================================
    # Adaptive Selection Weights
    # ========================================
    neutral_weight: float = Field(
        default=1.0,
        description="Weight assigned to items that have never been answered",
    )
    min_weight: float = Field(
        default=0.25,
        gt=0.0,
        description="Weight floor; keeps every candidate reachable",
    )
    max_weight: float = Field(
        default=8.0,
        description="Weight cap for items answered wrong repeatedly",
    )
    weight_boost: float = Field(
        default=1.5,
        gt=1.0,
        description="Multiplier applied to an item's weight on a wrong answer",
    )
    weight_decay: float = Field(
        default=0.8,
        gt=0.0,
        lt=1.0,
        description="Multiplier applied to an item's weight on a correct answer",
    )
    persist_weights: bool = Field(
        default=False,
        description="Save the selection weight table with the stats file between sessions",
    )

    # ========================================
    # Direction (Reverse Mode)
    # ========================================
    direction_mode: Literal["smart", "forward", "reverse", "random"] = Field(
        default="smart",
        description="Question direction strategy used when a session does not fix one",
    )
    flip_streak: int = Field(
        default=3,
        ge=1,
        description="Consecutive correct answers that flip smart reverse mode",
    )

    # ========================================
    # Drill Layout
    # ========================================
    word_length: int = Field(
        default=3,
        ge=1,
        description="Characters per word in word-building mode",
    )
    distractor_count: int = Field(
        default=3,
        ge=0,
        description="Maximum distractor tiles added to each question",
    )
    items_per_set: int = Field(
        default=10,
        ge=1,
        description="Items grouped into one practice set",
    )

    # ========================================
    # Storage & Logging
    # ========================================
    stats_path: Path = Field(
        default=Path.home() / ".kanadrill" / "stats.json",
        description="JSON file holding all-time per-character counters",
    )
    log_level: str = Field(
        default="WARNING",
        description="Loguru level for the CLI stderr sink",
    )

    @model_validator(mode="after")
    def _check_weight_bounds(self) -> Settings:
        if not self.min_weight <= self.neutral_weight <= self.max_weight:
            raise ValueError(
                "weights must satisfy min_weight <= neutral_weight <= max_weight "
                f"(got {self.min_weight}, {self.neutral_weight}, {self.max_weight})"
            )
        return self

    def get_selector_config(self) -> dict[str, float]:
        """Get adaptive selector weight parameters as a dictionary."""
        return {
            "neutral_weight": self.neutral_weight,
            "min_weight": self.min_weight,
            "max_weight": self.max_weight,
            "boost": self.weight_boost,
            "decay": self.weight_decay,
        }

    def get_mastery_thresholds(self) -> dict[str, float]:
        """Get mastery classification thresholds."""
        return {
            "attempts": self.attempt_threshold,
            "accuracy": self.accuracy_threshold,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
