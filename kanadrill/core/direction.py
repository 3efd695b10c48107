"""
Question Direction ("Reverse Mode")

Decides whether the next question asks forward (symbol -> reading) or in
reverse (reading -> symbol). The direction is independent of item content.

Strategies:
1. Smart - flips after a streak of consecutive correct answers
2. Fixed - always forward or always reverse (external override)
3. Random - coin flip per question, seeded for tests

Sessions pick one strategy from configuration via get_direction_strategy().
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from loguru import logger

from kanadrill.core.errors import InvalidArgumentError

FLIP_STREAK = 3


class Direction(str, Enum):
    """Question direction."""

    FORWARD = "forward"  # symbol -> reading
    REVERSE = "reverse"  # reading -> symbol

    @property
    def is_reverse(self) -> bool:
        return self is Direction.REVERSE

    def flipped(self) -> Direction:
        return Direction.FORWARD if self.is_reverse else Direction.REVERSE


@dataclass
class StreakState:
    """Mutable state of the smart controller. Never persisted."""

    direction: Direction = Direction.FORWARD
    consecutive_correct: int = 0


# =============================================================================
# Strategies
# =============================================================================


class DirectionStrategy:
    """Strategy interface for choosing question direction."""

    @property
    def current(self) -> Direction:
        """Direction for the next question."""
        raise NotImplementedError

    def record_correct(self) -> Direction:
        """Report a correct answer; returns the direction for the next question."""
        raise NotImplementedError

    def record_wrong(self) -> Direction:
        """Report a wrong answer; returns the direction for the next question."""
        raise NotImplementedError


class SmartReverseController(DirectionStrategy):
    """
    Two-state machine driven by answer streaks.

    - Correct: increment the streak; at ``flip_streak`` flip and reset to 0
    - Wrong: reset the streak to 0, keep the direction

    Starts in FORWARD with a zero streak and has no terminal state.
    """

    def __init__(self, flip_streak: int = FLIP_STREAK):
        if flip_streak < 1:
            raise InvalidArgumentError("flip_streak must be at least 1")
        self.flip_streak = flip_streak
        self.state = StreakState()

    @property
    def current(self) -> Direction:
        return self.state.direction

    @property
    def streak(self) -> int:
        return self.state.consecutive_correct

    def record_correct(self) -> Direction:
        self.state.consecutive_correct += 1
        if self.state.consecutive_correct >= self.flip_streak:
            self.state.direction = self.state.direction.flipped()
            self.state.consecutive_correct = 0
            logger.debug(f"Reverse mode flipped to {self.state.direction.value}")
        return self.state.direction

    def record_wrong(self) -> Direction:
        self.state.consecutive_correct = 0
        return self.state.direction


class FixedDirection(DirectionStrategy):
    """Externally controlled direction; answers never change it."""

    def __init__(self, direction: Direction = Direction.FORWARD):
        self.direction = direction

    @property
    def current(self) -> Direction:
        return self.direction

    def record_correct(self) -> Direction:
        return self.direction

    def record_wrong(self) -> Direction:
        return self.direction


class RandomDirection(DirectionStrategy):
    """Draws a fresh direction after every answer."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._current = Direction.FORWARD

    @property
    def current(self) -> Direction:
        return self._current

    def _roll(self) -> Direction:
        self._current = Direction.REVERSE if self.rng.random() < 0.5 else Direction.FORWARD
        return self._current

    def record_correct(self) -> Direction:
        return self._roll()

    def record_wrong(self) -> Direction:
        return self._roll()


def get_direction_strategy(
    mode: str,
    flip_streak: int = FLIP_STREAK,
    rng: Optional[random.Random] = None,
) -> DirectionStrategy:
    """
    Get the direction strategy for a configured mode name.

    Args:
        mode: "smart", "forward", "reverse" or "random"
        flip_streak: Streak length for the smart controller
        rng: Random source for the random strategy

    Raises:
        InvalidArgumentError: for an unknown mode
    """
    mode = mode.lower()
    if mode == "smart":
        return SmartReverseController(flip_streak)
    if mode == "forward":
        return FixedDirection(Direction.FORWARD)
    if mode == "reverse":
        return FixedDirection(Direction.REVERSE)
    if mode == "random":
        return RandomDirection(rng)
    raise InvalidArgumentError(f"unknown direction mode: {mode!r}")
