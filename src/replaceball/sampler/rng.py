from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np

from ..features.transforms import bias_fraction, clamp
from ..models.stat import Skill, Stat
from ..schemas import PitchHeight, PitchLocation, PitchWidth

ZONE_COUNT = 3
ZONE_SIZE = 127

_HEIGHTS = (PitchHeight.HIGH, PitchHeight.MIDDLE, PitchHeight.LOW)
_WIDTHS = (PitchWidth.LEFT, PitchWidth.CENTER, PitchWidth.RIGHT)


def zone_index(draw: int, bias: int) -> int:
    """Shift a raw zone draw by a bias (saturating at 0) and bucket it into 0..2."""
    shifted = max(0, int(draw) + int(bias))
    return min(ZONE_COUNT - 1, shifted // ZONE_SIZE)


def flip_threshold(probability: float, bias: int) -> float:
    return clamp(probability + bias_fraction(bias), 0.0, 1.0)


class Decider(ABC):
    """Every random choice the engine makes goes through one of these draws.

    Implementations may wrap a PRNG, replay a recorded log, or forward to a
    host-supplied source. A positive bias handed to `flip` always makes `True`
    more likely.
    """

    @abstractmethod
    def roll(self, check: int, count: int, adjust: int) -> bool:
        ...

    @abstractmethod
    def roll_pitch_location(self, height_bias: int, width_bias: int) -> PitchLocation:
        ...

    @abstractmethod
    def roll_index(self, start: int, stop: int) -> int:
        ...

    @abstractmethod
    def flip(self, probability: float, bias: int) -> bool:
        ...

    @abstractmethod
    def roll_uniform(self, low: float, high: float) -> float:
        ...

    @abstractmethod
    def roll_stat(self, stat: Stat, skill: Skill) -> float:
        ...

    def roll_std_dev_skill_stat(self, stat: Stat, bias: int) -> float:
        return self.roll_stat(stat, Skill.std_dev_bias_skill(bias, stat))


class RandomDecider(Decider):
    """numpy Generator backed decider. Not thread-safe; use one per game."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def roll(self, check: int, count: int, adjust: int) -> bool:
        r = int(self.rng.integers(0, count))
        return r < check + adjust

    def roll_pitch_location(self, height_bias: int, width_bias: int) -> PitchLocation:
        full_range = ZONE_COUNT * ZONE_SIZE
        width = _WIDTHS[zone_index(self.rng.integers(0, full_range), width_bias)]
        height = _HEIGHTS[zone_index(self.rng.integers(0, full_range), height_bias)]
        return PitchLocation(height=height, width=width)

    def roll_index(self, start: int, stop: int) -> int:
        return int(self.rng.integers(start, stop))

    def flip(self, probability: float, bias: int) -> bool:
        return float(self.rng.random()) < flip_threshold(probability, bias)

    def roll_uniform(self, low: float, high: float) -> float:
        return float(self.rng.uniform(low, high))

    def roll_stat(self, stat: Stat, skill: Skill) -> float:
        scaled = stat * skill
        sample = float(self.rng.normal(scaled.average, max(0.0, scaled.std_dev)))
        return scaled.clamp(sample)


def spawn_deciders(seed: Optional[int], n: int) -> List[RandomDecider]:
    """Independent deciders for `n` games, reproducible from one seed."""
    children = np.random.SeedSequence(seed).spawn(n)
    return [RandomDecider(rng=np.random.default_rng(child)) for child in children]
