from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from ..features.transforms import bias_fraction, clamp


@dataclass(frozen=True)
class Stat:
    """A real-world distribution: mean, spread and the hard limits of a sample."""

    average: float
    std_dev: float
    range: Tuple[float, float]

    def __mul__(self, skill: "Skill") -> "Stat":
        return replace(
            self,
            average=self.average * skill.average_multiplier + skill.average_shift,
            std_dev=self.std_dev * skill.std_dev_multiplier,
        )

    def clamp(self, sample: float) -> float:
        return clamp(sample, self.range[0], self.range[1])


@dataclass(frozen=True)
class Skill:
    """Per-player transform applied to a Stat before it is sampled."""

    average_multiplier: float = 1.0
    average_shift: float = 0.0
    std_dev_multiplier: float = 1.0

    @classmethod
    def std_dev_bias_skill(cls, bias: int, stat: Stat) -> "Skill":
        # the extreme bias moves the mean by one standard deviation
        return cls(average_shift=bias_fraction(bias) * stat.std_dev)
