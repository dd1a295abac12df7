"""Scripted deciders and small builders shared by the test modules."""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from replaceball.models.stat import Skill, Stat
from replaceball.sampler.rng import Decider
from replaceball.schemas import PitchHeight, PitchLocation, PitchWidth, Player, Team

CENTER = PitchLocation(height=PitchHeight.MIDDLE, width=PitchWidth.CENTER)


class ScriptedDecider(Decider):
    """Deterministic decider for forcing scenarios.

    - `flip` pops from `flips` while any remain, then falls back to `flip_fn`
    - stat draws return the skill-adjusted average unless `stats` overrides them
    - uniform draws land at `uniform_fraction` of the range
    """

    def __init__(self,
                 flips: Iterable[bool] = (),
                 flip_fn: Optional[Callable[[float, int], bool]] = None,
                 stats: Optional[Dict[Stat, float]] = None,
                 location: PitchLocation = CENTER,
                 uniform_fraction: float = 0.5):
        self.flips = list(flips)
        self.flip_fn = flip_fn or (lambda probability, bias: False)
        self.stats = stats or {}
        self.location = location
        self.uniform_fraction = uniform_fraction
        self.flip_calls = []

    def roll(self, check: int, count: int, adjust: int) -> bool:
        return False

    def roll_pitch_location(self, height_bias: int, width_bias: int) -> PitchLocation:
        return self.location

    def roll_index(self, start: int, stop: int) -> int:
        return start

    def flip(self, probability: float, bias: int) -> bool:
        self.flip_calls.append((probability, bias))
        if self.flips:
            return self.flips.pop(0)
        return self.flip_fn(probability, bias)

    def roll_uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.uniform_fraction

    def roll_stat(self, stat: Stat, skill: Skill) -> float:
        if stat in self.stats:
            return self.stats[stat]
        return (stat * skill).clamp((stat * skill).average)


def team(name: str = "T", **biases) -> Team:
    """Team of identical players carrying `biases`."""
    players = tuple(Player(name=f"{name}{i}", jersey_number=str(i), **biases) for i in range(9))
    return Team(name=name, fielders=players)
