from __future__ import annotations

from typing import Any, Iterable, List, Tuple

from ..errors import ReplayExhaustedError, ReplayMismatchError
from ..models.stat import Skill, Stat
from ..schemas import PitchLocation
from .rng import Decider

Draw = Tuple[str, Any]


class RecordingDecider(Decider):
    """Forward every draw to `inner` and keep a log that `ReplayDecider` can play back."""

    def __init__(self, inner: Decider):
        self.inner = inner
        self.log: List[Draw] = []

    def _keep(self, method: str, result):
        self.log.append((method, result))
        return result

    def roll(self, check: int, count: int, adjust: int) -> bool:
        return self._keep("roll", self.inner.roll(check, count, adjust))

    def roll_pitch_location(self, height_bias: int, width_bias: int) -> PitchLocation:
        return self._keep("roll_pitch_location", self.inner.roll_pitch_location(height_bias, width_bias))

    def roll_index(self, start: int, stop: int) -> int:
        return self._keep("roll_index", self.inner.roll_index(start, stop))

    def flip(self, probability: float, bias: int) -> bool:
        return self._keep("flip", self.inner.flip(probability, bias))

    def roll_uniform(self, low: float, high: float) -> float:
        return self._keep("roll_uniform", self.inner.roll_uniform(low, high))

    def roll_stat(self, stat: Stat, skill: Skill) -> float:
        return self._keep("roll_stat", self.inner.roll_stat(stat, skill))


class ReplayDecider(Decider):
    """Hand back logged draws in order."""

    def __init__(self, log: Iterable[Draw]):
        self._log = list(log)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._log) - self._pos

    def _next(self, method: str):
        if self._pos >= len(self._log):
            raise ReplayExhaustedError(f"replay log exhausted at draw {self._pos} ({method})")
        logged, result = self._log[self._pos]
        if logged != method:
            raise ReplayMismatchError(f"draw {self._pos}: log has {logged}, engine asked for {method}")
        self._pos += 1
        return result

    def roll(self, check: int, count: int, adjust: int) -> bool:
        return self._next("roll")

    def roll_pitch_location(self, height_bias: int, width_bias: int) -> PitchLocation:
        return self._next("roll_pitch_location")

    def roll_index(self, start: int, stop: int) -> int:
        return self._next("roll_index")

    def flip(self, probability: float, bias: int) -> bool:
        return self._next("flip")

    def roll_uniform(self, low: float, high: float) -> float:
        return self._next("roll_uniform")

    def roll_stat(self, stat: Stat, skill: Skill) -> float:
        return self._next("roll_stat")
