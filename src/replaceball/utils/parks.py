from __future__ import annotations

from typing import List, Tuple

# (upper direction bound exclusive, distance) bands, scanned in order.
# Fences down the lines are shallower than straightaway centre.
_HOME_RUN_BANDS: List[Tuple[float, float]] = [
    (30.0, 370.0),
    (60.0, 400.0),
    (float("inf"), 370.0),
]


def home_run_distance(direction: float) -> float:
    """Carry distance a fair ball must exceed at `direction` to leave the park."""
    for upper, dist in _HOME_RUN_BANDS:
        if direction < upper:
            return dist
    return _HOME_RUN_BANDS[-1][1]


def is_home_run(direction: float, landed_distance: float) -> bool:
    return landed_distance > home_run_distance(direction)


def wall_distance(direction: float) -> float:
    """Distance to the outfield wall used when a ball rolls all the way out.

    Short corners sit at 325 ft, the alleys at 425 ft and straightaway centre
    at 400 ft.
    """
    if direction < 20.0 or direction > 70.0:
        return 325.0
    if direction < 30.0 or direction > 60.0:
        return 425.0
    return 400.0
