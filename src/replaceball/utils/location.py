from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..errors import FieldingGeometryError

# Directions are degrees measured from the left-field (third base) foul line
# (0) to the right-field (first base) foul line (90). Distances are feet from
# home plate. Cartesian x runs along the left-field line, y along the right.
MAX_DIRECTION = 90.0


@dataclass(frozen=True)
class Cartesian:
    x: float
    y: float

    def __add__(self, other: "Cartesian") -> "Cartesian":
        return Cartesian(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Cartesian") -> "Cartesian":
        return Cartesian(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Cartesian":
        return Cartesian(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> "Cartesian":
        return Cartesian(self.x / scalar, self.y / scalar)

    def dot(self, other: "Cartesian") -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Cartesian":
        m = self.magnitude()
        if m == 0.0:
            return Cartesian(0.0, 0.0)
        return self / m

    def square_distance(self, other: "Cartesian") -> float:
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2

    def distance(self, other: "Cartesian") -> float:
        return math.sqrt(self.square_distance(other))

    def to_location(self) -> "Location":
        return Location.from_cartesian(self)


class Location(BaseModel):
    """Polar field position: direction in degrees, distance in feet."""

    model_config = ConfigDict(frozen=True)

    direction: float
    distance: float

    @classmethod
    def first_base(cls) -> "Location":
        return cls(direction=89.0, distance=90.0)

    @classmethod
    def second_base(cls) -> "Location":
        return cls(direction=45.0, distance=127.25)

    @classmethod
    def third_base(cls) -> "Location":
        return cls(direction=1.0, distance=90.0)

    @classmethod
    def home_plate(cls) -> "Location":
        return cls(direction=45.0, distance=0.0)

    @classmethod
    def from_cartesian(cls, point: Cartesian) -> "Location":
        return cls(
            direction=math.degrees(math.atan2(point.y, point.x)),
            distance=point.magnitude(),
        )

    def to_cartesian(self) -> Cartesian:
        rad = math.radians(self.direction)
        return Cartesian(math.cos(rad) * self.distance, math.sin(rad) * self.distance)

    def square_distance_to(self, other: "Location") -> float:
        return self.to_cartesian().square_distance(other.to_cartesian())

    def distance_to(self, other: "Location") -> float:
        return self.to_cartesian().distance(other.to_cartesian())


def heading(direction: float, speed: float) -> Cartesian:
    """Velocity vector of a ball travelling along `direction` at `speed` ft/s."""
    return Location(direction=direction, distance=speed).to_cartesian()


def project_onto_segment(point: Cartesian, start: Cartesian, end: Cartesian) -> Cartesian:
    """Closest point to `point` on the segment start..end."""
    segment = end - start
    length_sq = segment.dot(segment)
    if length_sq == 0.0:
        return start
    t = (point - start).dot(segment) / length_sq
    t = max(0.0, min(1.0, t))
    return start + segment * t


def intercept_time(start: Cartesian, speed: float, ball: Cartesian, velocity: Cartesian) -> Optional[float]:
    """Earliest time a runner at `start` moving at `speed` meets the moving ball.

    With D the vector from the fielder to the ball, v the ball speed and alpha
    the angle between D and the ball's heading, the law of cosines gives

        (v^2 - s^2) t^2 + 2 |D| v cos(alpha) t + |D|^2 = 0

    Returns the smallest non-negative root, or None if the fielder never gets
    there.
    """
    to_ball = ball - start
    gap = to_ball.magnitude()
    if gap == 0.0:
        return 0.0

    ball_speed = velocity.magnitude()
    if ball_speed == 0.0:
        cos_alpha = 0.0
    else:
        cos_alpha = to_ball.dot(velocity) / (gap * ball_speed)

    a = ball_speed ** 2 - speed ** 2
    b = 2.0 * gap * ball_speed * cos_alpha
    c = gap ** 2

    if a == 0.0:
        if b >= 0.0:
            return None
        roots = [-c / b]
    else:
        discriminant = b ** 2 - 4.0 * a * c
        if discriminant < 0.0:
            return None
        root = math.sqrt(discriminant)
        roots = [(-b - root) / (2.0 * a), (-b + root) / (2.0 * a)]

    if any(math.isnan(r) for r in roots):
        raise FieldingGeometryError(f"intercept solve produced NaN: {roots}")

    valid = [r for r in roots if r >= 0.0]
    if not valid:
        return None
    return min(valid)


def fielding_location(start: Cartesian, speed: float, ball: Cartesian, velocity: Cartesian) -> Optional[Cartesian]:
    """Point where a fielder starting at `start` first meets the moving ball."""
    t = intercept_time(start, speed, ball, velocity)
    if t is None:
        return None
    point = ball + velocity * t
    if math.isnan(point.x) or math.isnan(point.y):
        raise FieldingGeometryError(f"intercept point is NaN after {t}s")
    return point
