from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..errors import BaseStateError, NoFielderError
from ..features.transforms import saturating_neg
from ..sampler.rng import Decider
from ..schemas import (
    Base,
    BallLanding,
    BaseState,
    Fielder,
    FieldingEvent,
    FieldingPlay,
    FieldingRecord,
    HitOutcome,
    Team,
)
from ..utils.location import Location, fielding_location, heading, project_onto_segment
from ..utils.parks import is_home_run, wall_distance
from . import levels
from .advancement_model import simulate_base_running

logger = logging.getLogger(__name__)

GRAVITY = -32.174  # ft/s^2
CONTACT_HEIGHT = 6.0
# highest a fielder can reach for a catch
CATCH_HEIGHT = 8.0
# a ball rolling on the grass has lost this factor of its flight ground speed
ROLL_SLOWDOWN = 1.5


@dataclass(frozen=True)
class BallPath:
    location: Location
    travel_time: float


@dataclass(frozen=True)
class FieldedBall:
    fielder: Fielder
    location: Location
    travel_time: float


@dataclass(frozen=True)
class _Fielding:
    reaction: float
    speed: float
    transfer: float


def run_time(distance: float, speed: float) -> float:
    if speed <= 0.0:
        return math.inf
    return distance / speed


def travel_time_for_ball_height(launch_angle: float, exit_speed: float, height: float) -> Optional[float]:
    """Seconds until the ball, on its way down, passes `height` feet.

    Solves h0 + v_y t + g t^2 / 2 = height and keeps the later root. None if
    the ball never gets that high.
    """
    vertical = math.sin(math.radians(launch_angle)) * exit_speed
    discriminant = vertical ** 2 - 2.0 * GRAVITY * (CONTACT_HEIGHT - height)
    if discriminant < 0.0:
        return None
    root = math.sqrt(discriminant)
    return max((-vertical - root) / GRAVITY, (-vertical + root) / GRAVITY)


def ball_path(direction: float, launch_angle: float, exit_speed: float, height: float) -> BallPath:
    t = travel_time_for_ball_height(launch_angle, exit_speed, height)
    if t is None or t < 0.0:
        return BallPath(location=Location(direction=direction, distance=0.0), travel_time=0.0)
    distance = math.cos(math.radians(launch_angle)) * exit_speed * t
    return BallPath(location=Location(direction=direction, distance=distance), travel_time=t)


def attempt_catch(catchable: BallPath, landed: BallPath, fielding_team: Team,
                  decider: Decider) -> Optional[BallLanding]:
    """Fielder who can get under the ball before it drops below catch height.

    Every fielder runs for the closest point of the ball's descent from catch
    height to the ground; of those who get there in time, the one with the
    shortest run makes the catch.
    """
    start = catchable.location.to_cartesian()
    end = landed.location.to_cartesian()
    best = None
    for fielder in Fielder:
        player = fielding_team.player_at_position(fielder)
        speed = decider.roll_std_dev_skill_stat(levels.FIELDER_SPEED, player.fielder_run_speed_bias)
        spot = fielder.starting_location().to_cartesian()
        point = project_onto_segment(spot, start, end)
        distance = spot.distance(point)
        if run_time(distance, speed) < catchable.travel_time:
            if best is None or distance < best[0]:
                best = (distance, fielder, point)
    if best is None:
        return None
    _, fielder, point = best
    return BallLanding.caught(fielder, point.to_location())


def _roll_fielding(fielding_team: Team, decider: Decider) -> Dict[Fielder, _Fielding]:
    rolls = {}
    for fielder in Fielder:
        player = fielding_team.player_at_position(fielder)
        rolls[fielder] = _Fielding(
            reaction=decider.roll_std_dev_skill_stat(
                levels.PLAYER_REACTION_TIME, saturating_neg(player.fielder_reaction_time_bias)),
            speed=decider.roll_std_dev_skill_stat(levels.FIELDER_SPEED, player.fielder_run_speed_bias),
            transfer=decider.roll_std_dev_skill_stat(
                levels.FIELDER_TRANSFER_TIME, saturating_neg(player.fielder_transfer_time_bias)),
        )
    return rolls


def _nearest(candidates: List[Tuple[float, FieldedBall]]) -> Optional[FieldedBall]:
    if not candidates:
        return None
    # min keeps the first of equal runs, so ties go to Fielder order
    return min(candidates, key=lambda c: c[0])[1]


def closest_fielder(direction: float, landed: BallPath, fielding_team: Team, decider: Decider) -> FieldedBall:
    """Who fields a ball nobody caught, where, and when the throw can start."""
    rolls = _roll_fielding(fielding_team, decider)
    wall = wall_distance(direction)
    ball_speed = landed.location.distance / landed.travel_time if landed.travel_time > 0.0 else 0.0

    # (a) run the ball down at flight speed, on or past the landing spot
    candidates = []
    for fielder, r in rolls.items():
        if r.speed <= 0.0:
            continue
        spot = fielder.starting_location().to_cartesian()
        ball = heading(direction, ball_speed * r.reaction)
        point = fielding_location(spot, r.speed, ball, heading(direction, ball_speed))
        if point is None:
            continue
        reach = point.magnitude()
        if reach < landed.location.distance or reach > wall:
            continue
        run = spot.distance(point)
        t = r.reaction + run / r.speed + r.transfer
        candidates.append((run, FieldedBall(fielder=fielder, location=point.to_location(), travel_time=t)))
    found = _nearest(candidates)
    if found is not None:
        return found

    logger.debug("no flight-speed intercept at %.1f deg, trying the roll", direction)
    # (b) chase the ball as it rolls on from where it landed
    candidates = []
    roll_speed = ball_speed / ROLL_SLOWDOWN
    for fielder, r in rolls.items():
        if r.speed <= 0.0:
            continue
        spot = fielder.starting_location().to_cartesian()
        point = fielding_location(spot, r.speed, landed.location.to_cartesian(), heading(direction, roll_speed))
        if point is None or point.magnitude() >= wall:
            continue
        run = spot.distance(point)
        t = landed.travel_time + run / r.speed + r.transfer
        candidates.append((run, FieldedBall(fielder=fielder, location=point.to_location(), travel_time=t)))
    found = _nearest(candidates)
    if found is not None:
        return found

    logger.debug("ball rolls to the wall at %.1f deg (%.0f ft)", direction, wall)
    # (c) nearest fielder picks it up at the wall
    wall_spot = Location(direction=direction, distance=wall)
    runners = [f for f, r in rolls.items() if r.speed > 0.0]
    if not runners:
        raise NoFielderError(f"no fielder can reach the wall at {direction:.1f} deg")
    fielder = min(runners, key=lambda f: f.starting_location().distance_to(wall_spot))
    r = rolls[fielder]
    ball_time = wall / ball_speed if ball_speed > 0.0 else 0.0
    chase = fielder.starting_location().distance_to(wall_spot) / r.speed
    t = max(ball_time, chase) + r.reaction + r.transfer
    return FieldedBall(fielder=fielder, location=wall_spot, travel_time=t)


def force_play(base_state: BaseState) -> Base:
    """Lead base the defence can force a runner at."""
    if len(base_state) != 3:
        raise BaseStateError(f"base state must cover three bases, got {len(base_state)}")
    for base in (Base.FIRST, Base.SECOND, Base.THIRD):
        if base_state[base] is None:
            return base
    return Base.HOME


BASE_LOCATIONS = {
    Base.FIRST: Location.first_base(),
    Base.SECOND: Location.second_base(),
    Base.THIRD: Location.third_base(),
    Base.HOME: Location.home_plate(),
}

# who covers second, by the fielder who has the ball
SECOND_BASE_COVER = {
    Fielder.FIRST_BASE: Fielder.SHORTSTOP,
    Fielder.SECOND_BASE: Fielder.SHORTSTOP,
    Fielder.PITCHER: Fielder.SHORTSTOP,
    Fielder.RIGHT_FIELDER: Fielder.SHORTSTOP,
    Fielder.SHORTSTOP: Fielder.SECOND_BASE,
    Fielder.THIRD_BASE: Fielder.SECOND_BASE,
    Fielder.CATCHER: Fielder.SECOND_BASE,
    Fielder.LEFT_FIELDER: Fielder.SECOND_BASE,
}


def throw_to_force(fielded: FieldedBall, base: Base, to_fielder: Fielder, fielding_team: Team,
                   decider: Decider) -> FieldingPlay:
    if base not in BASE_LOCATIONS:
        raise BaseStateError(f"no base to throw to at index {base!r}")
    thrower = fielding_team.player_at_position(fielded.fielder)
    throw_speed = decider.roll_std_dev_skill_stat(levels.THROW_SPEED, thrower.fielder_throw_speed_bias)
    target = BASE_LOCATIONS[base]
    arrival = fielded.travel_time + run_time(fielded.location.distance_to(target), throw_speed)
    return FieldingPlay(
        from_fielder=fielded.fielder,
        from_event=FieldingEvent(location=fielded.location, travel_time=fielded.travel_time),
        to_fielder=to_fielder,
        to_event=FieldingEvent(location=target, travel_time=arrival),
        base=base,
    )


def force_at_first(fielded: FieldedBall, fielding_team: Team, decider: Decider) -> FieldingPlay:
    return throw_to_force(fielded, Base.FIRST, Fielder.FIRST_BASE, fielding_team, decider)


def second_base_cover(fielded: FieldedBall) -> Fielder:
    if fielded.fielder == Fielder.CENTER_FIELDER:
        if fielded.location.direction < 45.0:
            return Fielder.SECOND_BASE
        return Fielder.SHORTSTOP
    return SECOND_BASE_COVER[fielded.fielder]


def force_at_second(fielded: FieldedBall, fielding_team: Team, decider: Decider) -> FieldingPlay:
    return throw_to_force(fielded, Base.SECOND, second_base_cover(fielded), fielding_team, decider)


def force_at_third(fielded: FieldedBall, fielding_team: Team, decider: Decider) -> FieldingPlay:
    return throw_to_force(fielded, Base.THIRD, Fielder.THIRD_BASE, fielding_team, decider)


def force_at_home(fielded: FieldedBall, fielding_team: Team, decider: Decider) -> FieldingPlay:
    return throw_to_force(fielded, Base.HOME, Fielder.CATCHER, fielding_team, decider)


_FORCES = {
    Base.FIRST: force_at_first,
    Base.SECOND: force_at_second,
    Base.THIRD: force_at_third,
    Base.HOME: force_at_home,
}


def simulate_fielding(direction: float,
                      launch_angle: float,
                      exit_speed: float,
                      batter_index: int,
                      batting_team: Team,
                      fielding_team: Team,
                      base_state: BaseState,
                      decider: Decider,
                      outs: int = 0) -> HitOutcome:
    catchable = ball_path(direction, launch_angle, exit_speed, CATCH_HEIGHT)
    landed = ball_path(direction, launch_angle, exit_speed, 0.0)

    if is_home_run(direction, landed.location.distance):
        return HitOutcome.home_run()

    catch = attempt_catch(catchable, landed, fielding_team, decider)
    if catch is not None:
        running = simulate_base_running(
            batter_index, batting_team, fielding_team, catch, base_state, decider, outs=outs)
        return HitOutcome.in_play(FieldingRecord(landing=catch, base_running_record=running))

    fielded = closest_fielder(direction, landed, fielding_team, decider)
    play = _FORCES[force_play(base_state)](fielded, fielding_team, decider)
    running = simulate_base_running(
        batter_index, batting_team, fielding_team,
        BallLanding.landed(fielded.location, play), base_state, decider, outs=outs,
    )
    return HitOutcome.in_play(FieldingRecord(
        landing=BallLanding.landed(landed.location, play),
        base_running_record=running,
    ))
