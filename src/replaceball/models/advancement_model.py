from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..errors import BaseStateError
from ..features.transforms import saturating_neg
from ..sampler.rng import Decider
from ..schemas import (
    OUTS_PER_HALF_INNING,
    Base,
    BallLanding,
    BaseMovement,
    BaseRunningOutcome,
    BaseRunningRecord,
    BaseState,
    EMPTY_BASES,
    Fielder,
    FieldingPlay,
    HitType,
    MoveType,
    Team,
)
from ..utils.location import Location
from . import levels

# catch distances that let a runner tag up
SAC_FLY_DISTANCE = 250.0
TAG_TO_THIRD_DISTANCE = 275.0
TAG_TO_THIRD_DIRECTION = 45.0

# third base to first, across the diamond
THIRD_TO_FIRST = Location.third_base().distance_to(Location.first_base())

HIT_TYPES_BY_ADVANCE = {
    1: HitType.SINGLE,
    2: HitType.DOUBLE,
    3: HitType.TRIPLE,
    4: HitType.HOME_RUN,
}


def _time_over(distance: float, speed: float) -> float:
    if speed <= 0.0:
        return math.inf
    return distance / speed


def batter_advanced(throw_time: float, speed: float, box_exit: float) -> int:
    """Bases the batter reaches before the throw arrives, 0..4."""
    if speed <= 0.0:
        return 0
    bases = math.floor((throw_time - box_exit) * speed / levels.BASE_PATH)
    return max(0, min(4, bases))


@dataclass(frozen=True)
class Runner:
    index: int
    speed: float
    # takeoff delay for runners on base, box exit time for the batter
    start_delay: float

    def time_to_run(self, bases: int = 1) -> float:
        return self.start_delay + _time_over(bases * levels.BASE_PATH, self.speed)


def roll_batter(batter_index: int, batting_team: Team, decider: Decider) -> Runner:
    player = batting_team.player_at_batting_index(batter_index)
    return Runner(
        index=batter_index,
        speed=decider.roll_std_dev_skill_stat(levels.BASERUNNER_SPEED, player.baserunner_run_speed_bias),
        start_delay=decider.roll_std_dev_skill_stat(
            levels.BOX_EXIT_TIME, saturating_neg(player.baserunner_box_exit_time_bias)),
    )


def roll_runner(runner_index: int, batting_team: Team, decider: Decider) -> Runner:
    player = batting_team.player_at_batting_index(runner_index)
    return Runner(
        index=runner_index,
        speed=decider.roll_std_dev_skill_stat(levels.BASERUNNER_SPEED, player.baserunner_run_speed_bias),
        start_delay=decider.roll_std_dev_skill_stat(
            levels.BASE_TAKEOFF_DELAY, saturating_neg(player.baserunner_takeoff_delay_bias)),
    )


def throw_speed(fielder: Fielder, fielding_team: Team, decider: Decider) -> float:
    player = fielding_team.player_at_position(fielder)
    return decider.roll_std_dev_skill_stat(levels.THROW_SPEED, player.fielder_throw_speed_bias)


def relay_time(fielder: Fielder, distance: float, fielding_team: Team, decider: Decider) -> float:
    """Catch, transfer and throw `distance` feet on to the next base."""
    player = fielding_team.player_at_position(fielder)
    speed = throw_speed(fielder, fielding_team, decider)
    transfer = decider.roll_std_dev_skill_stat(
        levels.FIELDER_TRANSFER_TIME, saturating_neg(player.fielder_transfer_time_bias))
    return _time_over(distance, speed) + transfer


def throw_home_time(play: FieldingPlay, fielding_team: Team, decider: Decider) -> float:
    """When a throw straight home from the fielding spot would arrive."""
    speed = throw_speed(play.from_fielder, fielding_team, decider)
    distance = play.from_event.location.distance_to(Location.home_plate())
    return play.from_event.travel_time + _time_over(distance, speed)


def validate_base_state(base_state: BaseState) -> None:
    if len(base_state) != 3:
        raise BaseStateError(f"base state must cover three bases, got {len(base_state)}")
    occupants = [r for r in base_state if r is not None]
    if len(occupants) != len(set(occupants)):
        raise BaseStateError(f"runner on two bases at once: {base_state}")


class _Play:
    """Collects movements in order and keeps the diamond consistent."""

    def __init__(self, base_state: BaseState, batter_index: int, outs_before: int = 0):
        self.bases: List[Optional[int]] = list(base_state)
        self.batter_index = batter_index
        self.movements: List[BaseMovement] = []
        self.outs_before = outs_before
        self.outs = outs_before
        self.runs = 0
        self.hit_type = HitType.OUT

    def _lift(self, start: Optional[Base]) -> int:
        if start is None:
            return self.batter_index
        runner = self.bases[start]
        if runner is None:
            raise BaseStateError(f"no runner on {start.name.lower()} to move")
        self.bases[start] = None
        return runner

    def out(self, start: Optional[Base], at: Base) -> None:
        self._lift(start)
        self.outs += 1
        self.movements.append(BaseMovement(starting_base=start, bases_moved=MoveType.out(at)))

    def advance(self, start: Optional[Base], bases: int) -> None:
        runner = self._lift(start)
        movement = BaseMovement(starting_base=start, bases_moved=MoveType.advanced(bases))
        end = movement.ending_base
        if end >= Base.HOME:
            self.runs += 1
        else:
            if self.bases[end] is not None:
                raise BaseStateError(f"{Base(end).name.lower()} is already occupied")
            self.bases[end] = runner
        self.movements.append(movement)

    def score(self, start: Base) -> None:
        self.advance(start, Base.HOME - start)

    def record(self, outs: int) -> BaseRunningRecord:
        """Finish the play; a third out ends the half-inning and wipes its runs."""
        outs_left = OUTS_PER_HALF_INNING - outs
        if self.outs < outs_left:
            outcome = BaseRunningOutcome(
                outs_made=self.outs,
                runs_scored=self.runs,
                batter_hit_type=self.hit_type,
                ending_base_state=tuple(self.bases),
            )
            return BaseRunningRecord(movements=tuple(self.movements), outcome=outcome)

        kept = []
        made = self.outs_before
        for movement in self.movements:
            if made >= outs_left:
                break
            if movement.is_out:
                made += 1
                kept.append(movement)
            elif not movement.scores:
                kept.append(movement)
        outcome = BaseRunningOutcome(
            outs_made=min(self.outs, outs_left),
            runs_scored=0,
            batter_hit_type=self.hit_type,
            ending_base_state=EMPTY_BASES,
        )
        return BaseRunningRecord(movements=tuple(kept), outcome=outcome)


def _after_catch(landing: BallLanding, play: _Play, batting_team: Team, fielding_team: Team,
                 decider: Decider, outs: int) -> None:
    """Tag-ups on a caught fly ball."""
    if outs + play.outs >= OUTS_PER_HALF_INNING:
        return
    arm = throw_speed(landing.fielder, fielding_team, decider)
    threw_home = False

    on_third = play.bases[Base.THIRD]
    if on_third is not None and landing.location.distance > SAC_FLY_DISTANCE:
        runner = roll_runner(on_third, batting_team, decider)
        throw = _time_over(landing.location.distance_to(Location.home_plate()), arm)
        threw_home = True
        if _time_over(levels.BASE_PATH, runner.speed) > throw:
            play.out(Base.THIRD, Base.HOME)
        else:
            play.advance(Base.THIRD, 1)

    on_second = play.bases[Base.SECOND]
    if (on_second is not None and play.bases[Base.THIRD] is None
            and landing.location.distance > TAG_TO_THIRD_DISTANCE
            and landing.location.direction > TAG_TO_THIRD_DIRECTION):
        runner = roll_runner(on_second, batting_team, decider)
        throw = _time_over(landing.location.distance_to(Location.third_base()), arm)
        if _time_over(levels.BASE_PATH, runner.speed) > throw and not threw_home:
            play.out(Base.SECOND, Base.THIRD)
        else:
            play.advance(Base.SECOND, 1)


def _runners(base_state: BaseState, batting_team: Team, decider: Decider) -> Dict[Base, Runner]:
    return {
        base: roll_runner(base_state[base], batting_team, decider)
        for base in (Base.FIRST, Base.SECOND, Base.THIRD)
        if base_state[base] is not None
    }


def _extra_bases(p: _Play, adv: int, runners: Dict[Base, Runner], landing: BallLanding,
                 fielding_team: Team, decider: Decider) -> None:
    """Batter took two or more bases: every runner ahead of him moves up."""
    if adv >= 3:
        for base in (Base.THIRD, Base.SECOND, Base.FIRST):
            if base in runners:
                p.score(base)
        p.advance(None, adv)
        p.hit_type = HIT_TYPES_BY_ADVANCE[adv]
        return

    for base in (Base.THIRD, Base.SECOND):
        if base in runners:
            p.score(base)
    if Base.FIRST in runners:
        if runners[Base.FIRST].time_to_run(3) < throw_home_time(landing.play, fielding_team, decider):
            p.score(Base.FIRST)
        else:
            p.advance(Base.FIRST, 2)
    p.advance(None, 2)
    p.hit_type = HitType.DOUBLE


def _force_at_first(p: _Play, adv: int, batter: Runner, runners: Dict[Base, Runner],
                    landing: BallLanding, fielding_team: Team, decider: Decider) -> None:
    if Base.THIRD in runners:
        p.score(Base.THIRD)
    if Base.SECOND in runners:
        if adv >= 3 or runners[Base.SECOND].time_to_run(2) < throw_home_time(landing.play, fielding_team, decider):
            p.score(Base.SECOND)
        else:
            p.advance(Base.SECOND, 1)
    if adv == 0:
        p.out(None, Base.FIRST)
        p.hit_type = HitType.OUT
    else:
        p.advance(None, adv)
        p.hit_type = HIT_TYPES_BY_ADVANCE[adv]


def _force_at_second(p: _Play, adv: int, batter: Runner, runners: Dict[Base, Runner],
                     landing: BallLanding, fielding_team: Team, decider: Decider) -> None:
    play = landing.play
    arrival = play.to_event.travel_time
    lead = runners[Base.FIRST]

    if adv == 0:
        # runner on third holds
        if lead.time_to_run() > arrival:
            p.out(Base.FIRST, Base.SECOND)
            relay = relay_time(play.to_fielder, levels.BASE_PATH, fielding_team, decider)
            if batter.time_to_run() > arrival + relay:
                p.out(None, Base.FIRST)
                p.hit_type = HitType.OUT
            else:
                p.advance(None, 1)
                p.hit_type = HitType.FIELDERS_CHOICE
        else:
            p.advance(Base.FIRST, 1)
            p.advance(None, 1)
            p.hit_type = HitType.FIELDERS_CHOICE
        return

    if adv == 1:
        if Base.THIRD in runners:
            p.score(Base.THIRD)
        if lead.time_to_run() > arrival:
            p.out(Base.FIRST, Base.SECOND)
            p.hit_type = HitType.FIELDERS_CHOICE
        else:
            p.advance(Base.FIRST, 1)
            p.hit_type = HitType.SINGLE
        p.advance(None, 1)
        return

    _extra_bases(p, adv, runners, landing, fielding_team, decider)


def _force_at_third(p: _Play, adv: int, batter: Runner, runners: Dict[Base, Runner],
                    landing: BallLanding, fielding_team: Team, decider: Decider) -> None:
    play = landing.play
    arrival = play.to_event.travel_time
    lead = runners[Base.SECOND]
    trail = runners[Base.FIRST]

    if adv == 0:
        if lead.time_to_run() <= arrival:
            p.advance(Base.SECOND, 1)
            p.advance(Base.FIRST, 1)
            p.advance(None, 1)
            p.hit_type = HitType.FIELDERS_CHOICE
            return

        p.out(Base.SECOND, Base.THIRD)
        to_second = relay_time(Fielder.THIRD_BASE, levels.BASE_PATH, fielding_team, decider)
        if trail.time_to_run() > arrival + to_second:
            # around the horn
            p.out(Base.FIRST, Base.SECOND)
            to_first = relay_time(Fielder.SECOND_BASE, levels.BASE_PATH, fielding_team, decider)
            if batter.time_to_run() > arrival + to_second + to_first:
                p.out(None, Base.FIRST)
                p.hit_type = HitType.OUT
            else:
                p.advance(None, 1)
                p.hit_type = HitType.FIELDERS_CHOICE
            return

        p.advance(Base.FIRST, 1)
        across = relay_time(Fielder.THIRD_BASE, THIRD_TO_FIRST, fielding_team, decider)
        if batter.time_to_run() > arrival + across:
            p.out(None, Base.FIRST)
            p.hit_type = HitType.OUT
        else:
            p.advance(None, 1)
            p.hit_type = HitType.FIELDERS_CHOICE
        return

    if adv == 1:
        if lead.time_to_run() > arrival:
            p.out(Base.SECOND, Base.THIRD)
            p.hit_type = HitType.FIELDERS_CHOICE
        else:
            p.advance(Base.SECOND, 1)
            p.hit_type = HitType.SINGLE
        p.advance(Base.FIRST, 1)
        p.advance(None, 1)
        return

    _extra_bases(p, adv, runners, landing, fielding_team, decider)


def _force_at_home(p: _Play, adv: int, batter: Runner, runners: Dict[Base, Runner],
                   landing: BallLanding, fielding_team: Team, decider: Decider) -> None:
    play = landing.play
    arrival = play.to_event.travel_time

    if adv == 0:
        if runners[Base.THIRD].time_to_run() <= arrival:
            p.score(Base.THIRD)
            p.advance(Base.SECOND, 1)
            p.advance(Base.FIRST, 1)
            p.advance(None, 1)
            p.hit_type = HitType.FIELDERS_CHOICE
            return

        p.out(Base.THIRD, Base.HOME)
        to_third = relay_time(Fielder.CATCHER, levels.BASE_PATH, fielding_team, decider)
        if runners[Base.SECOND].time_to_run() > arrival + to_third:
            p.out(Base.SECOND, Base.THIRD)
            to_second = relay_time(Fielder.THIRD_BASE, levels.BASE_PATH, fielding_team, decider)
            if runners[Base.FIRST].time_to_run() > arrival + to_third + to_second:
                p.out(Base.FIRST, Base.SECOND)
            else:
                p.advance(Base.FIRST, 1)
            p.advance(None, 1)
            p.hit_type = HitType.FIELDERS_CHOICE
            return

        p.advance(Base.SECOND, 1)
        p.advance(Base.FIRST, 1)
        to_first = relay_time(Fielder.CATCHER, levels.BASE_PATH, fielding_team, decider)
        if batter.time_to_run() > arrival + to_first:
            p.out(None, Base.FIRST)
            p.hit_type = HitType.OUT
        else:
            p.advance(None, 1)
            p.hit_type = HitType.FIELDERS_CHOICE
        return

    if adv == 1:
        p.score(Base.THIRD)
        if runners[Base.SECOND].time_to_run(2) < arrival:
            p.score(Base.SECOND)
        else:
            p.advance(Base.SECOND, 1)
        p.advance(Base.FIRST, 1)
        p.advance(None, 1)
        p.hit_type = HitType.SINGLE
        return

    _extra_bases(p, adv, runners, landing, fielding_team, decider)


_FORCE_TABLE = {
    Base.FIRST: _force_at_first,
    Base.SECOND: _force_at_second,
    Base.THIRD: _force_at_third,
    Base.HOME: _force_at_home,
}


def simulate_base_running(batter_index: int,
                          batting_team: Team,
                          fielding_team: Team,
                          ball_landing: BallLanding,
                          base_state: BaseState,
                          decider: Decider,
                          outs: int = 0) -> BaseRunningRecord:
    """Resolve every runner, the batter included, once the ball is caught or fielded.

    `outs` is the count already recorded in the half-inning; a play that
    makes the third out is cut off there.
    """
    validate_base_state(base_state)

    if ball_landing.kind == "out":
        p = _Play(base_state, batter_index, outs_before=1)
        _after_catch(ball_landing, p, batting_team, fielding_team, decider, outs)
        return p.record(outs)

    play = ball_landing.play
    step = _FORCE_TABLE.get(play.base)
    if step is None:
        raise BaseStateError(f"no force play at base {play.base!r}")

    batter = roll_batter(batter_index, batting_team, decider)
    runners = _runners(base_state, batting_team, decider)
    adv = batter_advanced(play.to_event.travel_time, batter.speed, batter.start_delay)

    p = _Play(base_state, batter_index)
    step(p, adv, batter, runners, ball_landing, fielding_team, decider)
    return p.record(outs)
