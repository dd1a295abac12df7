import math

import pytest

from helpers import ScriptedDecider, team
from replaceball.errors import BaseStateError, NoFielderError
from replaceball.models import levels
from replaceball.models.fielding import (
    BallPath,
    FieldedBall,
    attempt_catch,
    ball_path,
    closest_fielder,
    force_at_second,
    force_play,
    second_base_cover,
    simulate_fielding,
    travel_time_for_ball_height,
)
from replaceball.schemas import EMPTY_BASES, Base, Fielder, HitType, Player, Team
from replaceball.utils.location import Location


def _fielded(fielder, direction=45.0, distance=120.0, t=2.0):
    return FieldedBall(fielder=fielder, location=Location(direction=direction, distance=distance), travel_time=t)


def test_line_drive_flight_time_from_contact_height():
    t = travel_time_for_ball_height(0.0, 100.0, 0.0)
    assert t == pytest.approx(math.sqrt(2.0 * 6.0 / 32.174))
    # never rises to catch height
    assert travel_time_for_ball_height(0.0, 100.0, 8.0) is None


def test_unreachable_height_degenerates_to_contact_point():
    path = ball_path(30.0, -10.0, 100.0, 8.0)
    assert path.location.distance == 0.0
    assert path.travel_time == 0.0
    assert path.location.direction == 30.0


def test_deep_fly_is_a_home_run():
    out = simulate_fielding(45.0, 35.0, 160.0, 0, team("A"), team("H"), EMPTY_BASES, ScriptedDecider())
    assert out.kind == "home_run"
    assert out.hit_type() == HitType.HOME_RUN


def test_pop_up_is_caught_by_nearest_fielder():
    catchable = ball_path(45.0, 70.0, 50.0, 8.0)
    landed = ball_path(45.0, 70.0, 50.0, 0.0)
    landing = attempt_catch(catchable, landed, team("H"), ScriptedDecider())
    assert landing is not None
    assert landing.kind == "out"
    assert landing.fielder == Fielder.PITCHER
    # pitcher stands beyond the landing spot, so he meets it at the end of the descent
    assert landing.location.distance == pytest.approx(landed.location.distance)


def test_caught_ball_with_empty_bases_is_a_plain_out():
    out = simulate_fielding(45.0, 70.0, 50.0, 0, team("A"), team("H"), EMPTY_BASES, ScriptedDecider())
    assert out.kind == "in_play"
    record = out.fielding.base_running_record
    assert record.movements == ()
    assert record.outcome.outs_made == 1
    assert out.hit_type() == HitType.OUT


def test_grounder_is_fielded_and_thrown_to_first():
    out = simulate_fielding(45.0, 0.0, 125.0, 0, team("A"), team("H"), EMPTY_BASES, ScriptedDecider())
    landing = out.fielding.landing
    assert landing.kind == "landed"
    play = landing.play
    assert play.base == Base.FIRST
    assert play.to_fielder == Fielder.FIRST_BASE
    assert play.to_event.location == Location.first_base()
    assert play.to_event.travel_time > play.from_event.travel_time


def test_flight_speed_intercept_is_past_landing_and_short_of_wall():
    landed = ball_path(45.0, 0.0, 125.0, 0.0)
    fielded = closest_fielder(45.0, landed, team("H"), ScriptedDecider())
    assert landed.location.distance <= fielded.location.distance <= 400.0
    assert fielded.fielder == Fielder.CENTER_FIELDER
    floor = levels.PLAYER_REACTION_TIME.average + levels.FIELDER_TRANSFER_TIME.average
    assert fielded.travel_time > floor


def _fielding_time(run, speed_bias, transfer_bias):
    speed = levels.FIELDER_SPEED.average + speed_bias / 127 * levels.FIELDER_SPEED.std_dev
    transfer = levels.FIELDER_TRANSFER_TIME.average - transfer_bias / 127 * levels.FIELDER_TRANSFER_TIME.std_dev
    return run / speed + transfer


def test_nearest_fielder_takes_the_ball_over_a_quicker_one():
    players = [Player() for _ in Fielder]
    players[Fielder.PITCHER] = Player(fielder_run_speed_bias=-127, fielder_transfer_time_bias=-127)
    players[Fielder.SECOND_BASE] = Player(fielder_run_speed_bias=127, fielder_transfer_time_bias=127)
    fielding_team = Team(name="H", fielders=tuple(players))
    # dead ball sitting behind the mound
    spot = Location(direction=45.0, distance=90.0)
    landed = BallPath(location=spot, travel_time=0.0)

    pitcher_run = Fielder.PITCHER.starting_location().distance_to(spot)
    second_run = Fielder.SECOND_BASE.starting_location().distance_to(spot)
    assert pitcher_run < second_run
    assert _fielding_time(second_run, 127, 127) < _fielding_time(pitcher_run, -127, -127)

    fielded = closest_fielder(45.0, landed, fielding_team, ScriptedDecider())
    assert fielded.fielder == Fielder.PITCHER
    assert fielded.location.distance == pytest.approx(90.0)
    assert fielded.travel_time == pytest.approx(_fielding_time(pitcher_run, -127, -127))

def test_slow_fielders_pick_the_ball_up_at_the_wall():
    landed = ball_path(10.0, -10.0, 100.0, 0.0)
    d = ScriptedDecider(stats={levels.FIELDER_SPEED: 0.5})
    fielded = closest_fielder(10.0, landed, team("H"), d)
    assert fielded.fielder == Fielder.LEFT_FIELDER
    assert fielded.location.distance == 325.0
    chase = fielded.location.distance_to(Fielder.LEFT_FIELDER.starting_location()) / 0.5
    expected = chase + levels.PLAYER_REACTION_TIME.average + levels.FIELDER_TRANSFER_TIME.average
    assert fielded.travel_time == pytest.approx(expected)


def test_no_fielder_who_can_move_is_fatal():
    landed = ball_path(10.0, -10.0, 100.0, 0.0)
    with pytest.raises(NoFielderError):
        closest_fielder(10.0, landed, team("H"), ScriptedDecider(stats={levels.FIELDER_SPEED: 0.0}))


def test_force_target_from_occupancy():
    assert force_play((None, None, None)) == Base.FIRST
    assert force_play((None, 4, 5)) == Base.FIRST
    assert force_play((3, None, 5)) == Base.SECOND
    assert force_play((3, 4, None)) == Base.THIRD
    assert force_play((3, 4, 5)) == Base.HOME
    with pytest.raises(BaseStateError):
        force_play((1, 2))


@pytest.mark.parametrize("fielder,cover", [
    (Fielder.FIRST_BASE, Fielder.SHORTSTOP),
    (Fielder.SECOND_BASE, Fielder.SHORTSTOP),
    (Fielder.PITCHER, Fielder.SHORTSTOP),
    (Fielder.RIGHT_FIELDER, Fielder.SHORTSTOP),
    (Fielder.SHORTSTOP, Fielder.SECOND_BASE),
    (Fielder.THIRD_BASE, Fielder.SECOND_BASE),
    (Fielder.CATCHER, Fielder.SECOND_BASE),
    (Fielder.LEFT_FIELDER, Fielder.SECOND_BASE),
])
def test_second_base_cover_table(fielder, cover):
    assert second_base_cover(_fielded(fielder)) == cover


def test_center_fielder_relay_depends_on_side():
    assert second_base_cover(_fielded(Fielder.CENTER_FIELDER, direction=30.0)) == Fielder.SECOND_BASE
    assert second_base_cover(_fielded(Fielder.CENTER_FIELDER, direction=60.0)) == Fielder.SHORTSTOP


def test_throw_to_second_timing():
    fielded = _fielded(Fielder.SHORTSTOP, direction=30.0, distance=130.0, t=2.5)
    play = force_at_second(fielded, team("H"), ScriptedDecider())
    assert play.base == Base.SECOND
    assert play.to_fielder == Fielder.SECOND_BASE
    assert play.from_event.travel_time == 2.5
    throw = fielded.location.distance_to(Location.second_base()) / levels.THROW_SPEED.average
    assert play.to_event.travel_time == pytest.approx(2.5 + throw)
