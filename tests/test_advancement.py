import pytest

from helpers import ScriptedDecider, team
from replaceball.errors import BaseStateError
from replaceball.models import levels
from replaceball.models.advancement_model import batter_advanced, simulate_base_running
from replaceball.models.fielding import BASE_LOCATIONS
from replaceball.schemas import (
    EMPTY_BASES,
    Base,
    BallLanding,
    BaseMovement,
    Fielder,
    FieldingEvent,
    FieldingPlay,
    HitType,
    MoveType,
)
from replaceball.utils.location import Location

COVER = {
    Base.FIRST: Fielder.FIRST_BASE,
    Base.SECOND: Fielder.SECOND_BASE,
    Base.THIRD: Fielder.THIRD_BASE,
    Base.HOME: Fielder.CATCHER,
}

BATTER = 8


def _landed(base, arrival, fielded_at=Location(direction=30.0, distance=120.0), fielded=0.5):
    play = FieldingPlay(
        from_fielder=Fielder.SHORTSTOP,
        from_event=FieldingEvent(location=fielded_at, travel_time=fielded),
        to_fielder=COVER[base],
        to_event=FieldingEvent(location=BASE_LOCATIONS[base], travel_time=arrival),
        base=base,
    )
    return BallLanding.landed(fielded_at, play)


def _caught(direction, distance, fielder=Fielder.CENTER_FIELDER):
    return BallLanding.caught(fielder, Location(direction=direction, distance=distance))


def _run(landing, bases, outs=0, decider=None):
    return simulate_base_running(BATTER, team("A"), team("H"), landing, bases, decider or ScriptedDecider(), outs=outs)


def _move(start, kind, value):
    moved = MoveType.out(value) if kind == "out" else MoveType.advanced(value)
    return BaseMovement(starting_base=start, bases_moved=moved)


def test_batter_advanced_tiers():
    assert batter_advanced(2.0, 27.0, 2.0) == 0
    assert batter_advanced(5.34, 27.0, 2.0) == 1
    assert batter_advanced(9.0, 27.0, 2.0) == 2
    assert batter_advanced(100.0, 27.0, 2.0) == 4
    assert batter_advanced(100.0, 0.0, 2.0) == 0


def test_routine_grounder_retires_batter_at_first():
    rec = _run(_landed(Base.FIRST, 3.0), EMPTY_BASES)
    assert rec.movements == (_move(None, "out", Base.FIRST),)
    assert rec.outcome.outs_made == 1
    assert rec.outcome.batter_hit_type == HitType.OUT
    assert rec.outcome.ending_base_state == EMPTY_BASES


def test_slow_throw_gives_a_double():
    rec = _run(_landed(Base.FIRST, 9.0), EMPTY_BASES)
    assert rec.outcome.batter_hit_type == HitType.DOUBLE
    assert rec.outcome.ending_base_state == (None, BATTER, None)


def test_runner_on_third_scores_on_single():
    rec = _run(_landed(Base.FIRST, 6.0), (None, None, 4))
    assert rec.movements[0] == _move(Base.THIRD, "advanced", 1)
    assert rec.outcome.runs_scored == 1
    assert rec.outcome.batter_hit_type == HitType.SINGLE
    assert rec.outcome.ending_base_state == (BATTER, None, None)


def test_bases_loaded_force_chain_is_a_triple_play():
    slow = ScriptedDecider(stats={levels.BASERUNNER_SPEED: 10.0})
    rec = _run(_landed(Base.HOME, 1.0), (1, 2, 3), decider=slow)
    assert rec.movements == (
        _move(Base.THIRD, "out", Base.HOME),
        _move(Base.SECOND, "out", Base.THIRD),
        _move(Base.FIRST, "out", Base.SECOND),
    )
    assert rec.outcome.outs_made == 3
    assert rec.outcome.runs_scored == 0
    assert rec.outcome.ending_base_state == EMPTY_BASES


def test_bases_loaded_home_to_third_double_play():
    rec = _run(_landed(Base.HOME, 1.0), (1, 2, 3))
    assert rec.movements == (
        _move(Base.THIRD, "out", Base.HOME),
        _move(Base.SECOND, "out", Base.THIRD),
        _move(Base.FIRST, "advanced", 1),
        _move(None, "advanced", 1),
    )
    assert rec.outcome.outs_made == 2
    assert rec.outcome.batter_hit_type == HitType.FIELDERS_CHOICE
    assert rec.outcome.ending_base_state == (BATTER, 1, None)


def test_force_at_home_with_two_outs_ends_the_inning():
    rec = _run(_landed(Base.HOME, 1.0), (1, 2, 3), outs=2)
    assert rec.movements == (_move(Base.THIRD, "out", Base.HOME),)
    assert rec.outcome.outs_made == 1
    assert rec.outcome.runs_scored == 0
    assert rec.outcome.ending_base_state == EMPTY_BASES


def test_runner_beats_force_at_home_and_everyone_moves_up():
    rec = _run(_landed(Base.HOME, 5.0), (1, 2, 3))
    assert rec.outcome.runs_scored == 1
    assert rec.outcome.outs_made == 0
    assert rec.outcome.batter_hit_type == HitType.FIELDERS_CHOICE
    assert rec.outcome.ending_base_state == (BATTER, 1, 2)


def test_bases_loaded_single_holds_runner_from_second():
    rec = _run(_landed(Base.HOME, 6.0), (1, 2, 3))
    assert rec.outcome.batter_hit_type == HitType.SINGLE
    assert rec.outcome.runs_scored == 1
    assert rec.outcome.ending_base_state == (BATTER, 1, 2)


def test_double_play_at_second_and_first():
    rec = _run(_landed(Base.SECOND, 1.0), (5, None, None))
    assert rec.movements == (
        _move(Base.FIRST, "out", Base.SECOND),
        _move(None, "out", Base.FIRST),
    )
    assert rec.outcome.outs_made == 2
    assert rec.outcome.batter_hit_type == HitType.OUT


def test_runner_on_third_holds_on_fielders_choice():
    rec = _run(_landed(Base.SECOND, 4.5), (5, None, 6))
    # runner from first beats the throw, batter is safe at first
    assert rec.outcome.batter_hit_type == HitType.FIELDERS_CHOICE
    assert rec.outcome.runs_scored == 0
    assert rec.outcome.ending_base_state == (BATTER, 5, 6)


def test_single_with_runner_on_first():
    rec = _run(_landed(Base.SECOND, 6.0), (5, None, None))
    assert rec.outcome.batter_hit_type == HitType.SINGLE
    assert rec.outcome.ending_base_state == (BATTER, 5, None)


def test_triple_clears_the_bases():
    rec = _run(_landed(Base.THIRD, 15.0), (5, 6, None))
    assert rec.outcome.batter_hit_type == HitType.TRIPLE
    assert rec.outcome.runs_scored == 2
    assert rec.outcome.ending_base_state == (None, None, BATTER)


def test_sacrifice_fly_scores_runner_from_third():
    rec = _run(_caught(45.0, 300.0), (None, None, 7))
    assert rec.movements == (_move(Base.THIRD, "advanced", 1),)
    assert rec.outcome.runs_scored == 1
    assert rec.outcome.outs_made == 1
    assert rec.outcome.ending_base_state == EMPTY_BASES


def test_slow_runner_doubled_off_tagging_from_third():
    slow = ScriptedDecider(stats={levels.BASERUNNER_SPEED: 10.0})
    rec = _run(_caught(45.0, 300.0), (None, None, 7), decider=slow)
    assert rec.movements == (_move(Base.THIRD, "out", Base.HOME),)
    assert rec.outcome.outs_made == 2
    assert rec.outcome.runs_scored == 0


def test_shallow_fly_holds_runners():
    rec = _run(_caught(45.0, 200.0), (None, 3, 7))
    assert rec.movements == ()
    assert rec.outcome.ending_base_state == (None, 3, 7)


def test_tag_from_second_on_deep_fly_to_right():
    rec = _run(_caught(60.0, 300.0, Fielder.RIGHT_FIELDER), (None, 3, None))
    assert rec.movements == (_move(Base.SECOND, "advanced", 1),)
    assert rec.outcome.ending_base_state == (None, None, 3)


def test_catch_for_third_out_moves_nobody():
    rec = _run(_caught(45.0, 300.0), (None, None, 7), outs=2)
    assert rec.movements == ()
    assert rec.outcome.outs_made == 1
    assert rec.outcome.runs_scored == 0
    assert rec.outcome.ending_base_state == EMPTY_BASES


def test_runner_on_two_bases_is_rejected():
    with pytest.raises(BaseStateError):
        _run(_landed(Base.HOME, 1.0), (4, 4, 3))


def test_around_the_horn_triple_play():
    slow = ScriptedDecider(stats={levels.BASERUNNER_SPEED: 10.0})
    rec = _run(_landed(Base.THIRD, 1.0), (1, 2, None), decider=slow)
    assert rec.movements == (
        _move(Base.SECOND, "out", Base.THIRD),
        _move(Base.FIRST, "out", Base.SECOND),
        _move(None, "out", Base.FIRST),
    )
    assert rec.outcome.outs_made == 3
    assert rec.outcome.batter_hit_type == HitType.OUT
    assert rec.outcome.ending_base_state == EMPTY_BASES


def test_around_the_horn_double_play_batter_beats_relay():
    rec = _run(_landed(Base.THIRD, 1.0), (1, 2, None))
    assert rec.movements == (
        _move(Base.SECOND, "out", Base.THIRD),
        _move(Base.FIRST, "out", Base.SECOND),
        _move(None, "advanced", 1),
    )
    assert rec.outcome.outs_made == 2
    assert rec.outcome.batter_hit_type == HitType.FIELDERS_CHOICE
    assert rec.outcome.ending_base_state == (BATTER, None, None)


def test_third_to_first_double_play_across_the_diamond():
    # trail runner beats the relay to second, the long throw still beats the batter
    rec = _run(_landed(Base.THIRD, 1.5), (1, 2, None))
    assert rec.movements == (
        _move(Base.SECOND, "out", Base.THIRD),
        _move(Base.FIRST, "advanced", 1),
        _move(None, "out", Base.FIRST),
    )
    assert rec.outcome.outs_made == 2
    assert rec.outcome.batter_hit_type == HitType.OUT
    assert rec.outcome.ending_base_state == (None, 1, None)


def test_home_to_first_double_play():
    rec = _run(_landed(Base.HOME, 1.5), (1, 2, 3))
    assert rec.movements == (
        _move(Base.THIRD, "out", Base.HOME),
        _move(Base.SECOND, "advanced", 1),
        _move(Base.FIRST, "advanced", 1),
        _move(None, "out", Base.FIRST),
    )
    assert rec.outcome.outs_made == 2
    assert rec.outcome.runs_scored == 0
    assert rec.outcome.batter_hit_type == HitType.OUT
    assert rec.outcome.ending_base_state == (None, 1, 2)


def test_slow_runner_thrown_out_tagging_to_third():
    slow = ScriptedDecider(stats={levels.BASERUNNER_SPEED: 10.0})
    rec = _run(_caught(60.0, 300.0, Fielder.RIGHT_FIELDER), (None, 3, None), decider=slow)
    assert rec.movements == (_move(Base.SECOND, "out", Base.THIRD),)
    assert rec.outcome.outs_made == 2
    assert rec.outcome.runs_scored == 0
    assert rec.outcome.batter_hit_type == HitType.OUT
    assert rec.outcome.ending_base_state == EMPTY_BASES


def test_inside_the_park_home_run_clears_the_bases():
    rec = _run(_landed(Base.HOME, 20.0), (1, 2, 3))
    assert rec.movements == (
        _move(Base.THIRD, "advanced", 1),
        _move(Base.SECOND, "advanced", 2),
        _move(Base.FIRST, "advanced", 3),
        _move(None, "advanced", 4),
    )
    assert rec.outcome.outs_made == 0
    assert rec.outcome.runs_scored == 4
    assert rec.outcome.batter_hit_type == HitType.HOME_RUN
    assert rec.outcome.ending_base_state == EMPTY_BASES
