from __future__ import annotations

from ..models.bip_model import simulate_hit
from ..models.pitch_engine import simulate_pitch
from ..sampler.rng import Decider
from ..schemas import (
    BALLS_PER_WALK,
    STRIKES_PER_STRIKEOUT,
    AtBatOutcome,
    AtBatProgress,
    AtBatRecord,
    BaseState,
    EMPTY_BASES,
    Team,
)


def simulate_at_bat(batter_index: int,
                    batting_team: Team,
                    fielding_team: Team,
                    decider: Decider,
                    base_state: BaseState = EMPTY_BASES,
                    outs: int = 0) -> AtBatRecord:
    """Pitch to one batter until he walks, strikes out or puts the ball in play."""
    batter = batting_team.player_at_batting_index(batter_index)
    pitcher = fielding_team.pitcher()
    balls_remaining = BALLS_PER_WALK
    strikes_remaining = STRIKES_PER_STRIKEOUT
    pitches = []
    outcome = None

    while outcome is None:
        pitch = simulate_pitch(decider, batter, pitcher)
        kind = pitch.outcome.kind
        if kind == "strike":
            strikes_remaining -= 1
        elif kind == "ball":
            balls_remaining -= 1
        elif kind == "foul":
            # two-strike fouls keep the count
            if strikes_remaining != 1:
                strikes_remaining -= 1
        else:
            hit = simulate_hit(
                pitch.location,
                pitch.outcome.was_on_a_ball,
                batter_index,
                batting_team,
                fielding_team,
                decider,
                base_state,
                outs=outs,
            )
            outcome = AtBatOutcome(outcome_type="hit", hit=hit)

        progress = AtBatProgress(
            balls=BALLS_PER_WALK - balls_remaining,
            strikes=STRIKES_PER_STRIKEOUT - strikes_remaining,
        )
        pitches.append((pitch, progress))

        if outcome is None:
            if balls_remaining == 0:
                outcome = AtBatOutcome(outcome_type="walk")
            elif strikes_remaining == 0:
                outcome = AtBatOutcome(outcome_type="out")

    return AtBatRecord(
        batter_index=batter_index,
        player=batter,
        pitches=tuple(pitches),
        outcome=outcome,
    )
