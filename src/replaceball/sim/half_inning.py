from __future__ import annotations

import logging
from typing import Tuple

from ..errors import SimulationInvariantError
from ..models.advancement_model import validate_base_state
from ..sampler.rng import Decider
from ..schemas import (
    OUTS_PER_HALF_INNING,
    PLAYERS_PER_LINEUP,
    AtBatRecord,
    BaseState,
    EMPTY_BASES,
    HalfInningOutcome,
    HalfInningProgress,
    HalfInningRecord,
    Team,
)
from .at_bat import simulate_at_bat

logger = logging.getLogger(__name__)


def advance_on_walk(bases: BaseState, batter_index: int) -> Tuple[BaseState, int]:
    """Push runners along only as far as the walk forces them."""
    first, second, third = bases
    if first is not None and second is not None and third is not None:
        return (batter_index, first, second), 1
    if first is not None and second is not None:
        return (batter_index, first, second), 0
    if first is not None:
        return (batter_index, first, third), 0
    return (batter_index, second, third), 0


def simulate_half_inning(batting_index: int,
                         batting_team: Team,
                         fielding_team: Team,
                         decider: Decider) -> HalfInningRecord:
    bases: BaseState = EMPTY_BASES
    outs = 0
    runs = 0
    hits = 0
    walks = 0
    strikeouts = 0
    at_bats = []
    index = batting_index

    while outs < OUTS_PER_HALF_INNING:
        batter_index = index % PLAYERS_PER_LINEUP
        at_bat: AtBatRecord = simulate_at_bat(
            batter_index, batting_team, fielding_team, decider, base_state=bases, outs=outs)
        outcome = at_bat.outcome
        score_change = 0

        if outcome.outcome_type == "walk":
            bases, score_change = advance_on_walk(bases, batter_index)
            walks += 1
        elif outcome.outcome_type == "out":
            outs += 1
            strikeouts += 1
        else:
            hit = outcome.hit.outcome
            if hit.kind == "home_run":
                score_change = sum(1 for r in bases if r is not None) + 1
                bases = EMPTY_BASES
            else:
                result = hit.fielding.base_running_record.outcome
                outs += result.outs_made
                score_change = result.runs_scored
                bases = result.ending_base_state
            if hit.hit_type().is_hit:
                hits += 1

        if outs > OUTS_PER_HALF_INNING:
            raise SimulationInvariantError(f"half-inning recorded {outs} outs")
        if outs == OUTS_PER_HALF_INNING:
            # runners left on base do not carry into the final snapshot
            bases = EMPTY_BASES
        validate_base_state(bases)
        runs += score_change
        at_bats.append((at_bat, HalfInningProgress(bases=bases, score_change=score_change, outs=outs)))
        index += 1

    logger.debug("half-inning over: %d runs, %d hits, %d batters", runs, hits, len(at_bats))
    return HalfInningRecord(
        at_bats=tuple(at_bats),
        outcome=HalfInningOutcome(runs_scored=runs, total_hits=hits, walks=walks, strikeouts=strikeouts),
    )
