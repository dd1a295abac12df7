from __future__ import annotations

from ..sampler.rng import Decider
from ..schemas import InningOutcome, InningRecord, Team
from .half_inning import simulate_half_inning


def simulate_inning(away_batting_index: int,
                    home_batting_index: int,
                    home: Team,
                    away: Team,
                    decider: Decider) -> InningRecord:
    away_half = simulate_half_inning(away_batting_index, away, home, decider)
    home_half = simulate_half_inning(home_batting_index, home, away, decider)
    return InningRecord(
        away=away_half,
        home=home_half,
        outcome=InningOutcome(away=away_half.outcome, home=home_half.outcome),
    )
