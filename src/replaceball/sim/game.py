from __future__ import annotations

import logging

from ..sampler.rng import Decider
from ..schemas import COUNT_INNINGS, PLAYERS_PER_LINEUP, GameOutcome, GameRecord, Team
from .inning import simulate_inning

logger = logging.getLogger(__name__)


def simulate_game(decider: Decider) -> GameRecord:
    return simulate_game_with_teams(decider, Team.default("Home"), Team.default("Away"))


def simulate_game_with_teams(decider: Decider, home: Team, away: Team) -> GameRecord:
    """Nine innings, then extra innings until the score is no longer tied.

    Each side's lineup picks up where it left off the inning before.
    """
    away_index = 0
    home_index = 0
    score = GameOutcome(home_score=0, home_hits=0, away_score=0, away_hits=0)
    innings = []

    while len(innings) < COUNT_INNINGS or score.home_score == score.away_score:
        inning = simulate_inning(away_index, home_index, home, away, decider)
        away_index = (away_index + len(inning.away.at_bats)) % PLAYERS_PER_LINEUP
        home_index = (home_index + len(inning.home.at_bats)) % PLAYERS_PER_LINEUP
        score = GameOutcome(
            home_score=score.home_score + inning.outcome.home.runs_scored,
            home_hits=score.home_hits + inning.outcome.home.total_hits,
            away_score=score.away_score + inning.outcome.away.runs_scored,
            away_hits=score.away_hits + inning.outcome.away.total_hits,
        )
        innings.append((inning, score))
        logger.debug(
            "end of inning %d: away %d, home %d (next batters %d/%d)",
            len(innings), score.away_score, score.home_score, away_index, home_index,
        )

    logger.debug("final after %d innings: away %d, home %d", len(innings), score.away_score, score.home_score)
    return GameRecord(innings=tuple(innings), outcome=score)
