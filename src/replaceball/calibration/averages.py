from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, fields
from functools import reduce
from typing import Optional

import pandas as pd

from ..sampler.rng import Decider, spawn_deciders
from ..schemas import AtBatRecord, GameRecord, HitType, PitchRecord, Team
from ..sim.game import simulate_game_with_teams
from .logger import maybe_log_game


@dataclass(frozen=True)
class GameTotals:
    """Counting stats summed over one or more games. `+` merges in any order."""

    home_wins: int = 0
    runs: int = 0
    hits: int = 0
    double_plays: int = 0
    triple_plays: int = 0
    strikeouts: int = 0
    walks: int = 0
    singles: int = 0
    doubles: int = 0
    triples: int = 0
    inside_the_park: int = 0
    home_runs: int = 0
    balls: int = 0
    strikes: int = 0
    fouls: int = 0
    total_games: int = 0
    total_at_bats: int = 0

    def __add__(self, other: "GameTotals") -> "GameTotals":
        return GameTotals(**{f.name: getattr(self, f.name) + getattr(other, f.name) for f in fields(self)})

    @property
    def pitches(self) -> int:
        return self.balls + self.strikes + self.fouls


def _pitch_totals(pitch: PitchRecord) -> GameTotals:
    kind = pitch.outcome.kind
    return GameTotals(
        balls=int(kind == "ball"),
        strikes=int(kind == "strike"),
        fouls=int(kind == "foul"),
    )


def _at_bat_totals(at_bat: AtBatRecord) -> GameTotals:
    hit_type = None
    out_of_park = False
    outs_made = 0
    if at_bat.outcome.outcome_type == "hit":
        outcome = at_bat.outcome.hit.outcome
        hit_type = outcome.hit_type()
        out_of_park = outcome.kind == "home_run"
        if outcome.kind == "in_play":
            outs_made = outcome.fielding.base_running_record.outcome.outs_made

    last = at_bat.pitches[-1][1]
    totals = GameTotals(
        hits=int(hit_type is not None and hit_type.is_hit),
        double_plays=int(outs_made == 2),
        triple_plays=int(outs_made == 3),
        strikeouts=int(last.strikes == 3),
        walks=int(last.balls == 4),
        singles=int(hit_type == HitType.SINGLE),
        doubles=int(hit_type == HitType.DOUBLE),
        triples=int(hit_type == HitType.TRIPLE),
        inside_the_park=int(hit_type == HitType.HOME_RUN and not out_of_park),
        home_runs=int(hit_type == HitType.HOME_RUN and out_of_park),
        total_at_bats=1,
    )
    return reduce(lambda acc, p: acc + _pitch_totals(p[0]), at_bat.pitches, totals)


def totals_for_game(record: GameRecord) -> GameTotals:
    outcome = record.outcome
    totals = GameTotals(
        home_wins=int(outcome.home_score > outcome.away_score),
        runs=outcome.home_score + outcome.away_score,
        total_games=1,
    )
    for inning, _ in record.innings:
        for half in (inning.away, inning.home):
            for at_bat, _ in half.at_bats:
                totals = totals + _at_bat_totals(at_bat)
    return totals


def _play_one(decider: Decider, home: Team, away: Team) -> GameTotals:
    totals = totals_for_game(simulate_game_with_teams(decider, home, away))
    maybe_log_game(totals)
    return totals


def simulate_for_averages(games: int,
                          seed: Optional[int] = None,
                          home: Optional[Team] = None,
                          away: Optional[Team] = None,
                          workers: int = 1) -> GameTotals:
    """Play `games` independent games and sum their totals.

    Every game gets its own decider, so the totals depend only on `seed`
    and not on how the games are spread across workers.
    """
    home = home or Team.default("Home")
    away = away or Team.default("Away")
    deciders = spawn_deciders(seed, games)

    if workers <= 1:
        results = [_play_one(d, home, away) for d in deciders]
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda d: _play_one(d, home, away), deciders))
    return reduce(lambda a, b: a + b, results, GameTotals())


def summarize(totals: GameTotals) -> pd.DataFrame:
    """Per team-game and per-pitch rates, one row per stat."""
    team_games = max(1, totals.total_games * 2)
    at_bats = max(1, totals.total_at_bats)
    pitches = max(1, totals.pitches)
    slugging_bases = (
        totals.singles + 2 * totals.doubles + 3 * totals.triples
        + 4 * (totals.home_runs + totals.inside_the_park)
    )
    rows = [
        ("home_win_pct", totals.home_wins / max(1, totals.total_games)),
        ("runs_per_game", totals.runs / team_games),
        ("hits_per_game", totals.hits / team_games),
        ("double_plays_per_game", totals.double_plays / team_games),
        ("triple_plays_per_game", totals.triple_plays / team_games),
        ("strikeouts_per_game", totals.strikeouts / team_games),
        ("walks_per_game", totals.walks / team_games),
        ("singles_per_game", totals.singles / team_games),
        ("doubles_per_game", totals.doubles / team_games),
        ("triples_per_game", totals.triples / team_games),
        ("inside_the_park_per_game", totals.inside_the_park / team_games),
        ("home_runs_per_game", totals.home_runs / team_games),
        ("at_bats_per_game", totals.total_at_bats / team_games),
        ("batting_average", totals.hits / at_bats),
        ("slugging", slugging_bases / at_bats),
        ("balls_per_pitch", totals.balls / pitches),
        ("strikes_per_pitch", totals.strikes / pitches),
        ("fouls_per_pitch", totals.fouls / pitches),
    ]
    return pd.DataFrame(rows, columns=["stat", "value"]).set_index("stat")
