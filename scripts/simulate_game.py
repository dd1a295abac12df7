from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure local src is importable
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from replaceball.config import Settings, load_settings
from replaceball.sampler.rng import RandomDecider
from replaceball.schemas import Team
from replaceball.sim.game import simulate_game_with_teams
from replaceball.utils.players import load_teams_yaml


def main():
    ap = argparse.ArgumentParser(description="Simulate one game and print its full record as JSON")
    ap.add_argument("--settings", help="Settings YAML (seed, teams path, log level)")
    ap.add_argument("--seed", type=int, help="Overrides the settings seed")
    ap.add_argument("--teams", help="Team rosters YAML; defaults to the settings teams path")
    ap.add_argument("--home", default="home", help="Key of the home team in the rosters file")
    ap.add_argument("--away", default="away", help="Key of the away team in the rosters file")
    args = ap.parse_args()

    settings = load_settings(args.settings) if args.settings else Settings()
    logging.basicConfig(level=settings.log_level)

    seed = args.seed if args.seed is not None else settings.seed
    teams_path = args.teams or settings.teams_path
    if teams_path:
        teams = load_teams_yaml(teams_path)
        home, away = teams[args.home], teams[args.away]
    else:
        home, away = Team.default("Home"), Team.default("Away")

    record = simulate_game_with_teams(RandomDecider(seed), home, away)
    print(record.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
