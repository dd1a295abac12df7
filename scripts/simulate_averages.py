from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

# Ensure local src is importable
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from replaceball.calibration.averages import simulate_for_averages, summarize
from replaceball.config import Settings, load_settings
from replaceball.utils.players import load_teams_yaml


def main():
    ap = argparse.ArgumentParser(description="Simulate many games and print league-style averages")
    ap.add_argument("--settings", help="Settings YAML")
    ap.add_argument("--games", type=int, help="Number of games (default from settings)")
    ap.add_argument("--seed", type=int, help="Overrides the settings seed")
    ap.add_argument("--workers", type=int, help="Worker threads (default from settings)")
    args = ap.parse_args()

    settings = load_settings(args.settings) if args.settings else Settings()
    logging.basicConfig(level=settings.log_level)
    if settings.telemetry_path:
        os.environ.setdefault("GAME_LOG_ENABLE", "1")
        os.environ.setdefault("GAME_LOG_PATH", settings.telemetry_path)

    home = away = None
    if settings.teams_path:
        teams = load_teams_yaml(settings.teams_path)
        home, away = teams.get("home"), teams.get("away")

    totals = simulate_for_averages(
        args.games if args.games is not None else settings.games,
        seed=args.seed if args.seed is not None else settings.seed,
        home=home,
        away=away,
        workers=args.workers if args.workers is not None else settings.workers,
    )
    print(f"Games simulated: {totals.total_games}")
    print(summarize(totals).to_string())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
