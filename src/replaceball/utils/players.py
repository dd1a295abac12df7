import csv
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError
import yaml

from ..errors import ConfigError
from ..features.transforms import clamp_bias
from ..schemas import BIAS_FIELDS, PLAYERS_PER_LINEUP, Fielder, Player, Team


def _to_int(val: object) -> Optional[int]:
    if val is None:
        return None
    if isinstance(val, int):
        return val
    s = str(val).strip()
    if s == "" or s.lower() == "none":
        return None
    try:
        return int(float(s))
    except ValueError:
        return None


def _player_from_row(row: Dict) -> Player:
    fields = {}
    for k in BIAS_FIELDS:
        v = _to_int(row.get(k))
        if v is not None:
            fields[k] = clamp_bias(v)
    name = row.get("name")
    if name:
        fields["name"] = str(name).strip()
    jersey = row.get("jersey_number")
    if jersey not in (None, ""):
        fields["jersey_number"] = str(jersey).strip()
    return Player(**fields)


def load_players_csv(path: str) -> Dict[str, Player]:
    """
    Load players.csv into a dict: player_id -> Player.
    Bias columns are clamped to the signed 8-bit range; missing ones stay 0.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"players file not found: {path}")

    cache: Dict[str, Player] = {}
    with p.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            pid = (row.get("player_id") or "").strip()
            if not pid:
                continue
            cache[pid] = _player_from_row(row)
    return cache


def _position(code: object, team_name: str) -> Fielder:
    try:
        return Fielder.from_code(str(code))
    except ValueError as exc:
        raise ConfigError(f"{team_name}: {exc}") from exc


def _team_from_yaml(key: str, roster: Dict) -> Team:
    name = roster.get("name", key)
    entries = roster.get("players") or []
    if len(entries) != PLAYERS_PER_LINEUP:
        raise ConfigError(f"{name}: expected {PLAYERS_PER_LINEUP} players, got {len(entries)}")

    by_position: Dict[Fielder, Player] = {}
    for entry in entries:
        fielder = _position(entry.get("position"), name)
        if fielder in by_position:
            raise ConfigError(f"{name}: position {fielder.code} listed twice")
        by_position[fielder] = _player_from_row(entry)

    order = roster.get("batting_order")
    try:
        kwargs = {"name": name, "fielders": tuple(by_position[f] for f in Fielder)}
        if order is not None:
            kwargs["batting_order"] = tuple(_position(code, name) for code in order)
        return Team(**kwargs)
    except ValidationError as exc:
        raise ConfigError(f"{name}: {exc}") from exc


def load_teams_yaml(path: str) -> Dict[str, Team]:
    """Team rosters keyed by the YAML mapping key (e.g. `home`, `away`)."""
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"teams file not found: {path}")
    with p.open("r", encoding="utf-8") as f:
        y = yaml.safe_load(f) or {}
    teams = y.get("teams", y) or {}
    return {key: _team_from_yaml(key, roster or {}) for key, roster in teams.items()}
