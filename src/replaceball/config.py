from pathlib import Path
from typing import Optional

from pydantic import BaseModel
import yaml

from .errors import ConfigError


class Settings(BaseModel):
    seed: Optional[int] = None
    games: int = 100
    workers: int = 1
    teams_path: Optional[str] = None
    log_level: str = "WARNING"
    telemetry_path: Optional[str] = None


def load_settings(path: str = "config/settings.example.yaml") -> Settings:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"settings file not found: {path}")
    with p.open("r") as f:
        y = yaml.safe_load(f) or {}
    sim = y.get("simulation", {}) or {}
    teams = y.get("teams", {}) or {}
    logs = y.get("logging", {}) or {}
    return Settings(
        seed=sim.get("seed"),
        games=sim.get("games", 100),
        workers=sim.get("workers", 1),
        teams_path=teams.get("path"),
        log_level=str(logs.get("level", "WARNING")).upper(),
        telemetry_path=logs.get("telemetry_path"),
    )
