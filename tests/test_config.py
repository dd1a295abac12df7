from pathlib import Path

import pytest

from replaceball.config import Settings, load_settings
from replaceball.errors import ConfigError
from replaceball.schemas import Fielder
from replaceball.utils.players import load_players_csv, load_teams_yaml

ROOT = Path(__file__).resolve().parents[1]


def test_example_settings_load():
    s = load_settings(str(ROOT / "config" / "settings.example.yaml"))
    assert s.seed == 42
    assert s.workers == 4
    assert s.teams_path == "config/teams.example.yaml"
    assert s.log_level == "WARNING"


def test_missing_sections_fall_back_to_defaults(tmp_path):
    p = tmp_path / "s.yaml"
    p.write_text("logging:\n  level: debug\n")
    s = load_settings(str(p))
    assert s == Settings(log_level="DEBUG")


def test_missing_settings_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_settings(str(tmp_path / "nope.yaml"))


def test_example_teams_load_with_batting_order():
    teams = load_teams_yaml(str(ROOT / "config" / "teams.example.yaml"))
    home = teams["home"]
    assert home.name == "Harbor Gulls"
    assert home.batting_order[0] == Fielder.CENTER_FIELDER
    assert home.player_at_batting_index(0).name == "Achebe"
    assert home.pitcher().pitch_strike_bias == 25
    assert teams["away"].batting_order == tuple(Fielder)


def test_unknown_position_code_is_a_config_error(tmp_path):
    players = "\n".join(f"      - {{position: {c}}}" for c in ["C", "P", "1B", "2B", "3B", "SS", "LF", "CF", "DH"])
    p = tmp_path / "t.yaml"
    p.write_text(f"teams:\n  x:\n    players:\n{players}\n")
    with pytest.raises(ConfigError):
        load_teams_yaml(str(p))


def test_batting_order_must_be_a_permutation(tmp_path):
    players = "\n".join(f"      - {{position: {c}}}" for c in ["C", "P", "1B", "2B", "3B", "SS", "LF", "CF", "RF"])
    p = tmp_path / "t.yaml"
    p.write_text(f"teams:\n  x:\n    batting_order: [C, C, 1B, 2B, 3B, SS, LF, CF, RF]\n    players:\n{players}\n")
    with pytest.raises(ConfigError):
        load_teams_yaml(str(p))


def test_players_csv_clamps_biases(tmp_path):
    p = tmp_path / "players.csv"
    p.write_text(
        "player_id,name,jersey_number,hitter_hit_speed_bias,fielder_run_speed_bias\n"
        "p1,Ada,11,300,-7\n"
        ",skipped,0,0,0\n"
        "p2,Bo,,,\n"
    )
    players = load_players_csv(str(p))
    assert set(players) == {"p1", "p2"}
    assert players["p1"].hitter_hit_speed_bias == 127
    assert players["p1"].fielder_run_speed_bias == -7
    assert players["p1"].jersey_number == "11"
    assert players["p2"].hitter_hit_speed_bias == 0
