"""
Tests for the command line entry point.
"""

import json
from unittest import mock

import pytest

from battlelog import cli
from battlelog.config import Settings
from battlelog.database import Database

from helpers import ME, make_battle, make_history


@pytest.fixture(autouse=True)
def keep_test_logging(monkeypatch):
    """Leave pytest's log capture in place."""
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)


@pytest.fixture
def settings(monkeypatch, tmp_path):
    value = Settings(
        _env_file=None,
        api_key="secret",
        player_tag=ME,
        db_path=str(tmp_path / "battles.db"),
        api_base_url="https://api.example.test",
    )
    monkeypatch.setattr(cli, "get_settings", lambda: value)
    return value


def test_report_json(settings, capsys):
    db = Database(settings.db_path)
    for battle in make_history("WWL"):
        db.insert_battle(battle)

    assert cli.main(["report", "--json", "--target", "8000"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["overall"]["total_battles"] == 3
    assert data["projection"]["target_trophies"] == 8000


def test_report_dashboard(settings, capsys):
    db = Database(settings.db_path)
    db.insert_battle(make_battle(3, 0))

    assert cli.main(["report", "--no-color"]) == 0

    out = capsys.readouterr().out
    assert "OVERALL PERFORMANCE" in out
    assert "\033[" not in out


def test_tag_option_overrides_settings(settings, capsys):
    db = Database(settings.db_path)
    db.insert_battle(make_battle(me_tag="#OTHER"))

    assert cli.main(["report", "--json", "--tag", "other"]) == 0
    assert json.loads(capsys.readouterr().out)["overall"]["total_battles"] == 1


def test_fetch_stores_battles(settings, capsys):
    response = mock.Mock(status_code=200, text="")
    response.json.return_value = [make_battle(index=0).to_dict(), make_battle(index=1).to_dict()]

    with mock.patch("battlelog.royale_api.requests.get", return_value=response):
        assert cli.main(["fetch"]) == 0

    assert "2 saved" in capsys.readouterr().out
    assert Database(settings.db_path).get_battle_count(ME) == 2


def test_fetch_error_exits_non_zero(settings, capsys):
    response = mock.Mock(status_code=403, text="accessDenied")

    with mock.patch("battlelog.royale_api.requests.get", return_value=response):
        assert cli.main(["fetch"]) == 1

    assert "Invalid API key" in capsys.readouterr().err


def test_missing_player_tag(monkeypatch, tmp_path, capsys):
    empty = Settings(_env_file=None, player_tag="", db_path=str(tmp_path / "battles.db"))
    monkeypatch.setattr(cli, "get_settings", lambda: empty)

    assert cli.main(["report"]) == 1
    assert "PLAYERTAG" in capsys.readouterr().err


def test_db_option(settings, tmp_path, capsys):
    other = tmp_path / "other.db"
    Database(other).insert_battle(make_battle())

    assert cli.main(["--db", str(other), "report", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["overall"]["total_battles"] == 1
