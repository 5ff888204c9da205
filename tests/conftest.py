"""Shared test fixtures for the tournament creator."""

import json
from datetime import datetime, timezone

import pytest

from config import RuntimeCredentials
from repos.settings_repository import TournamentSettings

VALID_TOKEN = "lip_AbCdEfGhIjKlMnOp"
NOW = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def settings_data():
    return {
        "hostTeamId": "lmao-teamfights",
        "description": "Battle {TYPE} #{DAY_NUM}",
        "lastTournamentDayNum": 4,
        "leadersPerTeam": 20,
        "dayStartHour": 14,
        "nightStartHour": 22,
        "tournamentDurationMinutes": 120,
        "clockTimeMinutes": 3,
        "clockIncrementSeconds": 2,
        "rated": True,
        "variant": "standard",
    }


@pytest.fixture
def settings(settings_data):
    return TournamentSettings.from_dict(settings_data)


@pytest.fixture
def creds():
    return RuntimeCredentials(token=VALID_TOKEN, server="https://lichess.org", dry_run=False)


@pytest.fixture
def config_files(tmp_path, settings_data):
    """Write a settings file (and no state file) into a temp config dir."""
    settings_path = tmp_path / "tournament-settings.json"
    state_path = tmp_path / "perfect-tournament.state.json"
    settings_path.write_text(json.dumps(settings_data, indent=2), encoding="utf-8")
    return settings_path, state_path
