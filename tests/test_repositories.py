import json
from dataclasses import replace

import pytest

from repos.settings_repository import SettingsError, SettingsRepository, TournamentSettings
from repos.state_repository import StateRepository, TournamentState


class TestSettingsRepository:
    def test_load(self, config_files):
        settings_path, _ = config_files
        settings = SettingsRepository(settings_path).load()
        assert settings.host_team_id == "lmao-teamfights"
        assert settings.last_tournament_day_num == 4
        assert settings.rated is True
        assert settings.invited_teams == ()

    def test_unknown_fields_survive_save(self, tmp_path, settings_data):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({**settings_data, "comment": "keep me"}), encoding="utf-8")
        repo = SettingsRepository(path)
        settings = repo.load()
        assert settings.extras == {"comment": "keep me"}

        repo.save(replace(settings, last_tournament_day_num=11))
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["comment"] == "keep me"
        assert data["lastTournamentDayNum"] == 11
        assert repo.load().extras == {"comment": "keep me"}

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(SettingsError):
            SettingsRepository(tmp_path / "missing.json").load()

    def test_invalid_json_is_fatal(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SettingsError):
            SettingsRepository(path).load()

    def test_missing_field_is_fatal(self, settings_data):
        del settings_data["variant"]
        with pytest.raises(SettingsError, match="variant"):
            TournamentSettings.from_dict(settings_data)

    @pytest.mark.parametrize(
        "key,value",
        [
            ("lastTournamentDayNum", "4"),
            ("lastTournamentDayNum", True),
            ("rated", "true"),
            ("dayStartHour", 24),
            ("nightStartHour", -1),
            ("invitedTeams", "rivals"),
        ],
    )
    def test_bad_values_are_fatal(self, settings_data, key, value):
        settings_data[key] = value
        with pytest.raises(SettingsError):
            TournamentSettings.from_dict(settings_data)

    def test_save_round_trip_keeps_camel_case(self, tmp_path, settings):
        path = tmp_path / "settings.json"
        SettingsRepository(path).save(settings)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["lastTournamentDayNum"] == 4
        assert "invitedTeams" not in data
        assert SettingsRepository(path).load() == settings


class TestStateRepository:
    def test_missing_file_defaults(self, tmp_path):
        assert StateRepository(tmp_path / "state.json").load() == TournamentState(last_creation_date="")

    @pytest.mark.parametrize("content", ["{broken", "[]", '{"lastCreationDate": 5}'])
    def test_corrupt_file_defaults(self, tmp_path, content):
        path = tmp_path / "state.json"
        path.write_text(content, encoding="utf-8")
        assert StateRepository(path).load().last_creation_date == ""

    def test_save_and_load(self, tmp_path):
        repo = StateRepository(tmp_path / "state.json")
        repo.save(TournamentState(last_creation_date="2026-10-18"))
        assert json.loads(repo.path.read_text(encoding="utf-8")) == {"lastCreationDate": "2026-10-18"}
        assert repo.load().last_creation_date == "2026-10-18"
