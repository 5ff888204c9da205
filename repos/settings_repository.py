import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple, Union


class SettingsError(ValueError):
    """Raised when the tournament settings file is missing or malformed."""


# JSON key -> (attribute, expected type)
_FIELDS = {
    "hostTeamId": ("host_team_id", str),
    "description": ("description", str),
    "lastTournamentDayNum": ("last_tournament_day_num", int),
    "leadersPerTeam": ("leaders_per_team", int),
    "dayStartHour": ("day_start_hour", int),
    "nightStartHour": ("night_start_hour", int),
    "tournamentDurationMinutes": ("tournament_duration_minutes", int),
    "clockTimeMinutes": ("clock_time_minutes", int),
    "clockIncrementSeconds": ("clock_increment_seconds", int),
    "rated": ("rated", bool),
    "variant": ("variant", str),
}


@dataclass(frozen=True)
class TournamentSettings:
    host_team_id: str
    description: str
    last_tournament_day_num: int
    leaders_per_team: int
    day_start_hour: int
    night_start_hour: int
    tournament_duration_minutes: int
    clock_time_minutes: int
    clock_increment_seconds: int
    rated: bool
    variant: str
    invited_teams: Tuple[str, ...] = field(default_factory=tuple)
    # keys this tool does not use; written back untouched
    extras: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentSettings":
        if not isinstance(data, dict):
            raise SettingsError("Tournament settings must be a JSON object")

        kwargs: Dict[str, Any] = {}
        for key, (attr, expected) in _FIELDS.items():
            if key not in data:
                raise SettingsError(f"Missing required setting '{key}'")
            value = data[key]
            # bool is a subclass of int; keep them apart in both directions
            if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
                raise SettingsError(f"Setting '{key}' must be an integer, got {value!r}")
            if not isinstance(value, expected):
                raise SettingsError(f"Setting '{key}' must be of type {expected.__name__}, got {value!r}")
            kwargs[attr] = value

        for key in ("dayStartHour", "nightStartHour"):
            if not 0 <= data[key] <= 23:
                raise SettingsError(f"Setting '{key}' must be between 0 and 23, got {data[key]}")

        invited = data.get("invitedTeams", [])
        if not isinstance(invited, list) or not all(isinstance(t, str) for t in invited):
            raise SettingsError("Setting 'invitedTeams' must be a list of team ids")
        kwargs["invited_teams"] = tuple(invited)
        kwargs["extras"] = {k: v for k, v in data.items() if k not in _FIELDS and k != "invitedTeams"}

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        data = {key: getattr(self, attr) for key, (attr, _) in _FIELDS.items()}
        if self.invited_teams:
            data["invitedTeams"] = list(self.invited_teams)
        data.update(self.extras)
        return data


class SettingsRepository:
    """Reads and overwrites the tournament settings file."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> TournamentSettings:
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as err:
            raise SettingsError(f"Could not read settings file {self._path}: {err}") from err
        except ValueError as err:
            raise SettingsError(f"Settings file {self._path} is not valid JSON: {err}") from err
        return TournamentSettings.from_dict(data)

    def save(self, settings: TournamentSettings) -> None:
        with self._path.open("w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)
            f.write("\n")
