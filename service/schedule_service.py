from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import List

from repos.settings_repository import TournamentSettings

HORIZON_DAYS = 7
NAME_PREFIX = "LMAO"
DAY = "Day"
NIGHT = "Night"


@dataclass(frozen=True)
class TournamentDefinition:
    day_num: int
    type: str
    name: str
    description: str
    start_date: datetime

    @property
    def start_date_iso(self) -> str:
        return self.start_date.strftime("%Y-%m-%dT%H:%M:%S.000Z")


def build_tournament_name(day_num: int, type: str) -> str:
    return f"{NAME_PREFIX} {type} '{day_num}'"


def build_description(day_num: int, type: str, template: str) -> str:
    # only the first occurrence of each placeholder is substituted
    return template.replace("{TYPE}", type, 1).replace("{DAY_NUM}", str(day_num), 1)


def utc_date(moment: datetime) -> date:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


class ScheduleService:
    """Lays out the Day/Night team battles for the upcoming days."""

    def __init__(self, horizon_days: int = HORIZON_DAYS):
        self.horizon_days = horizon_days

    def build(self, base_date: datetime, start_day_num: int, settings: TournamentSettings) -> List[TournamentDefinition]:
        """Return `2 * horizon_days` definitions, Day before Night, days ascending.

        All arithmetic is on UTC calendar dates; a naive `base_date` is taken as UTC.
        """
        first_day = utc_date(base_date)
        definitions: List[TournamentDefinition] = []
        for offset in range(self.horizon_days):
            target = first_day + timedelta(days=offset)
            day_num = start_day_num + offset
            for event_type, hour in ((DAY, settings.day_start_hour), (NIGHT, settings.night_start_hour)):
                definitions.append(TournamentDefinition(
                    day_num=day_num,
                    type=event_type,
                    name=build_tournament_name(day_num, event_type),
                    description=build_description(day_num, event_type, settings.description),
                    start_date=datetime(target.year, target.month, target.day, hour, tzinfo=timezone.utc),
                ))
        return definitions
