import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import requests

from config import RuntimeCredentials
from repos.settings_repository import TournamentSettings
from service.schedule_service import TournamentDefinition
from service.token_validator import validate_oauth_token

logger = logging.getLogger(__name__)

USER_AGENT = "LMAO-Teamfights-Creator/1.0"
REQUEST_TIMEOUT = 30
INVALID_TOKEN_MESSAGE = "Invalid or missing OAuth token. Please set a valid OAUTH_TOKEN environment variable."


@dataclass(frozen=True)
class SubmissionResult:
    ok: bool
    url: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, url: str) -> "SubmissionResult":
        return cls(ok=True, url=url)

    @classmethod
    def failure(cls, error: str) -> "SubmissionResult":
        return cls(ok=False, error=error)


@dataclass(frozen=True)
class RuntimeParams:
    server: str
    token: str
    clock_time: int
    clock_increment: int
    minutes: int
    rated: bool
    variant: str
    host_team_id: str
    leaders_per_team: int
    teams: Tuple[str, ...] = field(default_factory=tuple)
    dry_run: bool = False

    @classmethod
    def from_settings(cls, settings: TournamentSettings, creds: RuntimeCredentials) -> "RuntimeParams":
        return cls(
            server=creds.server,
            token=creds.token,
            clock_time=settings.clock_time_minutes,
            clock_increment=settings.clock_increment_seconds,
            minutes=settings.tournament_duration_minutes,
            rated=settings.rated,
            variant=settings.variant,
            host_team_id=settings.host_team_id,
            leaders_per_team=settings.leaders_per_team,
            teams=(settings.host_team_id,) + settings.invited_teams,
            dry_run=creds.dry_run,
        )

    @property
    def invited_teams(self) -> List[str]:
        return [t for t in self.teams if t and t != self.host_team_id]


class LichessService:
    """Creates team battle arenas through the Lichess tournament API.

    Every failure (bad token, HTTP error, transport error, unreadable body) is
    returned as a failed `SubmissionResult`; `submit` never raises for them.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session or requests.Session()

    @staticmethod
    def build_form(definition: TournamentDefinition, params: RuntimeParams) -> List[Tuple[str, str]]:
        form = [
            ("name", definition.name),
            ("description", definition.description),
            ("clockTime", str(params.clock_time)),
            ("clockIncrement", str(params.clock_increment)),
            ("minutes", str(params.minutes)),
            ("rated", "true" if params.rated else "false"),
            ("variant", params.variant),
            ("startDate", definition.start_date_iso),
            ("teamBattleByTeam", params.host_team_id),
        ]
        form.extend(("teams[]", team) for team in params.invited_teams)
        return form

    def submit(self, definition: TournamentDefinition, params: RuntimeParams) -> SubmissionResult:
        if not validate_oauth_token(params.token):
            return SubmissionResult.failure(INVALID_TOKEN_MESSAGE)

        form = self.build_form(definition, params)

        if params.dry_run:
            logger.info("[DRY RUN] Would create: %s", definition.name)
            logger.info("[DRY RUN] Start: %s", definition.start_date_iso)
            logger.info("[DRY RUN] Teams: %s", ", ".join(params.invited_teams))
            logger.info("[DRY RUN] Leaders per team: %s", params.leaders_per_team)
            return SubmissionResult.success(f"{params.server}/team/{params.host_team_id}/arena/pending")

        api_url = f"{params.server}/api/tournament"
        headers = {
            "Authorization": f"Bearer {params.token}",
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        logger.debug("Making request to %s for team %s", api_url, params.host_team_id)
        try:
            response = self._session.post(api_url, data=form, headers=headers, timeout=REQUEST_TIMEOUT)
            if not response.ok:
                logger.error("Tournament creation failed: %s %s", response.status_code, response.text)
                return SubmissionResult.failure(f"{response.status_code}: {response.text}")

            data = response.json()
            tournament_id = data.get("id") if isinstance(data, dict) else None
            if tournament_id:
                url = f"{params.server}/tournament/{tournament_id}"
            else:
                url = response.headers.get("Location") or "unknown"
            logger.info("Created tournament: %s", url)
            return SubmissionResult.success(url)
        except (requests.exceptions.RequestException, ValueError) as err:
            logger.error("Network error: %s", err)
            return SubmissionResult.failure(str(err))
