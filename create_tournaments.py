"""CLI entry-point to schedule a week of Day/Night team battles on Lichess.

Workflow:
- Read the OAuth token (and optional dry-run flag) from the environment
- Load tournament settings and the last creation date
- Skip entirely if tournaments were already created today (UTC)
- Create 14 team battles (Day + Night for 7 days), 10 seconds apart
- On any success, advance lastTournamentDayNum and store today's date

Example:
  DRY_RUN=1 py create_tournaments.py --settings config/tournament-settings.json
"""

from __future__ import annotations

import argparse
import logging
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Tuple

from config import EnvironmentConfig, RuntimeCredentials
from repos.settings_repository import SettingsError, SettingsRepository, TournamentSettings
from repos.state_repository import StateRepository, TournamentState
from service.lichess_service import LichessService, RuntimeParams, SubmissionResult
from service.schedule_service import ScheduleService, TournamentDefinition, utc_date


logger = logging.getLogger(__name__)

RATE_LIMIT_DELAY_SECONDS = 10
DEFAULT_SETTINGS_PATH = "config/tournament-settings.json"
DEFAULT_STATE_PATH = "config/perfect-tournament.state.json"


@dataclass
class RunSummary:
    settings: TournamentSettings
    state: TournamentState
    success_count: int = 0
    failure_count: int = 0
    skipped: bool = False
    results: List[Tuple[TournamentDefinition, SubmissionResult]] = field(default_factory=list)

    @property
    def persist(self) -> bool:
        return self.success_count > 0

    @property
    def exit_code(self) -> int:
        return 1 if self.failure_count > 0 else 0


class TournamentCreator:
    """Runs one creation pass. Takes settings/state as values and returns the updated ones."""

    def __init__(
        self,
        client: LichessService,
        schedule: Optional[ScheduleService] = None,
        sleep: Callable[[float], None] = time.sleep,
        delay: float = RATE_LIMIT_DELAY_SECONDS,
    ):
        self.client = client
        self.schedule = schedule or ScheduleService()
        self.sleep = sleep
        self.delay = delay

    def run(
        self,
        settings: TournamentSettings,
        state: TournamentState,
        creds: RuntimeCredentials,
        now: datetime,
    ) -> RunSummary:
        today = utc_date(now).isoformat()
        if state.last_creation_date == today:
            logger.info("Tournaments already created today (%s). Skipping.", today)
            return RunSummary(settings=settings, state=state, skipped=True)

        next_day_num = settings.last_tournament_day_num + 1
        tournaments = self.schedule.build(now, next_day_num, settings)
        params = RuntimeParams.from_settings(settings, creds)

        logger.info(
            "Creating %s tournaments (Days %s-%s)",
            len(tournaments),
            next_day_num,
            next_day_num + self.schedule.horizon_days - 1,
        )
        logger.info("Team: %s", settings.host_team_id)
        logger.info("Leaders per team: %s", settings.leaders_per_team)

        summary = RunSummary(settings=settings, state=state)
        for i, tournament in enumerate(tournaments):
            logger.info("--- Creating %s Battle %s ---", tournament.type, tournament.day_num)
            logger.info("Name: %s", tournament.name)
            logger.info("Start: %s", tournament.start_date_iso)

            if i > 0:
                logger.info("Waiting %s seconds to avoid rate limits...", self.delay)
                self.sleep(self.delay)

            result = self.client.submit(tournament, params)
            summary.results.append((tournament, result))
            if result.ok:
                summary.success_count += 1
                logger.info("%s battle created successfully: %s", tournament.type, result.url)
            else:
                summary.failure_count += 1
                logger.error("Failed to create %s battle %s: %s", tournament.type, tournament.day_num, result.error)

        if summary.persist:
            # failed slots still advance the counter; they are not retried later
            max_day_num = max(t.day_num for t in tournaments)
            summary.settings = replace(settings, last_tournament_day_num=max_day_num)
            summary.state = replace(state, last_creation_date=today)

        return summary


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Create the upcoming week of Day/Night team battles on Lichess.")
    p.add_argument("--settings", default=DEFAULT_SETTINGS_PATH, help="Path to the tournament settings JSON file.")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to the creation state JSON file.")
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the tournaments that would be created without calling the API (same as DRY_RUN=1).",
    )
    p.add_argument("--server", default=None, help="Override the Lichess base URL (defaults to LICHESS_SERVER).")
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity.",
    )
    return p


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    now: Optional[datetime] = None,
    client: Optional[LichessService] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    settings_repo = SettingsRepository(args.settings)
    state_repo = StateRepository(args.state)
    try:
        creds = EnvironmentConfig.load()
        settings = settings_repo.load()
    except (ValueError, SettingsError) as err:
        logger.error("Fatal error: %s", err)
        return 1

    if args.dry_run:
        creds = replace(creds, dry_run=True)
    if args.server:
        creds = replace(creds, server=args.server.rstrip("/"))

    state = state_repo.load()

    creator = TournamentCreator(client or LichessService(), sleep=sleep)
    summary = creator.run(settings, state, creds, now or datetime.now(timezone.utc))
    if summary.skipped:
        print("Tournaments already created today. Skipping.")
        return 0

    if summary.persist:
        try:
            settings_repo.save(summary.settings)
            state_repo.save(summary.state)
        except OSError as err:
            logger.error("Fatal error: %s", err)
            return 1
        print(f"Updated settings: lastTournamentDayNum = {summary.settings.last_tournament_day_num}")

    print("=== SUMMARY ===")
    print(f"Successful: {summary.success_count}")
    print(f"Failed: {summary.failure_count}")
    print(f"Next tournaments will start from Day: {summary.settings.last_tournament_day_num + 1}")

    return summary.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
