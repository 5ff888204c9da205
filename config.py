from dataclasses import dataclass
import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_SERVER = "https://lichess.org"
DRY_RUN_VALUES = ("1", "true")


@dataclass(frozen=True)
class RuntimeCredentials:
    token: str
    server: str
    dry_run: bool


class EnvironmentConfig:
    """Loads and validates required environment configuration."""
    @staticmethod
    def load() -> RuntimeCredentials:
        token = os.getenv("OAUTH_TOKEN")
        if not token:
            raise ValueError("OAUTH_TOKEN environment variable is required")

        server = (os.getenv("LICHESS_SERVER") or DEFAULT_SERVER).rstrip("/")
        dry_run = os.getenv("DRY_RUN", "") in DRY_RUN_VALUES

        return RuntimeCredentials(
            token=token,
            server=server,
            dry_run=dry_run,
        )
