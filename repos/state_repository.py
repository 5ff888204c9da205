import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TournamentState:
    last_creation_date: str = ""

    def to_dict(self) -> dict:
        return {"lastCreationDate": self.last_creation_date}


class StateRepository:
    """Stores and retrieves the last creation date used as the once-per-day guard."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> TournamentState:
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as err:
            logger.warning("Could not read %s (%s), initializing with default state.", self._path, err)
            return TournamentState()

        value = data.get("lastCreationDate") if isinstance(data, dict) else None
        if not isinstance(value, str):
            logger.warning("No usable lastCreationDate in %s, initializing with default state.", self._path)
            return TournamentState()
        return TournamentState(last_creation_date=value)

    def save(self, state: TournamentState) -> None:
        with self._path.open("w", encoding="utf-8") as f:
            json.dump(state.to_dict(), f, indent=2)
            f.write("\n")
