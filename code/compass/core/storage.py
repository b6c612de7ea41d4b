import json
import logging
import os
import threading
import time
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from .models import ScenarioData, UserProfile

logger = logging.getLogger(__name__)

PROFILE_KEY = "ppc_profile"
SCENARIOS_KEY = "ppc_scenarios"
STORAGE_DIR = os.getenv("PPC_STORAGE_DIR", str(Path.home() / ".photo_pricing_compass"))

# FastAPI runs sync endpoints in a threadpool; appends are read-modify-write.
_history_lock = threading.Lock()


class LocalStore:
    """Whole-record key-value store: one JSON text blob per key, rewritten on every change."""

    def __init__(self, directory: str | Path = STORAGE_DIR):
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def _load_json(self, key: str) -> Any:
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable record %s", key)
            return None

    def load_profile(self) -> Optional[UserProfile]:
        data = self._load_json(PROFILE_KEY)
        if data is None:
            return None
        try:
            return UserProfile.model_validate(data)
        except ValidationError:
            logger.warning("Ignoring malformed profile record")
            return None

    def save_profile(self, profile: UserProfile) -> None:
        self.set_item(PROFILE_KEY, profile.model_dump_json())

    def _load_history(self) -> Optional[List[Any]]:
        """Raw stored records, or None when the stored blob is not a JSON list."""
        raw = self.get_item(SCENARIOS_KEY)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, list) else None

    def load_scenarios(self) -> List[ScenarioData]:
        data = self._load_history()
        if data is None:
            logger.warning("Ignoring unreadable record %s", SCENARIOS_KEY)
            return []
        scenarios = []
        for index, item in enumerate(data):
            try:
                scenarios.append(ScenarioData.model_validate(item))
            except ValidationError:
                logger.warning("Skipping malformed scenario at position %d", index)
        return scenarios

    def save_scenarios(self, scenarios: List[ScenarioData]) -> None:
        payload = [s.model_dump(mode="json") for s in scenarios]
        self.set_item(SCENARIOS_KEY, json.dumps(payload))

    def _backup(self, key: str) -> Path:
        backup = self.directory / f"{key}.{int(time.time() * 1000)}.corrupt.json"
        self._path(key).replace(backup)
        logger.warning("Moved unreadable record %s to %s", key, backup.name)
        return backup

    def append_scenario(self, scenario: ScenarioData) -> List[ScenarioData]:
        # Stored records are rewritten as they were found, malformed ones included.
        with _history_lock:
            data = self._load_history()
            if data is None:
                self._backup(SCENARIOS_KEY)
                data = []
            data.append(scenario.model_dump(mode="json"))
            self.set_item(SCENARIOS_KEY, json.dumps(data))
        return self.load_scenarios()
