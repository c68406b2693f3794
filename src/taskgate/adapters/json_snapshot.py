"""JSON snapshot adapter - reads an exported task store document."""

import json
import logging
import sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from taskgate.core.resolution import Snapshot
from taskgate.ports.task_store import StoreUnavailableError

from .records import build_snapshot

logger = logging.getLogger(__name__)

STDIN_PATH = "-"


def load_zone(timezone: str | None) -> ZoneInfo | None:
    """Resolve a timezone name, falling back to local time if unknown."""
    if not timezone:
        return None
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {timezone!r}; using naive local dates")
        return None


class JsonSnapshotStore:
    """
    JSON file task store.

    Implements TaskStore protocol. The document holds a `tasks` list and an
    optional `projects` list. Task order within the file is the project order
    used for sequential projects.
    """

    def __init__(self, path: Path | str, timezone: str | None = None):
        self.path = path if str(path) == STDIN_PATH else Path(path).expanduser()
        self.timezone = timezone
        self._tz = load_zone(timezone)

    def _read_text(self) -> str:
        if str(self.path) == STDIN_PATH:
            return sys.stdin.read()
        if not self.path.exists():
            raise StoreUnavailableError(f"Snapshot file not found: {self.path}")
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StoreUnavailableError(f"Cannot read snapshot {self.path}: {e}") from e

    def fetch_snapshot(self) -> Snapshot:
        """Read and parse the snapshot document."""
        text = self._read_text()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StoreUnavailableError(f"Snapshot {self.path} is not valid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("tasks"), list):
            raise StoreUnavailableError(f"Snapshot {self.path} has no 'tasks' list")

        projects = data.get("projects") or []
        if not isinstance(projects, list):
            logger.warning(f"Snapshot {self.path}: 'projects' is not a list; ignoring it")
            projects = []

        snapshot = build_snapshot(data["tasks"], projects, self._tz)
        logger.debug(
            f"Loaded {len(snapshot.tasks)} tasks and {len(snapshot.projects)} projects from {self.path}"
        )
        return snapshot
