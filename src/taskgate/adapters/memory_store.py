"""In-memory task store - wraps raw records already held by the caller."""

from taskgate.core.resolution import Snapshot

from .json_snapshot import load_zone
from .records import build_snapshot


class MemoryTaskStore:
    """
    Task store over in-memory records.

    Implements TaskStore protocol. Records use the same field names as the
    JSON snapshot format and go through the same per-field fallbacks.
    """

    def __init__(
        self,
        task_records: list[dict] | None = None,
        project_records: list[dict] | None = None,
        timezone: str | None = None,
    ):
        self.task_records = list(task_records or [])
        self.project_records = list(project_records or [])
        self._tz = load_zone(timezone)

    def fetch_snapshot(self) -> Snapshot:
        return build_snapshot(self.task_records, self.project_records, self._tz)
