"""Task store interface."""

from typing import Protocol

from taskgate.core.resolution import Snapshot


class StoreUnavailableError(Exception):
    """Raised when the task store cannot be reached or enumerated."""

    pass


class TaskStore(Protocol):
    """Interface for reading a task snapshot from any backend."""

    def fetch_snapshot(self) -> Snapshot:
        """Read all tasks and projects. Raises StoreUnavailableError on failure."""
        ...
