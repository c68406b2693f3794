"""Shared workflow layer between the CLI and other callers.

Each function reads a snapshot from the configured store, runs a resolution
pass, and returns the result. StoreUnavailableError propagates to the caller.
"""

import logging
from datetime import date, datetime
from pathlib import Path

from .adapters.json_snapshot import JsonSnapshotStore, load_zone
from .config import Config
from .core.resolution import ResolutionResult, resolve
from .ports.task_store import TaskStore

logger = logging.getLogger(__name__)


def get_store(config: Config, snapshot: Path | str | None = None) -> TaskStore:
    """Resolve the task store from config, or an explicit snapshot path."""
    path = snapshot or config.snapshot_path
    return JsonSnapshotStore(path, timezone=config.timezone)


def today_for(config: Config) -> date:
    """Current day in the configured timezone (local time if the zone is unknown)."""
    return datetime.now(load_zone(config.timezone)).date()


def resolve_available(
    config: Config,
    store: TaskStore | None = None,
    as_of: date | None = None,
    query: str = "",
) -> ResolutionResult:
    """Fetch a snapshot and classify every task in it."""
    store = store or get_store(config)
    snapshot = store.fetch_snapshot()
    as_of = as_of or today_for(config)
    logger.info(
        f"Resolving {len(snapshot.tasks)} tasks across {len(snapshot.projects)} projects as of {as_of}"
    )
    return resolve(snapshot, as_of=as_of, query=query)
