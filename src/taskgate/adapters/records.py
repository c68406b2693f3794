"""Raw record readers shared by the store adapters.

Each field has a documented fallback so one unreadable value degrades a
single task instead of aborting the pass:

    id                  missing/invalid -> record skipped
    completed/dropped   -> False
    flagged/sequential  -> False
    deferDate/dueDate   -> None
    estimatedMinutes    -> 0
    tags                -> []
    name/note           -> ""
    status              -> active
    projectId           -> inbox
"""

import logging
from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from taskgate.core.resolution import Snapshot
from taskgate.core.tasks import Project, ProjectStatus, Task

logger = logging.getLogger(__name__)

_STATUS_ALIASES = {
    "active": ProjectStatus.ACTIVE,
    "on-hold": ProjectStatus.ON_HOLD,
    "on hold": ProjectStatus.ON_HOLD,
    "onhold": ProjectStatus.ON_HOLD,
    "on_hold": ProjectStatus.ON_HOLD,
    "dropped": ProjectStatus.DROPPED,
}
_DONE_STATUSES = {"done", "completed"}


def read_id(value: Any) -> str | None:
    """Identifier as a non-empty string, or None if unreadable."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def read_bool(record: dict, key: str) -> bool:
    value = record.get(key)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    logger.warning(f"Unreadable {key}={value!r} on record {record.get('id')!r}; using False")
    return False


def read_str(record: dict, key: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    logger.warning(f"Unreadable {key}={value!r} on record {record.get('id')!r}; using ''")
    return ""


def read_int(record: dict, key: str) -> int:
    value = record.get(key)
    if value is None:
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    logger.warning(f"Unreadable {key}={value!r} on record {record.get('id')!r}; using 0")
    return 0


def read_tags(record: dict) -> list[str]:
    value = record.get("tags")
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(f"Unreadable tags={value!r} on record {record.get('id')!r}; using []")
        return []
    return [t for t in value if isinstance(t, str)]


def read_instant(record: dict, key: str, tz: ZoneInfo | None = None) -> datetime | date | None:
    """
    Parse an ISO 8601 date or datetime.

    Aware datetimes are converted to `tz` when given, so day comparisons
    happen in the user's zone.
    """
    value = record.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, (datetime, date)):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            parsed = datetime.fromisoformat(text) if "T" in text or " " in text else date.fromisoformat(text)
        except ValueError:
            logger.warning(f"Unparseable {key}={value!r} on record {record.get('id')!r}; treating as unset")
            return None
    else:
        logger.warning(f"Unreadable {key}={value!r} on record {record.get('id')!r}; treating as unset")
        return None

    if isinstance(parsed, datetime) and parsed.tzinfo is not None and tz is not None:
        parsed = parsed.astimezone(tz)
    return parsed


def read_status(record: dict) -> tuple[ProjectStatus, bool]:
    """Project status plus a completed flag implied by a 'done' status."""
    value = record.get("status")
    if value is None:
        return ProjectStatus.ACTIVE, False
    text = str(value).strip().lower().removesuffix(" status")
    if text in _DONE_STATUSES:
        return ProjectStatus.ACTIVE, True
    status = _STATUS_ALIASES.get(text)
    if status is None:
        logger.warning(f"Unknown project status {value!r} on {record.get('id')!r}; using active")
        return ProjectStatus.ACTIVE, False
    return status, False


def read_project(record: Any, tz: ZoneInfo | None = None) -> Project | None:
    """Build a Project from a raw record, or None if its id cannot be read."""
    if not isinstance(record, dict):
        logger.warning(f"Skipping non-object project record: {record!r}")
        return None
    project_id = read_id(record.get("id"))
    if project_id is None:
        logger.warning(f"Skipping project record without a readable id: {record!r}")
        return None

    status, done = read_status(record)
    return Project(
        id=project_id,
        name=read_str(record, "name"),
        status=status,
        completed=read_bool(record, "completed") or done,
        defer_date=read_instant(record, "deferDate", tz),
        sequential=read_bool(record, "sequential"),
    )


def read_task(record: Any, tz: ZoneInfo | None = None) -> Task | None:
    """Build a Task from a raw record, or None if its id cannot be read."""
    if not isinstance(record, dict):
        logger.warning(f"Skipping non-object task record: {record!r}")
        return None
    task_id = read_id(record.get("id"))
    if task_id is None:
        logger.warning(f"Skipping task record without a readable id: {record!r}")
        return None

    raw_project = record.get("projectId")
    project_id = read_id(raw_project)
    if project_id is None and raw_project not in (None, ""):
        logger.warning(f"Unreadable projectId={raw_project!r} on task {task_id}; treating as inbox")

    return Task(
        id=task_id,
        name=read_str(record, "name"),
        note=read_str(record, "note"),
        completed=read_bool(record, "completed"),
        dropped=read_bool(record, "dropped"),
        defer_date=read_instant(record, "deferDate", tz),
        due_date=read_instant(record, "dueDate", tz),
        project_id=project_id,
        flagged=read_bool(record, "flagged"),
        estimated_minutes=read_int(record, "estimatedMinutes"),
        tags=read_tags(record),
    )


def build_snapshot(
    task_records: list,
    project_records: list,
    tz: ZoneInfo | None = None,
) -> Snapshot:
    """
    Read raw records into a Snapshot.

    Task records whose id equals their projectId are the project's own root
    entry rather than a task inside it, and are skipped.
    """
    projects: dict[str, Project] = {}
    for record in project_records:
        project = read_project(record, tz)
        if project is not None:
            projects[project.id] = project

    tasks: list[Task] = []
    for record in task_records:
        task = read_task(record, tz)
        if task is None:
            continue
        if task.project_id is not None and task.project_id == task.id:
            logger.debug(f"Skipping root entry of project {task.project_id}")
            continue
        project = projects.get(task.project_id) if task.project_id else None
        if project is not None:
            task.project_name = project.name
        tasks.append(task)

    return Snapshot(tasks=tasks, projects=projects)
