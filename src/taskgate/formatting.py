"""Output rendering for resolution results.

Pure functions - no I/O.
"""

from datetime import date, datetime

from .core.availability import BlockedReason
from .core.resolution import ResolutionResult
from .core.tasks import Task

ITEM_DELIMITER = "|"
RECORD_DELIMITER = "###"
INBOX_NAME = "Inbox"

REASON_LABELS = {
    BlockedReason.PROJECT_ON_HOLD: "Project on hold",
    BlockedReason.PROJECT_DEFERRED: "Project deferred",
    BlockedReason.TASK_DEFERRED: "Task deferred",
    BlockedReason.SEQUENTIAL: "Waiting on earlier task",
}


def project_label(task: Task) -> str:
    if task.in_inbox:
        return INBOX_NAME
    return task.project_name or "(No Project)"


def format_instant(value: datetime | date | None) -> str:
    """ISO string, or empty string when unset."""
    return value.isoformat() if value else ""


def clean_field(value: str) -> str:
    """Replace delimiter characters so a field cannot split a record."""
    if not value:
        return ""
    return value.replace(RECORD_DELIMITER, " ").replace(ITEM_DELIMITER, " ")


def task_to_dict(task: Task) -> dict:
    return {
        "id": task.id,
        "name": task.name,
        "note": task.note,
        "projectName": project_label(task),
        "tags": list(task.tags),
        "dueDate": format_instant(task.due_date),
        "flagged": task.flagged,
        "estimatedMinutes": task.estimated_minutes,
        "deferDate": format_instant(task.defer_date),
    }


def result_to_dict(result: ResolutionResult, max_results: int = 0) -> dict:
    """
    JSON-ready view of a result.

    max_results truncates the task list only; totals always cover the full pass.
    """
    tasks = result.available[:max_results] if max_results else result.available
    return {
        "tasks": [task_to_dict(t) for t in tasks],
        "blocked": {reason.value: result.blocked.count(reason) for reason in BlockedReason},
        "totalAvailable": result.total_available,
        "totalBlocked": result.total_blocked,
    }


def blocked_to_dict(result: ResolutionResult) -> dict:
    """Blocked tasks grouped by reason."""
    return {
        reason.value: [task_to_dict(t) for t in result.blocked_by(reason)]
        for reason in BlockedReason
    }


def format_delimited(result: ResolutionResult, max_results: int = 0) -> str:
    """
    Records of id|name|project|status joined by ###.

    Empty string when nothing is available.
    """
    tasks = result.available[:max_results] if max_results else result.available
    records = []
    for task in tasks:
        status = "flagged" if task.flagged else "active"
        fields = [task.id, task.name, project_label(task), status]
        records.append(ITEM_DELIMITER.join(clean_field(f) for f in fields))
    return RECORD_DELIMITER.join(records)


def format_blocked_delimited(result: ResolutionResult) -> str:
    """Records of id|name|project|reason for blocked tasks, in input order."""
    records = []
    for task, reason in result.blocked_tasks:
        fields = [task.id, task.name, project_label(task), reason.value]
        records.append(ITEM_DELIMITER.join(clean_field(f) for f in fields))
    return RECORD_DELIMITER.join(records)


def format_task_line(task: Task) -> str:
    """Format a single task for terminal display."""
    flag = "!" if task.flagged else " "
    due = f" (due {format_instant(task.due_date)})" if task.due_date else ""
    estimate = f" [{task.estimated_minutes}m]" if task.estimated_minutes else ""
    return f"[{flag}] {task.name or task.id}{due}{estimate} - {project_label(task)}"


def format_summary(result: ResolutionResult) -> str:
    """Counts for a pass, one line per blocked reason."""
    lines = [
        f"Available as of {result.as_of.isoformat()}: {result.total_available}",
        f"Blocked: {result.total_blocked}",
    ]
    for reason in BlockedReason:
        lines.append(f"  {REASON_LABELS[reason]}: {result.blocked.count(reason)}")
    return "\n".join(lines)


def format_blocked_sections(result: ResolutionResult) -> str:
    """Blocked tasks under a heading per reason. Reasons with no tasks are omitted."""
    sections = []
    for reason in BlockedReason:
        tasks = result.blocked_by(reason)
        if not tasks:
            continue
        lines = "\n".join(f"  {format_task_line(t)}" for t in tasks)
        sections.append(f"### {REASON_LABELS[reason]} ({len(tasks)})\n{lines}")
    return "\n\n".join(sections)
