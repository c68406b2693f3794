"""Resolution pass - partition a task snapshot into available and blocked."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from .availability import BlockedReason, SequentialGateCache, classify
from .tasks import Project, Task, to_day

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Tasks and projects read from a store at the start of a pass."""

    tasks: list[Task] = field(default_factory=list)
    projects: dict[str, Project] = field(default_factory=dict)

    def project_for(self, task: Task) -> Project | None:
        if task.in_inbox:
            return None
        return self.projects.get(task.project_id)

    def tasks_of(self, project_id: str) -> list[Task]:
        """Tasks of a project in snapshot order."""
        return [t for t in self.tasks if t.project_id == project_id]


@dataclass
class BlockedTally:
    """Blocked task counts keyed by reason."""

    project_on_hold: int = 0
    project_deferred: int = 0
    task_deferred: int = 0
    sequential: int = 0

    def add(self, reason: BlockedReason) -> None:
        match reason:
            case BlockedReason.PROJECT_ON_HOLD:
                self.project_on_hold += 1
            case BlockedReason.PROJECT_DEFERRED:
                self.project_deferred += 1
            case BlockedReason.TASK_DEFERRED:
                self.task_deferred += 1
            case BlockedReason.SEQUENTIAL:
                self.sequential += 1

    def count(self, reason: BlockedReason) -> int:
        return {
            BlockedReason.PROJECT_ON_HOLD: self.project_on_hold,
            BlockedReason.PROJECT_DEFERRED: self.project_deferred,
            BlockedReason.TASK_DEFERRED: self.task_deferred,
            BlockedReason.SEQUENTIAL: self.sequential,
        }[reason]

    @property
    def total(self) -> int:
        return self.project_on_hold + self.project_deferred + self.task_deferred + self.sequential


@dataclass
class ResolutionResult:
    """Outcome of one resolution pass. Reporting only."""

    as_of: date
    available: list[Task] = field(default_factory=list)
    blocked: BlockedTally = field(default_factory=BlockedTally)
    blocked_tasks: list[tuple[Task, BlockedReason]] = field(default_factory=list)
    excluded: int = 0

    @property
    def total_available(self) -> int:
        return len(self.available)

    @property
    def total_blocked(self) -> int:
        return self.blocked.total

    def blocked_by(self, reason: BlockedReason) -> list[Task]:
        return [t for t, r in self.blocked_tasks if r == reason]


def resolve(
    snapshot: Snapshot,
    as_of: datetime | date | None = None,
    query: str = "",
) -> ResolutionResult:
    """
    Classify every task in the snapshot once.

    Pure function - no I/O. The sequential gate cache lives only for this call.
    Tasks that do not match `query` are skipped without being counted.
    """
    today = to_day(as_of) if as_of is not None else date.today()
    gate = SequentialGateCache(snapshot.tasks_of)
    result = ResolutionResult(as_of=today)

    for task in snapshot.tasks:
        if not task.matches(query):
            continue

        if not task.is_eligible:
            result.excluded += 1
            continue

        project = snapshot.project_for(task)
        if project is None and not task.in_inbox:
            logger.warning(f"Task {task.id} references unknown project {task.project_id}; skipping")
            result.excluded += 1
            continue

        verdict = classify(task, project, today, gate)
        if verdict.is_available:
            result.available.append(task)
        elif verdict.is_blocked:
            result.blocked.add(verdict.reason)
            result.blocked_tasks.append((task, verdict.reason))
        else:
            result.excluded += 1

    logger.debug(
        f"Resolved {len(snapshot.tasks)} tasks as of {today}: "
        f"{result.total_available} available, {result.total_blocked} blocked, "
        f"{result.excluded} excluded ({gate.scans} sequential scans)"
    )
    return result
