"""Availability classification - pure decision logic, no I/O."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from .tasks import Project, Task, to_day

logger = logging.getLogger(__name__)


class BlockedReason(Enum):
    """Why an otherwise open task is not actionable today."""

    PROJECT_ON_HOLD = "projectOnHold"
    PROJECT_DEFERRED = "projectDeferred"
    TASK_DEFERRED = "taskDeferred"
    SEQUENTIAL = "sequential"


class Outcome(Enum):
    AVAILABLE = "available"
    BLOCKED = "blocked"
    EXCLUDED = "excluded"


@dataclass(frozen=True)
class Classification:
    """Result of classifying one task. `reason` is set only when blocked."""

    outcome: Outcome
    reason: BlockedReason | None = None

    @classmethod
    def available(cls) -> "Classification":
        return cls(Outcome.AVAILABLE)

    @classmethod
    def excluded(cls) -> "Classification":
        return cls(Outcome.EXCLUDED)

    @classmethod
    def blocked(cls, reason: BlockedReason) -> "Classification":
        return cls(Outcome.BLOCKED, reason)

    @property
    def is_available(self) -> bool:
        return self.outcome == Outcome.AVAILABLE

    @property
    def is_blocked(self) -> bool:
        return self.outcome == Outcome.BLOCKED

    @property
    def is_excluded(self) -> bool:
        return self.outcome == Outcome.EXCLUDED


class SequentialGateCache:
    """
    Memo of the first eligible task per sequential project.

    One instance per resolution pass. The first lookup for a project scans
    its ordered tasks; later lookups return the cached answer (including None)
    even if task state seen later in the pass disagrees.
    """

    def __init__(self, tasks_of: Callable[[str], Iterable[Task]]):
        self._tasks_of = tasks_of
        self._first: dict[str, Task | None] = {}
        self.scans = 0

    def first_eligible(self, project_id: str) -> Task | None:
        """First task in project order that is neither completed nor dropped."""
        if project_id in self._first:
            return self._first[project_id]

        self.scans += 1
        first = next((t for t in self._tasks_of(project_id) if t.is_eligible), None)
        self._first[project_id] = first
        logger.debug(
            f"Sequential gate for project {project_id}: {first.id if first else 'none'}"
        )
        return first

    def clear(self) -> None:
        self._first.clear()

    def __contains__(self, project_id: str) -> bool:
        return project_id in self._first

    def __len__(self) -> int:
        return len(self._first)


def classify(
    task: Task,
    project: Project | None,
    as_of: datetime | date | None = None,
    gate: SequentialGateCache | None = None,
) -> Classification:
    """
    Decide whether a task is available right now.

    Rules are checked in a fixed order and the first match wins:

    1. Task completed or dropped: excluded.
    2. Task deferred past today: blocked (task deferred).
    3. No project (inbox): available.
    4. Project on hold: blocked (project on hold).
    5. Project dropped or completed: excluded.
    6. Project deferred past today: blocked (project deferred).
    7. Sequential project and the task is not its first eligible task:
       blocked (sequential).
    8. Otherwise available.

    Without a gate there is no project ordering to consult, so rule 7 never fires.
    """
    today = to_day(as_of) if as_of is not None else date.today()

    if not task.is_eligible:
        return Classification.excluded()

    if task.is_deferred(today):
        return Classification.blocked(BlockedReason.TASK_DEFERRED)

    if project is None:
        return Classification.available()

    if project.on_hold:
        return Classification.blocked(BlockedReason.PROJECT_ON_HOLD)

    if project.is_closed:
        return Classification.excluded()

    if project.is_deferred(today):
        return Classification.blocked(BlockedReason.PROJECT_DEFERRED)

    if project.sequential and gate is not None:
        first = gate.first_eligible(project.id)
        if first is not None and first.id != task.id:
            return Classification.blocked(BlockedReason.SEQUENTIAL)

    return Classification.available()
