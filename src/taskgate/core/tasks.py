"""Pure task domain model - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class ProjectStatus(Enum):
    """Lifecycle status of a project. Completion is tracked separately."""

    ACTIVE = "active"
    ON_HOLD = "on-hold"
    DROPPED = "dropped"


@dataclass
class Task:
    """A read-only task snapshot."""

    id: str
    name: str = ""
    note: str = ""
    completed: bool = False
    dropped: bool = False
    defer_date: datetime | date | None = None
    due_date: datetime | date | None = None
    project_id: str | None = None
    project_name: str = ""
    flagged: bool = False
    estimated_minutes: int = 0
    tags: list[str] = field(default_factory=list)

    @property
    def in_inbox(self) -> bool:
        return not self.project_id

    @property
    def is_eligible(self) -> bool:
        """Neither completed nor dropped."""
        return not self.completed and not self.dropped

    def is_deferred(self, as_of: date | None = None) -> bool:
        """Defer date falls on a later day than as_of."""
        return deferred_past(self.defer_date, as_of)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name or note. Empty query matches all."""
        if not query:
            return True
        needle = query.lower()
        return needle in self.name.lower() or needle in self.note.lower()


@dataclass
class Project:
    """A read-only project snapshot."""

    id: str
    name: str = ""
    status: ProjectStatus = ProjectStatus.ACTIVE
    completed: bool = False
    defer_date: datetime | date | None = None
    sequential: bool = False

    @property
    def on_hold(self) -> bool:
        return self.status == ProjectStatus.ON_HOLD

    @property
    def is_closed(self) -> bool:
        """Dropped or completed - contributes no tasks to any bucket."""
        return self.status == ProjectStatus.DROPPED or self.completed

    def is_deferred(self, as_of: date | None = None) -> bool:
        return deferred_past(self.defer_date, as_of)


def to_day(value: datetime | date) -> date:
    """Calendar day of a date or datetime (time of day dropped)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def deferred_past(defer_date: datetime | date | None, as_of: datetime | date | None = None) -> bool:
    """
    True if defer_date lands on a day strictly after as_of's day.

    Day granularity: anything deferred to some time today is already due.
    """
    if defer_date is None:
        return False
    today = to_day(as_of) if as_of is not None else date.today()
    return to_day(defer_date) > today
