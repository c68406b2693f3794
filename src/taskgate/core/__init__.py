"""Functional core - pure business logic with no I/O."""

from .tasks import Task, Project, ProjectStatus, deferred_past
from .availability import (
    BlockedReason,
    Classification,
    Outcome,
    SequentialGateCache,
    classify,
)
from .resolution import BlockedTally, ResolutionResult, Snapshot, resolve

__all__ = [
    # Tasks
    "Task",
    "Project",
    "ProjectStatus",
    "deferred_past",
    # Availability
    "BlockedReason",
    "Classification",
    "Outcome",
    "SequentialGateCache",
    "classify",
    # Resolution
    "BlockedTally",
    "ResolutionResult",
    "Snapshot",
    "resolve",
]
