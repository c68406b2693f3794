"""Ports - interfaces/protocols for external dependencies."""

from .task_store import StoreUnavailableError, TaskStore

__all__ = [
    "StoreUnavailableError",
    "TaskStore",
]
