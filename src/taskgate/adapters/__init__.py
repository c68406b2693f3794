"""Adapters - I/O implementations of ports."""

from .json_snapshot import JsonSnapshotStore
from .memory_store import MemoryTaskStore
from .records import build_snapshot, read_project, read_task

__all__ = [
    "JsonSnapshotStore",
    "MemoryTaskStore",
    "build_snapshot",
    "read_project",
    "read_task",
]
