"""Tests for the JSON snapshot and in-memory store adapters."""

import io
import json
from datetime import date
from unittest.mock import patch

import pytest

from taskgate.adapters.json_snapshot import JsonSnapshotStore, load_zone
from taskgate.adapters.memory_store import MemoryTaskStore
from taskgate.core.resolution import resolve
from taskgate.ports.task_store import StoreUnavailableError


@pytest.fixture
def document():
    return {
        "projects": [
            {"id": "p1", "name": "Move House", "status": "active", "sequential": True},
            {"id": "p2", "name": "Someday", "status": "on hold"},
        ],
        "tasks": [
            {"id": "t1", "name": "Book movers", "projectId": "p1", "completed": True},
            {"id": "t2", "name": "Pack", "projectId": "p1"},
            {"id": "t3", "name": "Unpack", "projectId": "p1"},
            {"id": "t4", "name": "Piano", "projectId": "p2"},
            {"id": "t5", "name": "Milk"},
        ],
    }


@pytest.fixture
def snapshot_file(tmp_path, document):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(document))
    return path


class TestJsonSnapshotStore:
    def test_reads_tasks_and_projects(self, snapshot_file):
        snap = JsonSnapshotStore(snapshot_file).fetch_snapshot()
        assert [t.id for t in snap.tasks] == ["t1", "t2", "t3", "t4", "t5"]
        assert set(snap.projects) == {"p1", "p2"}
        assert snap.tasks[1].project_name == "Move House"

    def test_end_to_end_resolution(self, snapshot_file):
        snap = JsonSnapshotStore(snapshot_file).fetch_snapshot()
        result = resolve(snap, as_of=date(2025, 1, 15))
        assert [t.id for t in result.available] == ["t2", "t5"]
        assert result.blocked.sequential == 1
        assert result.blocked.project_on_hold == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(StoreUnavailableError, match="not found"):
            JsonSnapshotStore(tmp_path / "nope.json").fetch_snapshot()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(StoreUnavailableError, match="not valid JSON"):
            JsonSnapshotStore(path).fetch_snapshot()

    def test_missing_tasks_list(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"projects": []}))
        with pytest.raises(StoreUnavailableError, match="no 'tasks' list"):
            JsonSnapshotStore(path).fetch_snapshot()

    def test_top_level_list_rejected(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([{"id": "t1"}]))
        with pytest.raises(StoreUnavailableError):
            JsonSnapshotStore(path).fetch_snapshot()

    def test_projects_optional(self, tmp_path):
        path = tmp_path / "inbox.json"
        path.write_text(json.dumps({"tasks": [{"id": "t1"}]}))
        snap = JsonSnapshotStore(path).fetch_snapshot()
        assert snap.projects == {}

    def test_bad_projects_ignored(self, tmp_path):
        path = tmp_path / "weird.json"
        path.write_text(json.dumps({"tasks": [{"id": "t1"}], "projects": "p1"}))
        snap = JsonSnapshotStore(path).fetch_snapshot()
        assert snap.projects == {}
        assert len(snap.tasks) == 1

    def test_reads_stdin(self, document):
        with patch("taskgate.adapters.json_snapshot.sys.stdin", io.StringIO(json.dumps(document))):
            snap = JsonSnapshotStore("-").fetch_snapshot()
        assert len(snap.tasks) == 5

    def test_expands_user_path(self):
        store = JsonSnapshotStore("~/snap.json")
        assert "~" not in str(store.path)


class TestLoadZone:
    def test_known_zone(self):
        assert load_zone("America/Toronto") is not None

    def test_unknown_zone(self):
        assert load_zone("Mars/Olympus") is None

    def test_empty(self):
        assert load_zone("") is None


class TestMemoryTaskStore:
    def test_fetch_snapshot(self, document):
        store = MemoryTaskStore(document["tasks"], document["projects"])
        snap = store.fetch_snapshot()
        assert len(snap.tasks) == 5
        assert snap.projects["p2"].on_hold is True

    def test_empty(self):
        snap = MemoryTaskStore().fetch_snapshot()
        assert snap.tasks == []
