"""Tests for the core task model."""

from datetime import date, datetime, timedelta

import pytest

from taskgate.core.tasks import Project, ProjectStatus, Task, deferred_past


@pytest.fixture
def today():
    return date(2025, 1, 15)


class TestDeferredPast:
    def test_unset_is_never_deferred(self, today):
        assert deferred_past(None, today) is False

    def test_tomorrow_is_deferred(self, today):
        assert deferred_past(today + timedelta(days=1), today) is True

    def test_today_is_not_deferred(self, today):
        assert deferred_past(today, today) is False

    def test_later_today_is_not_deferred(self, today):
        """Time of day is ignored - deferred to 23:00 today is already due."""
        later = datetime(2025, 1, 15, 23, 0)
        assert deferred_past(later, today) is False

    def test_yesterday_is_not_deferred(self, today):
        assert deferred_past(today - timedelta(days=1), today) is False

    def test_as_of_datetime_uses_its_day(self):
        as_of = datetime(2025, 1, 15, 18, 30)
        assert deferred_past(datetime(2025, 1, 16, 0, 1), as_of) is True
        assert deferred_past(datetime(2025, 1, 15, 0, 1), as_of) is False


class TestTask:
    def test_defaults(self):
        task = Task(id="t1")
        assert task.in_inbox is True
        assert task.is_eligible is True
        assert task.defer_date is None
        assert task.tags == []

    def test_project_task_not_in_inbox(self):
        assert Task(id="t1", project_id="p1").in_inbox is False

    def test_empty_project_id_is_inbox(self):
        assert Task(id="t1", project_id="").in_inbox is True

    def test_completed_not_eligible(self):
        assert Task(id="t1", completed=True).is_eligible is False

    def test_dropped_not_eligible(self):
        assert Task(id="t1", dropped=True).is_eligible is False

    def test_is_deferred(self, today):
        task = Task(id="t1", defer_date=today + timedelta(days=3))
        assert task.is_deferred(today) is True
        assert task.is_deferred(today + timedelta(days=3)) is False

    def test_matches_empty_query(self):
        assert Task(id="t1", name="Anything").matches("") is True

    def test_matches_name_case_insensitive(self):
        assert Task(id="t1", name="Call Dentist").matches("dentist") is True

    def test_matches_note(self):
        assert Task(id="t1", name="Call", note="Ask about Tuesday").matches("TUESDAY") is True

    def test_no_match(self):
        assert Task(id="t1", name="Call", note="").matches("email") is False


class TestProject:
    def test_defaults(self):
        project = Project(id="p1")
        assert project.status == ProjectStatus.ACTIVE
        assert project.on_hold is False
        assert project.is_closed is False
        assert project.sequential is False

    def test_on_hold(self):
        assert Project(id="p1", status=ProjectStatus.ON_HOLD).on_hold is True

    def test_dropped_is_closed(self):
        assert Project(id="p1", status=ProjectStatus.DROPPED).is_closed is True

    def test_completed_active_is_closed(self):
        """Completion is independent of status."""
        project = Project(id="p1", status=ProjectStatus.ACTIVE, completed=True)
        assert project.is_closed is True

    def test_on_hold_not_closed(self):
        assert Project(id="p1", status=ProjectStatus.ON_HOLD).is_closed is False

    def test_is_deferred(self, today):
        project = Project(id="p1", defer_date=today + timedelta(days=1))
        assert project.is_deferred(today) is True
