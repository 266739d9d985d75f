"""Tests for core task logic."""

from datetime import datetime, timedelta, timezone

import pytest

from taskdeck.core.tasks import (
    SortOrder,
    StatusFilter,
    Task,
    TaskStatus,
    ViewState,
    completion_rate,
    compute_stats,
    filter_by_search,
    filter_by_status,
    find_task,
    project_tasks,
    sort_by_created,
)
from taskdeck.core.validation import ValidationError


# Fixtures
@pytest.fixture
def now():
    return datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_tasks(now):
    """Sample tasks covering various scenarios, in arbitrary order."""
    return [
        Task(
            id="a1",
            title="Buy groceries",
            notes="Milk, eggs, BREAD",
            status=TaskStatus.PENDING,
            created_at=now - timedelta(days=2),
        ),
        Task(
            id="b2",
            title="File taxes",
            notes=None,
            status=TaskStatus.COMPLETED,
            created_at=now,
        ),
        Task(
            id="c3",
            title="Call plumber",
            notes="Kitchen sink leaks",
            status=TaskStatus.PENDING,
            created_at=now - timedelta(days=5),
        ),
        Task(
            id="d4",
            title="Read book (chapter 3)",
            notes="",
            status=TaskStatus.COMPLETED,
            created_at=now - timedelta(hours=1),
        ),
    ]


def ids(tasks):
    return [t.id for t in tasks]


# Task class tests
class TestTask:
    def test_from_api_parses_row(self):
        task = Task.from_api(
            {
                "id": "123",
                "title": "Write report",
                "notes": "Q4 numbers",
                "status": "completed",
                "user_id": "u1",
                "created_at": "2025-01-15T10:00:00.123456+00:00",
                "updated_at": "2025-01-16T08:00:00Z",
            }
        )
        assert task.id == "123"
        assert task.status == TaskStatus.COMPLETED
        assert task.user_id == "u1"
        assert task.created_at == datetime(2025, 1, 15, 10, 0, 0, 123456, tzinfo=timezone.utc)
        assert task.updated_at == datetime(2025, 1, 16, 8, 0, tzinfo=timezone.utc)

    def test_from_api_defaults(self):
        task = Task.from_api({"id": 7, "title": "T", "created_at": "2025-01-15T10:00:00Z"})
        assert task.id == "7"
        assert task.notes is None
        assert task.status == TaskStatus.PENDING
        assert task.updated_at is None

    def test_toggled_status(self, now):
        task = Task(id="1", title="T", created_at=now)
        assert task.toggled_status() == TaskStatus.COMPLETED
        task.status = TaskStatus.COMPLETED
        assert task.toggled_status() == TaskStatus.PENDING

    def test_to_dict(self, now):
        task = Task(id="1", title="T", created_at=now, notes="n", status=TaskStatus.COMPLETED)
        data = task.to_dict()
        assert data["status"] == "completed"
        assert data["created_at"] == "2025-01-15T09:00:00+00:00"
        assert data["updated_at"] is None


class TestViewState:
    def test_defaults(self):
        view = ViewState()
        assert view.search == ""
        assert view.status == StatusFilter.ALL
        assert view.sort == SortOrder.LATEST

    def test_parse_is_case_insensitive(self):
        view = ViewState.parse("x", "Completed", "OLDEST")
        assert view.status == StatusFilter.COMPLETED
        assert view.sort == SortOrder.OLDEST

    def test_parse_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            ViewState.parse(status="done")

    def test_parse_rejects_unknown_sort(self):
        with pytest.raises(ValidationError):
            ViewState.parse(sort="newest")


class TestFilterByStatus:
    def test_all_is_identity(self, sample_tasks):
        assert ids(filter_by_status(sample_tasks, StatusFilter.ALL)) == ids(sample_tasks)

    def test_pending(self, sample_tasks):
        assert ids(filter_by_status(sample_tasks, StatusFilter.PENDING)) == ["a1", "c3"]

    def test_completed(self, sample_tasks):
        assert ids(filter_by_status(sample_tasks, StatusFilter.COMPLETED)) == ["b2", "d4"]


class TestFilterBySearch:
    def test_blank_search_is_identity(self, sample_tasks):
        assert ids(filter_by_search(sample_tasks, "   ")) == ids(sample_tasks)

    def test_matches_title_case_insensitive(self, sample_tasks):
        assert ids(filter_by_search(sample_tasks, "TAXES")) == ["b2"]

    def test_matches_notes(self, sample_tasks):
        assert ids(filter_by_search(sample_tasks, "bread")) == ["a1"]

    def test_missing_notes_do_not_match_or_fail(self, sample_tasks):
        assert ids(filter_by_search(sample_tasks, "sink")) == ["c3"]

    def test_regex_characters_are_literal(self, sample_tasks):
        assert ids(filter_by_search(sample_tasks, "(chapter")) == ["d4"]
        assert filter_by_search(sample_tasks, ".*") == []

    def test_search_is_not_stripped(self, sample_tasks):
        assert filter_by_search(sample_tasks, " taxes ") == []


class TestSortByCreated:
    def test_latest_first(self, sample_tasks):
        assert ids(sort_by_created(sample_tasks, SortOrder.LATEST)) == ["b2", "d4", "a1", "c3"]

    def test_oldest_first(self, sample_tasks):
        assert ids(sort_by_created(sample_tasks, SortOrder.OLDEST)) == ["c3", "a1", "d4", "b2"]

    @pytest.mark.parametrize("order", [SortOrder.LATEST, SortOrder.OLDEST])
    def test_ties_keep_input_order(self, now, order):
        tasks = [Task(id=str(i), title=f"T{i}", created_at=now) for i in range(5)]
        assert ids(sort_by_created(tasks, order)) == ["0", "1", "2", "3", "4"]

    def test_does_not_mutate_input(self, sample_tasks):
        before = ids(sample_tasks)
        sort_by_created(sample_tasks, SortOrder.OLDEST)
        assert ids(sample_tasks) == before


class TestStats:
    def test_empty_collection(self):
        stats = compute_stats([])
        assert (stats.total, stats.completed, stats.pending, stats.completion_rate) == (0, 0, 0, 0)

    def test_two_of_three_completed(self, now):
        tasks = [
            Task(id="1", title="a", created_at=now, status=TaskStatus.COMPLETED),
            Task(id="2", title="b", created_at=now, status=TaskStatus.COMPLETED),
            Task(id="3", title="c", created_at=now),
        ]
        stats = compute_stats(tasks)
        assert stats.total == 3
        assert stats.completed == 2
        assert stats.pending == 1
        assert stats.completion_rate == 67

    @pytest.mark.parametrize(
        "completed,total,expected",
        [(0, 5, 0), (1, 3, 33), (1, 8, 13), (1, 2, 50), (5, 5, 100), (1, 200, 1)],
    )
    def test_completion_rate_rounds_half_up(self, completed, total, expected):
        assert completion_rate(completed, total) == expected


class TestProjectTasks:
    def test_identity_filter_keeps_cardinality(self, sample_tasks):
        view = project_tasks(sample_tasks, ViewState(search="", status=StatusFilter.ALL))
        assert len(view.tasks) == len(sample_tasks)

    def test_filters_and_sorts(self, sample_tasks):
        view = project_tasks(
            sample_tasks,
            ViewState(search="l", status=StatusFilter.PENDING, sort=SortOrder.OLDEST),
        )
        assert ids(view.tasks) == ["c3", "a1"]

    def test_stats_use_unfiltered_collection(self, sample_tasks):
        view = project_tasks(sample_tasks, ViewState(status=StatusFilter.COMPLETED, search="taxes"))
        assert ids(view.tasks) == ["b2"]
        assert view.stats.total == 4
        assert view.stats.completed == 2
        assert view.stats.completion_rate == 50

    def test_result_is_subset_satisfying_filters(self, sample_tasks):
        view = project_tasks(sample_tasks, ViewState(search="e", status=StatusFilter.PENDING))
        assert all(t in sample_tasks for t in view.tasks)
        assert all(t.status == TaskStatus.PENDING for t in view.tasks)
        assert all("e" in t.title.lower() or "e" in (t.notes or "").lower() for t in view.tasks)

    def test_idempotent(self, sample_tasks):
        view = ViewState(search="a", sort=SortOrder.OLDEST)
        once = project_tasks(sample_tasks, view).tasks
        twice = project_tasks(once, view).tasks
        assert ids(once) == ids(twice)

    def test_default_view(self, sample_tasks):
        assert ids(project_tasks(sample_tasks).tasks) == ["b2", "d4", "a1", "c3"]

    def test_empty_collection(self):
        view = project_tasks([], ViewState(search="[unclosed"))
        assert view.tasks == []
        assert view.stats.completion_rate == 0


class TestFindTask:
    def test_exact_id(self, sample_tasks):
        assert find_task(sample_tasks, "b2").id == "b2"

    def test_unique_prefix(self, sample_tasks):
        assert find_task(sample_tasks, "c").id == "c3"

    def test_ambiguous_prefix(self, now):
        tasks = [Task(id="ab1", title="x", created_at=now), Task(id="ab2", title="y", created_at=now)]
        assert find_task(tasks, "ab") is None

    @pytest.mark.parametrize("task_id", ["", "   "])
    def test_blank_id_matches_nothing(self, now, task_id):
        tasks = [Task(id="only-one", title="x", created_at=now)]
        assert find_task(tasks, task_id) is None

    def test_missing(self, sample_tasks):
        assert find_task(sample_tasks, "zz") is None
