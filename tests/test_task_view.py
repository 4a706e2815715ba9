"""Tests for the in-memory filter / sort / paginate routine."""

from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.services.task_view import (
    TaskFilters,
    build_view,
    filter_tasks,
    is_overdue,
    page_numbers,
    paginate,
    sort_tasks,
)

TODAY = date(2024, 6, 1)
_BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def task(title="task", description=None, priority="medium", status="pending", due_date=None, age=0):
    """A task-shaped object; larger ``age`` means created earlier."""
    return SimpleNamespace(
        title=title,
        description=description,
        priority=priority,
        status=status,
        due_date=due_date,
        created_at=_BASE - timedelta(minutes=age),
    )


class TestOverdue:
    def test_past_due_pending(self):
        assert is_overdue(task(due_date=date(2024, 5, 31)), TODAY)

    def test_completed_is_never_overdue(self):
        assert not is_overdue(task(due_date=date(2020, 1, 1), status="completed"), TODAY)

    def test_due_today_is_overdue(self):
        assert is_overdue(task(due_date=TODAY), TODAY)

    def test_due_today_completed_is_not_overdue(self):
        assert not is_overdue(task(due_date=TODAY, status="completed"), TODAY)

    def test_undated_is_not_overdue(self):
        assert not is_overdue(task(), TODAY)


class TestSort:
    def test_overdue_first_regardless_of_priority(self):
        done = task("done", priority="low", status="completed", due_date=date(2024, 1, 1))
        late = task("late", priority="high", due_date=date(2023, 1, 1))
        upcoming = task("upcoming", priority="medium", due_date=date(2025, 1, 1))

        assert [t.title for t in sort_tasks([done, late, upcoming], TODAY)] == ["late", "upcoming", "done"]

    def test_overdue_low_beats_high(self):
        urgent = task("urgent", priority="high", due_date=date(2024, 7, 1))
        late = task("late", priority="low", due_date=date(2024, 5, 1))
        assert [t.title for t in sort_tasks([urgent, late], TODAY)] == ["late", "urgent"]

    def test_priority_then_due_date(self):
        tasks = [
            task("low", priority="low", due_date=date(2024, 7, 1)),
            task("high-later", priority="high", due_date=date(2024, 9, 1)),
            task("high-sooner", priority="high", due_date=date(2024, 8, 1)),
        ]
        assert [t.title for t in sort_tasks(tasks, TODAY)] == ["high-sooner", "high-later", "low"]

    def test_undated_after_dated(self):
        tasks = [task("undated"), task("dated", due_date=date(2030, 1, 1))]
        assert [t.title for t in sort_tasks(tasks, TODAY)] == ["dated", "undated"]

    def test_newest_breaks_ties(self):
        tasks = [task("old", age=10), task("new", age=1)]
        assert [t.title for t in sort_tasks(tasks, TODAY)] == ["new", "old"]


class TestFilter:
    @pytest.fixture
    def tasks(self):
        return [
            task("Buy milk", description="2% please", priority="low"),
            task("Pay rent", status="completed", priority="high", due_date=date(2024, 6, 3)),
            task("Call plumber", description="Kitchen SINK leaks", due_date=date(2024, 6, 3)),
        ]

    def test_search_title_case_insensitive(self, tasks):
        result = filter_tasks(tasks, TaskFilters(search="MILK"))
        assert [t.title for t in result] == ["Buy milk"]

    def test_search_description(self, tasks):
        result = filter_tasks(tasks, TaskFilters(search="sink"))
        assert [t.title for t in result] == ["Call plumber"]

    def test_status_and_priority(self, tasks):
        assert [t.title for t in filter_tasks(tasks, TaskFilters(status="completed"))] == ["Pay rent"]
        assert [t.title for t in filter_tasks(tasks, TaskFilters(priority="low"))] == ["Buy milk"]

    def test_all_means_no_filter(self, tasks):
        assert len(filter_tasks(tasks, TaskFilters(status="all", priority="all"))) == 3

    def test_due_date_exact_day(self, tasks):
        result = filter_tasks(tasks, TaskFilters(due_date=date(2024, 6, 3)))
        assert {t.title for t in result} == {"Pay rent", "Call plumber"}

    def test_due_date_matches_datetimes_by_day(self):
        stamped = task("stamped", due_date=datetime(2024, 6, 3, 18, 30))
        assert filter_tasks([stamped], TaskFilters(due_date=date(2024, 6, 3))) == [stamped]


class TestPaginate:
    def test_seventeen_items(self):
        items = list(range(17))
        assert paginate(items, page=1).total_pages == 3
        last = paginate(items, page=3)
        assert last.items == [16]
        assert last.has_previous and not last.has_next

    def test_page_is_clamped(self):
        items = list(range(10))
        assert paginate(items, page=99).page == 2
        assert paginate(items, page=0).page == 1

    def test_empty(self):
        page = paginate([], page=1)
        assert page.total_pages == 0
        assert page.page == 1
        assert page.items == []
        assert not page.has_next


class TestPageNumbers:
    @pytest.mark.parametrize(
        "current, total, expected",
        [
            (1, 0, []),
            (2, 4, [1, 2, 3, 4]),
            (3, 5, [1, 2, 3, 4, 5]),
            (1, 10, [1, 2, "...", 10]),
            (3, 10, [1, 2, 3, 4, "...", 10]),
            (5, 10, [1, "...", 4, 5, 6, "...", 10]),
            (8, 10, [1, "...", 7, 8, 9, 10]),
            (10, 10, [1, "...", 9, 10]),
        ],
    )
    def test_window(self, current, total, expected):
        assert page_numbers(current, total) == expected


def test_build_view_filters_sorts_and_pages():
    tasks = [task(f"chore {i}", priority="low", age=i) for i in range(17)]
    tasks.append(task("Errand", priority="high"))

    view = build_view(tasks, TaskFilters(search="chore"), page=1, today=TODAY)
    assert view.total == 17
    assert view.total_pages == 3
    assert view.items[0].title == "chore 0"

    assert len(build_view(tasks, TaskFilters(search="chore"), page=3, today=TODAY).items) == 1
