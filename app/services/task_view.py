"""
In-memory list view over a user's tasks.

The dashboard keeps the caller's full task set and derives the visible page
from it on every request: search, status/priority/due-date filters, the
urgency sort, and windowed pagination.
"""
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Sequence

from app.models.tasks import Priority, Status

PAGE_SIZE = 8
MAX_PAGES_WITHOUT_ELLIPSIS = 5
ELLIPSIS = "..."
ALL = "all"


@dataclass
class TaskFilters:
    search: str = ""
    status: str = ALL
    priority: str = ALL
    due_date: date | None = None


@dataclass
class Page:
    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0
    page_size: int = PAGE_SIZE

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def _as_date(value) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def is_overdue(task, today: date | None = None) -> bool:
    due = _as_date(task.due_date)
    if due is None or task.status == Status.COMPLETED:
        return False
    return due <= (today or date.today())


def filter_tasks(tasks: Sequence, filters: TaskFilters) -> list:
    result = list(tasks)

    if filters.search:
        needle = filters.search.lower()
        result = [
            t for t in result
            if needle in t.title.lower() or needle in (t.description or "").lower()
        ]

    if filters.status and filters.status != ALL:
        result = [t for t in result if t.status == filters.status]

    if filters.priority and filters.priority != ALL:
        result = [t for t in result if t.priority == filters.priority]

    if filters.due_date:
        result = [t for t in result if _as_date(t.due_date) == filters.due_date]

    return result


def _created_ts(task) -> float:
    created = task.created_at
    if created is None:
        return 0.0
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created.timestamp()


def sort_tasks(tasks: Sequence, today: date | None = None) -> list:
    """Overdue first, then priority, then due date (undated last), then newest."""
    today = today or date.today()

    def key(task):
        due = _as_date(task.due_date)
        return (
            not is_overdue(task, today),
            Priority(task.priority).rank,
            due is None,
            due or date.max,
            -_created_ts(task),
        )

    return sorted(tasks, key=key)


def paginate(items: Sequence, page: int = 1, page_size: int = PAGE_SIZE) -> Page:
    total = len(items)
    total_pages = math.ceil(total / page_size)
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        total=total,
        page=page,
        total_pages=total_pages,
        page_size=page_size,
    )


def page_numbers(current_page: int, total_pages: int) -> list[int | str]:
    """Page-number control: 1 ... 4 5 6 ... 10 once there are more than 5 pages."""
    if total_pages <= MAX_PAGES_WITHOUT_ELLIPSIS:
        return list(range(1, total_pages + 1))

    pages: list[int | str] = [1]
    if current_page > 3:
        pages.append(ELLIPSIS)

    start = max(2, current_page - 1)
    end = min(total_pages - 1, current_page + 1)
    pages.extend(range(start, end + 1))

    if current_page < total_pages - 2:
        pages.append(ELLIPSIS)
    pages.append(total_pages)
    return pages


def build_view(
    tasks: Sequence,
    filters: TaskFilters,
    page: int = 1,
    page_size: int = PAGE_SIZE,
    today: date | None = None,
) -> Page:
    ordered = sort_tasks(filter_tasks(tasks, filters), today=today)
    return paginate(ordered, page=page, page_size=page_size)
