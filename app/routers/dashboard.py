from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.dependencies import get_db, get_current_identity
from app.schemas.task import Task as TaskSchema, TaskPage, TaskView
from app.schemas.user import TokenData
from app.services import tasks as task_service
from app.services.task_view import TaskFilters, build_view, is_overdue, page_numbers

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

_STATUS_CHOICES = r"^(all|pending|in-progress|completed)$"
_PRIORITY_CHOICES = r"^(all|low|medium|high)$"


@router.get("", response_model=TaskPage)
async def dashboard(
    search: str = "",
    status: str = Query("all", pattern=_STATUS_CHOICES),
    priority: str = Query("all", pattern=_PRIORITY_CHOICES),
    due_date: date | None = None,
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity)
):
    today = date.today()
    tasks = await task_service.list_tasks(db, identity.user_id)
    view = build_view(
        tasks,
        TaskFilters(search=search.strip(), status=status, priority=priority, due_date=due_date),
        page=page,
        page_size=settings.PAGE_SIZE,
        today=today,
    )

    return TaskPage(
        tasks=[
            TaskView(**TaskSchema.model_validate(t).model_dump(), is_overdue=is_overdue(t, today))
            for t in view.items
        ],
        total=view.total,
        page=view.page,
        total_pages=view.total_pages,
        page_size=view.page_size,
        page_numbers=page_numbers(view.page, view.total_pages),
        has_previous=view.has_previous,
        has_next=view.has_next,
    )
