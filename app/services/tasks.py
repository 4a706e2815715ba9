import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from fastapi import HTTPException, status

from app.models.tasks import Task
from app.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def _column_value(value):
    # Enum members are stored by their string value
    return getattr(value, "value", value)


async def list_tasks(db: AsyncSession, user_id: int) -> list[Task]:
    result = await db.execute(
        select(Task)
        .filter(Task.user_id == user_id)
        .order_by(Task.due_date.asc().nulls_last(), Task.created_at.desc())
    )
    return list(result.scalars().all())


async def create_task(db: AsyncSession, task_data: TaskCreate, user_id: int) -> Task:
    new_task = Task(
        user_id=user_id,
        title=task_data.title,
        description=task_data.description,
        priority=_column_value(task_data.priority),
        status=_column_value(task_data.status),
        due_date=task_data.due_date,
    )
    db.add(new_task)
    await db.flush()
    logger.info("Created task %s for user %s", new_task.task_id, user_id)
    return new_task


async def get_task(db: AsyncSession, task_id: int, user_id: int) -> Task:
    """Owner-scoped lookup: someone else's task is reported as missing."""
    result = await db.execute(
        select(Task).filter(Task.task_id == task_id, Task.user_id == user_id)
    )
    task = result.scalars().first()
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


async def update_task(db: AsyncSession, task_id: int, update_data: TaskUpdate, user_id: int) -> Task:
    task = await get_task(db, task_id, user_id)

    for key, value in update_data.model_dump(exclude_unset=True).items():
        setattr(task, key, _column_value(value))
    task.updated_at = datetime.now(timezone.utc)

    await db.flush()
    logger.info("Updated task %s for user %s", task_id, user_id)
    return task


async def delete_task(db: AsyncSession, task_id: int, user_id: int) -> None:
    task = await get_task(db, task_id, user_id)
    await db.delete(task)
    await db.flush()
    logger.info("Deleted task %s for user %s", task_id, user_id)
