from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, get_current_identity
from app.schemas.task import TaskCreate, Task as TaskSchema, TaskUpdate
from app.schemas.user import TokenData
from app.services import tasks as task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])

@router.get("/", response_model=list[TaskSchema])
async def list_tasks(
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity)
):
    return await task_service.list_tasks(db, identity.user_id)

@router.post("/", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity)
):
    task = await task_service.create_task(db, task_data, identity.user_id)
    await db.commit()
    return task

@router.get("/{task_id}", response_model=TaskSchema)
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity)
):
    return await task_service.get_task(db, task_id, identity.user_id)

@router.put("/{task_id}", response_model=TaskSchema)
async def update_task(
    task_id: int,
    update_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity)
):
    task = await task_service.update_task(db, task_id, update_data, identity.user_id)
    await db.commit()
    return task

@router.delete("/{task_id}")
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    identity: TokenData = Depends(get_current_identity)
):
    await task_service.delete_task(db, task_id, identity.user_id)
    await db.commit()
    return {"message": "Task deleted successfully"}
