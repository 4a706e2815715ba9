from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from app.models.tasks import Priority, Status
from app.utils.sanitization import sanitize_string


# ── Common base for readable/writeable fields ──
class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    priority: Priority = Priority.MEDIUM
    status: Status = Status.PENDING
    due_date: date | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    """Partial update: only the fields present in the body are replaced."""

    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    priority: Priority | None = None
    status: Status | None = None
    due_date: date | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("title", "priority", "status")
    @classmethod
    def not_null(cls, v):
        # Runs only for values present in the body
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class Task(TaskBase):
    task_id: int
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


# ── Dashboard view ──
class TaskView(Task):
    is_overdue: bool = False


class TaskPage(BaseModel):
    tasks: list[TaskView]
    total: int
    page: int
    total_pages: int
    page_size: int
    page_numbers: list[int | str]
    has_previous: bool
    has_next: bool
