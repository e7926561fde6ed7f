"""Domain models for users, projects, tasks and toasts."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for models exchanged with the API.

    The API speaks camelCase; attributes stay snake_case. Both spellings are
    accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Dump with camelCase keys and ISO-8601 dates."""
        return self.model_dump(mode="json", by_alias=True)


class TaskStatus(str, Enum):
    """Board column a task sits in."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    TaskStatus.TODO: "Todo",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
}

# Left-to-right column order on the board.
BOARD_COLUMNS: tuple[TaskStatus, ...] = (
    TaskStatus.TODO,
    TaskStatus.IN_PROGRESS,
    TaskStatus.DONE,
)


class Priority(str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class User(WireModel):
    """User model.

    Attributes:
        id: Backend-assigned identifier
        name: Display name
        email: Login email
    """

    id: str
    name: str
    email: EmailStr


class Project(WireModel):
    """Project model.

    Attributes:
        id: Backend-assigned identifier (or a local ``p…`` id when created offline)
        user_id: Owning user
        name: Project name
        description: Optional free text
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    user_id: str | None = None
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class Task(WireModel):
    """Task model.

    Attributes:
        id: Backend-assigned identifier
        project_id: Project the task belongs to
        name: Task name
        description: Optional free text
        tags: Free-form tags; order kept, duplicates allowed
        status: Board column
        priority: Low, medium or high
        due: Optional due timestamp
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    project_id: str | None = None
    name: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    due: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ToastSeverity(str, Enum):
    """Visual variant of a toast."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Toast(BaseModel):
    """Short-lived user-facing message."""

    id: str
    severity: ToastSeverity = ToastSeverity.SUCCESS
    message: str
    duration_ms: int = 3000
