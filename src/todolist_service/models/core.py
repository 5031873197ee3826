"""Task data models."""

from datetime import datetime
from enum import Enum, IntEnum
from math import ceil
from typing import Any

from pydantic import (
    BaseModel,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 50
MAX_PAGE_SIZE = 100


class Priority(IntEnum):
    """Task priority levels (0=lowest, 4=highest)."""

    NORMAL = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    URGENT = 4


class TaskState(str, Enum):
    """Lifecycle state of a task.

    A deleted task keeps its completion flag, so DELETED covers both
    completed and pending tasks sitting in the recycle bin.
    """

    ACTIVE_PENDING = "active_pending"
    ACTIVE_COMPLETED = "active_completed"
    DELETED = "deleted"


class SortField(str, Enum):
    """Sortable task fields."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    PRIORITY = "priority"
    TITLE = "title"
    COMPLETED_AT = "completed_at"

    @classmethod
    def parse(cls, value: Any) -> "SortField":
        """Resolve a loosely-formatted sort name, falling back to CREATED_AT.

        Accepts enum members, values ("updated_at") and the camel-case names
        used by the REST API ("UpdatedDate", "updatedAt").
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.CREATED_AT

        key = value.strip().lower().replace("_", "").replace("-", "")
        return _SORT_ALIASES.get(key, cls.CREATED_AT)


_SORT_ALIASES = {
    "createdat": SortField.CREATED_AT,
    "createddate": SortField.CREATED_AT,
    "created": SortField.CREATED_AT,
    "updatedat": SortField.UPDATED_AT,
    "updateddate": SortField.UPDATED_AT,
    "updated": SortField.UPDATED_AT,
    "priority": SortField.PRIORITY,
    "title": SortField.TITLE,
    "completedat": SortField.COMPLETED_AT,
    "completeddate": SortField.COMPLETED_AT,
    "completed": SortField.COMPLETED_AT,
}


def clean_optional_text(value: str | None) -> str | None:
    """Trim text, turning blank strings into None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        owner_id: Identifier of the owning user
        title: Short task title
        description: Optional detailed description
        priority: Priority level (0=normal, 4=urgent)
        category: Optional free-form grouping label
        is_completed: Completion status
        completed_at: Completion timestamp, set iff is_completed
        is_deleted: Soft-delete flag (task is in the recycle bin)
        created_at: Creation timestamp
        updated_at: Last update timestamp
        version: Version for optimistic locking
    """

    id: str
    owner_id: str
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    priority: Priority = Priority.NORMAL
    category: str | None = Field(default=None, max_length=CATEGORY_MAX_LENGTH)
    is_completed: bool = False
    completed_at: datetime | None = None
    is_deleted: bool = False
    created_at: datetime
    updated_at: datetime
    version: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def check_completion_timestamp(self) -> "Task":
        """completed_at must be present exactly when the task is completed."""
        if self.is_completed != (self.completed_at is not None):
            raise ValueError(
                "completed_at must be set if and only if is_completed is true"
            )
        return self

    @property
    def state(self) -> TaskState:
        """Current lifecycle state."""
        if self.is_deleted:
            return TaskState.DELETED
        if self.is_completed:
            return TaskState.ACTIVE_COMPLETED
        return TaskState.ACTIVE_PENDING


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required, trimmed, non-empty)
        description: Optional detailed description
        priority: Priority level (0-4)
        category: Optional grouping label
    """

    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    priority: Priority = Priority.NORMAL
    category: str | None = Field(default=None, max_length=CATEGORY_MAX_LENGTH)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("description", "category")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return clean_optional_text(v)


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only fields explicitly provided are applied
    (see ``model_fields_set``). Providing ``None`` or a blank string for
    description/category clears it.

    Attributes:
        title: Task title
        description: Detailed description
        priority: Priority level
        category: Grouping label
        is_completed: Completion status
    """

    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    priority: Priority | None = None
    category: str | None = Field(default=None, max_length=CATEGORY_MAX_LENGTH)
    is_completed: bool | None = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("title must not be empty")
        return v

    @field_validator("description", "category")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return clean_optional_text(v)

    def provided_fields(self) -> dict[str, Any]:
        """Return only the fields the caller explicitly supplied."""
        provided = self.model_dump(include=self.model_fields_set)
        # None means "absent" for non-nullable fields
        for key in ("title", "priority", "is_completed"):
            if key in provided and provided[key] is None:
                del provided[key]
        return provided


class TaskFilters(BaseModel):
    """Filter and sort criteria for querying an owner's tasks.

    Attributes:
        include_deleted: Include tasks in the recycle bin
        deleted_only: Only return tasks in the recycle bin
        is_completed: Filter by completion status
        category: Exact category match
        priority: Exact priority match
        sort_by: Field to sort by (unknown names fall back to created_at)
        sort_ascending: Sort direction
    """

    include_deleted: bool = False
    deleted_only: bool = False
    is_completed: bool | None = None
    category: str | None = None
    priority: Priority | None = None
    sort_by: SortField = SortField.CREATED_AT
    sort_ascending: bool = False

    @field_validator("sort_by", mode="before")
    @classmethod
    def coerce_sort_field(cls, v: Any) -> SortField:
        return SortField.parse(v)

    @field_validator("category")
    @classmethod
    def blank_category_is_absent(cls, v: str | None) -> str | None:
        return clean_optional_text(v)


class TaskQuery(TaskFilters):
    """Paginated task query.

    Attributes:
        page: 1-based page number
        page_size: Number of items per page (1-100)
    """

    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PagedResult(BaseModel):
    """One page of tasks plus the counts needed to navigate the rest."""

    items: list[Task] = Field(default_factory=list)
    total_count: int = 0
    current_page: int = 1
    page_size: int = 10
    total_pages: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @classmethod
    def from_page(
        cls, items: list[Task], total_count: int, query: TaskQuery
    ) -> "PagedResult":
        """Assemble a result for ``query`` from an already-sliced page."""
        return cls(
            items=items,
            total_count=total_count,
            current_page=query.page,
            page_size=query.page_size,
            total_pages=ceil(total_count / query.page_size),
        )
