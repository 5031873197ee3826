"""Todo list domain models.

This package contains Pydantic models that represent the core domain entities
of the todo list service. These models are used throughout the application
for data validation, serialization, and type safety.
"""

from .config_models import AppConfig, Context
from .core import (
    PagedResult,
    Priority,
    SortField,
    Task,
    TaskCreate,
    TaskFilters,
    TaskQuery,
    TaskState,
    TaskUpdate,
)
from .statistics import CategoryStats, PriorityDistribution, TaskStatistics

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "TaskQuery",
    "PagedResult",
    "Priority",
    "SortField",
    "TaskState",
    # Statistics models
    "TaskStatistics",
    "PriorityDistribution",
    "CategoryStats",
    # Config models
    "AppConfig",
    "Context",
]
