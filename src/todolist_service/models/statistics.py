"""Statistics data models."""

from pydantic import BaseModel, Field


class PriorityDistribution(BaseModel):
    """Number of active tasks at each priority level."""

    normal: int = 0
    low: int = 0
    medium: int = 0
    high: int = 0
    urgent: int = 0


class CategoryStats(BaseModel):
    """Per-category breakdown of active tasks.

    Attributes:
        category: Category label
        total_count: Active tasks in the category
        completed_count: Completed active tasks in the category
        pending_count: Pending active tasks in the category
        completion_rate: completed_count / total_count * 100
    """

    category: str
    total_count: int = 0
    completed_count: int = 0
    pending_count: int = 0
    completion_rate: float = 0.0


class TaskStatistics(BaseModel):
    """Aggregate snapshot of one owner's tasks.

    Counts other than ``deleted_count`` only consider active (non-deleted)
    tasks.

    Attributes:
        total_count: Active tasks
        completed_count: Completed active tasks
        pending_count: total_count - completed_count
        deleted_count: Tasks in the recycle bin
        completion_rate: Percentage of active tasks completed (0 if none)
        this_week_count: Active tasks created since the start of the week
        this_week_completed_count: Of those, how many are completed
        this_month_count: Active tasks created since the start of the month
        this_month_completed_count: Of those, how many are completed
        priority_stats: Active tasks per priority level
        category_stats: Per-category breakdown, largest first
        average_completion_per_day: Completions over the last 30 days / 30
        longest_completion_streak: Longest run of consecutive completion days
        current_completion_streak: Run ending today (or yesterday)
    """

    total_count: int = 0
    completed_count: int = 0
    pending_count: int = 0
    deleted_count: int = 0
    completion_rate: float = 0.0
    this_week_count: int = 0
    this_week_completed_count: int = 0
    this_month_count: int = 0
    this_month_completed_count: int = 0
    priority_stats: PriorityDistribution = Field(default_factory=PriorityDistribution)
    category_stats: list[CategoryStats] = Field(default_factory=list)
    average_completion_per_day: float = 0.0
    longest_completion_streak: int = 0
    current_completion_streak: int = 0
