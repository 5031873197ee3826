"""Statistics and completion-streak engine.

Everything here works on a fully loaded snapshot of one owner's tasks and the
current time; nothing touches the store. All calendar arithmetic is done in
UTC and weeks start on Sunday.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta
from typing import NamedTuple

from todolist_service.models import (
    CategoryStats,
    Priority,
    PriorityDistribution,
    Task,
    TaskStatistics,
)

ONE_DAY = timedelta(days=1)
COMPLETION_WINDOW_DAYS = 30


class CompletionStreaks(NamedTuple):
    """Current and longest runs of consecutive completion days."""

    current: int
    longest: int


def week_start(now: datetime) -> datetime:
    """Midnight UTC on the Sunday that starts ``now``'s week."""
    now = now.astimezone(UTC)
    days_since_sunday = (now.weekday() + 1) % 7  # Monday is weekday 0
    start = now - timedelta(days=days_since_sunday)
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


def month_start(now: datetime) -> datetime:
    """Midnight UTC on the first day of ``now``'s month."""
    now = now.astimezone(UTC)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def completion_dates(tasks: Iterable[Task]) -> list[date]:
    """Distinct UTC calendar dates on which any of ``tasks`` was completed."""
    return sorted(
        {
            task.completed_at.astimezone(UTC).date()
            for task in tasks
            if task.completed_at is not None
        }
    )


def completion_streaks(dates: Iterable[date], today: date) -> CompletionStreaks:
    """Compute current and longest completion streaks.

    The current streak only counts if it reaches today or yesterday: it
    starts at today when present (else yesterday) and walks back until the
    first missing day. The longest streak is the longest run of consecutive
    days anywhere in the history.

    Args:
        dates: Days with at least one completion (duplicates allowed)
        today: Current UTC date

    Returns:
        CompletionStreaks(current, longest)
    """
    ordered = sorted(set(dates))
    if not ordered:
        return CompletionStreaks(current=0, longest=0)

    present = set(ordered)

    current = 0
    if today in present or today - ONE_DAY in present:
        check = today if today in present else today - ONE_DAY
        while check in present:
            current += 1
            check -= ONE_DAY

    longest = run = 1
    for previous, following in zip(ordered, ordered[1:]):
        run = run + 1 if following - previous == ONE_DAY else 1
        longest = max(longest, run)

    return CompletionStreaks(current=current, longest=longest)


def completion_rate(completed: int, total: int) -> float:
    """Percentage of ``total`` that is completed, 0 when there is nothing."""
    return completed / total * 100 if total > 0 else 0.0


def _priority_distribution(tasks: list[Task]) -> PriorityDistribution:
    counts = Counter(task.priority for task in tasks)
    return PriorityDistribution(
        normal=counts[Priority.NORMAL],
        low=counts[Priority.LOW],
        medium=counts[Priority.MEDIUM],
        high=counts[Priority.HIGH],
        urgent=counts[Priority.URGENT],
    )


def _category_breakdown(tasks: list[Task]) -> list[CategoryStats]:
    totals: dict[str, int] = {}
    completed: Counter[str] = Counter()
    for task in tasks:
        if not task.category:
            continue
        totals[task.category] = totals.get(task.category, 0) + 1
        if task.is_completed:
            completed[task.category] += 1

    stats = [
        CategoryStats(
            category=category,
            total_count=total,
            completed_count=completed[category],
            pending_count=total - completed[category],
            completion_rate=completion_rate(completed[category], total),
        )
        for category, total in totals.items()
    ]
    # sorted() is stable: equal totals keep first-seen order
    return sorted(stats, key=lambda s: s.total_count, reverse=True)


def compute_statistics(tasks: Iterable[Task], now: datetime) -> TaskStatistics:
    """Aggregate a snapshot of one owner's tasks.

    Args:
        tasks: Every task of the owner, active and deleted
        now: Current time (aware)

    Returns:
        TaskStatistics for the snapshot
    """
    all_tasks = list(tasks)
    active = [task for task in all_tasks if not task.is_deleted]
    deleted_count = len(all_tasks) - len(active)

    total = len(active)
    completed = sum(1 for task in active if task.is_completed)

    this_week = [task for task in active if task.created_at >= week_start(now)]
    this_month = [task for task in active if task.created_at >= month_start(now)]

    window_start = now - timedelta(days=COMPLETION_WINDOW_DAYS)
    recently_completed = sum(
        1
        for task in active
        if task.completed_at is not None and task.completed_at >= window_start
    )

    streaks = completion_streaks(
        completion_dates(active), now.astimezone(UTC).date()
    )

    return TaskStatistics(
        total_count=total,
        completed_count=completed,
        pending_count=total - completed,
        deleted_count=deleted_count,
        completion_rate=completion_rate(completed, total),
        this_week_count=len(this_week),
        this_week_completed_count=sum(1 for task in this_week if task.is_completed),
        this_month_count=len(this_month),
        this_month_completed_count=sum(1 for task in this_month if task.is_completed),
        priority_stats=_priority_distribution(active),
        category_stats=_category_breakdown(active),
        average_completion_per_day=recently_completed / float(COMPLETION_WINDOW_DAYS),
        longest_completion_streak=streaks.longest,
        current_completion_streak=streaks.current,
    )
