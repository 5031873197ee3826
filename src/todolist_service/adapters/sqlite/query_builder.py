"""SQL builders for filtered, sorted and paginated task queries.

Every statement built here is scoped to a single owner. Sorting always ends
with ``rowid`` so rows that tie on the requested field keep insertion order
and pages never overlap or skip rows.
"""

from __future__ import annotations

from typing import Any

from todolist_service.models import SortField, TaskFilters

_SORT_COLUMNS = {
    SortField.CREATED_AT: "created_at",
    SortField.UPDATED_AT: "updated_at",
    SortField.PRIORITY: "priority",
    SortField.TITLE: "title COLLATE NOCASE",
    SortField.COMPLETED_AT: "completed_at",
}


def build_where_clause(owner_id: str, filters: TaskFilters) -> tuple[str, list[Any]]:
    """Build the WHERE clause for an owner's tasks matching ``filters``.

    Args:
        owner_id: Owner the query is scoped to
        filters: Filter criteria; omitted filters match every row

    Returns:
        Tuple of (WHERE clause without the keyword, parameters list)
    """
    conditions = ["owner_id = ?"]
    params: list[Any] = [owner_id]

    if filters.deleted_only:
        conditions.append("is_deleted = 1")
    elif not filters.include_deleted:
        conditions.append("is_deleted = 0")

    if filters.is_completed is not None:
        conditions.append("is_completed = ?")
        params.append(int(filters.is_completed))

    if filters.category is not None:
        conditions.append("category = ?")
        params.append(filters.category)

    if filters.priority is not None:
        conditions.append("priority = ?")
        params.append(int(filters.priority))

    return " AND ".join(conditions), params


def build_order_clause(filters: TaskFilters) -> str:
    """Build the ORDER BY clause for the requested sort."""
    column = _SORT_COLUMNS.get(filters.sort_by, _SORT_COLUMNS[SortField.CREATED_AT])
    direction = "ASC" if filters.sort_ascending else "DESC"
    return f"ORDER BY {column} {direction}, rowid ASC"


def build_select(
    owner_id: str,
    filters: TaskFilters,
    *,
    limit: int | None = None,
    offset: int | None = None,
) -> tuple[str, list[Any]]:
    """Build a SELECT returning one sorted slice of matching tasks."""
    where, params = build_where_clause(owner_id, filters)
    query = f"SELECT * FROM tasks WHERE {where} {build_order_clause(filters)}"

    if limit is not None or offset is not None:
        # SQLite needs a LIMIT before OFFSET; -1 means unbounded
        query += " LIMIT ? OFFSET ?"
        params.extend([limit if limit is not None else -1, offset or 0])

    return query, params


def build_count(owner_id: str, filters: TaskFilters) -> tuple[str, list[Any]]:
    """Build a COUNT over matching tasks, ignoring sort and pagination."""
    where, params = build_where_clause(owner_id, filters)
    return f"SELECT COUNT(*) FROM tasks WHERE {where}", params
