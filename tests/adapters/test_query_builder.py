"""Tests for the owner-scoped SQL builders."""

from todolist_service.adapters.sqlite import query_builder
from todolist_service.models import Priority, SortField, TaskFilters


class TestWhereClause:
    def test_defaults_scope_owner_and_hide_deleted(self):
        where, params = query_builder.build_where_clause("o1", TaskFilters())

        assert where == "owner_id = ? AND is_deleted = 0"
        assert params == ["o1"]

    def test_include_deleted_drops_the_flag(self):
        where, _ = query_builder.build_where_clause(
            "o1", TaskFilters(include_deleted=True)
        )
        assert "is_deleted" not in where

    def test_deleted_only_wins_over_include_deleted(self):
        where, _ = query_builder.build_where_clause(
            "o1", TaskFilters(include_deleted=True, deleted_only=True)
        )
        assert "is_deleted = 1" in where

    def test_all_filters(self):
        filters = TaskFilters(
            is_completed=False, category=" work ", priority=Priority.URGENT
        )

        where, params = query_builder.build_where_clause("o1", filters)

        assert where.count("?") == 4
        assert params == ["o1", 0, "work", 4]

    def test_blank_category_is_ignored(self):
        _, params = query_builder.build_where_clause("o1", TaskFilters(category="  "))
        assert params == ["o1"]


class TestOrderClause:
    def test_default_is_newest_first_with_rowid_tiebreak(self):
        assert (
            query_builder.build_order_clause(TaskFilters())
            == "ORDER BY created_at DESC, rowid ASC"
        )

    def test_title_ascending_ignores_case(self):
        filters = TaskFilters(sort_by=SortField.TITLE, sort_ascending=True)
        assert query_builder.build_order_clause(filters).startswith(
            "ORDER BY title COLLATE NOCASE ASC"
        )

    def test_unknown_sort_falls_back_to_created_at(self):
        filters = TaskFilters(sort_by="shoe-size")
        assert filters.sort_by is SortField.CREATED_AT
        assert "created_at" in query_builder.build_order_clause(filters)


class TestSelect:
    def test_unbounded_select_has_no_limit(self):
        sql, params = query_builder.build_select("o1", TaskFilters())
        assert "LIMIT" not in sql
        assert params == ["o1"]

    def test_limit_and_offset_are_parameters(self):
        sql, params = query_builder.build_select(
            "o1", TaskFilters(), limit=10, offset=20
        )
        assert sql.endswith("LIMIT ? OFFSET ?")
        assert params[-2:] == [10, 20]

    def test_offset_alone_uses_unbounded_limit(self):
        _, params = query_builder.build_select("o1", TaskFilters(), offset=5)
        assert params[-2:] == [-1, 5]

    def test_count_ignores_sort(self):
        sql, params = query_builder.build_count(
            "o1", TaskFilters(sort_by=SortField.TITLE)
        )
        assert sql.startswith("SELECT COUNT(*) FROM tasks WHERE owner_id = ?")
        assert "ORDER BY" not in sql
        assert params == ["o1"]
