"""Custom exceptions for the todo list service."""


class TodoListError(Exception):
    """Base exception for all todo list service errors."""


class StoreError(TodoListError):
    """Raised when the task store fails (connectivity, constraint violation)."""


class StaleTaskError(StoreError):
    """Raised when a task was modified by someone else since it was read."""


class InvalidTransitionError(TodoListError):
    """Raised when a lifecycle transition is not allowed from the task's state."""
