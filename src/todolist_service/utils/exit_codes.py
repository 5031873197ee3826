"""
Exit codes for the todolist CLI.

Semantic exit codes let scripts tell a bad request apart from a missing task
or a storage failure without parsing output.
"""

# Success
SUCCESS = 0

# General error (unspecified, including storage failures)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Task not found for this owner, or not in a state the command applies to
ERROR_NOT_FOUND = 5

_CODES = {
    SUCCESS: ("SUCCESS", "Command executed successfully"),
    ERROR_GENERAL: ("ERROR_GENERAL", "A general error occurred"),
    ERROR_INVALID_ARGS: ("ERROR_INVALID_ARGS", "Invalid arguments or validation error"),
    ERROR_NOT_FOUND: ("ERROR_NOT_FOUND", "Task not found"),
}


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    return _CODES.get(code, (f"UNKNOWN({code})", ""))[0]


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    return _CODES.get(code, ("", "Unknown error"))[1]
