"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from todolist_service.exceptions import StoreError
from todolist_service.utils.exit_codes import ERROR_GENERAL, ERROR_INVALID_ARGS
from todolist_service.utils.logger import get_logger
from todolist_service.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def describe_validation_error(error: ValidationError) -> str:
    """One line per invalid field, e.g. ``title: title must not be empty``."""
    lines = []
    for detail in error.errors():
        field = ".".join(str(part) for part in detail["loc"]) or "value"
        message = detail["msg"].removeprefix("Value error, ")
        lines.append(f"{field}: {message}")
    return "; ".join(lines)


def command_wrapper(func: Callable):
    """Run a (possibly async) command, logging it and mapping errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger("commands")
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)

        def failed(message: str, exit_code: int, error: Exception, trace: bool = False):
            elapsed = time.monotonic() - start
            if trace:
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    error,
                    traceback.format_exc(),
                )
            else:
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, error)
            format_error(message)
            return typer.Exit(code=exit_code)

        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            logger.info(
                "command completed: %s (%.3fs)", cmd, time.monotonic() - start
            )
            return result

        except AppError as e:
            raise failed(str(e), e.exit_code, e) from e

        except ValidationError as e:
            raise failed(
                f"Invalid input: {describe_validation_error(e)}", ERROR_INVALID_ARGS, e
            ) from e

        except typer.Exit:
            # Typer's own exits (--help, explicit Exit(0) on cancel)
            raise

        except StoreError as e:
            raise failed(f"Storage error: {e}", ERROR_GENERAL, e, trace=True) from e

        except Exception as e:
            raise failed(
                f"An unexpected error occurred: {e}", ERROR_GENERAL, e, trace=True
            ) from e

    return wrapper
