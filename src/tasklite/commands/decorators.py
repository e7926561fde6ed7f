"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
from collections.abc import Callable

import typer

from tasklite.services.config_service import get_config_service
from tasklite.services.session_store import KeyValueStorage, SessionStore
from tasklite.utils.exit_codes import ERROR_AUTH_FAILURE, ERROR_GENERAL, exit_code_name
from tasklite.utils.logger import get_logger
from tasklite.utils.ui.formatters import format_error

logger = get_logger("cli")


def _require_auth() -> None:
    """Require a stored session for the configured backend."""
    config_svc = get_config_service()
    storage = KeyValueStorage.for_origin(
        config_svc.storage_dir, config_svc.config.api.origin
    )
    if not SessionStore(storage).is_authenticated:
        format_error("Not logged in. Use 'tasklite login' to authenticate.")
        raise typer.Exit(ERROR_AUTH_FAILURE)


class AppError(Exception):
    """Command failure carrying the exit code to report."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _fail(command: str, started: float, exit_code: int, message: str) -> typer.Exit:
    logger.error(
        "command failed: %s (%.3fs) %s - %s",
        command,
        time.monotonic() - started,
        exit_code_name(exit_code),
        message,
    )
    format_error(message)
    return typer.Exit(code=exit_code)


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Run a command body with the session check, an event loop for async
    bodies, and error-to-exit-code mapping.

    ``AppError`` exits with its own code; any other exception is logged with
    its traceback and exits with ``ERROR_GENERAL``. ``typer.Exit`` passes
    through untouched.
    """

    def decorator(func: Callable):
        is_async = inspect.iscoroutinefunction(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            command = func.__name__
            started = time.monotonic()
            logger.info("command started: %s", command)
            try:
                if auth_required:
                    _require_auth()
                if is_async:
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)
            except typer.Exit:
                raise
            except AppError as e:
                raise _fail(command, started, e.exit_code, str(e)) from e
            except Exception as e:
                logger.exception("unhandled error in %s", command)
                raise _fail(
                    command, started, ERROR_GENERAL, f"An unexpected error occurred: {e}"
                ) from e

            logger.info(
                "command completed: %s (%.3fs)", command, time.monotonic() - started
            )
            return result

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
