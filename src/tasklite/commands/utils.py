"""Helpers shared by the command modules."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from tasklite.models import Toast
from tasklite.services.app_context import AppContext, build_app_context
from tasklite.services.navigation import LOGIN
from tasklite.utils.exit_codes import ERROR_AUTH_FAILURE
from tasklite.utils.ui.formatters import format_toast

from .decorators import AppError

SESSION_EXPIRED = "Session expired. Use 'tasklite login' to sign in again."


def get_app_context() -> AppContext:
    """Build the context for one command invocation."""
    return build_app_context()


def _toast_printer():
    printed: set[str] = set()

    def on_change(toasts: list[Toast]) -> None:
        for toast in toasts:
            if toast.id not in printed:
                printed.add(toast.id)
                format_toast(toast)

    return on_change


def check_session(ctx: AppContext) -> None:
    """Turn a 401-triggered redirect to login into an auth error."""
    if ctx.router.current_path == LOGIN:
        raise AppError(SESSION_EXPIRED, ERROR_AUTH_FAILURE)


@asynccontextmanager
async def app_session(*, expect_session: bool = True) -> AsyncIterator[AppContext]:
    """Context for one command: prints toasts and closes the client after.

    With ``expect_session`` the command fails with an auth error if any call
    expired the session.
    """
    ctx = get_app_context()
    unsubscribe = ctx.notifications.subscribe(_toast_printer())
    try:
        yield ctx
        if expect_session:
            check_session(ctx)
    finally:
        unsubscribe()
        await ctx.aclose()
