"""Shared plumbing for view-models."""

from __future__ import annotations

from collections.abc import Callable

from tasklite.services.app_context import AppContext
from tasklite.services.navigation import LOGIN
from tasklite.utils.logger import get_logger

ChangeListener = Callable[[], None]


class ViewModel:
    """Base view-model.

    Subclasses own their state exclusively and call ``_changed()`` once per
    consistent state so hosts never render a half-applied mutation.
    """

    log_name = "viewmodel"

    def __init__(self, ctx: AppContext):
        self.ctx = ctx
        self.disposed = False
        self.logger = get_logger(self.log_name)
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a render listener; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispose(self) -> None:
        """Detach from the host; late request completions are ignored."""
        self.disposed = True
        self._listeners.clear()

    def _changed(self) -> None:
        if self.disposed:
            return
        for listener in list(self._listeners):
            listener()

    def _expire_session(self, action: str) -> None:
        """Hard reset after a 401: drop the session and go to login."""
        self.logger.warning("401 on %s, redirecting to %s", action, LOGIN)
        self.ctx.session.clear_session()
        self.ctx.router.navigate(LOGIN)
