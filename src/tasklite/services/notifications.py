"""Notification channel: transient toasts with timed dismissal.

One channel exists per application context and is handed to whoever needs
to raise a message. Removal timers run on the asyncio loop that is current
when the toast is pushed.
"""

from __future__ import annotations

import asyncio
import random
import string
import time
from collections.abc import Callable

from tasklite.models import Toast, ToastSeverity
from tasklite.utils.logger import get_logger

logger = get_logger("notifications")

DEFAULT_DURATION_MS = 3000

ToastListener = Callable[[list[Toast]], None]

_ALPHABET = string.ascii_lowercase + string.digits


def new_toast_id() -> str:
    """Epoch milliseconds plus a short random suffix."""
    suffix = "".join(random.choices(_ALPHABET, k=6))
    return f"{int(time.time() * 1000)}-{suffix}"


class NotificationChannel:
    """Ordered stack of live toasts."""

    def __init__(self, default_duration_ms: int = DEFAULT_DURATION_MS):
        self.default_duration_ms = default_duration_ms
        self._toasts: list[Toast] = []
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._listeners: list[ToastListener] = []

    @property
    def toasts(self) -> list[Toast]:
        """Snapshot of the live toasts, oldest first."""
        return list(self._toasts)

    def push(
        self,
        message: str,
        severity: ToastSeverity | str = ToastSeverity.SUCCESS,
        duration_ms: int | None = None,
    ) -> Toast:
        """Show ``message`` and schedule its removal after ``duration_ms``."""
        if duration_ms is None:
            duration_ms = self.default_duration_ms
        toast = Toast(
            id=new_toast_id(),
            severity=ToastSeverity(severity),
            message=message,
            duration_ms=duration_ms,
        )
        self._toasts.append(toast)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to time against: the toast stays until dismissed.
            logger.debug("toast %s pushed outside an event loop", toast.id)
        else:
            self._timers[toast.id] = loop.call_later(
                duration_ms / 1000, self.dismiss, toast.id
            )

        self._emit()
        return toast

    def success(self, message: str, duration_ms: int | None = None) -> Toast:
        return self.push(message, ToastSeverity.SUCCESS, duration_ms)

    def warning(self, message: str, duration_ms: int | None = None) -> Toast:
        return self.push(message, ToastSeverity.WARNING, duration_ms)

    def error(self, message: str, duration_ms: int | None = None) -> Toast:
        return self.push(message, ToastSeverity.ERROR, duration_ms)

    def dismiss(self, toast_id: str) -> None:
        """Remove a toast now and cancel its pending timer."""
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()
        before = len(self._toasts)
        self._toasts = [t for t in self._toasts if t.id != toast_id]
        if len(self._toasts) != before:
            self._emit()

    def close(self) -> None:
        """Cancel every pending removal; called when the host shuts down."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()

    def subscribe(self, listener: ToastListener) -> Callable[[], None]:
        """Register a listener for changes; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        snapshot = self.toasts
        for listener in list(self._listeners):
            listener(snapshot)
