"""In-process router standing in for the browser's location."""

from __future__ import annotations

from collections.abc import Callable

from tasklite.utils.logger import get_logger

logger = get_logger("router")

ROOT = "/"
LOGIN = "/login"
REGISTER = "/register"
PROJECTS = "/projects"
BOARD = "/project"

ROUTES = (LOGIN, REGISTER, PROJECTS, BOARD)
AUTH_ROUTES = (LOGIN, REGISTER)

RouteListener = Callable[[str, dict[str, str]], None]


class Router:
    """Tracks the current route and tells listeners when it changes."""

    def __init__(self, initial: str = ROOT):
        self.current_path = PROJECTS
        self.params: dict[str, str] = {}
        self._listeners: list[RouteListener] = []
        self.history: list[str] = []
        self._set(initial, {})

    def _set(self, path: str, params: dict[str, str]) -> None:
        if path == ROOT:
            path = PROJECTS
        if path not in ROUTES:
            raise ValueError(f"Unknown route: {path}")
        self.current_path = path
        self.params = params
        self.history.append(path)

    def navigate(self, path: str, **params: str) -> None:
        """Go to ``path``; ``/`` redirects to the project list."""
        self._set(path, dict(params))
        logger.debug("navigate %s %s", self.current_path, self.params)
        for listener in list(self._listeners):
            listener(self.current_path, self.params)

    def subscribe(self, listener: RouteListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
