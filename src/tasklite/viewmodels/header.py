"""Application header: logout and theme toggle."""

from __future__ import annotations

from tasklite.services.app_context import AppContext
from tasklite.services.navigation import AUTH_ROUTES, LOGIN
from tasklite.services.session_store import Theme

from .base import ViewModel


class HeaderViewModel(ViewModel):
    """State behind the top bar."""

    log_name = "header"

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.theme: Theme = ctx.preferences.get_theme()

    @property
    def visible(self) -> bool:
        """Hidden on the login and registration screens."""
        return self.ctx.router.current_path not in AUTH_ROUTES

    @property
    def can_logout(self) -> bool:
        return self.ctx.session.is_authenticated

    def logout(self) -> None:
        self.ctx.session.clear_session()
        self.logger.info("logged out")
        self.ctx.router.navigate(LOGIN)
        self._changed()

    def set_theme(self, theme: Theme) -> None:
        self.ctx.preferences.set_theme(theme)
        self.theme = theme
        self._changed()

    def toggle_theme(self) -> Theme:
        self.set_theme("dark" if self.theme == "light" else "light")
        return self.theme
