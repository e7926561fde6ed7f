"""TaskLite terminal application."""

from __future__ import annotations

from textual.app import App
from textual.screen import Screen

from tasklite.services.app_context import AppContext, build_app_context
from tasklite.services.navigation import BOARD, LOGIN, REGISTER
from tasklite.utils.logger import get_logger
from tasklite.viewmodels import HeaderViewModel

from .screens import BoardScreen, LoginScreen, ProjectsScreen, RegisterScreen

logger = get_logger("ui")

TEXTUAL_THEMES = {"dark": "textual-dark", "light": "textual-light"}


class TaskLiteApp(App):
    """Routes between the login, registration, project and board screens."""

    TITLE = "TaskLite"
    CSS_PATH = "tasklite.tcss"
    BINDINGS = [
        ("ctrl+t", "toggle_theme", "Toggle theme"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, ctx: AppContext | None = None):
        super().__init__()
        self.ctx = ctx or build_app_context()
        if not self.ctx.session.is_authenticated:
            self.ctx.router.navigate(LOGIN)
        self.header_vm = HeaderViewModel(self.ctx)
        self._unsubscribe: list = []

    def on_mount(self) -> None:
        self._unsubscribe = [
            self.ctx.router.subscribe(self._on_route),
            self.header_vm.subscribe(self._apply_theme),
        ]
        self._apply_theme()
        self.push_screen(self._screen_for(self.ctx.router.current_path, self.ctx.router.params))

    async def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self.header_vm.dispose()
        await self.ctx.aclose()

    def _apply_theme(self) -> None:
        self.theme = TEXTUAL_THEMES[self.header_vm.theme]

    def action_toggle_theme(self) -> None:
        self.header_vm.toggle_theme()

    def _screen_for(self, path: str, params: dict[str, str]) -> Screen:
        if path == LOGIN:
            return LoginScreen(self.ctx)
        if path == REGISTER:
            return RegisterScreen(self.ctx)
        if path == BOARD:
            return BoardScreen(self.ctx, params.get("id", ""))
        return ProjectsScreen(self.ctx)

    def _on_route(self, path: str, params: dict[str, str]) -> None:
        logger.debug("route -> %s %s", path, params)
        self.call_later(self._show_route, path, params)

    async def _show_route(self, path: str, params: dict[str, str]) -> None:
        # Close open dialogs first so the routed screen is on top.
        while len(self.screen_stack) > 2:
            await self.pop_screen()
        await self.switch_screen(self._screen_for(path, params))


def run_app(ctx: AppContext | None = None) -> None:
    """Run the terminal UI until the user quits."""
    TaskLiteApp(ctx).run()
