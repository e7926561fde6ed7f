"""Widgets shared by every screen: the header bar and the toast rack."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Static

from tasklite.models import Toast, ToastSeverity
from tasklite.services.navigation import PROJECTS
from tasklite.services.notifications import NotificationChannel

if TYPE_CHECKING:
    from .app import TaskLiteApp

TOAST_ICONS = {
    ToastSeverity.SUCCESS: "✓",
    ToastSeverity.WARNING: "!",
    ToastSeverity.ERROR: "✗",
}


class HeaderBar(Horizontal):
    """Brand link, logout and theme toggle."""

    app: TaskLiteApp

    def compose(self) -> ComposeResult:
        yield Button("TaskLite", id="brand", classes="link")
        yield Static(classes="spacer")
        yield Button("Logout", id="logout")
        yield Button("", id="theme-toggle")

    def on_mount(self) -> None:
        self._unsubscribe = self.app.header_vm.subscribe(self.refresh_state)
        self.refresh_state()

    def on_unmount(self) -> None:
        self._unsubscribe()

    def refresh_state(self) -> None:
        vm = self.app.header_vm
        self.display = vm.visible
        self.query_one("#logout", Button).display = vm.can_logout
        label = "Light mode" if vm.theme == "dark" else "Dark mode"
        self.query_one("#theme-toggle", Button).label = label

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        vm = self.app.header_vm
        if event.button.id == "brand":
            vm.ctx.router.navigate(PROJECTS)
        elif event.button.id == "logout":
            vm.logout()
        elif event.button.id == "theme-toggle":
            vm.toggle_theme()


class ToastView(Static):
    """One toast; clicking it dismisses it early."""

    def __init__(self, toast: Toast, channel: NotificationChannel):
        icon = TOAST_ICONS.get(toast.severity, "")
        super().__init__(f"{icon} {toast.message}", classes=f"toast {toast.severity.value}")
        self.toast = toast
        self.channel = channel

    def on_click(self) -> None:
        self.channel.dismiss(self.toast.id)


class ToastRack(Vertical):
    """Renders the notification channel's live toasts, newest last."""

    def __init__(self, channel: NotificationChannel):
        super().__init__(id="toast-rack")
        self.channel = channel

    async def on_mount(self) -> None:
        self._unsubscribe = self.channel.subscribe(self._on_toasts)
        await self.show_toasts(self.channel.toasts)

    def on_unmount(self) -> None:
        self._unsubscribe()

    def _on_toasts(self, toasts: list[Toast]) -> None:
        # Dismiss timers fire outside the message loop.
        self.call_later(self.show_toasts, toasts)

    async def show_toasts(self, toasts: list[Toast]) -> None:
        await self.remove_children()
        if toasts:
            await self.mount_all(ToastView(t, self.channel) for t in toasts)
