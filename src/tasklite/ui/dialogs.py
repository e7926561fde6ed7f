"""Modal dialogs: a shared base plus the project, task and confirm forms."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from textual import events, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.errors import NoWidget
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import Button, Input, Select, Static

from tasklite.models import BOARD_COLUMNS, Priority
from tasklite.viewmodels import ProjectListViewModel, TaskBoardViewModel


class Dialog(ModalScreen):
    """Base modal.

    Escape or a click outside the body closes it. The first input gets focus
    shortly after opening. Form state belongs to the caller and survives a
    close.
    """

    BINDINGS = [("escape", "close", "Close")]

    FOCUS_DELAY = 0.05
    close_result: Any = None

    def __init__(self, title: str, on_close: Callable[[], None] | None = None):
        super().__init__()
        self.dialog_title = title
        self.on_close = on_close
        self._focus_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        with Vertical(classes="dialog"):
            yield Static(f"[b]{self.dialog_title}[/b]", classes="dialog-title")
            with Vertical(classes="dialog-body"):
                yield from self.compose_body()
            with Horizontal(classes="dialog-footer"):
                yield from self.compose_footer()

    def compose_body(self) -> ComposeResult:
        yield from ()

    def compose_footer(self) -> ComposeResult:
        yield Button("Close", classes="dialog-close")

    def on_mount(self) -> None:
        self._focus_timer = self.set_timer(self.FOCUS_DELAY, self._focus_first_field)

    def on_unmount(self) -> None:
        if self._focus_timer is not None:
            self._focus_timer.stop()

    def _focus_first_field(self) -> None:
        fields = self.query(Input)
        if fields:
            fields.first().focus()

    def on_click(self, event: events.Click) -> None:
        try:
            widget, _ = self.get_widget_at(event.screen_x, event.screen_y)
        except NoWidget:
            return
        if widget is self:
            self.action_close()

    def action_close(self) -> None:
        if self.on_close is not None:
            self.on_close()
        self.dismiss(self.close_result)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.has_class("dialog-close"):
            event.stop()
            self.action_close()


class ConfirmDialog(Dialog):
    """Blocking yes/no prompt; dismisses with True or False."""

    close_result = False

    def __init__(self, message: str):
        super().__init__("Confirm")
        self.message = message

    def compose_body(self) -> ComposeResult:
        yield Static(self.message)

    def compose_footer(self) -> ComposeResult:
        yield Button("Cancel", classes="dialog-close")
        yield Button("OK", variant="error", id="confirm-ok")

    def on_mount(self) -> None:
        super().on_mount()
        self.query_one("#confirm-ok", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "confirm-ok":
            event.stop()
            self.dismiss(True)
            return
        super().on_button_pressed(event)


class ProjectDialog(Dialog):
    """New-project form bound to the project list draft."""

    def __init__(self, vm: ProjectListViewModel):
        super().__init__("New Project", on_close=vm.close_dialog)
        self.vm = vm

    def compose_body(self) -> ComposeResult:
        yield Static("Name", classes="label")
        yield Input(self.vm.draft.name, placeholder="Project name", id="name")
        yield Static("Description", classes="label")
        yield Input(
            self.vm.draft.description,
            placeholder="Describe the project (optional)",
            id="description",
        )

    def compose_footer(self) -> ComposeResult:
        yield Button("Cancel", classes="dialog-close")
        yield Button("Create", variant="primary", id="save")

    def on_input_changed(self, event: Input.Changed) -> None:
        setattr(self.vm.draft, event.input.id, event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.save()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            event.stop()
            self.save()
            return
        super().on_button_pressed(event)

    @work(exclusive=True)
    async def save(self) -> None:
        self.query_one("#save", Button).disabled = True
        await self.vm.submit_create()
        if not self.vm.dialog_open:
            self.dismiss()
            return
        self.query_one("#save", Button).disabled = False


class TaskDialog(Dialog):
    """Create/edit form bound to the board's task draft."""

    def __init__(self, vm: TaskBoardViewModel):
        title = "New Task" if vm.mode == "create" else "Task Details"
        super().__init__(title, on_close=vm.close_dialog)
        self.vm = vm

    def compose_body(self) -> ComposeResult:
        draft = self.vm.draft
        yield Static("Name", classes="label")
        yield Input(draft.name, placeholder="Task name", id="name")
        yield Static("Description", classes="label")
        yield Input(
            draft.description, placeholder="Describe the task (optional)", id="description"
        )
        yield Static("Tags", classes="label")
        yield Input(draft.tags_csv, placeholder="Comma-separated tags", id="tags_csv")
        with Horizontal(classes="dialog-row"):
            yield Select(
                [(status.label, status) for status in BOARD_COLUMNS],
                value=draft.status,
                allow_blank=False,
                id="status",
            )
            yield Select(
                [(priority.value.title(), priority) for priority in Priority],
                value=draft.priority,
                allow_blank=False,
                id="priority",
            )
            yield Input(draft.due or "", placeholder="Due (YYYY-MM-DD)", id="due")
        yield Static("", id="validation-error", classes="error")

    def compose_footer(self) -> ComposeResult:
        if self.vm.mode == "edit":
            yield Button("Delete", variant="error", id="delete")
        yield Button("Cancel", classes="dialog-close")
        yield Button("Save", variant="primary", id="save")

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "due":
            self.vm.draft.due = event.value or None
        else:
            setattr(self.vm.draft, event.input.id, event.value)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        setattr(self.vm.draft, event.select.id, event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.save()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            event.stop()
            self.save()
            return
        if event.button.id == "delete":
            event.stop()
            self.delete_task()
            return
        super().on_button_pressed(event)

    @work(exclusive=True, group="task-dialog")
    async def save(self) -> None:
        if await self.vm.submit_draft():
            self.dismiss()
            return
        self.query_one("#validation-error", Static).update(
            self.vm.validation_error or ""
        )

    @work(exclusive=True, group="task-dialog")
    async def delete_task(self) -> None:
        async def confirm(message: str) -> bool:
            return bool(await self.app.push_screen_wait(ConfirmDialog(message)))

        if await self.vm.delete_current(confirm):
            self.dismiss()
