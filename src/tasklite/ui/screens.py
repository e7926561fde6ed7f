"""Routed screens: login, registration, project list and task board."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual import events, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.errors import NoWidget
from textual.message import Message
from textual.screen import Screen
from textual.widgets import Button, Footer, Input, Select, Static

from tasklite.models import BOARD_COLUMNS, Project, Task, TaskStatus
from tasklite.services.app_context import AppContext
from tasklite.services.navigation import BOARD, LOGIN, REGISTER
from tasklite.utils.dates import format_date
from tasklite.utils.ui.formatters import PRIORITY_STYLES
from tasklite.viewmodels import (
    LoginViewModel,
    ProjectListViewModel,
    RegisterViewModel,
    TaskBoardViewModel,
)

from .dialogs import ProjectDialog, TaskDialog
from .widgets import HeaderBar, ToastRack

if TYPE_CHECKING:
    from .app import TaskLiteApp

SORT_KEYS = [("Updated", "updated_at"), ("Created", "created_at"), ("Name", "name")]
SORT_DIRS = [("Descending", "desc"), ("Ascending", "asc")]


class CredentialsScreen(Screen):
    """Shared layout of the login and registration forms."""

    app: TaskLiteApp

    heading = ""
    subheading = ""
    submit_label = ""
    switch_label = ""
    switch_route = ""

    def make_viewmodel(self, ctx: AppContext):
        """Build the form's view-model; every subclass overrides this."""
        raise NotImplementedError

    def __init__(self, ctx: AppContext):
        super().__init__()
        self.vm = self.make_viewmodel(ctx)

    def compose_fields(self) -> ComposeResult:
        yield Input(placeholder="you@example.com", id="email")
        yield Input(placeholder="Password", password=True, id="password")

    def compose(self) -> ComposeResult:
        with Vertical(id="auth-form"):
            yield Static(f"[b]{self.heading}[/b]", classes="auth-title")
            yield Static(self.subheading, classes="subtle")
            yield from self.compose_fields()
            yield Static("", id="auth-error", classes="error")
            yield Button(self.submit_label, variant="primary", id="submit")
            yield Button(self.switch_label, id="switch", classes="link")
        yield ToastRack(self.vm.ctx.notifications)
        yield Footer()

    def on_mount(self) -> None:
        self.vm.subscribe(self.refresh_state)
        self.query(Input).first().focus()

    def on_unmount(self) -> None:
        self.vm.dispose()

    def refresh_state(self) -> None:
        self.query_one("#auth-error", Static).update(self.vm.error or "")
        self.query_one("#submit", Button).disabled = self.vm.loading

    def on_input_changed(self, event: Input.Changed) -> None:
        setattr(self.vm, event.input.id, event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit":
            self.submit()
        elif event.button.id == "switch":
            self.vm.ctx.router.navigate(self.switch_route)

    @work(exclusive=True)
    async def submit(self) -> None:
        await self.vm.submit()


class LoginScreen(CredentialsScreen):
    heading = "Welcome!"
    subheading = "Please sign in to continue"
    submit_label = "Sign in"
    switch_label = "Create an account"
    switch_route = REGISTER

    def make_viewmodel(self, ctx: AppContext) -> LoginViewModel:
        return LoginViewModel(ctx)


class RegisterScreen(CredentialsScreen):
    heading = "Create account"
    subheading = "Start organising your projects"
    submit_label = "Sign up"
    switch_label = "Already have an account? Sign in"
    switch_route = LOGIN

    def make_viewmodel(self, ctx: AppContext) -> RegisterViewModel:
        return RegisterViewModel(ctx)

    def compose_fields(self) -> ComposeResult:
        yield Input(placeholder="Your name", id="name")
        yield from super().compose_fields()


class ProjectCard(Vertical):
    """One row of the project list."""

    def __init__(self, project: Project):
        super().__init__(classes="project-card")
        self.model = project

    def compose(self) -> ComposeResult:
        project = self.model
        yield Static(f"[b]{project.name}[/b]")
        if project.description:
            yield Static(project.description, classes="subtle")
        yield Static(
            f"Created {format_date(project.created_at)} · "
            f"Updated {format_date(project.updated_at)}",
            classes="subtle",
        )
        with Horizontal(classes="card-actions"):
            yield Button("Open", classes="open")
            yield Button("Delete", variant="error", classes="delete")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.has_class("open"):
            self.screen.vm.ctx.router.navigate(BOARD, id=self.model.id)
        elif event.button.has_class("delete"):
            self.screen.delete_project(self.model.id)


class ProjectsScreen(Screen):
    """Searchable, sortable project list."""

    app: TaskLiteApp

    def __init__(self, ctx: AppContext):
        super().__init__()
        self.vm = ProjectListViewModel(ctx)

    def compose(self) -> ComposeResult:
        yield HeaderBar(id="header")
        with Horizontal(id="projects-toolbar"):
            yield Static("[b]Projects[/b]", classes="page-title")
            yield Input(placeholder="Search projects...", id="search")
            yield Select(SORT_KEYS, value=self.vm.sort_key, allow_blank=False, id="sort-key")
            yield Select(SORT_DIRS, value=self.vm.sort_dir, allow_blank=False, id="sort-dir")
            yield Button("+ New Project", variant="primary", id="new-project")
        yield VerticalScroll(id="project-list")
        yield ToastRack(self.vm.ctx.notifications)
        yield Footer()

    def on_mount(self) -> None:
        self.vm.subscribe(lambda: self.call_later(self.render_projects))
        self.call_later(self.render_projects)
        self.load()

    def on_unmount(self) -> None:
        self.vm.dispose()

    @work(exclusive=True, group="load")
    async def load(self) -> None:
        await self.vm.load()

    @work(group="delete")
    async def delete_project(self, project_id: str) -> None:
        await self.vm.delete(project_id)

    async def render_projects(self) -> None:
        container = self.query_one("#project-list", VerticalScroll)
        await container.remove_children()
        if self.vm.loading:
            await container.mount(Static("Loading projects...", classes="subtle"))
            return
        visible = self.vm.visible
        if not visible:
            await container.mount(
                Static("No projects found. Try a different search.", classes="subtle")
            )
            return
        await container.mount_all(ProjectCard(p) for p in visible)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search":
            self.vm.set_query(event.value)

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        if event.select.id == "sort-key":
            self.vm.set_sort(sort_key=event.value)
        elif event.select.id == "sort-dir":
            self.vm.set_sort(sort_dir=event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "new-project":
            self.vm.open_create()
            self.app.push_screen(ProjectDialog(self.vm))


class TaskCard(Static, can_focus=True):
    """Draggable card. Press-and-release on the same column opens it."""

    BINDINGS = [
        ("enter", "edit", "Open"),
        ("left_square_bracket", "shift(-1)", "Move left"),
        ("right_square_bracket", "shift(1)", "Move right"),
    ]

    class Dropped(Message):
        def __init__(self, task_id: str, status: TaskStatus):
            super().__init__()
            self.task_id = task_id
            self.status = status

    class EditRequested(Message):
        def __init__(self, task: Task):
            super().__init__()
            self.task = task

    def __init__(self, task: Task):
        super().__init__(
            self._content(task),
            classes=f"task-card priority-{task.priority.value}",
        )
        self.model = task
        self._dragging = False

    @staticmethod
    def _content(task: Task) -> Text:
        text = Text(task.name, style="bold")
        text.append(f"  {task.priority.value}", style=PRIORITY_STYLES[task.priority])
        if task.description:
            text.append(f"\n{task.description}", style="dim")
        if task.tags:
            text.append("\n" + " ".join(f"#{tag}" for tag in task.tags), style="cyan")
        if task.due:
            text.append(f"\nDue {format_date(task.due)}", style="dim")
        return text

    def on_mouse_down(self) -> None:
        self._dragging = True
        self.capture_mouse()
        self.add_class("dragging")

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if not self._dragging:
            return
        self._dragging = False
        self.release_mouse()
        self.remove_class("dragging")

        column = self.screen.column_at(event.screen_x, event.screen_y)
        if column is None:
            return
        if column.status is self.model.status:
            self.action_edit()
        else:
            self.post_message(self.Dropped(self.model.id, column.status))

    def action_edit(self) -> None:
        self.post_message(self.EditRequested(self.model))

    def action_shift(self, offset: int) -> None:
        index = BOARD_COLUMNS.index(self.model.status) + offset
        if 0 <= index < len(BOARD_COLUMNS):
            self.post_message(self.Dropped(self.model.id, BOARD_COLUMNS[index]))


class Column(Vertical):
    """One status column of the board."""

    def __init__(self, status: TaskStatus):
        super().__init__(classes="column")
        self.status = status

    def compose(self) -> ComposeResult:
        with Horizontal(classes="column-header"):
            yield Static(f"[b]{self.status.label}[/b]", classes="column-title")
            yield Button("+ Task", classes="add-task")
        yield VerticalScroll(classes="cards")

    async def show_tasks(self, tasks: list[Task]) -> None:
        cards = self.query_one(".cards", VerticalScroll)
        await cards.remove_children()
        if not tasks:
            await cards.mount(Static("No tasks", classes="subtle"))
            return
        await cards.mount_all(TaskCard(t) for t in tasks)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.has_class("add-task"):
            event.stop()
            self.screen.open_create(self.status)


class BoardScreen(Screen):
    """Three-column board for one project."""

    app: TaskLiteApp

    BINDINGS = [("r", "reload", "Reload")]

    def __init__(self, ctx: AppContext, project_id: str):
        super().__init__()
        self.vm = TaskBoardViewModel(ctx, project_id)
        self._focus_task_id: str | None = None

    def compose(self) -> ComposeResult:
        yield HeaderBar(id="header")
        with Horizontal(id="board-title"):
            yield Static("[b]Tasks Board[/b]", classes="page-title")
            yield Static(f"Project {self.vm.project_id}", classes="subtle")
        yield Static("", id="board-status")
        with Horizontal(id="board"):
            for status in BOARD_COLUMNS:
                yield Column(status)
        yield ToastRack(self.vm.ctx.notifications)
        yield Footer()

    def on_mount(self) -> None:
        self.vm.subscribe(lambda: self.call_later(self.render_board))
        self.call_later(self.render_board)
        self.action_reload()

    def on_unmount(self) -> None:
        self.vm.dispose()

    @work(exclusive=True, group="load")
    async def action_reload(self) -> None:
        await self.vm.load()

    async def render_board(self) -> None:
        status = self.query_one("#board-status", Static)
        board = self.query_one("#board", Horizontal)
        if self.vm.loading:
            status.update("Loading tasks...")
            board.display = False
            return
        if self.vm.error:
            status.update(Text(self.vm.error, style="bold red"))
            board.display = False
            return
        status.update("")
        board.display = True

        columns = self.vm.columns
        for column in self.query(Column):
            await column.show_tasks(columns[column.status])
        self._restore_focus()

    def _restore_focus(self) -> None:
        if self._focus_task_id is None:
            return
        for card in self.query(TaskCard):
            if card.model.id == self._focus_task_id:
                card.focus()
                return

    def column_at(self, x: int, y: int) -> Column | None:
        try:
            widget, _ = self.get_widget_at(x, y)
        except NoWidget:
            return None
        for node in widget.ancestors_with_self:
            if isinstance(node, Column):
                return node
        return None

    def open_create(self, status: TaskStatus) -> None:
        self.vm.open_create(status)
        self.app.push_screen(TaskDialog(self.vm))

    def on_task_card_edit_requested(self, message: TaskCard.EditRequested) -> None:
        self.vm.open_edit(message.task)
        self.app.push_screen(TaskDialog(self.vm))

    def on_task_card_dropped(self, message: TaskCard.Dropped) -> None:
        self._focus_task_id = message.task_id
        self.move_task(message.task_id, message.status)

    @work(group="move")
    async def move_task(self, task_id: str, status: TaskStatus) -> None:
        await self.vm.move_task(task_id, status)
