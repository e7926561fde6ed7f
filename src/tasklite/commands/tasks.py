"""Task board commands."""

import typer

from tasklite.models import Priority, TaskStatus
from tasklite.services.app_context import AppContext
from tasklite.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NETWORK, ERROR_NOT_FOUND
from tasklite.utils.typer_helpers import SuggestingGroup
from tasklite.utils.ui.console import get_console
from tasklite.utils.ui.formatters import format_board, format_info, format_output
from tasklite.viewmodels import TaskBoardViewModel

from .decorators import AppError, command_wrapper
from .utils import app_session, check_session

app = typer.Typer(cls=SuggestingGroup, help="Task board commands")
console = get_console()


async def _load_board(ctx: AppContext, project_id: str) -> TaskBoardViewModel:
    vm = TaskBoardViewModel(ctx, project_id)
    await vm.load()
    check_session(ctx)
    if vm.error:
        raise AppError(vm.error, ERROR_NETWORK)
    return vm


async def _submit(ctx: AppContext, vm: TaskBoardViewModel, failure: str) -> None:
    closed = await vm.submit_draft()
    check_session(ctx)
    if vm.validation_error:
        raise AppError(vm.validation_error, ERROR_INVALID_ARGS)
    if not closed:
        raise AppError(failure, ERROR_NETWORK)


@app.command("board")
@command_wrapper
async def show_board(
    project_id: str = typer.Argument(..., help="Project ID"),
    output: str = typer.Option("table", "--output", "-o", help="table, json or yaml"),
) -> None:
    """Show a project's board."""
    async with app_session() as ctx:
        vm = await _load_board(ctx, project_id)
        columns = vm.columns

    if output == "table":
        console.print(f"[bold]Tasks Board[/bold] [dim]{project_id}[/dim]")
        format_board(columns)
    else:
        format_output(
            {status.value: [t.to_wire() for t in tasks] for status, tasks in columns.items()},
            output,
        )


@app.command("create")
@command_wrapper
async def create_task(
    project_id: str = typer.Argument(..., help="Project ID"),
    name: str = typer.Argument(..., help="Task name"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
    tags: str = typer.Option("", "--tags", help="Comma-separated tags"),
    status: TaskStatus = typer.Option(TaskStatus.TODO, "--status", help="Column"),
    priority: Priority = typer.Option(Priority.MEDIUM, "--priority", help="Priority"),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
) -> None:
    """Create a task on a project's board."""
    async with app_session() as ctx:
        vm = TaskBoardViewModel(ctx, project_id)
        vm.open_create(status)
        vm.draft.name = name
        vm.draft.description = description
        vm.draft.tags_csv = tags
        vm.draft.priority = priority
        vm.draft.due = due
        await _submit(ctx, vm, "Failed to create task")
        format_info(f"Task id: {vm.tasks[0].id}")


@app.command("edit")
@command_wrapper
async def edit_task(
    project_id: str = typer.Argument(..., help="Project ID"),
    task_id: str = typer.Argument(..., help="Task ID"),
    name: str | None = typer.Option(None, "--name", help="Task name"),
    description: str | None = typer.Option(None, "--description", "-d"),
    tags: str | None = typer.Option(None, "--tags", help="Comma-separated tags"),
    status: TaskStatus | None = typer.Option(None, "--status", help="Column"),
    priority: Priority | None = typer.Option(None, "--priority", help="Priority"),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD), '' clears"),
) -> None:
    """Edit a task; only the given fields change."""
    async with app_session() as ctx:
        vm = await _load_board(ctx, project_id)
        task = vm.get(task_id)
        if task is None:
            raise AppError(f"Task not found: {task_id}", ERROR_NOT_FOUND)

        vm.open_edit(task)
        updates = {
            "name": name,
            "description": description,
            "tags_csv": tags,
            "status": status,
            "priority": priority,
        }
        for field, value in updates.items():
            if value is not None:
                setattr(vm.draft, field, value)
        if due is not None:
            vm.draft.due = due or None
        await _submit(ctx, vm, "Failed to update task")


@app.command("move")
@command_wrapper
async def move_task(
    project_id: str = typer.Argument(..., help="Project ID"),
    task_id: str = typer.Argument(..., help="Task ID"),
    status: TaskStatus = typer.Argument(..., help="Destination column"),
) -> None:
    """Move a task to another column."""
    async with app_session() as ctx:
        vm = await _load_board(ctx, project_id)
        task = vm.get(task_id)
        if task is None:
            raise AppError(f"Task not found: {task_id}", ERROR_NOT_FOUND)
        if task.status is status:
            format_info(f"Task is already in {status.label}")
            return

        moved = await vm.move_task(task_id, status)
        check_session(ctx)
        if not moved:
            raise AppError("Failed to update task; change reverted", ERROR_NETWORK)


@app.command("delete")
@command_wrapper
async def delete_task(
    project_id: str = typer.Argument(..., help="Project ID"),
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task after confirmation."""
    declined = False

    def confirm(message: str) -> bool:
        nonlocal declined
        declined = not (yes or typer.confirm(message))
        return not declined

    async with app_session() as ctx:
        vm = await _load_board(ctx, project_id)
        task = vm.get(task_id)
        if task is None:
            raise AppError(f"Task not found: {task_id}", ERROR_NOT_FOUND)

        vm.open_edit(task)
        deleted = await vm.delete_current(confirm)
        check_session(ctx)
        if declined:
            format_info("Cancelled")
            return
        if not deleted:
            raise AppError("Failed to delete task", ERROR_NETWORK)
