"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.columns import Columns
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tasklite.models import Priority, Project, Task, TaskStatus, Toast, ToastSeverity
from tasklite.utils.dates import format_date

from .console import get_console

console = get_console()

PRIORITY_STYLES = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "dim",
}


def format_output(data: Any, output_format: str = "table") -> None:
    """Print plain data as json or yaml; tables are rendered by the callers."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        raise ValueError(f"Unsupported output format: {output_format}")


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


_TOAST_PRINTERS = {
    ToastSeverity.SUCCESS: format_success,
    ToastSeverity.WARNING: format_warning,
    ToastSeverity.ERROR: format_error,
}


def format_toast(toast: Toast) -> None:
    """Print a toast with the formatter matching its severity."""
    _TOAST_PRINTERS[toast.severity](toast.message)


def format_projects_table(projects: list[Project]) -> None:
    """Render projects as a table."""
    if not projects:
        console.print("[dim]No projects found. Try a different search.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Created")
    table.add_column("Updated")
    for project in projects:
        table.add_row(
            project.id,
            project.name,
            project.description or "",
            format_date(project.created_at),
            format_date(project.updated_at),
        )
    console.print(table)


def _task_card(task: Task) -> Panel:
    body = Text()
    body.append(task.name, style="bold")
    body.append(f"  {task.priority.value}", style=PRIORITY_STYLES[task.priority])
    if task.description:
        body.append(f"\n{task.description}")
    if task.tags:
        body.append("\n" + " ".join(f"#{tag}" for tag in task.tags), style="cyan")
    if task.due:
        body.append(f"\ndue {format_date(task.due)}", style="magenta")
    return Panel(body, subtitle=task.id, subtitle_align="right", expand=True)


def format_board(columns: dict[TaskStatus, list[Task]]) -> None:
    """Render the three board columns side by side."""
    panels = []
    for status, tasks in columns.items():
        cards: list[Any] = [_task_card(t) for t in tasks] or [Text("No tasks", style="dim")]
        column = Table.grid(expand=True)
        for card in cards:
            column.add_row(card)
        panels.append(
            Panel(column, title=f"{status.label} ({len(tasks)})", expand=True)
        )
    console.print(Columns(panels, equal=True, expand=True))
