"""Project management commands."""

from enum import Enum

import typer

from tasklite.utils.exit_codes import ERROR_NETWORK
from tasklite.utils.typer_helpers import SuggestingGroup
from tasklite.utils.ui.formatters import (
    format_info,
    format_output,
    format_projects_table,
)
from tasklite.viewmodels import ProjectDraft, ProjectListViewModel

from .decorators import AppError, command_wrapper
from .utils import app_session, check_session

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


class SortOption(str, Enum):
    name = "name"
    updated = "updated"
    created = "created"


class DirOption(str, Enum):
    asc = "asc"
    desc = "desc"


_SORT_KEYS = {
    SortOption.name: "name",
    SortOption.updated: "updated_at",
    SortOption.created: "created_at",
}


@app.command("list")
@command_wrapper
async def list_projects(
    query: str = typer.Option("", "--query", "-q", help="Filter by name or description"),
    sort: SortOption | None = typer.Option(None, "--sort", help="Sort key"),
    direction: DirOption | None = typer.Option(None, "--dir", help="Sort direction"),
    output: str = typer.Option("table", "--output", "-o", help="table, json or yaml"),
) -> None:
    """List projects."""
    async with app_session() as ctx:
        vm = ProjectListViewModel(ctx)
        loaded = await vm.load()
        check_session(ctx)
        if not loaded:
            raise AppError("Failed to load projects", ERROR_NETWORK)

        vm.query = query
        vm.set_sort(
            _SORT_KEYS[sort] if sort else None,
            direction.value if direction else None,
        )
        projects = vm.visible

    if output == "table":
        format_projects_table(projects)
    else:
        format_output([p.to_wire() for p in projects], output)


@app.command("create")
@command_wrapper
async def create_project(
    name: str = typer.Argument("", help="Project name"),
    description: str = typer.Option("", "--description", "-d", help="Description"),
) -> None:
    """Create a new project."""
    async with app_session() as ctx:
        vm = ProjectListViewModel(ctx)
        vm.draft = ProjectDraft(name=name, description=description)
        project = await vm.submit_create()
        check_session(ctx)
        if project is None:
            raise typer.Exit(ERROR_NETWORK)
        format_info(f"Project id: {project.id}")


@app.command("delete")
@command_wrapper
async def delete_project(
    project_id: str = typer.Argument(..., help="Project ID"),
) -> None:
    """Delete a project."""
    async with app_session() as ctx:
        vm = ProjectListViewModel(ctx)
        deleted = await vm.delete(project_id)
        check_session(ctx)
        if not deleted:
            raise typer.Exit(ERROR_NETWORK)
