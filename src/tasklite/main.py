"""Main entry point for TaskLite CLI."""

import typer

from tasklite import __version__
from tasklite.commands import auth, config, projects, tasks
from tasklite.commands.decorators import command_wrapper
from tasklite.services.config_service import get_config_service
from tasklite.utils.typer_helpers import SuggestingGroup
from tasklite.utils.ui.console import get_console

app = typer.Typer(
    name="tasklite",
    cls=SuggestingGroup,
    help="TaskLite: projects and Kanban task boards from the terminal",
    no_args_is_help=True,
)

console = get_console()


# Add subcommands
app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(tasks.app, name="tasks", help="Task board commands")
app.add_typer(config.app, name="config", help="Configuration management")

# Top-level shortcuts
app.command("login")(auth.login)
app.command("register")(auth.register)
app.command("logout")(auth.logout)
app.command("whoami")(auth.whoami)
app.command("theme")(config.theme)


@app.command()
def version() -> None:
    """Show version information and the configured backend."""
    console.print(f"[bold]TaskLite[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"API: [dim]{get_config_service().config.api.base_url}[/dim]")


@app.command()
@command_wrapper(auth_required=False)
def ui() -> None:
    """Open the interactive board in the terminal."""
    from tasklite.ui.app import run_app

    run_app()


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
