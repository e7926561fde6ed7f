"""Configuration and preference commands."""

import json
from enum import Enum

import typer

from tasklite.services.config_service import get_config_service
from tasklite.utils.exit_codes import ERROR_INVALID_ARGS
from tasklite.utils.typer_helpers import SuggestingGroup
from tasklite.utils.ui.console import get_console
from tasklite.utils.ui.formatters import format_output, format_success
from tasklite.viewmodels import HeaderViewModel

from .decorators import AppError, command_wrapper
from .utils import app_session

app = typer.Typer(cls=SuggestingGroup, help="Configuration management")
console = get_console()


class ThemeChoice(str, Enum):
    light = "light"
    dark = "dark"
    toggle = "toggle"


def _parse_value(raw: str):
    """Accept JSON scalars (numbers, true/false/null); anything else is text."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


@app.command("show")
@command_wrapper(auth_required=False)
def show_config(
    output: str = typer.Option("json", "--output", "-o", help="json or yaml"),
) -> None:
    """Show the current configuration."""
    config = get_config_service().config
    data = config.model_dump()
    data["api"]["base_url"] = config.api.base_url
    format_output(data, output)


@app.command("get")
@command_wrapper(auth_required=False)
def get_value(key: str = typer.Argument(..., help="Dotted key, e.g. api.endpoint")) -> None:
    """Print one configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", ERROR_INVALID_ARGS) from e
    console.print(value if value is not None else "")


@app.command("set")
@command_wrapper(auth_required=False)
def set_value(
    key: str = typer.Argument(..., help="Dotted key, e.g. api.endpoint"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change one configuration value."""
    try:
        get_config_service().set(key, _parse_value(value))
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", ERROR_INVALID_ARGS) from e
    except ValueError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"{key} updated")


@app.command("reset")
@command_wrapper(auth_required=False)
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Restore the default configuration."""
    if not yes and not typer.confirm("Reset configuration to defaults?"):
        raise typer.Exit(0)
    get_config_service().reset_config()
    format_success("Configuration reset")


@command_wrapper(auth_required=False)
async def theme(
    choice: ThemeChoice | None = typer.Argument(None, help="light, dark or toggle"),
) -> None:
    """Show or change the colour theme."""
    async with app_session(expect_session=False) as ctx:
        header = HeaderViewModel(ctx)
        if choice is None:
            console.print(header.theme)
            return
        if choice is ThemeChoice.toggle:
            header.toggle_theme()
        else:
            header.set_theme(choice.value)
        format_success(f"Theme set to {header.theme}")
