"""Authentication commands."""

import typer
from rich.prompt import Prompt

from tasklite.utils.exit_codes import ERROR_AUTH_FAILURE, ERROR_INVALID_ARGS
from tasklite.utils.typer_helpers import SuggestingGroup
from tasklite.utils.ui.console import get_console
from tasklite.utils.ui.formatters import format_info, format_success
from tasklite.viewmodels import HeaderViewModel, LoginViewModel, RegisterViewModel

from .decorators import AppError, command_wrapper
from .utils import app_session

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")
console = get_console()


@app.command()
@command_wrapper(auth_required=False)
async def login(
    email: str | None = typer.Option(None, "--email", help="Email address"),
    password: str | None = typer.Option(None, "--password", help="Password"),
) -> None:
    """Sign in and store the session token."""
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)
    if not email or not password:
        raise AppError("Email and password are required", ERROR_INVALID_ARGS)

    async with app_session(expect_session=False) as ctx:
        vm = LoginViewModel(ctx)
        vm.email = email
        vm.password = password
        problem = vm.validate()
        if problem:
            raise AppError(problem, ERROR_INVALID_ARGS)
        if not await vm.submit():
            raise AppError(vm.error or "Login failed.", ERROR_AUTH_FAILURE)

        user = ctx.session.get_user()
        format_success(f"Logged in as {user.email if user else email}")


@app.command()
@command_wrapper(auth_required=False)
async def register(
    name: str | None = typer.Option(None, "--name", help="Display name"),
    email: str | None = typer.Option(None, "--email", help="Email address"),
    password: str | None = typer.Option(None, "--password", help="Password"),
) -> None:
    """Create an account and sign in."""
    if not name:
        name = Prompt.ask("Name")
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)
        confirm_password = Prompt.ask("Confirm password", password=True)
        if password != confirm_password:
            raise AppError("Passwords do not match", ERROR_INVALID_ARGS)
    if not name or not email or not password:
        raise AppError("Name, email and password are required", ERROR_INVALID_ARGS)

    async with app_session(expect_session=False) as ctx:
        vm = RegisterViewModel(ctx)
        vm.name = name
        vm.email = email
        vm.password = password
        problem = vm.validate()
        if problem:
            raise AppError(problem, ERROR_INVALID_ARGS)
        if not await vm.submit():
            raise AppError(vm.error or "Registration failed.", ERROR_AUTH_FAILURE)

        format_success(f"Account created for {email}")


@app.command()
@command_wrapper(auth_required=False)
async def logout() -> None:
    """Forget the stored session."""
    async with app_session(expect_session=False) as ctx:
        HeaderViewModel(ctx).logout()
    format_success("Logged out")


@app.command()
@command_wrapper
async def whoami() -> None:
    """Show the signed-in user."""
    async with app_session(expect_session=False) as ctx:
        user = ctx.session.get_user()
        if user is None:
            format_info("Signed in (no user profile stored)")
            return
        console.print(f"[bold]{user.name}[/bold] <{user.email}>  [dim]{user.id}[/dim]")
