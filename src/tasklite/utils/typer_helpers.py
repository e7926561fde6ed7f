"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from tasklite.utils.exit_codes import ERROR_INVALID_ARGS
from tasklite.utils.ui.console import get_console
from tasklite.utils.ui.formatters import format_error


class SuggestingGroup(TyperGroup):
    """Typer group that answers an unknown command with close matches."""

    max_suggestions = 3
    cutoff = 0.6

    def suggest(self, attempted: str) -> list[str]:
        visible = [name for name, cmd in self.commands.items() if not cmd.hidden]
        return get_close_matches(
            attempted, visible, n=self.max_suggestions, cutoff=self.cutoff
        )

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            suggestions = self.suggest(args[0]) if args else []
            if not suggestions:
                raise

            console = get_console()
            format_error(f'unknown command "{args[0]}" for "{ctx.info_name}"')
            heading = "Did you mean this?" if len(suggestions) == 1 else "Did you mean one of these?"
            console.print(f"\n[yellow]{heading}[/yellow]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
