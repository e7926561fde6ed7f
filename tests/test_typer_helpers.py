"""Tests for the suggesting Typer group."""

import typer
from typer.testing import CliRunner

import tasklite.utils.typer_helpers as typer_helpers
from tasklite.utils.exit_codes import ERROR_INVALID_ARGS
from tasklite.utils.typer_helpers import SuggestingGroup

runner = CliRunner()


def _app() -> typer.Typer:
    app = typer.Typer(cls=SuggestingGroup)

    @app.command()
    def projects():
        pass

    @app.command()
    def tasks():
        pass

    return app


def test_module_uses_typer_only():
    assert not hasattr(typer_helpers, "click")


def test_close_match_is_suggested():
    result = runner.invoke(_app(), ["projcts"])

    assert result.exit_code == ERROR_INVALID_ARGS
    assert "Did you mean this?" in result.output
    assert "projects" in result.output


def test_unrelated_name_keeps_usage_error():
    result = runner.invoke(_app(), ["zzzz"])

    assert result.exit_code == 2
    assert "Did you mean" not in result.output
