"""Unit tests for command decorators and the per-command session helper."""

from unittest.mock import MagicMock, patch

import pytest
import typer

from conftest import ADA, TOKEN
from tasklite.commands.decorators import AppError, _require_auth, command_wrapper
from tasklite.commands.utils import SESSION_EXPIRED, app_session, check_session
from tasklite.models import AppConfig
from tasklite.services.navigation import LOGIN
from tasklite.services.session_store import KeyValueStorage, SessionStore
from tasklite.utils.exit_codes import ERROR_AUTH_FAILURE, ERROR_GENERAL


class TestRequireAuth:
    def _config_svc(self, tmp_path):
        svc = MagicMock()
        svc.storage_dir = tmp_path
        svc.config = AppConfig()
        return svc

    def test_stored_session_passes(self, tmp_path):
        svc = self._config_svc(tmp_path)
        storage = KeyValueStorage.for_origin(tmp_path, svc.config.api.origin)
        SessionStore(storage).set_session(TOKEN, ADA)

        with patch("tasklite.commands.decorators.get_config_service", return_value=svc):
            _require_auth()  # Should not raise

    def test_missing_session_exits(self, tmp_path):
        svc = self._config_svc(tmp_path)

        with patch("tasklite.commands.decorators.get_config_service", return_value=svc):
            with pytest.raises(typer.Exit) as exc_info:
                _require_auth()

        assert exc_info.value.exit_code == ERROR_AUTH_FAILURE


class TestCommandWrapper:
    def test_sync_result(self):
        @command_wrapper(auth_required=False)
        def cmd():
            return 42

        assert cmd() == 42

    def test_async_runs_to_completion(self):
        @command_wrapper(auth_required=False)
        async def cmd(value):
            return value * 2

        assert cmd(21) == 42

    def test_app_error_maps_exit_code(self):
        @command_wrapper(auth_required=False)
        def cmd():
            raise AppError("nope", exit_code=7)

        with pytest.raises(typer.Exit) as exc_info:
            cmd()
        assert exc_info.value.exit_code == 7

    def test_unexpected_error_is_general(self):
        @command_wrapper(auth_required=False)
        async def cmd():
            raise RuntimeError("boom")

        with pytest.raises(typer.Exit) as exc_info:
            cmd()
        assert exc_info.value.exit_code == ERROR_GENERAL

    def test_auth_checked_by_default(self):
        @command_wrapper
        def cmd():
            return "ran"

        with patch("tasklite.commands.decorators._require_auth") as require:
            assert cmd() == "ran"
        require.assert_called_once()


class TestAppSession:
    def test_check_session(self, make_ctx):
        ctx = make_ctx()
        check_session(ctx)

        ctx.router.navigate(LOGIN)
        with pytest.raises(AppError) as exc_info:
            check_session(ctx)
        assert str(exc_info.value) == SESSION_EXPIRED
        assert exc_info.value.exit_code == ERROR_AUTH_FAILURE

    @pytest.mark.asyncio
    async def test_prints_toasts_and_closes(self, make_ctx, capsys):
        ctx = make_ctx()
        with patch("tasklite.commands.utils.get_app_context", return_value=ctx):
            async with app_session() as session_ctx:
                session_ctx.notifications.success("Project created")
                session_ctx.notifications.success("Project created")

        out = capsys.readouterr().out
        assert out.count("Project created") == 2
        assert ctx.client._client is None
