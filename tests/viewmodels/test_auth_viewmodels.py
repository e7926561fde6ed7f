"""Tests for the login, registration and header view-models."""

import pytest

from conftest import ADA, TOKEN
from tasklite.services.navigation import LOGIN, PROJECTS, REGISTER
from tasklite.viewmodels import HeaderViewModel, LoginViewModel, RegisterViewModel


class TestLogin:
    @pytest.mark.asyncio
    async def test_success_stores_session_and_navigates(self, anon_ctx):
        anon_ctx.router.navigate(LOGIN)
        vm = LoginViewModel(anon_ctx)
        vm.email, vm.password = ADA.email, "secret"

        assert await vm.submit()

        assert anon_ctx.session.get_token() == TOKEN
        assert anon_ctx.session.get_user() == ADA
        assert anon_ctx.router.current_path == PROJECTS
        assert vm.error is None
        assert not vm.loading

    @pytest.mark.asyncio
    async def test_failure_is_generic(self, anon_ctx):
        anon_ctx.router.navigate(LOGIN)
        vm = LoginViewModel(anon_ctx)
        vm.email, vm.password = ADA.email, "wrong-password"

        assert not await vm.submit()

        assert vm.error == "Login failed."
        assert not anon_ctx.session.is_authenticated
        assert anon_ctx.router.current_path == LOGIN

    @pytest.mark.asyncio
    async def test_network_error(self, anon_ctx, backend):
        backend.offline = True
        vm = LoginViewModel(anon_ctx)
        vm.email, vm.password = ADA.email, "secret"

        assert not await vm.submit()
        assert vm.error == "Login failed."

    @pytest.mark.asyncio
    async def test_loading_flag_during_request(self, anon_ctx):
        vm = LoginViewModel(anon_ctx)
        vm.email, vm.password = ADA.email, "secret"
        seen = []
        vm.subscribe(lambda: seen.append(vm.loading))

        await vm.submit()

        assert seen == [True, False]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email, password, message",
        [
            ("", "", "Email is required"),
            ("   ", "secret", "Email is required"),
            ("not-an-email", "secret", "Enter a valid email address"),
            (ADA.email, "", "Password is required"),
            (ADA.email, "12345", "Password must be at least 6 characters"),
        ],
    )
    async def test_invalid_form_sends_nothing(self, anon_ctx, backend, email, password, message):
        anon_ctx.router.navigate(LOGIN)
        vm = LoginViewModel(anon_ctx)
        vm.email, vm.password = email, password

        assert not await vm.submit()

        assert vm.error == message
        assert backend.calls("POST") == []
        assert anon_ctx.router.current_path == LOGIN
        assert not vm.loading


class TestRegister:
    @pytest.mark.asyncio
    async def test_success_signs_in(self, anon_ctx, backend):
        vm = RegisterViewModel(anon_ctx)
        vm.name, vm.email, vm.password = "Grace", "grace@tasklite.dev", "hopper1"

        assert await vm.submit()

        assert anon_ctx.session.get_user().name == "Grace"
        assert anon_ctx.router.current_path == PROJECTS
        assert "grace@tasklite.dev" in backend.users

    @pytest.mark.asyncio
    async def test_duplicate_email(self, anon_ctx):
        anon_ctx.router.navigate(REGISTER)
        vm = RegisterViewModel(anon_ctx)
        vm.name, vm.email, vm.password = "Ada", ADA.email, "hopper1"

        assert not await vm.submit()

        assert vm.error == "Registration failed."
        assert anon_ctx.router.current_path == REGISTER

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name, password, message",
        [
            ("", "hopper1", "Name is required"),
            (" A ", "hopper1", "Name must be at least 2 characters"),
            ("Grace", "1", "Password must be at least 6 characters"),
        ],
    )
    async def test_invalid_form_sends_nothing(self, anon_ctx, backend, name, password, message):
        vm = RegisterViewModel(anon_ctx)
        vm.name, vm.email, vm.password = name, "grace@tasklite.dev", password

        assert not await vm.submit()

        assert vm.error == message
        assert backend.calls("POST", "/auth/register") == []
        assert "grace@tasklite.dev" not in backend.users


class TestHeader:
    @pytest.mark.asyncio
    async def test_visibility_follows_route(self, ctx):
        header = HeaderViewModel(ctx)
        assert header.visible

        ctx.router.navigate(LOGIN)
        assert not header.visible
        ctx.router.navigate(REGISTER)
        assert not header.visible

    @pytest.mark.asyncio
    async def test_logout(self, ctx):
        header = HeaderViewModel(ctx)
        assert header.can_logout

        header.logout()

        assert not ctx.session.is_authenticated
        assert ctx.router.current_path == LOGIN
        assert not header.can_logout

    @pytest.mark.asyncio
    async def test_theme_toggle_persists(self, ctx, make_ctx):
        header = HeaderViewModel(ctx)
        assert header.theme == "dark"

        assert header.toggle_theme() == "light"
        assert HeaderViewModel(make_ctx()).theme == "light"

        header.set_theme("dark")
        assert ctx.preferences.get_theme() == "dark"

    @pytest.mark.asyncio
    async def test_theme_survives_logout(self, ctx):
        header = HeaderViewModel(ctx)
        header.set_theme("light")
        header.logout()

        assert ctx.preferences.get_theme() == "light"
