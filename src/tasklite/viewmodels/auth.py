"""Login and registration forms."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import EmailStr, TypeAdapter, ValidationError

from tasklite.api.auth import AuthAPI
from tasklite.api.client import ApiResult
from tasklite.models import User
from tasklite.services.app_context import AppContext
from tasklite.services.navigation import PROJECTS

from .base import ViewModel

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2

_email_adapter = TypeAdapter(EmailStr)


class _CredentialsViewModel(ViewModel, ABC):
    """Shared submit flow: store the session and go to the project list."""

    failure_message = "Request failed."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.api = AuthAPI(ctx.client)
        self.email = ""
        self.password = ""
        self.loading = False
        self.error: str | None = None

    @abstractmethod
    async def _request(self) -> ApiResult:
        """Send the form to the backend."""

    def validate(self) -> str | None:
        """Return the first problem with the form, or None when it can be sent."""
        if not self.email.strip():
            return "Email is required"
        try:
            _email_adapter.validate_python(self.email.strip())
        except ValidationError:
            return "Enter a valid email address"
        if not self.password:
            return "Password is required"
        if len(self.password) < MIN_PASSWORD_LENGTH:
            return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        return None

    async def submit(self) -> bool:
        problem = self.validate()
        if problem is not None:
            self.error = problem
            self._changed()
            return False

        self.error = None
        self.loading = True
        self._changed()
        try:
            result = await self._request()
            if self.disposed:
                return False
            session = _session_from(result)
            if session is None:
                # Never say which credential was wrong.
                self.logger.warning(
                    "%s rejected: %s", self.log_name, result.error or "no token"
                )
                self.error = self.failure_message
                return False

            token, user = session
            self.ctx.session.set_session(token, user)
            self.ctx.router.navigate(PROJECTS)
            return True
        finally:
            self.loading = False
            self._changed()


def _session_from(result: ApiResult) -> tuple[str, User] | None:
    if not result.ok or not isinstance(result.data, dict):
        return None
    token = result.data.get("token")
    if not token:
        return None
    try:
        user = User.model_validate(
            {key: result.data.get(key) for key in ("id", "name", "email")}
        )
    except ValidationError:
        return None
    return str(token), user


class LoginViewModel(_CredentialsViewModel):
    """Email/password sign-in."""

    log_name = "login"
    failure_message = "Login failed."

    async def _request(self) -> ApiResult:
        return await self.api.login(self.email, self.password)


class RegisterViewModel(_CredentialsViewModel):
    """Account creation; signs the new user in on success."""

    log_name = "register"
    failure_message = "Registration failed."

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.name = ""

    async def _request(self) -> ApiResult:
        return await self.api.register(self.name, self.email, self.password)

    def validate(self) -> str | None:
        name = self.name.strip()
        if not name:
            return "Name is required"
        if len(name) < MIN_NAME_LENGTH:
            return f"Name must be at least {MIN_NAME_LENGTH} characters"
        return super().validate()
