"""Shared test fixtures and configuration.

Provides an in-memory TaskLite backend behind ``httpx.MockTransport`` and
application contexts wired to it, so no test touches the network or the
user's real storage.
"""

from __future__ import annotations

import itertools
import json
import os
import tempfile
from unittest.mock import patch

import httpx
import pytest
import pytest_asyncio

# Keep test runs out of the user's log directory.
os.environ.setdefault("TASKLITE_LOG_DIR", tempfile.mkdtemp(prefix="tasklite-test-logs-"))

from tasklite.models import AppConfig, User
from tasklite.services.app_context import build_app_context

TOKEN = "test-token"
NOW = "2024-03-01T10:00:00.000Z"
EARLIER = "2024-02-01T10:00:00.000Z"

ADA = User(id="u1", name="Ada", email="ada@tasklite.dev")


# ---------------------------------------------------------------------------
# Fake backend
# ---------------------------------------------------------------------------


class FakeBackend:
    """Small in-memory stand-in for the TaskLite REST API."""

    def __init__(self):
        self.users: dict[str, dict] = {
            ADA.email: {**ADA.to_wire(), "password": "secret"},
        }
        self.projects: list[dict] = []
        self.tasks: list[dict] = []
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], int] = {}
        self.offline = False
        self._ids = itertools.count(1)

    # -- setup helpers ------------------------------------------------------

    def fail(self, method: str, path: str, status: int = 500) -> None:
        """Answer ``method path`` with ``status`` from now on."""
        self.failures[(method, path)] = status

    def add_project(self, name: str, **fields) -> dict:
        project = {
            "id": f"proj{next(self._ids)}",
            "userId": ADA.id,
            "name": name,
            "description": "",
            "createdAt": NOW,
            "updatedAt": NOW,
            **fields,
        }
        self.projects.append(project)
        return project

    def add_task(self, name: str, project_id: str, **fields) -> dict:
        task = {
            "id": f"task{next(self._ids)}",
            "projectId": project_id,
            "name": name,
            "description": "",
            "tags": [],
            "status": "todo",
            "priority": "medium",
            "createdAt": NOW,
            "updatedAt": NOW,
            **fields,
        }
        self.tasks.append(task)
        return task

    def calls(self, method: str, path: str | None = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == method and (path is None or r.url.path == path)
        ]

    # -- transport ----------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)

        method, path = request.method, request.url.path
        status = self.failures.get((method, path))
        if status is not None:
            return httpx.Response(status, json={"error": "Injected failure"})

        body = json.loads(request.content) if request.content else {}

        if path == "/auth/login":
            return self._login(body)
        if path == "/auth/register":
            return self._register(body)

        if request.headers.get("Authorization") != f"Bearer {TOKEN}":
            return httpx.Response(401, json={"error": "Unauthorized"})

        if path == "/projects" and method == "GET":
            return httpx.Response(200, json={"projects": self.projects})
        if path == "/projects" and method == "POST":
            return httpx.Response(201, json=self.add_project(**body))
        if path.startswith("/projects/") and method == "DELETE":
            project_id = path.rsplit("/", 1)[1]
            self.projects = [p for p in self.projects if p["id"] != project_id]
            return httpx.Response(204)

        if path == "/tasks" and method == "GET":
            return httpx.Response(200, json={"tasks": self.tasks})
        if path == "/tasks" and method == "POST":
            fields = dict(body)
            return httpx.Response(
                201, json=self.add_task(fields.pop("name"), fields.pop("projectId"), **fields)
            )
        if path.startswith("/tasks/"):
            task_id = path.rsplit("/", 1)[1]
            task = next((t for t in self.tasks if t["id"] == task_id), None)
            if task is None:
                return httpx.Response(404, json={"error": "Task not found"})
            if method == "PATCH":
                task.update(body, updatedAt="2024-03-02T10:00:00.000Z")
                return httpx.Response(200, json=task)
            if method == "DELETE":
                self.tasks.remove(task)
                return httpx.Response(200, json={"message": "Task deleted"})

        return httpx.Response(404, json={"error": "Not found"})

    def _login(self, body: dict) -> httpx.Response:
        user = self.users.get(body.get("email", ""))
        if user is None or user["password"] != body.get("password"):
            return httpx.Response(400, json={"error": "Invalid credentials"})
        public = {k: v for k, v in user.items() if k != "password"}
        return httpx.Response(200, json={"token": TOKEN, **public})

    def _register(self, body: dict) -> httpx.Response:
        if body.get("email") in self.users:
            return httpx.Response(409, json={"error": "Email already registered"})
        user = {
            "id": f"u{next(self._ids)}",
            "name": body.get("name"),
            "email": body.get("email"),
            "password": body.get("password"),
        }
        self.users[user["email"]] = user
        public = {k: v for k, v in user.items() if k != "password"}
        return httpx.Response(201, json={"token": TOKEN, **public})


# ---------------------------------------------------------------------------
# Context fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def make_ctx(tmp_path, backend):
    """Factory for app contexts talking to *backend* with storage in *tmp_path*."""

    def factory(*, authenticated: bool = True, config: AppConfig | None = None):
        ctx = build_app_context(
            config or AppConfig(),
            storage_dir=tmp_path / "storage",
            transport=httpx.MockTransport(backend.handler),
        )
        if authenticated:
            ctx.session.set_session(TOKEN, ADA)
        return ctx

    return factory


@pytest_asyncio.fixture()
async def ctx(make_ctx):
    """Signed-in context, closed after the test."""
    context = make_ctx()
    yield context
    await context.aclose()


@pytest_asyncio.fixture()
async def anon_ctx(make_ctx):
    """Context without a stored session."""
    context = make_ctx(authenticated=False)
    yield context
    await context.aclose()


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only and
    routes ``get_config_service()`` to it.
    """
    from tasklite.services.config_service import ConfigService, get_config_service

    tmpdir = str(tmp_path / "config")
    get_config_service.cache_clear()
    with patch("tasklite.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("tasklite.services.config_service.user_data_dir", return_value=tmpdir):
            svc = ConfigService()
            with patch("tasklite.commands.config.get_config_service", return_value=svc):
                with patch("tasklite.main.get_config_service", return_value=svc):
                    yield svc
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Auth bypass
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def bypass_auth():
    """Skip the stored-session check in all tests by default."""
    with patch("tasklite.commands.decorators._require_auth"):
        yield
