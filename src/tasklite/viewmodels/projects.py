"""Project list: load, filter/sort, create and delete."""

from __future__ import annotations

import random
import string
from collections.abc import Sequence

from pydantic import BaseModel, ValidationError

from tasklite.api.projects import ProjectsAPI
from tasklite.models import Project
from tasklite.models.config_models import SortDir, SortKey
from tasklite.services.app_context import AppContext
from tasklite.utils.dates import utcnow

from .base import ViewModel

DEFAULT_PROJECT_NAME = "Untitled Project"

_SORT_KEYS = {
    "name": lambda p: p.name.casefold(),
    "updated_at": lambda p: p.updated_at,
    "created_at": lambda p: p.created_at,
}


def filter_sort(
    projects: Sequence[Project],
    query: str = "",
    sort_key: SortKey = "updated_at",
    sort_dir: SortDir = "desc",
) -> list[Project]:
    """Filter by case-insensitive substring of name or description, then sort.

    The sort is stable, so equal keys keep their filtered order in either
    direction. ``projects`` is not modified.
    """
    if sort_key not in _SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_key}")
    if sort_dir not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction: {sort_dir}")

    q = query.strip().lower()
    if q:
        base = [
            p
            for p in projects
            if q in p.name.lower() or q in (p.description or "").lower()
        ]
    else:
        base = list(projects)
    return sorted(base, key=_SORT_KEYS[sort_key], reverse=sort_dir == "desc")


def local_project_id() -> str:
    """Id for a project created while the backend was unreachable."""
    return "p" + "".join(random.choices(string.ascii_lowercase + string.digits, k=6))


class ProjectDraft(BaseModel):
    """Form state of the new-project dialog."""

    name: str = ""
    description: str = ""


class ProjectListViewModel(ViewModel):
    """Owns the local project collection."""

    log_name = "projects"

    def __init__(self, ctx: AppContext):
        super().__init__(ctx)
        self.api = ProjectsAPI(ctx.client)
        self.projects: list[Project] = []
        self.query = ""
        self.sort_key: SortKey = ctx.config.ui.default_sort_key
        self.sort_dir: SortDir = ctx.config.ui.default_sort_dir
        self.draft = ProjectDraft()
        self.dialog_open = False
        self.loading = False

    @property
    def visible(self) -> list[Project]:
        """Projects as displayed: filtered and sorted, recomputed each time."""
        return filter_sort(self.projects, self.query, self.sort_key, self.sort_dir)

    def set_query(self, query: str) -> None:
        self.query = query
        self._changed()

    def set_sort(self, sort_key: SortKey | None = None, sort_dir: SortDir | None = None) -> None:
        if sort_key is not None:
            self.sort_key = sort_key
        if sort_dir is not None:
            self.sort_dir = sort_dir
        self._changed()

    def get(self, project_id: str) -> Project | None:
        return next((p for p in self.projects if p.id == project_id), None)

    async def load(self) -> bool:
        """Fetch all projects; on failure the list is left empty."""
        self.loading = True
        result = await self.api.list_projects()
        if self.disposed:
            return False
        self.loading = False

        if result.unauthorized:
            self._expire_session("fetch projects")
            return False
        if not result.ok:
            self.logger.error("failed to load projects: %s", result.error)
            self.projects = []
            self._changed()
            return False

        try:
            raw = (result.data or {}).get("projects") or []
            self.projects = [Project.model_validate(p) for p in raw]
        except (AttributeError, ValidationError) as e:
            self.logger.error("malformed project list: %s", e)
            self.projects = []
            self._changed()
            return False

        self.logger.info("loaded %d projects", len(self.projects))
        self._changed()
        return True

    def open_create(self) -> None:
        self.dialog_open = True
        self._changed()

    def close_dialog(self) -> None:
        """Hide the dialog; the draft is kept."""
        self.dialog_open = False
        self._changed()

    async def submit_create(self) -> Project | None:
        """Create a project from the draft.

        Falls back to a local-only record when the backend is unreachable.
        Returns the project added to the list, or None.
        """
        name = self.draft.name.strip() or DEFAULT_PROJECT_NAME
        description = self.draft.description.strip()

        result = await self.api.create_project(name, description)
        if self.disposed:
            return None

        if result.unauthorized:
            self._expire_session("create project")
            return None

        if result.ok:
            try:
                project = Project.model_validate(result.data)
            except ValidationError as e:
                self.logger.error("malformed created project: %s", e)
                self.ctx.notifications.error("Failed to create project")
                return None
            message = "Project created"
        elif result.is_network_error:
            now = utcnow()
            user = self.ctx.session.get_user()
            project = Project(
                id=local_project_id(),
                user_id=user.id if user else "local",
                name=name,
                description=description,
                created_at=now,
                updated_at=now,
            )
            self.logger.warning("backend unreachable, created project %s locally", project.id)
            message = "Project created (offline)"
        else:
            self.logger.error("create project failed: %s", result.error)
            self.ctx.notifications.error("Failed to create project")
            return None

        self.projects = [project, *self.projects]
        self.draft = ProjectDraft()
        self.dialog_open = False
        self.logger.info("project created %s", project.id)
        self._changed()
        self.ctx.notifications.success(message)
        return project

    async def delete(self, project_id: str) -> bool:
        """Delete a project; no confirmation step."""
        result = await self.api.delete_project(project_id)
        if self.disposed:
            return False

        if result.unauthorized:
            self._expire_session("delete project")
            return False
        if not result.ok:
            self.logger.error("delete project %s failed: %s", project_id, result.error)
            self.ctx.notifications.error("Failed to delete project")
            return False

        self.projects = [p for p in self.projects if p.id != project_id]
        self.logger.info("project deleted %s", project_id)
        self._changed()
        self.ctx.notifications.error("Project deleted")
        return True
