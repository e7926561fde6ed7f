"""Kanban board for one project.

Moves are applied optimistically. The whole collection is snapshotted before
a move and restored in one assignment if the server rejects it, so a render
never sees a half-reverted board. Overlapping moves of the same task are not
sequenced: a late rollback can overwrite a newer optimistic move.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, Literal

from pydantic import BaseModel, ValidationError

from tasklite.api.client import ApiResult
from tasklite.api.tasks import TasksAPI
from tasklite.models import BOARD_COLUMNS, Priority, Task, TaskStatus
from tasklite.services.app_context import AppContext
from tasklite.utils.dates import due_from_date_input, due_to_date_input, utcnow

from .base import ViewModel

MIN_TASK_NAME_LENGTH = 2
DELETE_PROMPT = "Delete this task?"

ConfirmCallback = Callable[[str], bool | Awaitable[bool]]


class DraftValidationError(ValueError):
    """The task form cannot be submitted as filled in."""


class TaskDraft(BaseModel):
    """Form state of the task dialog.

    ``tags_csv`` and ``due`` hold raw field text; ``due`` is ``YYYY-MM-DD``.
    """

    id: str | None = None
    name: str = ""
    description: str = ""
    tags_csv: str = ""
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    due: str | None = None

    @classmethod
    def from_task(cls, task: Task) -> TaskDraft:
        return cls(
            id=task.id,
            name=task.name,
            description=task.description or "",
            tags_csv=", ".join(task.tags),
            status=task.status,
            priority=task.priority,
            due=due_to_date_input(task.due),
        )

    def tags(self) -> list[str]:
        return [tag.strip() for tag in self.tags_csv.split(",") if tag.strip()]

    def to_payload(self, project_id: str, *, for_update: bool = False) -> dict[str, Any]:
        """Build the request body.

        A blank due date is left out of a create and sent as null on an
        update, which clears it.

        Raises:
            DraftValidationError: If the name is blank or too short, or the
                due date is not a valid date
        """
        name = self.name.strip()
        if not name:
            raise DraftValidationError("Task name is required")
        if len(name) < MIN_TASK_NAME_LENGTH:
            raise DraftValidationError(
                f"Task name must be at least {MIN_TASK_NAME_LENGTH} characters"
            )
        try:
            due = due_from_date_input(self.due)
        except ValueError as e:
            raise DraftValidationError(f"Invalid due date: {self.due}") from e

        payload: dict[str, Any] = {
            "name": name,
            "description": self.description.strip(),
            "tags": self.tags(),
            "status": self.status.value,
            "priority": self.priority.value,
            "projectId": project_id,
        }
        if due is not None or for_update:
            payload["due"] = due
        return payload


class TaskBoardViewModel(ViewModel):
    """Owns the local task collection of one project board."""

    log_name = "board"

    def __init__(self, ctx: AppContext, project_id: str):
        super().__init__(ctx)
        self.api = TasksAPI(ctx.client)
        self.project_id = project_id
        self.tasks: list[Task] = []
        self.loading = True
        self.error: str | None = None
        self.dialog_open = False
        self.mode: Literal["create", "edit"] = "create"
        self.draft = TaskDraft()
        self.validation_error: str | None = None

    @property
    def columns(self) -> dict[TaskStatus, list[Task]]:
        """Tasks grouped by status, in collection order."""
        return {
            status: [t for t in self.tasks if t.status is status]
            for status in BOARD_COLUMNS
        }

    def get(self, task_id: str) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    async def load(self) -> bool:
        """Fetch tasks and keep those of this board's project."""
        self.loading = True
        self.error = None
        result = await self.api.list_tasks()
        if self.disposed:
            return False

        self.loading = False
        if result.unauthorized:
            self._expire_session("fetch tasks")
            return False

        all_tasks: list[Task] | None = None
        if result.ok:
            try:
                raw = (result.data or {}).get("tasks") or []
                all_tasks = [Task.model_validate(t) for t in raw]
            except (AttributeError, ValidationError) as e:
                result.error = f"malformed task list: {e}"
        if all_tasks is None:
            self.logger.error("failed to load tasks: %s", result.error)
            self.error = "Failed to load tasks"
            self._changed()
            return False

        if self.project_id:
            self.tasks = [t for t in all_tasks if t.project_id == self.project_id]
        else:
            self.tasks = all_tasks
        self.logger.info(
            "loaded tasks total=%d filtered=%d", len(all_tasks), len(self.tasks)
        )
        self._changed()
        return True

    async def move_task(self, task_id: str, destination: TaskStatus) -> bool:
        """Drop ``task_id`` on the ``destination`` column.

        Returns True when the server accepted the move.
        """
        destination = TaskStatus(destination)
        task = self.get(task_id)
        if task is None or task.status is destination:
            return False

        previous = self.tasks
        self.logger.info(
            "drop update %s %s -> %s", task_id, task.status.value, destination.value
        )
        self.tasks = [
            t.model_copy(update={"status": destination, "updated_at": utcnow()})
            if t.id == task_id
            else t
            for t in previous
        ]
        self._changed()

        result = await self.api.update_task(task_id, status=destination.value)
        if self.disposed:
            return False

        if result.unauthorized:
            self._expire_session("status update")
            return False
        if not result.ok:
            self.logger.warning(
                "failed to update %s on drop, reverting: %s", task_id, result.error
            )
            self.tasks = previous
            self._changed()
            return False

        self.logger.info("status updated %s", task_id)
        self.ctx.notifications.warning("Task updated")
        return True

    def open_create(self, status: TaskStatus = TaskStatus.TODO) -> None:
        self.mode = "create"
        self.draft = TaskDraft(status=status)
        self.validation_error = None
        self.dialog_open = True
        self._changed()

    def open_edit(self, task: Task) -> None:
        self.mode = "edit"
        self.draft = TaskDraft.from_task(task)
        self.validation_error = None
        self.dialog_open = True
        self._changed()

    def close_dialog(self) -> None:
        """Hide the dialog; the draft is kept."""
        self.dialog_open = False
        self._changed()

    async def submit_draft(self) -> bool:
        """Create or update from the draft; True when the dialog closed."""
        try:
            payload = self.draft.to_payload(
                self.project_id, for_update=self.mode == "edit"
            )
        except DraftValidationError as e:
            self.validation_error = str(e)
            self._changed()
            return False
        self.validation_error = None

        if self.mode == "create":
            return await self._create(payload)
        if self.draft.id:
            return await self._update(self.draft.id, payload)
        return False

    async def _create(self, payload: dict[str, Any]) -> bool:
        self.logger.info("creating task %r", payload["name"])
        result = await self.api.create_task(payload)
        if self.disposed:
            return False
        if result.unauthorized:
            self._expire_session("create")
            return False

        task = self._parse_task(result, "create")
        if task is None:
            return False

        self.tasks = [task, *self.tasks]
        self.dialog_open = False
        self.logger.info("task created %s", task.id)
        self._changed()
        self.ctx.notifications.success("Task created")
        return True

    async def _update(self, task_id: str, payload: dict[str, Any]) -> bool:
        self.logger.info("updating task %s", task_id)
        result = await self.api.update_task(task_id, **payload)
        if self.disposed:
            return False
        if result.unauthorized:
            self._expire_session("update")
            return False

        if not result.ok or not isinstance(result.data, dict):
            # Silent for the user: the dialog stays open for a retry.
            self.logger.error("submit (update) failed: %s", result.error)
            return False

        # The response wins; fields it leaves out take the values sent.
        target_id = str(result.data.get("id", task_id))
        existing = self.get(target_id)
        base = existing.to_wire() if existing is not None else {}
        try:
            merged = Task.model_validate({**base, **payload, **result.data})
        except ValidationError as e:
            self.logger.error("submit failed: malformed task: %s", e)
            return False

        self.tasks = [merged if t.id == target_id else t for t in self.tasks]
        self.dialog_open = False
        self.logger.info("task updated %s", target_id)
        self._changed()
        self.ctx.notifications.warning("Task updated")
        return True

    def _parse_task(self, result: ApiResult, action: str) -> Task | None:
        if not result.ok:
            # Silent for the user: the dialog stays open for a retry.
            self.logger.error("submit (%s) failed: %s", action, result.error)
            return None
        try:
            return Task.model_validate(result.data)
        except ValidationError as e:
            self.logger.error("submit (%s) failed: malformed task: %s", action, e)
            return None

    async def delete_current(self, confirm: ConfirmCallback) -> bool:
        """Delete the task being edited after ``confirm`` approves."""
        if self.mode != "edit" or not self.draft.id:
            return False
        task_id = self.draft.id

        approved = confirm(DELETE_PROMPT)
        if inspect.isawaitable(approved):
            approved = await approved
        if not approved:
            return False

        self.logger.info("deleting task %s", task_id)
        result = await self.api.delete_task(task_id)
        if self.disposed:
            return False
        if result.unauthorized:
            self._expire_session("delete")
            return False
        if not result.ok:
            self.logger.error("delete failed %s: %s", task_id, result.error)
            return False

        self.tasks = [t for t in self.tasks if t.id != task_id]
        self.dialog_open = False
        self.logger.info("task deleted %s", task_id)
        self._changed()
        self.ctx.notifications.error("Task deleted")
        return True
