"""Tasks API endpoints."""

from typing import Any

from tasklite.api.client import APIClient, ApiResult


class TasksAPI:
    """Tasks API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_tasks(self) -> ApiResult:
        """List every task visible to the session.

        The backend does not scope this by project; callers filter.
        """
        return await self.client.get("/tasks")

    async def create_task(self, payload: dict[str, Any]) -> ApiResult:
        """Create a new task from a wire payload (camelCase keys)."""
        return await self.client.post("/tasks", json=payload)

    async def update_task(self, task_id: str, **updates: Any) -> ApiResult:
        """Partially update a task."""
        return await self.client.patch(f"/tasks/{task_id}", json=updates)

    async def delete_task(self, task_id: str) -> ApiResult:
        """Delete a task."""
        return await self.client.delete(f"/tasks/{task_id}")
