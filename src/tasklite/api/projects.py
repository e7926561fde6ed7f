"""Projects API endpoints."""

from tasklite.api.client import APIClient, ApiResult


class ProjectsAPI:
    """Projects API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_projects(self) -> ApiResult:
        """List the session user's projects (``{"projects": [...]}``)."""
        return await self.client.get("/projects")

    async def create_project(self, name: str, description: str = "") -> ApiResult:
        """Create a new project."""
        return await self.client.post(
            "/projects", json={"name": name, "description": description}
        )

    async def delete_project(self, project_id: str) -> ApiResult:
        """Delete a project."""
        return await self.client.delete(f"/projects/{project_id}")
