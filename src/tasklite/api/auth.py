"""Authentication API endpoints."""

from tasklite.api.client import APIClient, ApiResult


class AuthAPI:
    """Authentication API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def login(self, email: str, password: str) -> ApiResult:
        """Login with email and password."""
        return await self.client.post(
            "/auth/login",
            json={"email": email, "password": password},
        )

    async def register(self, name: str, email: str, password: str) -> ApiResult:
        """Create an account; the response carries a token like login."""
        return await self.client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )
