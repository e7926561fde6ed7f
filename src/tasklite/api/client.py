"""API client for TaskLite."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

from tasklite.models.config_models import APIConfig
from tasklite.services.session_store import SessionStore
from tasklite.utils.logger import get_logger

logger = get_logger("api")


class ApiOutcome(str, Enum):
    """How a request ended, from the caller's point of view."""

    OK = "ok"
    UNAUTHORIZED = "unauthorized"
    FAILED = "failed"


@dataclass
class ApiResult:
    """Structured result of one API call.

    ``data`` holds the parsed JSON body for successful calls. For failures,
    ``status_code`` is None when the request never got a response.
    """

    outcome: ApiOutcome
    status_code: int | None = None
    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is ApiOutcome.OK

    @property
    def unauthorized(self) -> bool:
        return self.outcome is ApiOutcome.UNAUTHORIZED

    @property
    def failed(self) -> bool:
        return self.outcome is ApiOutcome.FAILED

    @property
    def is_network_error(self) -> bool:
        return self.failed and self.status_code is None


class APIClient:
    """HTTP client for the TaskLite API."""

    def __init__(
        self,
        api_config: APIConfig,
        session: SessionStore,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = api_config.base_url.rstrip("/")
        self.timeout = api_config.timeout
        self.session = session
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_headers(self, *, has_body: bool = False) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        headers = {"Accept": "application/json"}
        if has_body:
            headers["Content-Type"] = "application/json"

        token = self.session.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
    ) -> ApiResult:
        """Make an HTTP request and classify the response.

        Never retries; a stalled request waits for the transport timeout.
        """
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"
        has_body = json is not None

        try:
            response = await client.request(
                method=method,
                url=url,
                json=json,
                headers=self._get_headers(has_body=has_body),
            )
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, url, e)
            return ApiResult(ApiOutcome.FAILED, error=str(e) or type(e).__name__)

        payload = _parse_body(response)

        if response.status_code == 401:
            logger.warning("%s %s -> 401", method, url)
            return ApiResult(
                ApiOutcome.UNAUTHORIZED, status_code=401, data=payload
            )

        if not response.is_success:
            error = None
            if isinstance(payload, dict) and payload.get("error"):
                error = str(payload["error"])
            logger.error("%s %s -> %d %s", method, url, response.status_code, error)
            return ApiResult(
                ApiOutcome.FAILED,
                status_code=response.status_code,
                data=payload,
                error=error or f"HTTP {response.status_code}",
            )

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return ApiResult(ApiOutcome.OK, status_code=response.status_code, data=payload)

    async def get(self, path: str) -> ApiResult:
        """Make a GET request."""
        return await self.request("GET", path)

    async def post(self, path: str, *, json: Any = None) -> ApiResult:
        """Make a POST request."""
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, *, json: Any = None) -> ApiResult:
        """Make a PATCH request."""
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> ApiResult:
        """Make a DELETE request."""
        return await self.request("DELETE", path)


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
