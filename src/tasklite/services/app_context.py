"""Explicit application context handed to every view-model.

Bundles the session, the API client, the notification channel and the router
so that no component reads ambient globals.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import httpx

from tasklite.api.client import APIClient
from tasklite.models import AppConfig
from tasklite.services.navigation import ROOT, Router
from tasklite.services.notifications import NotificationChannel
from tasklite.services.session_store import (
    KeyValueStorage,
    PreferenceStore,
    SessionStore,
)


@dataclass
class AppContext:
    """Everything a view-model needs from its surroundings."""

    config: AppConfig
    session: SessionStore
    preferences: PreferenceStore
    client: APIClient
    notifications: NotificationChannel
    router: Router

    async def aclose(self) -> None:
        """Cancel toast timers and close the HTTP client."""
        self.notifications.close()
        await self.client.close()


def build_app_context(
    config: AppConfig | None = None,
    *,
    storage_dir: Path | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    initial_route: str = ROOT,
) -> AppContext:
    """Build a fresh context.

    Args:
        config: Configuration; defaults to the persisted config
        storage_dir: Directory for durable per-origin storage
        transport: Optional httpx transport (tests use ``httpx.MockTransport``)
        initial_route: Route the router starts on
    """
    if config is None or storage_dir is None:
        from tasklite.services.config_service import get_config_service

        config_service = get_config_service()
        config = config or config_service.config
        storage_dir = storage_dir or config_service.storage_dir

    storage = KeyValueStorage.for_origin(storage_dir, config.api.origin)
    session = SessionStore(storage)
    return AppContext(
        config=config,
        session=session,
        preferences=PreferenceStore(storage),
        client=APIClient(config.api, session, transport=transport),
        notifications=NotificationChannel(config.ui.toast_duration_ms),
        router=Router(initial_route),
    )
