"""Services module for TaskLite - session, notifications and navigation.

``tasklite.services.app_context`` wires these together with the API client;
import it directly (it depends on ``tasklite.api``).
"""

from .navigation import Router
from .notifications import NotificationChannel
from .session_store import KeyValueStorage, PreferenceStore, SessionStore

__all__ = [
    "Router",
    "NotificationChannel",
    "KeyValueStorage",
    "PreferenceStore",
    "SessionStore",
]
