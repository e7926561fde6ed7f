"""Durable per-origin key-value storage, the session store and preferences.

Storage is a small JSON document per API origin, kept under the user data
directory so it survives restarts without leaking between backends.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from json import JSONDecodeError
from pathlib import Path
from typing import Any, Literal

from pydantic import ValidationError

from tasklite.models import User
from tasklite.utils.logger import get_logger

logger = get_logger("session")

TOKEN_KEY = "token"
USER_KEY = "user"
THEME_KEY = "theme"

Theme = Literal["light", "dark"]
DEFAULT_THEME: Theme = "dark"


def origin_slug(origin: str) -> str:
    """Turn ``https://host:443`` into a file-name-safe slug."""
    return re.sub(r"[^A-Za-z0-9]+", "_", origin).strip("_") or "default"


class KeyValueStorage:
    """String-keyed JSON storage persisted to a single file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: dict[str, Any] | None = None

    @classmethod
    def for_origin(cls, storage_dir: Path, origin: str) -> KeyValueStorage:
        """Storage file for one API origin."""
        return cls(Path(storage_dir) / f"{origin_slug(origin)}.json")

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            try:
                with open(self.path, encoding="utf-8") as f:
                    loaded = json.load(f)
                self._data = loaded if isinstance(loaded, dict) else {}
            except FileNotFoundError:
                self._data = {}
            except JSONDecodeError:
                logger.warning("discarding unreadable storage file %s", self.path)
                self._data = {}
        return self._data

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(self._load(), f, indent=2)
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._load()[key] = value
        self._flush()

    def update(self, values: dict[str, Any]) -> None:
        self._load().update(values)
        self._flush()

    def remove(self, *keys: str) -> None:
        data = self._load()
        if any(key in data for key in keys):
            for key in keys:
                data.pop(key, None)
            self._flush()

    def keys(self) -> list[str]:
        return list(self._load())


class SessionStore:
    """Owns the auth token and current user.

    Written at login, registration and logout, and when a request reveals
    that the session expired.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def get_token(self) -> str | None:
        token = self.storage.get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def get_user(self) -> User | None:
        raw = self.storage.get(USER_KEY)
        if not isinstance(raw, dict):
            return None
        try:
            return User.model_validate(raw)
        except ValidationError:
            return None

    @property
    def is_authenticated(self) -> bool:
        return self.get_token() is not None

    def set_session(self, token: str, user: User) -> None:
        self.storage.update({TOKEN_KEY: token, USER_KEY: user.to_wire()})
        logger.info("session started for user %s", user.id)

    def clear_session(self) -> None:
        self.storage.remove(TOKEN_KEY, USER_KEY)
        logger.info("session cleared")


class PreferenceStore:
    """Theme preference, persisted independently of the session."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def get_theme(self) -> Theme:
        saved = self.storage.get(THEME_KEY)
        if saved in ("light", "dark"):
            return saved
        return DEFAULT_THEME

    def set_theme(self, theme: Theme) -> None:
        if theme not in ("light", "dark"):
            raise ValueError(f"Unknown theme: {theme}")
        self.storage.set(THEME_KEY, theme)
