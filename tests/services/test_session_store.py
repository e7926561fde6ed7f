"""Tests for per-origin storage, the session store and preferences."""

import json

import pytest

from conftest import ADA, TOKEN
from tasklite.services.session_store import (
    DEFAULT_THEME,
    KeyValueStorage,
    PreferenceStore,
    SessionStore,
    origin_slug,
)


@pytest.fixture
def storage(tmp_path) -> KeyValueStorage:
    return KeyValueStorage.for_origin(tmp_path, "https://api.tasklite.dev")


class TestKeyValueStorage:
    def test_origin_slug(self):
        assert origin_slug("http://localhost:3000") == "http_localhost_3000"
        assert origin_slug("") == "default"

    def test_origins_are_isolated(self, tmp_path):
        dev = KeyValueStorage.for_origin(tmp_path, "http://localhost:3000")
        prod = KeyValueStorage.for_origin(tmp_path, "https://api.tasklite.dev")

        dev.set("token", "dev-token")

        assert prod.get("token") is None
        assert dev.path != prod.path

    def test_values_survive_reload(self, storage):
        storage.set("theme", "light")

        reopened = KeyValueStorage(storage.path)
        assert reopened.get("theme") == "light"
        assert json.loads(storage.path.read_text()) == {"theme": "light"}

    def test_file_is_private(self, storage):
        storage.set("token", "t")
        assert storage.path.stat().st_mode & 0o777 == 0o600

    def test_corrupt_file_reads_as_empty(self, storage):
        storage.path.parent.mkdir(parents=True, exist_ok=True)
        storage.path.write_text("{not json")

        assert storage.get("token") is None
        assert storage.keys() == []

    def test_remove_missing_key_does_not_write(self, storage):
        storage.remove("token")
        assert not storage.path.exists()


class TestSessionStore:
    def test_empty_session(self, storage):
        session = SessionStore(storage)

        assert session.get_token() is None
        assert session.get_user() is None
        assert not session.is_authenticated

    def test_set_and_clear(self, storage):
        session = SessionStore(storage)
        session.set_session(TOKEN, ADA)

        assert session.is_authenticated
        assert session.get_user() == ADA

        session.clear_session()
        assert not session.is_authenticated
        assert session.get_user() is None

    def test_session_persists(self, storage):
        SessionStore(storage).set_session(TOKEN, ADA)

        again = SessionStore(KeyValueStorage(storage.path))
        assert again.get_token() == TOKEN
        assert again.get_user().email == ADA.email

    def test_malformed_user_is_ignored(self, storage):
        storage.update({"token": TOKEN, "user": {"id": "u1"}})
        session = SessionStore(storage)

        assert session.is_authenticated
        assert session.get_user() is None

    def test_clear_keeps_theme(self, storage):
        prefs = PreferenceStore(storage)
        session = SessionStore(storage)
        prefs.set_theme("light")
        session.set_session(TOKEN, ADA)

        session.clear_session()

        assert prefs.get_theme() == "light"


class TestPreferenceStore:
    def test_default_theme(self, storage):
        assert PreferenceStore(storage).get_theme() == DEFAULT_THEME

    def test_unknown_saved_theme_falls_back(self, storage):
        storage.set("theme", "solarized")
        assert PreferenceStore(storage).get_theme() == DEFAULT_THEME

    def test_set_theme_rejects_unknown(self, storage):
        with pytest.raises(ValueError):
            PreferenceStore(storage).set_theme("solarized")
