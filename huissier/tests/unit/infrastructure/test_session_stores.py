"""
Unit tests for client-local session stores.

Usage:
    pytest huissier/tests/unit/infrastructure/test_session_stores.py
"""

import json
import os
import stat

import pytest

from huissier.infrastructure.session.file_session_store import FileSessionStore
from huissier.infrastructure.session.memory_session_store import (
    InMemorySessionStore,
)

RECORD = {
    "wallet_address": "kshy5yns5FGGXcFVfjT2fTzVsQLFnbZzL9zuh1ZKR2y",
    "signature": "c2ln",
    "message": "hello",
    "timestamp": 1,
    "role": "editor",
    "name": "Alice",
}


class TestInMemorySessionStore:
    """Unit tests for InMemorySessionStore."""

    def test_empty_by_default(self):
        assert InMemorySessionStore().load() is None

    def test_save_overwrites(self):
        """Test save replaces the whole record."""
        store = InMemorySessionStore({"old": True})
        store.save(RECORD)
        assert store.load() == RECORD

    def test_returned_record_is_a_copy(self):
        """Test callers cannot mutate stored state."""
        store = InMemorySessionStore(RECORD)
        store.load()["name"] = "Mallory"
        assert store.load()["name"] == "Alice"

    def test_clear(self):
        store = InMemorySessionStore(RECORD)
        store.clear()
        assert store.load() is None


class TestFileSessionStore:
    """Unit tests for FileSessionStore."""

    @pytest.fixture
    def store(self, tmp_path) -> FileSessionStore:
        return FileSessionStore(str(tmp_path / "nested" / "session.json"))

    def test_missing_file_loads_none(self, store):
        assert store.load() is None

    def test_save_and_load(self, store):
        """Test record survives a new store instance."""
        store.save(RECORD)
        assert FileSessionStore(str(store.path)).load() == RECORD

    def test_file_is_owner_only(self, store):
        """Test session file is not group or world readable."""
        store.save(RECORD)
        mode = stat.S_IMODE(os.stat(store.path).st_mode)
        assert mode & 0o077 == 0

    def test_no_temp_file_left(self, store):
        """Test atomic write leaves only the session file."""
        store.save(RECORD)
        assert [p.name for p in store.path.parent.iterdir()] == ["session.json"]

    def test_corrupted_file_loads_none(self, store):
        """Test unreadable JSON is ignored."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json")
        assert store.load() is None

    def test_non_object_file_loads_none(self, store):
        """Test JSON that is not an object is ignored."""
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps([1, 2, 3]))
        assert store.load() is None

    def test_clear(self, store):
        """Test clear removes the file and tolerates repeats."""
        store.save(RECORD)
        store.clear()
        store.clear()
        assert not store.path.exists()
