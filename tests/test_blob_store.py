#!/usr/bin/env python3
"""Tests for blob store implementations."""
import pytest

from models import (
    DirectoryBlobStore,
    MemoryBlobStore,
    PersistenceError,
    ReservationStore,
)


class TestMemoryBlobStore:
    """Tests for MemoryBlobStore."""

    def test_missing_key_is_none(self):
        assert MemoryBlobStore().get("vehicles") is None

    def test_set_then_get(self):
        blobs = MemoryBlobStore()
        blobs.set("vehicles", "[]")
        assert blobs.get("vehicles") == "[]"

    def test_initial_contents_copied(self):
        initial = {"vehicles": "[]"}
        blobs = MemoryBlobStore(initial)
        blobs.set("vehicles", "[1]")
        assert initial["vehicles"] == "[]"


class TestDirectoryBlobStore:
    """Tests for DirectoryBlobStore."""

    def test_missing_file_is_none(self, tmp_path):
        assert DirectoryBlobStore(tmp_path).get("reservations") is None

    def test_writes_key_json_file(self, tmp_path):
        blobs = DirectoryBlobStore(tmp_path)
        blobs.set("reservations", "[]")
        assert (tmp_path / "reservations.json").read_text(encoding="utf-8") == "[]"
        assert blobs.get("reservations") == "[]"

    def test_creates_directory(self, tmp_path):
        data_dir = tmp_path / "nested" / "data"
        DirectoryBlobStore(data_dir).set("vehicles", "[]")
        assert (data_dir / "vehicles.json").exists()

    def test_overwrites_and_leaves_no_temp_file(self, tmp_path):
        blobs = DirectoryBlobStore(tmp_path)
        blobs.set("vehicles", "[1]")
        blobs.set("vehicles", "[2]")
        assert blobs.get("vehicles") == "[2]"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["vehicles.json"]

    def test_write_failure_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        blobs = DirectoryBlobStore(blocker / "data")
        with pytest.raises(PersistenceError):
            blobs.set("vehicles", "[]")

    def test_invalid_utf8_raises_persistence_error(self, tmp_path):
        (tmp_path / "reservations.json").write_bytes(b"[\xff\xfe]")
        with pytest.raises(PersistenceError, match="Cannot read"):
            DirectoryBlobStore(tmp_path).get("reservations")

    def test_invalid_utf8_fails_store_load(self, tmp_path):
        (tmp_path / "reservations.json").write_bytes(b"[\xff\xfe]")
        with pytest.raises(PersistenceError):
            ReservationStore(DirectoryBlobStore(tmp_path))

    def test_accepts_str_path(self, tmp_path):
        blobs = DirectoryBlobStore(str(tmp_path))
        blobs.set("vehicles", "[]")
        assert blobs.get("vehicles") == "[]"
