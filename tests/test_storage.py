"""Tests for the storage backends."""

import pytest

from subscan.services.storage import (
    InMemoryStorage,
    LocalFileStorage,
    StorageError,
    StorageUnavailableError,
)


class TestLocalFileStorage:
    """File-backed key-value storage."""

    def test_missing_key_returns_none(self, file_storage):
        assert file_storage.get("subscriptions") is None

    def test_set_then_get(self, file_storage):
        file_storage.set("subscriptions", b'{"a": 1}')
        assert file_storage.get("subscriptions") == b'{"a": 1}'

    def test_set_replaces_whole_value(self, file_storage):
        file_storage.set("subscriptions", b"a much longer first value")
        file_storage.set("subscriptions", b"short")
        assert file_storage.get("subscriptions") == b"short"

    def test_creates_directory_and_one_file_per_key(self, tmp_path):
        storage = LocalFileStorage(tmp_path / "nested" / "dir")
        storage.set("subscriptions", b"x")
        storage.set("subscriptions.corrupt-1", b"y")
        names = sorted(path.name for path in (tmp_path / "nested" / "dir").iterdir())
        assert names == ["subscriptions.corrupt-1.json", "subscriptions.json"]

    def test_no_temp_files_left(self, file_storage):
        file_storage.set("subscriptions", b"x")
        leftovers = [p for p in file_storage.directory.iterdir() if p.suffix == ".tmp"]
        assert leftovers == []

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden", "with space"])
    def test_rejects_unsafe_keys(self, file_storage, key):
        with pytest.raises(ValueError):
            file_storage.set(key, b"x")

    def test_transient_write_errors_are_retried(self, file_storage, monkeypatch):
        """Test an OSError that clears up is retried transparently."""
        real_write = LocalFileStorage._write_atomic
        calls = []

        def flaky_write(path, data):
            calls.append(path)
            if len(calls) < 3:
                raise OSError("device busy")
            real_write(path, data)

        monkeypatch.setattr(file_storage, "_write_atomic", flaky_write)
        file_storage.set("subscriptions", b"x")

        assert len(calls) == 3
        assert file_storage.get("subscriptions") == b"x"

    def test_exhausted_retries_raise_unavailable(self, tmp_path, monkeypatch):
        storage = LocalFileStorage(tmp_path, attempts=2, retry_wait_seconds=0)
        calls = []

        def broken_write(path, data):
            calls.append(path)
            raise OSError("read-only file system")

        monkeypatch.setattr(storage, "_write_atomic", broken_write)
        with pytest.raises(StorageUnavailableError):
            storage.set("subscriptions", b"x")
        assert len(calls) == 2

    def test_read_errors_raise_unavailable(self, file_storage, monkeypatch):
        def broken_read(path):
            raise PermissionError("denied")

        monkeypatch.setattr(file_storage, "_read", broken_read)
        with pytest.raises(StorageError):
            file_storage.get("subscriptions")

    def test_failed_write_keeps_previous_value(self, file_storage, monkeypatch):
        """Test the old file survives a failing rename."""
        file_storage.set("subscriptions", b"old")

        def broken_replace(src, dst):
            raise OSError("rename failed")

        monkeypatch.setattr("subscan.services.storage.local_file.os.replace", broken_replace)
        with pytest.raises(StorageUnavailableError):
            file_storage.set("subscriptions", b"new")

        assert file_storage.get("subscriptions") == b"old"
        assert [p for p in file_storage.directory.iterdir() if p.suffix == ".tmp"] == []


class TestInMemoryStorage:
    def test_roundtrip(self):
        storage = InMemoryStorage()
        assert storage.get("k") is None
        storage.set("k", b"v")
        assert storage.get("k") == b"v"
        assert storage.keys() == ["k"]

    def test_initial_data_is_copied(self):
        initial = {"k": b"v"}
        storage = InMemoryStorage(initial)
        storage.set("other", b"w")
        assert "other" not in initial
