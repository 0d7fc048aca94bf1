from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from safisha_client.infrastructure.storage import (
    FileTokenStore,
    NullTokenStore,
    create_token_store,
)
from safisha_client.shared.config import StorageConfig
from safisha_client.shared.errors import StorageError


def test_file_store_round_trip_under_fixed_key(token_path: Path) -> None:
    store = FileTokenStore(token_path)
    assert store.read() is None

    store.write("abc")

    assert FileTokenStore(token_path).read() == "abc"
    assert json.loads(token_path.read_text(encoding="utf-8")) == {"auth_token": "abc"}


def test_clear_preserves_other_keys(token_path: Path) -> None:
    token_path.write_text(json.dumps({"theme": "dark", "auth_token": "abc"}), encoding="utf-8")
    store = FileTokenStore(token_path)

    store.clear()

    assert store.read() is None
    assert json.loads(token_path.read_text(encoding="utf-8")) == {"theme": "dark"}


def test_clear_without_file_is_noop(tmp_path: Path) -> None:
    store = FileTokenStore(tmp_path / "missing" / "session.json")

    store.clear()

    assert not (tmp_path / "missing").exists()


def test_corrupt_file_raises_storage_error(token_path: Path) -> None:
    token_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError) as exc_info:
        FileTokenStore(token_path).read()

    assert exc_info.value.code == "token_store_read_failed"


def test_unwritable_location_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = FileTokenStore(blocker / "session.json")

    with pytest.raises(StorageError) as exc_info:
        store.write("abc")

    assert exc_info.value.code == "token_store_write_failed"


def test_null_store_keeps_nothing() -> None:
    store = NullTokenStore()
    store.write("abc")
    assert store.read() is None
    store.clear()


def test_factory_selects_store(tmp_path: Path) -> None:
    persistent = create_token_store(
        StorageConfig(persist_session=True, token_store_path=tmp_path / "s.json")
    )
    disabled = create_token_store(
        StorageConfig(persist_session=False, token_store_path=tmp_path / "s.json")
    )
    pathless = create_token_store(StorageConfig(token_store_path=None))

    assert isinstance(persistent, FileTokenStore)
    assert persistent.path == tmp_path / "s.json"
    assert isinstance(disabled, NullTokenStore)
    assert isinstance(pathless, NullTokenStore)


def test_refresh_token_stored_beside_access_token(token_path: Path) -> None:
    store = FileTokenStore(token_path)

    store.write("abc", "r-1")
    assert store.read_refresh() == "r-1"
    assert json.loads(token_path.read_text(encoding="utf-8")) == {
        "auth_token": "abc",
        "refresh_token": "r-1",
    }

    store.write("def")
    assert store.read_refresh() is None

    store.write("ghi", "r-2")
    store.clear()
    assert json.loads(token_path.read_text(encoding="utf-8")) == {}


@pytest.mark.parametrize("content", [b"{not json", b"\xff\xfe\x00garbage"])
def test_write_replaces_unreadable_file(token_path: Path, content: bytes) -> None:
    token_path.write_bytes(content)
    store = FileTokenStore(token_path)

    store.write("abc")

    assert store.read() == "abc"
    assert json.loads(token_path.read_text(encoding="utf-8")) == {"auth_token": "abc"}


def test_clear_resets_unreadable_file(token_path: Path) -> None:
    token_path.write_text("{not json", encoding="utf-8")
    store = FileTokenStore(token_path)

    store.clear()

    assert store.read() is None


def test_failed_replace_leaves_no_temp_file(
    token_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _fail(src, dst):
        raise OSError("device busy")

    monkeypatch.setattr(os, "replace", _fail)
    store = FileTokenStore(token_path)

    with pytest.raises(StorageError):
        store.write("abc")

    assert list(token_path.parent.iterdir()) == []
