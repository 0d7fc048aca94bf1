# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import json
import os
from pathlib import Path
from typing import Any

from safisha_client.shared.errors import StorageError
from safisha_client.shared.logging import logger

DEFAULT_TOKEN_KEY = "auth_token"
DEFAULT_REFRESH_KEY = "refresh_token"


class FileTokenStore:
    """Key-value JSON file holding the token pair under fixed keys.

    Other keys in the same file are preserved on write and clear. An
    unreadable file is replaced on the next write.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        key: str = DEFAULT_TOKEN_KEY,
        refresh_key: str = DEFAULT_REFRESH_KEY,
    ) -> None:
        self._path = Path(path)
        self._key = key
        self._refresh_key = refresh_key

        logger.debug(f"FileTokenStore: initialized path={self._path} key={self._key}")

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> str | None:
        return self._string(self._load().get(self._key))

    def read_refresh(self) -> str | None:
        return self._string(self._load().get(self._refresh_key))

    def write(self, token: str, refresh_token: str | None = None) -> None:
        data, _ = self._load_for_update()
        data[self._key] = token
        if refresh_token:
            data[self._refresh_key] = refresh_token
        else:
            data.pop(self._refresh_key, None)
        self._save(data)
        logger.debug(f"FileTokenStore: token written path={self._path}")

    def clear(self) -> None:
        if not self._path.exists():
            return
        data, replaced = self._load_for_update()
        removed = [k for k in (self._key, self._refresh_key) if data.pop(k, None) is not None]
        if not removed and not replaced:
            return
        self._save(data)
        logger.debug(f"FileTokenStore: token cleared path={self._path}")

    @staticmethod
    def _string(value: Any) -> str | None:
        if isinstance(value, str) and value:
            return value
        return None

    def _load(self) -> dict[str, Any]:
        try:
            with open(self._path, encoding="utf-8") as f:
                loaded = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            raise StorageError(
                f"Failed to read token store: {self._path}",
                code="token_store_read_failed",
            ) from e

        if not isinstance(loaded, dict):
            logger.warning(
                f"FileTokenStore: unexpected content type={type(loaded).__name__} "
                f"path={self._path}, treating as empty"
            )
            return {}
        return loaded

    def _load_for_update(self) -> tuple[dict[str, Any], bool]:
        try:
            return self._load(), False
        except StorageError as e:
            logger.warning(
                f"FileTokenStore: unreadable file will be replaced path={self._path} "
                f"error={type(e.__cause__).__name__}"
            )
            return {}, True

    def _save(self, data: dict[str, Any]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=0)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self._path)
        except OSError as e:
            self._discard(tmp)
            raise StorageError(
                f"Failed to write token store: {self._path}",
                code="token_store_write_failed",
            ) from e

    @staticmethod
    def _discard(tmp: Path) -> None:
        try:
            tmp.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"FileTokenStore: could not remove temp file path={tmp} error={e}")
