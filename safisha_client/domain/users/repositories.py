# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol


class TokenStore(Protocol):
    """Durable slot for the session token and its refresh token.

    Implementations raise ``StorageError`` on backend failures; callers
    decide whether to recover.
    """

    def read(self) -> str | None: ...
    def read_refresh(self) -> str | None: ...
    def write(self, token: str, refresh_token: str | None = None) -> None: ...
    def clear(self) -> None: ...
