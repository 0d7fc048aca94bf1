# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig


class NullTokenStore:
    """Token store for contexts without durable storage; keeps nothing."""

    def read(self) -> str | None:
        return None

    def read_refresh(self) -> str | None:
        return None

    def write(self, token: str, refresh_token: str | None = None) -> None:
        return None

    def clear(self) -> None:
        return None
