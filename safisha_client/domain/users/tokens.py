# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

import jwt


def token_expiry(token: str) -> datetime | None:
    """Return the ``exp`` claim of a JWT, or None for opaque tokens."""
    try:
        claims = jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": False},
        )
    except jwt.PyJWTError:
        return None
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or isinstance(exp, bool):
        return None
    try:
        return datetime.fromtimestamp(exp, tz=UTC)
    except (OverflowError, OSError, ValueError):
        # Unrepresentable exp: let the server decide.
        return None


def is_locally_expired(
    token: str, *, now: datetime | None = None, leeway: float = 0.0
) -> bool:
    expires_at = token_expiry(token)
    if expires_at is None:
        return False
    current = now or datetime.now(UTC)
    return expires_at.timestamp() + leeway <= current.timestamp()
