from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from safisha_client.domain.users import (
    Session,
    User,
    UserRole,
    is_locally_expired,
    token_expiry,
)


def _jwt(exp: datetime) -> str:
    return jwt.encode({"sub": "1", "exp": exp}, "secret", algorithm="HS256")


def test_user_full_name_and_role() -> None:
    user = User(id="1", email="a@b.co", role=UserRole.SERVICE_PROVIDER, first_name="Amina")

    assert user.full_name == "Amina"
    assert user.is_service_provider


def test_session_requires_token() -> None:
    user = User(id="1", email="a@b.co", role=UserRole.CUSTOMER)

    with pytest.raises(ValueError):
        Session(token="", user=user)


def test_opaque_token_has_no_expiry() -> None:
    assert token_expiry("opaque-session-token") is None
    assert not is_locally_expired("opaque-session-token")


def test_jwt_expiry_is_read_without_verification() -> None:
    now = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
    token = _jwt(now + timedelta(minutes=10))

    assert token_expiry(token) == now + timedelta(minutes=10)
    assert not is_locally_expired(token, now=now)
    assert is_locally_expired(token, now=now + timedelta(minutes=11))
    assert not is_locally_expired(token, now=now + timedelta(minutes=11), leeway=120)


def test_out_of_range_expiry_is_left_to_the_server() -> None:
    token = jwt.encode({"sub": "1", "exp": 10**20}, "secret", algorithm="HS256")

    assert token_expiry(token) is None
    assert not is_locally_expired(token)
