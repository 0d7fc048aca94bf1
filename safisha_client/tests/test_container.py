from __future__ import annotations

from pathlib import Path

import pytest
from conftest import BASE_URL, FakeBackend, auth_payload, user_payload

from safisha_client import create_container
from safisha_client.application.session import SessionState
from safisha_client.infrastructure.storage import FileTokenStore, NullTokenStore
from safisha_client.shared.config import ClientConfig, StorageConfig


@pytest.mark.asyncio
async def test_session_survives_restart(config: ClientConfig, backend: FakeBackend) -> None:
    backend.respond("POST", "/auth/login", json=auth_payload("token-1"))
    backend.respond("GET", "/auth/profile", json={"user": user_payload()})

    async with create_container(
        config, configure_logging=False, transport=backend.transport
    ) as container:
        assert isinstance(container.token_store, FileTokenStore)
        assert container.session_manager.state is SessionState.ANONYMOUS
        await container.session_manager.login(
            {"identifier": "jane@example.com", "password": "secret123"}
        )

    async with create_container(
        config, configure_logging=False, transport=backend.transport
    ) as container:
        manager = container.session_manager
        assert manager.is_authenticated
        assert manager.user is not None and manager.user.email == "jane@example.com"

    (profile,) = backend.calls("GET", "/auth/profile")
    assert profile.headers["authorization"] == "Bearer token-1"


@pytest.mark.asyncio
async def test_disabled_persistence_forgets_session(
    token_path: Path, backend: FakeBackend
) -> None:
    config = ClientConfig(
        api_base_url=BASE_URL,
        storage=StorageConfig(persist_session=False, token_store_path=token_path),
    )
    backend.respond("POST", "/auth/login", json=auth_payload("token-1"))

    async with create_container(
        config, configure_logging=False, transport=backend.transport
    ) as container:
        assert isinstance(container.token_store, NullTokenStore)
        await container.session_manager.login(
            {"identifier": "jane@example.com", "password": "secret123"}
        )

    async with create_container(
        config, configure_logging=False, transport=backend.transport
    ) as container:
        assert container.session_manager.state is SessionState.ANONYMOUS

    assert not token_path.exists()
    assert backend.calls("GET", "/auth/profile") == []


@pytest.mark.asyncio
async def test_federated_login_uses_injected_opener(config: ClientConfig) -> None:
    opened: list[str] = []
    container = create_container(
        config, configure_logging=False, url_opener=opened.append
    )

    url = container.session_manager.federated_login("google")

    assert opened == [url] == [f"{BASE_URL}/auth/google"]
    await container.aclose()


@pytest.mark.asyncio
async def test_aclose_without_use(config: ClientConfig) -> None:
    container = create_container(config, configure_logging=False)

    await container.aclose()

    assert "request_client" not in container.__dict__


@pytest.mark.asyncio
async def test_refresh_works_after_restart(config: ClientConfig, backend: FakeBackend) -> None:
    backend.respond(
        "POST", "/auth/login", json={**auth_payload("access-1"), "refreshToken": "refresh-1"}
    )
    backend.respond("GET", "/auth/profile", json=user_payload())
    backend.respond("POST", "/auth/refresh", json={"token": "access-2"})

    async with create_container(
        config, configure_logging=False, transport=backend.transport
    ) as container:
        await container.session_manager.login(
            {"identifier": "jane@example.com", "password": "secret123"}
        )

    async with create_container(
        config, configure_logging=False, transport=backend.transport
    ) as container:
        session = await container.session_manager.refresh()
        assert container.session_manager.token == "access-2"

    assert session.refresh_token == "refresh-1"
    (sent,) = backend.calls("POST", "/auth/refresh")
    assert sent.headers["authorization"] == "Bearer access-1"
