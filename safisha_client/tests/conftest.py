from __future__ import annotations

import inspect
import json
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio

from safisha_client.application.session import SessionManager
from safisha_client.infrastructure.http import RequestClient
from safisha_client.infrastructure.storage import FileTokenStore
from safisha_client.shared.config import ClientConfig, StorageConfig

BASE_URL = "http://api.test/api"

Handler = Callable[[httpx.Request], Any]


def user_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": 1,
        "email": "jane@example.com",
        "first_name": "Jane",
        "last_name": "Customer",
        "role": "CUSTOMER",
        "is_active": True,
        "is_verified": True,
        "loyalty_points": 40,
    }
    payload.update(overrides)
    return payload


def auth_payload(token: str = "token-1", **user_overrides: Any) -> dict[str, Any]:
    return {"token": token, "user": user_payload(**user_overrides)}


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None


class FakeBackend:
    """Routes requests by (method, path) for ``httpx.MockTransport``."""

    def __init__(self, prefix: str = "/api") -> None:
        self._prefix = prefix
        self._routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def respond(
        self,
        method: str,
        path: str,
        status: int = 200,
        *,
        json: Any = None,
        text: str | None = None,
    ) -> None:
        def _handler(_request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status, text=text)
            if json is not None:
                return httpx.Response(status, json=json)
            return httpx.Response(status)

        self._routes[(method.upper(), path)] = _handler

    def route(self, method: str, path: str, handler: Handler) -> None:
        self._routes[(method.upper(), path)] = handler

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == method.upper() and self._path(r) == path
        ]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, self._path(request)))
        if handler is None:
            return httpx.Response(404, json={"message": "route not found"})
        result = handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _path(self, request: httpx.Request) -> str:
        return request.url.path.removeprefix(self._prefix)


@pytest.fixture()
def token_path(tmp_path: Path) -> Path:
    return tmp_path / "session.json"


@pytest.fixture()
def config(token_path: Path) -> ClientConfig:
    return ClientConfig(
        api_base_url=BASE_URL,
        storage=StorageConfig(persist_session=True, token_store_path=token_path),
    )


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def store(token_path: Path) -> FileTokenStore:
    return FileTokenStore(token_path)


@pytest_asyncio.fixture()
async def client(
    config: ClientConfig, store: FileTokenStore, backend: FakeBackend
) -> AsyncIterator[RequestClient]:
    async with RequestClient(
        config=config, token_store=store, transport=backend.transport
    ) as http_client:
        yield http_client


@pytest.fixture()
def opened_urls() -> list[str]:
    return []


@pytest.fixture()
def manager(client: RequestClient, opened_urls: list[str]) -> SessionManager:
    def _open(url: str) -> bool:
        opened_urls.append(url)
        return True

    return SessionManager(client=client, url_opener=_open)
