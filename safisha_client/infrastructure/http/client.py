# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JSON-over-HTTP client with bearer token injection."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import httpx
from pydantic import BaseModel

from safisha_client.domain.users import TokenStore
from safisha_client.infrastructure.storage import NullTokenStore
from safisha_client.shared.config import ClientConfig, load_config, validate_base_url
from safisha_client.shared.errors import (
    ResponseDecodeError,
    StorageError,
    TransportError,
    ValidationError,
    error_from_response,
)
from safisha_client.shared.logging import logger

BEARER_PREFIX = "Bearer "


@dataclass(slots=True, frozen=True)
class RequestDescriptor:
    method: str
    path: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None

    @property
    def bearer_token(self) -> str | None:
        value = self.headers.get("Authorization")
        if value and value.startswith(BEARER_PREFIX):
            return value[len(BEARER_PREFIX):]
        return None


UnauthorizedListener = Callable[[RequestDescriptor], None]


def _serialize_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)
    return body


class RequestClient:
    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        token_store: TokenStore | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or load_config()
        self._store: TokenStore = token_store or NullTokenStore()
        self._base_url = self._config.api_base_url
        self._unauthorized_listeners: list[UnauthorizedListener] = []
        if base_url is not None:
            self.configure(base_url)
        self._http = httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(None),
            follow_redirects=True,
        )
        self._token, self._refresh_token = self._load_tokens()

        logger.debug(
            f"RequestClient: initialized base_url={self._base_url} "
            f"store={type(self._store).__name__} has_token={self._token is not None}"
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def refresh_token(self) -> str | None:
        return self._refresh_token

    def configure(self, base_url: str | None = None) -> None:
        if base_url is None:
            self._base_url = self._config.api_base_url
            logger.debug(f"RequestClient: base_url reset to default {self._base_url}")
            return
        try:
            self._base_url = validate_base_url(base_url)
        except ValueError as e:
            raise ValidationError(
                str(e), code="invalid_base_url", context={"base_url": base_url}
            ) from e
        logger.debug(f"RequestClient: base_url set to {self._base_url}")

    def set_token(self, token: str | None, *, refresh_token: str | None = None) -> None:
        self._token = token or None
        self._refresh_token = (refresh_token or None) if self._token else None
        try:
            if self._token is None:
                self._store.clear()
            else:
                self._store.write(self._token, self._refresh_token)
        except StorageError as e:
            logger.warning(
                f"RequestClient: token persistence failed code={e.code} "
                f"store={type(self._store).__name__}; keeping in-memory token"
            )

    def add_unauthorized_listener(self, listener: UnauthorizedListener) -> Callable[[], None]:
        self._unauthorized_listeners.append(listener)

        def _remove() -> None:
            if listener in self._unauthorized_listeners:
                self._unauthorized_listeners.remove(listener)

        return _remove

    def url_for(self, endpoint: str) -> str:
        try:
            absolute = httpx.URL(endpoint).is_absolute_url
        except httpx.InvalidURL as e:
            logger.warning(f"RequestClient: invalid endpoint {endpoint!r} error={e}")
            raise ValidationError(
                str(e), code="invalid_endpoint", context={"endpoint": endpoint}
            ) from e
        if absolute:
            return endpoint
        return f"{self._base_url}/{endpoint.lstrip('/')}"

    def build_request(self, method: str, endpoint: str, body: Any = None) -> RequestDescriptor:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._token:
            headers["Authorization"] = f"{BEARER_PREFIX}{self._token}"
        return RequestDescriptor(
            method=method.upper(),
            path=endpoint,
            url=self.url_for(endpoint),
            headers=MappingProxyType(headers),
            body=_serialize_body(body),
        )

    async def request(self, method: str, endpoint: str, body: Any = None) -> Any:
        descriptor = self.build_request(method, endpoint, body)
        logger.debug(f"RequestClient: {descriptor.method} {descriptor.url}")

        try:
            response = await self._http.request(
                descriptor.method,
                descriptor.url,
                headers=dict(descriptor.headers),
                json=descriptor.body,
            )
        except httpx.RequestError as e:
            reason = str(e) or type(e).__name__
            logger.warning(
                f"RequestClient: transport failure {descriptor.method} {descriptor.url} "
                f"error={type(e).__name__}: {reason}"
            )
            raise TransportError(
                reason,
                cause=e,
                context={"method": descriptor.method, "url": descriptor.url},
            ) from e

        if not response.is_success:
            error = error_from_response(response)
            logger.warning(
                f"RequestClient: {descriptor.method} {descriptor.path} -> "
                f"{response.status_code} message={error.message}"
            )
            if self._config.debug_logging:
                logger.debug(f"RequestClient: error body={response.text[:500]}")
            if response.status_code == 401 and descriptor.bearer_token:
                self._notify_unauthorized(descriptor)
            raise error

        logger.debug(
            f"RequestClient: {descriptor.method} {descriptor.path} -> {response.status_code}"
        )
        return self._decode(response)

    async def get(self, endpoint: str) -> Any:
        return await self.request("GET", endpoint)

    async def post(self, endpoint: str, data: Any = None) -> Any:
        return await self.request("POST", endpoint, data)

    async def put(self, endpoint: str, data: Any = None) -> Any:
        return await self.request("PUT", endpoint, data)

    async def patch(self, endpoint: str, data: Any = None) -> Any:
        return await self.request("PATCH", endpoint, data)

    async def delete(self, endpoint: str) -> Any:
        return await self.request("DELETE", endpoint)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> RequestClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _load_tokens(self) -> tuple[str | None, str | None]:
        try:
            token = self._store.read()
            return token, self._store.read_refresh() if token else None
        except StorageError as e:
            logger.warning(
                f"RequestClient: could not read persisted token code={e.code}; "
                f"starting without token"
            )
            return None, None

    def _notify_unauthorized(self, descriptor: RequestDescriptor) -> None:
        for listener in list(self._unauthorized_listeners):
            try:
                listener(descriptor)
            except Exception:
                logger.exception(
                    f"RequestClient: unauthorized listener failed path={descriptor.path}"
                )

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(
                f"RequestClient: undecodable body status={response.status_code} "
                f"url={response.request.url}"
            )
            raise ResponseDecodeError(response.status_code, response.text) from e


__all__ = ["RequestClient", "RequestDescriptor", "UnauthorizedListener"]
