"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

import httpx

from safisha_client.application.services import AuthApi
from safisha_client.application.session import SessionManager, UrlOpener
from safisha_client.domain.users import TokenStore
from safisha_client.infrastructure.http import RequestClient
from safisha_client.infrastructure.storage import create_token_store
from safisha_client.shared.config import ClientConfig, load_config
from safisha_client.shared.logging import logger, setup_logging


class Container:
    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        url_opener: UrlOpener | None = None,
    ) -> None:
        self.config = config or load_config()
        self._transport = transport
        self._url_opener = url_opener

    @cached_property
    def token_store(self) -> TokenStore:
        return create_token_store(self.config.storage)

    @cached_property
    def request_client(self) -> RequestClient:
        return RequestClient(
            config=self.config,
            token_store=self.token_store,
            transport=self._transport,
        )

    @cached_property
    def auth_api(self) -> AuthApi:
        return AuthApi(self.request_client)

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            client=self.request_client,
            auth_api=self.auth_api,
            url_opener=self._url_opener,
        )

    async def start(self) -> SessionManager:
        manager = self.session_manager
        restored = await manager.restore()
        logger.info(
            f"Container: started base_url={self.request_client.base_url} "
            f"state={manager.state} restored={restored}"
        )
        return manager

    async def aclose(self) -> None:
        if "session_manager" in self.__dict__:
            self.session_manager.close()
        if "request_client" in self.__dict__:
            await self.request_client.aclose()

    async def __aenter__(self) -> Container:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def create_container(
    config: ClientConfig | None = None,
    *,
    configure_logging: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
    url_opener: UrlOpener | None = None,
) -> Container:
    config = config or load_config()
    if configure_logging:
        setup_logging(config.log_level)
    return Container(config, transport=transport, url_opener=url_opener)


__all__ = ["Container", "create_container"]
