# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authentication state owner for the presentation layer."""

from __future__ import annotations

import webbrowser
from collections.abc import Awaitable, Callable, Iterator, Mapping
from contextlib import contextmanager
from enum import StrEnum
from typing import Any, TypeVar

from safisha_client.application.services import AuthApi
from safisha_client.application.session.error_messages import describe_error
from safisha_client.domain.users import Session, User, is_locally_expired
from safisha_client.infrastructure.http import RequestClient, RequestDescriptor
from safisha_client.interfaces.dto import LoginRequestDTO, RegisterRequestDTO
from safisha_client.shared.errors import AppError, MissingRefreshTokenError
from safisha_client.shared.logging import correlation_scope, logger

T = TypeVar("T")

SessionListener = Callable[["SessionManager"], None]
UrlOpener = Callable[[str], Any]


class SessionState(StrEnum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class SessionManager:
    """Single writer of the token/user pair.

    Every state-changing call takes a sequence number; results are applied
    only while that number is still the latest one issued, so a slow call
    finishing after a newer one cannot overwrite the newer state.
    """

    def __init__(
        self,
        *,
        client: RequestClient,
        auth_api: AuthApi | None = None,
        url_opener: UrlOpener | None = None,
        expiry_leeway: float = 0.0,
    ) -> None:
        self._client = client
        self._auth = auth_api or AuthApi(client)
        self._open_url = url_opener or webbrowser.open
        self._expiry_leeway = expiry_leeway

        self._session: Session | None = None
        self._error: str | None = None
        self._seq = 0
        self._in_flight = 0
        self._listeners: list[SessionListener] = []
        self._detach = client.add_unauthorized_listener(self._on_unauthorized)

        logger.debug("SessionManager: initialized")

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def user(self) -> User | None:
        return self._session.user if self._session else None

    @property
    def token(self) -> str | None:
        return self._session.token if self._session else None

    @property
    def is_authenticated(self) -> bool:
        session = self._session
        return (
            session is not None
            and bool(session.token)
            and session.user is not None
            and self._client.token is not None
        )

    @property
    def state(self) -> SessionState:
        if self.is_authenticated:
            return SessionState.AUTHENTICATED
        return SessionState.ANONYMOUS

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def clear_error(self) -> None:
        self._set_error(None)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def close(self) -> None:
        self._detach()
        self._listeners.clear()

    async def restore(self) -> bool:
        seq = self._next_seq()
        with correlation_scope(f"auth-{seq}"):
            token = self._client.token
            if not token:
                logger.debug("SessionManager: no persisted token, staying anonymous")
                return False

            if is_locally_expired(token, leeway=self._expiry_leeway):
                logger.info("SessionManager: persisted token expired, clearing")
                self._invalidate_if_current(seq)
                return False

            try:
                with self._loading():
                    user = await self._auth.fetch_profile()
            except AppError as e:
                logger.info(f"SessionManager: rehydration failed code={e.code}, clearing")
                self._invalidate_if_current(seq)
                return False

            if seq != self._seq or self._client.token != token:
                logger.debug(f"SessionManager: stale rehydration ignored seq={seq}")
                return False

            self._replace(
                Session(token=token, user=user, refresh_token=self._client.refresh_token)
            )
            logger.info(
                f"SessionManager: session restored user_id={user.id} role={user.role}"
            )
            return True

    async def login(self, credentials: LoginRequestDTO | Mapping[str, Any]) -> Session:
        return await self._establish("login", lambda: self._auth.login(credentials))

    async def register(self, details: RegisterRequestDTO | Mapping[str, Any]) -> Session:
        return await self._establish("register", lambda: self._auth.register(details))

    async def complete_federated_login(self, code: str, provider: str = "google") -> Session:
        return await self._establish(
            "federated_login", lambda: self._auth.federated_callback(provider, code)
        )

    def federated_login(self, provider: str = "google") -> str:
        url = self._auth.federated_login_url(provider)
        logger.info(f"SessionManager: starting federated login provider={provider}")
        if self._open_url(url) is False:
            logger.warning(f"SessionManager: could not open browser url={url}")
        return url

    async def refresh(self) -> Session:
        current = self._session

        async def _call() -> Session:
            if current is None or not current.refresh_token:
                raise MissingRefreshTokenError("No refresh token available")
            return await self._auth.refresh(current)

        return await self._establish("refresh", _call)

    async def logout(self) -> None:
        seq = self._next_seq()
        with correlation_scope(f"auth-{seq}"):
            try:
                with self._loading():
                    await self._auth.logout()
            except AppError as e:
                logger.warning(
                    f"SessionManager: logout request failed code={e.code}, "
                    f"clearing local session anyway"
                )
            finally:
                if self._invalidate_if_current(seq):
                    logger.info("SessionManager: logged out")

    async def forgot_password(self, email: str) -> str:
        return await self._run("forgot_password", lambda: self._auth.forgot_password(email))

    async def reset_password(self, token: str, new_password: str) -> str:
        return await self._run(
            "reset_password", lambda: self._auth.reset_password(token, new_password)
        )

    async def verify_email(self, token: str) -> str:
        return await self._run("verify_email", lambda: self._auth.verify_email(token))

    async def resend_verification(self) -> str:
        return await self._run("resend_verification", self._auth.resend_verification)

    async def _establish(
        self, operation: str, call: Callable[[], Awaitable[Session]]
    ) -> Session:
        seq = self._next_seq()
        with correlation_scope(f"auth-{seq}"):
            self._set_error(None)
            try:
                with self._loading():
                    session = await call()
            except AppError as e:
                logger.warning(f"SessionManager: {operation} failed code={e.code}")
                if seq == self._seq:
                    self._set_error(describe_error(operation, e))
                raise

            if seq != self._seq:
                logger.info(
                    f"SessionManager: stale {operation} result ignored "
                    f"seq={seq} latest={self._seq}"
                )
                return session

            self._client.set_token(session.token, refresh_token=session.refresh_token)
            self._replace(session)
            logger.info(
                f"SessionManager: {operation} succeeded "
                f"user_id={session.user.id} role={session.user.role}"
            )
            return session

    async def _run(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        self._set_error(None)
        try:
            with self._loading():
                return await call()
        except AppError as e:
            logger.warning(f"SessionManager: {operation} failed code={e.code}")
            self._set_error(describe_error(operation, e))
            raise

    def _on_unauthorized(self, descriptor: RequestDescriptor) -> None:
        if self._auth.is_session_endpoint(descriptor.path):
            return
        session = self._session
        if session is None or descriptor.bearer_token != session.token:
            return
        if self._client.token != session.token:
            return
        # Calls issued after the rejected request keep their sequence numbers.
        logger.warning(
            f"SessionManager: token rejected by server path={descriptor.path}, "
            f"clearing session"
        )
        self._clear()

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def _invalidate_if_current(self, seq: int) -> bool:
        if seq != self._seq:
            logger.debug(f"SessionManager: stale invalidation ignored seq={seq}")
            return False
        self._clear()
        return True

    def _clear(self) -> None:
        self._client.set_token(None)
        self._replace(None)

    def _replace(self, session: Session | None) -> None:
        if session is self._session:
            return
        self._session = session
        self._notify()

    def _set_error(self, message: str | None) -> None:
        if message == self._error:
            return
        self._error = message
        self._notify()

    @contextmanager
    def _loading(self) -> Iterator[None]:
        self._in_flight += 1
        if self._in_flight == 1:
            self._notify()
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("SessionManager: listener failed")


__all__ = ["SessionListener", "SessionManager", "SessionState", "UrlOpener"]
