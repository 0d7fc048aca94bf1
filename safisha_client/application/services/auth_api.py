# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Wrappers over the backend authentication endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from safisha_client.domain.users import Session, User
from safisha_client.infrastructure.http import RequestClient
from safisha_client.interfaces.dto import (
    AuthResponseDTO,
    FederatedCallbackDTO,
    ForgotPasswordDTO,
    LoginRequestDTO,
    ProfileResponseDTO,
    RefreshRequestDTO,
    RegisterRequestDTO,
    ResetPasswordDTO,
    VerifyEmailDTO,
)
from safisha_client.shared.errors import (
    InvalidAuthResponseError,
    raise_validation_error,
)
from safisha_client.shared.logging import logger

M = TypeVar("M", bound=BaseModel)

LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
LOGOUT_PATH = "/auth/logout"
PROFILE_PATH = "/auth/profile"
REFRESH_PATH = "/auth/refresh"
FORGOT_PASSWORD_PATH = "/auth/forgot-password"
RESET_PASSWORD_PATH = "/auth/reset-password"
VERIFY_EMAIL_PATH = "/auth/verify-email"
RESEND_VERIFICATION_PATH = "/auth/resend-verification"


def federated_path(provider: str) -> str:
    return f"/auth/{provider}"


def federated_callback_path(provider: str) -> str:
    return f"/auth/{provider}/callback"


def _coerce(model: type[M], value: M | Mapping[str, Any]) -> M:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except PydanticValidationError as exc:
        raise_validation_error(exc)


def _parse_session(payload: Any, *, fallback: Session | None = None) -> Session:
    if not isinstance(payload, dict):
        raise InvalidAuthResponseError("body", status=200, body=payload)
    try:
        response = AuthResponseDTO.model_validate(payload)
    except PydanticValidationError as exc:
        logger.warning(f"AuthApi: malformed auth response errors={exc.error_count()}")
        raise InvalidAuthResponseError("user", status=200, body=payload) from exc

    token = response.access_token
    if not token:
        raise InvalidAuthResponseError("token", status=200, body=payload)

    if response.user is not None:
        user = response.user.to_entity()
    elif fallback is not None:
        user = fallback.user
    else:
        raise InvalidAuthResponseError("user", status=200, body=payload)

    refresh_token = response.resolved_refresh_token
    if refresh_token is None and fallback is not None:
        refresh_token = fallback.refresh_token
    return Session(token=token, user=user, refresh_token=refresh_token)


class AuthApi:
    # Requests to these paths never invalidate the current session on 401.
    SESSION_ENDPOINTS = frozenset(
        {LOGIN_PATH, REGISTER_PATH, REFRESH_PATH, LOGOUT_PATH, RESET_PASSWORD_PATH}
    )

    def __init__(self, client: RequestClient) -> None:
        self._client = client

    def is_session_endpoint(self, path: str) -> bool:
        normalized = "/" + path.lstrip("/")
        return normalized in self.SESSION_ENDPOINTS or normalized.endswith("/callback")

    async def login(self, credentials: LoginRequestDTO | Mapping[str, Any]) -> Session:
        dto = _coerce(LoginRequestDTO, credentials)
        payload = await self._client.post(LOGIN_PATH, dto)
        return _parse_session(payload)

    async def register(self, details: RegisterRequestDTO | Mapping[str, Any]) -> Session:
        dto = _coerce(RegisterRequestDTO, details)
        payload = await self._client.post(REGISTER_PATH, dto)
        return _parse_session(payload)

    async def federated_callback(self, provider: str, code: str) -> Session:
        dto = _coerce(FederatedCallbackDTO, {"code": code})
        payload = await self._client.post(federated_callback_path(provider), dto)
        return _parse_session(payload)

    async def refresh(self, current: Session) -> Session:
        dto = _coerce(RefreshRequestDTO, {"refresh_token": current.refresh_token or ""})
        payload = await self._client.post(REFRESH_PATH, dto)
        return _parse_session(payload, fallback=current)

    async def logout(self) -> None:
        await self._client.post(LOGOUT_PATH)

    async def fetch_profile(self) -> User:
        payload = await self._client.get(PROFILE_PATH)
        try:
            return ProfileResponseDTO.model_validate(payload).user.to_entity()
        except PydanticValidationError as exc:
            raise InvalidAuthResponseError("user", status=200, body=payload) from exc

    def federated_login_url(self, provider: str) -> str:
        return self._client.url_for(federated_path(provider))

    async def forgot_password(self, email: str) -> str:
        dto = _coerce(ForgotPasswordDTO, {"email": email})
        return self._message(await self._client.post(FORGOT_PASSWORD_PATH, dto))

    async def reset_password(self, token: str, new_password: str) -> str:
        dto = _coerce(ResetPasswordDTO, {"token": token, "new_password": new_password})
        return self._message(await self._client.post(RESET_PASSWORD_PATH, dto))

    async def verify_email(self, token: str) -> str:
        dto = _coerce(VerifyEmailDTO, {"token": token})
        return self._message(await self._client.post(VERIFY_EMAIL_PATH, dto))

    async def resend_verification(self) -> str:
        return self._message(await self._client.post(RESEND_VERIFICATION_PATH))

    @staticmethod
    def _message(payload: Any) -> str:
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            return payload["message"]
        return ""


__all__ = ["AuthApi", "federated_callback_path", "federated_path"]
