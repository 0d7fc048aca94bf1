# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any

import httpx

from .base import AppError


class TransportError(AppError):
    """No response was received: DNS failure, refused connection, timeout."""

    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code="transport_error", context=context)
        self.cause = cause


class RequestError(AppError):
    """The server answered with a status outside the 2xx range."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        body: Any = None,
        code: str = "request_failed",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        merged: dict[str, Any] = {"status": status}
        if context:
            merged.update(context)
        super().__init__(message=message, code=code, context=merged)
        self.status = status
        self.body = body

    @property
    def http_status(self) -> HTTPStatus | None:
        try:
            return HTTPStatus(self.status)
        except ValueError:
            return None


class ResponseDecodeError(RequestError):
    def __init__(self, status: int, body: str) -> None:
        super().__init__(
            f"Invalid JSON in response (status {status})",
            status=status,
            body=body,
            code="invalid_response_body",
        )


class InvalidAuthResponseError(RequestError):
    def __init__(self, missing: str, *, status: int, body: Any = None) -> None:
        super().__init__(
            f"Authentication response is missing {missing}",
            status=status,
            body=body,
            code="invalid_auth_response",
            context={"missing": missing},
        )


def _message_from_payload(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    for key in ("message", "error"):
        value = payload.get(key)
        if isinstance(value, list):
            parts = [str(item) for item in value if item not in (None, "")]
            if parts:
                return ", ".join(parts)
        elif isinstance(value, str) and value:
            return value
    return None


def extract_error_message(status: int, text: str) -> tuple[str, Any]:
    """Resolve a human readable reason for a failed response.

    Order: JSON ``message``, JSON ``error``, raw body text, then the
    generic ``HTTP error! status: <code>`` message. Returns the message
    and the decoded body (JSON value when parseable, else the raw text).
    """
    body: Any = text
    if text:
        try:
            body = json.loads(text)
        except ValueError:
            body = text
        else:
            message = _message_from_payload(body)
            if message:
                return message, body
        if text.strip():
            return text, body
    return f"HTTP error! status: {status}", body or None


def error_from_response(response: httpx.Response) -> RequestError:
    message, body = extract_error_message(response.status_code, response.text)
    return RequestError(message, status=response.status_code, body=body)


__all__ = [
    "InvalidAuthResponseError",
    "RequestError",
    "ResponseDecodeError",
    "TransportError",
    "error_from_response",
    "extract_error_message",
]
