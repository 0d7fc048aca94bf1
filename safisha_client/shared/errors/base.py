# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, cast


@dataclass(slots=True)
class AppError(Exception):
    message: str
    code: str = "app_error"
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_code = code or cast(str, getattr(self, "code", "domain_error"))
        super().__init__(
            message=message or resolved_code, code=resolved_code, context=context
        )


class InfrastructureError(AppError):
    def __init__(
        self,
        message: str,
        *,
        code: str = "infrastructure_error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code=code, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        message: str = "validation failed",
        *,
        code: str = "validation_error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message=message, code=code, context=context)


class StorageError(InfrastructureError):
    def __init__(
        self,
        message: str,
        *,
        code: str = "storage_error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)


class MissingRefreshTokenError(DomainError):
    code = "refresh_token_missing"


__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "MissingRefreshTokenError",
    "StorageError",
    "ValidationError",
]
