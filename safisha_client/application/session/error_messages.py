# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from safisha_client.shared.errors import AppError, RequestError

_FALLBACK_MESSAGES = {
    "login": "Login failed",
    "register": "Registration failed",
    "federated_login": "Login failed",
    "refresh": "Session refresh failed",
}

_STATUS_MESSAGES: dict[str, dict[int, str]] = {
    "login": {
        401: "Invalid email or password",
        404: "User not found. Please check your email address.",
    },
    "register": {
        409: "An account with this email already exists",
    },
}


def describe_error(operation: str, error: AppError) -> str:
    """Turn a failed operation into a message fit for display."""
    if isinstance(error, RequestError):
        override = _STATUS_MESSAGES.get(operation, {}).get(error.status)
        if override:
            return override
    if error.message:
        return error.message
    return _FALLBACK_MESSAGES.get(
        operation, f"{operation.replace('_', ' ').capitalize()} failed"
    )
