# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from safisha_client.application import AuthApi, SessionManager, SessionState
from safisha_client.container import Container, create_container
from safisha_client.domain import Session, TokenStore, User, UserRole
from safisha_client.infrastructure.http import RequestClient, RequestDescriptor
from safisha_client.shared.config import ClientConfig, load_config
from safisha_client.shared.errors import (
    AppError,
    InvalidAuthResponseError,
    RequestError,
    StorageError,
    TransportError,
    ValidationError,
)

__all__ = [
    "AppError",
    "AuthApi",
    "ClientConfig",
    "Container",
    "InvalidAuthResponseError",
    "RequestClient",
    "RequestDescriptor",
    "RequestError",
    "Session",
    "SessionManager",
    "SessionState",
    "StorageError",
    "TokenStore",
    "TransportError",
    "User",
    "UserRole",
    "ValidationError",
    "create_container",
    "load_config",
]
