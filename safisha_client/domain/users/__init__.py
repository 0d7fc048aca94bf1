# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Session, User, UserRole
from .repositories import TokenStore
from .tokens import is_locally_expired, token_expiry

__all__ = [
    "Session",
    "TokenStore",
    "User",
    "UserRole",
    "is_locally_expired",
    "token_expiry",
]
