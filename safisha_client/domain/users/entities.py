# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class UserRole(StrEnum):
    CUSTOMER = "customer"
    SERVICE_PROVIDER = "service_provider"
    ADMIN = "admin"


@dataclass(slots=True, frozen=True)
class User:

    id: str
    email: str
    role: UserRole
    first_name: str = ""
    last_name: str = ""
    phone: str | None = None
    is_active: bool = True
    is_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    profile: Mapping[str, Any] = field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def is_service_provider(self) -> bool:
        return self.role is UserRole.SERVICE_PROVIDER


@dataclass(slots=True, frozen=True)
class Session:
    """Token and user of an authenticated principal, always replaced together."""

    token: str
    user: User
    refresh_token: str | None = None

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("session token must be non-empty")
