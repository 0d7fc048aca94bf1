# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users import Session, TokenStore, User, UserRole

__all__ = ["Session", "TokenStore", "User", "UserRole"]
