# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services import AuthApi
from .session import SessionManager, SessionState

__all__ = ["AuthApi", "SessionManager", "SessionState"]
