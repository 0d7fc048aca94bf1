# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .error_messages import describe_error
from .session_manager import SessionListener, SessionManager, SessionState, UrlOpener

__all__ = [
    "SessionListener",
    "SessionManager",
    "SessionState",
    "UrlOpener",
    "describe_error",
]
