# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from safisha_client.infrastructure.storage.factory import create_token_store
from safisha_client.infrastructure.storage.file_token_store import \
    FileTokenStore
from safisha_client.infrastructure.storage.null_token_store import \
    NullTokenStore

__all__ = ["FileTokenStore", "NullTokenStore", "create_token_store"]
