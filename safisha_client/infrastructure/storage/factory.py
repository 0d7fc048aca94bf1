# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from safisha_client.domain.users import TokenStore
from safisha_client.infrastructure.storage.file_token_store import FileTokenStore
from safisha_client.infrastructure.storage.null_token_store import NullTokenStore
from safisha_client.shared.config import StorageConfig
from safisha_client.shared.logging import logger


def create_token_store(config: StorageConfig) -> TokenStore:
    if not config.persist_session or config.token_store_path is None:
        logger.debug("create_token_store: persistence disabled, using NullTokenStore")
        return NullTokenStore()

    path = config.token_store_path.expanduser()
    logger.debug(f"create_token_store: using FileTokenStore path={path}")
    return FileTokenStore(
        path, key=config.token_key, refresh_key=config.refresh_token_key
    )
