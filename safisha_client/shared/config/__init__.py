# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    DEFAULT_API_BASE_URL,
    ClientConfig,
    StorageConfig,
    load_config,
    validate_base_url,
)

__all__ = [
    "DEFAULT_API_BASE_URL",
    "ClientConfig",
    "StorageConfig",
    "load_config",
    "validate_base_url",
]
