# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from safisha_client.infrastructure.http.client import (
    RequestClient,
    RequestDescriptor,
    UnauthorizedListener,
)

__all__ = ["RequestClient", "RequestDescriptor", "UnauthorizedListener"]
