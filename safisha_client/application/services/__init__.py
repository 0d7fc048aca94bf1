# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth_api import AuthApi, federated_callback_path, federated_path

__all__ = ["AuthApi", "federated_callback_path", "federated_path"]
