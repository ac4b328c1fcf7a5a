# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .middleware import (
    admin_required,
    auth_required,
    bearer_token,
    configure_auth,
    current_user,
)

__all__ = [
    "admin_required",
    "auth_required",
    "bearer_token",
    "configure_auth",
    "current_user",
]
