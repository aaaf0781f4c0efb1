# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .password_hashing import WerkzeugPasswordHasher
from .session_manager import AuthSessionManager, SignInResult

__all__ = ["AuthSessionManager", "SignInResult", "WerkzeugPasswordHasher"]
