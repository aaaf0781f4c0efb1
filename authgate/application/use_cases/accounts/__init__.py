# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .resolve_session import ResolveSessionUseCase
from .sign_in import AuthenticatedSession, SignInUseCase
from .sign_up import SignUpUseCase

__all__ = [
    "AuthenticatedSession",
    "ResolveSessionUseCase",
    "SignInUseCase",
    "SignUpUseCase",
]
