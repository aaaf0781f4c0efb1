# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Account, AccountSummary, CookiePolicy, SessionCookie, SessionToken
from .exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidSessionError,
)
from .repositories import CredentialStore, PasswordHasher, TokenIssuer

__all__ = [
    "Account",
    "AccountSummary",
    "CookiePolicy",
    "CredentialStore",
    "DuplicateEmailError",
    "DuplicateUsernameError",
    "InvalidCredentialsError",
    "InvalidSessionError",
    "PasswordHasher",
    "SessionCookie",
    "SessionToken",
    "TokenIssuer",
]
