# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Account, SessionToken


class CredentialStore(Protocol):
    def exists_by_username(self, username: str) -> bool: ...
    def exists_by_email(self, email: str) -> bool: ...
    def find_by_username(self, username: str) -> Account | None: ...
    def find_by_id(self, account_id: int) -> Account | None: ...

    def add(self, account: Account) -> Account:
        """Persist ``account`` and return it with its assigned id.

        Raises ``DuplicateUsernameError`` / ``DuplicateEmailError`` when a
        concurrent writer claimed the username or email first.
        """
        ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenIssuer(Protocol):
    def issue(self, account: Account) -> SessionToken: ...

    def validate(self, token: str) -> SessionToken:
        """Return the decoded token or raise ``InvalidSessionError``."""
        ...
