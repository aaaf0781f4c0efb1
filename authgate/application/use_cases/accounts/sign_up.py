# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from authgate.domain.accounts.entities import Account
from authgate.domain.accounts.exceptions import DuplicateEmailError, DuplicateUsernameError
from authgate.domain.accounts.repositories import CredentialStore, PasswordHasher
from authgate.shared.logging import logger


class SignUpUseCase:
    def __init__(self, *, accounts: CredentialStore, password_hasher: PasswordHasher) -> None:
        self._accounts = accounts
        self._password_hasher = password_hasher

    def execute(self, username: str, email: str, password: str) -> Account:
        # Username is checked first so a taken username wins over a taken email.
        if self._accounts.exists_by_username(username):
            raise DuplicateUsernameError()
        if self._accounts.exists_by_email(email):
            raise DuplicateEmailError()

        hashed = self._password_hasher.hash(password)
        account = Account(
            id=0,
            username=username,
            email=email,
            password_hash=hashed,
            created_at=datetime.now(UTC),
        )
        persisted = self._accounts.add(account)
        logger.info(f"accounts.sign_up: created account_id={persisted.id}")
        return persisted
