# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from dataclasses import dataclass

from authgate.domain.accounts.entities import AccountSummary, SessionToken
from authgate.domain.accounts.exceptions import InvalidCredentialsError
from authgate.domain.accounts.repositories import CredentialStore, PasswordHasher, TokenIssuer


@dataclass(slots=True, frozen=True)
class AuthenticatedSession:
    token: SessionToken
    account: AccountSummary


class SignInUseCase:
    def __init__(
        self,
        *,
        accounts: CredentialStore,
        password_hasher: PasswordHasher,
        tokens: TokenIssuer,
    ) -> None:
        self._accounts = accounts
        self._password_hasher = password_hasher
        self._tokens = tokens
        self._missing_account_hash: str | None = None

    def _unknown_account_hash(self) -> str:
        if self._missing_account_hash is None:
            self._missing_account_hash = self._password_hasher.hash(secrets.token_urlsafe(16))
        return self._missing_account_hash

    def execute(self, username: str, password: str) -> AuthenticatedSession:
        account = self._accounts.find_by_username(username)
        if account is None:
            # Unknown usernames run one verify, same as a wrong password.
            self._password_hasher.verify(password, self._unknown_account_hash())
            raise InvalidCredentialsError()
        if not self._password_hasher.verify(password, account.password_hash):
            raise InvalidCredentialsError()

        token = self._tokens.issue(account)
        return AuthenticatedSession(token=token, account=account.summary())
