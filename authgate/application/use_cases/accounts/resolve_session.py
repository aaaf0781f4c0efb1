# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for turning a session token back into the account it was issued for."""

from __future__ import annotations

from authgate.domain.accounts.entities import AccountSummary
from authgate.domain.accounts.exceptions import InvalidSessionError
from authgate.domain.accounts.repositories import CredentialStore, TokenIssuer


class ResolveSessionUseCase:
    def __init__(self, *, accounts: CredentialStore, tokens: TokenIssuer) -> None:
        self._accounts = accounts
        self._tokens = tokens

    def execute(self, token: str | None) -> AccountSummary:
        if not token:
            raise InvalidSessionError()
        decoded = self._tokens.validate(token)
        account = self._accounts.find_by_id(decoded.account_id)
        if account is None:
            raise InvalidSessionError(context={"reason": "account_not_found"})
        return account.summary()
