# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authentication session manager.

Sign-up, sign-in and sign-out behind one object. Sessions are stateless:
sign-in hands the client a signed token inside a cookie and sign-out hands
back a cleared cookie, nothing is stored server side besides the account.
"""

from __future__ import annotations

from dataclasses import dataclass

from authgate.application.use_cases.accounts import (
    ResolveSessionUseCase,
    SignInUseCase,
    SignUpUseCase,
)
from authgate.domain.accounts.entities import (
    Account,
    AccountSummary,
    CookiePolicy,
    SessionCookie,
    SessionToken,
)
from authgate.domain.accounts.repositories import CredentialStore, PasswordHasher, TokenIssuer


@dataclass(slots=True, frozen=True)
class SignInResult:
    cookie: SessionCookie
    token: SessionToken
    account: AccountSummary


class AuthSessionManager:
    def __init__(
        self,
        *,
        accounts: CredentialStore,
        password_hasher: PasswordHasher,
        tokens: TokenIssuer,
        cookie_policy: CookiePolicy,
    ) -> None:
        self._cookie_policy = cookie_policy
        self._sign_up = SignUpUseCase(accounts=accounts, password_hasher=password_hasher)
        self._sign_in = SignInUseCase(
            accounts=accounts, password_hasher=password_hasher, tokens=tokens
        )
        self._resolve = ResolveSessionUseCase(accounts=accounts, tokens=tokens)

    @property
    def cookie_policy(self) -> CookiePolicy:
        return self._cookie_policy

    def sign_up(self, username: str, email: str, password: str) -> Account:
        """Create an account; raises ``DuplicateUsernameError`` or ``DuplicateEmailError``."""
        return self._sign_up.execute(username, email, password)

    def sign_in(self, username: str, password: str) -> SignInResult:
        """Check credentials and issue a session cookie; raises ``InvalidCredentialsError``."""
        session = self._sign_in.execute(username, password)
        return SignInResult(
            cookie=self._cookie_policy.session_cookie(session.token),
            token=session.token,
            account=session.account,
        )

    def sign_out(self) -> SessionCookie:
        return self._cookie_policy.cleared_cookie()

    def resolve_session(self, token: str | None) -> AccountSummary:
        return self._resolve.execute(token)
