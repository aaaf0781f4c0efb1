from __future__ import annotations

import os
import tempfile
from dataclasses import replace
from datetime import UTC, datetime

# Must be set before any authgate module reads the cached config.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENABLE_RATE_LIMIT", "0")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "authgate-tests.log"))

import pytest

from authgate.application.services.session_manager import AuthSessionManager
from authgate.domain.accounts.entities import Account, CookiePolicy
from authgate.domain.accounts.exceptions import DuplicateEmailError, DuplicateUsernameError
from authgate.domain.accounts.repositories import CredentialStore, PasswordHasher
from authgate.infrastructure.tokens import JoseTokenIssuer


class InMemoryCredentialStore(CredentialStore):
    def __init__(self) -> None:
        self._accounts: dict[int, Account] = {}
        self._seq = 1

    def exists_by_username(self, username: str) -> bool:
        return any(a.username == username for a in self._accounts.values())

    def exists_by_email(self, email: str) -> bool:
        return any(a.email == email for a in self._accounts.values())

    def find_by_username(self, username: str) -> Account | None:
        return next((a for a in self._accounts.values() if a.username == username), None)

    def find_by_id(self, account_id: int) -> Account | None:
        return self._accounts.get(account_id)

    def add(self, account: Account) -> Account:
        if self.exists_by_username(account.username):
            raise DuplicateUsernameError()
        if self.exists_by_email(account.email):
            raise DuplicateEmailError()
        persisted = replace(account, id=self._seq)
        self._seq += 1
        self._accounts[persisted.id] = persisted
        return persisted

    def remove(self, account_id: int) -> None:
        self._accounts.pop(account_id, None)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


class Clock:
    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime.now(UTC).replace(microsecond=0)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def clock() -> Clock:
    return Clock()


@pytest.fixture()
def token_issuer(clock: Clock) -> JoseTokenIssuer:
    return JoseTokenIssuer(secret="unit-test-secret", ttl_seconds=3600, clock=clock)


@pytest.fixture()
def cookie_policy() -> CookiePolicy:
    return CookiePolicy(name="authgate_session", path="/api", max_age=3600)


@pytest.fixture()
def session_manager(
    store: InMemoryCredentialStore,
    hasher: DeterministicHasher,
    token_issuer: JoseTokenIssuer,
    cookie_policy: CookiePolicy,
) -> AuthSessionManager:
    return AuthSessionManager(
        accounts=store,
        password_hasher=hasher,
        tokens=token_issuer,
        cookie_policy=cookie_policy,
    )
