# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from authgate.domain.exceptions import InvariantViolation

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(slots=True, frozen=True)
class AccountSummary:

    id: int
    username: str
    email: str


@dataclass(slots=True, frozen=True)
class Account:

    id: int
    username: str
    email: str
    password_hash: str
    created_at: datetime

    def summary(self) -> AccountSummary:
        return AccountSummary(id=self.id, username=self.username, email=self.email)


@dataclass(slots=True, frozen=True)
class SessionToken:
    """Signed credential; only ``value`` ever leaves the server."""

    account_id: int
    value: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) >= self.expires_at


@dataclass(slots=True, frozen=True)
class SessionCookie:

    name: str
    value: str
    path: str
    max_age: int
    http_only: bool
    secure: bool
    same_site: str | None
    expires: datetime | None = None

    @property
    def is_cleared(self) -> bool:
        return self.value == "" and self.max_age == 0


@dataclass(slots=True, frozen=True)
class CookiePolicy:
    """How session tokens are carried in cookies: name, scope and flags."""

    name: str
    path: str
    max_age: int
    http_only: bool = True
    secure: bool = False
    same_site: str | None = "Strict"

    def __post_init__(self) -> None:
        if not self.name:
            raise InvariantViolation("cookie name must not be empty", field="name")
        if not self.path.startswith("/"):
            raise InvariantViolation("cookie path must be absolute", field="path")
        if self.max_age <= 0:
            raise InvariantViolation("cookie max age must be positive", field="max_age")

    def session_cookie(self, token: SessionToken) -> SessionCookie:
        return SessionCookie(
            name=self.name,
            value=token.value,
            path=self.path,
            max_age=self.max_age,
            http_only=self.http_only,
            secure=self.secure,
            same_site=self.same_site,
            expires=token.expires_at,
        )

    def cleared_cookie(self) -> SessionCookie:
        return SessionCookie(
            name=self.name,
            value="",
            path=self.path,
            max_age=0,
            http_only=self.http_only,
            secure=self.secure,
            same_site=self.same_site,
            expires=EPOCH,
        )
