# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JWT session tokens.

Tokens are HS256-signed JWTs carrying the account id as ``sub`` plus the
username, issue time and expiry. Nothing is stored server side; expiry and
signature are the only validity checks.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from authgate.domain.accounts.entities import Account, SessionToken
from authgate.domain.accounts.exceptions import InvalidSessionError
from authgate.domain.accounts.repositories import TokenIssuer
from authgate.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JoseTokenIssuer(TokenIssuer):
    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 86400,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    def issue(self, account: Account) -> SessionToken:
        # JWT timestamps are whole seconds.
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._ttl
        claims: dict[str, Any] = {
            "sub": str(account.id),
            "username": account.username,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": uuid.uuid4().hex,
        }
        value = jwt.encode(claims, self._secret, algorithm=self._algorithm)
        logger.debug(f"tokens.issue: account_id={account.id} exp={expires_at.isoformat()}")
        return SessionToken(
            account_id=account.id,
            value=value,
            issued_at=issued_at,
            expires_at=expires_at,
        )

    def validate(self, token: str) -> SessionToken:
        try:
            # Expiry is checked below against the injected clock.
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            logger.info(f"tokens.validate: rejected token ({type(exc).__name__})")
            raise InvalidSessionError(context={"reason": "malformed"}) from exc

        try:
            account_id = int(claims["sub"])
            issued_at = datetime.fromtimestamp(int(claims["iat"]), tz=UTC)
            expires_at = datetime.fromtimestamp(int(claims["exp"]), tz=UTC)
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidSessionError(context={"reason": "malformed"}) from exc

        decoded = SessionToken(
            account_id=account_id,
            value=token,
            issued_at=issued_at,
            expires_at=expires_at,
        )
        if decoded.is_expired(self._clock()):
            raise InvalidSessionError(context={"reason": "expired"})
        return decoded
