# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, scoped_session

from authgate.application.services.password_hashing import WerkzeugPasswordHasher
from authgate.application.services.session_manager import AuthSessionManager
from authgate.domain.accounts.entities import CookiePolicy
from authgate.infrastructure.repositories.accounts import SqlAlchemyCredentialStore
from authgate.infrastructure.tokens import JoseTokenIssuer
from authgate.interfaces.http.controllers.auth_controller import AuthController
from authgate.interfaces.http.controllers.misc_controller import MiscController
from authgate.shared.config import AppConfig


class Container:
    """Composition root: builds every collaborator once and wires them by hand."""

    def __init__(
        self,
        config: AppConfig,
        *,
        engine: Engine,
        session_factory: scoped_session[Session],
    ) -> None:
        self._config = config
        self._engine = engine
        self._session_factory = session_factory

    @property
    def engine(self) -> Engine:
        return self._engine

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def credential_store(self) -> SqlAlchemyCredentialStore:
        return SqlAlchemyCredentialStore(self._session_factory)

    @cached_property
    def token_issuer(self) -> JoseTokenIssuer:
        session = self._config.session
        return JoseTokenIssuer(
            secret=session.jwt_secret,
            algorithm=session.jwt_algorithm,
            ttl_seconds=session.jwt_expiration_seconds,
        )

    @cached_property
    def cookie_policy(self) -> CookiePolicy:
        session = self._config.session
        security = self._config.security
        return CookiePolicy(
            name=session.cookie_name,
            path=session.cookie_path,
            max_age=session.jwt_expiration_seconds,
            http_only=session.cookie_httponly,
            secure=security.cookie_secure,
            same_site=security.cookie_samesite or None,
        )

    @cached_property
    def session_manager(self) -> AuthSessionManager:
        return AuthSessionManager(
            accounts=self.credential_store,
            password_hasher=self.password_hasher,
            tokens=self.token_issuer,
            cookie_policy=self.cookie_policy,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(session_manager=self.session_manager)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self._engine)
