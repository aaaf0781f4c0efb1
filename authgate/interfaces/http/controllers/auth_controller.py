# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from authgate.application.services.session_manager import AuthSessionManager
from authgate.domain.accounts.entities import AccountSummary
from authgate.domain.accounts.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
)
from authgate.infrastructure.audit import AuditAction, audit_log
from authgate.interfaces.http.auth import auth_required
from authgate.interfaces.http.cookies import apply_cookie
from authgate.interfaces.http.dto.auth import (
    MessageDTO,
    UserInfoDTO,
    parse_signin_request,
    parse_signup_request,
)
from authgate.shared.logging import logger
from authgate.shared.middleware.rate_limit import rate_limit


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class AuthController:
    """Routes for sign-up, sign-in and sign-out under ``/api/auth``."""

    def __init__(self, *, session_manager: AuthSessionManager) -> None:
        self._session_manager = session_manager

    @rate_limit(limit=5, window_seconds=60.0)
    def signup(self) -> tuple[Response, int]:
        dto = parse_signup_request(request.get_json(silent=True))

        try:
            account = self._session_manager.sign_up(dto.username, dto.email, dto.password)
        except (DuplicateUsernameError, DuplicateEmailError) as exc:
            audit_log(
                AuditAction.SIGN_UP_REJECTED,
                ip_address=_get_client_ip(),
                details={"username": dto.username, "reason": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.SIGN_UP,
            account_id=account.id,
            ip_address=_get_client_ip(),
            details={"username": account.username},
        )
        payload = MessageDTO(message="User registered successfully!").model_dump()
        return jsonify(payload), 200

    @rate_limit(limit=10, window_seconds=60.0)
    def signin(self) -> tuple[Response, int]:
        dto = parse_signin_request(request.get_json(silent=True))
        ip_address = _get_client_ip()

        try:
            result = self._session_manager.sign_in(dto.username, dto.password)
        except InvalidCredentialsError:
            audit_log(
                AuditAction.SIGN_IN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username},
                success=False,
            )
            raise

        audit_log(
            AuditAction.SIGN_IN_SUCCESS,
            account_id=result.account.id,
            ip_address=ip_address,
            details={"username": result.account.username},
        )

        response = jsonify(UserInfoDTO.from_summary(result.account).model_dump())
        apply_cookie(response, result.cookie)
        logger.info(f"auth.signin: ok account_id={result.account.id}")
        return response, 200

    def signout(self) -> tuple[Response, int]:
        cookie = self._session_manager.sign_out()

        audit_log(AuditAction.SIGN_OUT, ip_address=_get_client_ip())

        response = jsonify(MessageDTO(message="You've been signed out!").model_dump())
        apply_cookie(response, cookie)
        return response, 200

    def me(self, *, identity: AccountSummary) -> tuple[Response, int]:
        return jsonify(UserInfoDTO.from_summary(identity).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/signin", view_func=self.signin, methods=["POST"])
        bp.add_url_rule("/signout", view_func=self.signout, methods=["POST"])
        bp.add_url_rule(
            "/me",
            endpoint="me",
            view_func=auth_required(self._session_manager)(self.me),
            methods=["GET"],
        )
        return bp
