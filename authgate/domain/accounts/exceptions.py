# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authgate.shared.errors.base import DomainError


class DuplicateUsernameError(DomainError):
    code = "duplicate_username"
    message = "Error: Username is already taken!"


class DuplicateEmailError(DomainError):
    code = "duplicate_email"
    message = "Error: Email is already in use!"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Error: Invalid username or password"


class InvalidSessionError(DomainError):
    code = "invalid_session"
    status = HTTPStatus.UNAUTHORIZED
    message = "Error: Not signed in or session expired"
