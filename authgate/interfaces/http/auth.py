# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps

from flask import request

from authgate.application.services.session_manager import AuthSessionManager
from authgate.shared.logging import logger

from .cookies import read_session_token


def auth_required(session_manager: AuthSessionManager) -> Callable:
    """Resolve the session cookie and hand the account to the view as ``identity``.

    Raises ``InvalidSessionError`` (401) when the cookie is missing, forged or
    expired. The identity is passed explicitly; nothing is stored on ``g``.
    """

    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def inner(*args, **kwargs):
            token = read_session_token(request, session_manager.cookie_policy)
            if not token:
                logger.info(f"No session cookie on {request.method} {request.path}")
            identity = session_manager.resolve_session(token)
            return f(*args, identity=identity, **kwargs)

        return inner

    return decorator


__all__ = ["auth_required"]
