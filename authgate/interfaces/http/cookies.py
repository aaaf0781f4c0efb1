# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Request, Response

from authgate.domain.accounts.entities import CookiePolicy, SessionCookie


def apply_cookie(response: Response, cookie: SessionCookie) -> Response:
    response.set_cookie(
        cookie.name,
        cookie.value,
        max_age=cookie.max_age,
        expires=cookie.expires,
        path=cookie.path,
        secure=cookie.secure,
        httponly=cookie.http_only,
        samesite=cookie.same_site,
    )
    return response


def read_session_token(req: Request, policy: CookiePolicy) -> str:
    return (req.cookies.get(policy.name) or "").strip()


__all__ = ["apply_cookie", "read_session_token"]
