from __future__ import annotations

import logging
import secrets

from fastapi import Request, Response

from config import AppSettings

logger = logging.getLogger(__name__)

AUTH_COOKIE_NAME = "auth_token"
AUTH_COOKIE_VALUE = "authenticated"
# Roughly ten years; the household should not have to log in again.
AUTH_COOKIE_MAX_AGE = 315_360_000


def password_required(settings: AppSettings) -> bool:
    return bool(settings.dashboard_password)


def is_authenticated(request: Request, settings: AppSettings) -> bool:
    if not password_required(settings):
        return True
    return request.cookies.get(AUTH_COOKIE_NAME) == AUTH_COOKIE_VALUE


def check_password(candidate: str, settings: AppSettings) -> bool:
    expected = settings.dashboard_password
    if not expected:
        return True
    return secrets.compare_digest(candidate.encode(), expected.encode())


def set_auth_cookie(response: Response) -> None:
    response.set_cookie(
        AUTH_COOKIE_NAME,
        AUTH_COOKIE_VALUE,
        max_age=AUTH_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
    )
