from __future__ import annotations

from typing import Mapping, Optional

from starlette.responses import Response

AUTH_COOKIE_NAME = "token"
DEFAULT_MAX_AGE_SECONDS = 60 * 60 * 24 * 7


def set_auth_token_cookie(
    response: Response,
    token: str,
    *,
    max_age: int = DEFAULT_MAX_AGE_SECONDS,
    cookie_name: str = AUTH_COOKIE_NAME,
) -> Response:
    # Secure is always set; browsers ignore it on plain http.
    response.set_cookie(
        key=cookie_name,
        value=token,
        max_age=max_age,
        path="/",
        samesite="lax",
        secure=True,
    )
    return response


def clear_auth_token_cookie(response: Response, *, cookie_name: str = AUTH_COOKIE_NAME) -> Response:
    response.delete_cookie(key=cookie_name, path="/", samesite="lax", secure=True)
    return response


def get_auth_token(cookies: Mapping[str, str], *, cookie_name: str = AUTH_COOKIE_NAME) -> Optional[str]:
    value = (cookies.get(cookie_name) or "").strip()
    return value or None


def has_auth_token(cookies: Mapping[str, str], *, cookie_name: str = AUTH_COOKIE_NAME) -> bool:
    return get_auth_token(cookies, cookie_name=cookie_name) is not None
