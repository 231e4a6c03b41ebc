from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from asal.exceptions import ConfigurationError
from asal.security.auth_cookies import has_auth_token
from asal.utils.app_logger import get_edge_logger

logger = get_edge_logger("access")

# Everything except API routes, build assets and the favicon goes through the gate.
_MATCHER_RE = re.compile(r"/((?!api|_next/static|_next/image|favicon.ico).*)")


@dataclass(frozen=True)
class Pass:
    pass


@dataclass(frozen=True)
class RedirectTo:
    path: str
    query: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Reject:
    status_code: int = status.HTTP_404_NOT_FOUND


AccessDecision = Union[Pass, RedirectTo, Reject]
PASS = Pass()


@dataclass(frozen=True)
class AccessRules:
    admin_host_marker: str = "admin."
    primary_host_marker: str = "asalmediagroup.com"
    admin_path_prefix: str = "/admin"
    login_path: str = "/auth/login"
    redirect_param: str = "redirect"
    auth_cookie_name: str = "token"
    strict_host_matching: bool = False

    def __post_init__(self) -> None:
        for name in ("admin_path_prefix", "login_path"):
            value = getattr(self, name)
            if not value.startswith("/"):
                raise ConfigurationError(f"{name} must start with '/'", details={name: value})
        for name in ("admin_host_marker", "primary_host_marker"):
            if not getattr(self, name).strip():
                raise ConfigurationError(f"{name} must not be empty")

    @classmethod
    def from_settings(cls, edge_settings: Any) -> "AccessRules":
        return cls(
            admin_host_marker=edge_settings.admin_host_marker,
            primary_host_marker=edge_settings.primary_host_marker,
            admin_path_prefix=edge_settings.admin_path_prefix,
            login_path=edge_settings.login_path,
            auth_cookie_name=edge_settings.auth_cookie_name,
            strict_host_matching=edge_settings.strict_host_matching,
        )


def _strip_port(host: str) -> str:
    host = (host or "").strip().lower()
    if host.startswith("["):
        # IPv6 literal, e.g. [::1]:8000
        return host.split("]", 1)[0] + "]"
    return host.split(":", 1)[0]


def host_matches(host: str, marker: str, *, strict: bool = False) -> bool:
    """
    Match a request host against a domain marker.

    Default is substring containment. Strict mode treats a marker ending in
    "." as a leading label ("admin." matches "admin.example.com") and any
    other marker as a domain matched exactly or by dot-suffix.
    """
    host = _strip_port(host)
    marker = marker.strip().lower()
    if not host or not marker:
        return False
    if not strict:
        return marker in host
    if marker.endswith("."):
        return host.startswith(marker)
    return host == marker or host.endswith("." + marker)


def is_matched_path(pathname: str) -> bool:
    """True when the gate applies to ``pathname``."""
    return _MATCHER_RE.fullmatch(pathname or "") is not None


def decide(
    host: str,
    pathname: str,
    has_auth_cookie: bool,
    rules: Optional[AccessRules] = None,
) -> AccessDecision:
    """
    Decide what to do with one request. Rules are evaluated in order, first match wins.

    1. admin host, root path -> redirect to the admin prefix
    2. public host, login or admin path -> 404, the admin surface stays invisible
    3. admin path without a session cookie -> redirect to login, keeping the destination
    4. everything else passes
    """
    rules = rules or AccessRules()
    strict = rules.strict_host_matching
    is_admin_host = host_matches(host, rules.admin_host_marker, strict=strict)
    is_primary_host = host_matches(host, rules.primary_host_marker, strict=strict)

    if is_admin_host and pathname == "/":
        return RedirectTo(rules.admin_path_prefix)

    if is_primary_host and not is_admin_host:
        if pathname.startswith(rules.login_path) or pathname.startswith(rules.admin_path_prefix):
            return Reject(status.HTTP_404_NOT_FOUND)

    if pathname.startswith(rules.admin_path_prefix) and not has_auth_cookie:
        return RedirectTo(rules.login_path, {rules.redirect_param: pathname})

    return PASS


def install_access_middleware(app: FastAPI, rules: Optional[AccessRules] = None) -> None:
    access_rules = rules or AccessRules()

    @app.middleware("http")
    async def _access_middleware(request: Request, call_next):
        pathname = request.url.path
        if not is_matched_path(pathname):
            return await call_next(request)

        host = request.headers.get("host", "")
        authenticated = has_auth_token(request.cookies, cookie_name=access_rules.auth_cookie_name)
        decision = decide(host, pathname, authenticated, access_rules)

        if isinstance(decision, RedirectTo):
            target = request.url.replace(path=decision.path, query=urlencode(dict(decision.query)), fragment="")
            logger.info("Redirecting %s%s to %s", host, pathname, decision.path)
            return RedirectResponse(url=str(target), status_code=status.HTTP_307_TEMPORARY_REDIRECT)

        if isinstance(decision, Reject):
            logger.info("Hiding %s on %s (status=%s)", pathname, host, decision.status_code)
            return PlainTextResponse("Not Found", status_code=decision.status_code)

        return await call_next(request)
