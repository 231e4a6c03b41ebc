"""
Image URL normalization.

Content records store images either as base64 payloads, data URIs, absolute
URLs or legacy upload paths relative to the content API. Everything is turned
into something a browser can load, or the placeholder.
"""

from __future__ import annotations

import re
from typing import Optional

DEFAULT_PLACEHOLDER = "/placeholder.svg"

_ABSOLUTE_URL_RE = re.compile(r"^(https?:)?//", re.IGNORECASE)
_BASE64_RE = re.compile(r"^[A-Za-z0-9+/=]+$")
_BASE64_MIN_LENGTH = 100
_MISSING_VALUES = {"", "null", "undefined", "#", "/"}

# Leading bytes of common image formats once base64 encoded.
_BASE64_SIGNATURES = (
    ("/9j/", "image/jpeg"),
    ("iVBORw0KGgo", "image/png"),
    ("R0lGOD", "image/gif"),
    ("UklGR", "image/webp"),
)


def _sniff_mime_type(payload: str) -> str:
    for prefix, mime_type in _BASE64_SIGNATURES:
        if payload.startswith(prefix):
            return mime_type
    return "image/jpeg"


def looks_like_base64(value: str) -> bool:
    return len(value) > _BASE64_MIN_LENGTH and bool(_BASE64_RE.match(value))


def resolve_image_url(
    src: Optional[str],
    placeholder: str = DEFAULT_PLACEHOLDER,
    base_url: Optional[str] = None,
) -> str:
    """
    Resolve an image source to a loadable URL.

    Args:
        src: base64 string, data URI, HTTP URL or legacy file path
        placeholder: URL returned when nothing usable is found
        base_url: Content API image root used for legacy file paths

    Returns:
        Resolved image URL
    """
    if not src:
        return placeholder

    value = src.strip()
    if value in _MISSING_VALUES or value == placeholder:
        return placeholder
    if value.startswith("/placeholder") or value.startswith("placeholder"):
        return placeholder

    if value.startswith("data:"):
        return value

    if _ABSOLUTE_URL_RE.match(value):
        return value

    if looks_like_base64(value):
        return f"data:{_sniff_mime_type(value)};base64,{value}"

    base = (base_url or "").strip()
    if base:
        base = base[:-1] if base.endswith("/") else base
        path = value if value.startswith("/") else f"/{value}"
        return f"{base}{path}"

    return placeholder
