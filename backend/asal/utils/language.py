"""
Language utilities for the Asal Media site
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from fastapi import Request

from asal.models.i18n import Locale, LocalizedText


SUPPORTED_LANGUAGES = ["en", "so", "ar"]
DEFAULT_LANGUAGE = "en"
RTL_LANGUAGES = {"ar"}
LANGUAGE_COOKIE = "language"

_SYNONYMS = {
    "eng": "en",
    "english": "en",
    "som": "so",
    "somali": "so",
    "soomaali": "so",
    "ara": "ar",
    "arabic": "ar",
}


def get_supported_languages() -> List[str]:
    """
    Get list of supported languages.

    Returns:
        List of language codes
    """
    return list(SUPPORTED_LANGUAGES)


def get_default_language() -> str:
    """
    Get default language.

    Returns:
        Default language code
    """
    return DEFAULT_LANGUAGE


def is_supported_language(lang: str) -> bool:
    """
    Check if language is supported.

    Unlike `normalize_language()`, unknown codes are reported as unsupported
    instead of being folded into the default.
    """
    return _primary_subtag(lang) in SUPPORTED_LANGUAGES


def _primary_subtag(lang: Optional[str]) -> str:
    raw = str(lang or "").strip().lower()

    # Strip quality values: "so;q=0.9"
    if ";" in raw:
        raw = raw.split(";", 1)[0].strip()

    # Take primary subtag: "ar-eg" -> "ar"
    if "-" in raw:
        raw = raw.split("-", 1)[0].strip()
    if "_" in raw:
        raw = raw.split("_", 1)[0].strip()

    return _SYNONYMS.get(raw, raw)


def normalize_language(lang: Optional[str]) -> Locale:
    """
    Normalize language code.

    Supports:
    - region codes (so-SO -> so, ar_EG -> ar)
    - common synonyms (eng/english, som/somali, ara/arabic)
    """
    raw = _primary_subtag(lang)
    if raw in SUPPORTED_LANGUAGES:
        return raw
    return get_default_language()


def _parse_accept_language_header(value: str) -> List[str]:
    """
    Parse Accept-Language into a list of supported language codes ordered by preference.

    Very small parser; we don't implement full RFC behavior, but we respect q=.
    Unsupported entries are dropped so they never shadow a later supported one.
    """
    if not value:
        return []

    parts = [p.strip() for p in value.split(",") if p.strip()]
    weighted: List[tuple[float, str]] = []
    for part in parts:
        lang = part
        q = 1.0
        if ";" in part:
            lang, params = part.split(";", 1)
            lang = lang.strip()
            params = params.strip()
            if params.startswith("q="):
                try:
                    q = float(params[2:])
                except ValueError:
                    q = 1.0
        code = _primary_subtag(lang)
        # q=0 means "not acceptable"
        if code in SUPPORTED_LANGUAGES and q > 0:
            weighted.append((q, code))

    # Sort by q desc, stable otherwise
    weighted.sort(key=lambda item: item[0], reverse=True)
    return [lang for _, lang in weighted]


def get_accept_language(request: Request) -> str:
    """
    Get the preferred language for a request.

    Order: ``?lang=`` / ``?language=`` query parameter, the ``language``
    cookie written by the language switcher, then Accept-Language.
    """
    query_lang = request.query_params.get("lang") or request.query_params.get("language")
    if query_lang:
        return normalize_language(query_lang)

    cookie_lang = request.cookies.get(LANGUAGE_COOKIE)
    if cookie_lang and is_supported_language(cookie_lang):
        return normalize_language(cookie_lang)

    accept_language = request.headers.get("Accept-Language", "")
    for candidate in _parse_accept_language_header(accept_language):
        return candidate

    return get_default_language()


def get_language_name(lang: str) -> str:
    language_names = {"en": "English", "so": "Somali", "ar": "Arabic"}
    return language_names.get(lang.lower(), lang)


def is_rtl(lang: Optional[str]) -> bool:
    """Arabic is the only right-to-left locale we serve."""
    return normalize_language(lang) in RTL_LANGUAGES


def fallback_languages(lang: str) -> List[str]:
    """
    Languages to try in order when a translation is missing.
    """
    primary = normalize_language(lang)
    out: List[str] = []
    for candidate in (primary, DEFAULT_LANGUAGE):
        if candidate not in out:
            out.append(candidate)
    return out


def is_localized_object(value: Any) -> bool:
    """
    Detect a language map like ``{"en": "...", "so": "..."}``.

    True when the value is a mapping carrying at least one supported locale key
    with a string value. Never raises.
    """
    if not isinstance(value, Mapping):
        return False
    return any(isinstance(value.get(code), str) for code in SUPPORTED_LANGUAGES)


def pick_locale(value: Optional[LocalizedText], locale: str) -> str:
    """
    Return the text for ``locale`` from a LocalizedText-like input.

    - Plain strings are returned unchanged, whatever the locale.
    - Language maps yield ``value[locale]``, then ``value["en"]``, then "".
    - Anything else (None, numbers, malformed maps) degrades to "".
    """
    if isinstance(value, str):
        return value
    if not isinstance(value, Mapping):
        return ""

    for candidate in fallback_languages(locale):
        text = value.get(candidate)
        if isinstance(text, str) and text:
            return text
    return ""


if __name__ == "__main__":
    print("Supported languages:", get_supported_languages())
    print("Default language:", get_default_language())

    title = {"en": "Connecting Cultures", "so": "Isku xidhka Dhaqamada"}
    for code in get_supported_languages():
        print(f"{get_language_name(code)} ({'rtl' if is_rtl(code) else 'ltr'}): {pick_locale(title, code)}")
