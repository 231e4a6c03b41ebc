"""
Machine translation client
HTTP client for the external translation API used for single-language CMS text
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

import httpx

from asal.exceptions import TranslationServiceError
from asal.i18n.content import TranslateFn
from asal.models.i18n import JSONLike
from asal.utils.language import get_default_language, normalize_language

logger = logging.getLogger(__name__)

_URL_RE = re.compile(r"^(https?://|data:)", re.IGNORECASE)
_HTML_RE = re.compile(r"</?[a-z][\s\S]*>", re.IGNORECASE)


def is_url(text: str) -> bool:
    return bool(_URL_RE.match(text))


def is_html(text: str) -> bool:
    return bool(_HTML_RE.search(text))


class MachineTranslator:
    """Translation API client with an in-memory cache and fail-soft lookups"""

    def __init__(
        self,
        base_url: str = "https://api.mymemory.translated.net",
        timeout: float = 10.0,
        source_language: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.source_language = normalize_language(source_language or get_default_language())
        self._cache: Dict[Tuple[str, str, str], str] = {}
        self._bound: Dict[str, TranslateFn] = {}

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

        logger.info(f"Machine translator initialized with base URL: {self.base_url}")

    @classmethod
    def from_settings(cls, translation_settings: Any) -> "MachineTranslator":
        return cls(
            base_url=translation_settings.api_url,
            timeout=translation_settings.timeout_seconds,
            source_language=translation_settings.source_language,
        )

    async def close(self):
        await self.client.aclose()

    def clear_cache(self) -> None:
        """Forget cached translations (called when the visitor switches language)"""
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    async def _request_translation(self, text: str, source: str, target: str) -> str:
        try:
            response = await self.client.get(
                "/get",
                params={"q": text, "langpair": f"{source}|{target}"},
            )
        except httpx.HTTPError as e:
            raise TranslationServiceError(str(e)) from e

        if response.status_code >= 400:
            raise TranslationServiceError(
                f"unexpected status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TranslationServiceError("response is not JSON", status_code=response.status_code) from e

        translated = (data.get("responseData") or {}).get("translatedText") if isinstance(data, dict) else None
        if not isinstance(translated, str) or not translated.strip():
            raise TranslationServiceError("response has no translatedText", status_code=response.status_code)
        return translated

    async def translate_text(self, text: str, target: str) -> str:
        """
        Translate one string into ``target``.

        Never raises: on any service failure the source text is returned.
        """
        if not text or not text.strip():
            return text

        source = self.source_language
        target = normalize_language(target)
        if source == target:
            return text

        cache_key = (text, source, target)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            translated = await self._request_translation(text, source, target)
        except TranslationServiceError as e:
            logger.warning(f"Machine translation to {target} failed: {e.message}")
            return text

        self._cache[cache_key] = translated
        return translated

    def bind(self, target: str) -> TranslateFn:
        """
        Translation function for one locale.

        The same function object is returned for repeated calls so content
        sessions do not restart when nothing changed.
        """
        target = normalize_language(target)
        bound = self._bound.get(target)
        if bound is None:
            async def _translate(text: str) -> str:
                return await self.translate_text(text, target)

            bound = _translate
            self._bound[target] = bound
        return bound

    async def translate_payload(self, data: JSONLike, target: str, min_length: int = 3) -> JSONLike:
        """
        Translate all plain strings in a JSON-like object/array.

        - Skips URLs, data URIs, HTML and strings shorter than ``min_length``
        - Each distinct string is translated once
        - Returns a deep copy; ``data`` is left untouched
        """
        slots: List[Tuple[Dict[str, Any], str, str]] = []

        def walk(node: Any) -> Any:
            if isinstance(node, list):
                return [walk(child) for child in node]
            if isinstance(node, dict):
                out: Dict[str, Any] = {}
                for key, value in node.items():
                    if isinstance(value, str):
                        stripped = value.strip()
                        if len(stripped) >= min_length and not is_url(stripped) and not is_html(stripped):
                            out[key] = stripped
                            slots.append((out, key, stripped))
                        else:
                            out[key] = value
                    else:
                        out[key] = walk(value)
                return out
            return node

        cloned = walk(data)
        if not slots:
            return cloned

        unique = list(dict.fromkeys(original for _, _, original in slots))
        translations: Dict[str, str] = {}
        for original in unique:
            translations[original] = await self.translate_text(original, target)

        for out, key, original in slots:
            out[key] = translations[original]

        logger.debug(f"Translated {len(unique)} distinct strings to {target}")
        return cloned
