from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse, Response, StreamingResponse

from asal.i18n.context import reset_language, set_language
from asal.i18n.translator import DEFAULT_TRANSLATOR_CONFIG, TranslatorConfig, translate_data
from asal.utils.language import get_accept_language, is_rtl

logger = logging.getLogger(__name__)


def _with_language_headers(response: Response, lang: str) -> Response:
    response.headers["Content-Language"] = lang
    vary = response.headers.get("Vary")
    if not vary:
        response.headers["Vary"] = "Accept-Language"
    elif "accept-language" not in vary.lower():
        response.headers["Vary"] = f"{vary}, Accept-Language"
    return response


def install_i18n_middleware(
    app: FastAPI,
    *,
    config: Optional[TranslatorConfig] = None,
    max_body_bytes: int = 1_000_000,
) -> None:
    """
    Install request-scoped language + localized JSON responses.

    This middleware guarantees:
    - request language is available via ContextVar (asal.i18n.get_language)
    - JSON bodies are passed through `translate_data` for that language
    - `Content-Language` names the language that was served
    """
    translator_config = config or DEFAULT_TRANSLATOR_CONFIG

    @app.middleware("http")
    async def _i18n_middleware(request: Request, call_next):
        lang = get_accept_language(request)
        request.state.language = lang
        request.state.rtl = is_rtl(lang)
        token = set_language(lang)
        try:
            response = await call_next(request)
        finally:
            reset_language(token)

        content_type = (response.headers.get("content-type") or "").lower()
        if "application/json" not in content_type:
            return _with_language_headers(response, lang)

        content_length = response.headers.get("content-length")
        if content_length is not None:
            try:
                if int(content_length) > max_body_bytes:
                    return _with_language_headers(response, lang)
            except ValueError:
                pass

        # Avoid huge bodies or streaming; if too large, pass through without rewrite.
        body_parts = []
        body_size = 0
        iterator = response.body_iterator.__aiter__()
        while True:
            try:
                chunk = await iterator.__anext__()
            except StopAsyncIteration:
                break
            body_parts.append(chunk)
            body_size += len(chunk)
            if body_size > max_body_bytes:
                async def _stream_body():
                    for part in body_parts:
                        yield part
                    async for rest in iterator:
                        yield rest

                headers = dict(response.headers)
                headers.pop("content-length", None)
                streamed = StreamingResponse(
                    _stream_body(),
                    status_code=response.status_code,
                    headers=headers,
                    media_type="application/json",
                    background=response.background,
                )
                return _with_language_headers(streamed, lang)

        body = b"".join(body_parts)

        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            logger.debug("Response body on %s is not valid JSON, passing through", request.url.path)
            passthrough = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type="application/json",
                background=response.background,
            )
            return _with_language_headers(passthrough, lang)

        rewritten = translate_data(payload, lang, translator_config)
        headers = dict(response.headers)
        # Body may have changed (translations), so we must not reuse the old content-length.
        headers.pop("content-length", None)
        new_response = JSONResponse(
            content=rewritten,
            status_code=response.status_code,
            headers=headers,
        )
        new_response.background = response.background
        return _with_language_headers(new_response, lang)
