"""
Content localization endpoints
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from asal.config.settings import ApplicationSettings, get_settings
from asal.i18n.categories import DEFAULT_CATEGORY_LABELS, resolve_category, validate_category_table
from asal.i18n.context import get_language
from asal.i18n.messages import message_table
from asal.i18n.translator import TranslatorConfig, translate_data
from asal.services.machine_translator import MachineTranslator
from asal.utils.language import get_default_language, get_language_name, is_rtl, normalize_language
from edge.dependencies import get_machine_translator, get_translator_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Content"])


def _request_language(lang: Optional[str]) -> str:
    return normalize_language(lang) if lang else get_language()


@router.post("/content/translate")
async def translate_payload(
    payload: Any = Body(...),
    lang: Optional[str] = Query(None),
    machine: bool = Query(False, description="Machine-translate remaining single-language text"),
    config: TranslatorConfig = Depends(get_translator_config),
    settings: ApplicationSettings = Depends(get_settings),
    translator: Optional[MachineTranslator] = Depends(get_machine_translator),
):
    """
    Resolve localized fields and category keys of an arbitrary content payload.
    """
    language = _request_language(lang)
    resolved = translate_data(payload, language, config)

    if machine and language != get_default_language():
        if translator is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Machine translation is not available",
            )
        resolved = await translator.translate_payload(
            resolved, language, min_length=settings.translation.min_text_length
        )

    return {"language": language, "data": resolved}


@router.get("/categories")
async def list_categories(lang: Optional[str] = Query(None)):
    language = _request_language(lang)
    return {
        "language": language,
        "categories": [
            {"key": key, "label": resolve_category(language, key)}
            for key in DEFAULT_CATEGORY_LABELS.keys()
        ],
    }


@router.get("/categories/lint")
async def lint_categories():
    missing = validate_category_table()
    if missing:
        logger.warning(f"Category labels incomplete: {missing}")
    return {"consistent": not missing, "missing": missing}


@router.get("/i18n/messages")
async def get_messages(lang: Optional[str] = Query(None)):
    language = _request_language(lang)
    return {
        "language": language,
        "name": get_language_name(language),
        "dir": "rtl" if is_rtl(language) else "ltr",
        "messages": message_table(language),
    }
