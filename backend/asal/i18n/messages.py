"""
Static UI strings.

Every label the site chrome renders (navigation, pager, newsletter box) is
looked up through :func:`t`, which falls back to English and then to the key.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from asal.utils.language import DEFAULT_LANGUAGE, normalize_language

logger = logging.getLogger(__name__)

_STRINGS: Dict[str, Dict[str, str]] = {
    "en": {
        "homeNav": "Home",
        "aboutNav": "About Us",
        "servicesNav": "Services",
        "brandsNav": "Brands",
        "packagesNav": "Packages",
        "portfolioNav": "Portfolio",
        "contactNav": "Contact",
        "adminNav": "Admin",
        "faqsNav": "FAQs",
        "readMore": "Read More",
        "close": "Close",
        "untitled": "Untitled",
        "subscribe": "Subscribe",
        "emailPlaceholder": "Enter your email",
        "pageOf": "Page {page} of {total}",
        "viewAll": "View All News",
    },
    "so": {
        "homeNav": "Hoyga",
        "aboutNav": "Nagu Saabsan",
        "servicesNav": "Adeegyada",
        "brandsNav": "Calaamadaha",
        "packagesNav": "Xirmooyinka",
        "portfolioNav": "Horyaal",
        "contactNav": "Nala Soo Xiriir",
        "adminNav": "Maamulka",
        "faqsNav": "Su'aalaha",
        "readMore": "Akhri Dheeraad",
        "close": "Xir",
        "untitled": "Aan Cinwaan Lahayn",
        "subscribe": "Ku Biir",
        "emailPlaceholder": "Geli iimaylkaaga",
        "pageOf": "Bogga {page} ee {total}",
        "viewAll": "Dhammaan Akhbaartii",
    },
    "ar": {
        "homeNav": "الرئيسية",
        "aboutNav": "من نحن",
        "servicesNav": "الخدمات",
        "brandsNav": "العلامات التجارية",
        "packagesNav": "الباقات",
        "portfolioNav": "الأعمال",
        "contactNav": "اتصل بنا",
        "adminNav": "لوحة التحكم",
        "faqsNav": "الأسئلة الشائعة",
        "readMore": "اقرأ المزيد",
        "close": "إغلاق",
        "untitled": "بدون عنوان",
        "subscribe": "اشترك",
        "emailPlaceholder": "أدخل بريدك الإلكتروني",
        "pageOf": "صفحة {page} من {total}",
        "viewAll": "عرض جميع الأخبار",
    },
}


def t(key: str, lang: Optional[str] = None, **params: Any) -> str:
    """
    Look up a UI string.

    Args:
        key: Message key (e.g. ``'homeNav'``).
        lang: Override locale for this call only; defaults to the request locale.
        **params: Format placeholders (``{name}``-style).

    Returns:
        The translated string, the English string, or the key itself.
    """
    if lang is None:
        from asal.i18n.context import get_language

        lang = get_language()

    table = _STRINGS.get(normalize_language(lang), _STRINGS[DEFAULT_LANGUAGE])
    text = table.get(key)
    if text is None:
        text = _STRINGS[DEFAULT_LANGUAGE].get(key, key)
    if params:
        try:
            text = text.format(**params)
        except (KeyError, IndexError):
            logger.debug("Missing placeholder for message %s", key)
    return text


def message_table(lang: str) -> Dict[str, str]:
    """Full string table for a locale with English filling any gaps."""
    merged = dict(_STRINGS[DEFAULT_LANGUAGE])
    merged.update(_STRINGS.get(normalize_language(lang), {}))
    return merged
