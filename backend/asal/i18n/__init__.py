"""
Shared i18n helpers (EN/SO/AR).

Design goals:
- Deterministic resolution of stored {en, so, ar} content and category keys
- Request-scoped language via ContextVar (set by middleware)
- Machine translation only for single-language CMS text, with fail-soft fallbacks
"""

from .categories import DEFAULT_CATEGORY_LABELS, CategoryLabelTable, resolve_category, validate_category_table
from .content import TranslatedContent, TranslatedText, translate_content
from .context import get_language, reset_language, set_language
from .messages import t
from .translator import DEFAULT_TRANSLATOR_CONFIG, TranslatorConfig, translate_data

__all__ = [
    "CategoryLabelTable",
    "DEFAULT_CATEGORY_LABELS",
    "DEFAULT_TRANSLATOR_CONFIG",
    "TranslatedContent",
    "TranslatedText",
    "TranslatorConfig",
    "get_language",
    "reset_language",
    "resolve_category",
    "set_language",
    "t",
    "translate_content",
    "translate_data",
    "validate_category_table",
]
