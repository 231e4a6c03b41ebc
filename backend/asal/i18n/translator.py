"""
Content translator.

Walks any JSON-like payload coming from the content API and resolves, for one
locale:

- category fields (stable keys such as ``"documentary"``) to display labels
- localized text fields (``str`` or ``{"en", "so", "ar"}`` maps) to one string
- any other ``{"en", "so", "ar"}`` shaped object, when auto-detection is on

Plain text that only exists in one language is left untouched; machine
translation is handled separately by ``asal.services.machine_translator``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Tuple

from asal.i18n.categories import DEFAULT_CATEGORY_LABELS, CategoryLabelTable, resolve_category
from asal.models.i18n import JSONLike
from asal.utils.language import is_localized_object, normalize_language, pick_locale


@dataclass(frozen=True)
class TranslatorConfig:
    """
    Field naming rules for ``translate_data``.

    Instances are immutable; build a variant with ``with_overrides``.
    """

    localized_field_names: Tuple[str, ...] = ("title", "description", "text", "subtitle", "body", "content")
    category_field_names: Tuple[str, ...] = ("category",)
    auto_detect_localized_objects: bool = True
    category_labels: CategoryLabelTable = field(default=DEFAULT_CATEGORY_LABELS, compare=False)

    def __post_init__(self) -> None:
        # Lists from settings are frozen so the config cannot drift at runtime.
        object.__setattr__(self, "localized_field_names", tuple(self.localized_field_names))
        object.__setattr__(self, "category_field_names", tuple(self.category_field_names))

    def with_overrides(self, **changes: Any) -> "TranslatorConfig":
        return replace(self, **changes)

    @classmethod
    def from_settings(cls, i18n_settings: Any) -> "TranslatorConfig":
        return cls(
            localized_field_names=tuple(i18n_settings.localized_field_names),
            category_field_names=tuple(i18n_settings.category_field_names),
            auto_detect_localized_objects=i18n_settings.auto_detect_localized_objects,
        )


DEFAULT_TRANSLATOR_CONFIG = TranslatorConfig()


def _translate_field(key: str, value: Any, locale: str, config: TranslatorConfig) -> Any:
    # Order matters: category, then named localized field, then shape detection.
    if key in config.category_field_names and isinstance(value, str):
        return resolve_category(locale, value, config.category_labels)

    if key in config.localized_field_names:
        if isinstance(value, str) or is_localized_object(value):
            return pick_locale(value, locale)
        return value

    if config.auto_detect_localized_objects and is_localized_object(value):
        return pick_locale(value, locale)

    return _walk(value, locale, config)


def _walk(node: Any, locale: str, config: TranslatorConfig) -> Any:
    if isinstance(node, list):
        return [_walk(child, locale, config) for child in node]

    if isinstance(node, tuple):
        return tuple(_walk(child, locale, config) for child in node)

    if isinstance(node, Mapping):
        return {
            key: _translate_field(key, value, locale, config)
            for key, value in node.items()
        }

    return node


def translate_data(data: JSONLike, locale: str, config: TranslatorConfig = DEFAULT_TRANSLATOR_CONFIG) -> JSONLike:
    """
    Recursively translate any data shape (objects/arrays/primitives).

    Returns a new structure; ``data`` is never mutated. Sequence length and
    order, as well as object key order, are preserved.
    """
    return _walk(data, normalize_language(locale), config)
