"""
Category labels.

Content records carry categories as stable keys (e.g. ``"documentary"``), never
as display labels. This module maps those keys to a label per locale.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from asal.utils.language import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, normalize_language


@dataclass(frozen=True)
class CategoryLabelTable:
    """Read-only ``locale -> key -> label`` table."""

    labels: Mapping[str, Mapping[str, str]]

    @classmethod
    def from_dict(cls, labels: Mapping[str, Mapping[str, str]]) -> "CategoryLabelTable":
        frozen = {
            locale: MappingProxyType(dict(entries))
            for locale, entries in labels.items()
        }
        return cls(labels=MappingProxyType(frozen))

    def for_locale(self, locale: str) -> Mapping[str, str]:
        return self.labels.get(locale, MappingProxyType({}))

    def keys(self) -> List[str]:
        """Union of keys across every locale, in first-seen order."""
        seen: Dict[str, None] = {}
        for entries in self.labels.values():
            for key in entries:
                seen.setdefault(key, None)
        return list(seen)

    def locales(self) -> List[str]:
        return list(self.labels)


DEFAULT_CATEGORY_LABELS = CategoryLabelTable.from_dict(
    {
        "en": {
            "documentary": "Documentary",
            "digital-content": "Digital Content",
            "commercial": "Commercial",
            "streaming": "Streaming Content",
            "life-event": "Life Event",
            "web-series": "Web Series",
        },
        "so": {
            "documentary": "Dukumentari",
            "digital-content": "Nuxur Dijitaal",
            "commercial": "Xayeysiin",
            "streaming": "Nuxur Streaming",
            "life-event": "Dhacdo Nololeed",
            "web-series": "Taxane Web",
        },
        "ar": {
            "documentary": "الوثائقي",
            "digital-content": "المحتوى الرقمي",
            "commercial": "إعلان",
            "streaming": "محتوى البث",
            "life-event": "حدث الحياة",
            "web-series": "سلسلة الويب",
        },
    }
)


def resolve_category(
    locale: str,
    key: Optional[str],
    table: CategoryLabelTable = DEFAULT_CATEGORY_LABELS,
) -> str:
    """
    Translate a category key to a localized label.

    Falls back to the English label, then to the key itself so unknown
    categories stay legible.
    """
    if not key:
        return ""
    label = table.for_locale(normalize_language(locale)).get(key)
    if label:
        return label
    label = table.for_locale(DEFAULT_LANGUAGE).get(key)
    if label:
        return label
    return key


def validate_category_table(
    table: CategoryLabelTable = DEFAULT_CATEGORY_LABELS,
) -> Dict[str, List[str]]:
    """
    Report keys missing from each supported locale.

    Returns:
        ``{locale: [missing keys]}`` for every locale with gaps; empty when consistent.
    """
    all_keys = table.keys()
    report: Dict[str, List[str]] = {}
    for locale in SUPPORTED_LANGUAGES:
        entries = table.for_locale(locale)
        missing = [key for key in all_keys if not entries.get(key)]
        if missing:
            report[locale] = missing
    return report


def main() -> int:
    report = validate_category_table()
    if not report:
        print(f"Category labels consistent: {len(DEFAULT_CATEGORY_LABELS.keys())} keys x {len(SUPPORTED_LANGUAGES)} locales")
        return 0
    for locale, missing in report.items():
        print(f"[{locale}] missing labels: {', '.join(missing)}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
