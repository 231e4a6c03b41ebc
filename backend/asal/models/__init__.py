from .i18n import JSONLike, Locale, LocalizedText

__all__ = ["JSONLike", "Locale", "LocalizedText"]
