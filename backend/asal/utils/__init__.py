"""
Utility functions for the Asal Media site services
"""

from .image_urls import resolve_image_url
from .language import normalize_language, pick_locale

__all__ = ["normalize_language", "pick_locale", "resolve_image_url"]
