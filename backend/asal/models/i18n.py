"""
I18N / localized-text primitives (model layer).

Kept free of FastAPI imports so any layer can use these aliases.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Mapping, Union

Locale = Literal["en", "so", "ar"]

# Content sources send either a plain string
# or a language map like {"en": "...", "so": "...", "ar": "..."}
LocalizedText = Union[str, Mapping[str, str]]

# Anything the content API can hand us: objects, sequences and JSON scalars.
JSONLike = Union[Dict[str, Any], List[Any], str, int, float, bool, None]
