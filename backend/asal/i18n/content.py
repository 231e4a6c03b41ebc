"""
Dynamic content translation.

Content stored by the CMS is authored once, in English. For other locales each
string field is sent through an external machine translator. The state holders
below publish a translated copy only once every field of a batch is done, and
drop batches that were superseded while in flight.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Coroutine, Dict, Generic, Mapping, Optional, TypeVar

from asal.utils.language import get_default_language, normalize_language

logger = logging.getLogger(__name__)

TranslateFn = Callable[[str], Awaitable[str]]
T = TypeVar("T")


async def _translate_one(text: str, translate_text: TranslateFn) -> str:
    try:
        return await translate_text(text)
    except Exception as e:
        # One bad field must not sink the whole batch.
        logger.warning(f"Translation failed, keeping source text: {e}")
        return text


async def _translate_item(item: Any, translate_text: TranslateFn) -> Any:
    if isinstance(item, str) and item.strip():
        return await _translate_one(item, translate_text)
    return item


async def translate_content(content: Mapping[str, Any], translate_text: TranslateFn) -> Dict[str, Any]:
    """
    Translate every top-level string field and every string element of list fields.

    All calls are issued together and awaited jointly. Other values are copied
    as they are.
    """
    result: Dict[str, Any] = dict(content)

    async def _field(key: str, value: Any) -> None:
        if isinstance(value, str) and value.strip():
            result[key] = await _translate_one(value, translate_text)
        elif isinstance(value, list):
            result[key] = list(
                await asyncio.gather(*(_translate_item(item, translate_text) for item in value))
            )

    await asyncio.gather(*(_field(key, value) for key, value in content.items()))
    return result


class _TranslationState(Generic[T]):
    """
    Generation-token bookkeeping shared by the content and text holders.

    Every ``update`` with new inputs bumps the generation. A batch publishes its
    result only if its generation is still current when it finishes.
    """

    def __init__(
        self,
        default_language: Optional[str] = None,
        on_publish: Optional[Callable[[Optional[T]], None]] = None,
    ):
        self.default_language = normalize_language(default_language or get_default_language())
        self.on_publish = on_publish
        self.is_translating = False
        self._value: Optional[T] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._inputs: Optional[tuple] = None

    @property
    def value(self) -> Optional[T]:
        return self._value

    @property
    def generation(self) -> int:
        return self._generation

    def _same_inputs(self, source: Any, locale: str, translate_text: TranslateFn) -> bool:
        if self._inputs is None:
            return False
        prev_source, prev_locale, prev_fn = self._inputs
        # Objects compare by identity, strings by value.
        if isinstance(source, str):
            same_source = prev_source == source
        else:
            same_source = prev_source is source
        return same_source and prev_locale == locale and prev_fn is translate_text

    def _publish(self, value: Optional[T]) -> None:
        self._value = value
        if self.on_publish is not None:
            self.on_publish(value)

    def _start(self, source: Any, locale: str, translate_text: TranslateFn) -> int:
        self._inputs = (source, locale, translate_text)
        self._generation += 1
        # A superseded batch keeps running but is no longer waited on.
        self._task = None
        return self._generation

    def _finish(self, generation: int, value: Optional[T]) -> bool:
        if generation != self._generation:
            logger.debug(
                "Discarding stale translation batch (generation=%s, current=%s)",
                generation,
                self._generation,
            )
            return False
        self.is_translating = False
        self._publish(value)
        return True

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        try:
            task = asyncio.get_running_loop().create_task(coro)
        except RuntimeError:
            # No running loop: forget the inputs so a later update() starts over.
            coro.close()
            self._inputs = None
            self.is_translating = False
            raise
        self._task = task
        self.is_translating = True
        return task

    async def wait(self) -> Optional[T]:
        """Wait until the latest batch has finished and return the published value."""
        while self._task is not None and not self._task.done():
            task = self._task
            await task
        return self._value

    def close(self) -> None:
        """Cancel the in-flight batch, if any; its result is never published."""
        self._generation += 1
        self.is_translating = False
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._inputs = None


class TranslatedContent(_TranslationState[Dict[str, Any]]):
    """
    Translated view of one content object for the active locale.

    Usage::

        view = TranslatedContent(on_publish=render)
        view.update(record, "so", translator.bind("so"))
        await view.wait()
    """

    def update(
        self,
        content: Optional[Mapping[str, Any]],
        locale: str,
        translate_text: TranslateFn,
    ) -> Optional[asyncio.Task]:
        locale = normalize_language(locale)
        if self._same_inputs(content, locale, translate_text):
            return self._task

        generation = self._start(content, locale, translate_text)

        if content is None:
            self.is_translating = False
            self._publish(None)
            return None

        if locale == self.default_language:
            self.is_translating = False
            self._publish(content)
            return None

        return self._spawn(self._run(generation, content, translate_text))

    async def _run(self, generation: int, content: Mapping[str, Any], translate_text: TranslateFn) -> None:
        result = await translate_content(content, translate_text)
        self._finish(generation, result)


class TranslatedText(_TranslationState[str]):
    """Single-string companion of :class:`TranslatedContent`."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._source: Optional[str] = None

    @property
    def display(self) -> str:
        """Translation if published, else the source text, else ""."""
        return self._value or self._source or ""

    def update(
        self,
        text: Optional[str],
        locale: str,
        translate_text: TranslateFn,
    ) -> Optional[asyncio.Task]:
        locale = normalize_language(locale)
        if self._same_inputs(text, locale, translate_text):
            return self._task

        generation = self._start(text, locale, translate_text)
        self._source = text

        if not text or not text.strip():
            self.is_translating = False
            self._publish("")
            return None

        if locale == self.default_language:
            self.is_translating = False
            self._publish(text)
            return None

        return self._spawn(self._run(generation, text, translate_text))

    async def _run(self, generation: int, text: str, translate_text: TranslateFn) -> None:
        translated = await _translate_one(text, translate_text)
        self._finish(generation, translated)
