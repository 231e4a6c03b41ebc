import asyncio

import pytest

from asal.i18n.content import TranslatedContent, TranslatedText, translate_content


async def upper(text: str) -> str:
    await asyncio.sleep(0)
    return text.upper()


class GatedTranslator:
    """Translator whose calls block until released, to control batch timing."""

    def __init__(self, suffix: str = ""):
        self.suffix = suffix
        self.calls = []
        self.release = asyncio.Event()

    async def __call__(self, text: str) -> str:
        self.calls.append(text)
        await self.release.wait()
        return f"{text}{self.suffix}"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_translate_content_strings_and_lists():
    result = await translate_content({"a": "hello", "b": ["x", "y"]}, upper)
    assert result == {"a": "HELLO", "b": ["X", "Y"]}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_translate_content_leaves_other_values():
    content = {"id": 7, "blank": "  ", "tags": ["news", 3, None, ""], "meta": {"k": "v"}}
    result = await translate_content(content, upper)
    assert result == {"id": 7, "blank": "  ", "tags": ["NEWS", 3, None, ""], "meta": {"k": "v"}}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_translate_content_issues_calls_concurrently():
    translator = GatedTranslator("!")
    task = asyncio.create_task(translate_content({"a": "one", "b": ["two", "three"]}, translator))
    for _ in range(5):
        await asyncio.sleep(0)

    # Every call is in flight before any has been allowed to finish.
    assert sorted(translator.calls) == ["one", "three", "two"]
    assert not task.done()

    translator.release.set()
    assert await task == {"a": "one!", "b": ["two!", "three!"]}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failed_field_keeps_source_text():
    async def flaky(text: str) -> str:
        if text == "boom":
            raise RuntimeError("service down")
        return text.upper()

    result = await translate_content({"a": "boom", "b": "ok", "c": ["boom", "fine"]}, flaky)
    assert result == {"a": "boom", "b": "OK", "c": ["boom", "FINE"]}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_default_locale_publishes_input_synchronously():
    calls = []

    async def spy(text: str) -> str:
        calls.append(text)
        return text

    published = []
    view = TranslatedContent(on_publish=published.append)
    content = {"a": "hello"}

    assert view.update(content, "en", spy) is None
    assert view.value is content
    assert published == [content]
    assert view.is_translating is False
    await asyncio.sleep(0)
    assert calls == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_absent_content_publishes_none():
    view = TranslatedContent()
    assert view.update(None, "so", upper) is None
    assert view.value is None
    assert view.is_translating is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_non_default_locale_publishes_after_batch():
    published = []
    view = TranslatedContent(on_publish=published.append)

    view.update({"a": "hello", "b": ["x", "y"]}, "so", upper)
    assert view.is_translating is True
    assert view.value is None

    assert await view.wait() == {"a": "HELLO", "b": ["X", "Y"]}
    assert published == [{"a": "HELLO", "b": ["X", "Y"]}]
    assert view.is_translating is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_partial_results_are_never_published():
    translator = GatedTranslator("-so")
    published = []
    view = TranslatedContent(on_publish=published.append)

    view.update({"a": "one", "b": "two"}, "so", translator)
    for _ in range(5):
        await asyncio.sleep(0)
    assert published == []

    translator.release.set()
    await view.wait()
    assert published == [{"a": "one-so", "b": "two-so"}]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_stale_batch_is_discarded_when_locale_changes():
    slow = GatedTranslator("-so")
    published = []
    view = TranslatedContent(on_publish=published.append)
    content = {"a": "hello"}

    first = view.update(content, "so", slow)
    view.update(content, "ar", upper)
    assert await view.wait() == {"a": "HELLO"}

    slow.release.set()
    await first
    assert view.value == {"a": "HELLO"}
    assert published == [{"a": "HELLO"}]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_stale_batch_is_discarded_when_switching_back_to_default():
    slow = GatedTranslator("-so")
    view = TranslatedContent()
    content = {"a": "hello"}

    first = view.update(content, "so", slow)
    view.update(content, "en", slow)
    assert view.value is content
    assert view.is_translating is False
    assert await view.wait() is content

    slow.release.set()
    await first
    assert view.value is content


@pytest.mark.unit
@pytest.mark.asyncio
async def test_new_content_object_starts_new_batch():
    view = TranslatedContent()
    view.update({"a": "first"}, "so", upper)
    view.update({"a": "second"}, "so", upper)
    assert await view.wait() == {"a": "SECOND"}
    assert view.generation == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unchanged_inputs_do_not_restart_batch():
    view = TranslatedContent()
    content = {"a": "hello"}
    first = view.update(content, "so", upper)
    assert view.update(content, "so", upper) is first
    assert view.generation == 1
    await view.wait()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_translator_function_change_starts_new_batch():
    async def lower(text: str) -> str:
        return text.lower()

    view = TranslatedContent()
    content = {"a": "Hello"}
    view.update(content, "so", upper)
    view.update(content, "so", lower)
    assert await view.wait() == {"a": "hello"}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_batch_that_never_resolves_never_publishes():
    stuck = GatedTranslator()
    published = []
    view = TranslatedContent(on_publish=published.append)

    view.update({"a": "hello"}, "so", stuck)
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(asyncio.shield(view.wait()), timeout=0.05)

    assert published == []
    assert view.is_translating is True
    view.close()
    assert view.is_translating is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_close_cancels_in_flight_batch():
    stuck = GatedTranslator()
    view = TranslatedContent()
    task = view.update({"a": "hello"}, "ar", stuck)
    await asyncio.sleep(0)

    view.close()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert view.value is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_translated_text_default_locale_and_blank():
    text = TranslatedText()
    assert text.update("Hello", "en", upper) is None
    assert text.value == "Hello"

    assert text.update("   ", "so", upper) is None
    assert text.value == ""
    assert text.display == "   "


@pytest.mark.unit
@pytest.mark.asyncio
async def test_translated_text_shows_source_until_published():
    gate = GatedTranslator("-ar")
    text = TranslatedText()
    text.update("Hello", "ar", gate)
    assert text.display == "Hello"

    gate.release.set()
    assert await text.wait() == "Hello-ar"
    assert text.display == "Hello-ar"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_translated_text_discards_stale_result():
    slow = GatedTranslator("-slow")
    text = TranslatedText()
    first = text.update("Hello", "so", slow)
    text.update("Goodbye", "so", upper)
    assert await text.wait() == "GOODBYE"

    slow.release.set()
    await first
    assert text.value == "GOODBYE"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_translated_text_equal_strings_do_not_restart():
    text = TranslatedText()
    first = text.update("Hello", "so", upper)
    assert text.update("".join(["Hel", "lo"]), "so", upper) is first
    await text.wait()


@pytest.mark.unit
def test_update_without_running_loop_can_be_retried():
    view = TranslatedContent()
    content = {"a": "hello"}

    with pytest.raises(RuntimeError):
        view.update(content, "so", upper)
    assert view.is_translating is False
    assert view.value is None

    async def retry():
        task = view.update(content, "so", upper)
        assert task is not None
        return await view.wait()

    assert asyncio.run(retry()) == {"a": "HELLO"}
