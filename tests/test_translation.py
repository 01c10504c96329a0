# tests/test_translation.py

import json

import httpx
import pytest

from core.errors import ProviderError
from core.translation import (
    TRAVEL_PHRASES,
    GoogleTranslateProvider,
    MockTranslationProvider,
)

BASE_URL = "https://translate.test/language/translate/v2"


async def test_mock_translates_known_phrase():
    result = await MockTranslationProvider().translate("Hello", "es")

    assert result.translated_text == "Hola"
    assert result.source_language == "en"
    assert result.target_language == "es"
    assert result.confidence == 0.95


async def test_mock_tags_unknown_text():
    result = await MockTranslationProvider().translate("Good morning", "it", "en")
    assert result.translated_text == "[IT] Good morning"


async def test_mock_keeps_given_source_language():
    result = await MockTranslationProvider().translate("Hola", "en", "es")
    assert result.source_language == "es"


@pytest.mark.parametrize(
    "text, language",
    [("Bonjour", "fr"), ("Danke", "de"), ("ありがとう", "ja"), ("Gracias", "es"), ("Hello there", "en")],
)
async def test_mock_detects_language(text, language):
    detection = await MockTranslationProvider().detect_language(text)
    assert detection.language == language
    assert detection.confidence == 0.95


async def test_basic_phrases_keep_catalogue_keys():
    phrases = await MockTranslationProvider().get_phrases("es", "basic")

    assert phrases.category == "basic"
    assert list(phrases.phrases) == list(TRAVEL_PHRASES["basic"])
    assert phrases.phrases["thank_you"] == "Gracias"


async def test_phrases_outside_mock_dictionary_are_tagged():
    phrases = await MockTranslationProvider().get_phrases("fr", "emergency")
    assert phrases.phrases["help"] == "[FR] Help"


async def test_unknown_phrase_category_falls_back_to_basic():
    phrases = await MockTranslationProvider().get_phrases("de", "nightlife")
    assert phrases.category == "basic"
    assert phrases.phrases["hello"] == "Hallo"


async def test_destination_info_uses_content_template():
    content = await MockTranslationProvider().translate_destination_info("Paris", "fr", "menu")

    assert content.content_type == "menu"
    assert content.original_text.startswith("Local cuisine in Paris")
    assert content.translated_text == f"[FR] {content.original_text}"


async def test_unknown_content_type_falls_back_to_guide():
    content = await MockTranslationProvider().translate_destination_info("Rome", "it", "brochure")
    assert content.content_type == "guide"
    assert content.original_text.startswith("Welcome to Rome.")


# -----------------------------------------------------------------------------
# Google Translate over a mock transport
# -----------------------------------------------------------------------------
def _live(handler) -> GoogleTranslateProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleTranslateProvider("k", client, base_url=BASE_URL, timeout=2.0)


async def test_google_translate_batch():
    def handler(request):
        assert request.method == "POST"
        assert request.url.params["key"] == "k"
        body = json.loads(request.content)
        assert body["q"] == ["Hello", "Thank you"]
        assert body["target"] == "es"
        assert "source" not in body
        return httpx.Response(200, json={"data": {"translations": [
            {"translatedText": "Hola", "detectedSourceLanguage": "en"},
            {"translatedText": "Gracias", "detectedSourceLanguage": "en"},
        ]}})

    results = await _live(handler).translate_many(["Hello", "Thank you"], "es")

    assert [r.translated_text for r in results] == ["Hola", "Gracias"]
    assert all(r.source_language == "en" and r.confidence == 1.0 for r in results)


async def test_google_detect_language():
    def handler(request):
        assert request.url.path.endswith("/detect")
        return httpx.Response(200, json={"data": {"detections": [[
            {"language": "fr", "confidence": 0.98, "isReliable": False},
        ]]}})

    detection = await _live(handler).detect_language("Bonjour")
    assert detection.language == "fr"
    assert detection.confidence == 0.98


async def test_google_error_message_is_surfaced():
    provider = _live(lambda request: httpx.Response(
        400, json={"error": {"code": 400, "message": "Invalid Value"}}
    ))
    with pytest.raises(ProviderError, match="Google Translate: Invalid Value"):
        await provider.translate("Hello", "zz")


async def test_google_short_translation_list_is_malformed():
    provider = _live(lambda request: httpx.Response(200, json={"data": {"translations": []}}))
    with pytest.raises(ProviderError, match="malformed payload"):
        await provider.translate("Hello", "es")
