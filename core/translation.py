# =============================================================================
# core/translation.py  —  Translation Provider Capability
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Translates text, detects languages, and produces ready-made travel
#   phrase lists and destination blurbs in a target language.
#
# DATA SOURCE TOGGLE:
#   GoogleTranslateProvider when GOOGLE_TRANSLATE_API_KEY is set, otherwise
#   MockTranslationProvider, which knows the basic phrases in es/fr/de/ja and
#   tags everything else as "[XX] original text".
#
# phrases() and destination info are built on translate_many(), so they
# work unchanged with either provider.
# =============================================================================

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from core.models import (
    LanguageDetection,
    TranslatedContent,
    TranslationResult,
    TravelPhrases,
)
from core.upstream import malformed, request_json

logger = logging.getLogger(__name__)

PHRASE_CATEGORIES = ("basic", "emergency", "food", "transport", "accommodation")
CONTENT_TYPES = ("guide", "menu", "signs", "emergency", "customs")

DEFAULT_SOURCE_LANGUAGE = "en"
MOCK_CONFIDENCE = 0.95

TRAVEL_PHRASES: dict[str, dict[str, str]] = {
    "basic": {
        "hello": "Hello",
        "thank_you": "Thank you",
        "please": "Please",
        "excuse_me": "Excuse me",
        "sorry": "Sorry",
        "yes": "Yes",
        "no": "No",
        "goodbye": "Goodbye",
    },
    "emergency": {
        "help": "Help",
        "emergency": "Emergency",
        "hospital": "Hospital",
        "police": "Police",
        "fire": "Fire",
        "doctor": "Doctor",
        "medicine": "Medicine",
    },
    "food": {
        "menu": "Menu",
        "water": "Water",
        "coffee": "Coffee",
        "tea": "Tea",
        "bread": "Bread",
        "vegetarian": "Vegetarian",
        "allergic": "Allergic",
        "bill": "Bill",
    },
    "transport": {
        "taxi": "Taxi",
        "bus": "Bus",
        "train": "Train",
        "airport": "Airport",
        "station": "Station",
        "ticket": "Ticket",
        "left": "Left",
        "right": "Right",
    },
    "accommodation": {
        "hotel": "Hotel",
        "room": "Room",
        "bathroom": "Bathroom",
        "key": "Key",
        "reservation": "Reservation",
        "check_in": "Check in",
        "check_out": "Check out",
    },
}

CONTENT_TEMPLATES: dict[str, str] = {
    "guide": "Welcome to {destination}. This beautiful destination offers amazing experiences for travelers.",
    "menu": "Local cuisine in {destination} features traditional dishes and fresh ingredients.",
    "signs": "Important signs and directions in {destination} for tourists.",
    "emergency": "Emergency contacts and procedures in {destination}.",
    "customs": "Local customs and etiquette guidelines for {destination}.",
}

MOCK_DICTIONARY: dict[str, dict[str, str]] = {
    "es": {
        "Hello": "Hola",
        "Thank you": "Gracias",
        "Please": "Por favor",
        "Excuse me": "Disculpe",
        "Sorry": "Lo siento",
        "Yes": "Sí",
        "No": "No",
        "Goodbye": "Adiós",
    },
    "fr": {
        "Hello": "Bonjour",
        "Thank you": "Merci",
        "Please": "S'il vous plaît",
        "Excuse me": "Excusez-moi",
        "Sorry": "Désolé",
        "Yes": "Oui",
        "No": "Non",
        "Goodbye": "Au revoir",
    },
    "de": {
        "Hello": "Hallo",
        "Thank you": "Danke",
        "Please": "Bitte",
        "Excuse me": "Entschuldigung",
        "Sorry": "Es tut mir leid",
        "Yes": "Ja",
        "No": "Nein",
        "Goodbye": "Auf Wiedersehen",
    },
    "ja": {
        "Hello": "こんにちは",
        "Thank you": "ありがとう",
        "Please": "お願いします",
        "Excuse me": "すみません",
        "Sorry": "ごめんなさい",
        "Yes": "はい",
        "No": "いいえ",
        "Goodbye": "さようなら",
    },
}


# =============================================================================
# The capability interface
# =============================================================================
class TranslationProvider(ABC):
    """Translation for travelers."""

    name = "translation"
    mode = "abstract"

    @abstractmethod
    async def translate_many(
        self,
        texts: list[str],
        target_language: str,
        source_language: Optional[str] = None,
    ) -> list[TranslationResult]:
        """Translate several texts; results are in input order."""

    @abstractmethod
    async def detect_language(self, text: str) -> LanguageDetection:
        """Best guess at the language of ``text``."""

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: Optional[str] = None,
    ) -> TranslationResult:
        results = await self.translate_many([text], target_language, source_language)
        return results[0]

    async def get_phrases(self, language: str, category: str = "basic") -> TravelPhrases:
        """Common travel phrases of one category, translated.

        Unknown categories fall back to "basic".
        """
        if category not in TRAVEL_PHRASES:
            category = "basic"
        catalogue = TRAVEL_PHRASES[category]
        results = await self.translate_many(list(catalogue.values()), language)
        return TravelPhrases(
            language=language,
            category=category,
            phrases={key: result.translated_text for key, result in zip(catalogue, results)},
        )

    async def translate_destination_info(
        self,
        destination: str,
        target_language: str,
        content_type: str = "guide",
    ) -> TranslatedContent:
        """A short destination blurb of one content type, translated.

        Unknown content types fall back to "guide".
        """
        if content_type not in CONTENT_TEMPLATES:
            content_type = "guide"
        original = CONTENT_TEMPLATES[content_type].format(destination=destination)
        result = await self.translate(original, target_language)
        return TranslatedContent(
            destination=destination,
            target_language=target_language,
            content_type=content_type,
            original_text=original,
            translated_text=result.translated_text,
        )


# =============================================================================
# MOCK PROVIDER
# =============================================================================
class MockTranslationProvider(TranslationProvider):
    mode = "mock"

    def __init__(self, dictionary: Optional[dict[str, dict[str, str]]] = None):
        self._dictionary = dictionary if dictionary is not None else MOCK_DICTIONARY

    def _translate_one(self, text, target_language, source_language):
        known = self._dictionary.get(target_language, {})
        translated = known.get(text) or f"[{target_language.upper()}] {text}"
        return TranslationResult(
            original_text=text,
            translated_text=translated,
            source_language=source_language or DEFAULT_SOURCE_LANGUAGE,
            target_language=target_language,
            confidence=MOCK_CONFIDENCE,
        )

    async def translate_many(self, texts, target_language, source_language=None):
        return [self._translate_one(t, target_language, source_language) for t in texts]

    async def detect_language(self, text):
        stripped = text.strip()
        for language, phrases in self._dictionary.items():
            # Identical spellings ("No") are ambiguous; skip them.
            if any(stripped == native and native != english for english, native in phrases.items()):
                return LanguageDetection(text=text, language=language, confidence=MOCK_CONFIDENCE)
        return LanguageDetection(text=text, language=DEFAULT_SOURCE_LANGUAGE, confidence=MOCK_CONFIDENCE)


# =============================================================================
# LIVE PROVIDER: Google Cloud Translation v2
# =============================================================================
class GoogleTranslateProvider(TranslationProvider):
    """Google Cloud Translation (Basic, v2) REST API."""

    mode = "live"
    provider_name = "Google Translate"

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient,
        base_url: str = "https://translation.googleapis.com/language/translate/v2",
        timeout: float = 10.0,
    ):
        self._api_key = api_key
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _post(self, path: str, body: dict) -> dict:
        return await request_json(
            self._client,
            self.provider_name,
            "POST",
            f"{self._base_url}{path}",
            timeout=self._timeout,
            params={"key": self._api_key},
            json=body,
        )

    async def translate_many(self, texts, target_language, source_language=None):
        body = {"q": texts, "target": target_language, "format": "text"}
        if source_language:
            body["source"] = source_language
        data = await self._post("", body)

        try:
            translations = data["data"]["translations"]
            results = [
                TranslationResult(
                    original_text=text,
                    translated_text=item["translatedText"],
                    source_language=(
                        item.get("detectedSourceLanguage")
                        or source_language
                        or DEFAULT_SOURCE_LANGUAGE
                    ),
                    target_language=target_language,
                    # The v2 API reports no confidence for translations.
                    confidence=1.0,
                )
                for text, item in zip(texts, translations, strict=True)
            ]
        except (KeyError, TypeError, ValueError) as exc:
            raise malformed(self.provider_name, exc) from exc
        return results

    async def detect_language(self, text):
        data = await self._post("/detect", {"q": text})
        try:
            best = data["data"]["detections"][0][0]
            confidence = min(max(float(best.get("confidence", 1.0)), 0.0), 1.0)
            return LanguageDetection(text=text, language=best["language"], confidence=confidence)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise malformed(self.provider_name, exc) from exc
