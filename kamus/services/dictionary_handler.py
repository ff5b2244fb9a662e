import logging
import threading
from typing import Optional

from kamus.config import Settings, get_settings
from kamus.services.curated_store import CuratedEntryStore
from kamus.services.errors import UpstreamError
from kamus.services.explanation_gen import EnhancementRuleSet, ExplanationGenerator
from kamus.services.llm_handler import LLMHandler
from kamus.services.pinyin_converter import get_pinyin_service
from kamus.services.schemas import (
    MEANING_PLACEHOLDER,
    NO_EXAMPLES,
    NO_PRONUNCIATION,
    TRANSLATION_FAILED,
    DictionaryEntry,
)
from kamus.services.translation_handler import LibreTranslateClient, TranslationResolver
from kamus.services.translation_table import CuratedTranslationTable
from kamus.utils.text import is_chinese, normalize_word

logger = logging.getLogger(__name__)

SOURCE_LANG = "ms"
TARGET_LANG = "zh"
TARGET_LANGUAGE_NAME = "Mandarin"


class DictionaryResolutionPipeline:
    """
    Resolves one Malay or Chinese word into a complete DictionaryEntry.

    Order of precedence:
      1. curated entry (returned as-is)
      2. translate (Malay only) -> generate explanation -> enhancement rules
      3. per-word pronunciation / adjective overrides on top of the generated entry

    resolve() never raises; upstream failures come back as a degraded entry.
    """

    def __init__(self, store: CuratedEntryStore, translator: TranslationResolver, generator: ExplanationGenerator):
        self.store = store
        self.translator = translator
        self.generator = generator

    def resolve(self, word: str) -> DictionaryEntry:
        original = (word or "").strip()
        word = normalize_word(original)
        logger.info("Processing word: %s", original)

        if not word:
            return self._degraded(original, "No word provided")

        if self.store.has(word):
            logger.info("Found curated entry for: %s", word)
            return self.store.get(word)

        pronunciation_override = self.store.get_pronunciation_override(word)
        adjective_override = self.store.get_adjective_override(word)

        try:
            if is_chinese(word):
                source_word, target_word = MEANING_PLACEHOLDER, word
            else:
                source_word = word
                target_word = self.translator.translate(word, SOURCE_LANG, TARGET_LANG)
                logger.info("Translation: '%s' -> '%s'", word, target_word)

            result = self.generator.generate(target_word, TARGET_LANGUAGE_NAME)

            entry = DictionaryEntry(
                source_word=source_word,
                target_word=target_word,
                pronunciation=result.pronunciation or NO_PRONUNCIATION,
                explanation=result.explanation,
                examples=result.examples,
                is_adjective=result.is_adjective,
            )
        except UpstreamError as e:
            logger.error("Error processing word '%s': %s", original, e)
            return self._degraded(word, e.detail)
        except Exception as e:
            logger.exception("Unexpected error processing word '%s'", original)
            return self._degraded(word, str(e))

        if pronunciation_override is not None:
            logger.info("Using pronunciation override for '%s': %s", word, pronunciation_override)
            entry.pronunciation = pronunciation_override
        if adjective_override is not None:
            logger.info("Using adjective override for '%s': %s", word, adjective_override)
            entry.is_adjective = adjective_override

        return entry

    def _degraded(self, word: str, detail: str) -> DictionaryEntry:
        return DictionaryEntry(
            source_word=word,
            target_word=TRANSLATION_FAILED,
            explanation=f"Unable to translate this word. {detail}",
            examples=NO_EXAMPLES,
            pronunciation=NO_PRONUNCIATION,
            is_adjective=False,
        )


def build_pipeline(settings: Optional[Settings] = None) -> DictionaryResolutionPipeline:
    settings = settings or get_settings()

    translator = TranslationResolver(
        CuratedTranslationTable.from_file(),
        LibreTranslateClient(settings.libretranslate_url, settings.effective_api_key, settings.http_timeout),
    )
    generator = ExplanationGenerator(
        LLMHandler(settings.llm_url, settings.llm_model, settings.http_timeout),
        rules=EnhancementRuleSet.for_profile(settings.enhancement_profile),
        converter=get_pinyin_service(),
    )
    logger.info("Dictionary pipeline ready (profile=%s, %d enhancement rules)",
                settings.enhancement_profile, len(generator.rules))
    return DictionaryResolutionPipeline(CuratedEntryStore.from_file(), translator, generator)


# Singleton instance
_dictionary_service = None
_dictionary_lock = threading.Lock()


def get_dictionary_service() -> DictionaryResolutionPipeline:
    """Get or create the singleton dictionary service"""
    global _dictionary_service
    if _dictionary_service is None:
        with _dictionary_lock:
            if _dictionary_service is None:
                _dictionary_service = build_pipeline()
    return _dictionary_service


def get_translation_service() -> TranslationResolver:
    return get_dictionary_service().translator
