from __future__ import annotations

import pytest

from kamus.services.curated_store import CuratedEntryStore
from kamus.services.dictionary_handler import DictionaryResolutionPipeline
from kamus.services.errors import GenerationFailure, TranslationFailure
from kamus.services.explanation_gen import EnhancementRuleSet, ExplanationGenerator
from kamus.services.pinyin_converter import PronunciationConverter
from kamus.services.schemas import Explanation
from kamus.services.translation_handler import TranslationResolver
from kamus.services.translation_table import CuratedTranslationTable


class FakeTranslationClient:
    """Stands in for LibreTranslate. Unknown words translate to '<word>-zh'."""

    def __init__(self, responses=None, failures=()):
        self.responses = dict(responses or {})
        self.failures = set(failures)
        self.calls = []

    def translate(self, text, source_lang, target_lang):
        self.calls.append((text, source_lang, target_lang))
        if text in self.failures:
            raise TranslationFailure("LibreTranslate API error (500): upstream exploded", status=500)
        return self.responses.get(text, f"{text}-zh")


class FakeLLM:
    """Stands in for the LLM. Returns a complete explanation unless told otherwise."""

    def __init__(self, explanations=None, failures=()):
        self.explanations = dict(explanations or {})
        self.failures = set(failures)
        self.calls = []

    def generate_explanation(self, word, language):
        self.calls.append((word, language))
        if word in self.failures:
            raise GenerationFailure("Explanation service error (503): overloaded", status=503)
        if word in self.explanations:
            return self.explanations[word].model_copy()
        return Explanation(
            explanation=f"generated explanation of {word}",
            examples=f"1. generated example for {word}",
            pronunciation=f"generated pinyin of {word}",
            is_adjective=False,
        )


@pytest.fixture(scope="session")
def curated_store():
    return CuratedEntryStore.from_file()


@pytest.fixture(scope="session")
def translation_table():
    return CuratedTranslationTable.from_file()


@pytest.fixture(scope="session")
def enhanced_rules():
    return EnhancementRuleSet.from_file()


@pytest.fixture
def converter():
    return PronunciationConverter.from_files()


@pytest.fixture
def translation_client():
    return FakeTranslationClient()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def pipeline(curated_store, translation_table, enhanced_rules, translation_client, llm):
    return DictionaryResolutionPipeline(
        curated_store,
        TranslationResolver(translation_table, translation_client),
        ExplanationGenerator(llm, rules=enhanced_rules),
    )
