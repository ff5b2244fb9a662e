from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

# Sentinel values. Downstream consumers pattern-match on these, keep them verbatim.
NO_EXPLANATION = "No explanation available"
NO_PRONUNCIATION = "No pronunciation available"
NO_EXAMPLES = "No examples available"
TRANSLATION_FAILED = "Translation failed"
MEANING_PLACEHOLDER = "(meaning)"


# This maps 1:1 to the "Dictionary Card" shown by the frontend
class DictionaryEntry(BaseModel):
    source_word: str = Field(..., serialization_alias="sourceWord", description="The Malay word, or '(meaning)' for Chinese input")
    target_word: str = Field(..., serialization_alias="targetWord", description="The Mandarin word")
    pronunciation: str = Field(NO_PRONUNCIATION, description="Pinyin with tone marks, e.g. 'měi lì'")
    explanation: str = Field(NO_EXPLANATION, description="Explanation of the word, written in Malay")
    examples: str = Field(NO_EXAMPLES, description="Numbered example sentences, one per line")
    is_adjective: bool = Field(False, serialization_alias="isAdjective")
    is_curated: bool = Field(False, serialization_alias="isCurated", description="True when the whole entry came from curated data")

    def example_lines(self) -> List[str]:
        if self.examples == NO_EXAMPLES:
            return []
        return [line for line in self.examples.splitlines() if line.strip()]

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)


class Explanation(BaseModel):
    explanation: str = NO_EXPLANATION
    examples: str = NO_EXAMPLES
    pronunciation: str = NO_PRONUNCIATION
    is_adjective: bool = False

    def is_incomplete(self) -> bool:
        """True if any text field still holds its sentinel"""
        return (
            self.explanation == NO_EXPLANATION
            or self.pronunciation == NO_PRONUNCIATION
            or self.examples == NO_EXAMPLES
        )


class TranslationPair(BaseModel):
    source_lang: str
    target_lang: str
    source_text: str
    target_text: str


class OverrideRule(BaseModel):
    word_key: str
    pronunciation: Optional[str] = None
    is_adjective: Optional[bool] = None


class ApplyCondition(str, Enum):
    ALWAYS = "always"
    ONLY_IF_INCOMPLETE = "only_if_incomplete"


class EnhancementRule(BaseModel):
    key: str = Field(..., description="Canonical concept key, e.g. 'cantik'")
    aliases: Tuple[str, ...] = Field(default_factory=tuple, description="Every spelling, in either script, that triggers this rule")
    explanation: str
    examples: str
    pronunciation: str
    force_adjective: bool = False
    apply: ApplyCondition = ApplyCondition.ALWAYS
