import logging
from typing import Dict, Iterable, Optional

from pypinyin import Style, pinyin

from kamus.services.pinyin_converter import PronunciationConverter
from kamus.services.schemas import (
    NO_EXAMPLES,
    NO_EXPLANATION,
    NO_PRONUNCIATION,
    ApplyCondition,
    EnhancementRule,
    Explanation,
)
from kamus.utils.data_loader import load_table
from kamus.utils.text import is_chinese

logger = logging.getLogger(__name__)


class EnhancementRuleSet:
    """
    Concept-keyed replacement rules for generated explanations.

    Every spelling of a concept (Malay and Chinese) is registered as an alias of
    one canonical key, so finding the rule for a word is a single lookup.
    """

    def __init__(self, rules: Iterable[EnhancementRule] = ()):
        self.rules: Dict[str, EnhancementRule] = {}
        self.aliases: Dict[str, str] = {}
        for rule in rules:
            self.add(rule)

    def add(self, rule: EnhancementRule) -> None:
        self.rules[rule.key] = rule
        for alias in rule.aliases or (rule.key,):
            alias = alias.lower()
            if alias in self.aliases and self.aliases[alias] != rule.key:
                logger.warning("Alias '%s' moved from rule '%s' to '%s'", alias, self.aliases[alias], rule.key)
            self.aliases[alias] = rule.key

    @classmethod
    def from_file(cls, path: str = "enhancement_rules.json") -> "EnhancementRuleSet":
        raw = load_table(path)
        rules = [EnhancementRule(key=key, **fields) for key, fields in raw.items()]
        logger.info("Enhancement rules loaded: %d concepts", len(rules))
        return cls(rules)

    @classmethod
    def for_profile(cls, profile: str) -> "EnhancementRuleSet":
        if profile == "minimal":
            return cls()
        return cls.from_file()

    def match(self, word: str) -> Optional[EnhancementRule]:
        key = self.aliases.get((word or "").lower())
        return self.rules.get(key) if key else None

    def __len__(self):
        return len(self.rules)


class ExplanationGenerator:
    def __init__(self, client, rules: Optional[EnhancementRuleSet] = None,
                 converter: Optional[PronunciationConverter] = None):
        self.client = client
        self.rules = rules if rules is not None else EnhancementRuleSet()
        self.converter = converter

    def generate(self, word: str, language: str) -> Explanation:
        result = self.client.generate_explanation(word, language)

        rule = self.rules.match(word)
        if rule is not None:
            result = self._enhance(result, rule)

        if self.converter is not None and result.pronunciation == NO_PRONUNCIATION:
            result = result.model_copy(update={"pronunciation": self._fill_pronunciation(word)})

        return result

    def _enhance(self, result: Explanation, rule: EnhancementRule) -> Explanation:
        if rule.apply == ApplyCondition.ALWAYS:
            logger.info("Enhancing explanation for '%s'", rule.key)
            update = {
                "explanation": rule.explanation,
                "examples": rule.examples,
                "pronunciation": rule.pronunciation,
            }
            if rule.force_adjective:
                update["is_adjective"] = True
            return result.model_copy(update=update)

        if not result.is_incomplete():
            return result

        logger.info("Patching incomplete explanation for '%s'", rule.key)
        update = {}
        if rule.force_adjective:
            update["is_adjective"] = True
        if result.explanation == NO_EXPLANATION:
            update["explanation"] = rule.explanation
        if result.examples == NO_EXAMPLES:
            update["examples"] = rule.examples
        if result.pronunciation == NO_PRONUNCIATION:
            update["pronunciation"] = rule.pronunciation
        return result.model_copy(update=update)

    def _fill_pronunciation(self, word: str) -> str:
        converted = self.converter.convert(word)
        if not self.converter.is_unavailable(converted):
            return converted
        if is_chinese(word):
            return " ".join(item[0] for item in pinyin(word, style=Style.TONE))
        return NO_PRONUNCIATION
