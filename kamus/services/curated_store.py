import logging
from typing import Dict, Iterable, List, Optional

from kamus.services.errors import LookupMiss
from kamus.services.schemas import DictionaryEntry, OverrideRule
from kamus.utils.data_loader import load_table

logger = logging.getLogger(__name__)


class CuratedEntryStore:
    """Hand-written dictionary entries plus per-word field overrides, keyed on the Malay spelling"""

    def __init__(self, entries: Dict[str, DictionaryEntry], overrides: Iterable[OverrideRule] = ()):
        self.entries = {word.lower(): entry.model_copy(update={"is_curated": True}) for word, entry in entries.items()}
        self.overrides = {rule.word_key.lower(): rule for rule in overrides}

    @classmethod
    def from_file(cls, path: str = "curated_entries.json") -> "CuratedEntryStore":
        raw = load_table(path)
        entries = {word: DictionaryEntry(**fields) for word, fields in raw.get("entries", {}).items()}
        overrides = [OverrideRule(word_key=word, **fields) for word, fields in raw.get("overrides", {}).items()]
        logger.info("Curated store loaded: %d entries, %d overrides", len(entries), len(overrides))
        return cls(entries, overrides)

    def has(self, word: str) -> bool:
        return bool(word) and word.strip().lower() in self.entries

    def get(self, word: str) -> DictionaryEntry:
        try:
            entry = self.entries[(word or "").strip().lower()]
        except KeyError:
            raise LookupMiss(word) from None
        return entry.model_copy()

    def get_pronunciation_override(self, word: str) -> Optional[str]:
        rule = self.overrides.get((word or "").strip().lower())
        return rule.pronunciation if rule else None

    def get_adjective_override(self, word: str) -> Optional[bool]:
        rule = self.overrides.get((word or "").strip().lower())
        return rule.is_adjective if rule else None

    def words(self) -> List[str]:
        return sorted(self.entries)
