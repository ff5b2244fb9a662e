import logging
from typing import Dict, Iterable, List, Optional, Tuple

from kamus.services.schemas import TranslationPair
from kamus.utils.data_loader import load_table

logger = logging.getLogger(__name__)

Direction = Tuple[str, str]


class CuratedTranslationTable:
    """Curated Malay <-> Mandarin pairs that short-circuit the live translator"""

    def __init__(self, word_pairs: Iterable[TranslationPair] = (), sentence_pairs: Iterable[TranslationPair] = ()):
        self.word_index: Dict[Direction, Dict[str, str]] = {}
        self.sentence_index: Dict[Direction, Dict[str, str]] = {}

        for pair in word_pairs:
            self._index(self.word_index, pair, fold_case=True)
        for pair in sentence_pairs:
            self._index(self.sentence_index, pair, fold_case=False)

    @classmethod
    def from_file(cls, path: str = "translations.json") -> "CuratedTranslationTable":
        raw = load_table(path)
        words = cls._expand(raw.get("words", []))
        sentences = cls._expand(raw.get("sentences", []))
        logger.info("Translation table loaded: %d word pairs, %d sentence pairs", len(words), len(sentences))
        return cls(words, sentences)

    @staticmethod
    def _expand(records: List[Dict[str, str]]) -> List[TranslationPair]:
        """Each record is {lang: text, ...}; emit a pair for every ordered language combination."""
        pairs = []
        for record in records:
            for src, src_text in record.items():
                for tgt, tgt_text in record.items():
                    if src != tgt:
                        pairs.append(TranslationPair(
                            source_lang=src,
                            target_lang=tgt,
                            source_text=src_text,
                            target_text=tgt_text,
                        ))
        return pairs

    @staticmethod
    def _index(index: Dict[Direction, Dict[str, str]], pair: TranslationPair, fold_case: bool) -> None:
        key = pair.source_text.lower() if fold_case else pair.source_text
        bucket = index.setdefault((pair.source_lang, pair.target_lang), {})
        if key in bucket and bucket[key] != pair.target_text:
            logger.warning(
                "Duplicate %s pair for '%s', last value wins: %s -> %s",
                "word" if fold_case else "sentence", key, bucket[key], pair.target_text,
            )
        bucket[key] = pair.target_text

    def lookup_sentence(self, text: str, source_lang: str, target_lang: str) -> Optional[str]:
        if text is None:
            return None
        return self.sentence_index.get((source_lang, target_lang), {}).get(text)

    def lookup_word(self, text: str, source_lang: str, target_lang: str) -> Optional[str]:
        if text is None:
            return None
        return self.word_index.get((source_lang, target_lang), {}).get(text.lower())

    def lookup(self, text: str, source_lang: str, target_lang: str) -> Optional[str]:
        """Sentence match first (exact), then word match (case-insensitive)"""
        found = self.lookup_sentence(text, source_lang, target_lang)
        if found is None:
            found = self.lookup_word(text, source_lang, target_lang)
        return found

    def words(self, source_lang: str, target_lang: str) -> List[str]:
        return sorted(self.word_index.get((source_lang, target_lang), {}))
