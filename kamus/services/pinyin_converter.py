import logging
import threading
from typing import Dict, Optional

from kamus.utils.data_loader import load_table

logger = logging.getLogger(__name__)

UNKNOWN_MARKER = "[?]"
NO_PINYIN = "No pinyin available"


class PronunciationConverter:
    """
    Pinyin lookup backed by two curated tables.

    - word table: whole words (Malay or Chinese) -> pinyin, case-insensitive
    - character table: single Chinese characters -> pinyin, used to compose
      words that have no whole-word entry

    The word table can be extended at runtime with add_mapping(). Writers swap in a
    fresh dict under a lock, readers always see one complete snapshot.
    """

    def __init__(self, word_table: Dict[str, str], char_table: Dict[str, str]):
        self._words = {k.lower(): v for k, v in word_table.items()}
        self._chars = dict(char_table)
        self._write_lock = threading.Lock()

    @classmethod
    def from_files(cls, words_path="pinyin_words.json", chars_path="pinyin_characters.json"):
        words = load_table(words_path)
        chars = load_table(chars_path)
        logger.info("Pinyin tables loaded: %d words, %d characters", len(words), len(chars))
        return cls(words, chars)

    def convert(self, word: str) -> str:
        if not word:
            logger.warning("Received empty word for pinyin conversion")
            return NO_PINYIN

        direct = self._words.get(word.lower())
        if direct is not None:
            logger.debug("Found word mapping for '%s': %s", word, direct)
            return direct

        composed = self._compose(word)
        if composed is not None:
            logger.debug("Composed pinyin for '%s': %s", word, composed)
            return composed

        logger.warning("Could not generate pinyin for '%s', no known characters", word)
        return f"Pinyin not available for '{word}'"

    def _compose(self, word: str) -> Optional[str]:
        # Unknown characters only get a marker once a known one has been seen;
        # leading unknowns are dropped.
        parts = []
        for ch in word:
            syllable = self._chars.get(ch)
            if syllable is not None:
                parts.append(syllable)
            elif parts:
                parts.append(UNKNOWN_MARKER)
        return " ".join(parts) if parts else None

    def is_unavailable(self, result: str) -> bool:
        return result == NO_PINYIN or result.startswith("Pinyin not available")

    def has_mapping(self, word: str) -> bool:
        return bool(word) and word.lower() in self._words

    def all_mappings(self) -> Dict[str, str]:
        return dict(self._words)

    def add_mapping(self, word: str, pinyin: str) -> bool:
        """Insert or overwrite a word-level entry. Returns False if either value is blank."""
        if not word or not word.strip() or not pinyin or not pinyin.strip():
            return False
        with self._write_lock:
            updated = dict(self._words)
            updated[word.strip().lower()] = pinyin.strip()
            self._words = updated
        logger.info("Added pinyin mapping: %s -> %s", word, pinyin)
        return True


# Singleton instance
_pinyin_service = None
_pinyin_lock = threading.Lock()


def get_pinyin_service() -> PronunciationConverter:
    """Get or create the singleton pinyin service"""
    global _pinyin_service
    if _pinyin_service is None:
        with _pinyin_lock:
            if _pinyin_service is None:
                _pinyin_service = PronunciationConverter.from_files()
    return _pinyin_service
