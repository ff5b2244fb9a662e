import logging
from typing import Optional

import requests

from kamus.services.errors import TranslationFailure
from kamus.services.translation_table import CuratedTranslationTable

logger = logging.getLogger(__name__)


class LibreTranslateClient:
    """Thin client for a LibreTranslate /translate endpoint"""

    def __init__(self, api_url: str, api_key: Optional[str] = None, timeout: float = 300.0):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        payload = {
            "q": text,
            "source": source_lang,
            "target": target_lang,
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key

        logger.info("Calling LibreTranslate at %s: '%s' %s -> %s", self.api_url, text, source_lang, target_lang)

        try:
            response = requests.post(self.api_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("LibreTranslate request to %s failed: %s", self.api_url, e)
            raise TranslationFailure(f"LibreTranslate API error: {e}") from e

        if not 200 <= response.status_code < 300:
            body = response.text
            logger.error("LibreTranslate returned %s: %s", response.status_code, body)
            raise TranslationFailure(
                f"LibreTranslate API error ({response.status_code}): {body}",
                status=response.status_code,
            )

        try:
            translated = response.json()["translatedText"]
        except (ValueError, KeyError, TypeError) as e:
            raise TranslationFailure(
                f"LibreTranslate API error: malformed response body: {response.text[:200]}",
                status=response.status_code,
            ) from e

        if not isinstance(translated, str) or not translated.strip():
            raise TranslationFailure("LibreTranslate API error: empty translation", status=response.status_code)

        logger.info("Translation successful: '%s' -> '%s'", text, translated)
        return translated.strip()


class TranslationResolver:
    """Curated pairs first, the live translator second"""

    def __init__(self, table: CuratedTranslationTable, client):
        self.table = table
        self.client = client

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        curated = self.table.lookup(text, source_lang, target_lang)
        if curated is not None:
            logger.info("Using curated translation: '%s' -> '%s'", text, curated)
            return curated
        return self.client.translate(text, source_lang, target_lang)
