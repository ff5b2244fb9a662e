import json
import logging
import re

import requests

from kamus.services.errors import GenerationFailure
from kamus.services.schemas import NO_EXAMPLES, NO_EXPLANATION, NO_PRONUNCIATION, Explanation

logger = logging.getLogger(__name__)


class LLMHandler:
    def __init__(self, ollama_url="http://localhost:11434/api/generate", model="qwen2.5:3b", timeout=300.0):
        self.ollama_url = ollama_url
        self.model = model
        self.timeout = timeout

    # -------------------------------------------------------
    # PUBLIC: Explain a word
    # -------------------------------------------------------
    def generate_explanation(self, word: str, language: str) -> Explanation:
        prompt = self._build_prompt(word, language)

        try:
            response = self._call_ollama(self.model, prompt, temperature=0.3, top_p=0.9)
        except requests.RequestException as e:
            logger.error("LLM request failed for '%s': %s", word, e)
            raise GenerationFailure(f"Explanation service error: {e}") from e

        if response.status_code != 200:
            raise GenerationFailure(
                f"Explanation service error ({response.status_code}): {response.text}",
                status=response.status_code,
            )

        raw = self._safe_parse_response(response).strip()
        parsed = self._parse_json(raw)
        if parsed is None:
            logger.error("Unparseable LLM output for '%s': %r", word, raw[:200])
            raise GenerationFailure("Explanation service returned an unparseable response")

        result = self._to_explanation(parsed)
        logger.debug("LLM explanation for '%s': %s", word, result)
        return result

    # -------------------------------------------------------
    # HELPERS
    # -------------------------------------------------------
    def _build_prompt(self, word, language):
        return f"""Anda seorang guru bahasa {language} untuk penutur bahasa Melayu.

Terangkan perkataan {language} berikut: "{word}"

Tugas:
1. Beri penerangan ringkas dalam bahasa Melayu tentang maksud perkataan itu
2. Beri 3 contoh ayat bernombor dalam {language}, setiap satu diikuti terjemahan bahasa Melayu pada baris seterusnya
3. Beri sebutan pinyin dengan tanda nada (contoh: "měi lì")
4. Nyatakan sama ada perkataan itu kata sifat (adjektif)

Keluarkan JSON sahaja (tiada teks lain):
{{
  "explanation": "penerangan dalam bahasa Melayu",
  "examples": "1. 中文例句。\\n   Terjemahan Melayu.\\n2. ...",
  "pronunciation": "pinyin dengan tanda nada",
  "isAdjective": true
}}

Contoh:
Input: "美丽"
Output: {{
  "explanation": "美丽 bermaksud cantik atau indah.",
  "examples": "1. 她是个美丽的女孩。\\n   Dia seorang gadis yang cantik.\\n2. 这里的风景非常美丽。\\n   Pemandangan di sini sangat cantik.",
  "pronunciation": "měi lì",
  "isAdjective": true
}}

Sekarang terangkan: "{word}"

Output JSON:"""

    def _safe_parse_response(self, response):
        """Non-streaming mode: the entire body is one JSON object"""
        try:
            data = response.json()
        except ValueError as e:
            logger.warning("Parsing error: %s", e)
            return ""
        if not isinstance(data, dict):
            return ""
        return data.get("response", "") or ""

    def _parse_json(self, text):
        """Parse JSON from model output. Returns None if nothing usable is found."""
        text = text.replace("```json", "").replace("```", "").strip()
        if not text:
            return None

        try:
            parsed = json.loads(text)
        except ValueError:
            match = re.search(r"\{.*\}", text, re.DOTALL)
            if not match:
                return None
            try:
                parsed = json.loads(match.group(0))
            except ValueError:
                return None

        return parsed if isinstance(parsed, dict) else None

    def _to_explanation(self, data) -> Explanation:
        examples = data.get("examples")
        if isinstance(examples, list):
            lines = [str(e).strip() for e in examples if str(e).strip()]
            examples = "\n".join(f"{i}. {line}" for i, line in enumerate(lines, 1))

        return Explanation(
            explanation=self._text_or(data.get("explanation"), NO_EXPLANATION),
            examples=self._text_or(examples, NO_EXAMPLES),
            pronunciation=self._text_or(data.get("pronunciation"), NO_PRONUNCIATION),
            is_adjective=self._as_bool(data.get("isAdjective", data.get("is_adjective"))),
        )

    @staticmethod
    def _text_or(value, sentinel):
        if isinstance(value, str) and value.strip():
            return value.strip()
        return sentinel

    @staticmethod
    def _as_bool(value):
        if isinstance(value, str):
            return value.strip().lower() in ("true", "yes", "1")
        return bool(value)

    def _call_ollama(self, model, prompt, temperature=0.2, top_p=0.9, keep_alive="5m"):
        payload = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "format": "json",
            "keep_alive": keep_alive,
            "options": {
                "num_ctx": 2048,
                "temperature": temperature,
                "top_p": top_p,
            }
        }
        return requests.post(self.ollama_url, json=payload, timeout=self.timeout)
