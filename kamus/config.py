"""
Settings for the kamus service.

Everything is read from environment variables so the same code runs against a
local LibreTranslate + Ollama pair in development and hosted endpoints elsewhere.

    LIBRETRANSLATE_API_URL     translation endpoint (default http://localhost:5000/translate)
    LIBRETRANSLATE_API_KEY     optional API key
    KAMUS_LLM_URL              Ollama generate endpoint (default http://localhost:11434/api/generate)
    KAMUS_LLM_MODEL            model name (default qwen2.5:3b)
    KAMUS_HTTP_TIMEOUT         outbound timeout in seconds (default 300)
    KAMUS_ENHANCEMENT_PROFILE  "enhanced" or "minimal" (default enhanced)
    KAMUS_LOG_LEVEL            DEBUG / INFO / WARNING ... (default INFO)
    KAMUS_CORS_ORIGINS         comma-separated origins, "*" for any
    KAMUS_HOST / KAMUS_PORT    bind address for kamus.run (default 0.0.0.0:8080)
"""

import logging
import os
import sys
import threading
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "your_libretranslate_api_key"
PROFILES = ("enhanced", "minimal")

DEFAULT_CORS_ORIGINS = [
    "http://localhost:4200",
    "http://localhost:3000",
    "http://127.0.0.1:4200",
]


@dataclass
class Settings:
    libretranslate_url: str = "http://localhost:5000/translate"
    libretranslate_api_key: Optional[str] = None
    llm_url: str = "http://localhost:11434/api/generate"
    llm_model: str = "qwen2.5:3b"
    http_timeout: float = 300.0
    enhancement_profile: str = "enhanced"
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    host: str = "0.0.0.0"
    port: int = 8080

    @property
    def effective_api_key(self) -> Optional[str]:
        key = (self.libretranslate_api_key or "").strip()
        if not key or key == PLACEHOLDER_API_KEY:
            return None
        return key

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()

        profile = os.getenv("KAMUS_ENHANCEMENT_PROFILE", defaults.enhancement_profile).strip().lower()
        if profile not in PROFILES:
            logger.warning("Unknown KAMUS_ENHANCEMENT_PROFILE '%s', using '%s'", profile, defaults.enhancement_profile)
            profile = defaults.enhancement_profile

        origins_env = os.getenv("KAMUS_CORS_ORIGINS")
        if origins_env:
            origins = [o.strip() for o in origins_env.split(",") if o.strip()]
        else:
            origins = defaults.cors_origins

        return cls(
            libretranslate_url=os.getenv("LIBRETRANSLATE_API_URL", defaults.libretranslate_url),
            libretranslate_api_key=os.getenv("LIBRETRANSLATE_API_KEY"),
            llm_url=os.getenv("KAMUS_LLM_URL", defaults.llm_url),
            llm_model=os.getenv("KAMUS_LLM_MODEL", defaults.llm_model),
            http_timeout=_number_env("KAMUS_HTTP_TIMEOUT", defaults.http_timeout, float),
            enhancement_profile=profile,
            log_level=os.getenv("KAMUS_LOG_LEVEL", defaults.log_level).strip().upper(),
            cors_origins=origins,
            host=os.getenv("KAMUS_HOST", defaults.host),
            port=_number_env("KAMUS_PORT", defaults.port, int),
        )


def _number_env(name, default, cast):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return cast(value)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %r", name, value, default)
        return default


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


_settings = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        with _settings_lock:
            if _settings is None:
                _settings = Settings.from_env()
    return _settings
