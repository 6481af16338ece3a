"""
Application configuration.

Loads from environment variables / .env file.
API keys are optional: a missing key only matters when the matching scanner
is actually invoked.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Resolve .env relative to backend/, not the process CWD.
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = str(_BACKEND_DIR / ".env")

# override=False means OS env vars (if set manually) still take priority.
load_dotenv(_ENV_FILE, override=False)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # silently ignore unknown env vars
    )

    # —— Scanner API Keys ———
    urlscan_api_key: str = ""
    virustotal_api_key: str = ""
    hybrid_analysis_api_key: str = ""

    # —— Searchers ———
    disabled_searchers: str = ""        # comma-separated analyzer names

    # —— HTTP ———
    http_timeout: int = 20
    urlscan_visibility: str = "public"  # "public", "unlisted" or "private"
    user_agent: str = "ioc-pivot/1.0.0"

    # —— App ———
    log_level: str = "INFO"

    @property
    def disabled_searchers_list(self) -> list[str]:
        return [s.strip() for s in self.disabled_searchers.split(",") if s.strip()]

    @property
    def searcher_states(self) -> dict[str, bool]:
        """Searcher on/off map; names not listed stay enabled."""
        return {name: False for name in self.disabled_searchers_list}


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    s = Settings()
    logger.debug(
        f"[config] Settings loaded from {_ENV_FILE} — "
        f"urlscan key: {'SET' if s.urlscan_api_key else 'EMPTY'}, "
        f"VT key: {'SET' if s.virustotal_api_key else 'EMPTY'}, "
        f"HybridAnalysis key: {'SET' if s.hybrid_analysis_api_key else 'EMPTY'}"
    )
    return s
