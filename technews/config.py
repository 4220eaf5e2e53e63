"""Environment-driven settings.

Values come from the process environment after `load_dotenv()` has merged a
local .env file (existing environment variables win).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from technews.ingestion.ingestors import DEFAULT_ENDPOINT


@dataclass
class Settings:
    database_url: str = "news.db"
    news_api_key: str = ""
    news_api_endpoint: str = DEFAULT_ENDPOINT
    news_category: str = "technology"
    news_language: str = "en"
    news_page_size: int = 100
    port: int = 3000
    debug: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    ingest_mode: str = "once"  # "once" or "scheduled"
    ingest_interval_minutes: int = 30
    log_level: str = "INFO"


def _int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _list(raw: Optional[str], default: List[str]) -> List[str]:
    if not raw or not raw.strip():
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_settings(env: Optional[Mapping[str, str]] = None, *, use_dotenv: bool = True) -> Settings:
    """Build Settings from `env` (defaults to os.environ)."""
    if env is None:
        if use_dotenv:
            load_dotenv()
        env = os.environ

    defaults = Settings()
    mode = (env.get("INGEST_MODE") or defaults.ingest_mode).strip().lower()
    return Settings(
        database_url=(env.get("DATABASE_URL") or defaults.database_url).strip(),
        news_api_key=(env.get("NEWS_API_KEY") or env.get("NEWSAPI_KEY") or "").strip(),
        news_api_endpoint=(env.get("NEWS_API_ENDPOINT") or defaults.news_api_endpoint).strip(),
        news_category=(env.get("NEWS_CATEGORY") or defaults.news_category).strip(),
        news_language=(env.get("NEWS_LANGUAGE") or defaults.news_language).strip(),
        news_page_size=_int(env, "NEWS_PAGE_SIZE", defaults.news_page_size),
        port=_int(env, "PORT", defaults.port),
        debug=env.get("FLASK_ENV") == "development",
        cors_origins=_list(env.get("CORS_ORIGINS"), defaults.cors_origins),
        ingest_mode="scheduled" if mode in ("scheduled", "daemon") else "once",
        ingest_interval_minutes=_int(env, "INGEST_INTERVAL_MINUTES", defaults.ingest_interval_minutes),
        log_level=(env.get("LOG_LEVEL") or defaults.log_level).strip().upper(),
    )
