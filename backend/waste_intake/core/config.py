"""
Environment-backed settings for the HTTP entry point.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() == "true"


def _parse_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(part.strip() for part in raw.split(",") if part.strip())
    return origins or ("*",)


@dataclass(frozen=True)
class Settings:
    port: int = 8000
    reload: bool = False
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ("*",)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Read settings from the environment once per process.

    Tests that change the environment must call ``get_settings.cache_clear()``.
    """

    return Settings(
        port=int(os.environ.get("PORT", 8000)),
        reload=_parse_bool(os.environ.get("RELOAD", "false")),
        log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        cors_origins=_parse_origins(os.environ.get("CORS_ORIGINS", "*")),
    )
