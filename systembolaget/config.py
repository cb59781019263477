"""Configuration helpers for the systembolaget command."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .client import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, CatalogClient


@dataclass(frozen=True)
class Settings:
    base_url: str
    user_agent: str
    timeout: Optional[float]
    log_level: str


def _parse_timeout(raw: str) -> Optional[float]:
    if not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"Invalid SYSTEMBOLAGET_TIMEOUT: {raw!r}") from exc
    if timeout <= 0:
        raise RuntimeError(f"SYSTEMBOLAGET_TIMEOUT must be positive, got {raw!r}")
    return timeout


def load_settings() -> Settings:
    load_dotenv()

    return Settings(
        base_url=os.getenv("SYSTEMBOLAGET_BASE_URL", DEFAULT_BASE_URL),
        user_agent=os.getenv("SYSTEMBOLAGET_USER_AGENT", DEFAULT_USER_AGENT),
        timeout=_parse_timeout(os.getenv("SYSTEMBOLAGET_TIMEOUT", "")),
        log_level=os.getenv("SYSTEMBOLAGET_LOG_LEVEL", "INFO"),
    )


def build_client(settings: Settings) -> CatalogClient:
    return CatalogClient(
        base_url=settings.base_url,
        user_agent=settings.user_agent,
        timeout=settings.timeout,
    )
