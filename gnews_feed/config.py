"""Environment-driven settings, with optional values from a local .env file."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv

from .cache import TTL_MS
from .exceptions import ConfigError
from .fetcher import DEFAULT_TIMEOUT

T = TypeVar("T")

DEFAULT_MAX_ITEMS = 20


@dataclass(frozen=True)
class Settings:
    fetch_timeout: float = DEFAULT_TIMEOUT
    cache_ttl_ms: int = TTL_MS
    max_items: int = DEFAULT_MAX_ITEMS
    user_agent: Optional[str] = None
    log_level: str = "INFO"


def _env(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as e:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _log_level() -> str:
    level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    # getLevelName maps known names to ints and anything else to "Level X"
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Invalid value for LOG_LEVEL: {level!r}")
    return level


def load_settings(*, dotenv: bool = True) -> Settings:
    """Build Settings from the environment (after loading .env unless disabled)."""
    if dotenv:
        load_dotenv()
    return Settings(
        fetch_timeout=_env("GNEWS_FETCH_TIMEOUT", DEFAULT_TIMEOUT, float),
        cache_ttl_ms=_env("GNEWS_CACHE_TTL_MS", TTL_MS, int),
        max_items=_env("GNEWS_MAX_ITEMS", DEFAULT_MAX_ITEMS, int),
        user_agent=os.getenv("GNEWS_USER_AGENT") or None,
        log_level=_log_level(),
    )
