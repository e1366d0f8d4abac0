from __future__ import annotations

from typing import Optional


class GNewsError(Exception):
    """Base class for errors raised by gnews_feed."""


class FetchError(GNewsError):
    """Raised when a feed cannot be fetched or parsed."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class UnsupportedMethodError(GNewsError):
    """Raised when a request uses a method other than GET or OPTIONS."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Method not allowed: {method}")
        self.method = method


class ConfigError(GNewsError):
    """Raised when an environment setting cannot be interpreted."""
