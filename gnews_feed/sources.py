"""Fixed mapping from category tokens to Google News RSS feeds."""
from __future__ import annotations

from typing import Dict, Optional

DEFAULT_CATEGORY = ""
TOP_LABEL = "top"

_BASE_URL = "https://news.google.com/rss"
_TOPIC_URL = _BASE_URL + "/headlines/section/topic/{}"

CATEGORIES = (
    "WORLD",
    "NATION",
    "BUSINESS",
    "TECHNOLOGY",
    "ENTERTAINMENT",
    "SPORTS",
    "SCIENCE",
    "HEALTH",
)

FEED_URLS: Dict[str, str] = {DEFAULT_CATEGORY: _BASE_URL}
FEED_URLS.update({c: _TOPIC_URL.format(c) for c in CATEGORIES})


def resolve(category: Optional[str]) -> str:
    """
    Return the feed URL for a category token.

    Empty, missing or unknown tokens fall back to top stories; this never fails.
    """
    return FEED_URLS.get(category or DEFAULT_CATEGORY, FEED_URLS[DEFAULT_CATEGORY])


def category_label(category: Optional[str]) -> str:
    return category or TOP_LABEL
