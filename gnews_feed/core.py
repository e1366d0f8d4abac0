from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from .cache import FeedCache
from .config import Settings, load_settings
from .exceptions import FetchError
from .fetcher import fetch_feed
from .models import FeedDocument, FeedPayload
from .normalizer import normalize, to_iso
from .sources import DEFAULT_CATEGORY, category_label, resolve

logger = logging.getLogger(__name__)

DEFAULT_FEED_TITLE = "Google News"
DEFAULT_FEED_LINK = "https://news.google.com"
DEFAULT_FEED_DESCRIPTION = "Latest news from Google News"
ERROR_TITLE = "Failed to fetch news"


def _now_ms() -> int:
    return int(time.time() * 1000)


def assemble_payload(
    doc: FeedDocument,
    category: str,
    now: datetime,
    *,
    max_items: int = 20,
) -> FeedPayload:
    """Normalize the first `max_items` entries (feed order) and apply feed-level defaults."""
    items = tuple(normalize(raw, now=now) for raw in doc.items[:max_items])
    return FeedPayload(
        title=doc.title or DEFAULT_FEED_TITLE,
        link=doc.link or DEFAULT_FEED_LINK,
        description=doc.description or DEFAULT_FEED_DESCRIPTION,
        items=items,
        last_updated=to_iso(now),
        category=category_label(category),
    )


def error_payload(message: str) -> Dict[str, Any]:
    return {"error": ERROR_TITLE, "message": message, "items": []}


class NewsService:
    """
    High-level API: serve a category's feed as a JSON-ready dict.

    Pipeline: cache lookup → resolve URL → fetch → normalize → store → respond.
    Fetch failures become an error payload and leave the cache as it was.
    Concurrent misses are not coalesced; each performs its own fetch and the
    last one to finish owns the cache slot.
    """

    def __init__(
        self,
        *,
        cache: Optional[FeedCache] = None,
        fetch: Optional[Callable[[str], FeedDocument]] = None,
        clock: Optional[Callable[[], int]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or load_settings(dotenv=False)
        self.cache = cache or FeedCache(ttl_ms=self.settings.cache_ttl_ms)
        self._fetch = fetch or self._default_fetch
        self._clock = clock or _now_ms

    def _default_fetch(self, url: str) -> FeedDocument:
        return fetch_feed(
            url,
            timeout=self.settings.fetch_timeout,
            user_agent=self.settings.user_agent,
        )

    def handle(self, category: Optional[str] = None) -> Dict[str, Any]:
        category = category or DEFAULT_CATEGORY
        now_ms = self._clock()

        entry = self.cache.get(category, now_ms)
        if entry is not None:
            logger.info("Serving from cache")
            data = entry.payload.to_dict()
            data["cached"] = True
            data["cacheAge"] = entry.age_ms(now_ms) // 1000
            return data

        url = resolve(category)
        logger.info("Fetching Google News RSS from: %s", url)
        try:
            doc = self._fetch(url)
        except FetchError as e:
            logger.error("Error fetching Google News RSS: %s", e)
            return error_payload(str(e))

        now = datetime.fromtimestamp(now_ms / 1000, tz=timezone.utc)
        payload = assemble_payload(doc, category, now, max_items=self.settings.max_items)
        self.cache.put(category, payload, now_ms)
        return payload.to_dict()
