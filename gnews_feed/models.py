from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class RawFeedItem:
    """
    Upstream fields of a single feed entry, as parsed.

    Every field is optional; the normalizer supplies defaults.
    """
    title: Optional[str] = None
    link: Optional[str] = None
    pub_date: Optional[datetime] = None
    content: Optional[str] = None
    content_snippet: Optional[str] = None
    source: Optional[str] = None
    creator: Optional[str] = None
    categories: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FeedDocument:
    title: Optional[str] = None
    link: Optional[str] = None
    description: Optional[str] = None
    items: Tuple[RawFeedItem, ...] = ()


@dataclass(frozen=True)
class NormalizedItem:
    """
    Stable public model representing a normalized news item.

    WARNING: Do not change fields lightly. This is the JSON contract served to clients.
    """
    title: str
    link: str
    pub_date: str
    description: str
    source: str
    categories: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "pubDate": self.pub_date,
            "description": self.description,
            "source": self.source,
            "categories": list(self.categories),
        }


@dataclass(frozen=True)
class FeedPayload:
    title: str
    link: str
    description: str
    items: Tuple[NormalizedItem, ...]
    last_updated: str
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "items": [it.to_dict() for it in self.items],
            "lastUpdated": self.last_updated,
            "category": self.category,
        }


@dataclass(frozen=True)
class CacheEntry:
    payload: FeedPayload
    category: str
    timestamp: int  # epoch milliseconds

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.timestamp
