from __future__ import annotations

import calendar
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .models import FeedDocument, RawFeedItem
from .normalizer import strip_tags


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _to_datetime(entry: Dict[str, Any]) -> Optional[datetime]:
    """
    Convert feed entry date fields to timezone-aware UTC datetime.
    Priority: published_parsed -> updated_parsed -> None.
    The *_parsed values are UTC struct_times.
    """
    for key in ("published_parsed", "updated_parsed"):
        val = entry.get(key)
        if isinstance(val, time.struct_time):
            try:
                return datetime.fromtimestamp(calendar.timegm(val), tz=timezone.utc)
            except (OverflowError, ValueError, OSError):
                continue
    return None


def _get_content(entry: Dict[str, Any]) -> Optional[str]:
    contents = entry.get("content")
    if isinstance(contents, list):
        for c in contents:
            if isinstance(c, dict) and _text(c.get("value")):
                return c["value"]
    return _text(entry.get("summary")) or _text(entry.get("description"))


def _get_snippet(entry: Dict[str, Any]) -> Optional[str]:
    summary = _text(entry.get("summary"))
    if not summary:
        return None
    return strip_tags(summary).strip() or None


def _get_source(entry: Dict[str, Any]) -> Optional[str]:
    # <source url="...">Publisher</source> lands on entry.source.title
    src = entry.get("source") or {}
    if isinstance(src, dict):
        title = _text(src.get("title"))
        if title:
            return title.strip()
    return None


def _get_creator(entry: Dict[str, Any]) -> Optional[str]:
    for key in ("author", "dc_creator"):
        val = _text(entry.get(key))
        if val:
            return val.strip()
    return None


def _get_categories(entry: Dict[str, Any]) -> List[str]:
    out: List[str] = []
    tags = entry.get("tags")
    if isinstance(tags, list):
        for t in tags:
            if isinstance(t, dict):
                term = _text(t.get("term"))
                if term:
                    out.append(term.strip())
    return out


def parse_entry(entry: Dict[str, Any]) -> RawFeedItem:
    """
    Map a raw feed entry (from feedparser) to a RawFeedItem.

    Nothing is required; absent or malformed fields become None (or an empty tuple).
    """
    return RawFeedItem(
        title=_text(entry.get("title")),
        link=_text(entry.get("link")),
        pub_date=_to_datetime(entry),
        content=_get_content(entry),
        content_snippet=_get_snippet(entry),
        source=_get_source(entry),
        creator=_get_creator(entry),
        categories=tuple(_get_categories(entry)),
    )


def parse_feed(parsed: Any) -> FeedDocument:
    """Map a feedparser result to a FeedDocument, keeping entry order."""
    feed = getattr(parsed, "feed", None) or {}
    entries = getattr(parsed, "entries", None) or []
    return FeedDocument(
        title=_text(feed.get("title")),
        link=_text(feed.get("link")),
        description=_text(feed.get("subtitle")) or _text(feed.get("description")),
        items=tuple(parse_entry(e) for e in entries),
    )
