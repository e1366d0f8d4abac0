from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

from .models import NormalizedItem, RawFeedItem

TITLE_LIMIT = 100
DESCRIPTION_LIMIT = 200
ELLIPSIS = "..."

DEFAULT_TITLE = "No title"
DEFAULT_LINK = "#"
DEFAULT_DESCRIPTION = "No description"
DEFAULT_SOURCE = "Google News"

_TAG_RE = re.compile(r"<[^>]*>")
# Google News descriptions lead with "Publisher • "
_SOURCE_PREFIX_RE = re.compile(r"^[^•]*•\s*")


def strip_tags(text: str) -> str:
    return _TAG_RE.sub("", text)


def strip_source_prefix(text: str) -> str:
    return _SOURCE_PREFIX_RE.sub("", text, count=1)


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def to_iso(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def clean_description(text: Optional[str]) -> str:
    """
    Strip markup, drop the leading source prefix, trim, and cap the length.

    The tag pass is a plain regex: any <...> span goes, no HTML parsing.
    """
    cleaned = strip_tags(text or DEFAULT_DESCRIPTION)
    cleaned = strip_source_prefix(cleaned)
    cleaned = cleaned.strip()
    return truncate(cleaned, DESCRIPTION_LIMIT)


def normalize(raw: RawFeedItem, *, now: Optional[datetime] = None) -> NormalizedItem:
    """
    Convert a RawFeedItem into a NormalizedItem.

    Total: every missing field gets its default and nothing raises.
    """
    title = truncate(raw.title or DEFAULT_TITLE, TITLE_LIMIT)
    pub_date = raw.pub_date or now or datetime.now(timezone.utc)

    return NormalizedItem(
        title=title,
        link=raw.link or DEFAULT_LINK,
        pub_date=to_iso(pub_date),
        description=clean_description(raw.content or raw.content_snippet),
        source=raw.source or raw.creator or DEFAULT_SOURCE,
        categories=tuple(c for c in raw.categories if isinstance(c, str)),
    )
