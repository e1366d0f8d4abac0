"""
Text helpers for presenting normalized items.

These mirror how the browser client shows an item: a relative publish date and
a publisher name recovered from Google News markup. They are not part of the
JSON payload.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from .normalizer import DEFAULT_SOURCE

_FONT_SOURCE_RE = re.compile(r'<font color="#6f6f6f">([^<]+)</font>')


def _parse_iso(value: str) -> Optional[datetime]:
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def relative_date(
    pub_date: Union[str, datetime, None],
    now: Optional[datetime] = None,
) -> str:
    if not pub_date:
        return "Recent"
    dt = pub_date if isinstance(pub_date, datetime) else _parse_iso(pub_date)
    if dt is None:
        return "Recent"
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    hours = int((now - dt).total_seconds() // 3600)
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    return f"{dt:%b} {dt.day}, {dt:%I:%M %p}"


def extract_source(description: Optional[str], fallback: str = DEFAULT_SOURCE) -> str:
    """Pull the publisher out of raw Google News description markup."""
    if description:
        m = _FONT_SOURCE_RE.search(description)
        if m and m.group(1).strip():
            return m.group(1).strip()
    return fallback


def format_item(item: Mapping[str, Any], now: Optional[datetime] = None) -> str:
    title = item.get("title") or "No title"
    description = item.get("description") or "No description available."
    source = item.get("source") or DEFAULT_SOURCE
    lines = [
        title,
        f"  {source} · {relative_date(item.get('pubDate'), now)}",
        f"  {description}",
        f"  <{item.get('link') or '#'}>",
    ]
    return "\n".join(lines)
