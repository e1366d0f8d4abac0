from __future__ import annotations

import logging
from typing import Optional

import feedparser
import httpx

from .exceptions import FetchError
from .models import FeedDocument
from .parser import parse_feed

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "gnews-feed/0.1 (+https://news.google.com/rss)"

_RECOVERABLE = (feedparser.CharacterEncodingOverride, feedparser.NonXMLContentType)


def fetch_feed(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: Optional[str] = None,
) -> FeedDocument:
    """
    Fetch a single feed URL and parse it into a FeedDocument.

    Raises FetchError on network issues, non-2xx responses, or when the feed is
    malformed (bozo) or not recognized as RSS/Atom. There is no retry; one failed
    attempt propagates.
    """
    try:
        resp = httpx.get(
            url,
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": user_agent or DEFAULT_USER_AGENT},
        )
        resp.raise_for_status()
    except httpx.HTTPError as e:
        raise FetchError(f"Failed to fetch feed: {url} ({e})", url=url) from e

    feed = feedparser.parse(resp.content, response_headers=dict(resp.headers))

    if getattr(feed, "bozo", 0):
        exc = getattr(feed, "bozo_exception", None)
        # Charset or content-type complaints still yield a usable document
        if isinstance(exc, _RECOVERABLE):
            logger.debug("Ignoring feed warning for %s: %s", url, exc)
        else:
            msg = f"Invalid RSS/Atom feed: {url}"
            if exc:
                msg += f" ({exc})"
            raise FetchError(msg, url=url)

    # Well-formed XML that is neither RSS nor Atom leaves version empty
    if not feed.get("version"):
        raise FetchError(f"Invalid RSS/Atom feed: {url} (not recognized as RSS or Atom)", url=url)

    return parse_feed(feed)
