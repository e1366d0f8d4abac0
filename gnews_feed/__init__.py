"""
gnews_feed

Fetches a Google News RSS feed by category and serves it as a normalized JSON payload,
with a short-lived single-slot cache in front of the upstream.

Core ideas:
- Input: an optional category token (WORLD, BUSINESS, ...; empty means top stories)
- Process: cache lookup → resolve URL → fetch → parse → normalize → cap to 20 → cache
- Output: a JSON-ready dict (or an error dict with an empty item list)

Example
-------
from gnews_feed import NewsService

service = NewsService()
data = service.handle("TECHNOLOGY")

for item in data["items"]:
    print(item["pubDate"], item["source"], item["title"])
"""
from .models import NormalizedItem, FeedPayload
from .core import NewsService
from .handler import Response, handle_request
from .exceptions import FetchError

__all__ = [
    "NormalizedItem",
    "FeedPayload",
    "NewsService",
    "Response",
    "handle_request",
    "FetchError",
]
