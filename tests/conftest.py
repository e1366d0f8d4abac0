from __future__ import annotations

from datetime import datetime, timezone
from typing import List

import pytest

from gnews_feed.cache import FeedCache
from gnews_feed.config import Settings
from gnews_feed.core import NewsService
from gnews_feed.exceptions import FetchError
from gnews_feed.models import FeedDocument, RawFeedItem

T0 = 1_760_000_000_000  # epoch ms


class FakeClock:
    def __init__(self, start: int = T0) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeFetch:
    """Records requested URLs and returns a small document per URL."""

    def __init__(self, n_items: int = 3) -> None:
        self.calls: List[str] = []
        self.n_items = n_items
        self.fail = False

    def __call__(self, url: str) -> FeedDocument:
        self.calls.append(url)
        if self.fail:
            raise FetchError("getaddrinfo failed", url=url)
        items = tuple(
            RawFeedItem(
                title=f"Story {i} from {url}",
                link=f"https://example.com/{i}",
                pub_date=datetime(2026, 10, 19, 8, i, tzinfo=timezone.utc),
                content=f"<p>Outlet {i} • Body {i}</p>",
                source=f"Outlet {i}",
                categories=("News",),
            )
            for i in range(self.n_items)
        )
        return FeedDocument(title="Top stories - Google News", link="https://news.google.com", description="Google News", items=items)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def fake_fetch() -> FakeFetch:
    return FakeFetch()


@pytest.fixture()
def cache() -> FeedCache:
    return FeedCache()


@pytest.fixture()
def service(cache, fake_fetch, clock) -> NewsService:
    return NewsService(cache=cache, fetch=fake_fetch, clock=clock, settings=Settings())
