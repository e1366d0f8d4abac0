from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from gnews_feed import fetcher
from gnews_feed.exceptions import FetchError
from gnews_feed.fetcher import fetch_feed

URL = "https://news.google.com/rss/headlines/section/topic/BUSINESS"

RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Business - Latest - Google News</title>
    <link>https://news.google.com/topics/business</link>
    <description>Google News</description>
    <item>
      <title>Markets rally as rates hold - Reuters</title>
      <link>https://news.google.com/rss/articles/abc</link>
      <pubDate>Mon, 19 Oct 2026 08:30:00 GMT</pubDate>
      <description>&lt;b&gt;Markets&lt;/b&gt; rally • Stocks climbed on Monday.</description>
      <source url="https://www.reuters.com">Reuters</source>
      <category>Business</category>
      <category>Markets</category>
    </item>
    <item>
      <title>Second story</title>
      <dc:creator>Jane Doe</dc:creator>
    </item>
  </channel>
</rss>
""".encode("utf-8")


def _response(status: int = 200, content: bytes = RSS) -> httpx.Response:
    return httpx.Response(
        status,
        content=content,
        headers={"content-type": "application/rss+xml; charset=utf-8"},
        request=httpx.Request("GET", URL),
    )


def test_fetch_parses_feed_and_items(monkeypatch) -> None:
    seen = {}

    def fake_get(url, **kwargs):
        seen["url"] = url
        seen.update(kwargs)
        return _response()

    monkeypatch.setattr(fetcher.httpx, "get", fake_get)
    doc = fetch_feed(URL, timeout=3.0)

    assert seen["url"] == URL
    assert seen["timeout"] == 3.0
    assert seen["follow_redirects"] is True
    assert "User-Agent" in seen["headers"]

    assert doc.title == "Business - Latest - Google News"
    assert doc.link == "https://news.google.com/topics/business"
    assert doc.description == "Google News"
    assert len(doc.items) == 2

    first, second = doc.items
    assert first.title == "Markets rally as rates hold - Reuters"
    assert first.link == "https://news.google.com/rss/articles/abc"
    assert first.pub_date == datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)
    assert "Stocks climbed on Monday." in first.content
    assert first.source == "Reuters"
    assert first.categories == ("Business", "Markets")

    assert second.title == "Second story"
    assert second.link is None
    assert second.pub_date is None
    assert second.creator == "Jane Doe"


def test_transport_error_becomes_fetch_error(monkeypatch) -> None:
    def boom(url, **kwargs):
        raise httpx.ConnectError("name resolution failed")

    monkeypatch.setattr(fetcher.httpx, "get", boom)
    with pytest.raises(FetchError) as ei:
        fetch_feed(URL)
    assert ei.value.url == URL
    assert "name resolution failed" in str(ei.value)


def test_timeout_becomes_fetch_error(monkeypatch) -> None:
    def slow(url, **kwargs):
        raise httpx.ReadTimeout("timed out")

    monkeypatch.setattr(fetcher.httpx, "get", slow)
    with pytest.raises(FetchError):
        fetch_feed(URL)


def test_non_2xx_becomes_fetch_error(monkeypatch) -> None:
    monkeypatch.setattr(fetcher.httpx, "get", lambda url, **kw: _response(503, b"unavailable"))
    with pytest.raises(FetchError) as ei:
        fetch_feed(URL)
    assert "503" in str(ei.value)


def test_malformed_feed_becomes_fetch_error(monkeypatch) -> None:
    broken = b"<?xml version='1.0'?><rss><channel><title>x</title><item>"
    monkeypatch.setattr(fetcher.httpx, "get", lambda url, **kw: _response(200, broken))
    with pytest.raises(FetchError) as ei:
        fetch_feed(URL)
    assert "Invalid RSS/Atom feed" in str(ei.value)


def test_xml_that_is_not_a_feed_becomes_fetch_error(monkeypatch) -> None:
    body = b"<?xml version='1.0'?><error><code>403</code></error>"
    monkeypatch.setattr(
        fetcher.httpx,
        "get",
        lambda url, **kw: httpx.Response(
            200, content=body, headers={"content-type": "application/xml"}, request=httpx.Request("GET", url)
        ),
    )
    with pytest.raises(FetchError) as ei:
        fetch_feed(URL)
    assert "not recognized as RSS or Atom" in str(ei.value)


def test_html_page_with_non_xml_content_type_becomes_fetch_error(monkeypatch) -> None:
    body = b"<html><head><title>Before you continue</title></head><body>Consent</body></html>"
    monkeypatch.setattr(
        fetcher.httpx,
        "get",
        lambda url, **kw: httpx.Response(
            200, content=body, headers={"content-type": "text/html; charset=utf-8"}, request=httpx.Request("GET", url)
        ),
    )
    with pytest.raises(FetchError) as ei:
        fetch_feed(URL)
    assert "Invalid RSS/Atom feed" in str(ei.value)


def test_charset_mismatch_still_parses(monkeypatch) -> None:
    # text/xml without a charset means us-ascii, but the body holds UTF-8 bytes
    monkeypatch.setattr(
        fetcher.httpx,
        "get",
        lambda url, **kw: httpx.Response(
            200, content=RSS, headers={"content-type": "text/xml"}, request=httpx.Request("GET", url)
        ),
    )
    doc = fetch_feed(URL)
    assert doc.title == "Business - Latest - Google News"
    assert len(doc.items) == 2
    assert "•" in doc.items[0].content
