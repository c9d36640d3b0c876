"""Tests for the HTTP fetcher and document parsing.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from site_audit.config import settings
from site_audit.crawler.document import DocumentParseError, attr_of, parse_document, text_of
from site_audit.crawler.fetcher import create_client, fetch_robots_txt, fetch_url
from site_audit.crawler.models import RawPage

ROOT = "https://shop.example.com"

_SIMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Shop</title></head>
<body>
  <nav><a href="/electronics">Electronics</a></nav>
  <main><p>Welcome to the shop. We sell a great many things to a great many people.</p></main>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# fetch_url
# ---------------------------------------------------------------------------

class TestFetchUrl:
    def test_successful_fetch_returns_raw_page(self) -> None:
        with respx.mock:
            respx.get(f"{ROOT}/electronics").mock(
                return_value=httpx.Response(200, text=_SIMPLE_HTML)
            )
            with create_client() as client:
                raw = fetch_url(client, f"{ROOT}/electronics")

        assert isinstance(raw, RawPage)
        assert raw.url == f"{ROOT}/electronics"
        assert raw.status_code == 200
        assert "<title>Shop</title>" in raw.html

    def test_sends_crawler_user_agent(self) -> None:
        with respx.mock:
            route = respx.get(f"{ROOT}/").mock(return_value=httpx.Response(200, text=_SIMPLE_HTML))
            with create_client() as client:
                fetch_url(client, ROOT)

        assert route.calls.last.request.headers["User-Agent"] == settings.user_agent

    def test_http_error_raises(self) -> None:
        with respx.mock:
            respx.get(f"{ROOT}/missing").mock(return_value=httpx.Response(404, text="Not Found"))
            with create_client() as client:
                with pytest.raises(httpx.HTTPStatusError):
                    fetch_url(client, f"{ROOT}/missing")

    def test_transport_error_propagates(self) -> None:
        with respx.mock:
            respx.get(f"{ROOT}/down").mock(side_effect=httpx.ConnectError("refused"))
            with create_client() as client:
                with pytest.raises(httpx.HTTPError):
                    fetch_url(client, f"{ROOT}/down")


# ---------------------------------------------------------------------------
# robots.txt
# ---------------------------------------------------------------------------

class TestFetchRobotsTxt:
    def test_returns_text(self) -> None:
        with respx.mock:
            respx.get(f"{ROOT}/robots.txt").mock(
                return_value=httpx.Response(200, text="User-agent: *\nDisallow: /cart\n")
            )
            with create_client() as client:
                assert fetch_robots_txt(client, ROOT) == "User-agent: *\nDisallow: /cart\n"

    def test_missing_returns_none(self) -> None:
        with respx.mock:
            respx.get(f"{ROOT}/robots.txt").mock(return_value=httpx.Response(404))
            with create_client() as client:
                assert fetch_robots_txt(client, ROOT) is None

    def test_network_failure_returns_none(self) -> None:
        with respx.mock:
            respx.get(f"{ROOT}/robots.txt").mock(side_effect=httpx.ConnectTimeout("slow"))
            with create_client() as client:
                assert fetch_robots_txt(client, ROOT) is None


# ---------------------------------------------------------------------------
# Document parsing
# ---------------------------------------------------------------------------

class TestParseDocument:
    def test_parses_html(self) -> None:
        soup = parse_document(_SIMPLE_HTML)
        assert soup.title.string == "Shop"

    def test_empty_body_raises(self) -> None:
        with pytest.raises(DocumentParseError):
            parse_document("   \n")

    def test_plain_text_raises(self) -> None:
        with pytest.raises(DocumentParseError):
            parse_document("just some text, no markup")

    def test_malformed_markup_is_tolerated(self) -> None:
        soup = parse_document("<div><p>unclosed <b>tags")
        assert text_of(soup.div) == "unclosed tags"

    def test_text_and_attr_helpers(self) -> None:
        soup = parse_document('<a class="nav link" href=" /x ">  Hello <b>World</b> </a>')
        anchor = soup.a
        assert text_of(anchor) == "Hello World"
        assert attr_of(anchor, "href") == "/x"
        assert attr_of(anchor, "class") == "nav link"
        assert attr_of(anchor, "title") == ""
