"""Link extraction from navigation regions and listing pages."""

from __future__ import annotations

from dataclasses import dataclass

from bs4 import BeautifulSoup

from site_audit.crawler.document import attr_of, text_of
from site_audit.crawler.patterns import looks_like_category_link

MAX_CATEGORY_LINKS = 20
MAX_PRODUCT_LINKS = 10

# Scanned in order; earlier selectors win the first-seen position.
NAV_SELECTORS = (
    "nav a",
    "header nav a",
    '[role="navigation"] a',
    ".navigation a",
    ".menu a",
    ".nav-menu a",
    '[class*="category"] a',
    '[class*="navigation"] a',
)

PRODUCT_LINK_SELECTORS = (
    'a[href*="/product"]',
    'a[href*="/p/"]',
    'a[href*="/item"]',
    'a[class*="product"]',
    '[class*="product"] a',
)


@dataclass(frozen=True)
class Link:
    text: str
    href: str


def extract_category_links(soup: BeautifulSoup) -> list[Link]:
    """Return up to :data:`MAX_CATEGORY_LINKS` category-like navigation links.

    Anchors without an href or visible text are ignored, hrefs are
    deduplicated, and order is first-seen across :data:`NAV_SELECTORS`.
    """
    links: list[Link] = []
    seen: set[str] = set()

    for selector in NAV_SELECTORS:
        for anchor in soup.select(selector):
            href = attr_of(anchor, "href")
            text = text_of(anchor)
            if not href or not text or href in seen:
                continue
            if looks_like_category_link(href, text):
                seen.add(href)
                links.append(Link(text=text, href=href))

    return links[:MAX_CATEGORY_LINKS]


def extract_product_links(soup: BeautifulSoup) -> list[Link]:
    """Return up to :data:`MAX_PRODUCT_LINKS` links that look like product pages."""
    links: list[Link] = []
    seen: set[str] = set()

    for selector in PRODUCT_LINK_SELECTORS:
        for anchor in soup.select(selector):
            href = attr_of(anchor, "href")
            if href and href not in seen:
                seen.add(href)
                links.append(Link(text=text_of(anchor), href=href))

    return links[:MAX_PRODUCT_LINKS]
