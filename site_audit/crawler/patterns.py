"""URL heuristics: pattern generalisation, crawl eligibility, category links."""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlsplit

# ---------------------------------------------------------------------------
# Pattern generalizer
# ---------------------------------------------------------------------------
_NUMERIC_SEGMENT = re.compile(r"^\d+$")
_OPAQUE_ID_SEGMENT = re.compile(r"^[0-9a-fA-F-]{20,}$")
_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


def generalize_url(url: str) -> str:
    """Return the path of *url* with variable segments replaced by placeholders.

    Digit-only segments become ``:id`` and hex/dash segments of 20 or more
    characters become ``:uuid``.  The query string and fragment are dropped.
    Accepts absolute URLs as well as bare paths, and is idempotent.  Input
    without a scheme is always a path, so ``//media/1`` keeps its segments.
    """
    if _SCHEME.match(url):
        try:
            parts = urlsplit(url)
        except ValueError:
            return url
        path = parts.path or "/"
    else:
        path = re.split(r"[?#]", url, maxsplit=1)[0]

    segments = []
    for segment in path.split("/"):
        if _NUMERIC_SEGMENT.match(segment):
            segment = ":id"
        elif _OPAQUE_ID_SEGMENT.match(segment):
            segment = ":uuid"
        segments.append(segment)
    return "/".join(segments)


# ---------------------------------------------------------------------------
# Resolution and crawl eligibility
# ---------------------------------------------------------------------------
_ASSET_EXTENSION = re.compile(r"\.(jpg|jpeg|png|gif|svg|pdf|zip|css|js|json|xml)$", re.IGNORECASE)
_NON_CONTENT_PREFIX = re.compile(r"/(api|cdn|static|assets|media)/", re.IGNORECASE)


def normalize_root(url: str) -> str:
    """Strip a single trailing slash from *url*."""
    return url[:-1] if url.endswith("/") else url


def resolve_url(href: str, base_url: str) -> str | None:
    """Resolve *href* against *base_url*; ``None`` when it cannot be resolved."""
    try:
        resolved = urljoin(base_url, href.strip())
        host = urlsplit(resolved).hostname
    except ValueError:
        return None
    return resolved if host else None


def is_crawlable(url: str, root_url: str) -> bool:
    """``True`` if *url* is on the root's host and is not a static asset."""
    try:
        parts = urlsplit(url)
        root_host = urlsplit(root_url).hostname
        host = parts.hostname
    except ValueError:
        return False

    if parts.scheme not in ("http", "https") or host != root_host:
        return False
    if _ASSET_EXTENSION.search(parts.path):
        return False
    if _NON_CONTENT_PREFIX.search(parts.path):
        return False
    return True


# ---------------------------------------------------------------------------
# Category-link filter
# ---------------------------------------------------------------------------
_EXCLUDE_PATTERNS = [
    re.compile(
        r"/(login|signup|account|profile|cart|checkout|about|contact|help|faq|privacy|terms)",
        re.IGNORECASE,
    ),
    re.compile(r"\.(jpg|jpeg|png|gif|svg|pdf|zip)$", re.IGNORECASE),
    re.compile(r"^(mailto:|tel:|javascript:|#)", re.IGNORECASE),
    re.compile(r"/(search|blog|news|article)", re.IGNORECASE),
]

_CATEGORY_PATH_PATTERNS = [
    re.compile(
        r"/(category|categories|c|cat|collection|collections|dept|department)(?:[/?#]|$)",
        re.IGNORECASE,
    ),
    # Simple single-segment paths like /electronics or /mens-clothing
    re.compile(r"^/[a-z0-9-]+/?$"),
]

CATEGORY_WORDS = ("shop", "men", "women", "kids", "sale", "new", "electronics", "clothing", "home")


def looks_like_category_link(href: str, text: str) -> bool:
    """Decide whether a navigation link plausibly leads to a category page."""
    for pattern in _EXCLUDE_PATTERNS:
        if pattern.search(href) or pattern.search(text):
            return False

    for pattern in _CATEGORY_PATH_PATTERNS:
        if pattern.search(href):
            return True

    lower_text = text.lower()
    return any(word in lower_text for word in CATEGORY_WORDS)
