"""HTTP fetcher for site pages and the robots.txt disallow policy."""

from __future__ import annotations

import logging

import httpx

from site_audit.config import settings
from site_audit.crawler.models import RawPage

logger = logging.getLogger(__name__)


def create_client() -> httpx.Client:
    """Return an ``httpx.Client`` configured with the crawler's identity."""
    return httpx.Client(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.request_timeout,
        follow_redirects=True,
    )


def fetch_url(client: httpx.Client, url: str) -> RawPage:
    """GET *url* with *client* and return a :class:`RawPage`.

    Raises:
        httpx.HTTPStatusError: If the server answers with a non-2xx status.
        httpx.HTTPError: On any transport-level failure.
        httpx.InvalidURL: If *url* cannot be requested at all.
    """
    response = client.get(url)
    response.raise_for_status()
    return RawPage(url=url, html=response.text, status_code=response.status_code)


def fetch_robots_txt(client: httpx.Client, root_url: str) -> str | None:
    """Return the raw text of ``{root_url}/robots.txt``, or ``None``.

    The policy is informational only, so every failure is tolerated.
    """
    robots_url = f"{root_url}/robots.txt"
    try:
        response = client.get(robots_url)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.debug("No robots.txt at %s: %s", robots_url, exc)
        return None
    return response.text
