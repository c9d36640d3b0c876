"""Crawl orchestrator: bounded traversal from the home page.

``analyze`` drives one run end to end:

    robots.txt → home → nav category links → category pages → one product
    sample per category (until a product detail template is found)

Every fetch is sequential.  A failed fetch or unparseable page is logged and
treated as "no page"; only an unreachable root changes the outcome, and even
then the caller gets an empty model rather than an exception.
"""

from __future__ import annotations

import logging

import httpx
from bs4 import BeautifulSoup

from site_audit.config import settings
from site_audit.crawler.classifier import classify_home, classify_page
from site_audit.crawler.document import DocumentParseError, parse_document
from site_audit.crawler.fetcher import create_client, fetch_robots_txt, fetch_url
from site_audit.crawler.links import extract_category_links, extract_product_links
from site_audit.crawler.models import (
    EntityType,
    PageTemplate,
    SiteEntity,
    SiteModel,
    SiteModelBuilder,
    TemplateType,
)
from site_audit.crawler.patterns import is_crawlable, normalize_root, resolve_url

logger = logging.getLogger(__name__)

_LISTING_TYPES = (TemplateType.CATEGORY, TemplateType.PRODUCT_LISTING)


class SiteCrawler:
    """One bounded analysis run over a single site.

    State (visited set, page budget, model accumulator) belongs to this
    instance only; use a fresh crawler per run.

    Args:
        root_url: Site root; a single trailing slash is ignored.
        max_pages: Ceiling on page fetches counted by the budget.  The
            robots.txt request is not counted.
        client: Optional pre-configured ``httpx.Client``.  When omitted the
            crawler creates one and closes it at the end of the run.
    """

    def __init__(
        self,
        root_url: str,
        max_pages: int | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.root_url = normalize_root(root_url)
        self.max_pages = settings.default_max_pages if max_pages is None else max_pages
        self._client = client
        self._visited: set[str] = set()
        self._pages_fetched = 0

    # ------------------------------------------------------------------
    # Budget / dedup
    # ------------------------------------------------------------------
    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    def _budget_left(self) -> bool:
        return self._pages_fetched < self.max_pages

    def _load(self, client: httpx.Client, url: str) -> BeautifulSoup | None:
        """Fetch and parse *url* once per run; ``None`` means "no page"."""
        if url in self._visited:
            return None
        self._visited.add(url)
        self._pages_fetched += 1

        try:
            raw = fetch_url(client, url)
            return parse_document(raw.html)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Fetch failed for %s: %s", url, exc)
        except DocumentParseError as exc:
            logger.warning("Could not parse %s: %s", url, exc)
        return None

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def analyze(self) -> SiteModel:
        """Run the crawl and return the assembled :class:`SiteModel`."""
        if self._client is not None:
            return self._analyze(self._client)
        with create_client() as client:
            return self._analyze(client)

    def _analyze(self, client: httpx.Client) -> SiteModel:
        logger.info("Analyzing %s (max %d pages)", self.root_url, self.max_pages)
        model = SiteModelBuilder(self.root_url)
        model.robots_txt = fetch_robots_txt(client, self.root_url)

        home = self._load(client, self.root_url)
        # A link back to "/" must not refetch the home page.
        self._visited.add(self.root_url + "/")
        if home is None:
            logger.warning("Root page %s unavailable; returning empty model", self.root_url)
            return model.build()

        model.add_template(
            PageTemplate.from_classification(self.root_url, classify_home(self.root_url, home))
        )

        for link in extract_category_links(home):
            if not self._budget_left():
                logger.info("Page budget of %d exhausted", self.max_pages)
                break

            url = resolve_url(link.href, self.root_url)
            if url is None or not is_crawlable(url, self.root_url) or url in self._visited:
                logger.debug("Skipping candidate %r", link.href)
                continue

            page = self._load(client, url)
            if page is None:
                continue
            model.add_visited(url)

            result = classify_page(url, page, self.root_url)
            logger.debug("%s classified as %s", url, result.template_type.value)
            if result.template_type not in _LISTING_TYPES:
                continue

            model.add_entity(SiteEntity(type=EntityType.CATEGORY, name=link.text, url=url))
            model.add_template(PageTemplate.from_classification(url, result))

            if not model.has_template(TemplateType.PRODUCT_DETAIL):
                self._sample_product(client, page, model)

        site = model.build()
        logger.info(
            "Finished %s: %d templates, %d entities, %d pages fetched",
            self.root_url,
            len(site.templates),
            len(site.entities),
            self._pages_fetched,
        )
        return site

    def _sample_product(
        self, client: httpx.Client, listing: BeautifulSoup, model: SiteModelBuilder
    ) -> None:
        """Fetch the first product link on *listing* and keep it if it is a PDP."""
        product_links = extract_product_links(listing)
        if not product_links:
            return

        url = resolve_url(product_links[0].href, self.root_url)
        if url is None or not is_crawlable(url, self.root_url):
            return
        page = self._load(client, url)
        if page is None:
            return

        result = classify_page(url, page, self.root_url)
        if result.template_type is TemplateType.PRODUCT_DETAIL:
            model.add_template(PageTemplate.from_classification(url, result))
        else:
            logger.debug("Product sample %s classified as %s", url, result.template_type.value)


def analyze(url: str, max_pages: int | None = None, client: httpx.Client | None = None) -> SiteModel:
    """Analyze the site rooted at *url* within a budget of *max_pages* fetches."""
    return SiteCrawler(url, max_pages=max_pages, client=client).analyze()
