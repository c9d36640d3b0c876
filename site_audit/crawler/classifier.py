"""Page template classifier.

A page is matched against :data:`CLASSIFICATION_RULES` in order; the first
rule whose detector reports any characteristics decides the template type.
Each detector returns the human-readable characteristics that fired, so an
empty list means "no match".  When nothing matches the page is ``UNKNOWN``.

Detected structural elements (navigation, footer, product grid) are computed
independently of the verdict.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from urllib.parse import parse_qs, urlsplit

from bs4 import BeautifulSoup

from site_audit.crawler.document import count, exists, text_of
from site_audit.crawler.models import Classification, TemplateType
from site_audit.crawler.patterns import generalize_url, normalize_root

# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------
_CART_BUTTON = '[class*="add-to-cart"], [class*="addToCart"], button'
_PRODUCT_TITLE = '[class*="product-title"], [class*="productTitle"], h1[class*="product"]'
_PRODUCT_IMAGE = '[class*="product-image"], [class*="productImage"], .product-gallery'
_PRICE = '[class*="price"]'
_SKU = '[class*="sku"], [class*="product-id"]'

_PRODUCT_DESTINATION = 'a[href*="/product"], a[href*="/p/"], a[class*="product"]'
_FILTERS = '[class*="filter"], [class*="facet"], [class*="refine"]'
_PAGINATION = '[class*="pagination"], [class*="pager"]'

_CART_ELEMENTS = '[class*="cart"], [class*="basket"]'
_SEARCH_RESULTS = '[class*="search-results"]'

_NAVIGATION = 'nav, header nav, .navigation, [role="navigation"]'
_PRODUCT_GRID_ITEMS = '[class*="product"], [class*="item"]'

MIN_PDP_INDICATORS = 2
MAX_PDP_PRICES = 9


@dataclass(frozen=True)
class PageContext:
    url: str
    root_url: str
    soup: BeautifulSoup


Detector = Callable[[PageContext], list[str]]


@dataclass(frozen=True)
class ClassificationRule:
    template_type: TemplateType
    detect: Detector


# ---------------------------------------------------------------------------
# Detectors
# ---------------------------------------------------------------------------

def _has_add_to_cart(soup: BeautifulSoup) -> bool:
    for element in soup.select(_CART_BUTTON):
        text = text_of(element).lower()
        if "add" in text and "cart" in text:
            return True
    return False


def detect_product_detail(page: PageContext) -> list[str]:
    """Product detail needs at least two of five indicators."""
    soup = page.soup
    prices = count(soup, _PRICE)
    indicators = [
        ("Has add to cart button", _has_add_to_cart(soup)),
        ("Has product title", exists(soup, _PRODUCT_TITLE)),
        ("Has product images", exists(soup, _PRODUCT_IMAGE)),
        ("Has price", 0 < prices <= MAX_PDP_PRICES),
        ("Has SKU / product id", exists(soup, _SKU)),
    ]
    fired = [label for label, present in indicators if present]
    return fired if len(fired) >= MIN_PDP_INDICATORS else []


def detect_category(page: PageContext) -> list[str]:
    soup = page.soup
    product_links = count(soup, _PRODUCT_DESTINATION)
    has_filters = exists(soup, _FILTERS)
    has_pagination = exists(soup, _PAGINATION)

    if not (product_links > 5 or (product_links > 2 and (has_filters or has_pagination))):
        return []

    fired = [f"Has {product_links} product links"]
    if has_filters:
        fired.append("Has filters/facets")
    if has_pagination:
        fired.append("Has pagination")
    return fired


def detect_home(page: PageContext) -> list[str]:
    if normalize_root(page.url) != normalize_root(page.root_url):
        return []
    fired = ["Root URL"]
    if exists(page.soup, _NAVIGATION):
        fired.append("Has navigation menu")
    return fired


def detect_cart(page: PageContext) -> list[str]:
    url = page.url.lower()
    if "/cart" in url or "/basket" in url:
        return ["Cart URL"]
    if count(page.soup, _CART_ELEMENTS) > 3:
        return ["Has cart items"]
    return []


def detect_search(page: PageContext) -> list[str]:
    parts = urlsplit(page.url)
    if "search" in f"{parts.path}?{parts.query}".lower():
        return ["Search URL"]
    params = parse_qs(parts.query, keep_blank_values=True)
    if "q" in params or "query" in params:
        return ["Has search query"]
    if exists(page.soup, _SEARCH_RESULTS):
        return ["Has search results"]
    return []


CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(TemplateType.PRODUCT_DETAIL, detect_product_detail),
    ClassificationRule(TemplateType.CATEGORY, detect_category),
    ClassificationRule(TemplateType.HOME, detect_home),
    ClassificationRule(TemplateType.CART, detect_cart),
    ClassificationRule(TemplateType.SEARCH, detect_search),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def detect_elements(soup: BeautifulSoup) -> list[str]:
    """Structural regions present on the page, independent of its type."""
    elements = []
    if exists(soup, _NAVIGATION):
        elements.append("Navigation")
    if exists(soup, "footer"):
        elements.append("Footer")
    if count(soup, _PRODUCT_GRID_ITEMS) > 5:
        elements.append("Product Grid")
    return elements


def classify_page(url: str, soup: BeautifulSoup, root_url: str) -> Classification:
    """Assign *url* (parsed as *soup*) to exactly one :class:`TemplateType`."""
    page = PageContext(url=url, root_url=root_url, soup=soup)
    template_type = TemplateType.UNKNOWN
    characteristics: list[str] = []

    for rule in CLASSIFICATION_RULES:
        characteristics = rule.detect(page)
        if characteristics:
            template_type = rule.template_type
            break

    return Classification(
        template_type=template_type,
        url_pattern=generalize_url(url),
        characteristics=tuple(characteristics),
        detected_elements=tuple(detect_elements(soup)),
    )


def classify_home(url: str, soup: BeautifulSoup) -> Classification:
    """Classification for the site root, which is always the home template."""
    characteristics = detect_home(PageContext(url=url, root_url=url, soup=soup))
    return Classification(
        template_type=TemplateType.HOME,
        url_pattern=generalize_url(url),
        characteristics=tuple(characteristics),
        detected_elements=tuple(detect_elements(soup)),
    )
