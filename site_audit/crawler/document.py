"""Document query capability: turns a page body into a selectable tree."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


class DocumentParseError(ValueError):
    """Raised when a fetched body cannot be turned into an HTML document."""


def parse_document(html: str) -> BeautifulSoup:
    """Parse *html* into a :class:`~bs4.BeautifulSoup` tree.

    Raises:
        DocumentParseError: If the body is blank or holds no elements.
    """
    if not html or not html.strip():
        raise DocumentParseError("empty document body")
    soup = BeautifulSoup(html, "html.parser")
    if soup.find() is None:
        raise DocumentParseError("document contains no elements")
    return soup


def count(soup: BeautifulSoup, selector: str) -> int:
    """Number of distinct elements matching the CSS *selector*."""
    return len(soup.select(selector))


def exists(soup: BeautifulSoup, selector: str) -> bool:
    return soup.select_one(selector) is not None


def text_of(element: Tag) -> str:
    """Trimmed text content of *element*."""
    return element.get_text(" ", strip=True)


def attr_of(element: Tag, name: str) -> str:
    """Attribute *name* of *element* as a trimmed string (``""`` when absent)."""
    value = element.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip()
