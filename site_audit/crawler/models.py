"""Data models for the crawl-and-classify pipeline.

These are plain Python objects.  The orchestrator accumulates them through a
:class:`SiteModelBuilder` and hands back a frozen :class:`SiteModel`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class TemplateType(str, Enum):
    """Closed set of page layouts a site can be made of."""

    PRODUCT_DETAIL = "Product Detail Page"
    PRODUCT_LISTING = "Product Listing Page"
    CATEGORY = "Category Page"
    HOME = "Home Page"
    SEARCH = "Search Results Page"
    CART = "Cart Page"
    CHECKOUT = "Checkout Page"
    ACCOUNT = "Account Page"
    CONTENT = "Content/CMS Page"
    UNKNOWN = "Unknown"


class EntityType(str, Enum):
    CATEGORY = "category"
    SUBCATEGORY = "subcategory"
    BRAND = "brand"
    COLLECTION = "collection"


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch."""

    url: str
    html: str
    status_code: int


@dataclass(frozen=True)
class Classification:
    """Classifier verdict for one page."""

    template_type: TemplateType
    url_pattern: str
    characteristics: tuple[str, ...] = ()
    detected_elements: tuple[str, ...] = ()


@dataclass(frozen=True)
class PageTemplate:
    type: TemplateType
    url_pattern: str
    example_urls: tuple[str, ...]
    characteristics: tuple[str, ...] = ()
    detected_elements: tuple[str, ...] = ()

    @classmethod
    def from_classification(cls, url: str, result: Classification) -> PageTemplate:
        return cls(
            type=result.template_type,
            url_pattern=result.url_pattern,
            example_urls=(url,),
            characteristics=result.characteristics,
            detected_elements=result.detected_elements,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "urlPattern": self.url_pattern,
            "exampleUrls": list(self.example_urls),
            "characteristics": list(self.characteristics),
            "detectedElements": list(self.detected_elements),
        }


@dataclass(frozen=True)
class SiteEntity:
    type: EntityType
    name: str
    url: str
    parent_category: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type.value,
            "name": self.name,
            "url": self.url,
        }
        if self.parent_category is not None:
            data["parentCategory"] = self.parent_category
        return data


@dataclass(frozen=True)
class SiteModel:
    """The structural model of one site, as produced by a single crawl run."""

    domain: str
    analyzed_at: datetime
    templates: Mapping[TemplateType, PageTemplate] = field(
        default_factory=lambda: MappingProxyType({})
    )
    entities: tuple[SiteEntity, ...] = ()
    site_map: tuple[str, ...] = ()
    robots_txt: str | None = None

    @property
    def analyzed_at_iso(self) -> str:
        """ISO-8601 timestamp in UTC with millisecond precision and a ``Z`` suffix."""
        stamp = self.analyzed_at.astimezone(timezone.utc)
        return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def categories(self) -> list[SiteEntity]:
        """Category and subcategory entities, in discovery order."""
        wanted = (EntityType.CATEGORY, EntityType.SUBCATEGORY)
        return [e for e in self.entities if e.type in wanted]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "domain": self.domain,
            "analyzedAt": self.analyzed_at_iso,
            "templates": {t.value: tpl.to_dict() for t, tpl in self.templates.items()},
            "entities": [e.to_dict() for e in self.entities],
            "siteMap": list(self.site_map),
        }
        if self.robots_txt is not None:
            data["robotsTxt"] = self.robots_txt
        return data


def summarize(model: SiteModel) -> dict[str, int]:
    """Return headline counts for *model*."""
    return {
        "templatesFound": len(model.templates),
        "categoriesFound": sum(1 for e in model.entities if e.type is EntityType.CATEGORY),
        "subcategoriesFound": sum(
            1 for e in model.entities if e.type is EntityType.SUBCATEGORY
        ),
        "pagesAnalyzed": len(model.site_map),
    }


class SiteModelBuilder:
    """Mutable accumulator owned by one in-progress crawl run.

    Templates are first-wins per type and entities are deduplicated by URL at
    insertion time; :meth:`build` freezes the result.
    """

    def __init__(self, domain: str) -> None:
        self.domain = domain
        self.robots_txt: str | None = None
        self._templates: dict[TemplateType, PageTemplate] = {}
        self._entities: list[SiteEntity] = []
        self._entity_urls: set[str] = set()
        self._site_map: list[str] = []

    def has_template(self, template_type: TemplateType) -> bool:
        return template_type in self._templates

    def add_template(self, template: PageTemplate) -> bool:
        """Record *template* unless one of its type already exists."""
        if template.type in self._templates:
            return False
        self._templates[template.type] = template
        return True

    def add_entity(self, entity: SiteEntity) -> bool:
        """Record *entity* unless another entity already uses its URL."""
        if entity.url in self._entity_urls:
            return False
        self._entity_urls.add(entity.url)
        self._entities.append(entity)
        return True

    def add_visited(self, url: str) -> None:
        self._site_map.append(url)

    def build(self) -> SiteModel:
        return SiteModel(
            domain=self.domain,
            analyzed_at=datetime.now(timezone.utc),
            templates=MappingProxyType(dict(self._templates)),
            entities=tuple(self._entities),
            site_map=tuple(self._site_map),
            robots_txt=self.robots_txt,
        )
