"""Crawler package — bounded site crawl, page classification & link heuristics."""

from site_audit.crawler.models import (
    EntityType,
    PageTemplate,
    SiteEntity,
    SiteModel,
    TemplateType,
    summarize,
)
from site_audit.crawler.orchestrator import SiteCrawler, analyze
from site_audit.crawler.patterns import generalize_url

__all__ = [
    "analyze",
    "SiteCrawler",
    "generalize_url",
    "summarize",
    "SiteModel",
    "PageTemplate",
    "SiteEntity",
    "TemplateType",
    "EntityType",
]
