"""Site analysis endpoints.

Routes
------
POST /sites/analyze          Body: {"url": "https://...", "max_pages": 50}
GET  /sites/categories?url=  Categories from a previous analysis
GET  /sites/templates?url=   Page templates from a previous analysis
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field, field_validator

from site_audit.config import settings
from site_audit.crawler import SiteModel, analyze, summarize

router = APIRouter()

_TEMPLATES_EXPLANATION = (
    "Templates represent the different page types on the site. For example, "
    "there is typically one Product Detail Page template that displays any "
    "product, rather than separate pages for each product."
)


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    url: str
    max_pages: int = Field(default_factory=lambda: settings.default_max_pages, ge=1)

    @field_validator("url")
    @classmethod
    def _absolute_http_url(cls, value: str) -> str:
        # Store keys are the URL exactly as submitted, so no normalisation here.
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("url must be an absolute http(s) URL")
        return value


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _require_model(request: Request, url: str) -> SiteModel:
    model = request.app.state.store.get(url)
    if model is None:
        raise HTTPException(
            status_code=404, detail="Site not analyzed yet. Run /sites/analyze first."
        )
    return model


def _template_list(model: SiteModel) -> list[dict[str, Any]]:
    return [tpl.to_dict() for tpl in model.templates.values()]


def _category_list(model: SiteModel) -> list[dict[str, Any]]:
    return [e.to_dict() for e in model.categories()]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/analyze")
def analyze_site(body: AnalyzeRequest, request: Request) -> dict[str, Any]:
    """Crawl the site and store the resulting model under the submitted URL.

    An unreachable site is not an error: the response simply reports no
    templates and no categories.
    """
    url = body.url
    model = analyze(url, max_pages=body.max_pages)
    request.app.state.store.put(url, model)

    return {
        "success": True,
        "domain": model.domain,
        "analyzedAt": model.analyzed_at_iso,
        "summary": summarize(model),
        "templates": _template_list(model),
        "categories": [e.to_dict() for e in model.entities],
        "robotsTxt": "Available" if model.robots_txt else "Not found",
    }


@router.get("/categories")
def get_categories(request: Request, url: str) -> dict[str, Any]:
    """Category and subcategory entities discovered for *url*."""
    model = _require_model(request, url)
    categories = _category_list(model)
    return {
        "success": True,
        "domain": model.domain,
        "totalCategories": len(categories),
        "categories": categories,
    }


@router.get("/templates")
def get_templates(request: Request, url: str) -> dict[str, Any]:
    """Page templates identified for *url*."""
    model = _require_model(request, url)
    templates = _template_list(model)
    return {
        "success": True,
        "domain": model.domain,
        "totalTemplates": len(templates),
        "templates": templates,
        "explanation": _TEMPLATES_EXPLANATION,
    }
