"""FastAPI application factory.

Lifespan
--------
On startup the app configures logging and creates the single
:class:`~site_audit.store.SiteModelStore` shared by all requests via
``request.app.state.store``.  The store is discarded on shutdown.

Routers
-------
    /sites  analyze a site, then read back its categories and templates
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from site_audit.api.routers import sites as sites_router
from site_audit.config import settings
from site_audit.store import SiteModelStore


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the result store on startup and drop it on shutdown."""
    logging.basicConfig(level=settings.log_level)
    app.state.store = SiteModelStore()
    try:
        yield
    finally:
        app.state.store.clear()


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Site Audit API",
        description=(
            "Builds a compact structural model of a web site: its page "
            "templates (product detail, category, home, ...) and its "
            "navigational categories, from a bounded number of fetches."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(sites_router.router, prefix="/sites", tags=["sites"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn site_audit.api.app:app --reload
app = create_app()
