"""In-memory store of the most recent :class:`SiteModel` per analyzed URL.

Lifecycle: the owner (the API lifespan handler, or a test) creates one
store, puts a model after each successful analysis and reads it back on
later lookups.  Entries are never expired; they live as long as the store.
"""

from __future__ import annotations

from site_audit.crawler.models import SiteModel


class SiteModelStore:
    """Maps the raw input URL string to its latest analysis; last write wins."""

    def __init__(self) -> None:
        self._models: dict[str, SiteModel] = {}

    def put(self, url: str, model: SiteModel) -> None:
        self._models[url] = model

    def get(self, url: str) -> SiteModel | None:
        return self._models.get(url)

    def clear(self) -> None:
        self._models.clear()

    def __contains__(self, url: object) -> bool:
        return url in self._models

    def __len__(self) -> int:
        return len(self._models)
