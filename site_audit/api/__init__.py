"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from site_audit.api import app

    uvicorn site_audit.api:app --reload
"""

from site_audit.api.app import app

__all__ = ["app"]
