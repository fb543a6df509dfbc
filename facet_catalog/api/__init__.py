"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from facet_catalog.api.admin import router as admin_router
from facet_catalog.api.facets import router as facets_router
from facet_catalog.api.health import router as health_router
from facet_catalog.api.products import router as products_router

__all__ = [
    "admin_router",
    "facets_router",
    "health_router",
    "products_router",
]
