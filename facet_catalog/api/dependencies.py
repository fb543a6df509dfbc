"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from facet_catalog.catalog.service import FacetCatalogService
from facet_catalog.infrastructure.database import get_session


def get_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> FacetCatalogService:
    """Get facet catalog service bound to the request session."""
    return FacetCatalogService(session)


ServiceDep = Annotated[FacetCatalogService, Depends(get_service)]
