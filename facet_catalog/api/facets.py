"""Public facet endpoints.

Facet list for the storefront filter sidebar, and constraint resolution
for the listing component.
"""

from fastapi import APIRouter, Query

from facet_catalog.api.dependencies import ServiceDep
from facet_catalog.api.schemas import (
    FacetSchema,
    FacetValueSchema,
    ResolveRequest,
    ResolveResponse,
)
from facet_catalog.catalog.facets import Facet

router = APIRouter(prefix="/facets", tags=["Facets"])


def facet_to_response(facet: Facet) -> FacetSchema:
    """Convert Facet to response schema."""
    return FacetSchema(
        attribute_name=facet.attribute_name,
        display_name=facet.display_name,
        values=[
            FacetValueSchema(value=v.value, display_value=v.display_value)
            for v in facet.values
        ],
    )


@router.get(
    "",
    response_model=list[FacetSchema],
    summary="List facets",
    description="Active attributes with their active values, optionally scoped to a category.",
)
async def list_facets(
    service: ServiceDep,
    category: str | None = Query(default=None, description="Category name; 'all' for no scope"),
) -> list[FacetSchema]:
    """List facets for a filter sidebar."""
    facets = await service.get_facets(category)
    return [facet_to_response(facet) for facet in facets]


@router.post(
    "/resolve",
    response_model=ResolveResponse,
    summary="Resolve constraints",
    description=(
        "Resolve a constraint map into matching product IDs. "
        "An empty map is unconstrained and must not be read as 'no matches'."
    ),
)
async def resolve_constraints(
    body: ResolveRequest,
    service: ServiceDep,
) -> ResolveResponse:
    """Resolve a constraint map."""
    resolution = await service.resolve_with_report(body.constraints)

    if resolution.unconstrained:
        return ResolveResponse(unconstrained=True)

    unresolved_values: dict[str, list[str]] = {}
    for attribute_name, value in resolution.unresolved_values:
        unresolved_values.setdefault(attribute_name, []).append(value)

    return ResolveResponse(
        unconstrained=False,
        product_ids=sorted(resolution.product_ids),
        unresolved_attributes=list(resolution.unresolved_attributes),
        unresolved_values=unresolved_values,
    )
