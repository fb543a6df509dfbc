"""Product attribute endpoints.

Read and replace the attribute selections of a product. Called by product
management on create/update and by admin edit forms.
"""

from fastapi import APIRouter, Body

from facet_catalog.api.dependencies import ServiceDep
from facet_catalog.api.schemas import (
    ErrorResponse,
    ProductAttributesReplaceResponse,
    ProductAttributesResponse,
)

router = APIRouter(prefix="/products", tags=["Product Attributes"])


@router.get(
    "/{product_id}/attributes",
    response_model=ProductAttributesResponse,
    summary="Get product attributes",
)
async def get_product_attributes(
    product_id: int,
    service: ServiceDep,
) -> ProductAttributesResponse:
    """Get a product's assigned values grouped by attribute name."""
    attributes = await service.get_product_assignments(product_id)
    return ProductAttributesResponse(product_id=product_id, attributes=attributes)


@router.put(
    "/{product_id}/attributes",
    response_model=ProductAttributesReplaceResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Replace product attributes",
    description=(
        "Replace every attribute selection of a product. Unknown attribute "
        "names and values are dropped and listed in the response."
    ),
)
async def replace_product_attributes(
    product_id: int,
    service: ServiceDep,
    selections: dict[str, list[str]] = Body(..., examples=[{"color": ["red", "blue"]}]),
) -> ProductAttributesReplaceResponse:
    """Replace a product's attribute selections."""
    report = await service.replace_product_assignments(product_id, selections)

    attributes: dict[str, list[str]] = {}
    for attribute_name, value in report.stored:
        attributes.setdefault(attribute_name, []).append(value)

    dropped_values: dict[str, list[str]] = {}
    for attribute_name, value in report.dropped_values:
        dropped_values.setdefault(attribute_name, []).append(value)

    return ProductAttributesReplaceResponse(
        product_id=product_id,
        attributes=attributes,
        dropped_attributes=report.dropped_attributes,
        dropped_values=dropped_values,
    )
