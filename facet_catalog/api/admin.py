"""Admin endpoints.

Attribute and value administration, and category attribute bindings.
"""

from fastapi import APIRouter, HTTPException, Query, Response, status

from facet_catalog.api.dependencies import ServiceDep
from facet_catalog.api.schemas import (
    AttributeCreateRequest,
    AttributeResponse,
    AttributeUpdateRequest,
    AttributeValueCreateRequest,
    AttributeValueResponse,
    AttributeValueUpdateRequest,
    CategoryBindingsRequest,
    ErrorResponse,
)

router = APIRouter(prefix="/admin", tags=["Admin"])

NOT_FOUND = {404: {"model": ErrorResponse}}
CONFLICT = {409: {"model": ErrorResponse}}


# ============================================================================
# Attributes
# ============================================================================


@router.get("/attributes", response_model=list[AttributeResponse])
async def list_attributes(
    service: ServiceDep,
    include_inactive: bool = Query(default=True),
) -> list[AttributeResponse]:
    """List attributes ordered by (display order, name)."""
    attributes = await service.attributes.list_attributes(include_inactive=include_inactive)
    return [AttributeResponse.model_validate(a) for a in attributes]


@router.post(
    "/attributes",
    response_model=AttributeResponse,
    status_code=status.HTTP_201_CREATED,
    responses=CONFLICT,
)
async def create_attribute(
    body: AttributeCreateRequest,
    service: ServiceDep,
) -> AttributeResponse:
    """Create an attribute."""
    attribute = await service.attributes.create_attribute(
        name=body.name,
        display_name=body.display_name,
        description=body.description,
        display_order=body.display_order,
        active=body.active,
    )
    return AttributeResponse.model_validate(attribute)


@router.get("/attributes/{attribute_id}", response_model=AttributeResponse, responses=NOT_FOUND)
async def get_attribute(attribute_id: int, service: ServiceDep) -> AttributeResponse:
    """Get an attribute."""
    attribute = await service.attributes.get_attribute(attribute_id)
    return AttributeResponse.model_validate(attribute)


@router.put(
    "/attributes/{attribute_id}",
    response_model=AttributeResponse,
    responses={**NOT_FOUND, **CONFLICT},
)
async def update_attribute(
    attribute_id: int,
    body: AttributeUpdateRequest,
    service: ServiceDep,
) -> AttributeResponse:
    """Update an attribute."""
    attribute = await service.attributes.update_attribute(
        attribute_id, **body.model_dump(exclude_unset=True)
    )
    return AttributeResponse.model_validate(attribute)


@router.delete(
    "/attributes/{attribute_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_attribute(attribute_id: int, service: ServiceDep) -> Response:
    """Delete an attribute with its values and assignments."""
    await service.attributes.delete_attribute(attribute_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Attribute Values
# ============================================================================


@router.get("/attributes/{attribute_id}/values", response_model=list[AttributeValueResponse])
async def list_values(
    attribute_id: int,
    service: ServiceDep,
    active_only: bool = Query(default=False),
) -> list[AttributeValueResponse]:
    """List values of an attribute ordered by (display order, value)."""
    values = await service.attributes.list_values(attribute_id, active_only=active_only)
    return [AttributeValueResponse.model_validate(v) for v in values]


@router.post(
    "/attributes/{attribute_id}/values",
    response_model=AttributeValueResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**NOT_FOUND, **CONFLICT},
)
async def create_value(
    attribute_id: int,
    body: AttributeValueCreateRequest,
    service: ServiceDep,
) -> AttributeValueResponse:
    """Create a value under an attribute."""
    value = await service.attributes.create_value(
        attribute_id,
        value=body.value,
        display_value=body.display_value,
        display_order=body.display_order,
        active=body.active,
    )
    return AttributeValueResponse.model_validate(value)


@router.put(
    "/attribute-values/{value_id}",
    response_model=AttributeValueResponse,
    responses={**NOT_FOUND, **CONFLICT},
)
async def update_value(
    value_id: int,
    body: AttributeValueUpdateRequest,
    service: ServiceDep,
) -> AttributeValueResponse:
    """Update an attribute value."""
    value = await service.attributes.update_value(
        value_id, **body.model_dump(exclude_unset=True)
    )
    return AttributeValueResponse.model_validate(value)


@router.delete(
    "/attribute-values/{value_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_value(value_id: int, service: ServiceDep) -> Response:
    """Delete an attribute value and its assignments."""
    await service.attributes.delete_value(value_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Category Bindings
# ============================================================================


@router.get("/categories/{category_id}/attributes", response_model=list[AttributeResponse])
async def get_category_attributes(
    category_id: int,
    service: ServiceDep,
) -> list[AttributeResponse]:
    """List attributes bound to a category."""
    attributes = await service.bindings.get_bindings(category_id)
    return [AttributeResponse.model_validate(a) for a in attributes]


@router.put(
    "/categories/{category_id}/attributes",
    response_model=list[AttributeResponse],
    responses=NOT_FOUND,
)
async def replace_category_attributes(
    category_id: int,
    body: CategoryBindingsRequest,
    service: ServiceDep,
) -> list[AttributeResponse]:
    """Replace the attribute set of a category. Unknown IDs are skipped."""
    attributes = await service.bindings.replace_bindings(category_id, body.attribute_ids)
    return [AttributeResponse.model_validate(a) for a in attributes]


@router.post(
    "/categories/{category_id}/attributes/{attribute_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=CONFLICT,
)
async def add_category_attribute(
    category_id: int,
    attribute_id: int,
    service: ServiceDep,
) -> Response:
    """Bind one attribute to a category."""
    added = await service.bindings.add_binding(category_id, attribute_id)
    if not added:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error_code": "BINDING_REJECTED",
                "message": (
                    f"Attribute {attribute_id} cannot be bound to category {category_id}"
                ),
            },
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/categories/{category_id}/attributes/{attribute_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def remove_category_attribute(
    category_id: int,
    attribute_id: int,
    service: ServiceDep,
) -> Response:
    """Unbind one attribute from a category."""
    removed = await service.bindings.remove_binding(category_id, attribute_id)
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error_code": "NOT_FOUND",
                "message": f"Attribute {attribute_id} is not bound to category {category_id}",
            },
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
