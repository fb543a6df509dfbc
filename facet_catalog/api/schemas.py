"""API schemas for the facet catalog.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Attribute Schemas
# ============================================================================


class AttributeCreateRequest(BaseModel):
    """Request to create an attribute."""

    name: str = Field(..., min_length=1, max_length=100, description="Unique machine name")
    display_name: str = Field(..., min_length=1, max_length=100, description="Label")
    description: str | None = Field(default=None, max_length=500)
    display_order: int = Field(default=0, description="Sort key (ascending)")
    active: bool = Field(default=True, description="Publicly visible")


class AttributeUpdateRequest(BaseModel):
    """Partial update of an attribute. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    display_name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    display_order: int | None = None
    active: bool | None = None


class AttributeResponse(BaseModel):
    """Attribute definition."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    display_name: str
    description: str | None = None
    display_order: int
    active: bool
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Attribute Value Schemas
# ============================================================================


class AttributeValueCreateRequest(BaseModel):
    """Request to create a value under an attribute."""

    value: str = Field(..., min_length=1, max_length=100, description="Machine value")
    display_value: str = Field(..., min_length=1, max_length=100, description="Label")
    display_order: int = Field(default=0, description="Sort key (ascending)")
    active: bool = Field(default=True, description="Publicly visible")


class AttributeValueUpdateRequest(BaseModel):
    """Partial update of a value. Omitted fields are left unchanged."""

    value: str | None = Field(default=None, min_length=1, max_length=100)
    display_value: str | None = Field(default=None, min_length=1, max_length=100)
    display_order: int | None = None
    active: bool | None = None


class AttributeValueResponse(BaseModel):
    """Attribute value."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    attribute_id: int
    value: str
    display_value: str
    display_order: int
    active: bool
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Category Binding Schemas
# ============================================================================


class CategoryBindingsRequest(BaseModel):
    """Full replacement of a category's attribute set."""

    attribute_ids: list[int] = Field(default_factory=list, description="Attributes to bind")


# ============================================================================
# Facet Schemas
# ============================================================================


class FacetValueSchema(BaseModel):
    """Selectable value of a facet."""

    value: str
    display_value: str


class FacetSchema(BaseModel):
    """Facet shown in a filter sidebar."""

    attribute_name: str
    display_name: str
    values: list[FacetValueSchema]


class ResolveRequest(BaseModel):
    """Constraint map to resolve."""

    constraints: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Attribute name to acceptable values (OR within, AND across)",
    )


class ResolveResponse(BaseModel):
    """Matching product IDs."""

    unconstrained: bool = Field(
        ..., description="True when no constraint applies; product_ids is then empty"
    )
    product_ids: list[int] = Field(default_factory=list)
    unresolved_attributes: list[str] = Field(default_factory=list)
    unresolved_values: dict[str, list[str]] = Field(default_factory=dict)


# ============================================================================
# Product Assignment Schemas
# ============================================================================


class ProductAttributesResponse(BaseModel):
    """A product's assigned values grouped by attribute name."""

    product_id: int
    attributes: dict[str, list[str]]


class ProductAttributesReplaceResponse(ProductAttributesResponse):
    """Assignments after a replace, with dropped names."""

    dropped_attributes: list[str] = Field(default_factory=list)
    dropped_values: dict[str, list[str]] = Field(default_factory=dict)
