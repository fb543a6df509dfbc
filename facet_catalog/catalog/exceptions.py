"""Catalog exceptions.

Errors raised by the facet catalog when a write violates a uniqueness
invariant or an id-targeted operation names a record that does not exist.
Unresolvable attribute or value names are not errors; they are logged and
reported back to the caller instead.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CatalogError(DomainError):
    """Base class for catalog errors."""

    pass


# ============================================================================
# Uniqueness Errors
# ============================================================================


class DuplicateNameError(CatalogError):
    """Raised when an attribute name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Attribute with name '{name}' already exists",
            details={"name": name},
        )


class DuplicateValueError(CatalogError):
    """Raised when a value already exists under the same attribute."""

    def __init__(self, attribute_id: int, value: str) -> None:
        super().__init__(
            f"Value '{value}' already exists for attribute {attribute_id}",
            details={"attribute_id": attribute_id, "value": value},
        )


# ============================================================================
# Not Found Errors
# ============================================================================


class NotFoundError(CatalogError):
    """Raised when an id-targeted operation names a missing record."""

    entity_type = "Entity"

    def __init__(self, entity_id: Any) -> None:
        """Initialize not found error.

        Args:
            entity_id: ID that did not resolve.
        """
        super().__init__(
            f"{self.entity_type} {entity_id} not found",
            details={"entity_type": self.entity_type, "entity_id": entity_id},
        )
        self.entity_id = entity_id


class AttributeNotFoundError(NotFoundError):
    """Raised when an attribute is not found."""

    entity_type = "Attribute"


class AttributeValueNotFoundError(NotFoundError):
    """Raised when an attribute value is not found."""

    entity_type = "AttributeValue"


class CategoryNotFoundError(NotFoundError):
    """Raised when a category is not found."""

    entity_type = "Category"


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    entity_type = "Product"
