"""Attribute catalog.

Administration of attribute definitions and their enumerated values.
Attributes and values are edited independently of products; deleting
either one removes every product assignment that references it.
"""

from collections.abc import Sequence
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from facet_catalog.catalog.exceptions import (
    AttributeNotFoundError,
    AttributeValueNotFoundError,
    DuplicateNameError,
    DuplicateValueError,
)
from facet_catalog.catalog.models import Attribute, AttributeValue
from facet_catalog.catalog.repository import AttributeRepository
from facet_catalog.infrastructure.database import committing

logger = structlog.get_logger()

ATTRIBUTE_FIELDS = frozenset({"name", "display_name", "description", "display_order", "active"})
VALUE_FIELDS = frozenset({"value", "display_value", "display_order", "active"})

# Fields that accept None on update
NULLABLE_FIELDS = frozenset({"description"})


def check_fields(fields: dict[str, Any], allowed: frozenset[str], kind: str) -> None:
    """Reject unknown fields and None for non-nullable ones.

    Raises:
        ValueError: If a field is unknown or set to None without being nullable.
    """
    unknown = set(fields) - allowed
    if unknown:
        raise ValueError(f"Unknown {kind} fields: {sorted(unknown)}")

    nulls = sorted(k for k, v in fields.items() if v is None and k not in NULLABLE_FIELDS)
    if nulls:
        raise ValueError(f"{kind.capitalize()} fields cannot be null: {nulls}")


def is_unique_violation(error: IntegrityError, constraint: str) -> bool:
    """Whether an integrity error comes from the given unique constraint.

    PostgreSQL names the constraint; SQLite only reports a UNIQUE failure.
    """
    message = str(error.orig)
    return constraint in message or "UNIQUE constraint failed" in message


class AttributeCatalog:
    """Service owning attribute definitions and their values.

    Example usage:
        async with get_session() as session:
            catalog = AttributeCatalog(session)
            color = await catalog.create_attribute("color", "Color")
            await catalog.create_value(color.id, "red", "Red")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository = AttributeRepository(session)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    async def list_attributes(self, include_inactive: bool = False) -> list[Attribute]:
        """List attributes ordered by (display order, name).

        Args:
            include_inactive: Include inactive attributes (admin view).

        Returns:
            Ordered attributes.
        """
        return list(await self.repository.find_all(include_inactive=include_inactive))

    async def list_active_attributes(self) -> list[Attribute]:
        """List active attributes."""
        return await self.list_attributes(include_inactive=False)

    async def list_all_attributes(self) -> list[Attribute]:
        """List all attributes, active or not."""
        return await self.list_attributes(include_inactive=True)

    async def get_attribute(self, attribute_id: int) -> Attribute:
        """Get attribute by ID.

        Raises:
            AttributeNotFoundError: If the attribute does not exist.
        """
        attribute = await self.repository.get_by_id(attribute_id)
        if attribute is None:
            raise AttributeNotFoundError(attribute_id)
        return attribute

    async def find_attribute_by_name(self, name: str) -> Attribute | None:
        """Get attribute by name, or None."""
        return await self.repository.get_by_name(name)

    async def create_attribute(
        self,
        name: str,
        display_name: str,
        description: str | None = None,
        display_order: int = 0,
        active: bool = True,
    ) -> Attribute:
        """Create an attribute.

        Args:
            name: Unique machine name.
            display_name: Human-readable label.
            description: Optional description.
            display_order: Sort key.
            active: Whether the attribute is publicly visible.

        Returns:
            Created attribute.

        Raises:
            DuplicateNameError: If the name is already taken.
        """
        if await self.repository.get_by_name(name) is not None:
            raise DuplicateNameError(name)

        attribute = Attribute(
            name=name,
            display_name=display_name,
            description=description,
            display_order=display_order,
            active=active,
        )

        try:
            async with committing(self.session):
                await self.repository.save(attribute)
        except IntegrityError as e:
            if not is_unique_violation(e, "uq_attributes_name"):
                raise
            raise DuplicateNameError(name) from e

        logger.info("Attribute created", attribute_id=attribute.id, name=name)
        return attribute

    async def update_attribute(self, attribute_id: int, **fields: Any) -> Attribute:
        """Update attribute fields.

        Args:
            attribute_id: Attribute ID.
            **fields: Any of name, display_name, description,
                display_order, active.

        Returns:
            Updated attribute.

        Raises:
            AttributeNotFoundError: If the attribute does not exist.
            DuplicateNameError: If renamed to a name held by another attribute.
            ValueError: If a field is unknown or null when it must not be.
        """
        check_fields(fields, ATTRIBUTE_FIELDS, "attribute")

        attribute = await self.get_attribute(attribute_id)
        current_name = attribute.name

        new_name = fields.get("name")
        if new_name is not None and new_name != current_name:
            existing = await self.repository.get_by_name(new_name)
            if existing is not None and existing.id != attribute_id:
                raise DuplicateNameError(new_name)

        try:
            async with committing(self.session):
                for key, value in fields.items():
                    setattr(attribute, key, value)
                await self.session.flush()
        except IntegrityError as e:
            if not is_unique_violation(e, "uq_attributes_name"):
                raise
            raise DuplicateNameError(new_name or current_name) from e

        logger.info(
            "Attribute updated",
            attribute_id=attribute_id,
            fields=sorted(fields),
        )
        return attribute

    async def delete_attribute(self, attribute_id: int) -> None:
        """Delete an attribute, its values, and every reference to it.

        Raises:
            AttributeNotFoundError: If the attribute does not exist.
        """
        attribute = await self.get_attribute(attribute_id)
        name = attribute.name

        async with committing(self.session):
            await self.repository.delete(attribute_id)

        logger.info("Attribute deleted", attribute_id=attribute_id, name=name)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    async def list_values(
        self,
        attribute_id: int,
        active_only: bool = False,
    ) -> Sequence[AttributeValue]:
        """List values of an attribute ordered by (display order, value).

        An unknown attribute yields an empty list.
        """
        return await self.repository.list_values(
            attribute_id,
            include_inactive=not active_only,
        )

    async def get_value(self, value_id: int) -> AttributeValue:
        """Get attribute value by ID.

        Raises:
            AttributeValueNotFoundError: If the value does not exist.
        """
        value = await self.repository.get_value_by_id(value_id)
        if value is None:
            raise AttributeValueNotFoundError(value_id)
        return value

    async def create_value(
        self,
        attribute_id: int,
        value: str,
        display_value: str,
        display_order: int = 0,
        active: bool = True,
    ) -> AttributeValue:
        """Create a value under an attribute.

        Args:
            attribute_id: Owning attribute ID.
            value: Machine value, unique within the attribute.
            display_value: Human-readable label.
            display_order: Sort key.
            active: Whether the value is publicly visible.

        Returns:
            Created value.

        Raises:
            AttributeNotFoundError: If the attribute does not exist.
            DuplicateValueError: If the value already exists for the attribute.
        """
        await self.get_attribute(attribute_id)

        if await self.repository.get_value(attribute_id, value) is not None:
            raise DuplicateValueError(attribute_id, value)

        attribute_value = AttributeValue(
            attribute_id=attribute_id,
            value=value,
            display_value=display_value,
            display_order=display_order,
            active=active,
        )

        try:
            async with committing(self.session):
                await self.repository.save_value(attribute_value)
        except IntegrityError as e:
            if not is_unique_violation(e, "uq_attribute_values_attribute_value"):
                raise
            raise DuplicateValueError(attribute_id, value) from e

        logger.info(
            "Attribute value created",
            attribute_id=attribute_id,
            value_id=attribute_value.id,
            value=value,
        )
        return attribute_value

    async def update_value(self, value_id: int, **fields: Any) -> AttributeValue:
        """Update value fields.

        Args:
            value_id: Value ID.
            **fields: Any of value, display_value, display_order, active.

        Returns:
            Updated value.

        Raises:
            AttributeValueNotFoundError: If the value does not exist.
            DuplicateValueError: If changed to a value held by a sibling.
            ValueError: If a field is unknown or null when it must not be.
        """
        check_fields(fields, VALUE_FIELDS, "value")

        attribute_value = await self.get_value(value_id)
        attribute_id = attribute_value.attribute_id
        current_value = attribute_value.value

        new_value = fields.get("value")
        if new_value is not None and new_value != current_value:
            sibling = await self.repository.get_value(attribute_id, new_value)
            if sibling is not None and sibling.id != value_id:
                raise DuplicateValueError(attribute_id, new_value)

        try:
            async with committing(self.session):
                for key, value in fields.items():
                    setattr(attribute_value, key, value)
                await self.session.flush()
        except IntegrityError as e:
            if not is_unique_violation(e, "uq_attribute_values_attribute_value"):
                raise
            raise DuplicateValueError(attribute_id, new_value or current_value) from e

        logger.info("Attribute value updated", value_id=value_id, fields=sorted(fields))
        return attribute_value

    async def delete_value(self, value_id: int) -> None:
        """Delete a value and the product assignments that use it.

        The owning attribute is left in place.

        Raises:
            AttributeValueNotFoundError: If the value does not exist.
        """
        attribute_value = await self.get_value(value_id)
        attribute_id = attribute_value.attribute_id

        async with committing(self.session):
            await self.repository.delete_value(value_id)

        logger.info("Attribute value deleted", value_id=value_id, attribute_id=attribute_id)
