"""Product attribute index.

Stores which (attribute, value) pairs each product carries. A product's
assignments are always replaced as a whole: every existing row is deleted
and the new selection is inserted in the same transaction.

Names that do not resolve against the attribute catalog are dropped with a
warning instead of failing the call, because product forms may submit an
attribute vocabulary that has changed since the form was rendered.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from facet_catalog.catalog.exceptions import ProductNotFoundError
from facet_catalog.catalog.models import ProductAttribute
from facet_catalog.catalog.repository import AttributeRepository, ProductAttributeRepository
from facet_catalog.infrastructure.database import committing

logger = structlog.get_logger()


@dataclass
class ReplaceReport:
    """Outcome of replacing a product's assignments.

    Attributes:
        product_id: Product whose assignments were replaced.
        stored: (attribute name, value) pairs now assigned, in order.
        removed: Number of assignment rows deleted.
        dropped_attributes: Attribute names that did not resolve.
        dropped_values: (attribute name, value) pairs whose value did not
            resolve under its attribute.
    """

    product_id: int
    stored: list[tuple[str, str]] = field(default_factory=list)
    removed: int = 0
    dropped_attributes: list[str] = field(default_factory=list)
    dropped_values: list[tuple[str, str]] = field(default_factory=list)

    @property
    def has_dropped(self) -> bool:
        """Whether any name was dropped."""
        return bool(self.dropped_attributes or self.dropped_values)


class ProductAttributeIndex:
    """Service maintaining per-product attribute assignments."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository = ProductAttributeRepository(session)
        self.attributes = AttributeRepository(session)

    async def replace_assignments(
        self,
        product_id: int,
        attribute_values: Mapping[str, Sequence[str]],
    ) -> ReplaceReport:
        """Replace every assignment of a product.

        Runs as one transaction: the product row is locked, its existing
        assignments are deleted, and one assignment is inserted for each
        (attribute, value) pair that resolves. A value is always resolved
        through its attribute, never on its own. Calling this twice with
        the same map leaves the same assignment set.

        Args:
            product_id: Product ID.
            attribute_values: Attribute name to ordered value strings.

        Returns:
            ReplaceReport with stored and dropped names.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        report = ReplaceReport(product_id=product_id)

        async with committing(self.session):
            product = await self.repository.get_product(product_id, lock=True)
            if product is None:
                raise ProductNotFoundError(product_id)

            report.removed = await self.repository.delete_by_product(product_id)

            resolved = await self.attributes.get_by_names(attribute_values.keys())
            rows: list[ProductAttribute] = []

            for attribute_name, values in attribute_values.items():
                attribute = resolved.get(attribute_name)
                if attribute is None:
                    logger.warning(
                        "Attribute not found, skipping",
                        product_id=product_id,
                        attribute=attribute_name,
                    )
                    report.dropped_attributes.append(attribute_name)
                    continue

                wanted = list(dict.fromkeys(values))
                known = await self.attributes.get_values(attribute.id, wanted)

                for value in wanted:
                    attribute_value = known.get(value)
                    if attribute_value is None:
                        logger.warning(
                            "Attribute value not found, skipping",
                            product_id=product_id,
                            attribute=attribute_name,
                            value=value,
                        )
                        report.dropped_values.append((attribute_name, value))
                        continue

                    rows.append(
                        ProductAttribute(
                            product_id=product_id,
                            attribute_id=attribute.id,
                            attribute_value_id=attribute_value.id,
                        )
                    )
                    report.stored.append((attribute_name, value))

            await self.repository.add_all(rows)

        logger.info(
            "Product assignments replaced",
            product_id=product_id,
            removed=report.removed,
            stored=len(report.stored),
            dropped=len(report.dropped_attributes) + len(report.dropped_values),
        )
        return report

    async def get_assignments(self, product_id: int) -> dict[str, list[str]]:
        """Assigned values of a product, grouped by attribute name.

        Values keep the order in which they were assigned. An unknown
        product yields an empty mapping.
        """
        grouped: dict[str, list[str]] = {}
        for attribute_name, value in await self.repository.find_pairs(product_id):
            grouped.setdefault(attribute_name, []).append(value)
        return grouped

    async def clear_assignments(self, product_id: int) -> int:
        """Delete every assignment of a product.

        Returns:
            Number of rows deleted.
        """
        async with committing(self.session):
            removed = await self.repository.delete_by_product(product_id)

        logger.info("Product assignments cleared", product_id=product_id, removed=removed)
        return removed
