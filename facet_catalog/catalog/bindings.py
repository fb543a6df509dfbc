"""Category attribute bindings.

Which attributes are relevant to which category. The binding set of a
category is replaced wholesale whenever an administrator edits it.
"""

from collections.abc import Iterable

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from facet_catalog.catalog.exceptions import CategoryNotFoundError
from facet_catalog.catalog.models import Attribute
from facet_catalog.catalog.repository import AttributeRepository, CategoryAttributeRepository
from facet_catalog.infrastructure.database import committing

logger = structlog.get_logger()


class CategoryAttributeBinding:
    """Service managing category-to-attribute bindings."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository = CategoryAttributeRepository(session)
        self.attributes = AttributeRepository(session)

    async def get_bindings(self, category_id: int) -> list[Attribute]:
        """Attributes bound to a category, active or not.

        An unknown category yields an empty list.
        """
        return list(await self.repository.find_attributes(category_id, include_inactive=True))

    async def get_active_attributes_for_category(self, category_name: str) -> list[Attribute]:
        """Active attributes bound to the named category.

        Ordered by (display order, name). An unknown category yields an
        empty list.
        """
        return list(
            await self.repository.find_attributes_by_category_name(
                category_name,
                include_inactive=False,
            )
        )

    async def replace_bindings(
        self,
        category_id: int,
        attribute_ids: Iterable[int],
    ) -> list[Attribute]:
        """Replace the whole binding set of a category.

        Existing bindings are deleted, then one binding is inserted per
        attribute ID that resolves. IDs that do not resolve are skipped.
        Both steps run in one transaction.

        Args:
            category_id: Category ID.
            attribute_ids: Attribute IDs to bind, in order.

        Returns:
            Attributes bound after the replace.

        Raises:
            CategoryNotFoundError: If the category does not exist.
        """
        requested = list(dict.fromkeys(attribute_ids))

        async with committing(self.session):
            category = await self.repository.get_category(category_id, lock=True)
            if category is None:
                raise CategoryNotFoundError(category_id)

            removed = await self.repository.delete_by_category(category_id)

            resolved = await self.attributes.get_by_ids(requested)
            skipped = [aid for aid in requested if aid not in resolved]
            if skipped:
                logger.warning(
                    "Skipping unknown attributes for category",
                    category_id=category_id,
                    attribute_ids=skipped,
                )

            inserted = await self.repository.add_all(
                category_id,
                [aid for aid in requested if aid in resolved],
            )

        logger.info(
            "Category bindings replaced",
            category_id=category_id,
            removed=removed,
            inserted=inserted,
        )
        return await self.get_bindings(category_id)

    async def add_binding(self, category_id: int, attribute_id: int) -> bool:
        """Bind one attribute to a category.

        Returns:
            False if the binding already exists or either side is missing.
        """
        if await self.repository.exists(category_id, attribute_id):
            return False

        category = await self.repository.get_category(category_id)
        attribute = await self.attributes.get_by_id(attribute_id)
        if category is None or attribute is None:
            return False

        try:
            async with committing(self.session):
                await self.repository.add(category_id, attribute_id)
        except IntegrityError:
            return False

        logger.info("Category binding added", category_id=category_id, attribute_id=attribute_id)
        return True

    async def remove_binding(self, category_id: int, attribute_id: int) -> bool:
        """Unbind one attribute from a category.

        Returns:
            False if no such binding existed.
        """
        async with committing(self.session):
            removed = await self.repository.remove(category_id, attribute_id)

        if removed:
            logger.info(
                "Category binding removed",
                category_id=category_id,
                attribute_id=attribute_id,
            )
        return removed > 0
