"""Repositories for facet catalog database operations.

One repository per table family. Repositories only flush; transaction
boundaries belong to the component services.
"""

from collections.abc import Iterable, Sequence

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from facet_catalog.catalog.models import (
    Attribute,
    AttributeValue,
    Category,
    CategoryAttribute,
    Product,
    ProductAttribute,
)


class AttributeRepository:
    """Repository for attributes and their values.

    Example usage:
        async with get_session() as session:
            repo = AttributeRepository(session)
            color = await repo.get_by_name("color")
            values = await repo.list_values(color.id, include_inactive=False)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, attribute: Attribute) -> Attribute:
        """Save an attribute.

        Args:
            attribute: Attribute to save.

        Returns:
            Saved attribute.
        """
        self.session.add(attribute)
        await self.session.flush()
        return attribute

    async def get_by_id(self, attribute_id: int) -> Attribute | None:
        """Get attribute by ID."""
        result = await self.session.execute(
            select(Attribute).where(Attribute.id == attribute_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Attribute | None:
        """Get attribute by unique name."""
        result = await self.session.execute(
            select(Attribute).where(Attribute.name == name)
        )
        return result.scalar_one_or_none()

    async def get_by_names(self, names: Iterable[str]) -> dict[str, Attribute]:
        """Resolve several attribute names in one query.

        Args:
            names: Attribute names.

        Returns:
            Mapping of name to attribute, for the names that exist.
        """
        names = list(names)
        if not names:
            return {}

        result = await self.session.execute(
            select(Attribute).where(Attribute.name.in_(names))
        )
        return {attribute.name: attribute for attribute in result.scalars().all()}

    async def get_by_ids(self, attribute_ids: Iterable[int]) -> dict[int, Attribute]:
        """Resolve several attribute IDs in one query."""
        attribute_ids = list(attribute_ids)
        if not attribute_ids:
            return {}

        result = await self.session.execute(
            select(Attribute).where(Attribute.id.in_(attribute_ids))
        )
        return {attribute.id: attribute for attribute in result.scalars().all()}

    async def find_all(self, include_inactive: bool = True) -> Sequence[Attribute]:
        """List attributes ordered by (display order, name).

        Args:
            include_inactive: Whether to include inactive attributes.

        Returns:
            Ordered attributes.
        """
        query = select(Attribute)

        if not include_inactive:
            query = query.where(Attribute.active.is_(True))

        query = query.order_by(Attribute.display_order.asc(), Attribute.name.asc())

        result = await self.session.execute(query)
        return result.scalars().all()

    async def delete(self, attribute_id: int) -> None:
        """Delete an attribute with everything that references it.

        Removes product assignments, category bindings and owned values
        before the attribute row itself.

        Args:
            attribute_id: Attribute ID.
        """
        await self.session.execute(
            delete(ProductAttribute).where(ProductAttribute.attribute_id == attribute_id)
        )
        await self.session.execute(
            delete(CategoryAttribute).where(CategoryAttribute.attribute_id == attribute_id)
        )
        await self.session.execute(
            delete(AttributeValue).where(AttributeValue.attribute_id == attribute_id)
        )
        await self.session.execute(delete(Attribute).where(Attribute.id == attribute_id))
        await self.session.flush()

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    async def save_value(self, value: AttributeValue) -> AttributeValue:
        """Save an attribute value."""
        self.session.add(value)
        await self.session.flush()
        return value

    async def get_value_by_id(self, value_id: int) -> AttributeValue | None:
        """Get attribute value by ID."""
        result = await self.session.execute(
            select(AttributeValue).where(AttributeValue.id == value_id)
        )
        return result.scalar_one_or_none()

    async def get_value(self, attribute_id: int, value: str) -> AttributeValue | None:
        """Get a value by the pair (attribute, value string).

        Args:
            attribute_id: Owning attribute ID.
            value: Value string.

        Returns:
            AttributeValue if found, None otherwise.
        """
        result = await self.session.execute(
            select(AttributeValue).where(
                and_(
                    AttributeValue.attribute_id == attribute_id,
                    AttributeValue.value == value,
                )
            )
        )
        return result.scalar_one_or_none()

    async def get_values(
        self,
        attribute_id: int,
        values: Iterable[str],
    ) -> dict[str, AttributeValue]:
        """Resolve several value strings of one attribute in one query.

        Args:
            attribute_id: Owning attribute ID.
            values: Value strings.

        Returns:
            Mapping of value string to AttributeValue, for those that exist.
        """
        values = list(values)
        if not values:
            return {}

        result = await self.session.execute(
            select(AttributeValue).where(
                and_(
                    AttributeValue.attribute_id == attribute_id,
                    AttributeValue.value.in_(values),
                )
            )
        )
        return {row.value: row for row in result.scalars().all()}

    async def list_values(
        self,
        attribute_id: int,
        include_inactive: bool = True,
    ) -> Sequence[AttributeValue]:
        """List values of an attribute ordered by (display order, value).

        Args:
            attribute_id: Owning attribute ID.
            include_inactive: Whether to include inactive values.

        Returns:
            Ordered values.
        """
        query = select(AttributeValue).where(AttributeValue.attribute_id == attribute_id)

        if not include_inactive:
            query = query.where(AttributeValue.active.is_(True))

        query = query.order_by(
            AttributeValue.display_order.asc(),
            AttributeValue.value.asc(),
        )

        result = await self.session.execute(query)
        return result.scalars().all()

    async def list_values_for(
        self,
        attribute_ids: Iterable[int],
        include_inactive: bool = True,
    ) -> dict[int, list[AttributeValue]]:
        """List values of several attributes, grouped by attribute ID.

        Each group is ordered by (display order, value).
        """
        attribute_ids = list(attribute_ids)
        grouped: dict[int, list[AttributeValue]] = {aid: [] for aid in attribute_ids}
        if not attribute_ids:
            return grouped

        query = select(AttributeValue).where(AttributeValue.attribute_id.in_(attribute_ids))

        if not include_inactive:
            query = query.where(AttributeValue.active.is_(True))

        query = query.order_by(
            AttributeValue.attribute_id,
            AttributeValue.display_order.asc(),
            AttributeValue.value.asc(),
        )

        result = await self.session.execute(query)
        for value in result.scalars().all():
            grouped[value.attribute_id].append(value)
        return grouped

    async def delete_value(self, value_id: int) -> None:
        """Delete a value and the product assignments that reference it."""
        await self.session.execute(
            delete(ProductAttribute).where(ProductAttribute.attribute_value_id == value_id)
        )
        await self.session.execute(delete(AttributeValue).where(AttributeValue.id == value_id))
        await self.session.flush()


class CategoryAttributeRepository:
    """Repository for category-attribute bindings."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_category(self, category_id: int, lock: bool = False) -> Category | None:
        """Get category by ID.

        Args:
            category_id: Category ID.
            lock: Lock the row for the rest of the transaction.

        Returns:
            Category if found, None otherwise.
        """
        query = select(Category).where(Category.id == category_id)
        if lock:
            query = query.with_for_update()

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def exists(self, category_id: int, attribute_id: int) -> bool:
        """Check whether a (category, attribute) binding exists."""
        result = await self.session.execute(
            select(CategoryAttribute.id).where(
                and_(
                    CategoryAttribute.category_id == category_id,
                    CategoryAttribute.attribute_id == attribute_id,
                )
            )
        )
        return result.first() is not None

    async def find_attributes(
        self,
        category_id: int,
        include_inactive: bool = True,
    ) -> Sequence[Attribute]:
        """List attributes bound to a category by ID.

        Ordered by (display order, name).
        """
        query = (
            select(Attribute)
            .join(CategoryAttribute, CategoryAttribute.attribute_id == Attribute.id)
            .where(CategoryAttribute.category_id == category_id)
        )

        if not include_inactive:
            query = query.where(Attribute.active.is_(True))

        query = query.order_by(Attribute.display_order.asc(), Attribute.name.asc())

        result = await self.session.execute(query)
        return result.scalars().all()

    async def find_attributes_by_category_name(
        self,
        category_name: str,
        include_inactive: bool = False,
    ) -> Sequence[Attribute]:
        """List attributes bound to a category by name.

        Ordered by (display order, name).
        """
        query = (
            select(Attribute)
            .join(CategoryAttribute, CategoryAttribute.attribute_id == Attribute.id)
            .join(Category, Category.id == CategoryAttribute.category_id)
            .where(Category.name == category_name)
        )

        if not include_inactive:
            query = query.where(Attribute.active.is_(True))

        query = query.order_by(Attribute.display_order.asc(), Attribute.name.asc())

        result = await self.session.execute(query)
        return result.scalars().all()

    async def add(self, category_id: int, attribute_id: int) -> CategoryAttribute:
        """Insert one binding."""
        binding = CategoryAttribute(category_id=category_id, attribute_id=attribute_id)
        self.session.add(binding)
        await self.session.flush()
        return binding

    async def add_all(self, category_id: int, attribute_ids: Iterable[int]) -> int:
        """Insert one binding per attribute ID.

        Returns:
            Number of bindings inserted.
        """
        bindings = [
            CategoryAttribute(category_id=category_id, attribute_id=attribute_id)
            for attribute_id in attribute_ids
        ]
        self.session.add_all(bindings)
        await self.session.flush()
        return len(bindings)

    async def remove(self, category_id: int, attribute_id: int) -> int:
        """Delete one binding.

        Returns:
            Number of rows deleted.
        """
        result = await self.session.execute(
            delete(CategoryAttribute).where(
                and_(
                    CategoryAttribute.category_id == category_id,
                    CategoryAttribute.attribute_id == attribute_id,
                )
            )
        )
        await self.session.flush()
        return result.rowcount or 0

    async def delete_by_category(self, category_id: int) -> int:
        """Delete every binding of a category.

        Returns:
            Number of rows deleted.
        """
        result = await self.session.execute(
            delete(CategoryAttribute).where(CategoryAttribute.category_id == category_id)
        )
        await self.session.flush()
        return result.rowcount or 0


class ProductAttributeRepository:
    """Repository for product attribute assignments."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_product(self, product_id: int, lock: bool = False) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            lock: Lock the row for the rest of the transaction.

        Returns:
            Product if found, None otherwise.
        """
        query = select(Product).where(Product.id == product_id)
        if lock:
            query = query.with_for_update()

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def delete_by_product(self, product_id: int) -> int:
        """Delete every assignment of a product.

        Returns:
            Number of rows deleted.
        """
        result = await self.session.execute(
            delete(ProductAttribute).where(ProductAttribute.product_id == product_id)
        )
        await self.session.flush()
        return result.rowcount or 0

    async def add_all(self, assignments: list[ProductAttribute]) -> list[ProductAttribute]:
        """Insert assignments in the given order."""
        self.session.add_all(assignments)
        await self.session.flush()
        return assignments

    async def find_pairs(self, product_id: int) -> list[tuple[str, str]]:
        """List (attribute name, value string) pairs of a product.

        Ordered by insertion.
        """
        query = (
            select(Attribute.name, AttributeValue.value)
            .select_from(ProductAttribute)
            .join(Attribute, Attribute.id == ProductAttribute.attribute_id)
            .join(AttributeValue, AttributeValue.id == ProductAttribute.attribute_value_id)
            .where(ProductAttribute.product_id == product_id)
            .order_by(ProductAttribute.id.asc())
        )

        result = await self.session.execute(query)
        return [(row.name, row.value) for row in result.all()]

    async def find_product_ids(self, attribute_id: int, values: Iterable[str]) -> set[int]:
        """Product IDs carrying any of the given values for one attribute.

        Values are matched through the value's own attribute, so a value
        string of another attribute never matches.

        Args:
            attribute_id: Attribute ID.
            values: Acceptable value strings (OR).

        Returns:
            Set of product IDs.
        """
        values = list(values)
        if not values:
            return set()

        query = (
            select(ProductAttribute.product_id)
            .join(AttributeValue, AttributeValue.id == ProductAttribute.attribute_value_id)
            .where(
                and_(
                    ProductAttribute.attribute_id == attribute_id,
                    AttributeValue.attribute_id == attribute_id,
                    AttributeValue.value.in_(values),
                )
            )
            .distinct()
        )

        result = await self.session.execute(query)
        return set(result.scalars().all())
