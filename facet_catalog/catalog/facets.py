"""Facet presentation.

Builds the facet list shown in a product listing's filter sidebar:
active attributes (optionally scoped to a category), each with its active
values. Attributes without a selectable value are left out.
"""

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from facet_catalog.catalog.attributes import AttributeCatalog
from facet_catalog.catalog.bindings import CategoryAttributeBinding
from facet_catalog.catalog.models import Attribute

# Category names that mean "no category scope" in listing requests
UNSCOPED_CATEGORIES = frozenset({"", "all"})


@dataclass(frozen=True)
class FacetValue:
    """One selectable value of a facet."""

    value: str
    display_value: str


@dataclass(frozen=True)
class Facet:
    """An attribute together with its active values."""

    attribute_name: str
    display_name: str
    values: tuple[FacetValue, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "attribute_name": self.attribute_name,
            "display_name": self.display_name,
            "values": [
                {"value": v.value, "display_value": v.display_value} for v in self.values
            ],
        }


class FacetPresentationAssembler:
    """Assembles the public, category-scoped facet list."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize assembler with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.catalog = AttributeCatalog(session)
        self.bindings = CategoryAttributeBinding(session)

    async def get_facets(self, category_name: str | None = None) -> list[Facet]:
        """Build the facet list.

        Args:
            category_name: Restrict to attributes bound to this category.
                ``None``, ``""`` and ``"all"`` mean no restriction.

        Returns:
            Facets ordered by (display order, name), values ordered by
            (display order, value).
        """
        candidates = await self._candidate_attributes(category_name)
        if not candidates:
            return []

        values = await self.catalog.repository.list_values_for(
            [attribute.id for attribute in candidates],
            include_inactive=False,
        )

        facets = []
        for attribute in candidates:
            active_values = values.get(attribute.id, [])
            if not active_values:
                continue

            facets.append(
                Facet(
                    attribute_name=attribute.name,
                    display_name=attribute.display_name,
                    values=tuple(
                        FacetValue(value=v.value, display_value=v.display_value)
                        for v in active_values
                    ),
                )
            )
        return facets

    async def _candidate_attributes(self, category_name: str | None) -> list[Attribute]:
        if category_name is None or category_name in UNSCOPED_CATEGORIES:
            return await self.catalog.list_active_attributes()

        return await self.bindings.get_active_attributes_for_category(category_name)
