"""Facet catalog service.

High-level facade over the facet components. This is the surface other
parts of the catalog call: the listing component resolves constraints,
product management saves and reads assignments, and the storefront renders
the filter sidebar.
"""

from collections.abc import Iterable, Mapping, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from facet_catalog.catalog.assignments import ProductAttributeIndex, ReplaceReport
from facet_catalog.catalog.attributes import AttributeCatalog
from facet_catalog.catalog.bindings import CategoryAttributeBinding
from facet_catalog.catalog.facets import Facet, FacetPresentationAssembler
from facet_catalog.catalog.resolver import FacetQueryResolver, MatchResult, Resolution


class FacetCatalogService:
    """Service for faceted catalog operations.

    Example usage:
        async with get_session() as session:
            service = FacetCatalogService(session)

            # Save a product's attributes
            await service.replace_product_assignments(
                product_id, {"color": ["red", "blue"], "size": ["M"]}
            )

            # Narrow a listing
            matches = await service.resolve_matching_product_ids({"color": ["red"]})
            visible = apply(matches, candidate_ids)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.attributes = AttributeCatalog(session)
        self.bindings = CategoryAttributeBinding(session)
        self.assignments = ProductAttributeIndex(session)
        self.resolver = FacetQueryResolver(session)
        self.facets = FacetPresentationAssembler(session)

    async def get_facets(self, category_name: str | None = None) -> list[Facet]:
        """Facets for a filter sidebar, optionally scoped to a category."""
        return await self.facets.get_facets(category_name)

    async def resolve_matching_product_ids(
        self,
        constraints: Mapping[str, Iterable[str]],
    ) -> MatchResult:
        """Product IDs matching a constraint map.

        Returns ``UNCONSTRAINED`` for an empty map; see ``resolver.apply``.
        """
        return await self.resolver.resolve(constraints)

    async def resolve_with_report(
        self,
        constraints: Mapping[str, Iterable[str]],
    ) -> Resolution:
        """Like ``resolve_matching_product_ids``, with dropped attribute names."""
        return await self.resolver.resolve_with_report(constraints)

    async def replace_product_assignments(
        self,
        product_id: int,
        attribute_values: Mapping[str, Sequence[str]],
    ) -> ReplaceReport:
        """Replace a product's attribute selections as a whole."""
        return await self.assignments.replace_assignments(product_id, attribute_values)

    async def get_product_assignments(self, product_id: int) -> dict[str, list[str]]:
        """A product's assigned values grouped by attribute name."""
        return await self.assignments.get_assignments(product_id)
