"""Tests for the product attribute index."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from facet_catalog.catalog.exceptions import ProductNotFoundError
from facet_catalog.catalog.models import ProductAttribute
from facet_catalog.catalog.service import FacetCatalogService


async def count_rows(session: AsyncSession, product_id: int) -> int:
    return await session.scalar(
        select(func.count())
        .select_from(ProductAttribute)
        .where(ProductAttribute.product_id == product_id)
    )


class TestReplaceAssignments:
    """Tests for wholesale assignment replacement."""

    @pytest.mark.asyncio
    async def test_multi_valued(self, service: FacetCatalogService, vocabulary, make_product) -> None:
        """An attribute may carry several values for one product."""
        product = await make_product("Shirt")

        report = await service.replace_product_assignments(
            product.id, {"color": ["red", "blue"], "size": ["m"]}
        )

        assert report.stored == [("color", "red"), ("color", "blue"), ("size", "m")]
        assert report.has_dropped is False
        assert await service.get_product_assignments(product.id) == {
            "color": ["red", "blue"],
            "size": ["m"],
        }

    @pytest.mark.asyncio
    async def test_replace_discards_previous(
        self, service: FacetCatalogService, vocabulary, make_product
    ) -> None:
        """The new selection replaces the old one entirely."""
        product = await make_product("Shirt")
        await service.replace_product_assignments(product.id, {"color": ["red"], "size": ["s"]})

        report = await service.replace_product_assignments(product.id, {"color": ["green"]})

        assert report.removed == 2
        assert await service.get_product_assignments(product.id) == {"color": ["green"]}

    @pytest.mark.asyncio
    async def test_idempotent(
        self,
        service: FacetCatalogService,
        session: AsyncSession,
        vocabulary,
        make_product,
    ) -> None:
        """Replacing twice with the same map yields the same assignments."""
        product = await make_product("Shirt")
        selection = {"color": ["red", "blue"], "size": ["m"]}

        await service.replace_product_assignments(product.id, selection)
        first = await service.get_product_assignments(product.id)
        await service.replace_product_assignments(product.id, selection)

        assert await service.get_product_assignments(product.id) == first
        assert await count_rows(session, product.id) == 3

    @pytest.mark.asyncio
    async def test_unknown_names_dropped(
        self, service: FacetCatalogService, vocabulary, make_product
    ) -> None:
        """Unknown attributes and values are skipped and reported."""
        product = await make_product("Shirt")

        report = await service.replace_product_assignments(
            product.id,
            {"color": ["red", "purple"], "flavor": ["vanilla"], "size": ["m"]},
        )

        assert report.dropped_attributes == ["flavor"]
        assert report.dropped_values == [("color", "purple")]
        assert report.has_dropped is True
        assert await service.get_product_assignments(product.id) == {
            "color": ["red"],
            "size": ["m"],
        }

    @pytest.mark.asyncio
    async def test_value_resolved_through_its_attribute(
        self, service: FacetCatalogService, vocabulary, make_product
    ) -> None:
        """A value string of another attribute is not accepted."""
        product = await make_product("Shirt")

        report = await service.replace_product_assignments(product.id, {"size": ["red"]})

        assert report.stored == []
        assert report.dropped_values == [("size", "red")]

    @pytest.mark.asyncio
    async def test_duplicate_values_stored_once(
        self,
        service: FacetCatalogService,
        session: AsyncSession,
        vocabulary,
        make_product,
    ) -> None:
        """A repeated value in the input yields one assignment."""
        product = await make_product("Shirt")

        await service.replace_product_assignments(product.id, {"color": ["red", "red"]})

        assert await count_rows(session, product.id) == 1

    @pytest.mark.asyncio
    async def test_empty_map_clears(
        self, service: FacetCatalogService, vocabulary, make_product
    ) -> None:
        """An empty selection removes every assignment."""
        product = await make_product("Shirt")
        await service.replace_product_assignments(product.id, {"color": ["red"]})

        await service.replace_product_assignments(product.id, {})

        assert await service.get_product_assignments(product.id) == {}

    @pytest.mark.asyncio
    async def test_failed_replace_keeps_previous(
        self,
        service: FacetCatalogService,
        session: AsyncSession,
        vocabulary,
        make_product,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A replace that fails after the delete leaves the old assignments intact."""
        product = await make_product("Shirt")
        product_id = product.id
        await service.replace_product_assignments(product_id, {"color": ["red"], "size": ["m"]})

        async def failing_add_all(assignments):
            raise RuntimeError("insert failed")

        monkeypatch.setattr(service.assignments.repository, "add_all", failing_add_all)

        with pytest.raises(RuntimeError, match="insert failed"):
            await service.replace_product_assignments(product_id, {"color": ["blue"]})

        assert await service.get_product_assignments(product_id) == {
            "color": ["red"],
            "size": ["m"],
        }
        assert await count_rows(session, product_id) == 2

    @pytest.mark.asyncio
    async def test_unknown_product(self, service: FacetCatalogService, vocabulary) -> None:
        """Replacing assignments of a missing product raises."""
        with pytest.raises(ProductNotFoundError):
            await service.replace_product_assignments(999, {"color": ["red"]})

    @pytest.mark.asyncio
    async def test_products_independent(
        self, service: FacetCatalogService, vocabulary, make_product
    ) -> None:
        """Replacing one product's assignments leaves others alone."""
        shirt = await make_product("Shirt")
        mug = await make_product("Mug")
        await service.replace_product_assignments(shirt.id, {"color": ["red"]})
        await service.replace_product_assignments(mug.id, {"color": ["blue"]})

        await service.replace_product_assignments(shirt.id, {})

        assert await service.get_product_assignments(mug.id) == {"color": ["blue"]}


class TestAssignmentQueries:
    """Tests for reading and clearing assignments."""

    @pytest.mark.asyncio
    async def test_unknown_product_empty(self, service: FacetCatalogService) -> None:
        """An unknown product has no assignments."""
        assert await service.get_product_assignments(999) == {}

    @pytest.mark.asyncio
    async def test_clear(
        self, service: FacetCatalogService, vocabulary, make_product
    ) -> None:
        """Clearing removes every assignment and reports the count."""
        product = await make_product("Shirt")
        await service.replace_product_assignments(product.id, {"color": ["red", "blue"]})

        assert await service.assignments.clear_assignments(product.id) == 2
        assert await service.get_product_assignments(product.id) == {}
