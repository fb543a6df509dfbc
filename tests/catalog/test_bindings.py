"""Tests for category attribute bindings."""

import pytest

from facet_catalog.catalog.exceptions import CategoryNotFoundError
from facet_catalog.catalog.service import FacetCatalogService


class TestReplaceBindings:
    """Tests for wholesale binding replacement."""

    @pytest.mark.asyncio
    async def test_replace_sets_exact_set(
        self, service: FacetCatalogService, vocabulary, make_category
    ) -> None:
        """After a replace, the bound set is exactly the resolvable IDs."""
        category = await make_category("shirts")

        await service.bindings.replace_bindings(category.id, [vocabulary.color, vocabulary.size])
        bound = await service.bindings.replace_bindings(category.id, [vocabulary.size])

        assert [a.id for a in bound] == [vocabulary.size]

    @pytest.mark.asyncio
    async def test_unknown_ids_skipped(
        self, service: FacetCatalogService, vocabulary, make_category
    ) -> None:
        """IDs that do not resolve are skipped without failing."""
        category = await make_category("shirts")

        bound = await service.bindings.replace_bindings(category.id, [vocabulary.color, 999])

        assert [a.name for a in bound] == ["color"]

    @pytest.mark.asyncio
    async def test_duplicate_ids_bound_once(
        self, service: FacetCatalogService, vocabulary, make_category
    ) -> None:
        """A repeated ID yields one binding."""
        category = await make_category("shirts")

        bound = await service.bindings.replace_bindings(
            category.id, [vocabulary.color, vocabulary.color]
        )

        assert [a.name for a in bound] == ["color"]

    @pytest.mark.asyncio
    async def test_replace_is_idempotent(
        self, service: FacetCatalogService, vocabulary, make_category
    ) -> None:
        """Replacing twice with the same IDs leaves the same set."""
        category = await make_category("shirts")
        ids = [vocabulary.size, vocabulary.color]

        first = await service.bindings.replace_bindings(category.id, ids)
        second = await service.bindings.replace_bindings(category.id, ids)

        assert [a.id for a in first] == [a.id for a in second]

    @pytest.mark.asyncio
    async def test_empty_list_clears(
        self, service: FacetCatalogService, vocabulary, make_category
    ) -> None:
        """An empty ID list removes every binding."""
        category = await make_category("shirts")
        await service.bindings.replace_bindings(category.id, [vocabulary.color])

        bound = await service.bindings.replace_bindings(category.id, [])

        assert bound == []

    @pytest.mark.asyncio
    async def test_unknown_category(self, service: FacetCatalogService, vocabulary) -> None:
        """Replacing bindings of a missing category raises."""
        with pytest.raises(CategoryNotFoundError):
            await service.bindings.replace_bindings(999, [vocabulary.color])

    @pytest.mark.asyncio
    async def test_categories_independent(
        self, service: FacetCatalogService, vocabulary, make_category
    ) -> None:
        """Replacing one category's bindings leaves other categories alone."""
        shirts = await make_category("shirts")
        drills = await make_category("drills")
        await service.bindings.replace_bindings(shirts.id, [vocabulary.color])
        await service.bindings.replace_bindings(drills.id, [vocabulary.size])

        await service.bindings.replace_bindings(shirts.id, [])

        assert [a.name for a in await service.bindings.get_bindings(drills.id)] == ["size"]


class TestActiveAttributesForCategory:
    """Tests for category-scoped attribute lookup."""

    @pytest.mark.asyncio
    async def test_only_active_in_order(
        self, service: FacetCatalogService, vocabulary, make_category
    ) -> None:
        """Only active bound attributes are returned, in display order."""
        category = await make_category("shirts")
        await service.bindings.replace_bindings(
            category.id, [vocabulary.material, vocabulary.size, vocabulary.color]
        )

        attributes = await service.bindings.get_active_attributes_for_category("shirts")

        assert [a.name for a in attributes] == ["color", "size"]

    @pytest.mark.asyncio
    async def test_unknown_category_empty(self, service: FacetCatalogService, vocabulary) -> None:
        """An unknown category name yields no attributes."""
        assert await service.bindings.get_active_attributes_for_category("nope") == []


class TestSingleBindings:
    """Tests for adding and removing one binding."""

    @pytest.mark.asyncio
    async def test_add_and_remove(
        self, service: FacetCatalogService, vocabulary, make_category
    ) -> None:
        """A binding can be added once and removed once."""
        category = await make_category("shirts")

        assert await service.bindings.add_binding(category.id, vocabulary.color) is True
        assert await service.bindings.add_binding(category.id, vocabulary.color) is False
        assert [a.name for a in await service.bindings.get_bindings(category.id)] == ["color"]

        assert await service.bindings.remove_binding(category.id, vocabulary.color) is True
        assert await service.bindings.remove_binding(category.id, vocabulary.color) is False
        assert await service.bindings.get_bindings(category.id) == []

    @pytest.mark.asyncio
    async def test_add_missing_side(
        self, service: FacetCatalogService, vocabulary, make_category
    ) -> None:
        """Bindings to a missing category or attribute are rejected."""
        category = await make_category("shirts")

        assert await service.bindings.add_binding(999, vocabulary.color) is False
        assert await service.bindings.add_binding(category.id, 999) is False
