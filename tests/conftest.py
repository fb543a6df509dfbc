"""Shared fixtures for facet catalog tests.

Core tests run against an in-memory SQLite database through aiosqlite.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from dataclasses import dataclass

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from facet_catalog.catalog.models import Category, Product
from facet_catalog.catalog.service import FacetCatalogService
from facet_catalog.infrastructure.database import Base


@pytest_asyncio.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    """Create a session bound to a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def service(session: AsyncSession) -> FacetCatalogService:
    """Create facet catalog service on the test session."""
    return FacetCatalogService(session)


CategoryFactory = Callable[[str], Awaitable[Category]]
ProductFactory = Callable[..., Awaitable[Product]]


@pytest.fixture
def make_category(session: AsyncSession) -> CategoryFactory:
    """Factory inserting category rows."""

    async def _make(name: str) -> Category:
        category = Category(name=name)
        session.add(category)
        await session.commit()
        return category

    return _make


@pytest.fixture
def make_product(session: AsyncSession) -> ProductFactory:
    """Factory inserting product rows."""

    async def _make(name: str, category: Category | None = None) -> Product:
        product = Product(name=name, category_id=category.id if category else None)
        session.add(product)
        await session.commit()
        return product

    return _make


@dataclass
class Vocabulary:
    """IDs of the seeded demo vocabulary."""

    color: int
    size: int
    material: int


@pytest_asyncio.fixture
async def vocabulary(service: FacetCatalogService) -> Vocabulary:
    """Seed color, size and material with a few values each.

    ``material`` is inactive; ``size`` has an inactive ``xl`` value.
    """
    catalog = service.attributes

    color = await catalog.create_attribute("color", "Color", display_order=1)
    await catalog.create_value(color.id, "red", "Red", display_order=1)
    await catalog.create_value(color.id, "blue", "Blue", display_order=2)
    await catalog.create_value(color.id, "green", "Green", display_order=3)

    size = await catalog.create_attribute("size", "Size", display_order=2)
    await catalog.create_value(size.id, "s", "S", display_order=1)
    await catalog.create_value(size.id, "m", "M", display_order=2)
    await catalog.create_value(size.id, "xl", "XL", display_order=3, active=False)

    material = await catalog.create_attribute("material", "Material", display_order=3, active=False)
    await catalog.create_value(material.id, "steel", "Steel")

    return Vocabulary(color=color.id, size=size.id, material=material.id)
