"""Shared fixtures for API tests.

The app runs against a temporary SQLite file so the test client's event
loop and the schema setup never share a connection.
"""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from facet_catalog.catalog.models import Category, Product
from facet_catalog.infrastructure.database import Base, get_session
from facet_catalog.main import app


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    """Create the schema in a temporary SQLite file."""
    path = tmp_path / "facets.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    engine.dispose()
    return path


@pytest.fixture
def client(database_path: Path) -> Generator[TestClient, None, None]:
    """Create test client with the session dependency pointed at the test database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{database_path}", poolclass=NullPool)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def seed(database_path: Path):
    """Insert reference rows (categories, products) synchronously.

    Returns a function taking category names and product (name, category)
    pairs and returning their IDs.
    """

    def _seed(
        categories: tuple[str, ...] = (),
        products: tuple[tuple[str, str | None], ...] = (),
    ) -> dict[str, int]:
        engine = create_engine(f"sqlite:///{database_path}")
        ids: dict[str, int] = {}
        with Session(engine) as session:
            for name in categories:
                category = Category(name=name)
                session.add(category)
                session.flush()
                ids[name] = category.id
            for name, category_name in products:
                product = Product(name=name, category_id=ids.get(category_name))
                session.add(product)
                session.flush()
                ids[name] = product.id
            session.commit()
        engine.dispose()
        return ids

    return _seed


@pytest.fixture
def color(client: TestClient) -> dict:
    """Create a "color" attribute with red and blue values."""
    attribute = client.post(
        "/admin/attributes",
        json={"name": "color", "display_name": "Color", "display_order": 1},
    ).json()
    for order, value in enumerate(["red", "blue"]):
        client.post(
            f"/admin/attributes/{attribute['id']}/values",
            json={"value": value, "display_value": value.title(), "display_order": order},
        )
    return attribute
