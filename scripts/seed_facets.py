#!/usr/bin/env python3
"""Seed facet catalog script.

Creates the catalog tables and seeds a demo attribute vocabulary, a few
categories with their attribute bindings, and products with assignments.

Usage:
    python scripts/seed_facets.py
    python scripts/seed_facets.py --products 50
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from facet_catalog.catalog.models import Category, Product
from facet_catalog.catalog.service import FacetCatalogService
from facet_catalog.infrastructure.config import settings
from facet_catalog.infrastructure.database import async_session_factory, create_tables
from facet_catalog.infrastructure.log_config import configure_logging

# attribute name -> (display name, [(value, display value)])
VOCABULARY: dict[str, tuple[str, list[tuple[str, str]]]] = {
    "color": ("Color", [("red", "Red"), ("blue", "Blue"), ("black", "Black"), ("green", "Green")]),
    "size": ("Size", [("s", "S"), ("m", "M"), ("l", "L"), ("xl", "XL")]),
    "material": ("Material", [("steel", "Steel"), ("wood", "Wood"), ("plastic", "Plastic")]),
    "diameter": ("Diameter", [("6mm", "6 mm"), ("8mm", "8 mm"), ("10mm", "10 mm")]),
}

# category name -> attribute names bound to it
CATEGORIES: dict[str, list[str]] = {
    "clothing": ["color", "size", "material"],
    "drills": ["diameter", "material", "color"],
}


async def seed_vocabulary(service: FacetCatalogService) -> dict[str, int]:
    """Create attributes and values that do not exist yet.

    Returns:
        Attribute name to ID.
    """
    ids: dict[str, int] = {}
    for order, (name, (display_name, values)) in enumerate(VOCABULARY.items()):
        attribute = await service.attributes.find_attribute_by_name(name)
        if attribute is None:
            attribute = await service.attributes.create_attribute(
                name=name,
                display_name=display_name,
                display_order=order,
            )
        ids[name] = attribute.id

        existing = {v.value for v in await service.attributes.list_values(attribute.id)}
        for value_order, (value, display_value) in enumerate(values):
            if value not in existing:
                await service.attributes.create_value(
                    attribute.id,
                    value=value,
                    display_value=display_value,
                    display_order=value_order,
                )
    return ids


async def seed_categories(service: FacetCatalogService, attribute_ids: dict[str, int]) -> dict[str, int]:
    """Create categories and replace their bindings.

    Returns:
        Category name to ID.
    """
    session = service.session
    ids: dict[str, int] = {}
    for name, attribute_names in CATEGORIES.items():
        category = await session.scalar(select(Category).where(Category.name == name))
        if category is None:
            category = Category(name=name)
            session.add(category)
            await session.flush()
            await session.commit()
        ids[name] = category.id

        await service.bindings.replace_bindings(
            category.id,
            [attribute_ids[a] for a in attribute_names],
        )
    return ids


async def seed_products(
    service: FacetCatalogService,
    category_ids: dict[str, int],
    count: int,
) -> int:
    """Create products and assign values round-robin from each bound attribute.

    Returns:
        Number of products created.
    """
    session = service.session
    categories = list(CATEGORIES.items())

    for i in range(count):
        category_name, attribute_names = categories[i % len(categories)]
        product = Product(name=f"Demo {category_name} {i + 1}", category_id=category_ids[category_name])
        session.add(product)
        await session.flush()
        await session.commit()

        selections: dict[str, list[str]] = {}
        for attribute_name in attribute_names:
            values = VOCABULARY[attribute_name][1]
            selections[attribute_name] = [values[i % len(values)][0]]
            # every third product also carries a second value
            if i % 3 == 0:
                selections[attribute_name].append(values[(i + 1) % len(values)][0])

        await service.replace_product_assignments(product.id, selections)

    return count


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the facet catalog with demo data",
    )
    parser.add_argument(
        "--products",
        type=int,
        default=20,
        help="Number of demo products to create (default: 20)",
    )

    args = parser.parse_args()
    configure_logging(settings.log_level, json_output=settings.log_json)

    print("=" * 60)
    print("Facet Catalog Seeder")
    print("=" * 60)
    print(f"Products: {args.products}")
    print()

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    async with async_session_factory() as session:
        service = FacetCatalogService(session)

        attribute_ids = await seed_vocabulary(service)
        print(f"  ✓ Attributes: {len(attribute_ids)}")

        category_ids = await seed_categories(service, attribute_ids)
        print(f"  ✓ Categories: {len(category_ids)}")

        created = await seed_products(service, category_ids, args.products)
        print(f"  ✓ Products: {created}")

    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
