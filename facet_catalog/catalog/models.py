"""SQLAlchemy models for the faceted catalog.

Defines attribute definitions, their enumerated values, and the two join
tables linking attributes to categories and products. Categories and
products are reference tables owned by other components; only the columns
needed to bind facets to them are modelled here.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from facet_catalog.infrastructure.database import Base


def utcnow() -> datetime:
    """Current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


# ============================================================================
# Reference tables
# ============================================================================


class Category(Base):
    """Product category, owned by category management.

    Attributes:
        id: Category identifier.
        name: Unique category name (e.g., "drills").
        created_at: Creation timestamp.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"


class Product(Base):
    """Product, owned by product management.

    Attributes:
        id: Product identifier.
        name: Product name.
        category_id: Optional category the product is listed in.
        created_at: Creation timestamp.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.name})>"


# ============================================================================
# Attribute catalog
# ============================================================================


class Attribute(Base):
    """Facet definition (e.g., "color", "diameter").

    Owns its values exclusively: deleting an attribute deletes its values.

    Attributes:
        id: Attribute identifier.
        name: Globally unique machine name, used in constraint maps.
        display_name: Human-readable label.
        description: Optional description.
        display_order: Sort key, ascending; ties broken by name.
        active: Whether the attribute is shown publicly.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "attributes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    values: Mapped[list["AttributeValue"]] = relationship(
        "AttributeValue",
        back_populates="attribute",
        cascade="all, delete-orphan",
    )

    __table_args__ = (UniqueConstraint("name", name="uq_attributes_name"),)

    def __repr__(self) -> str:
        return f"<Attribute(id={self.id}, name={self.name})>"

    def to_dict(self) -> dict:
        """Convert to dictionary (without values).

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
            "display_order": self.display_order,
            "active": self.active,
        }


class AttributeValue(Base):
    """One enumerated value of an attribute (e.g., "red" for "color").

    Attributes:
        id: Value identifier.
        attribute_id: Owning attribute.
        value: Machine value, unique within the owning attribute.
        display_value: Human-readable label.
        display_order: Sort key, ascending; ties broken by value.
        active: Whether the value is shown publicly.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "attribute_values"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    attribute_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("attributes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    value: Mapped[str] = mapped_column(String(100), nullable=False)
    display_value: Mapped[str] = mapped_column(String(100), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    attribute: Mapped["Attribute"] = relationship("Attribute", back_populates="values")

    __table_args__ = (
        UniqueConstraint("attribute_id", "value", name="uq_attribute_values_attribute_value"),
    )

    def __repr__(self) -> str:
        return f"<AttributeValue(id={self.id}, attribute_id={self.attribute_id}, value={self.value})>"

    def to_dict(self) -> dict:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "attribute_id": self.attribute_id,
            "value": self.value,
            "display_value": self.display_value,
            "display_order": self.display_order,
            "active": self.active,
        }


# ============================================================================
# Join records
# ============================================================================


class CategoryAttribute(Base):
    """Binding of an attribute to a category.

    Pure association, owned by neither side.
    """

    __tablename__ = "category_attributes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    attribute_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("attributes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("category_id", "attribute_id", name="uq_category_attributes_pair"),
    )

    def __repr__(self) -> str:
        return f"<CategoryAttribute(category_id={self.category_id}, attribute_id={self.attribute_id})>"


class ProductAttribute(Base):
    """Fact: product P carries value V for attribute A.

    A product may hold several rows for the same attribute (multi-valued
    facets). The value always belongs to the attribute on the same row.
    """

    __tablename__ = "product_attributes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    attribute_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("attributes.id", ondelete="CASCADE"),
        nullable=False,
    )
    attribute_value_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("attribute_values.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        Index("ix_product_attributes_product_id", "product_id"),
        Index("ix_product_attributes_attribute_value", "attribute_id", "attribute_value_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<ProductAttribute(product_id={self.product_id}, "
            f"attribute_id={self.attribute_id}, attribute_value_id={self.attribute_value_id})>"
        )
