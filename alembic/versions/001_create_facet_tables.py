"""Create facet catalog tables.

Revision ID: 001
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create reference, attribute and join tables."""
    # Reference tables
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('category_id', sa.Integer(),
                  sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # Attribute catalog
    op.create_table(
        'attributes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('display_name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )
    op.create_unique_constraint('uq_attributes_name', 'attributes', ['name'])

    op.create_table(
        'attribute_values',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('attribute_id', sa.Integer(),
                  sa.ForeignKey('attributes.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('value', sa.String(100), nullable=False),
        sa.Column('display_value', sa.String(100), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )
    op.create_unique_constraint(
        'uq_attribute_values_attribute_value',
        'attribute_values',
        ['attribute_id', 'value'],
    )

    # Join tables
    op.create_table(
        'category_attributes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('category_id', sa.Integer(),
                  sa.ForeignKey('categories.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('attribute_id', sa.Integer(),
                  sa.ForeignKey('attributes.id', ondelete='CASCADE'), nullable=False, index=True),
    )
    op.create_unique_constraint(
        'uq_category_attributes_pair',
        'category_attributes',
        ['category_id', 'attribute_id'],
    )

    op.create_table(
        'product_attributes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('product_id', sa.Integer(),
                  sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('attribute_id', sa.Integer(),
                  sa.ForeignKey('attributes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('attribute_value_id', sa.Integer(),
                  sa.ForeignKey('attribute_values.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )
    op.create_index('ix_product_attributes_product_id', 'product_attributes', ['product_id'])
    op.create_index(
        'ix_product_attributes_attribute_value',
        'product_attributes',
        ['attribute_id', 'attribute_value_id'],
    )


def downgrade() -> None:
    """Drop facet catalog tables."""
    op.drop_table('product_attributes')
    op.drop_table('category_attributes')
    op.drop_table('attribute_values')
    op.drop_table('attributes')
    op.drop_table('products')
    op.drop_table('categories')
