"""Faceted attribute catalog.

Attribute definitions and values, their binding to categories, per-product
attribute assignments, constraint resolution for product listings, and the
facet list shown in a filter sidebar.
"""

from facet_catalog.catalog.assignments import ProductAttributeIndex, ReplaceReport
from facet_catalog.catalog.attributes import AttributeCatalog
from facet_catalog.catalog.bindings import CategoryAttributeBinding
from facet_catalog.catalog.exceptions import (
    AttributeNotFoundError,
    AttributeValueNotFoundError,
    CatalogError,
    CategoryNotFoundError,
    DomainError,
    DuplicateNameError,
    DuplicateValueError,
    NotFoundError,
    ProductNotFoundError,
)
from facet_catalog.catalog.facets import Facet, FacetPresentationAssembler, FacetValue
from facet_catalog.catalog.models import (
    Attribute,
    AttributeValue,
    Category,
    CategoryAttribute,
    Product,
    ProductAttribute,
)
from facet_catalog.catalog.resolver import (
    UNCONSTRAINED,
    FacetQueryResolver,
    MatchResult,
    Resolution,
    apply,
)
from facet_catalog.catalog.service import FacetCatalogService

__all__ = [
    # Models
    "Attribute",
    "AttributeValue",
    "Category",
    "CategoryAttribute",
    "Product",
    "ProductAttribute",
    # Components
    "AttributeCatalog",
    "CategoryAttributeBinding",
    "ProductAttributeIndex",
    "ReplaceReport",
    "FacetQueryResolver",
    "Resolution",
    "MatchResult",
    "UNCONSTRAINED",
    "apply",
    "FacetPresentationAssembler",
    "Facet",
    "FacetValue",
    # Service
    "FacetCatalogService",
    # Errors
    "DomainError",
    "CatalogError",
    "DuplicateNameError",
    "DuplicateValueError",
    "NotFoundError",
    "AttributeNotFoundError",
    "AttributeValueNotFoundError",
    "CategoryNotFoundError",
    "ProductNotFoundError",
]
