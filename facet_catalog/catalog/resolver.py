"""Facet query resolution.

Turns a constraint map (attribute name -> acceptable value strings) into
the set of matching product IDs. Values within one attribute are OR-ed;
distinct attributes are AND-ed.

Two empty-looking outcomes are deliberately different:

- an empty constraint map resolves to ``UNCONSTRAINED``: no facet
  restriction applies and callers must pass their candidates through;
- a non-empty map whose attribute names all fail to resolve resolves to
  an empty set: nothing matches.

Each attribute costs one value lookup and one index lookup, independent
of how many other attributes are requested. Names that do not resolve are
logged and reported in ``Resolution``. Candidate sets are intersected as
they are produced, so at most two are held at once.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from facet_catalog.catalog.repository import AttributeRepository, ProductAttributeRepository

logger = structlog.get_logger()

T = TypeVar("T")


class Unconstrained:
    """Result of resolving an empty constraint map.

    Means "no facet restriction"; never an empty match. Use ``apply`` to
    narrow a candidate collection with any resolution result.
    """

    _instance: "Unconstrained | None" = None

    def __new__(cls) -> "Unconstrained":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNCONSTRAINED"

    def __contains__(self, product_id: object) -> bool:
        return True


UNCONSTRAINED = Unconstrained()

MatchResult = frozenset[int] | Unconstrained


def apply(result: MatchResult, candidate_ids: Iterable[T]) -> list[T]:
    """Narrow candidate product IDs by a resolution result.

    Keeps candidate order. ``UNCONSTRAINED`` passes every candidate through.

    Args:
        result: Value returned by ``FacetQueryResolver.resolve``.
        candidate_ids: Product IDs chosen by other listing criteria.

    Returns:
        Candidates that satisfy the facet constraints.
    """
    if result is UNCONSTRAINED:
        return list(candidate_ids)
    return [product_id for product_id in candidate_ids if product_id in result]


@dataclass(frozen=True)
class Resolution:
    """Resolution result with diagnostics.

    Attributes:
        product_ids: Matching product IDs, or ``UNCONSTRAINED``.
        unresolved_attributes: Requested attribute names that were dropped
            because no attribute has that name.
        unresolved_values: (attribute name, value) pairs dropped because
            the value does not exist under that attribute.
    """

    product_ids: MatchResult
    unresolved_attributes: tuple[str, ...] = field(default_factory=tuple)
    unresolved_values: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def unconstrained(self) -> bool:
        """Whether no facet restriction applies."""
        return self.product_ids is UNCONSTRAINED


class FacetQueryResolver:
    """Resolves constraint maps into product ID sets (read-only)."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize resolver with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.attributes = AttributeRepository(session)
        self.assignments = ProductAttributeRepository(session)

    async def resolve(self, constraints: Mapping[str, Iterable[str]]) -> MatchResult:
        """Resolve a constraint map into matching product IDs.

        Args:
            constraints: Attribute name to acceptable value strings.

        Returns:
            Frozen set of product IDs, or ``UNCONSTRAINED`` for an empty map.
        """
        resolution = await self.resolve_with_report(constraints)
        return resolution.product_ids

    async def resolve_with_report(
        self,
        constraints: Mapping[str, Iterable[str]],
    ) -> Resolution:
        """Resolve a constraint map and report dropped names.

        Args:
            constraints: Attribute name to acceptable value strings.

        Returns:
            Resolution with the product IDs and unresolved names.
            Unknown values under a known attribute match nothing, the same
            as a value no product carries.
        """
        if not constraints:
            return Resolution(product_ids=UNCONSTRAINED)

        resolved = await self.attributes.get_by_names(constraints.keys())
        unresolved = tuple(name for name in constraints if name not in resolved)
        if unresolved:
            logger.warning("Unknown attributes in constraints, ignoring", attributes=list(unresolved))

        requested: list[tuple[int, list[str]]] = []
        unresolved_values: list[tuple[str, str]] = []
        for name, values in constraints.items():
            attribute = resolved.get(name)
            if attribute is None:
                continue

            wanted = list(dict.fromkeys(values))
            known = await self.attributes.get_values(attribute.id, wanted)
            missing = [value for value in wanted if value not in known]
            if missing:
                logger.warning(
                    "Unknown attribute values in constraints, ignoring",
                    attribute=name,
                    values=missing,
                )
                unresolved_values.extend((name, value) for value in missing)

            requested.append((attribute.id, [value for value in wanted if value in known]))

        matched: set[int] | None = None
        for attribute_id, values in requested:
            candidates = await self.assignments.find_product_ids(attribute_id, values)
            matched = candidates if matched is None else matched & candidates

            if not matched:
                break

        # Non-empty map with no resolvable attribute matches nothing
        product_ids = frozenset(matched) if matched else frozenset()

        logger.debug(
            "Constraints resolved",
            attributes=len(constraints),
            resolved=len(resolved),
            matched=len(product_ids),
        )
        return Resolution(
            product_ids=product_ids,
            unresolved_attributes=unresolved,
            unresolved_values=tuple(unresolved_values),
        )
