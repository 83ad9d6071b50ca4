"""Specification pattern - composable predicates over aggregates.

Specification має дві форми одного і того ж правила:
- `is_satisfied_by(candidate)` - пряма перевірка в пам'яті
- `to_predicate()` - декларативне дерево (Field | And | Or | Not), яке кожен
  storage adapter інтерпретує самостійно (in-memory evaluator, SQL compiler, ...)

Обидві форми мають давати однаковий результат для будь-якого candidate.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")


class Operator(str, Enum):
    """Comparison operators for field predicates."""

    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"

    CONTAINS = "contains"
    """Case-insensitive substring match on a text field."""

    WITHIN_RADIUS = "within_radius"
    """Great-circle distance from a center; value is (center, radius_km)."""

    WITHIN_BOUNDS = "within_bounds"
    """Point inside a bounding box; value is the box."""


# ============================================================================
# PREDICATE TREE
# ============================================================================


@dataclass(frozen=True)
class Predicate(ABC):
    """Node of a declarative predicate tree."""


@dataclass(frozen=True)
class FieldPredicate(Predicate):
    """Leaf: `<field> <operator> <value>`.

    `field` - dotted attribute path (e.g. "current_price.amount").
    """

    field: str
    operator: Operator
    value: Any = None


@dataclass(frozen=True)
class AndPredicate(Predicate):
    left: Predicate
    right: Predicate


@dataclass(frozen=True)
class OrPredicate(Predicate):
    left: Predicate
    right: Predicate


@dataclass(frozen=True)
class NotPredicate(Predicate):
    operand: Predicate


def iter_field_predicates(
    predicate: Predicate, negated: bool = False
) -> Iterator[tuple[FieldPredicate, bool]]:
    """Walk the tree and yield every leaf with its polarity.

    Args:
        predicate: Root of the tree.
        negated: Polarity of the root (True under an odd number of NOTs).

    Yields:
        (leaf, negated) pairs in left-to-right order.

    Note:
        Storage adapters use polarity to decide where an approximate
        prefilter (e.g. bounding box for a radius) is still a safe superset.
    """
    if isinstance(predicate, FieldPredicate):
        yield predicate, negated
    elif isinstance(predicate, (AndPredicate, OrPredicate)):
        yield from iter_field_predicates(predicate.left, negated)
        yield from iter_field_predicates(predicate.right, negated)
    elif isinstance(predicate, NotPredicate):
        yield from iter_field_predicates(predicate.operand, not negated)
    else:
        raise TypeError(f"Unknown predicate node: {type(predicate).__name__}")


# ============================================================================
# SPECIFICATION
# ============================================================================


class Specification(ABC, Generic[T]):
    """Base class for composable specifications.

    Concrete specifications are immutable strategy objects: no shared
    mutable state, safe to evaluate from many tasks at once.

    Example:
        >>> spec = ActiveListingSpecification() & ListingNearLocationSpecification(center, 25)
        >>> spec = spec & ~ListingByTypeSpecification(ListingType.REVERSE_AUCTION)
        >>> matching = spec.select(listings)
        >>> page = await repo.get_paged(PageRequest(1, 20), spec)
    """

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """Check if candidate satisfies this specification."""
        pass

    @abstractmethod
    def to_predicate(self) -> Predicate:
        """Declarative form of this specification for storage adapters."""
        pass

    def and_(self, other: "Specification[T]") -> "Specification[T]":
        """Both specifications must hold."""
        return AndSpecification(self, other)

    def or_(self, other: "Specification[T]") -> "Specification[T]":
        """At least one specification must hold."""
        return OrSpecification(self, other)

    def not_(self) -> "Specification[T]":
        """Negate this specification."""
        return NotSpecification(self)

    def __and__(self, other: "Specification[T]") -> "Specification[T]":
        return self.and_(other)

    def __or__(self, other: "Specification[T]") -> "Specification[T]":
        return self.or_(other)

    def __invert__(self) -> "Specification[T]":
        return self.not_()

    def select(self, candidates: Iterable[T]) -> list[T]:
        """Return candidates satisfying this specification, order preserved."""
        return [candidate for candidate in candidates if self.is_satisfied_by(candidate)]


@dataclass(frozen=True)
class AndSpecification(Specification[T]):
    left: Specification[T]
    right: Specification[T]

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) and self.right.is_satisfied_by(candidate)

    def to_predicate(self) -> Predicate:
        return AndPredicate(self.left.to_predicate(), self.right.to_predicate())


@dataclass(frozen=True)
class OrSpecification(Specification[T]):
    left: Specification[T]
    right: Specification[T]

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(candidate)

    def to_predicate(self) -> Predicate:
        return OrPredicate(self.left.to_predicate(), self.right.to_predicate())


@dataclass(frozen=True)
class NotSpecification(Specification[T]):
    operand: Specification[T]

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.operand.is_satisfied_by(candidate)

    def to_predicate(self) -> Predicate:
        return NotPredicate(self.operand.to_predicate())
