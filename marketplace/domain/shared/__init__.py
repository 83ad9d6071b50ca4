"""Shared Kernel - base classes для всієї domain layer.

Shared Kernel містить building blocks для Domain-Driven Design:
- Entity: Об'єкт з identity
- ValueObject: Immutable об'єкт порівнюваний за значенням
- AggregateRoot: Головний entity в aggregate (events outbox + version token)
- DomainEvent: Подія що сталась в domain
- Specification: Composable predicate (And / Or / Not)
- PageRequest / Page: Paging primitives
- DomainException: Порушення бізнес-правил
"""

from .aggregate_root import INITIAL_VERSION, AggregateRoot
from .domain_event import DomainEvent
from .entity import Entity
from .exceptions import (
    AggregateAlreadyExists,
    AggregateNotFound,
    ConcurrencyException,
    DomainException,
    InvalidArgumentError,
    InvalidStateTransition,
)
from .pagination import Page, PageRequest, SortDirection
from .specification import (
    AndPredicate,
    AndSpecification,
    FieldPredicate,
    NotPredicate,
    NotSpecification,
    Operator,
    OrPredicate,
    OrSpecification,
    Predicate,
    Specification,
    iter_field_predicates,
)
from .value_object import ValueObject, validate_value_object

__all__ = [
    # Base classes
    "Entity",
    "ValueObject",
    "AggregateRoot",
    "DomainEvent",
    "INITIAL_VERSION",
    # Specification
    "Specification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    "Predicate",
    "FieldPredicate",
    "AndPredicate",
    "OrPredicate",
    "NotPredicate",
    "Operator",
    "iter_field_predicates",
    # Paging
    "Page",
    "PageRequest",
    "SortDirection",
    # Utilities
    "validate_value_object",
    # Exceptions
    "DomainException",
    "InvalidArgumentError",
    "AggregateNotFound",
    "AggregateAlreadyExists",
    "InvalidStateTransition",
    "ConcurrencyException",
]
