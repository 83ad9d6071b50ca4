"""In-memory persistence adapters (reference implementation of the ports)."""

from .listing_repository import InMemoryListingRepository
from .predicate_evaluator import PredicateEvaluator
from .unit_of_work import InMemoryListingStore, InMemoryUnitOfWork

__all__ = [
    "InMemoryListingRepository",
    "InMemoryListingStore",
    "InMemoryUnitOfWork",
    "PredicateEvaluator",
]
