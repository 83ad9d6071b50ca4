"""Domain Layer - Pure Business Logic.

This layer contains:
- Bounded Contexts (Listings)
- Aggregate Roots (Listing)
- Value Objects (Money, Location, AuctionSettings, identifiers)
- Specifications (composable listing filters)
- Domain Events (for decoupling)
- Repository Interfaces (ports)

Key Principles:
- Zero dependencies on infrastructure
- No I/O, no logging, no clocks beyond datetime.now(UTC)
- Rich domain models (not anemic)

Bounded Contexts:
- listings: Listing lifecycle, pricing, discovery filters
- shared: Common base classes
"""

# Shared kernel
from .shared import AggregateRoot, DomainEvent, DomainException

__all__ = [
    "AggregateRoot",
    "DomainEvent",
    "DomainException",
]
