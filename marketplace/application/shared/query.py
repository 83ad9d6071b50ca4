"""Base Query class для CQRS pattern.

Query - запит на отримання даних (read operation).
Queries НЕ мають side effects (не змінюють дані).
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class Query(ABC):
    """Base class для всіх queries.

    Example:
        >>> @dataclass(frozen=True)
        ... class GetSellerListingsQuery(Query):
        ...     seller_id: UUID
        ...     page_number: int = 1
        ...     page_size: int | None = None

        >>> page = await handler.handle(GetSellerListingsQuery(seller_id=seller_id))
    """

    pass
