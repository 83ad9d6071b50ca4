"""Paging primitives shared by repository ports and query handlers."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Sequence, TypeVar

from .value_object import ValueObject, validate_value_object

T = TypeVar("T")


class SortDirection(str, Enum):
    """Sort direction for paged queries."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, raw: "str | SortDirection") -> "SortDirection":
        """Parse direction case-insensitively ("asc", "DESC", ...).

        Raises:
            InvalidArgumentError: If direction is not ASC or DESC.
        """
        if isinstance(raw, SortDirection):
            return raw
        normalized = (raw or "").strip().upper()
        validate_value_object(
            normalized in (cls.ASC.value, cls.DESC.value),
            "Sort direction must be ASC or DESC",
            sort_direction=raw,
        )
        return cls(normalized)


@dataclass(frozen=True)
class PageRequest(ValueObject):
    """Requested page: 1-based page number and positive page size."""

    page_number: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        validate_value_object(
            isinstance(self.page_number, int) and self.page_number >= 1,
            "Page number must be >= 1",
            page_number=self.page_number,
        )
        validate_value_object(
            isinstance(self.page_size, int) and self.page_size > 0,
            "Page size must be > 0",
            page_size=self.page_size,
        )

    @property
    def offset(self) -> int:
        """Number of items to skip."""
        return (self.page_number - 1) * self.page_size


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total count across all pages."""

    items: Sequence[T]
    total_count: int
    page_number: int
    page_size: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def from_request(cls, items: Sequence[T], total_count: int, request: PageRequest) -> "Page[T]":
        return cls(
            items=items,
            total_count=total_count,
            page_number=request.page_number,
            page_size=request.page_size,
        )

    @property
    def total_pages(self) -> int:
        """ceil(total_count / page_size)."""
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1
