"""Money value object - currency-tagged non-negative amount."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from marketplace.domain.shared import (
    InvalidArgumentError,
    ValueObject,
    validate_value_object,
)

from ..exceptions import CurrencyMismatchError

DEFAULT_CURRENCY = "USD"

_CENT = Decimal("0.01")


def _to_decimal(raw: Any) -> Decimal:
    """Coerce int/float/str/Decimal to Decimal (float через str, без binary noise)."""
    validate_value_object(raw is not None, "Amount is required")
    validate_value_object(not isinstance(raw, bool), "Amount must be numeric", amount=raw)
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw))
    except (InvalidOperation, ValueError) as e:
        raise InvalidArgumentError("Amount must be numeric", amount=raw) from e
    validate_value_object(value.is_finite(), "Amount must be finite", amount=raw)
    return value


@dataclass(frozen=True)
class Money(ValueObject):
    """Грошова сума в конкретній валюті.

    Invariants:
        - amount >= 0
        - currency не порожня; нормалізується до upper case ("usd" → "USD")

    Порівняння і арифметика дозволені тільки в межах однієї валюти,
    інакше CurrencyMismatchError. Конвертації валют немає.

    Example:
        >>> price = Money(Decimal("100.50"), "USD")
        >>> price + Money(Decimal("10"), "usd")
        Money(amount=Decimal('110.50'), currency='USD')
        >>> price < Money(Decimal("1"), "EUR")  # CurrencyMismatchError
    """

    amount: Decimal
    """Сума (>= 0)."""

    currency: str = DEFAULT_CURRENCY
    """Currency code (e.g., "USD", "EUR"). Формат далі не валідується."""

    def __post_init__(self) -> None:
        """Validate and normalize money."""
        amount = _to_decimal(self.amount)
        validate_value_object(amount >= 0, "Amount cannot be negative", amount=amount)

        validate_value_object(
            isinstance(self.currency, str) and bool(self.currency.strip()),
            "Currency is required",
            currency=self.currency,
        )

        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", self.currency.strip().upper())

    # ==================== FACTORIES ====================

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Zero amount (default `0 USD`)."""
        return cls(Decimal("0"), currency)

    @classmethod
    def from_cents(cls, cents: int, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Build money from integer minor units (12345 → 123.45)."""
        validate_value_object(
            isinstance(cents, int) and not isinstance(cents, bool),
            "Cents must be an integer",
            cents=cents,
        )
        return cls(Decimal(cents).scaleb(-2), currency)

    def to_cents(self) -> int:
        """Amount in minor units, rounded half-up."""
        return int((self.amount / _CENT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    # ==================== QUERIES ====================

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def is_same_currency(self, other: "Money") -> bool:
        return self.currency == other.currency

    def rounded(self) -> "Money":
        """Amount rounded half-up to cents."""
        return Money(self.amount.quantize(_CENT, rounding=ROUND_HALF_UP), self.currency)

    # ==================== ARITHMETIC ====================

    def __add__(self, other: "Money") -> "Money":
        self._ensure_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract money; result below zero raises InvalidArgumentError."""
        self._ensure_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def multiply(self, factor: Decimal | int | str) -> "Money":
        """Scale amount by a non-negative factor (no rounding)."""
        return Money(self.amount * _to_decimal(factor), self.currency)

    # ==================== ORDERING ====================

    def __lt__(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount >= other.amount

    def _ensure_same_currency(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Expected Money, got {type(other).__name__}")
        if self.currency != other.currency:
            raise CurrencyMismatchError(expected=self.currency, actual=other.currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"
