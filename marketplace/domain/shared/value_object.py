"""Base ValueObject class for domain model.

ValueObject - immutable об'єкт, який порівнюється за значенням атрибутів,
а не за ідентичністю. Два VO з однаковими атрибутами - це один і той же об'єкт.
"""

from abc import ABC
from dataclasses import dataclass

from .exceptions import InvalidArgumentError


@dataclass(frozen=True, eq=True)
class ValueObject(ABC):
    """Base class for all domain value objects.

    ValueObject характеристики:
    - **Immutable**: Не можна змінити після створення (frozen=True)
    - **Equality by value**: Порівнюється за значенням атрибутів, не за ID
    - **No identity**: Не має власного ID
    - **Replaceable**: Якщо треба змінити, створюємо новий VO

    Example:
        >>> Money(Decimal("100"), "USD") == Money(Decimal("100.00"), "usd")
        True
        >>> money = Money(Decimal("100"), "USD")
        >>> money.amount = Decimal("200")  # FrozenInstanceError!
    """

    def __post_init__(self) -> None:
        """Hook для валідації після ініціалізації.

        Override цей метод для додавання бізнес-правил валідації.
        Нормалізація полів робиться через object.__setattr__ (frozen).

        Raises:
            InvalidArgumentError: If validation fails.
        """
        pass


def validate_value_object(condition: bool, message: str, **context: object) -> None:
    """Helper для валідації в value objects.

    Args:
        condition: Умова яка має бути True.
        message: Повідомлення помилки якщо condition False.
        **context: Extra context attached to the exception.

    Raises:
        InvalidArgumentError: If condition is False.

    Example:
        >>> validate_value_object(amount >= 0, "Amount cannot be negative", amount=amount)
    """
    if not condition:
        raise InvalidArgumentError(message, **context)
