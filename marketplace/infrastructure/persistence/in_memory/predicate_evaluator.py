"""PredicateEvaluator - інтерпретує predicate tree над об'єктами в пам'яті.

Це reference interpreter: SQL adapter перекладав би ті самі вузли в WHERE,
цей - обчислює їх напряму через getattr. Результат має збігатися з
`Specification.is_satisfied_by` для будь-якого candidate.
"""

from typing import Any, Iterable

from marketplace.domain.shared import (
    AndPredicate,
    FieldPredicate,
    InvalidArgumentError,
    NotPredicate,
    Operator,
    OrPredicate,
    Predicate,
    iter_field_predicates,
)

_ORDERING_OPERATORS = {Operator.LT, Operator.LE, Operator.GT, Operator.GE}


class PredicateEvaluator:
    """Evaluate `Field | And | Or | Not` trees against plain objects.

    Args:
        allowed_fields: Root attribute names queries may reference
            (None = any attribute). Unknown field → InvalidArgumentError.

    Example:
        >>> evaluator = PredicateEvaluator()
        >>> predicate = ActiveListingSpecification().to_predicate()
        >>> evaluator.evaluate(predicate, listing)
        True
    """

    def __init__(self, allowed_fields: Iterable[str] | None = None) -> None:
        self._allowed_fields = frozenset(allowed_fields) if allowed_fields is not None else None

    def validate(self, predicate: Predicate) -> None:
        """Check every leaf references a known field with a supported operator.

        Raises:
            InvalidArgumentError: On unknown field or operator.
            TypeError: On unknown predicate node.
        """
        for leaf, _negated in iter_field_predicates(predicate):
            root = leaf.field.split(".", 1)[0]
            if self._allowed_fields is not None and root not in self._allowed_fields:
                raise InvalidArgumentError("Unknown query field", field=leaf.field)
            if not isinstance(leaf.operator, Operator):
                raise InvalidArgumentError("Unknown query operator", operator=leaf.operator)

    def evaluate(self, predicate: Predicate, candidate: Any) -> bool:
        """Evaluate predicate for a single candidate (short-circuit And/Or)."""
        if isinstance(predicate, FieldPredicate):
            return self._evaluate_field(predicate, candidate)
        if isinstance(predicate, AndPredicate):
            return self.evaluate(predicate.left, candidate) and self.evaluate(predicate.right, candidate)
        if isinstance(predicate, OrPredicate):
            return self.evaluate(predicate.left, candidate) or self.evaluate(predicate.right, candidate)
        if isinstance(predicate, NotPredicate):
            return not self.evaluate(predicate.operand, candidate)
        raise TypeError(f"Unknown predicate node: {type(predicate).__name__}")

    def filter(self, predicate: Predicate, candidates: Iterable[Any]) -> list[Any]:
        """Candidates satisfying predicate, order preserved."""
        return [candidate for candidate in candidates if self.evaluate(predicate, candidate)]

    @staticmethod
    def resolve(candidate: Any, field: str) -> Any:
        """Resolve dotted path ("current_price.amount"); None propagates."""
        value = candidate
        for part in field.split("."):
            if value is None:
                return None
            value = getattr(value, part)
        return value

    def _evaluate_field(self, predicate: FieldPredicate, candidate: Any) -> bool:
        actual = self.resolve(candidate, predicate.field)
        operator = predicate.operator
        expected = predicate.value

        if operator == Operator.IS_NULL:
            return actual is None
        if operator == Operator.IS_NOT_NULL:
            return actual is not None
        if operator == Operator.EQ:
            return actual == expected
        if operator == Operator.NE:
            return actual != expected

        # Порівняння з NULL завжди False (як у SQL WHERE)
        if actual is None:
            return False

        if operator in _ORDERING_OPERATORS:
            if operator == Operator.LT:
                return actual < expected
            if operator == Operator.LE:
                return actual <= expected
            if operator == Operator.GT:
                return actual > expected
            return actual >= expected

        if operator == Operator.CONTAINS:
            return str(expected).casefold() in str(actual).casefold()
        if operator == Operator.WITHIN_RADIUS:
            center, radius_km = expected
            return actual.distance_to(center) <= radius_km
        if operator == Operator.WITHIN_BOUNDS:
            return expected.contains(actual)

        raise InvalidArgumentError("Unsupported query operator", operator=operator)
