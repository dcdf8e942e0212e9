"""
Errors raised while building or translating a query specification.

Building fails with :class:`ValidationError` (bad bounds or malformed
input) or :class:`UnsupportedOperatorError`; translation adds
:class:`InvalidOperandError` for operands the backend cannot express.
Catch :class:`QueryError` to handle all of them; ``to_dict()`` gives a
JSON-ready summary of each.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class QueryError(Exception):
    """Root of every error this package raises."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ValidationError(QueryError):
    """
    A specification value violates a construction-time constraint.

    ``path`` locates the offending value, e.g. ``<root>.pagination.limit``
    or ``<root>.children[0].field``.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class InvalidOperandError(QueryError):
    """The value of a condition does not fit its operator (e.g. ``BETWEEN`` arity)."""

    def __init__(self, operator: str, value: Any, message: str) -> None:
        self.operator = operator
        self.value = value
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_OPERAND",
            "operator": self.operator,
            "message": self.message,
        }


class UnsupportedOperatorError(QueryError):
    """
    Unknown operator specified.

    Only reachable through a hand-built or deserialised specification;
    provides fuzzy-matched suggestions for likely intended operators.
    """

    def __init__(self, operator: Any, valid_operators: list[str]) -> None:
        self.operator = str(operator)
        self.valid_operators = valid_operators
        self.suggestions = get_close_matches(
            self.operator.upper(), valid_operators, n=3, cutoff=0.6
        )

        message = f"Unsupported operator: '{self.operator}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operators: {', '.join(sorted(valid_operators))}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_OPERATOR",
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": sorted(self.valid_operators),
        }
