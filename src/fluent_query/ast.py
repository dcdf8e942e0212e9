"""
Filter specification tree.

A filter is a recursive tagged union of :class:`Condition` leaves and
:class:`ConditionGroup` branches, discriminated by the ``kind`` tag::

    adults = Condition(field="age", operator=ConditionOperator.GTE, value=18)
    active = Condition(field="status", operator=ConditionOperator.EQ, value="active")

    spec = adults & active
    # → ConditionGroup(AND, [age >= 18, status == "active"])

    spec = parse_filter({
        "kind": "group",
        "combinator": "OR",
        "children": [
            {"kind": "condition", "field": "role", "operator": "EQ", "value": "admin"},
            {"kind": "condition", "field": "role", "operator": "EQ", "value": "owner"},
        ],
    })

All nodes are frozen; composing them always builds new nodes.
"""

from __future__ import annotations

import copy
from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from .base import FrozenModel, check_path, validation_error_from
from .exceptions import UnsupportedOperatorError, ValidationError
from .operators import ConditionOperator, LogicalOperator, SortDirection

_VALID_OPERATORS: list[str] = [m.value for m in ConditionOperator]


def coerce_operator(value: Any) -> ConditionOperator:
    """
    Return *value* as a :class:`ConditionOperator`.

    Strings are matched case-insensitively against the enum values.

    Raises:
        UnsupportedOperatorError: If *value* names no known operator.
    """
    if isinstance(value, ConditionOperator):
        return value
    if isinstance(value, str) and value.upper() in _VALID_OPERATORS:
        return ConditionOperator(value.upper())
    raise UnsupportedOperatorError(value, _VALID_OPERATORS)


class _Node(FrozenModel):
    """Shared behaviour of filter tree nodes: freezing and logic operators."""

    def __and__(self, other: FilterNode) -> ConditionGroup:
        return ConditionGroup(combinator=LogicalOperator.AND, children=(self, other))

    def __or__(self, other: FilterNode) -> ConditionGroup:
        return ConditionGroup(combinator=LogicalOperator.OR, children=(self, other))

    def __invert__(self) -> ConditionGroup:
        return ConditionGroup(combinator=LogicalOperator.NOT, children=(self,))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class Condition(_Node):
    """
    A single comparison applied to a field.

    ``field`` may be a dot path (``"author.email"``) that descends through
    relations before the comparison applies.  ``value`` is interpreted by
    the operator; ``IS_NULL`` / ``IS_NOT_NULL`` ignore it.  The value is
    copied on construction, so later changes to the caller's list or dict
    do not reach the condition.
    """

    kind: Literal["condition"] = "condition"
    field: str
    operator: ConditionOperator
    value: Any = None

    @field_validator("field")
    @classmethod
    def _check_field(cls, value: str) -> str:
        return check_path(value)

    @field_validator("operator", mode="before")
    @classmethod
    def _check_operator(cls, value: Any) -> ConditionOperator:
        return coerce_operator(value)

    @field_validator("value")
    @classmethod
    def _detach_value(cls, value: Any) -> Any:
        return copy.deepcopy(value)


class ConditionGroup(_Node):
    """Children combined by ``AND``, ``OR`` or ``NOT``; nests without limit."""

    kind: Literal["group"] = "group"
    combinator: LogicalOperator
    children: tuple[FilterNode, ...] = ()


FilterNode = Annotated[Condition | ConditionGroup, Field(discriminator="kind")]

ConditionGroup.model_rebuild()

_FILTER_ADAPTER: TypeAdapter[FilterNode] = TypeAdapter(FilterNode)


class SortOrder(FrozenModel):
    """Sort on a field (dot path allowed) in the given direction."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @field_validator("field")
    @classmethod
    def _check_field(cls, value: str) -> str:
        return check_path(value)

    @field_validator("direction", mode="before")
    @classmethod
    def _normalise_direction(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


def parse_filter(data: Any) -> FilterNode:
    """
    Build a filter tree from its dictionary form (as produced by ``to_dict()``).

    Raises:
        UnsupportedOperatorError: If a condition names an unknown operator.
        ValidationError: For any other malformed node; ``path`` points at it.
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Expected a dict, got {type(data).__name__}",
            path="<root>",
        )
    try:
        return _FILTER_ADAPTER.validate_python(data)
    except PydanticValidationError as exc:
        raise validation_error_from(exc) from exc
