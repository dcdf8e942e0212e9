"""Condition operators -> Prisma filter fragments."""

from __future__ import annotations

import copy
from typing import Any

from ..ast import coerce_operator
from ..exceptions import InvalidOperandError, UnsupportedOperatorError
from ..operators import ConditionOperator

_PRISMA_OP_MAP: dict[ConditionOperator, str] = {
    ConditionOperator.EQ: "equals",
    ConditionOperator.NE: "not",
    ConditionOperator.GT: "gt",
    ConditionOperator.GTE: "gte",
    ConditionOperator.LT: "lt",
    ConditionOperator.LTE: "lte",
    ConditionOperator.IN: "in",
    ConditionOperator.NOT_IN: "notIn",
}

_PATTERN_MODES: dict[ConditionOperator, str] = {
    ConditionOperator.LIKE: "default",
    ConditionOperator.ILIKE: "insensitive",
}


class Fragment(dict[str, Any]):
    """
    Operator dict attached at the end of a field path.

    Keys are Prisma operator names (``equals``, ``gte``, ``mode`` ...);
    their values are operands and are never merged into.
    """


def compile_operator(operator: ConditionOperator | str, value: Any) -> Fragment:
    """
    Compile one operator and its operand to a Prisma filter fragment.

    The operand is deep-copied, so the fragment never aliases the
    specification it came from.

    Raises:
        InvalidOperandError: If ``BETWEEN`` is not given exactly two values.
        UnsupportedOperatorError: If *operator* is not a known operator.
    """
    op = coerce_operator(operator)
    value = copy.deepcopy(value)

    prisma_op = _PRISMA_OP_MAP.get(op)
    if prisma_op:
        if op in {ConditionOperator.IN, ConditionOperator.NOT_IN} and isinstance(
            value, tuple
        ):
            return Fragment({prisma_op: list(value)})
        return Fragment({prisma_op: value})

    mode = _PATTERN_MODES.get(op)
    if mode:
        return Fragment({"contains": value, "mode": mode})

    if op == ConditionOperator.BETWEEN:
        lo, hi = _validate_range_operand(value)
        return Fragment({"gte": lo, "lte": hi})

    if op == ConditionOperator.IS_NULL:
        return Fragment({"equals": None})
    if op == ConditionOperator.IS_NOT_NULL:
        return Fragment({"not": None})

    raise UnsupportedOperatorError(op.value, [m.value for m in ConditionOperator])


def _validate_range_operand(val: Any) -> tuple[Any, Any]:
    if not isinstance(val, (list, tuple)) or len(val) != 2:
        raise InvalidOperandError(
            ConditionOperator.BETWEEN.value,
            val,
            f"BETWEEN requires a list of two values, got {val!r}",
        )
    return val[0], val[1]
