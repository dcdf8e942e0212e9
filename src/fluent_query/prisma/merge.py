"""
Deep merge of compiled filter clauses.

Sibling conditions of an AND group are collapsed into one clause so that
conditions on the same relation share a single wrapper::

    deep_merge({"author": {"email": {"equals": "a@b.com"}}},
               {"author": {"verified": {"equals": True}}})
    # → {"author": {"email": {...}, "verified": {...}}}

The merge descends through path segments and, when both sides end in a
:class:`Fragment` for the same field, through the fragment's operator
keys.  Operands are leaves: when both fragments set the same operator key
the later operand wins whole, even if it is a dict.  Two equality filters
on the same field therefore collapse to the last one;
:class:`CollisionPolicy` lets the translator wrap the group in ``AND``
instead.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from ..operators import LogicalOperator
from .operators import Fragment

logger = logging.getLogger(__name__)

COMBINATOR_KEYS: frozenset[str] = frozenset(op.value for op in LogicalOperator)


class CollisionPolicy(str, Enum):
    """What an AND merge does when two children set the same leaf key."""

    # Later child replaces the earlier value
    OVERWRITE = "overwrite"
    # Keep every child by wrapping the group as {"AND": [...]}
    WRAP = "wrap"


def has_combinator(clause: dict[str, Any]) -> bool:
    """True if *clause* is a compiled group (carries ``AND``/``OR``/``NOT``)."""
    return any(key in COMBINATOR_KEYS for key in clause)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Return a new dict merging *override* into *base*; neither is mutated.

    - Keys present in one operand pass through.
    - Keys present in both whose values are both plain dicts (path
      segments) are merged recursively.
    - Two fragments under the same key are merged one level: their
      operator keys combine, their operands are never merged into.
    - Otherwise the value from *override* wins.
    - Combinator keys are never merged recursively; *override* replaces them.
    """
    collisions: list[str] = []
    merged = _merge(base, override, collisions, prefix="")
    for path in collisions:
        logger.debug("Merge overwrote '%s' with the later condition", path)
    return merged


def find_collisions(base: dict[str, Any], override: dict[str, Any]) -> list[str]:
    """Return the dotted key paths :func:`deep_merge` would overwrite."""
    collisions: list[str] = []
    _merge(base, override, collisions, prefix="")
    return collisions


def _merge(
    base: dict[str, Any],
    override: dict[str, Any],
    collisions: list[str],
    *,
    prefix: str,
) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if key not in result:
            result[key] = value
            continue
        path = f"{prefix}{key}"
        current = result[key]
        if key in COMBINATOR_KEYS:
            collisions.append(path)
            result[key] = value
        elif isinstance(current, Fragment) and isinstance(value, Fragment):
            result[key] = _merge_fragments(current, value, collisions, prefix=path)
        elif _is_path(current) and _is_path(value):
            result[key] = _merge(current, value, collisions, prefix=f"{path}.")
        else:
            collisions.append(path)
            result[key] = value
    return result


def _merge_fragments(
    base: Fragment,
    override: Fragment,
    collisions: list[str],
    *,
    prefix: str,
) -> Fragment:
    result = Fragment(base)
    for op_key, operand in override.items():
        if op_key in result:
            collisions.append(f"{prefix}.{op_key}")
        result[op_key] = operand
    return result


def _is_path(value: Any) -> bool:
    return isinstance(value, dict) and not isinstance(value, Fragment)
