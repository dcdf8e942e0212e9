"""Prisma clause compiler for query specifications."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypedDict

from ..exceptions import ValidationError
from ..operators import LogicalOperator
from ..utils import nest_path
from .merge import CollisionPolicy, deep_merge, find_collisions, has_combinator
from .operators import compile_operator

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..ast import Condition, ConditionGroup, FilterNode, SortOrder
    from ..specification import QuerySpecification

logger = logging.getLogger(__name__)


class PrismaQueryClauses(TypedDict, total=False):
    """
    Arguments for a Prisma ``find_many`` call.

    ``where``, ``orderBy`` and ``include`` are only present when the
    specification has filters, sorts or includes; ``skip`` and ``take``
    are always present.
    """

    where: dict[str, Any]
    orderBy: dict[str, Any] | list[dict[str, Any]]
    include: dict[str, bool]
    skip: int
    take: int


class PrismaTranslator:
    """
    Compiles a :class:`QuerySpecification` to Prisma query clauses.

    Stateless apart from its configuration; one instance can be shared
    and reused for any number of specifications.

    Args:
        on_collision: How AND groups handle two children that set the same
            leaf key.  ``OVERWRITE`` keeps the later one, ``WRAP`` falls
            back to ``{"AND": [...]}`` so both survive.
    """

    def __init__(
        self,
        *,
        on_collision: CollisionPolicy | str = CollisionPolicy.OVERWRITE,
    ) -> None:
        self.on_collision = CollisionPolicy(on_collision)

    def translate(self, spec: QuerySpecification) -> PrismaQueryClauses:
        """Build the full clause bundle for *spec*."""
        result: PrismaQueryClauses = {}

        filters = spec.get_filters()
        if filters:
            result["where"] = self.translate_where(filters)

        sorts = spec.get_sorts()
        if sorts:
            result["orderBy"] = self.translate_order_by(sorts)

        includes = spec.get_includes()
        if includes:
            result["include"] = self.translate_include(includes)

        result["skip"] = spec.offset
        result["take"] = spec.limit

        logger.debug(
            "Translated specification: %d filter(s), %d sort(s), "
            "%d include(s), skip=%d, take=%d",
            len(filters),
            len(sorts),
            len(includes),
            result["skip"],
            result["take"],
        )
        return result

    # -- where ---------------------------------------------------------------

    def translate_where(self, filters: Sequence[FilterNode]) -> dict[str, Any]:
        """
        Compile the top-level filter list.

        The list is an implicit AND group; a single node compiles to its
        own clause without any wrapper.
        """
        if not filters:
            return {}
        compiled = [self._compile_node(node) for node in filters]
        if len(compiled) == 1:
            return compiled[0]
        return self._merge_or_wrap(compiled)

    def _compile_node(self, node: FilterNode) -> dict[str, Any]:
        if node.kind == "condition":
            return self._compile_condition(node)
        if node.kind == "group":
            return self._compile_group(node)
        raise ValidationError(f"Unknown filter node kind: {node.kind!r}")

    @staticmethod
    def _compile_condition(condition: Condition) -> dict[str, Any]:
        fragment = compile_operator(condition.operator, condition.value)
        return nest_path(condition.field, fragment)

    def _compile_group(self, group: ConditionGroup) -> dict[str, Any]:
        compiled = [self._compile_node(child) for child in group.children]
        if group.combinator == LogicalOperator.AND:
            return self._merge_or_wrap(compiled)
        return {group.combinator.value: compiled}

    def _merge_or_wrap(self, compiled: list[dict[str, Any]]) -> dict[str, Any]:
        """Collapse AND siblings into one clause, or wrap them if they are groups."""
        and_key = LogicalOperator.AND.value
        if any(has_combinator(clause) for clause in compiled):
            return {and_key: compiled}

        merged: dict[str, Any] = {}
        for clause in compiled:
            if self.on_collision == CollisionPolicy.WRAP:
                collisions = find_collisions(merged, clause)
                if collisions:
                    logger.debug(
                        "AND siblings collide on %s; wrapping instead of merging",
                        ", ".join(collisions),
                    )
                    return {and_key: compiled}
            merged = deep_merge(merged, clause)
        return merged

    # -- order by / include --------------------------------------------------

    @staticmethod
    def translate_order_by(
        sorts: Sequence[SortOrder],
    ) -> dict[str, Any] | list[dict[str, Any]]:
        """
        Compile sort orders.

        One sort gives a single nested dict, several give a list whose
        order is the tie-break precedence.
        """
        if not sorts:
            return {}
        compiled = [
            nest_path(sort.field, sort.direction.value.lower()) for sort in sorts
        ]
        if len(compiled) == 1:
            return compiled[0]
        return compiled

    @staticmethod
    def translate_include(includes: Sequence[str]) -> dict[str, bool]:
        return dict.fromkeys(includes, True)
