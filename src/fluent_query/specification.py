"""
Immutable query specification.

``QuerySpecification`` collects filters, sort orders, relation includes and
pagination.  Every operation returns a new specification that shares the
untouched parts with the original, so a specification can be branched and
reused freely::

    base = QuerySpecification.create().where("status", ConditionOperator.EQ, "active")

    page_one = base.add_sort("createdAt", SortDirection.DESC)
    page_two = page_one.set_pagination(2, 25)
    # base, page_one and page_two are three independent values

The specification never talks to a data store; a translator (see
:mod:`fluent_query.prisma`) turns it into backend clauses.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator

from .ast import Condition, ConditionGroup, FilterNode, SortOrder
from .base import FrozenModel, custom_error, validation_error_from
from .exceptions import ValidationError
from .operators import ConditionOperator, SortDirection
from .pagination import Pagination

logger = logging.getLogger(__name__)


def _check_include(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise ValidationError(
            f"Include name must be a non-empty string, got {name!r}",
            path="<root>.includes",
        )
    return name


class QuerySpecification(FrozenModel):
    """
    Backend-agnostic description of a query.

    Attributes:
        filters: Top-level filter nodes, implicitly combined with AND.
        sorts: Sort orders; the first is the primary key.
        includes: Relation names to load alongside the results.
        pagination: Page and page size.
    """

    filters: tuple[FilterNode, ...] = ()
    sorts: tuple[SortOrder, ...] = ()
    includes: tuple[str, ...] = ()
    pagination: Pagination = Pagination()

    @field_validator("includes")
    @classmethod
    def _check_includes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for name in value:
            try:
                _check_include(name)
            except ValidationError as exc:
                raise custom_error(exc) from exc
        return value

    @classmethod
    def create(cls) -> QuerySpecification:
        """Return the default specification: no filters, page 1, limit 10."""
        return cls()

    # -- filters -------------------------------------------------------------

    def add_condition(self, condition: Condition) -> QuerySpecification:
        """Return a copy with *condition* appended to the top-level filters."""
        if not isinstance(condition, Condition):
            raise TypeError(
                f"Expected a Condition, got {type(condition).__name__}"
            )
        return self._with_filter(condition)

    def add_condition_group(self, group: ConditionGroup) -> QuerySpecification:
        """Return a copy with *group* appended to the top-level filters."""
        if not isinstance(group, ConditionGroup):
            raise TypeError(
                f"Expected a ConditionGroup, got {type(group).__name__}"
            )
        return self._with_filter(group)

    def add_filter(self, node: FilterNode) -> QuerySpecification:
        """Return a copy with a condition or a group appended."""
        if isinstance(node, ConditionGroup):
            return self.add_condition_group(node)
        return self.add_condition(node)

    def where(
        self,
        field: str,
        operator: ConditionOperator | str,
        value: Any = None,
    ) -> QuerySpecification:
        """
        Shortcut for ``add_condition(Condition(field=..., operator=..., value=...))``.

        Raises:
            UnsupportedOperatorError: If *operator* names no known operator.
            ValidationError: If *field* is not a well-formed dot path.
        """
        return self.add_condition(
            Condition(field=field, operator=operator, value=value)
        )

    def _with_filter(self, node: FilterNode) -> QuerySpecification:
        return self.model_copy(update={"filters": (*self.filters, node)})

    # -- sorts / includes / pagination ---------------------------------------

    def add_sort(
        self,
        field: str,
        direction: SortDirection | str = SortDirection.ASC,
    ) -> QuerySpecification:
        """Return a copy with a sort order appended (lowest precedence)."""
        sort = SortOrder(field=field, direction=direction)
        return self.model_copy(update={"sorts": (*self.sorts, sort)})

    def add_include(self, name: str) -> QuerySpecification:
        """Return a copy that also loads the relation *name*."""
        _check_include(name)
        return self.model_copy(update={"includes": (*self.includes, name)})

    def set_pagination(self, page: int, limit: int) -> QuerySpecification:
        """
        Return a copy with the given page and page size.

        Raises:
            ValidationError: If ``page < 1`` or ``limit`` is outside
                ``[1, MAX_LIMIT]``.
        """
        pagination = Pagination(page=page, limit=limit)
        return self.model_copy(update={"pagination": pagination})

    # -- accessors -----------------------------------------------------------

    def get_filters(self) -> list[FilterNode]:
        return list(self.filters)

    def get_sorts(self) -> list[SortOrder]:
        return list(self.sorts)

    def get_includes(self) -> list[str]:
        return list(self.includes)

    def get_pagination(self) -> Pagination:
        return self.pagination

    @property
    def offset(self) -> int:
        return self.pagination.offset

    @property
    def limit(self) -> int:
        return self.pagination.limit

    # -- composition ---------------------------------------------------------

    def merge(self, other: QuerySpecification) -> QuerySpecification:
        """
        Combine two specifications.

        - Filters, sorts and includes of ``other`` are appended.
        - ``other``'s pagination replaces ``self``'s.
        """
        return QuerySpecification(
            filters=(*self.filters, *other.filters),
            sorts=(*self.sorts, *other.sorts),
            includes=(*self.includes, *other.includes),
            pagination=other.pagination,
        )

    # -- serialisation -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a dictionary accepted by :meth:`from_dict`."""
        return {
            "filters": [node.to_dict() for node in self.filters],
            "sorts": [sort.to_dict() for sort in self.sorts],
            "includes": list(self.includes),
            "pagination": self.pagination.to_dict(),
        }

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuerySpecification:
        """
        Build a specification from its dictionary form.

        Missing keys fall back to the defaults of :meth:`create`.

        Raises:
            UnsupportedOperatorError: If a condition names an unknown operator.
            ValidationError: For any other malformed input.
        """
        if not isinstance(data, dict):
            raise ValidationError(
                f"Expected a dict, got {type(data).__name__}",
                path="<root>",
            )
        try:
            spec = cls.model_validate(data)
        except PydanticValidationError as exc:
            raise validation_error_from(exc) from exc
        logger.debug(
            "Loaded specification with %d filter(s), %d sort(s), %d include(s)",
            len(spec.filters),
            len(spec.sorts),
            len(spec.includes),
        )
        return spec

    @classmethod
    def from_json(cls, text: str) -> QuerySpecification:
        """Parse a JSON document and build a specification from it."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(
                f"Invalid JSON: {exc}",
                path="<root>",
            ) from exc
        return cls.from_dict(data)
