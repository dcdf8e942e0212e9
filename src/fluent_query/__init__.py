"""Backend-agnostic query specifications compiled to backend clauses."""

from .ast import Condition, ConditionGroup, FilterNode, SortOrder, parse_filter
from .exceptions import (
    InvalidOperandError,
    QueryError,
    UnsupportedOperatorError,
    ValidationError,
)
from .operators import ConditionOperator, LogicalOperator, SortDirection
from .pagination import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, Pagination
from .prisma import CollisionPolicy, PrismaQueryClauses, PrismaTranslator, translate
from .specification import QuerySpecification

__all__ = [
    # Core types
    "ConditionOperator",
    "LogicalOperator",
    "SortDirection",
    "Condition",
    "ConditionGroup",
    "FilterNode",
    "SortOrder",
    "Pagination",
    "QuerySpecification",
    "parse_filter",
    # Pagination defaults
    "DEFAULT_PAGE",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    # Prisma translation
    "CollisionPolicy",
    "PrismaQueryClauses",
    "PrismaTranslator",
    "translate",
    # Exceptions
    "QueryError",
    "ValidationError",
    "InvalidOperandError",
    "UnsupportedOperatorError",
]
