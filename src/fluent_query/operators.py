from enum import Enum


class ConditionOperator(str, Enum):
    """Comparison operators a single condition can apply to a field."""

    # Standard comparison
    EQ = "EQ"
    NE = "NE"
    GT = "GT"
    GTE = "GTE"
    LT = "LT"
    LTE = "LTE"

    # Set membership / ranges
    IN = "IN"
    NOT_IN = "NOT_IN"
    BETWEEN = "BETWEEN"

    # Pattern matching
    LIKE = "LIKE"
    ILIKE = "ILIKE"

    # Null checks
    IS_NULL = "IS_NULL"
    IS_NOT_NULL = "IS_NOT_NULL"


class LogicalOperator(str, Enum):
    """Combinators joining the children of a condition group."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"


class SortDirection(str, Enum):
    """Sort order of a field; translators emit the lower-case value."""

    ASC = "ASC"
    DESC = "DESC"
