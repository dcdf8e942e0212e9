"""Page-number pagination with construction-time bounds checking."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator
from pydantic_core import PydanticCustomError

from .base import FrozenModel

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 1000


def _require_int(value: Any, name: str) -> int:
    # bool is an int subclass but never a valid page or limit
    if isinstance(value, bool) or not isinstance(value, int):
        raise PydanticCustomError(
            "integer_required",
            "{name} must be an integer, got {type_name}",
            {"name": name.capitalize(), "type_name": type(value).__name__},
        )
    return value


class Pagination(FrozenModel):
    """
    Immutable page/limit pair.

    Bounds are checked once, when the value is built: ``page >= 1`` and
    ``1 <= limit <= MAX_LIMIT``.  Out-of-range input is rejected, never
    clamped.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @field_validator("page", mode="before")
    @classmethod
    def _check_page(cls, value: Any) -> int:
        page = _require_int(value, "page")
        if page < 1:
            raise PydanticCustomError("page_range", "Page must be >= 1")
        return page

    @field_validator("limit", mode="before")
    @classmethod
    def _check_limit(cls, value: Any) -> int:
        limit = _require_int(value, "limit")
        if limit < 1 or limit > MAX_LIMIT:
            raise PydanticCustomError(
                "limit_range",
                "Limit must be between 1 and {max_limit}",
                {"max_limit": MAX_LIMIT},
            )
        return limit

    @property
    def offset(self) -> int:
        """Number of rows to skip before this page."""
        return (self.page - 1) * self.limit

    def to_dict(self) -> dict[str, Any]:
        return {"page": self.page, "limit": self.limit}
