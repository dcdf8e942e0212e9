"""
Shared pydantic plumbing for the specification models.

Field validators raise :class:`PydanticCustomError` so pydantic records
where in the input the failure happened; the public entry points turn the
first recorded error into our own :class:`ValidationError` with a rendered
path::

    Condition(field="a..b", operator="EQ")
    # → ValidationError(path="<root>.field")

    parse_filter({"kind": "group", "combinator": "AND",
                  "children": [{"kind": "condition", "field": "a..b", ...}]})
    # → ValidationError(path="<root>.children[0].field")
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from .exceptions import ValidationError
from .utils import format_loc, split_path

# Discriminator values pydantic adds to union locations
_KIND_TAGS: frozenset[str] = frozenset({"condition", "group"})


def validation_error_from(exc: PydanticValidationError) -> ValidationError:
    """Convert the first pydantic error into a :class:`ValidationError`."""
    first = exc.errors()[0]
    return ValidationError(
        first["msg"],
        path=format_loc(tuple(first["loc"]), skip=_KIND_TAGS),
    )


def custom_error(exc: ValidationError) -> PydanticCustomError:
    """Re-raise one of our errors inside a validator, keeping its message."""
    return PydanticCustomError("query_validation", "{reason}", {"reason": exc.message})


def check_path(value: str) -> str:
    """Field validator body for dot-path fields."""
    try:
        split_path(value)
    except ValidationError as exc:
        raise custom_error(exc) from exc
    return value


class FrozenModel(BaseModel):
    """
    Immutable model whose constructor raises :class:`ValidationError`.

    ``model_validate`` and ``TypeAdapter`` bypass ``__init__``; callers of
    those convert with :func:`validation_error_from` themselves.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise validation_error_from(exc) from exc
