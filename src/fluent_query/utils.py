"""Dot-path helpers shared by the specification models and the translators."""

from __future__ import annotations

from typing import Any

from .exceptions import ValidationError


def split_path(path: Any) -> list[str]:
    """
    Split a dot-separated field path into its segments.

    ``"author.profile.email"`` becomes ``["author", "profile", "email"]``.

    Raises:
        ValidationError: If *path* is not a non-empty string or contains
            an empty segment (``"a..b"``, ``".a"``, ``"a."``).
    """
    if not isinstance(path, str) or not path:
        raise ValidationError(
            f"Field path must be a non-empty string, got {path!r}",
            path=str(path),
        )
    parts = path.split(".")
    if any(not part for part in parts):
        raise ValidationError(
            f"Field path '{path}' contains an empty segment",
            path=path,
        )
    return parts


def nest_path(path: str, leaf: Any) -> dict[str, Any]:
    """
    Wrap *leaf* in one dict per path segment, outermost segment first.

    ``nest_path("a.b.c", x)`` returns ``{"a": {"b": {"c": x}}}``.
    """
    node: Any = leaf
    for part in reversed(split_path(path)):
        node = {part: node}
    return node


def format_loc(loc: tuple[int | str, ...], *, skip: frozenset[str] = frozenset()) -> str:
    """Render a pydantic error location as ``<root>.children[0].field``."""
    rendered = "<root>"
    for item in loc:
        if isinstance(item, int):
            rendered += f"[{item}]"
        elif item not in skip:
            rendered += f".{item}"
    return rendered
