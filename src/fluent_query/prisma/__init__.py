"""Prisma backend: compile query specifications to ``find_many`` arguments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .merge import CollisionPolicy, deep_merge, find_collisions
from .operators import Fragment, compile_operator
from .translator import PrismaQueryClauses, PrismaTranslator

if TYPE_CHECKING:
    from ..specification import QuerySpecification

_DEFAULT_TRANSLATOR = PrismaTranslator()


def translate(spec: QuerySpecification) -> PrismaQueryClauses:
    """Translate *spec* with the default (last-write-wins) translator."""
    return _DEFAULT_TRANSLATOR.translate(spec)


__all__ = [
    "CollisionPolicy",
    "Fragment",
    "PrismaQueryClauses",
    "PrismaTranslator",
    "compile_operator",
    "deep_merge",
    "find_collisions",
    "translate",
]
