"""Shared fixtures for query specification tests."""

from __future__ import annotations

import pytest

from fluent_query import PrismaTranslator, QuerySpecification


@pytest.fixture
def spec() -> QuerySpecification:
    """Default, empty specification."""
    return QuerySpecification.create()


@pytest.fixture
def translator() -> PrismaTranslator:
    return PrismaTranslator()
