"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from xtags.compiler import ComponentTagCompiler
from xtags.finders import StaticTypeFinder, StaticViewFinder
from xtags.resolver import ComponentRegistry
from xtags.tokens import Segment, TagKind, TagMatch, Text

SANITIZE = "\\Illuminate\\View\\Compilers\\BladeCompiler::sanitizeComponentAttribute"
END = "@endComponentClass##END-COMPONENT-CLASS##"


@pytest.fixture
def types() -> StaticTypeFinder:
    """An empty in-memory type table that tests can populate."""
    return StaticTypeFinder()


@pytest.fixture
def views() -> StaticViewFinder:
    """An empty in-memory view set that tests can populate."""
    return StaticViewFinder()


@pytest.fixture
def make_compiler(types, views):
    """Return a helper that builds a compiler over the shared fake finders."""

    def _make(**registry) -> ComponentTagCompiler:
        return ComponentTagCompiler(ComponentRegistry(**registry), types, views)

    return _make


def tags(segments: list[Segment]) -> list[TagMatch]:
    """Return only the tag segments."""
    return [s for s in segments if isinstance(s, TagMatch)]


def assert_kinds(segments: list[Segment], expected: list[TagKind | type]) -> None:
    """Assert segment kinds: TagKind for tags, Text for text."""
    actual = [s.kind if isinstance(s, TagMatch) else Text for s in segments]
    assert actual == expected, f"Expected {expected}, got {actual}"
