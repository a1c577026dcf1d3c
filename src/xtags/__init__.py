"""Component tag compiler for Blade-style templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xtags.finders import TypeFinder, ViewFinder
    from xtags.resolver import ComponentRegistry

__version__ = "0.1.0"


def compile(
    source: str,
    registry: ComponentRegistry | None = None,
    types: TypeFinder | None = None,
    views: ViewFinder | None = None,
) -> str:
    """Rewrite the component and slot tags in *source* into directive form."""
    from xtags.compiler import ComponentTagCompiler

    return ComponentTagCompiler(registry, types, views).compile(source)
