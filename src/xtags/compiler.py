"""Compiler driver: scan a template once and dispatch each tag to its handler."""

from __future__ import annotations

import logging

from xtags.attributes import AttributeParser, Attributes
from xtags.dialect import BLADE, Dialect
from xtags.echo import EchoCompiler
from xtags.emit import Emitter
from xtags.errors import ResolutionError
from xtags.finders import StaticTypeFinder, StaticViewFinder, TypeFinder, ViewFinder
from xtags.partition import partition_attributes
from xtags.resolver import ComponentRegistry, ComponentResolver, TypedComponent, camel
from xtags.rewrite import rewrite_attributes
from xtags.scanner import scan
from xtags.tokens import Segment, TagKind, TagMatch, Text

logger = logging.getLogger(__name__)


class ComponentTagCompiler:
    """Rewrite ``<x-...>`` component and slot tags into directive form.

    Compilation is all-or-nothing: a tag that fails to resolve raises a
    ResolutionError carrying the tag's span, and no output is produced.
    """

    def __init__(
        self,
        registry: ComponentRegistry | None = None,
        types: TypeFinder | None = None,
        views: ViewFinder | None = None,
        *,
        echo_compiler: EchoCompiler | None = None,
        dialect: Dialect = BLADE,
    ) -> None:
        self.registry = registry if registry is not None else ComponentRegistry()
        self.types = types if types is not None else StaticTypeFinder()
        self.views = views if views is not None else StaticViewFinder()
        self.dialect = dialect
        self.resolver = ComponentResolver(self.registry, self.types, self.views, dialect)
        self.parser = AttributeParser(echo_compiler)
        self.emitter = Emitter(dialect)

    def segments(self, source: str) -> list[Segment]:
        """Scan *source* without compiling."""
        return scan(source)

    def compile(self, source: str) -> str:
        segments = scan(source)
        logger.debug("compiling %d segments", len(segments))
        out: list[str] = []
        for seg in segments:
            if isinstance(seg, Text):
                out.append(seg.value)
                continue
            try:
                out.append(self.compile_tag(seg))
            except ResolutionError as exc:
                raise exc.at(seg.span, source) from None
        return "".join(out)

    def compile_tag(self, tag: TagMatch) -> str:
        """Render the directive text for a single tag."""
        if tag.kind is TagKind.SLOT_OPENING:
            attributes = self.parse_attributes(tag.attributes)
            return self.emitter.slot_open(self.slot_name(tag), attributes)
        if tag.kind is TagKind.SLOT_CLOSING:
            return self.emitter.slot_close()
        if tag.kind is TagKind.CLOSING:
            return self.emitter.component_close()

        target = self.resolver.resolve(tag.name)
        params = None
        if isinstance(target, TypedComponent):
            params = self.types.parameter_names(target.name)
        data, attributes = partition_attributes(
            target, self.parse_attributes(tag.attributes), params
        )
        if tag.kind is TagKind.SELF_CLOSING:
            return self.emitter.self_closing(tag.name, target, data, attributes)
        return self.emitter.component_open(tag.name, target, data, attributes)

    def parse_attributes(self, text: str) -> Attributes:
        """Rewrite shorthand forms in *text* and parse the result."""
        return self.parser.parse(rewrite_attributes(text, self.dialect))

    def slot_name(self, tag: TagMatch) -> str:
        """Name expression for a slot tag: quoted literal, or raw when bound."""
        name = tag.slot_name or ""
        if tag.slot_name_bound:
            return name
        if "-" in name:
            name = camel(name)
        return f"'{name}'"
