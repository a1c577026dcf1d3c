"""Attribute string parser: canonical attribute text to an ordered attribute collection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from xtags.echo import BladeEchoCompiler, EchoCompiler, render_concatenation
from xtags.tokens import is_attr_name_char


class AttributeKind(Enum):
    LITERAL = auto()  # name="text", value compiled to a quoted concatenation
    BOUND = auto()  # bind:name="expr", value is a raw expression
    SPREAD = auto()  # bind:attributes="$attributes...", an attribute-bag spread


@dataclass(frozen=True, slots=True)
class Attribute:
    """A parsed attribute with its generated-code value."""

    name: str
    value: str
    kind: AttributeKind

    @property
    def bound(self) -> bool:
        return self.kind is not AttributeKind.LITERAL


Attributes = dict[str, Attribute]


def strip_quotes(value: str) -> str:
    """Strip one pair of surrounding quotes from *value*."""
    if value[:1] in ("'", '"'):
        return value[1:-1]
    return value


class AttributeParser:
    """Tokenize canonical attribute text (see ``xtags.rewrite``) into Attributes."""

    def __init__(self, echo_compiler: EchoCompiler | None = None) -> None:
        self._echo = echo_compiler if echo_compiler is not None else BladeEchoCompiler()

    def parse(self, text: str) -> Attributes:
        result: Attributes = {}
        for name, value in _split(text):
            attr = self._classify(name, value)
            result[attr.name] = attr
        return result

    def _classify(self, name: str, value: str | None) -> Attribute:
        if value is None:
            value = "true"
            if not name.startswith("bind:"):
                name = "bind:" + name
        value = strip_quotes(value)

        if name.startswith("bind:"):
            name = name[5:]
            kind = AttributeKind.SPREAD if name == "attributes" else AttributeKind.BOUND
        else:
            value = "'" + render_concatenation(self._echo.compile_echos(value)) + "'"
            kind = AttributeKind.LITERAL

        if name.startswith("::"):
            name = name[1:]

        return Attribute(name, value, kind)


def _split(text: str) -> list[tuple[str, str | None]]:
    """Split attribute text into (name, raw value or None) pairs.

    Characters that cannot start an attribute name are skipped.
    """
    pairs: list[tuple[str, str | None]] = []
    i = 0
    n = len(text)
    while i < n:
        if not is_attr_name_char(text[i]):
            i += 1
            continue
        start = i
        while i < n and is_attr_name_char(text[i]):
            i += 1
        name = text[start:i]

        value: str | None = None
        if i < n and text[i] == "=":
            value_end = _value_end(text, i + 1)
            if value_end is not None:
                value = text[i + 1 : value_end]
                i = value_end
        pairs.append((name, value))
    return pairs


def _value_end(text: str, i: int) -> int | None:
    n = len(text)
    if i < n and text[i] in ("'", '"'):
        close = text.find(text[i], i + 1)
        # Quoted values must be non-empty; otherwise fall through to a bare value.
        if close > i + 1:
            return close + 1
    j = i
    while j < n and not text[j].isspace() and text[j] != ">":
        j += 1
    if j == i:
        return None
    return j


def parse_attributes(text: str, echo_compiler: EchoCompiler | None = None) -> Attributes:
    """Convenience function: parse canonical attribute text."""
    return AttributeParser(echo_compiler).parse(text)
