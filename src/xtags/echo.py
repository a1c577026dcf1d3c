"""Embedded-expression (echo) compilation for literal attribute values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Literal:
    """Template text copied verbatim into a quoted string."""

    value: str


@dataclass(frozen=True, slots=True)
class Code:
    """Generated host-language expression whose value is concatenated in."""

    value: str


EchoSegment = Literal | Code


class EchoCompiler(Protocol):
    """Turns inline echo expressions in a literal value into segments."""

    def compile_echos(self, value: str) -> list[EchoSegment]: ...


# Raw echoes are matched before escaped ones so "{!!" is never read as "{{".
_ECHO = re.compile(
    r"(?P<at>@)?(?:\{!!\s*(?P<raw>.+?)\s*!!\}|\{\{\s*(?P<escaped>.+?)\s*\}\})",
    re.DOTALL,
)


class BladeEchoCompiler:
    """Blade echo syntax: ``{{ expr }}`` escaped, ``{!! expr !!}`` raw, ``@{{ }}`` verbatim."""

    def __init__(self, escape_function: str = "e") -> None:
        self.escape_function = escape_function

    def compile_echos(self, value: str) -> list[EchoSegment]:
        segments: list[EchoSegment] = []
        pos = 0
        for m in _ECHO.finditer(value):
            if m.start() > pos:
                _append_literal(segments, value[pos : m.start()])
            if m.group("at"):
                _append_literal(segments, m.group(0)[1:])
            elif m.group("raw") is not None:
                segments.append(Code(m.group("raw")))
            else:
                segments.append(Code(f"{self.escape_function}({m.group('escaped')})"))
            pos = m.end()
        if pos < len(value):
            _append_literal(segments, value[pos:])
        return segments


def _append_literal(segments: list[EchoSegment], text: str) -> None:
    if segments and isinstance(segments[-1], Literal):
        segments[-1] = Literal(segments[-1].value + text)
    else:
        segments.append(Literal(text))


def render_concatenation(segments: list[EchoSegment]) -> str:
    """Render segments as the body of a single-quoted concatenation.

    Literal segments have their single quotes escaped; code segments are
    spliced in as ``'.expr.'`` and never escaped. The caller wraps the result
    in single quotes.
    """
    parts: list[str] = []
    for seg in segments:
        if isinstance(seg, Literal):
            parts.append(seg.value.replace("'", "\\'"))
        else:
            parts.append(f"'.{seg.value}.'")
    return "".join(parts)
