"""Tag scanner: splits template source into text segments and component/slot tags."""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass

from xtags.attributes import strip_quotes
from xtags.rewrite import match_balanced
from xtags.tokens import (
    Position,
    Segment,
    Span,
    TagKind,
    TagMatch,
    Text,
    is_attr_name_char,
    is_tag_name_char,
    is_word_char,
)

_INLINE_SLOT_NAME = re.compile(r"\w+(?:-\w+)*")

# Characters a bare (unquoted) attribute value may not contain
_BARE_STOP = frozenset("'\"=<>")


@dataclass(frozen=True, slots=True)
class _AttrToken:
    """One attribute inside a tag, as offsets into the source."""

    start: int
    end: int
    name: str
    value: str | None


class Scanner:
    """Scan template source left to right into Text and TagMatch segments.

    Anything that looks like the start of a tag but does not match the tag
    grammar is left in the surrounding text unchanged.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._line_starts = [0]
        for i, ch in enumerate(source):
            if ch == "\n":
                self._line_starts.append(i + 1)

    def scan(self) -> list[Segment]:
        """Scan the full source and return the segment list."""
        src = self._source
        segments: list[Segment] = []
        text_start = 0
        pos = 0

        while True:
            idx = src.find("<", pos)
            if idx == -1:
                break
            tag = self._match_tag(idx)
            if tag is None:
                pos = idx + 1
                continue
            if idx > text_start:
                segments.append(Text(src[text_start:idx], self._span(text_start, idx)))
            segments.append(tag)
            pos = text_start = tag.span.end.offset

        if text_start < len(src):
            segments.append(Text(src[text_start:], self._span(text_start, len(src))))
        return segments

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _position(self, offset: int) -> Position:
        line_idx = bisect.bisect_right(self._line_starts, offset) - 1
        return Position(line_idx + 1, offset - self._line_starts[line_idx] + 1, offset)

    def _span(self, start: int, end: int) -> Span:
        return Span(self._position(start), self._position(end))

    def _peek(self, i: int) -> str:
        if i < len(self._source):
            return self._source[i]
        return ""

    def _skip_ws(self, i: int) -> int:
        while i < len(self._source) and self._source[i].isspace():
            i += 1
        return i

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    def _match_tag(self, start: int) -> TagMatch | None:
        i = start + 1
        closing = self._peek(i) == "/"
        if closing:
            i += 1
        i = self._skip_ws(i)

        if self._peek(i) != "x" or self._peek(i + 1) not in ("-", ":"):
            return None
        i += 2

        name_start = i
        while i < len(self._source) and is_tag_name_char(self._source[i]):
            i += 1
        name = self._source[name_start:i]
        if not name:
            return None

        if closing:
            return self._match_closing(start, i, name)
        return self._match_opening(start, i, name)

    def _match_closing(self, start: int, i: int, name: str) -> TagMatch | None:
        if name == "slot" or name.startswith("slot:"):
            end = self._source.find(">", i)
            if end == -1:
                return None
            return self._tag(TagKind.SLOT_CLOSING, "slot", "", start, end + 1)

        i = self._skip_ws(i)
        if self._peek(i) != ">":
            return None
        return self._tag(TagKind.CLOSING, name, "", start, i + 1)

    def _match_opening(self, start: int, i: int, name: str) -> TagMatch | None:
        inline_name: str | None = None
        is_slot = name == "slot"
        if name.startswith("slot:") and _INLINE_SLOT_NAME.fullmatch(name[5:]):
            is_slot = True
            inline_name = name[5:]

        attrs_start = i
        tokens: list[_AttrToken] = []
        while True:
            j = self._skip_ws(i)
            if j == i:
                break
            token = self._scan_attribute(j)
            if token is None:
                break
            tokens.append(token)
            i = token.end
        attrs_end = self._skip_ws(i)

        if self._source.startswith("/>", attrs_end):
            # A self-closing slot is not part of the slot grammar; it compiles as a component.
            attributes = self._source[attrs_start:attrs_end]
            return self._tag(TagKind.SELF_CLOSING, name, attributes, start, attrs_end + 2)

        if self._peek(attrs_end) != ">" or self._source[attrs_end - 1] in "/=-":
            return None

        if not is_slot:
            attributes = self._source[attrs_start:attrs_end]
            return self._tag(TagKind.OPENING, name, attributes, start, attrs_end + 1)

        return self._slot_tag(start, attrs_start, attrs_end, inline_name, tokens)

    def _slot_tag(
        self,
        start: int,
        attrs_start: int,
        attrs_end: int,
        inline_name: str | None,
        tokens: list[_AttrToken],
    ) -> TagMatch:
        src = self._source
        slot_name = inline_name
        bound = False
        attributes = src[attrs_start:attrs_end]

        # An inline name only swallows a name attribute placed right after it.
        candidates = tokens[:1] if inline_name is not None else tokens
        for token in candidates:
            found = self._split_slot_name(token)
            if found is None:
                continue
            value, end = found
            if inline_name is None:
                slot_name = value
                bound = token.name == ":name"
            attributes = src[attrs_start : token.start] + src[end:attrs_end]
            break

        span = self._span(start, attrs_end + 1)
        return TagMatch(
            kind=TagKind.SLOT_OPENING,
            name="slot",
            attributes=attributes,
            raw=src[start : attrs_end + 1],
            span=span,
            slot_name=slot_name,
            slot_name_bound=bound,
            slot_name_inline=inline_name is not None,
        )

    def _split_slot_name(self, token: _AttrToken) -> tuple[str, int] | None:
        """Return ``(slot name, end offset)`` for a ``name=``/``:name=`` token.

        A quoted name must be non-empty. A bare name stops at the first
        whitespace, leaving the rest of the token to the slot's attributes.
        """
        if token.name not in ("name", ":name") or token.value is None:
            return None
        value = token.value
        if value[:1] in ("'", '"'):
            if len(value) < 3:
                return None
            return strip_quotes(value), token.end

        start = token.end - len(value)
        end = start
        while end < token.end and not self._source[end].isspace():
            end += 1
        if end == start:
            return None
        return self._source[start:end], end

    def _tag(self, kind: TagKind, name: str, attributes: str, start: int, end: int) -> TagMatch:
        return TagMatch(kind, name, attributes, self._source[start:end], self._span(start, end))

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def _scan_attribute(self, i: int) -> _AttrToken | None:
        src = self._source

        for directive in ("@class(", "@style("):
            if src.startswith(directive, i):
                end = match_balanced(src, i + len(directive) - 1)
                if end is None:
                    return None
                return _AttrToken(i, end, directive[:-1], None)

        if src.startswith("{{", i):
            return self._scan_attribute_bag(i)

        if src.startswith(":$", i) and is_word_char(self._peek(i + 2)):
            j = i + 2
            while j < len(src) and is_word_char(src[j]):
                j += 1
            return _AttrToken(i, j, src[i + 1 : j], None)

        j = i
        while j < len(src) and is_attr_name_char(src[j]):
            j += 1
        if j == i:
            return None
        name = src[i:j]

        if self._peek(j) != "=":
            return _AttrToken(i, j, name, None)

        value_end = self._scan_value(j + 1)
        if value_end is None:
            return _AttrToken(i, j, name, None)
        return _AttrToken(i, value_end, name, src[j + 1 : value_end])

    def _scan_attribute_bag(self, i: int) -> _AttrToken | None:
        src = self._source
        j = self._skip_ws(i + 2)
        if not src.startswith("$attributes", j):
            return None
        close = src.find("}", j)
        if close == -1 or not src.startswith("}}", close):
            return None
        return _AttrToken(i, close + 2, "attributes", None)

    def _scan_value(self, i: int) -> int | None:
        """Return the end offset of the attribute value starting at *i*."""
        src = self._source
        quote = self._peek(i)
        if quote in ("'", '"'):
            close = src.find(quote, i + 1)
            if close == -1:
                return None
            return close + 1

        j = i
        while j < len(src) and src[j] not in _BARE_STOP:
            j += 1
        if j == i:
            return None

        # A bare value may run across whitespace; when it bumps into the next
        # attribute's "=" or quote, give the trailing word back.
        if self._peek(j) in ("=", "'", '"'):
            k = j
            while k > i and not src[k - 1].isspace():
                k -= 1
            if k > i:
                j = k
        while j > i and src[j - 1].isspace():
            j -= 1

        # Leave a trailing "/" for the self-closing "/>".
        if src[j - 1] == "/" and self._peek(self._skip_ws(j)) == ">" and j - 1 > i:
            j -= 1
            while j > i and src[j - 1].isspace():
                j -= 1
        return j


def scan(source: str) -> list[Segment]:
    """Convenience function: scan source text and return the segment list."""
    return Scanner(source).scan()
