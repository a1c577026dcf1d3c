"""Scanner segment types, source positions, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TagKind(Enum):
    OPENING = auto()  # <x-name ...>
    SELF_CLOSING = auto()  # <x-name ... />
    CLOSING = auto()  # </x-name>
    SLOT_OPENING = auto()  # <x-slot:name ...> / <x-slot name="..." ...>
    SLOT_CLOSING = auto()  # </x-slot>


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Text:
    """Document text between tags, passed through unchanged."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class TagMatch:
    """A recognized component or slot tag.

    ``attributes`` is the raw attribute text of the tag. For slot tags the
    slot name (inline suffix or ``name=`` attribute) is lifted out into
    ``slot_name`` and removed from ``attributes``.
    """

    kind: TagKind
    name: str
    attributes: str
    raw: str
    span: Span
    slot_name: str | None = None
    slot_name_bound: bool = False
    slot_name_inline: bool = False


Segment = Text | TagMatch


# Attribute name special characters: - : . @
_ATTR_SPECIAL = frozenset("-:.@")

# Tag name special characters: - : .
_NAME_SPECIAL = frozenset("-:.")


def is_word_char(ch: str) -> bool:
    """Return True if ch matches a regex word character (\\w)."""
    return ch.isalnum() or ch == "_"


def is_attr_name_char(ch: str) -> bool:
    """Return True if ch may appear in an attribute name."""
    return is_word_char(ch) or ch in _ATTR_SPECIAL


def is_tag_name_char(ch: str) -> bool:
    """Return True if ch may appear in a component tag name."""
    return is_word_char(ch) or ch in _NAME_SPECIAL
