"""Attribute grammar rewriter: expand shorthand attribute forms to canonical syntax.

The passes run in a fixed order and each one assumes the previous ones have
already run:

1. ``:$name``                    -> ``:name="$name"``
2. ``{{ $attributes... }}``      -> ``:attributes="$attributes..."``
3. ``@class(...)``/``@style(...)`` -> ``:class="<helper>(...)"``
4. ``:name=``                    -> ``bind:name=``

Every pass is a pure ``str -> str`` function over a single tag's attribute
text and leaves already-canonical text unchanged.
"""

from __future__ import annotations

import re

from xtags.dialect import BLADE, Dialect

_SHORT_BINDING = re.compile(r"\s:\$(\w+)")

_ATTRIBUTE_BAG = re.compile(
    r"""
    (?:^|\s+)                                       # start of text or whitespace between attributes
    \{\{\s*(\$attributes(?:[^}]+?(?<!\s))?)\s*\}\}  # the attribute bag being echoed, nothing else
    """,
    re.VERBOSE,
)

_BIND = re.compile(
    r"""
    (?:^|\s+)      # start of text or whitespace between attributes
    :(?!:)         # a single leading colon
    ([\w\-:.@]+)   # the attribute name
    =              # only attributes that carry a value
    """,
    re.VERBOSE | re.MULTILINE,
)


def match_balanced(text: str, start: int) -> int | None:
    """Return the index just past the ``)`` that closes the ``(`` at *start*.

    Quoted regions are opaque, so parentheses inside ``'...'`` or ``"..."``
    do not count. Returns None when the parenthesis is never closed.
    """
    depth = 0
    quote = ""
    i = start
    n = len(text)
    while i < n:
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = ""
        elif ch in "'\"":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


def expand_short_bindings(text: str) -> str:
    """Expand ``:$name`` into ``:name="$name"``."""
    return _SHORT_BINDING.sub(lambda m: f' :{m.group(1)}="${m.group(1)}"', text)


def expand_attribute_bag(text: str) -> str:
    """Expand a standalone ``{{ $attributes... }}`` echo into a bound attribute."""
    return _ATTRIBUTE_BAG.sub(lambda m: f' :attributes="{m.group(1)}"', text)


def _expand_helper(text: str, directive: str, attribute: str, helper: str) -> str:
    marker = f"@{directive}("
    out: list[str] = []
    pos = 0
    while True:
        idx = text.find(marker, pos)
        if idx == -1:
            break
        open_idx = idx + len(marker) - 1
        end = match_balanced(text, open_idx)
        if end is None:
            break
        args = text[open_idx:end].replace('"', "'")
        out.append(text[pos:idx])
        out.append(f':{attribute}="{helper}{args}"')
        pos = end
    out.append(text[pos:])
    return "".join(out)


def expand_class_helpers(text: str, dialect: Dialect = BLADE) -> str:
    """Expand ``@class(...)`` into a bound ``class`` attribute."""
    return _expand_helper(text, "class", "class", dialect.css_classes_helper)


def expand_style_helpers(text: str, dialect: Dialect = BLADE) -> str:
    """Expand ``@style(...)`` into a bound ``style`` attribute."""
    return _expand_helper(text, "style", "style", dialect.css_styles_helper)


def normalize_bindings(text: str) -> str:
    """Rewrite ``:name=value`` into ``bind:name=value``; ``::name`` is left alone."""
    return _BIND.sub(lambda m: f" bind:{m.group(1)}=", text)


def rewrite_attributes(text: str, dialect: Dialect = BLADE) -> str:
    """Run every rewrite pass over *text* in order."""
    text = expand_short_bindings(text)
    text = expand_attribute_bag(text)
    text = expand_class_helpers(text, dialect)
    text = expand_style_helpers(text, dialect)
    return normalize_bindings(text)
