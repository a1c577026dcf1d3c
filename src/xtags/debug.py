"""--debug segment dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from xtags.tokens import Segment, TagKind, TagMatch, Text


def dump_segments(segments: list[Segment], *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable listing of scanned segments to *file*."""
    for seg in segments:
        loc = f"{seg.span.start.line}:{seg.span.start.column}"
        if isinstance(seg, Text):
            file.write(f"{loc} Text({seg.value!r})\n")
        elif isinstance(seg, TagMatch):
            _dump_tag(seg, loc, file)


def _dump_tag(tag: TagMatch, loc: str, f: TextIO) -> None:
    f.write(f"{loc} {tag.kind.name} {tag.name}")
    if tag.kind is TagKind.SLOT_OPENING:
        marker = ":" if tag.slot_name_bound else ""
        origin = "inline" if tag.slot_name_inline else "attribute"
        f.write(f" {marker}name={tag.slot_name!r} ({origin})")
    if tag.attributes.strip():
        f.write(f" attrs={tag.attributes.strip()!r}")
    f.write("\n")
