"""Error types with formatted source context."""

from __future__ import annotations

from xtags.tokens import Span


class XTagsError(Exception):
    """Base class for compile errors, with optional span and source context."""

    def __init__(self, message: str, span: Span | None = None, source: str = "") -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def at(self, span: Span, source: str) -> XTagsError:
        """Attach a source location and return self for re-raising."""
        self.span = span
        self.source = source
        self.args = (self.format(),)
        return self

    def format(self, filename: str = "input.blade.php") -> str:
        if self.span is None:
            return f"error: {self.message}"

        lines = self.source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class ResolutionError(XTagsError):
    """A component tag name could not be mapped to a type or view."""

    def __init__(self, message: str, component: str) -> None:
        self.component = component
        super().__init__(message)


class UnresolvedAliasError(ResolutionError):
    """A registered alias names neither an existing type nor an existing view."""

    def __init__(self, alias: str, component: str) -> None:
        self.alias = alias
        super().__init__(
            f"unable to locate class or view [{alias}] for component [{component}]",
            component,
        )


class UnresolvedComponentError(ResolutionError):
    """No resolution strategy matched the component tag name."""

    def __init__(self, component: str) -> None:
        super().__init__(f"unable to locate a class or view for component [{component}]", component)


class ConfigError(XTagsError):
    """Raised on malformed configuration values."""
