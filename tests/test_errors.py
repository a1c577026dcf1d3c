"""Tests for error formatting and resolution error messages."""

from __future__ import annotations

from xtags.errors import (
    ConfigError,
    ResolutionError,
    UnresolvedAliasError,
    UnresolvedComponentError,
    XTagsError,
)
from xtags.tokens import Position, Span


def _span(line: int, start_col: int, end_col: int, offset: int = 0) -> Span:
    return Span(
        Position(line, start_col, offset),
        Position(line, end_col, offset + end_col - start_col),
    )


class TestFormat:
    def test_without_location(self) -> None:
        err = XTagsError("something broke")
        assert err.format() == "error: something broke"
        assert str(err) == "error: something broke"

    def test_caret_under_span(self) -> None:
        source = "ab <x-foo> cd\n"
        err = XTagsError("bad tag", _span(1, 4, 11, 3), source)
        assert err.format("page.blade.php") == (
            "error: bad tag\n"
            "  --> page.blade.php:1:4\n"
            "  |\n"
            "1 | ab <x-foo> cd\n"
            "  |    ^^^^^^^"
        )

    def test_multiline_span_underlines_to_end_of_line(self) -> None:
        source = "<x-foo\n  a=1>"
        span = Span(Position(1, 1, 0), Position(2, 7, 13))
        err = XTagsError("bad tag", span, source)
        assert err.format().endswith("1 | <x-foo\n  | ^^^^^^")

    def test_wide_gutter(self) -> None:
        source = "\n" * 11 + "<x-a>"
        err = XTagsError("bad", _span(12, 1, 6, 11), source)
        lines = err.format().splitlines()
        assert lines[1] == "   --> input.blade.php:12:1"
        assert lines[3] == "12 | <x-a>"


class TestAt:
    def test_at_attaches_location(self) -> None:
        err = UnresolvedComponentError("foo")
        assert err.span is None
        returned = err.at(_span(1, 1, 9), "<x-foo/>")
        assert returned is err
        assert err.span is not None
        assert "--> input.blade.php:1:1" in str(err)


class TestMessages:
    def test_unresolved_component(self) -> None:
        err = UnresolvedComponentError("forms.input")
        assert err.message == "unable to locate a class or view for component [forms.input]"
        assert err.component == "forms.input"
        assert isinstance(err, ResolutionError)

    def test_unresolved_alias(self) -> None:
        err = UnresolvedAliasError("App\\Gone", "alert")
        assert err.message == "unable to locate class or view [App\\Gone] for component [alert]"
        assert err.alias == "App\\Gone"
        assert err.component == "alert"

    def test_config_error_is_not_resolution_error(self) -> None:
        err = ConfigError("[aliases] must be a table")
        assert not isinstance(err, ResolutionError)
        assert str(err) == "error: [aliases] must be a table"
