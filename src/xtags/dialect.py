"""Generated-code vocabulary for the downstream template engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Dialect:
    """Names the emitter and rewriter splice into generated code."""

    css_classes_helper: str
    css_styles_helper: str
    sanitizer: str
    attribute_bag_type: str
    anonymous_component: str
    dynamic_component: str
    view_factory: str
    components_directory: str = "components"
    raw_view_prefix: str = "mail::"
    hint_delimiter: str = "::"


BLADE = Dialect(
    css_classes_helper="\\Illuminate\\Support\\Arr::toCssClasses",
    css_styles_helper="\\Illuminate\\Support\\Arr::toCssStyles",
    sanitizer="\\Illuminate\\View\\Compilers\\BladeCompiler::sanitizeComponentAttribute",
    attribute_bag_type="Illuminate\\View\\ComponentAttributeBag",
    anonymous_component="Illuminate\\View\\AnonymousComponent",
    dynamic_component="Illuminate\\View\\DynamicComponent",
    view_factory="Illuminate\\View\\Factory",
)
