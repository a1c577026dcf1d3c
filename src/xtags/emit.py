"""Code emitter: render directive text for component and slot tags."""

from __future__ import annotations

import re

from xtags.attributes import Attributes
from xtags.dialect import BLADE, Dialect
from xtags.resolver import RawView, ResolvedTarget, TypedComponent

END_COMPONENT = "@endComponentClass##END-COMPONENT-CLASS##"

# PHP is_numeric(): optional surrounding whitespace, sign, decimal or exponent form
_NUMERIC = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")


def is_numeric(value: str) -> bool:
    """Return True if value is a numeric literal."""
    return _NUMERIC.fullmatch(value) is not None


class Emitter:
    """Render the directive form of one tag at a time."""

    def __init__(self, dialect: Dialect = BLADE) -> None:
        self.dialect = dialect

    def attributes_to_string(self, attributes: Attributes, *, escape_bound: bool = True) -> str:
        """Render ``'name' => value`` pairs.

        Bound values are wrapped in the sanitizer unless they are ``true`` or
        numeric; literal values are already safely quoted.
        """
        parts = []
        for name, attr in attributes.items():
            value = attr.value
            if escape_bound and attr.bound and value != "true" and not is_numeric(value):
                value = f"{self.dialect.sanitizer}({value})"
            parts.append(f"'{name}' => {value}")
        return ",".join(parts)

    def component_open(
        self,
        tag_name: str,
        target: ResolvedTarget,
        data: Attributes,
        attributes: Attributes,
    ) -> str:
        d = self.dialect
        if isinstance(target, TypedComponent):
            component_type = target.name
            parameters = self.attributes_to_string(data, escape_bound=False)
        else:
            component_type = d.anonymous_component
            if isinstance(target, RawView):
                view = (
                    f"$__env->getContainer()->make({d.view_factory}::class)"
                    f"->make('{target.name}')"
                )
            else:
                view = f"'{target.name}'"
            data_string = self.attributes_to_string(data, escape_bound=False)
            parameters = f"'view' => {view},'data' => [{data_string}]"

        escape = component_type != d.dynamic_component
        attribute_string = self.attributes_to_string(attributes, escape_bound=escape)

        return (
            f"##BEGIN-COMPONENT-CLASS##@component('{component_type}', '{tag_name}', [{parameters}])\n"
            f"<?php if (isset($attributes) && $attributes instanceof {d.attribute_bag_type}"
            f" && $constructor = (new ReflectionClass({component_type}::class))->getConstructor()): ?>\n"
            "<?php $attributes = $attributes->except("
            "collect($constructor->getParameters())->map->getName()->all()); ?>\n"
            "<?php endif; ?>\n"
            f"<?php $component->withAttributes([{attribute_string}]); ?>"
        )

    def self_closing(
        self,
        tag_name: str,
        target: ResolvedTarget,
        data: Attributes,
        attributes: Attributes,
    ) -> str:
        return self.component_open(tag_name, target, data, attributes) + "\n" + END_COMPONENT

    def component_close(self) -> str:
        return " " + END_COMPONENT

    def slot_open(self, name: str, attributes: Attributes) -> str:
        return f" @slot({name}, null, [{self.attributes_to_string(attributes)}]) "

    def slot_close(self) -> str:
        return " @endslot"
