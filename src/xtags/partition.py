"""Split parsed attributes into constructor data and pass-through attributes."""

from __future__ import annotations

from xtags.attributes import Attribute, Attributes
from xtags.resolver import ResolvedTarget, TypedComponent, camel


def partition_attributes(
    target: ResolvedTarget,
    attributes: Attributes,
    parameter_names: tuple[str, ...] | None = None,
) -> tuple[Attributes, Attributes]:
    """Return ``(data, attributes)`` for a resolved component.

    For a typed component, data holds the attributes whose camel-cased name is
    a constructor parameter and the rest pass through. A view-backed component
    has no constructor metadata, so every attribute lands in both partitions.
    Data keys are camel-cased; relative order is kept in both partitions.
    """
    if isinstance(target, TypedComponent):
        params = set(parameter_names or ())
        data: Attributes = {}
        rest: Attributes = {}
        for name, attr in attributes.items():
            if camel(name) in params:
                data[name] = attr
            else:
                rest[name] = attr
    else:
        data = dict(attributes)
        rest = dict(attributes)

    return _camel_keys(data), rest


def _camel_keys(attributes: Attributes) -> Attributes:
    result: Attributes = {}
    for name, attr in attributes.items():
        key = camel(name)
        result[key] = Attribute(key, attr.value, attr.kind)
    return result
