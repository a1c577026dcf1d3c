"""Component resolution: map a tag name to a component type or view."""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass, field

from xtags.dialect import BLADE, Dialect
from xtags.errors import UnresolvedAliasError, UnresolvedComponentError
from xtags.finders import TypeFinder, ViewFinder

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TypedComponent:
    """A component backed by a type with a constructor."""

    name: str


@dataclass(frozen=True, slots=True)
class ViewComponent:
    """An anonymous component backed only by a view."""

    name: str


@dataclass(frozen=True, slots=True)
class RawView:
    """A reserved-prefix view name used as-is (``mail::...``)."""

    name: str


ResolvedTarget = TypedComponent | ViewComponent | RawView


@dataclass(frozen=True, slots=True)
class AnonymousPath:
    """A directory of anonymous components, optionally under a tag prefix."""

    path: str
    prefix: str | None = None

    @property
    def prefix_hash(self) -> str:
        """View hint under which the directory's views are registered."""
        return hashlib.md5((self.prefix or self.path).encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class ComponentRegistry:
    """Read-only name tables consulted during resolution."""

    aliases: dict[str, str] = field(default_factory=dict)
    namespaces: dict[str, str] = field(default_factory=dict)
    anonymous_paths: tuple[AnonymousPath, ...] = ()
    anonymous_namespaces: dict[str, str] = field(default_factory=dict)
    app_namespace: str = "App\\"


# ---------------------------------------------------------------------------
# Name formatting
# ---------------------------------------------------------------------------

_STUDLY_SPLIT = re.compile(r"[-_\s]+")


def studly(value: str) -> str:
    """``foo-bar_baz`` -> ``FooBarBaz``."""
    return "".join(w[:1].upper() + w[1:] for w in _STUDLY_SPLIT.split(value))


def camel(value: str) -> str:
    """``foo-bar`` -> ``fooBar``."""
    s = studly(value)
    return s[:1].lower() + s[1:]


def format_class_name(component: str) -> str:
    """``forms.text-input`` -> ``Forms\\TextInput``."""
    return "\\".join(studly(piece) for piece in component.split("."))


def guess_view_name(name: str, prefix: str = "components.", delimiter: str = "::") -> str:
    """Place *name* under the *prefix* view directory, after any ``hint::``."""
    if not prefix.endswith("."):
        prefix += "."
    if delimiter in name:
        return name.replace(delimiter, delimiter + prefix, 1)
    return prefix + name


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class ComponentResolver:
    """Resolve tag names using aliases, namespaces, conventions and anonymous views.

    Strategies are tried in a fixed order and the first hit wins. A registered
    alias is authoritative: if it names neither a type nor a view, resolution
    fails rather than falling through to the other strategies.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        types: TypeFinder,
        views: ViewFinder,
        dialect: Dialect = BLADE,
    ) -> None:
        self.registry = registry
        self.types = types
        self.views = views
        self.dialect = dialect

    def resolve(self, component: str) -> ResolvedTarget:
        if component in self.registry.aliases:
            return self._resolve_alias(component)

        strategies = (
            ("namespace", self._find_by_namespace),
            ("convention", self._guess_class),
            ("anonymous path", self._guess_anonymous_by_path),
            ("anonymous namespace", self._guess_anonymous_by_namespace),
            ("raw view", self._raw_view),
        )
        for label, strategy in strategies:
            target = strategy(component)
            if target is not None:
                logger.debug("resolved <x-%s> to %r via %s", component, target, label)
                return target

        raise UnresolvedComponentError(component)

    def _resolve_alias(self, component: str) -> ResolvedTarget:
        alias = self.registry.aliases[component]
        if self.types.exists(alias):
            target: ResolvedTarget = TypedComponent(alias)
        elif self.views.exists(alias):
            target = ViewComponent(alias)
        else:
            raise UnresolvedAliasError(alias, component)
        logger.debug("resolved <x-%s> to %r via alias", component, target)
        return target

    def _find_by_namespace(self, component: str) -> TypedComponent | None:
        prefix, sep, rest = component.partition(self.dialect.hint_delimiter)
        if not sep or prefix not in self.registry.namespaces:
            return None
        # Only the segment right after the first delimiter names the class.
        rest = rest.split(self.dialect.hint_delimiter, 1)[0]
        name = self.registry.namespaces[prefix].rstrip("\\") + "\\" + format_class_name(rest)
        if self.types.exists(name):
            return TypedComponent(name)
        return None

    def _guess_class(self, component: str) -> TypedComponent | None:
        name = self.guess_class_name(component)
        if self.types.exists(name):
            return TypedComponent(name)
        return None

    def guess_class_name(self, component: str) -> str:
        """Conventional type name for *component* under the application namespace."""
        namespace = self.registry.app_namespace
        if namespace and not namespace.endswith("\\"):
            namespace += "\\"
        return f"{namespace}View\\Components\\{format_class_name(component)}"

    def _guess_anonymous_by_path(self, component: str) -> ViewComponent | None:
        delimiter = self.dialect.hint_delimiter
        for path in self.registry.anonymous_paths:
            prefixed = path.prefix is not None and component.startswith(path.prefix + delimiter)
            if delimiter in component and not prefixed:
                continue
            name = component.split(delimiter, 1)[1] if prefixed else component

            view = f"{path.prefix_hash}{delimiter}{name}"
            for candidate in (view, view + ".index"):
                if self.views.exists(candidate):
                    return ViewComponent(candidate)
        return None

    def _guess_anonymous_by_namespace(self, component: str) -> ViewComponent | None:
        delimiter = self.dialect.hint_delimiter
        candidates = [
            (component[len(prefix) + len(delimiter) :], directory)
            for prefix, directory in self.registry.anonymous_namespaces.items()
            if component.startswith(prefix + delimiter)
        ]
        candidates.append((component, self.dialect.components_directory))

        for name, directory in candidates:
            view = guess_view_name(name, directory, delimiter)
            for candidate in (view, view + ".index"):
                if self.views.exists(candidate):
                    return ViewComponent(candidate)
        return None

    def _raw_view(self, component: str) -> RawView | None:
        if component.startswith(self.dialect.raw_view_prefix):
            return RawView(component)
        return None
