"""Type and view lookup capabilities used by the component resolver."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class TypeFinder(Protocol):
    """Answers whether a component type exists and what its constructor takes."""

    def exists(self, name: str) -> bool: ...

    def parameter_names(self, name: str) -> tuple[str, ...] | None:
        """Constructor parameter names, or None when the type has no constructor."""
        ...


class ViewFinder(Protocol):
    """Answers whether a named view exists."""

    def exists(self, name: str) -> bool: ...


class StaticTypeFinder:
    """In-memory type table: type name -> constructor parameter names (or None)."""

    def __init__(self, types: Mapping[str, Iterable[str] | None] | None = None) -> None:
        self._types: dict[str, tuple[str, ...] | None] = {}
        for name, params in (types or {}).items():
            self.add(name, params)

    def add(self, name: str, params: Iterable[str] | None = ()) -> None:
        self._types[name.lstrip("\\")] = tuple(params) if params is not None else None

    def exists(self, name: str) -> bool:
        return name.lstrip("\\") in self._types

    def parameter_names(self, name: str) -> tuple[str, ...] | None:
        return self._types.get(name.lstrip("\\"))


class StaticViewFinder:
    """In-memory set of view names."""

    def __init__(self, views: Iterable[str] = ()) -> None:
        self._views = set(views)

    def add(self, name: str) -> None:
        self._views.add(name)

    def exists(self, name: str) -> bool:
        return name in self._views


@dataclass
class FileViewFinder:
    """Discovers views on disk.

    ``a.b`` is looked up as ``<path>/a/b.<ext>`` across ``paths``;
    ``hint::a.b`` is looked up under the paths registered for ``hint``.
    """

    paths: list[Path] = field(default_factory=list)
    hints: dict[str, list[Path]] = field(default_factory=dict)
    extensions: tuple[str, ...] = ("blade.php", "php", "css", "html")
    delimiter: str = "::"
    _cache: dict[str, Path | None] = field(default_factory=dict, init=False)

    def add_namespace(self, hint: str, path: Path) -> None:
        self.hints.setdefault(hint, []).append(path)
        self._cache.clear()

    def exists(self, name: str) -> bool:
        return self.find(name) is not None

    def find(self, name: str) -> Path | None:
        """Look up a view file by name. Results are cached."""
        if name in self._cache:
            return self._cache[name]
        result = self._discover(name)
        logger.debug("view %s -> %s", name, result)
        self._cache[name] = result
        return result

    def _discover(self, name: str) -> Path | None:
        search = self.paths
        if self.delimiter in name:
            hint, _, name = name.partition(self.delimiter)
            search = self.hints.get(hint, [])
        if not name:
            return None

        relative = Path(*name.split("."))
        for d in search:
            for ext in self.extensions:
                candidate = d / relative.with_name(f"{relative.name}.{ext}")
                if candidate.is_file():
                    return candidate
        return None


class ChainViewFinder:
    """A view exists if any of the wrapped finders knows it."""

    def __init__(self, *finders: ViewFinder) -> None:
        self.finders = finders

    def exists(self, name: str) -> bool:
        return any(f.exists(name) for f in self.finders)
