"""Command-line interface for xtags."""

from __future__ import annotations

import argparse
import logging
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from xtags.errors import ConfigError, ResolutionError

if TYPE_CHECKING:
    from xtags.compiler import ComponentTagCompiler

CONFIG_NAME = "xtags.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    aliases: dict[str, str]
    namespaces: dict[str, str]
    anonymous_paths: list[tuple[Path, str | None]]
    anonymous_namespaces: dict[str, str]
    view_paths: list[Path]
    view_names: list[str]
    types: dict[str, tuple[str, ...] | None]
    app_namespace: str = "App\\"
    watch: bool = False
    debug: bool = False
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="xtags",
        description="Compile <x-...> component tags into Blade directives",
    )
    p.add_argument("input", help="Input template file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--alias",
        action="append",
        default=[],
        metavar="NAME=TARGET",
        help="Component alias (repeatable)",
    )
    p.add_argument(
        "--namespace",
        action="append",
        default=[],
        metavar="PREFIX=NAMESPACE",
        help="Component type namespace for PREFIX:: tags (repeatable)",
    )
    p.add_argument(
        "--view-path",
        action="append",
        default=[],
        metavar="DIR",
        help="View search directory (repeatable)",
    )
    p.add_argument(
        "--anonymous-path",
        action="append",
        default=[],
        metavar="DIR[=PREFIX]",
        help="Anonymous component directory, optionally under a tag prefix (repeatable)",
    )
    p.add_argument("--app-namespace", default=None, metavar="NS", help="Application namespace")
    p.add_argument("--watch", action="store_true", help="Watch for changes and recompile")
    p.add_argument("--debug", action="store_true", help="Dump scanned segments to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Log resolution details")
    return p


def parse_pair_arg(s: str, what: str = "pair") -> tuple[str, str]:
    """Parse a NAME=VALUE string into (name, value)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid {what} format (expected NAME=VALUE): {s}")
    name, _, value = s.partition("=")
    return name, value


def parse_anonymous_path_arg(s: str) -> tuple[str, str | None]:
    """Parse DIR or DIR=PREFIX."""
    path, _, prefix = s.partition("=")
    return path, prefix or None


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{path}: {exc}") from None


def _str_table(config: dict[str, Any], key: str) -> dict[str, str]:
    table = config.get(key)
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise ConfigError(f"[{key}] must be a table")
    return {str(k): str(v) for k, v in table.items()}


def _types_table(config: dict[str, Any]) -> dict[str, tuple[str, ...] | None]:
    table = config.get("types")
    if table is None:
        return {}
    if not isinstance(table, dict):
        raise ConfigError("[types] must be a table")
    types: dict[str, tuple[str, ...] | None] = {}
    for name, params in table.items():
        # false marks a type without a constructor
        if params is False:
            types[str(name)] = None
        elif isinstance(params, list) and all(isinstance(p, str) for p in params):
            types[str(name)] = tuple(params)
        else:
            raise ConfigError(f"types.{name} must be a list of parameter names or false")
    return types


def _anonymous_paths(config: dict[str, Any]) -> list[tuple[str, str | None]]:
    anonymous = config.get("anonymous")
    if not isinstance(anonymous, dict):
        return []
    paths: list[tuple[str, str | None]] = []
    for entry in anonymous.get("paths", []):
        if isinstance(entry, str):
            paths.append((entry, None))
        elif isinstance(entry, dict) and "path" in entry:
            prefix = entry.get("prefix")
            paths.append((str(entry["path"]), str(prefix) if prefix else None))
        else:
            raise ConfigError(f"invalid anonymous path entry: {entry!r}")
    return paths


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags. Relative paths are taken relative to
    the input file's directory.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    aliases = _str_table(config, "aliases")
    for raw in args.alias:
        name, target = parse_pair_arg(raw, "alias")
        aliases[name] = target

    namespaces = _str_table(config, "namespaces")
    for raw in args.namespace:
        prefix, namespace = parse_pair_arg(raw, "namespace")
        namespaces[prefix] = namespace

    anonymous = config.get("anonymous")
    anonymous_namespaces: dict[str, str] = {}
    if isinstance(anonymous, dict):
        anonymous_namespaces = _str_table(anonymous, "namespaces")
    anonymous_paths = [(input_dir / p, prefix) for p, prefix in _anonymous_paths(config)]
    for raw in args.anonymous_path:
        p, prefix = parse_anonymous_path_arg(raw)
        anonymous_paths.append((input_dir / p, prefix))

    view_paths: list[Path] = []
    view_names: list[str] = []
    cfg_views = config.get("views")
    if isinstance(cfg_views, dict):
        cfg_view_paths = cfg_views.get("paths")
        if isinstance(cfg_view_paths, list):
            view_paths.extend(input_dir / str(p) for p in cfg_view_paths)
        cfg_view_names = cfg_views.get("names")
        if isinstance(cfg_view_names, list):
            view_names.extend(str(n) for n in cfg_view_names)
    view_paths.extend(input_dir / p for p in args.view_path)

    app_namespace = str(config.get("app_namespace", "App\\"))
    if args.app_namespace is not None:
        app_namespace = args.app_namespace

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        aliases=aliases,
        namespaces=namespaces,
        anonymous_paths=anonymous_paths,
        anonymous_namespaces=anonymous_namespaces,
        view_paths=view_paths,
        view_names=view_names,
        types=_types_table(config),
        app_namespace=app_namespace,
        watch=args.watch,
        debug=args.debug,
        verbose=args.verbose,
    )


def build_compiler(options: CliOptions) -> ComponentTagCompiler:
    """Create a ComponentTagCompiler wired to the configured registries."""
    from xtags.compiler import ComponentTagCompiler
    from xtags.finders import ChainViewFinder, FileViewFinder, StaticTypeFinder, StaticViewFinder
    from xtags.resolver import AnonymousPath, ComponentRegistry

    anonymous = tuple(AnonymousPath(str(p), prefix) for p, prefix in options.anonymous_paths)
    files = FileViewFinder(paths=list(options.view_paths))
    for entry in anonymous:
        files.add_namespace(entry.prefix_hash, Path(entry.path))

    registry = ComponentRegistry(
        aliases=dict(options.aliases),
        namespaces=dict(options.namespaces),
        anonymous_paths=anonymous,
        anonymous_namespaces=dict(options.anonymous_namespaces),
        app_namespace=options.app_namespace,
    )
    views = ChainViewFinder(StaticViewFinder(options.view_names), files)
    return ComponentTagCompiler(registry, StaticTypeFinder(options.types), views)


def compile_file(options: CliOptions) -> str:
    """Read a template and compile its component tags."""
    from xtags.debug import dump_segments

    source = options.input_file.read_text(encoding="utf-8")
    compiler = build_compiler(options)

    if options.debug:
        dump_segments(compiler.segments(source), file=sys.stderr)

    return compiler.compile(source)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recompile on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    output = compile_file(options)
                    _write_output(options, output)
                    print(f"Compiled {options.input_file}", file=sys.stderr)
                except ResolutionError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def _write_output(options: CliOptions, output: str) -> None:
    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)
        sys.stdout.flush()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr
        )

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, ConfigError) as exc:
        message = str(exc)
        if not message.startswith("error:"):
            message = f"error: {message}"
        print(message, file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        output = compile_file(options)
    except ResolutionError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1

    _write_output(options, output)
    return 0
