#!/usr/bin/env python3
"""
depcat CLI

Resolves @import and @depend dependencies between stylesheets and scripts,
and concatenates them into a single file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from assets.concat import bundle
from assets.resource import KINDS, Resource, Stylesheet, kind_for
from exporters import to_ascii, to_json
from loader.errors import DepcatError, InvalidInputError
from loader.resource_loader import ResourceLoader
from loader.settings import Settings, load_settings
from loader.sources import FileSource, TextSource
from scanner.builder import build_graph
from scanner.resolver import DependencyResolver


log = logging.getLogger("depcat")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="depcat",
        description="CSS and JavaScript dependency resolution and file concatenation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  depcat cat main.css                      # Flatten main.css and its imports to stdout
  depcat cat app.js -o bundle.js           # Write the flattened script to a file
  depcat cat a.css b.css --strip-directives
  cat main.css | depcat cat -t css         # Read from stdin
  depcat deps main.css                     # Dependency tree
  depcat deps app.js -f json --direct      # Direct dependencies as JSON
        """,
    )

    # Logging options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Be more informative",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log debug information",
    )

    parser.add_argument(
        "--silent",
        action="store_true",
        help="Only log errors",
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="Settings file, YAML or TOML (default: .depcat.yml or pyproject.toml [tool.depcat])",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    cat = commands.add_parser(
        "cat",
        help="Resolve dependencies and concatenate files",
        description="Resolve dependencies and concatenate files",
    )
    cat.add_argument(
        "files",
        nargs="*",
        help="Input files (default: read stdin)",
    )
    cat.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="File to write concatenated contents to (default: stdout)",
    )
    _add_type_argument(cat)
    cat.add_argument(
        "--strip-directives",
        action="store_true",
        default=None,
        help="Remove @import/@depend directives from the output",
    )
    cat.add_argument(
        "--direct",
        action="store_true",
        help="Only include direct dependencies",
    )

    deps = commands.add_parser(
        "deps",
        help="Show the dependencies of a file",
        description="Show the dependencies of a file",
    )
    deps.add_argument(
        "file",
        help="Input file",
    )
    _add_type_argument(deps)
    deps.add_argument(
        "-f", "--format",
        choices=["tree", "json"],
        default="tree",
        help="Output format (default: tree)",
    )
    deps.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="Tree style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )
    deps.add_argument(
        "--direct",
        action="store_true",
        help="Only show direct dependencies",
    )
    deps.add_argument(
        "--relative-to",
        type=str,
        default=None,
        help="Base path for relative path display (default: current directory)",
    )

    return parser.parse_args(args)


def _add_type_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-t", "--type",
        choices=sorted(KINDS),
        default=None,
        help="Resource type. Not necessary to specify when using files",
    )


def configure_logging(parsed, settings: Settings) -> int:
    """Set the depcat log level from command line flags, falling back to settings."""
    if parsed.silent:
        level = logging.ERROR
    elif parsed.debug:
        level = logging.DEBUG
    elif parsed.verbose:
        level = logging.INFO
    elif settings.log_level:
        level = logging.getLevelName(settings.log_level)
        if not isinstance(level, int):
            level = logging.WARNING
    else:
        level = logging.WARNING

    logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    log.setLevel(level)
    return level


def _input_resources(
    files: List[str],
    type_name: Optional[str],
    loader: ResourceLoader,
    resolver: DependencyResolver,
) -> List[Resource]:
    """Wrap command line inputs, or stdin when there are none, in resources."""
    if type_name:
        kind = kind_for(type_name)
    elif files:
        kind = kind_for(files[0])
    else:
        kind = Stylesheet

    if not files:
        return [kind(TextSource(sys.stdin.read()), loader=loader, resolver=resolver)]

    resources = []
    for name in files:
        path = Path(name)
        if not path.is_file():
            raise InvalidInputError(f"Input file {name} does not exist", context={"file": name})
        resources.append(kind(FileSource(path, name), loader=loader, resolver=resolver))
    return resources


def run_cat(parsed, settings: Settings, loader: ResourceLoader, resolver: DependencyResolver) -> int:
    """Concatenate the inputs and their dependencies."""
    inputs = _input_resources(parsed.files, parsed.type, loader, resolver)
    strip = settings.strip_directives if parsed.strip_directives is None else parsed.strip_directives

    output = bundle(inputs, recursive=not parsed.direct, strip_directives=strip)
    log.info("Concatenated %d input(s)", len(inputs))

    if parsed.output:
        try:
            with open(parsed.output, "w", encoding="utf-8", newline="") as handle:
                handle.write(output)
        except OSError as e:
            raise InvalidInputError(f"Invalid output, {parsed.output}: {e}") from e
        log.info("Output written to: %s", parsed.output)
    else:
        sys.stdout.write(output)

    return 0


def run_deps(parsed, settings: Settings, loader: ResourceLoader, resolver: DependencyResolver) -> int:
    """Print the dependency graph of one input."""
    resource = _input_resources([parsed.file], parsed.type, loader, resolver)[0]
    graph = build_graph(resource, recursive=not parsed.direct)
    base = Path(parsed.relative_to).resolve() if parsed.relative_to else Path.cwd()

    if parsed.format == "json":
        output = to_json(graph, base=base)
    else:
        output = to_ascii(graph, base=base, style=parsed.ascii_style)

    print(output)
    return 0


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    try:
        settings = load_settings(Path(parsed.config) if parsed.config else None)
    except DepcatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging(parsed, settings)

    loader = ResourceLoader.from_settings(settings)
    resolver = DependencyResolver(log)

    try:
        if parsed.command == "cat":
            return run_cat(parsed, settings, loader, resolver)
        return run_deps(parsed, settings, loader, resolver)
    except (DepcatError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
