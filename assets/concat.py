"""Flattening a resource and its dependencies into one text."""

import os
from typing import Iterable, List, Set

from loader.errors import InvalidInputError
from loader.sources import TextSource


def read(
    resource,
    inline_dependencies: bool = False,
    recursive: bool = False,
    strip_directives: bool = False,
) -> str:
    """
    Read the contents of a resource.

    Args:
        resource: The resource to read.
        inline_dependencies: If True, prepend the contents of every
                             dependency, in resolution order.
        recursive: If True, inline nested dependencies too.
        strip_directives: If True, remove dependency directives from the
                          text of every resource read.

    Returns:
        The concatenated text. Nothing is inserted between parts.
    """
    parts = []

    if inline_dependencies:
        for dependency in resource.dependencies(recursive=recursive):
            parts.append(read(dependency, strip_directives=strip_directives))

    content = resource.source.read()
    if strip_directives:
        content = _strip_directives(resource, content)
    parts.append(content)

    return "".join(parts)


def export(resource, sink, **options) -> None:
    """
    Write the contents of a resource to a file or stream.

    Strings and path objects are taken as file names; the file is created
    if it does not exist. To write into a string, pass an ``io.StringIO``.
    ``options`` are passed to ``read``.

    Raises:
        InvalidInputError: If the sink is not a file name or writable
                           stream, or the file cannot be written.
    """
    content = read(resource, **options)

    if isinstance(sink, (str, os.PathLike)):
        try:
            with open(sink, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
        except OSError as e:
            raise InvalidInputError(
                f"Invalid stream argument, {sink}: {e}",
                context={"sink": str(sink)},
            ) from e
        return

    write = getattr(sink, "write", None)
    if not callable(write):
        raise InvalidInputError(
            f"Invalid stream argument, {sink!r}: expected a file name or writable stream",
            context={"sink": repr(sink)},
        )
    write(content)


def concat(resource, **options):
    """
    Flatten a resource and all nested dependencies into a new resource of
    the same kind.
    """
    options.update(inline_dependencies=True, recursive=True)
    return resource.derive(TextSource(read(resource, **options)))


def bundle(resources: Iterable, recursive: bool = True, strip_directives: bool = False) -> str:
    """
    Flatten several resources into one text.

    Each resource is preceded by its dependencies; a dependency shared by
    several resources is included only once, at its first position.
    """
    seen: Set = set()
    parts: List[str] = []

    for resource in resources:
        for part in resource.resources(recursive=recursive):
            if part in seen:
                continue
            seen.add(part)
            parts.append(read(part, strip_directives=strip_directives))

    return "".join(parts)


def _strip_directives(resource, content: str) -> str:
    directive_lines = resource.resolver.directive_lines(resource)
    if not directive_lines:
        return content
    lines = content.splitlines(keepends=True)
    for index in directive_lines:
        lines[index] = resource.dialect.strip_directive(lines[index])
    return "".join(lines)
