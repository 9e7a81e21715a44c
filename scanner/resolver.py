"""Dependency resolution over scanned directives."""

import logging
import re
from typing import List, Optional, Set

from loader.errors import MalformedDirectiveError
from .dialects import ScanState


def _null_logger() -> logging.Logger:
    logger = logging.getLogger("depcat.null")
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


class _Frame:
    """A resource being scanned, with the position reached in its lines."""

    __slots__ = ("resource", "lines", "index", "state", "depth")

    def __init__(self, resource, depth: int):
        self.resource = resource
        self.lines = resource.source.lines()
        self.index = 0
        self.state = ScanState()
        self.depth = depth


class DependencyResolver:
    """
    Builds the ordered, de-duplicated dependency list of a resource.

    Traversal uses an explicit stack, so deep dependency chains do not grow
    the call stack. Each call owns its visited set; nothing is shared
    between calls.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.log = logger if logger is not None else _null_logger()

    def resolve(self, resource, recursive: bool = False) -> List:
        """
        List scanned dependencies followed by attached ones.

        Args:
            resource: The resource to resolve.
            recursive: If True, include nested dependencies, each one placed
                       before the resource that depends on it.

        Returns:
            Ordered list of resources.
        """
        return self.scan(resource, recursive) + list(resource.attached)

    def scan(self, resource, recursive: bool = False) -> List:
        """
        List the dependencies found by scanning the resource's content.

        Raises:
            MissingReferenceError: If a reference names no existing file.
        """
        visited: Set = {resource.source}
        result: List = []
        stack: List[_Frame] = [_Frame(resource, 0)]

        while stack:
            frame = stack[-1]
            reference = self._next_reference(frame)

            if reference is None:
                stack.pop()
                if stack:
                    result.append(frame.resource)
                continue

            dependency = self._materialize(frame.resource, reference)
            if dependency.source in visited:
                continue
            visited.add(dependency.source)

            self.log.debug(
                "%s depends on %s (depth %d)",
                frame.resource.name, dependency.name, frame.depth + 1,
            )

            if recursive:
                stack.append(_Frame(dependency, frame.depth + 1))
            else:
                result.append(dependency)

        return result

    def directive_lines(self, resource) -> Set[int]:
        """Return zero-based numbers of the lines holding a dependency directive."""
        frame = _Frame(resource, 0)
        found: Set[int] = set()
        while self._next_reference(frame) is not None:
            found.add(frame.index - 1)
        return found

    def _next_reference(self, frame: _Frame) -> Optional[str]:
        """
        Advance through the frame's lines to the next reference.

        Returns None once the lines are exhausted or the dialect signals
        stop. Lines that fail to scan are logged and skipped.
        """
        dialect = frame.resource.dialect

        while frame.index < len(frame.lines):
            line = frame.lines[frame.index]
            line_num = frame.index
            frame.index += 1

            try:
                result = dialect.scan(line, frame.state)
            except (MalformedDirectiveError, re.error) as e:
                self.log.error(
                    "Encountered an error when extracting dependencies from %s:%d:\n%s\n\n%s",
                    frame.resource.name, line_num, line.strip(), e,
                )
                continue

            if result.stop:
                frame.index = len(frame.lines)
                return None
            if result.reference:
                return result.reference

        return None

    def _materialize(self, dependent, reference: str):
        identity = dependent.source.identity
        base_dir = identity.parent if identity is not None else None
        source = dependent.loader.locate(reference, base_dir)
        return dependent.derive(source)
