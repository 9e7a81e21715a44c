"""Line-oriented scanners extracting dependency directives from source text."""

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional

from loader.errors import MalformedDirectiveError


@dataclass
class ScanState:
    """
    State carried from one line to the next during a single scan pass.

    Block comments may span lines, so whether the scanner is inside one
    has to survive the line boundary.
    """

    in_block_comment: bool = False


class ScanResult(NamedTuple):
    """Outcome of scanning one line."""

    reference: Optional[str] = None
    stop: bool = False


NOTHING = ScanResult()
STOP = ScanResult(stop=True)


class Dialect:
    """Directive syntax of one resource kind. The base dialect has no directives."""

    name = "generic"
    pattern: "re.Pattern[str]"

    def scan(self, line: str, state: ScanState) -> ScanResult:
        """
        Scan one line for a dependency reference.

        Args:
            line: The line, including its line ending.
            state: Scan state of the current pass, updated in place.

        Returns:
            The reference found on the line (if any), and whether scanning
            of this resource should stop.
        """
        return STOP

    def strip_directive(self, line: str) -> str:
        """Return ``line`` with its directive removed (the whole line by default)."""
        return ""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class StylesheetDialect(Dialect):
    """
    ``@import`` directives in stylesheets.

    Imports must precede all rules, so the first selector-like line ends
    the scan.
    """

    name = "stylesheet"
    pattern = re.compile(
        r"""^\s*@import(?:\s+url\(|\s+)?(['"]?)([^\?'"\)\s]+)(\?[^'"\)]*)?\1\)?[^?;]*;?""",
        re.IGNORECASE,
    )
    _inline_comment = re.compile(r"/\*.*\*/")
    _comment_tail = re.compile(r".*\*/")
    _selector = re.compile(r"^\s*[.#a-zA-Z:]")

    def scan(self, line: str, state: ScanState) -> ScanResult:
        line = self._inline_comment.sub("", line)

        previous = ""
        for char in line:
            pair = previous + char
            if pair == "/*":
                state.in_block_comment = True
            elif pair == "*/":
                state.in_block_comment = False
            previous = char

        if state.in_block_comment:
            return NOTHING

        # Drop the end of a comment opened on an earlier line
        line = self._comment_tail.sub("", line, count=1)

        match = self.pattern.match(line)
        if match:
            reference = match.group(2)
            if "(" in reference:
                raise MalformedDirectiveError(
                    f"Unbalanced url() in import directive: {line.strip()}",
                    context={"line": line.strip()},
                )
            return ScanResult(reference)

        if self._selector.match(line):
            return STOP

        return NOTHING


class ScriptDialect(Dialect):
    """
    ``@depend`` / ``@depends`` tags inside comments heading a script.

    The first character outside a comment that is neither whitespace nor a
    slash marks the start of code and ends the scan at once.
    """

    name = "script"
    pattern = re.compile(r"""@depends?\s+([^\s'";]+)""", re.IGNORECASE)

    def scan(self, line: str, state: ScanState) -> ScanResult:
        comment = []
        in_line_comment = False
        previous = ""

        for char in line:
            pair = previous + char
            if pair == "/*":
                state.in_block_comment = True
            elif pair == "*/":
                state.in_block_comment = False
            elif pair == "//" and not state.in_block_comment:
                in_line_comment = True

            if state.in_block_comment or in_line_comment:
                comment.append(char)
            elif not char.isspace() and char != "/":
                return STOP

            previous = char

        match = self.pattern.search("".join(comment))
        if match:
            return ScanResult(match.group(1))
        return NOTHING

    def strip_directive(self, line: str) -> str:
        # Keep the surrounding comment so multi-line blocks stay balanced
        return self.pattern.sub("", line, count=1)
