"""Readable content handles backing a resource.

A source is one of three variants: a file on disk, a raw text string, or an
open stream. Only file sources carry a stable identity; the other two compare
by handle.
"""

from pathlib import Path
from typing import IO, List, Optional

from .errors import InvalidInputError


class Source:
    """Base class for readable, rewindable content."""

    @property
    def identity(self) -> Optional[Path]:
        """Canonical path for file-backed content, None otherwise."""
        return None

    def read(self) -> str:
        raise NotImplementedError

    def lines(self) -> List[str]:
        """Return the content split into lines, keeping line endings."""
        return self.read().splitlines(keepends=True)

    def describe(self) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}<{self.describe()}>"


class FileSource(Source):
    """A file on disk, identified by its canonical absolute path."""

    def __init__(self, path, relative: Optional[str] = None):
        self.path = Path(path).expanduser().resolve()
        # The reference as written, for display
        self.relative = relative if relative is not None else str(path)

    @property
    def identity(self) -> Path:
        return self.path

    def read(self) -> str:
        try:
            with open(self.path, "r", encoding="utf-8", newline="") as handle:
                return handle.read()
        except UnicodeDecodeError as e:
            raise InvalidInputError(
                f"Cannot decode {self.path} as UTF-8: {e}",
                context={"path": str(self.path)},
            ) from e

    def describe(self) -> str:
        return str(self.path)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FileSource):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)


class TextSource(Source):
    """Raw content held in memory. Two text sources are never equal."""

    def __init__(self, text: str = ""):
        self.text = text

    def read(self) -> str:
        return self.text

    def describe(self) -> str:
        preview = self.text[:20].replace("\n", "\\n")
        return f"text:{preview!r}"


class StreamSource(Source):
    """
    An open stream.

    Seekable streams are rewound before every read. Streams that cannot
    seek are read once and the content is kept for later reads.
    """

    def __init__(self, stream: IO):
        self.stream = stream
        self._buffer: Optional[str] = None

    def read(self) -> str:
        if self._buffer is not None:
            return self._buffer

        rewindable = self._rewindable()
        if rewindable:
            self.stream.seek(0)

        try:
            content = self.stream.read()
            if isinstance(content, bytes):
                content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidInputError(
                f"Cannot decode {self.describe()} as UTF-8: {e}",
                context={"path": self.describe()},
            ) from e

        if not rewindable:
            self._buffer = content
        return content

    def _rewindable(self) -> bool:
        if getattr(self.stream, "seek", None) is None:
            return False
        seekable = getattr(self.stream, "seekable", None)
        return seekable is None or bool(seekable())

    def describe(self) -> str:
        name = getattr(self.stream, "name", None)
        return f"stream:{name}" if isinstance(name, str) else f"stream:{type(self.stream).__name__}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, StreamSource):
            return NotImplemented
        return self.stream is other.stream

    def __hash__(self) -> int:
        return id(self.stream)
