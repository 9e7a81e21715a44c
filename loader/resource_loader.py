"""Turning dependency-like values into sources and resources."""

import os
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import InvalidInputError, MissingReferenceError
from .settings import Settings
from .sources import FileSource, Source, StreamSource, TextSource


class ResourceLoader:
    """
    Resolves file names, raw content and streams to sources.

    File names are looked up in an ordered list of search directories; the
    first match wins.
    """

    def __init__(
        self,
        search_paths: Optional[Iterable[Path]] = None,
        prefer_source_dir: bool = True,
    ):
        if search_paths is None:
            search_paths = Settings().search_paths()
        self.search_paths: List[Path] = [Path(p).resolve() for p in search_paths]
        self.prefer_source_dir = prefer_source_dir

    @classmethod
    def from_settings(cls, settings: Settings, cwd: Optional[Path] = None) -> "ResourceLoader":
        """Create a loader searching the directories configured in ``settings``."""
        return cls(settings.search_paths(cwd), prefer_source_dir=settings.prefer_source_dir)

    def load(self, ref, base_dir: Optional[Path] = None) -> Source:
        """
        Resolve a dependency-like value to a source.

        Args:
            ref: A Source, a resource (anything with a ``source`` attribute
                 holding a Source), a path object, a file name or raw
                 content string, or an open stream.
            base_dir: Directory of the referencing file, searched first.

        Returns:
            The matching Source variant.

        Raises:
            MissingReferenceError: If a path object names no existing file.
            InvalidInputError: If ``ref`` is none of the accepted kinds.
        """
        if isinstance(ref, Source):
            return ref

        wrapped = getattr(ref, "source", None)
        if isinstance(wrapped, Source):
            return wrapped

        if isinstance(ref, os.PathLike):
            return self.locate(os.fspath(ref), base_dir)

        if isinstance(ref, str):
            if "\n" not in ref:
                found = self._find(ref, base_dir)
                if found is not None:
                    return FileSource(found, ref)
            return TextSource(ref)

        if callable(getattr(ref, "read", None)):
            return StreamSource(ref)

        raise InvalidInputError(
            f"Expected a file name, string, stream or resource, got {type(ref).__name__}",
            context={"type": type(ref).__name__},
        )

    def locate(self, reference: str, base_dir: Optional[Path] = None) -> FileSource:
        """
        Find the file a dependency reference names.

        Raises:
            MissingReferenceError: If no search directory holds the file.
        """
        found = self._find(reference, base_dir)
        if found is None:
            searched = [str(d) for d in self._candidate_dirs(base_dir)]
            raise MissingReferenceError(
                f"Unable to locate '{reference}' (searched: {', '.join(searched) or 'nothing'})",
                context={"reference": reference, "searched": searched},
            )
        return FileSource(found, reference)

    def materialize(self, ref, kind, resolver=None):
        """
        Return ``ref`` as a resource of class ``kind``.

        Existing instances of ``kind`` are returned unchanged; anything else
        is loaded and wrapped in a new ``kind`` bound to this loader.
        """
        if isinstance(ref, kind):
            return ref
        return kind(self.load(ref), loader=self, resolver=resolver)

    def _candidate_dirs(self, base_dir: Optional[Path]) -> List[Path]:
        dirs: List[Path] = []
        if base_dir is not None and self.prefer_source_dir:
            dirs.append(Path(base_dir))
        for path in self.search_paths:
            if path not in dirs:
                dirs.append(path)
        return dirs

    def _find(self, reference: str, base_dir: Optional[Path]) -> Optional[Path]:
        """Return the first existing file matching ``reference``, or None."""
        if not reference:
            return None

        candidate = Path(reference).expanduser()

        try:
            if candidate.is_absolute() and candidate.is_file():
                return candidate.resolve()
        except (OSError, ValueError):
            return None

        # Treat /path/to/file as relative to each search directory
        relative = Path(reference.lstrip("/\\")) if candidate.is_absolute() else candidate

        for directory in self._candidate_dirs(base_dir):
            try:
                resolved = (directory / relative).resolve()
                if resolved.is_file():
                    return resolved
            except (OSError, ValueError):
                continue

        return None
