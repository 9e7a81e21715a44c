"""Discovery of installed package library directories."""

from pathlib import Path
from typing import Iterator, Optional, Set


LIB_DIR_NAME = "lib"
DEFAULT_EXCLUDE_DIRS = {
    ".git", ".hg", ".svn",
    "node_modules", "__pycache__",
}


def package_dir(home: Path, env: str) -> Path:
    """Return the directory holding the packages installed for ``env``."""
    return Path(home) / "packages" / env


def iter_package_libs(
    home: Path,
    env: str,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over library directories of installed packages.

    Every directory named ``lib`` below ``<home>/packages/<env>`` is yielded,
    in sorted walk order. Library directories are not descended into.

    Args:
        home: Installation home directory.
        env: Environment name selecting the package set.
        exclude_dirs: Directory names to skip.
                     If None, uses DEFAULT_EXCLUDE_DIRS.
        max_depth: Maximum depth to descend. None means unlimited.

    Yields:
        Resolved Path objects for matching directories.
    """
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    root = package_dir(home, env)
    if not root.is_dir():
        return

    def _walk(current: Path, depth: int) -> Iterator[Path]:
        if max_depth is not None and depth > max_depth:
            return

        try:
            entries = sorted(current.iterdir())
        except PermissionError:
            return

        for entry in entries:
            if not entry.is_dir() or entry.name in exclude_dirs:
                continue
            if entry.name == LIB_DIR_NAME:
                yield entry.resolve()
                continue
            yield from _walk(entry, depth + 1)

    yield from _walk(root, 0)
