"""Settings loading from YAML or TOML configuration files."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .discovery import iter_package_libs
from .errors import ConfigError


HOME_ENV_VAR = "DEPCAT_HOME"
ENV_ENV_VAR = "DEPCAT_ENV"
DEFAULT_ENV = "default"
CONFIG_FILE_NAMES = (".depcat.yml", ".depcat.yaml")
PYPROJECT_TABLE = "depcat"


def default_home() -> Path:
    """Return the installation home: $DEPCAT_HOME, else ~/.depcat."""
    home = os.environ.get(HOME_ENV_VAR)
    if home:
        return Path(home).expanduser()
    return Path.home() / ".depcat"


def default_env() -> str:
    """Return the active environment name: $DEPCAT_ENV, else "default"."""
    return os.environ.get(ENV_ENV_VAR) or DEFAULT_ENV


@dataclass
class Settings:
    """Resolved configuration for loading and concatenating resources."""

    home: Path = field(default_factory=default_home)
    env: str = field(default_factory=default_env)
    load_path: List[Path] = field(default_factory=list)
    prefer_source_dir: bool = True
    strip_directives: bool = False
    log_level: Optional[str] = None

    def search_paths(self, cwd: Optional[Path] = None) -> List[Path]:
        """
        Build the ordered list of directories dependency references are
        looked up in.

        The working directory always comes first, followed by configured
        ``load_path`` entries and the library directories of installed
        packages.
        """
        cwd = Path(cwd) if cwd is not None else Path.cwd()
        paths: List[Path] = [cwd.resolve()]
        for entry in self.load_path:
            entry = Path(entry).expanduser()
            if not entry.is_absolute():
                entry = cwd / entry
            paths.append(entry.resolve())
        paths.extend(iter_package_libs(self.home, self.env))

        unique: List[Path] = []
        for path in paths:
            if path not in unique:
                unique.append(path)
        return unique


def load_settings(path: Optional[Path] = None, cwd: Optional[Path] = None) -> Settings:
    """
    Load settings from a configuration file.

    Args:
        path: Explicit YAML or TOML file. When None, ``.depcat.yml`` or
              ``.depcat.yaml`` in ``cwd`` is used, then the ``[tool.depcat]``
              table of ``cwd/pyproject.toml``.
        cwd: Directory to look for configuration files in (default: cwd).

    Returns:
        Settings with file values applied over the defaults.

    Raises:
        ConfigError: If the file cannot be read or does not hold a mapping.
    """
    cwd = Path(cwd) if cwd is not None else Path.cwd()

    if path is not None:
        data = _parse_file(Path(path))
        return _from_mapping(data, Path(path).resolve().parent)

    for name in CONFIG_FILE_NAMES:
        candidate = cwd / name
        if candidate.is_file():
            return _from_mapping(_parse_file(candidate), cwd)

    pyproject = cwd / "pyproject.toml"
    if pyproject.is_file():
        data = _parse_file(pyproject)
        table = data.get("tool", {}).get(PYPROJECT_TABLE, {})
        return _from_mapping(table, cwd)

    return Settings()


def _parse_file(file_path: Path) -> Dict[str, Any]:
    """Parse a YAML or TOML file into a mapping."""
    suffix = file_path.suffix.lower()

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(
            f"Cannot read settings file {file_path}: {e}",
            context={"path": str(file_path)},
        ) from e

    try:
        if suffix == ".toml":
            data = tomllib.loads(content)
        else:
            data = yaml.safe_load(content)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigError(
            f"Malformed settings file {file_path}: {e}",
            context={"path": str(file_path)},
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Settings file {file_path} must contain a mapping",
            context={"path": str(file_path)},
        )
    return data


def _from_mapping(data: Dict[str, Any], base: Path) -> Settings:
    """Build Settings from a parsed mapping; relative paths are taken from ``base``."""
    settings = Settings()

    if data.get("home"):
        settings.home = _anchor(Path(str(data["home"])), base)
    if data.get("env"):
        settings.env = str(data["env"])

    load_path = data.get("load_path", [])
    if isinstance(load_path, str):
        load_path = [load_path]
    if not isinstance(load_path, list):
        raise ConfigError("load_path must be a list of directories", context={"value": load_path})
    settings.load_path = [_anchor(Path(str(entry)), base) for entry in load_path]

    if "prefer_source_dir" in data:
        settings.prefer_source_dir = bool(data["prefer_source_dir"])
    if "strip_directives" in data:
        settings.strip_directives = bool(data["strip_directives"])
    if data.get("log_level"):
        settings.log_level = str(data["log_level"]).upper()

    return settings


def _anchor(path: Path, base: Path) -> Path:
    path = path.expanduser()
    return path if path.is_absolute() else (base / path)
