"""Loader module for sources, search paths and settings."""

from .errors import (
    ConfigError,
    DepcatError,
    InvalidInputError,
    MalformedDirectiveError,
    MissingReferenceError,
)
from .resource_loader import ResourceLoader
from .settings import Settings, load_settings
from .sources import FileSource, Source, StreamSource, TextSource

__all__ = [
    "ConfigError",
    "DepcatError",
    "InvalidInputError",
    "MalformedDirectiveError",
    "MissingReferenceError",
    "ResourceLoader",
    "Settings",
    "load_settings",
    "FileSource",
    "Source",
    "StreamSource",
    "TextSource",
]
