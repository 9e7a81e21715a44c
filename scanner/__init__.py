"""Scanner module for directive extraction and dependency resolution."""

from .dialects import Dialect, ScanResult, ScanState, ScriptDialect, StylesheetDialect
from .resolver import DependencyResolver
from .builder import build_graph

__all__ = [
    "Dialect",
    "ScanResult",
    "ScanState",
    "ScriptDialect",
    "StylesheetDialect",
    "DependencyResolver",
    "build_graph",
]
