"""Dependency graph model."""

from .model import DependencyGraph

__all__ = ["DependencyGraph"]
