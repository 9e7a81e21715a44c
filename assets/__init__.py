"""Resources and their concatenation."""

from .resource import KINDS, Resource, Script, Stylesheet, kind_for

__all__ = ["KINDS", "Resource", "Script", "Stylesheet", "kind_for"]
