"""Error types raised while loading, scanning and exporting resources."""

from typing import Any, Dict, Mapping, Optional


class DepcatError(Exception):
    """Base exception for depcat."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context is not None else {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidInputError(DepcatError, ValueError):
    """Raised for arguments that cannot be turned into a source or sink."""

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        DepcatError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class MissingReferenceError(DepcatError, FileNotFoundError):
    """Raised when a dependency reference does not name a file on the search path."""

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        DepcatError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class MalformedDirectiveError(DepcatError, ValueError):
    """Raised by a dialect when a directive line cannot be read."""

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        DepcatError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigError(DepcatError, ValueError):
    """Raised when a settings file cannot be parsed."""

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        DepcatError.__init__(self, message, context=context)
        ValueError.__init__(self, message)
