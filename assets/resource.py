"""Resource model: stylesheets and scripts linked by in-source directives."""

from pathlib import Path
from typing import Dict, List, Optional, Type

from loader.errors import InvalidInputError
from loader.resource_loader import ResourceLoader
from loader.sources import Source, TextSource
from scanner.dialects import Dialect, ScriptDialect, StylesheetDialect
from scanner.resolver import DependencyResolver
from . import concat


class Resource:
    """
    A named or anonymous text unit with dependencies.

    Dependencies come from two places: directives found by scanning the
    content, and resources attached explicitly with ``attach``. Scanned
    dependencies always come first.

    Examples:
        css = Stylesheet("main.css")
        css.attach("extra.css")
        css.dependencies()                # direct dependencies
        css.dependencies(recursive=True)  # nested ones first
        css.read(inline_dependencies=True, recursive=True)
        css.export("bundle.css", inline_dependencies=True, recursive=True)
    """

    dialect: Dialect = Dialect()
    suffixes: tuple = ()

    def __init__(
        self,
        *sources,
        loader: Optional[ResourceLoader] = None,
        resolver: Optional[DependencyResolver] = None,
    ):
        """
        Create a resource.

        Args:
            *sources: Nothing for an empty resource; one file name, raw
                      content string, stream or Source to wrap; or several of
                      them (or one list), giving an empty resource with each
                      one attached in order.
            loader: Loader used for file lookup. Defaults to one searching
                    the configured load path.
            resolver: Resolver used to scan dependencies.

        Raises:
            InvalidInputError: If an argument is not a supported input.
        """
        self.loader = loader if loader is not None else ResourceLoader()
        self.resolver = resolver if resolver is not None else DependencyResolver()
        self.attached: List["Resource"] = []
        self._scanned: Dict[bool, List["Resource"]] = {}

        if len(sources) == 1 and isinstance(sources[0], (list, tuple)):
            sources = tuple(sources[0])

        try:
            if len(sources) > 1:
                self.source: Source = TextSource()
                for source in sources:
                    self.attach(source)
            elif sources:
                self.source = self.loader.load(sources[0])
            else:
                self.source = TextSource()
        except InvalidInputError as e:
            raise InvalidInputError(
                f"Arguments to {type(self).__name__}() must be a file name, a string, "
                f"a stream or a resource: {e}",
                context=e.context,
            ) from e

    @classmethod
    def open(cls, ref, loader: Optional[ResourceLoader] = None, resolver: Optional[DependencyResolver] = None):
        """Return ``ref`` if it already is an instance, otherwise wrap it."""
        if isinstance(ref, cls):
            return ref
        return cls(ref, loader=loader, resolver=resolver)

    @property
    def file(self) -> Optional[Path]:
        """Canonical path of the wrapped file, or None for text and streams."""
        return self.source.identity

    @property
    def path(self) -> Optional[str]:
        """The file reference as it was written, or None."""
        return getattr(self.source, "relative", None)

    @property
    def name(self) -> str:
        return str(self.file) if self.file is not None else "[unsaved]"

    def derive(self, source: Source) -> "Resource":
        """Create a resource of the same kind sharing this one's loader and resolver."""
        return type(self)(source, loader=self.loader, resolver=self.resolver)

    def attach(self, dependency) -> "Resource":
        """
        Add an explicit dependency.

        Accepts another resource, a file name, raw content or a stream.
        Scanned dependencies are not re-scanned.

        Returns:
            The attached resource.
        """
        resource = self.loader.materialize(dependency, type(self), self.resolver)
        self.attached.append(resource)
        return resource

    depend = attach

    def __lshift__(self, dependency) -> "Resource":
        self.attach(dependency)
        return self

    def dependencies(self, recursive: bool = False) -> List["Resource"]:
        """
        List scanned dependencies followed by attached ones.

        Scanning happens once per value of ``recursive``; attachments made
        later still show up.
        """
        key = bool(recursive)
        if key not in self._scanned:
            self._scanned[key] = self.resolver.scan(self, recursive=key)
        return self._scanned[key] + self.attached

    def resources(self, recursive: bool = False) -> List["Resource"]:
        """List dependencies followed by this resource."""
        return self.dependencies(recursive=recursive) + [self]

    def read(self, inline_dependencies: bool = False, recursive: bool = False,
             strip_directives: bool = False) -> str:
        return concat.read(
            self,
            inline_dependencies=inline_dependencies,
            recursive=recursive,
            strip_directives=strip_directives,
        )

    def export(self, sink, **options) -> None:
        concat.export(self, sink, **options)

    def concat(self, **options) -> "Resource":
        return concat.concat(self, **options)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self.source == other.source

    def __hash__(self) -> int:
        return hash(self.source)

    def __repr__(self) -> str:
        filename = f'"{self.file}"' if self.file is not None else "[unsaved]"
        return f"<{type(self).__name__}:{filename}>"


class Stylesheet(Resource):
    """A stylesheet; dependencies are ``@import`` directives."""

    dialect = StylesheetDialect()
    suffixes = (".css",)

    import_ = Resource.attach


class Script(Resource):
    """A script; dependencies are ``@depend`` tags in its leading comments."""

    dialect = ScriptDialect()
    suffixes = (".js",)


KINDS: Dict[str, Type[Resource]] = {
    "css": Stylesheet,
    "stylesheet": Stylesheet,
    "js": Script,
    "javascript": Script,
    "script": Script,
}


def kind_for(name: str) -> Type[Resource]:
    """
    Pick the resource kind for a kind name or file name.

    Raises:
        InvalidInputError: If neither the name nor its suffix is known.
    """
    key = name.lower()
    if key in KINDS:
        return KINDS[key]
    suffix = Path(key).suffix
    for kind in (Stylesheet, Script):
        if suffix in kind.suffixes:
            return kind
    raise InvalidInputError(f"Unknown resource type: {name}", context={"name": name})
