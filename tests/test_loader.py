"""Tests for sources and the resource loader."""

import io
from pathlib import Path

import pytest

from assets.resource import Script, Stylesheet
from loader.errors import InvalidInputError, MissingReferenceError
from loader.resource_loader import ResourceLoader
from loader.sources import FileSource, StreamSource, TextSource


class Pipe(io.RawIOBase):
    """A readable byte stream that cannot seek, like a pipe."""

    def __init__(self, data: bytes):
        self._data = data

    def readable(self):
        return True

    def readinto(self, buffer):
        size = min(len(buffer), len(self._data))
        buffer[:size] = self._data[:size]
        self._data = self._data[size:]
        return size


class TestSources:
    """Tests for source variants."""

    def test_file_identity(self, tmp_path):
        """Test file sources are identified by canonical path."""
        target = tmp_path / "a.css"
        target.write_text("a {}", encoding="utf-8")

        first = FileSource(target)
        (tmp_path / "sub").mkdir()
        second = FileSource(tmp_path / "sub" / ".." / "a.css")

        assert first == second
        assert hash(first) == hash(second)
        assert first.identity == target.resolve()

    def test_file_read_keeps_line_endings(self, tmp_path):
        """Test file content is read unchanged."""
        target = tmp_path / "a.css"
        target.write_bytes(b"a {}\r\nb {}\r\n")

        assert FileSource(target).lines() == ["a {}\r\n", "b {}\r\n"]

    def test_text_compared_by_handle(self):
        """Test equal text in two sources is two handles."""
        text = TextSource("body {}")

        assert text == text
        assert text != TextSource("body {}")
        assert text.identity is None

    def test_stream_rewound(self):
        """Test streams are read from the start every time."""
        stream = io.StringIO("line one\nline two\n")
        source = StreamSource(stream)

        assert source.read() == "line one\nline two\n"
        assert source.lines() == ["line one\n", "line two\n"]

    def test_stream_compared_by_stream(self):
        """Test two wrappers of one stream are equal."""
        stream = io.StringIO()

        assert StreamSource(stream) == StreamSource(stream)
        assert StreamSource(stream) != StreamSource(io.StringIO())

    def test_binary_stream_decoded(self):
        """Test binary streams are decoded as UTF-8."""
        assert StreamSource(io.BytesIO("café".encode("utf-8"))).read() == "café"

    def test_unseekable_stream_kept(self):
        """Test a stream that cannot rewind is read once and kept."""
        pipe = Pipe(b"line one\nline two\n")
        source = StreamSource(pipe)

        assert source.read() == "line one\nline two\n"
        assert source.lines() == ["line one\n", "line two\n"]
        assert source == StreamSource(pipe)

    def test_undecodable_file(self, tmp_path):
        """Test files that are not UTF-8 are invalid input."""
        target = tmp_path / "latin.css"
        target.write_bytes("a { content: 'é' }".encode("latin-1"))

        with pytest.raises(InvalidInputError) as excinfo:
            FileSource(target).read()

        assert excinfo.value.context["path"] == str(target.resolve())

    def test_undecodable_stream(self):
        """Test binary streams that are not UTF-8 are invalid input."""
        with pytest.raises(InvalidInputError):
            StreamSource(io.BytesIO(b"caf\xe9")).read()


class TestLoad:
    """Tests for turning dependency-like values into sources."""

    def test_existing_file(self, tmp_path):
        """Test file names on the search path load as files."""
        (tmp_path / "a.css").touch()
        source = ResourceLoader([tmp_path]).load("a.css")

        assert isinstance(source, FileSource)
        assert source.relative == "a.css"

    def test_unknown_name_is_text(self, tmp_path):
        """Test strings naming no file are content."""
        source = ResourceLoader([tmp_path]).load("body {}")

        assert isinstance(source, TextSource)
        assert source.read() == "body {}"

    def test_multiline_is_text(self, tmp_path):
        """Test multi-line strings are never file names."""
        (tmp_path / "a.css").touch()
        source = ResourceLoader([tmp_path]).load("a.css\n")

        assert isinstance(source, TextSource)

    def test_path_object_must_exist(self, tmp_path):
        """Test path objects are always file references."""
        with pytest.raises(MissingReferenceError):
            ResourceLoader([tmp_path]).load(Path("missing.css"))

    def test_stream(self, tmp_path):
        """Test readable objects load as streams."""
        assert isinstance(ResourceLoader([tmp_path]).load(io.StringIO()), StreamSource)

    def test_source_unchanged(self, tmp_path):
        """Test sources pass through."""
        source = TextSource("x")

        assert ResourceLoader([tmp_path]).load(source) is source

    def test_resource_gives_its_source(self, tmp_path):
        """Test resources of another kind contribute their source."""
        loader = ResourceLoader([tmp_path])
        css = Stylesheet("body {}\n", loader=loader)

        assert loader.load(css) is css.source

    @pytest.mark.parametrize("value", [42, 1.5, None, ["a.css"], object()])
    def test_unsupported(self, tmp_path, value):
        """Test unsupported values are invalid input."""
        with pytest.raises(InvalidInputError):
            ResourceLoader([tmp_path]).load(value)


class TestLocate:
    """Tests for search path lookup."""

    def test_first_match_wins(self, tmp_path):
        """Test search directories are tried in order."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        for directory in (first, second):
            directory.mkdir()
            (directory / "a.css").touch()

        source = ResourceLoader([first, second]).locate("a.css")

        assert source.identity == (first / "a.css").resolve()

    def test_later_directory(self, tmp_path):
        """Test later directories are searched when earlier ones miss."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (second / "b.css").touch()

        assert ResourceLoader([first, second]).locate("b.css").identity == (second / "b.css").resolve()

    def test_source_dir_first(self, tmp_path):
        """Test the importing file's directory is searched first."""
        (tmp_path / "theme").mkdir()
        (tmp_path / "theme" / "a.css").touch()
        (tmp_path / "a.css").touch()

        source = ResourceLoader([tmp_path]).locate("a.css", tmp_path / "theme")

        assert source.identity == (tmp_path / "theme" / "a.css").resolve()

    def test_source_dir_disabled(self, tmp_path):
        """Test the importing file's directory can be ignored."""
        (tmp_path / "theme").mkdir()
        (tmp_path / "theme" / "a.css").touch()
        (tmp_path / "a.css").touch()

        loader = ResourceLoader([tmp_path], prefer_source_dir=False)

        assert loader.locate("a.css", tmp_path / "theme").identity == (tmp_path / "a.css").resolve()

    def test_root_relative(self, tmp_path):
        """Test /path references are looked up below search directories."""
        (tmp_path / "css").mkdir()
        (tmp_path / "css" / "a.css").touch()

        source = ResourceLoader([tmp_path]).locate("/css/a.css")

        assert source.identity == (tmp_path / "css" / "a.css").resolve()

    def test_absolute(self, tmp_path):
        """Test existing absolute paths are used directly."""
        target = tmp_path / "a.css"
        target.touch()

        assert ResourceLoader([]).locate(str(target)).identity == target.resolve()

    def test_missing(self, tmp_path):
        """Test missing references name the reference and the search path."""
        with pytest.raises(MissingReferenceError) as excinfo:
            ResourceLoader([tmp_path]).locate("nowhere.css")

        assert "nowhere.css" in str(excinfo.value)
        assert excinfo.value.context["reference"] == "nowhere.css"
        assert isinstance(excinfo.value, FileNotFoundError)


class TestMaterialize:
    """Tests for wrapping values in resources."""

    def test_instance_unchanged(self, tmp_path):
        """Test resources of the requested kind pass through."""
        loader = ResourceLoader([tmp_path])
        js = Script(loader=loader)

        assert loader.materialize(js, Script) is js

    def test_wraps_in_kind(self, tmp_path):
        """Test other values are wrapped in the requested kind."""
        loader = ResourceLoader([tmp_path])
        resource = loader.materialize("var a;\n", Script)

        assert isinstance(resource, Script)
        assert resource.loader is loader
