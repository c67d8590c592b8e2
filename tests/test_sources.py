"""Tests for file reading and values-document loading."""

import io as _io
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import pytest as _pytest

import valuemerger.errors as errors
import valuemerger.sources as sources


class TestSourceFor:
    """Mapping file references to sources."""

    @_pytest.mark.parametrize("reference", ["-", " -", "- ", "\t-\n"])
    def test_dash_is_stdin(self, reference: str) -> None:
        """'-' surrounded by whitespace means standard input."""
        assert sources.source_for(reference) == sources.StandardInput()

    @_pytest.mark.parametrize("reference", ["values.yaml", "--", "-f", "./-"])
    def test_other_references_are_files(self, reference: str) -> None:
        """Anything else is a file path, kept as given."""
        assert sources.source_for(reference) == sources.NamedFile(reference)


class TestReadSource:
    """Reading sources in full."""

    def test_reads_file(self, tmp_path: _pathlib.Path) -> None:
        """A named file is read as bytes."""
        path = tmp_path / "data.bin"
        path.write_bytes(b"a: 1\n\x00")
        assert sources.read_source(sources.NamedFile(str(path))) == b"a: 1\n\x00"

    def test_missing_file(self, tmp_path: _pathlib.Path) -> None:
        """A missing file raises ReadError naming the path."""
        missing = str(tmp_path / "missing.yaml")
        with _pytest.raises(errors.ReadError) as exc_info:
            sources.read_file(missing)
        assert exc_info.value.path == missing
        assert missing in str(exc_info.value)

    def test_directory_is_unreadable(self, tmp_path: _pathlib.Path) -> None:
        """A directory cannot be read as a file."""
        with _pytest.raises(errors.ReadError) as exc_info:
            sources.read_file(str(tmp_path))
        assert exc_info.value.path == str(tmp_path)

    def test_reads_stdin(self, fake_stdin: _typing.Callable[[bytes], None]) -> None:
        """'-' reads standard input to the end."""
        fake_stdin(b"from: stdin\n")
        assert sources.read_file("-") == b"from: stdin\n"

    def test_exhausted_stdin_is_empty(self, fake_stdin: _typing.Callable[[bytes], None]) -> None:
        """A second read of stdin sees an empty stream."""
        fake_stdin(b"once")
        assert sources.read_file("-") == b"once"
        assert sources.read_file("-") == b""

    def test_text_only_stdin(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """A text stream without a binary buffer is encoded as UTF-8."""
        monkeypatch.setattr(_sys, "stdin", _io.StringIO("héllo"))
        assert sources.read_file("-") == "héllo".encode()

    def test_missing_stdin(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """No stdin at all is a ReadError for '-'."""
        monkeypatch.setattr(_sys, "stdin", None)
        with _pytest.raises(errors.ReadError) as exc_info:
            sources.read_file("-")
        assert exc_info.value.path == "-"
        assert "standard input" in str(exc_info.value)

    def test_closed_stdin(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """A closed stdin is a ReadError for '-'."""
        stream = _io.StringIO("data")
        stream.close()
        monkeypatch.setattr(_sys, "stdin", stream)
        with _pytest.raises(errors.ReadError):
            sources.read_file("-")


class TestReadText:
    """Reading sources as UTF-8 text."""

    def test_decodes_utf8(self, tmp_path: _pathlib.Path) -> None:
        """Content is decoded as UTF-8."""
        path = tmp_path / "note.txt"
        path.write_bytes("grüße\n".encode())
        assert sources.read_text(str(path)) == "grüße\n"

    def test_invalid_utf8(self, tmp_path: _pathlib.Path) -> None:
        """Undecodable content is a ParseError naming the reference."""
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xff\xfe\xfa")
        with _pytest.raises(errors.ParseError) as exc_info:
            sources.read_text(str(path))
        assert exc_info.value.source == str(path)


class TestLoadValuesDocument:
    """Parsing YAML values documents."""

    def test_mapping(self) -> None:
        """A YAML mapping is returned as a dict."""
        assert sources.load_values_document(b"a: 1\nb:\n  c: [x, y]\n") == {
            "a": 1,
            "b": {"c": ["x", "y"]},
        }

    def test_json_is_yaml(self) -> None:
        """JSON content parses too."""
        assert sources.load_values_document('{"a": {"b": true}}') == {"a": {"b": True}}

    @_pytest.mark.parametrize("content", [b"", b"\n", b"# only a comment\n", b"null\n", b"~"])
    def test_empty_document(self, content: bytes) -> None:
        """Empty and null documents are empty mappings."""
        assert sources.load_values_document(content) == {}

    def test_non_string_keys(self) -> None:
        """Keys are converted to strings the way JSON would render them."""
        content = b"1: one\ntrue: yes-key\n~: null-key\n1.5: float\nnested:\n  2: two\n"
        assert sources.load_values_document(content) == {
            "1": "one",
            "true": "yes-key",
            "null": "null-key",
            "1.5": "float",
            "nested": {"2": "two"},
        }

    def test_timestamps_stay_strings(self) -> None:
        """Dates are not converted to datetime objects."""
        assert sources.load_values_document(b"released: 2024-01-02\n") == {
            "released": "2024-01-02"
        }

    def test_merge_keys(self) -> None:
        """YAML merge keys are honoured."""
        content = b"base: &base\n  a: 1\nchild:\n  <<: *base\n  b: 2\n"
        assert sources.load_values_document(content)["child"] == {"a": 1, "b": 2}

    def test_malformed_yaml(self) -> None:
        """Malformed YAML raises ParseError naming the path."""
        with _pytest.raises(errors.ParseError) as exc_info:
            sources.load_values_document(b"a: [1, 2\n", "values.yaml")
        assert exc_info.value.source == "values.yaml"
        assert str(exc_info.value).startswith("failed to parse values.yaml")

    @_pytest.mark.parametrize("content", [b"- a\n- b\n", b"just a string\n", b"42\n"])
    def test_top_level_must_be_mapping(self, content: bytes) -> None:
        """Lists and scalars are not values documents."""
        with _pytest.raises(errors.ParseError, match="must be a YAML mapping"):
            sources.load_values_document(content, "values.yaml")

    def test_no_arbitrary_objects(self) -> None:
        """Python object tags are rejected."""
        with _pytest.raises(errors.ParseError):
            sources.load_values_document(b"a: !!python/object/apply:os.getcwd []\n")
