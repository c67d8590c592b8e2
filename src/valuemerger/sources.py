"""Readable sources and the YAML values-document loader.

A file reference given on the command line is either a local path or the
sentinel ``-``, which means standard input. Both values files (``-f``) and
``--set-file`` targets go through the same reader:

    >>> source_for("-")
    StandardInput()
    >>> source_for("values.yaml")
    NamedFile(path='values.yaml')

Values files are parsed with a SafeLoader subclass that produces plain
JSON-compatible documents: mapping keys are always strings and timestamps
stay as the text that was written.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import sys as _sys
import typing as _typing

import yaml as _yaml

import valuemerger.constants as constants
import valuemerger.errors as errors

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True, slots=True)
class NamedFile:
    """A file on the local filesystem."""

    path: str


@_dataclasses.dataclass(frozen=True, slots=True)
class StandardInput:
    """The process's standard input stream."""

    pass


Source: _typing.TypeAlias = NamedFile | StandardInput


def source_for(reference: str) -> Source:
    """Map a file reference to a Source; ``-`` (ignoring whitespace) is stdin."""
    if reference.strip() == constants.STDIN_SENTINEL:
        return StandardInput()
    return NamedFile(reference)


def _read_stdin() -> bytes:
    stream = _sys.stdin
    if stream is None or stream.closed:
        raise errors.ReadError(constants.STDIN_SENTINEL, "standard input is not available")
    try:
        buffer = getattr(stream, "buffer", None)
        if buffer is not None:
            return bytes(buffer.read())
        # Text-only streams (e.g. io.StringIO substituted by a test harness)
        return str(stream.read()).encode("utf-8")
    except (OSError, ValueError) as e:
        raise errors.ReadError(constants.STDIN_SENTINEL, str(e)) from e


def read_source(source: Source) -> bytes:
    """
    Read the full content of a source.

    Standard input is read until end of stream. An exhausted stream simply
    yields ``b""``.

    Raises:
        ReadError: If the file is missing or unreadable, or stdin is closed.
    """
    if isinstance(source, StandardInput):
        _logger.debug("Reading standard input")
        return _read_stdin()

    _logger.debug("Reading %s", source.path)
    try:
        with open(source.path, "rb") as f:
            return f.read()
    except FileNotFoundError as e:
        raise errors.ReadError(source.path, "no such file or directory") from e
    except PermissionError as e:
        raise errors.ReadError(source.path, "permission denied") from e
    except OSError as e:
        raise errors.ReadError(source.path, e.strerror or str(e)) from e


def read_file(reference: str) -> bytes:
    """Read a file reference (path or ``-``) in full."""
    return read_source(source_for(reference))


def read_text(reference: str) -> str:
    """
    Read a file reference and decode it as UTF-8.

    Raises:
        ReadError: If the reference cannot be read.
        ParseError: If the content is not valid UTF-8.
    """
    data = read_file(reference)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise errors.ParseError(
            f"{reference} is not valid UTF-8: {e}",
            source=reference,
        ) from e


def _key_text(key: _typing.Any) -> str:
    """Render a mapping key the way a JSON encoder would."""
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


class _ValuesLoader(_yaml.SafeLoader):
    """SafeLoader that yields string-keyed mappings and keeps timestamps as text."""

    def construct_mapping(
        self, node: _yaml.MappingNode, deep: bool = False
    ) -> dict[str, _typing.Any]:
        """Build the mapping with stringified keys (so ``1`` and ``true`` stay distinct)."""
        self.flatten_mapping(node)
        result: dict[str, _typing.Any] = {}
        for key_node, value_node in node.value:
            key = self.construct_object(key_node, deep=True)
            if isinstance(key, (list, dict)):
                raise _yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    "found unacceptable key",
                    key_node.start_mark,
                )
            result[_key_text(key)] = self.construct_object(value_node, deep=deep)
        return result

    def construct_yaml_timestamp(self, node: _yaml.ScalarNode) -> str:
        return str(self.construct_scalar(node))


_ValuesLoader.add_constructor(
    "tag:yaml.org,2002:timestamp",
    _ValuesLoader.construct_yaml_timestamp,
)


def load_values_document(data: bytes | str, path: str = "<input>") -> dict[str, _typing.Any]:
    """
    Parse YAML content into a values document.

    An empty document (or an explicit ``null``) yields ``{}``.

    Args:
        data: Raw YAML content.
        path: Where the content came from, used in error messages.

    Returns:
        The parsed mapping.

    Raises:
        ParseError: If the YAML is malformed or the top level is not a mapping.
    """
    try:
        parsed = _yaml.load(data, Loader=_ValuesLoader)  # noqa: S506 - SafeLoader subclass
    except _yaml.YAMLError as e:
        raise errors.ParseError(f"failed to parse {path}: {e}", source=path) from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise errors.ParseError(
            f"failed to parse {path}: values must be a YAML mapping, got {type_name}",
            source=path,
        )
    return parsed
