"""
Public entry points for the assignment-expression grammar.

``parse*`` functions return a new document; ``parse*_into`` functions
apply the expression to an existing document in place. All of them raise
ParseError (or its subclass AssignmentConflictError) on bad input.

Example:
    >>> parse("name=web,replicas=3,tags={a,b}")
    {'name': 'web', 'replicas': 3, 'tags': ['a', 'b']}
    >>> parse_string("replicas=3")
    {'replicas': '3'}
    >>> parse_literal("cmd=echo a,b=c")
    {'cmd': 'echo a,b=c'}
"""

from __future__ import annotations

import functools as _functools
import typing as _typing

import yaml as _yaml

import valuemerger.strvals._literal as _literal
import valuemerger.strvals._parser as _parser
import valuemerger.strvals._types as _types

_string_value = _functools.partial(_parser.typed_value, force_string=True)


def parse_into(
    text: str,
    dest: dict[str, _typing.Any],
    *,
    limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
) -> None:
    """Apply a ``--set`` expression, inferring value types."""
    _parser.Parser(text, dest, _parser.typed_value, limits=limits).parse()


def parse_string_into(
    text: str,
    dest: dict[str, _typing.Any],
    *,
    limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
) -> None:
    """Apply a ``--set-string`` expression; every value is a string."""
    _parser.Parser(text, dest, _string_value, limits=limits).parse()


def parse_file_into(
    text: str,
    dest: dict[str, _typing.Any],
    reader: _types.ValueReader,
    *,
    limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
) -> None:
    """
    Apply a ``--set-file`` expression.

    Each value is handed to ``reader``, which typically reads the named file
    and returns its text. Errors raised by the reader propagate unchanged.
    """
    _parser.Parser(text, dest, reader, limits=limits).parse()


def parse_json_into(
    text: str,
    dest: dict[str, _typing.Any],
    *,
    limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
) -> None:
    """Apply a ``--set-json`` expression; each value is a JSON document."""
    _parser.Parser(text, dest, json_values=True, limits=limits).parse()


def parse_literal_into(
    text: str,
    dest: dict[str, _typing.Any],
    *,
    limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
) -> None:
    """Apply a ``--set-literal`` expression; the value is taken verbatim."""
    _literal.LiteralParser(text, dest, limits).parse()


def parse(
    text: str,
    *,
    limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
) -> dict[str, _typing.Any]:
    """Parse a ``--set`` expression into a new document."""
    values: dict[str, _typing.Any] = {}
    parse_into(text, values, limits=limits)
    return values


def parse_string(
    text: str,
    *,
    limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
) -> dict[str, _typing.Any]:
    """Parse a ``--set-string`` expression into a new document."""
    values: dict[str, _typing.Any] = {}
    parse_string_into(text, values, limits=limits)
    return values


def parse_file(
    text: str,
    reader: _types.ValueReader,
    *,
    limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
) -> dict[str, _typing.Any]:
    """Parse a ``--set-file`` expression into a new document."""
    values: dict[str, _typing.Any] = {}
    parse_file_into(text, values, reader, limits=limits)
    return values


def parse_literal(
    text: str,
    *,
    limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
) -> dict[str, _typing.Any]:
    """Parse a ``--set-literal`` expression into a new document."""
    values: dict[str, _typing.Any] = {}
    parse_literal_into(text, values, limits=limits)
    return values


def to_yaml(text: str) -> str:
    """Parse a ``--set`` expression and render the result as YAML."""
    return str(_yaml.safe_dump(parse(text), default_flow_style=False, sort_keys=True))
