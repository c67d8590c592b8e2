"""
strvals: the ``--set`` family of key-path assignment expressions.

Expressions such as ``image.tag=1.2,ports[0].name=http`` set leaf values
deep inside a values document without writing a file. Five flavours exist:

- parse / parse_into: typed values (``--set``)
- parse_string / parse_string_into: string values (``--set-string``)
- parse_file / parse_file_into: values read from files (``--set-file``)
- parse_json_into: JSON values (``--set-json``)
- parse_literal / parse_literal_into: verbatim values (``--set-literal``)

Example:
    >>> from valuemerger import strvals
    >>> strvals.parse("image.tag=1.2,ports[0].name=http")
    {'image': {'tag': '1.2'}, 'ports': [{'name': 'http'}]}
"""

from valuemerger.strvals._api import (
    parse,
    parse_file,
    parse_file_into,
    parse_into,
    parse_json_into,
    parse_literal,
    parse_literal_into,
    parse_string,
    parse_string_into,
    to_yaml,
)
from valuemerger.strvals._parser import typed_value
from valuemerger.strvals._types import DEFAULT_LIMITS, ParserLimits, ValueReader

__all__ = [
    "DEFAULT_LIMITS",
    "ParserLimits",
    "ValueReader",
    "parse",
    "parse_file",
    "parse_file_into",
    "parse_into",
    "parse_json_into",
    "parse_literal",
    "parse_literal_into",
    "parse_string",
    "parse_string_into",
    "to_yaml",
    "typed_value",
]
