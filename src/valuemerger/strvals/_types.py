"""
Types shared by the assignment-expression parsers.

- ParserLimits: bounds on list indexes and dotted-key nesting
- ValueReader: turns the raw text on the right of ``=`` into a value
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import typing as _typing

import valuemerger.constants as constants

# Converts the raw right-hand side of an assignment into the stored value.
# For --set-file this reads a file; for --set/--set-string it infers a type.
ValueReader: _typing.TypeAlias = _abc.Callable[[str], _typing.Any]


@_dataclasses.dataclass(frozen=True, slots=True)
class ParserLimits:
    """Upper bounds enforced while applying an assignment."""

    max_index: int = constants.DEFAULT_MAX_INDEX
    max_nested_name_level: int = constants.DEFAULT_MAX_NESTED_NAME_LEVEL


DEFAULT_LIMITS = ParserLimits()
