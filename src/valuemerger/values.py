"""
The value merger: values files plus ``--set``-style overrides.

Precedence, lowest to highest:

1. ``-f/--values`` files, in order (later files win, deep-merged)
2. ``--set-json``
3. ``--set``
4. ``--set-string``
5. ``--set-file``
6. ``--set-literal``

Within each kind, expressions apply in the order given. The first error
aborts the merge; no partial document is returned.

Example:
    >>> opts = Options(values=["replicas=2"], string_values=["tag=1.10"])
    >>> opts.merge_values()
    {'replicas': 2, 'tag': '1.10'}
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import typing as _typing

import valuemerger.errors as errors
import valuemerger.merge as merge
import valuemerger.sources as sources
import valuemerger.strvals as strvals

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass
class Options:
    """The different ways of specifying values."""

    value_files: list[str] = _dataclasses.field(default_factory=list)  # -f/--values
    json_values: list[str] = _dataclasses.field(default_factory=list)  # --set-json
    values: list[str] = _dataclasses.field(default_factory=list)  # --set
    string_values: list[str] = _dataclasses.field(default_factory=list)  # --set-string
    file_values: list[str] = _dataclasses.field(default_factory=list)  # --set-file
    literal_values: list[str] = _dataclasses.field(default_factory=list)  # --set-literal

    def merge_values(
        self,
        *,
        limits: strvals.ParserLimits = strvals.DEFAULT_LIMITS,
    ) -> dict[str, _typing.Any]:
        """Merge these options into a single document. See ``merge_values``."""
        return merge_values(self, limits=limits)


def _read_file_value(reference: str) -> str:
    """--set-file reader: the value names a file (or ``-``) to read as text."""
    return sources.read_text(reference)


def _wrap(
    error: errors.ValuesError,
    context: str,
    expression: str,
) -> errors.ValuesError:
    wrapped = error.wrapped(context)
    # A source set by the reader (e.g. the --set-file target) is kept.
    if isinstance(wrapped, errors.ParseError) and wrapped.source is None:
        wrapped.source = expression
    return wrapped


def merge_values(
    options: Options,
    *,
    limits: strvals.ParserLimits = strvals.DEFAULT_LIMITS,
) -> dict[str, _typing.Any]:
    """
    Merge values files and assignment expressions into one document.

    Args:
        options: Files and expressions to merge.
        limits: Index and nesting bounds for assignment expressions.

    Returns:
        A new nested document.

    Raises:
        ReadError: A values file, ``--set-file`` target, or stdin could not
            be read.
        ParseError: A values file or expression is malformed. ``source``
            names the file path or the raw expression.
        AssignmentConflictError: An expression assigns through a value of
            the wrong shape.
    """
    base: dict[str, _typing.Any] = {}

    for file_path in options.value_files:
        content = sources.read_file(file_path)
        current = sources.load_values_document(content, file_path)
        _logger.debug("Merging values file %s (%d top-level keys)", file_path, len(current))
        base = merge.merge_maps(base, current)

    for expression in options.json_values:
        try:
            strvals.parse_json_into(expression, base, limits=limits)
        except errors.ValuesError as e:
            raise _wrap(e, f"failed parsing --set-json data {expression}", expression) from e
        _logger.debug("Applied --set-json %s", expression)

    for expression in options.values:
        try:
            strvals.parse_into(expression, base, limits=limits)
        except errors.ValuesError as e:
            raise _wrap(e, "failed parsing --set data", expression) from e
        _logger.debug("Applied --set %s", expression)

    for expression in options.string_values:
        try:
            strvals.parse_string_into(expression, base, limits=limits)
        except errors.ValuesError as e:
            raise _wrap(e, "failed parsing --set-string data", expression) from e
        _logger.debug("Applied --set-string %s", expression)

    for expression in options.file_values:
        try:
            strvals.parse_file_into(expression, base, _read_file_value, limits=limits)
        except errors.ValuesError as e:
            raise _wrap(e, "failed parsing --set-file data", expression) from e
        _logger.debug("Applied --set-file %s", expression)

    for expression in options.literal_values:
        try:
            strvals.parse_literal_into(expression, base, limits=limits)
        except errors.ValuesError as e:
            raise _wrap(e, "failed parsing --set-literal data", expression) from e
        _logger.debug("Applied --set-literal %s", expression)

    return base
