"""
Parser for ``--set``, ``--set-string``, ``--set-file`` and ``--set-json``.

Grammar (one expression may hold several comma-separated assignments):

    assignment := path "=" value
    path       := name ( "." name | "[" index "]" )*
    value      := "{" item ("," item)* "}" | text

Names and values may contain ``\\`` escapes, so ``a\\.b=x`` sets the key
``"a.b"`` and ``a=x\\,y`` sets the string ``"x,y"``.

Assignments are applied in place to the destination document, creating
nested mappings and lists along the way. Lists are padded with None when
an index beyond the current end is assigned.

The parser follows Helm's strvals package, including its quirks:
``a=`` sets an empty string, ``a.`` at end of input is a no-op, and floats
are left as strings by the typed reader.
"""

from __future__ import annotations

import abc as _abc
import json as _json
import re as _re
import typing as _typing

import valuemerger.errors as errors
import valuemerger.strvals._scanner as _scanner
import valuemerger.strvals._types as _types

_KEY_STOP = frozenset("=[,.")
_INDEX_STOP = frozenset("]")
_LIST_ITEM_STOP = frozenset("[.=")
_VALUE_STOP = frozenset(",")
_LIST_STOP = frozenset(",}")

_INDEX_PATTERN = _re.compile(r"[+-]?[0-9]+")
_INT_PATTERN = _re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Returned by _val_list() when the value does not open with "{".
_NOT_A_LIST = object()


def quote(text: str) -> str:
    """Quote a key or value for an error message."""
    return _json.dumps(text, ensure_ascii=False)


def kind_of(value: _typing.Any) -> str:
    """Short type name of a document value, for conflict messages."""
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "map"
    if isinstance(value, list):
        return "list"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def typed_value(raw: str, force_string: bool = False) -> _typing.Any:
    """
    Infer the type of a ``--set`` value.

    ``true``/``false``/``null`` (any case) map to bool/None, base-10 integers
    in the signed 64-bit range map to int, and everything else (including
    floats and zero-prefixed numbers such as ``007``) stays a string.
    """
    if force_string:
        return raw

    folded = raw.casefold()
    if folded == "true":
        return True
    if folded == "false":
        return False
    if folded == "null":
        return None
    if raw == "0":
        return 0

    if raw and raw[0] != "0" and _INT_PATTERN.fullmatch(raw):
        number = int(raw)
        if _INT64_MIN <= number <= _INT64_MAX:
            return number

    return raw


def _reject_constant(name: str) -> _typing.NoReturn:
    raise ValueError(f"invalid JSON literal {name}")


_JSON_DECODER = _json.JSONDecoder(parse_constant=_reject_constant)


class BaseParser(_abc.ABC):
    """
    State and helpers shared by the escaped and literal grammars.

    Subclasses implement ``_key()``, which consumes one assignment (or one
    path segment of it) and returns False once the input is exhausted.
    """

    def __init__(
        self,
        text: str,
        data: dict[str, _typing.Any],
        limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
    ) -> None:
        self._sc = _scanner.Scanner(text)
        self._data = data
        self._limits = limits

    def parse(self) -> None:
        """Apply every assignment in the expression to the destination."""
        while self._key(self._data, 0):
            pass

    @_abc.abstractmethod
    def _key(self, data: dict[str, _typing.Any], level: int) -> bool:
        """Consume one assignment into ``data``; False at end of input."""
        ...

    @staticmethod
    def _set(data: dict[str, _typing.Any], key: str, value: _typing.Any) -> None:
        # Empty keys are silently dropped.
        if key:
            data[key] = value

    def _set_index(
        self,
        items: list[_typing.Any],
        index: int,
        value: _typing.Any,
    ) -> list[_typing.Any]:
        if index < 0:
            raise errors.ParseError(f"negative {index} index not allowed")
        if index > self._limits.max_index:
            raise errors.ParseError(
                f"index of {index} is greater than maximum supported index "
                f"of {self._limits.max_index}"
            )
        if len(items) <= index:
            items.extend([None] * (index + 1 - len(items)))
        items[index] = value
        return items

    def _check_level(self, level: int) -> None:
        if level > self._limits.max_nested_name_level:
            raise errors.ParseError(
                "value name nested level is greater than maximum supported "
                f"nested level of {self._limits.max_nested_name_level}"
            )

    def _key_index(self, *, escapes: bool = True) -> int:
        raw, last = self._sc.until(_INDEX_STOP, escapes=escapes)
        if last is None:
            raise errors.ParseError("error parsing index: unexpected end of input")
        if not _INDEX_PATTERN.fullmatch(raw):
            raise errors.ParseError(f"error parsing index: invalid list index {quote(raw)}")
        return int(raw)

    @staticmethod
    def _existing_map(data: dict[str, _typing.Any], key: str) -> dict[str, _typing.Any]:
        """The mapping stored under ``key``, or a new one if the key is absent."""
        if key not in data:
            return {}
        inner = data[key]
        if not isinstance(inner, dict):
            raise errors.AssignmentConflictError(
                f"unable to parse key: value of {quote(key)} is {kind_of(inner)}, not map"
            )
        return inner

    @staticmethod
    def _existing_list(data: dict[str, _typing.Any], key: str) -> list[_typing.Any]:
        """The list stored under ``key``, or a new one if the key is absent."""
        if key not in data:
            return []
        items = data[key]
        if not isinstance(items, list):
            raise errors.AssignmentConflictError(
                f"unable to parse key: value of {quote(key)} is {kind_of(items)}, not list"
            )
        return items

    @staticmethod
    def _element_list(items: list[_typing.Any], index: int) -> list[_typing.Any]:
        """The nested list at ``items[index]``; missing or null elements start empty."""
        if len(items) <= index or items[index] is None:
            return []
        current = items[index]
        if not isinstance(current, list):
            raise errors.AssignmentConflictError(
                f"unable to parse key: element {index} is {kind_of(current)}, not list"
            )
        return current

    @staticmethod
    def _element_map(items: list[_typing.Any], index: int) -> dict[str, _typing.Any]:
        """
        The nested mapping at ``items[index]``.

        An element of any other shape is replaced by a new mapping, which is
        how out-of-order indexes such as ``a[1]=x,a[0].b=y`` are handled.
        """
        inner: dict[str, _typing.Any] = {}
        if len(items) > index:
            current = items[index]
            if isinstance(current, dict):
                return current
            items[index] = inner
        return inner

    def _nested_key(self, data: dict[str, _typing.Any], key: str, level: int) -> bool:
        """Handle ``key.`` by descending into (or creating) a nested mapping."""
        self._check_level(level + 1)
        inner = self._existing_map(data, key)
        more = self._key(inner, level + 1)
        if more and not inner:
            raise errors.ParseError(f"key map {quote(key)} has no value")
        if inner:
            self._set(data, key, inner)
        return more


class Parser(BaseParser):
    """
    Escaped-grammar parser used by --set, --set-string, --set-file, --set-json.

    Args:
        text: The expression.
        data: Destination document, modified in place.
        reader: Converts raw value text into the stored value. Ignored in
            JSON mode.
        json_values: Decode each value as a JSON document (``--set-json``).
        limits: Index and nesting bounds.
    """

    def __init__(
        self,
        text: str,
        data: dict[str, _typing.Any],
        reader: _types.ValueReader | None = None,
        *,
        json_values: bool = False,
        limits: _types.ParserLimits = _types.DEFAULT_LIMITS,
    ) -> None:
        super().__init__(text, data, limits)
        self._reader = reader if reader is not None else typed_value
        self._json_values = json_values

    def _key(self, data: dict[str, _typing.Any], level: int) -> bool:
        key, last = self._sc.until(_KEY_STOP)

        if last is None:
            if not key:
                return False
            raise errors.ParseError(f"key {quote(key)} has no value")

        if last == "[":
            index = self._key_index()
            items = self._existing_list(data, key)
            items, more = self._list_item(items, index, level)
            self._set(data, key, items)
            return more

        if last == "=":
            if self._json_values:
                self._set(data, key, self._json_value())
                return True
            values = self._val_list()
            if values is None:
                self._set(data, key, "")
                return False
            if values is _NOT_A_LIST:
                self._set(data, key, self._reader(self._val()))
                return True
            self._set(data, key, values)
            return True

        if last == ",":
            self._set(data, key, "")
            raise errors.ParseError(f"key {quote(key)} has no value (cannot end with ,)")

        return self._nested_key(data, key, level)

    def _list_item(
        self,
        items: list[_typing.Any],
        index: int,
        level: int,
    ) -> tuple[list[_typing.Any], bool]:
        if index < 0:
            raise errors.ParseError(f"negative {index} index not allowed")

        # Anything between "]" and the next operator is ignored.
        _, last = self._sc.until(_LIST_ITEM_STOP)

        if last is None:
            raise errors.ParseError("error parsing index: unexpected end of input")

        if last == "=":
            if self._json_values:
                return self._set_index(items, index, self._json_value()), True
            values = self._val_list()
            if values is None:
                return self._set_index(items, index, ""), True
            if values is _NOT_A_LIST:
                return self._set_index(items, index, self._reader(self._val())), True
            return self._set_index(items, index, values), True

        if last == "[":
            next_index = self._key_index()
            nested, more = self._list_item(self._element_list(items, index), next_index, level)
            if not more:
                return items, False
            return self._set_index(items, index, nested), True

        inner = self._element_map(items, index)
        if not self._key(inner, level):
            return items, False
        return self._set_index(items, index, inner), True

    def _json_value(self) -> _typing.Any:
        """
        Decode one JSON value; an empty value (end of input or ``,``) is None.

        Trailing blanks and a single separating comma are consumed, so
        ``a={"x":1},b=[2]`` continues with ``b``.
        """
        if self._empty_val():
            return None
        try:
            value, end = _JSON_DECODER.raw_decode(self._sc.rest())
        except ValueError as e:
            raise errors.ParseError(f"invalid JSON value: {e}") from e
        self._sc.skip(end)
        self._empty_val()
        return value

    def _empty_val(self) -> bool:
        # Consumes blanks and a comma; any other character is pushed back.
        while True:
            ch = self._sc.read()
            if ch is None or ch == ",":
                return True
            if not ch.isspace():
                self._sc.unread()
                return False

    def _val(self) -> str:
        raw, _ = self._sc.until(_VALUE_STOP)
        return raw

    def _val_list(self) -> _typing.Any:
        """
        Read a ``{a,b,c}`` list value.

        Returns:
            The list, None at end of input, or _NOT_A_LIST when the value
            does not start with ``{`` (nothing is consumed in that case).
        """
        ch = self._sc.read()
        if ch is None:
            return None
        if ch != "{":
            self._sc.unread()
            return _NOT_A_LIST

        values: list[_typing.Any] = []
        while True:
            raw, last = self._sc.until(_LIST_STOP)
            if last is None:
                raise errors.ParseError("list must terminate with '}'")
            values.append(self._reader(raw))
            if last == "}":
                # A following comma separates the next assignment.
                following = self._sc.read()
                if following is not None and following != ",":
                    self._sc.unread()
                return values
