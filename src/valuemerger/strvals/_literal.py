"""
Parser for ``--set-literal``.

The path grammar matches the escaped parser, minus escapes and commas:
names end at ``=``, ``[`` or ``.`` and everything after the first ``=`` is
stored verbatim as a string. ``key=a,b=c`` therefore sets ``key`` to
``"a,b=c"``.
"""

from __future__ import annotations

import typing as _typing

import valuemerger.errors as errors
import valuemerger.strvals._parser as _parser

_KEY_STOP = frozenset("=[.")
_LIST_ITEM_STOP = frozenset("[.=")
_NOTHING: frozenset[str] = frozenset()


class LiteralParser(_parser.BaseParser):
    """Parser that applies one literal assignment to a document."""

    def _key(self, data: dict[str, _typing.Any], level: int) -> bool:
        key, last = self._sc.until(_KEY_STOP, escapes=False)

        if last is None:
            if not key:
                return False
            raise errors.ParseError(f"key {_parser.quote(key)} has no value")

        if last == "=":
            self._set(data, key, self._val())
            return True

        if last == ".":
            return self._nested_key(data, key, level)

        index = self._key_index(escapes=False)
        items = self._existing_list(data, key)
        items, more = self._list_item(items, index, level)
        self._set(data, key, items)
        return more

    def _list_item(
        self,
        items: list[_typing.Any],
        index: int,
        level: int,
    ) -> tuple[list[_typing.Any], bool]:
        if index < 0:
            raise errors.ParseError(f"negative {index} index not allowed")

        trailing, last = self._sc.until(_LIST_ITEM_STOP, escapes=False)
        if trailing:
            raise errors.ParseError(
                f"unexpected data at end of array index: {_parser.quote(trailing)}"
            )
        if last is None:
            return items, False

        if last == "=":
            return self._set_index(items, index, self._val()), True

        if last == ".":
            inner = self._element_map(items, index)
            if not self._key(inner, level):
                return items, False
            return self._set_index(items, index, inner), True

        next_index = self._key_index(escapes=False)
        nested, more = self._list_item(self._element_list(items, index), next_index, level)
        if not more:
            return items, False
        return self._set_index(items, index, nested), True

    def _val(self) -> str:
        raw, _ = self._sc.until(_NOTHING, escapes=False)
        return raw
