"""
Deep merge of values documents.

Nested mappings combine key by key; every other kind of value (scalars,
lists, None) is replaced outright by the later value. Lists are never
merged element-wise.

Example:
    >>> merge_maps({"a": {"x": 1}}, {"a": {"y": 2}})
    {'a': {'x': 1, 'y': 2}}
    >>> merge_maps({"a": {"x": 1}}, {"a": 5})
    {'a': 5}
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing


def merge_maps(
    a: _abc.Mapping[str, _typing.Any],
    b: _abc.Mapping[str, _typing.Any],
) -> dict[str, _typing.Any]:
    """
    Merge ``b`` onto ``a`` and return the result as a new dict.

    Neither argument is modified. Mappings along merged paths are rebuilt;
    leaf values are shared with the inputs, not copied.

    Args:
        a: Existing (lower precedence) document.
        b: Incoming (higher precedence) document.

    Returns:
        The merged document.
    """
    out = dict(a)
    for key, value in b.items():
        if isinstance(value, _abc.Mapping):
            existing = out.get(key)
            if isinstance(existing, _abc.Mapping):
                out[key] = merge_maps(existing, value)
                continue
        out[key] = value
    return out
