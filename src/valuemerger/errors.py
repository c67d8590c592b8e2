"""
Exception types raised while merging values.

Hierarchy:
- ValuesError: base for everything this package raises
  - ReadError: a values file, --set-file target, or stdin could not be read
  - ParseError: file content or an assignment expression is malformed
    - AssignmentConflictError: an assignment path collides with an existing
      value of an incompatible shape

Errors are raised at the point of failure and wrapped with context on the
way out via ``wrapped()``, which keeps the concrete class and its attributes.
"""

from __future__ import annotations

import typing as _typing

_E = _typing.TypeVar("_E", bound="ValuesError")


class ValuesError(Exception):
    """Base class for value merging errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def wrapped(self: _E, context: str) -> _E:
        """
        Return a copy of this error with ``context`` prepended to the message.

        The copy has the same class and attributes, so callers can still
        catch e.g. ``ReadError`` after the merger adds its flag context.
        Raise the copy ``from`` the original to keep the chain.
        """
        cls = type(self)
        clone = cls.__new__(cls)
        clone.__dict__.update(self.__dict__)
        clone.message = f"{context}: {self.message}"
        clone.args = (clone.message,)
        return clone


class ReadError(ValuesError):
    """A file reference (or standard input) could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        if path.strip() == "-":
            super().__init__(f"cannot read standard input: {reason}")
        else:
            super().__init__(f"cannot read {path}: {reason}")


class ParseError(ValuesError):
    """Content or an assignment expression is not valid for its grammar."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        self.source = source
        super().__init__(message)


class AssignmentConflictError(ParseError):
    """An assignment path runs into an existing value of the wrong shape."""

    pass
