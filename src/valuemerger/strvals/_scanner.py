"""
Character scanner for assignment expressions.

The scanner walks a string one character at a time with single-step
pushback, which is all the grammar needs. End of input is reported as
``None`` rather than raised.
"""

from __future__ import annotations


class Scanner:
    """Cursor over an expression string."""

    __slots__ = ("_text", "_pos")

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def read(self) -> str | None:
        """Consume and return the next character, or None at end of input."""
        if self._pos >= len(self._text):
            return None
        ch = self._text[self._pos]
        self._pos += 1
        return ch

    def unread(self) -> None:
        """Push back the character returned by the last ``read()``."""
        if self._pos > 0:
            self._pos -= 1

    def rest(self) -> str:
        """The unconsumed remainder of the input (not consumed by this call)."""
        return self._text[self._pos :]

    def skip(self, count: int) -> None:
        """Consume ``count`` characters."""
        self._pos = min(self._pos + count, len(self._text))

    def until(
        self,
        stop: frozenset[str],
        *,
        escapes: bool = True,
    ) -> tuple[str, str | None]:
        """
        Consume characters up to and including the first one in ``stop``.

        With ``escapes`` enabled a backslash makes the following character
        literal, so ``a\\.b`` scanned with ``.`` as a stop yields ``a.b``.

        Returns:
            Tuple of (text read, stop character). The stop character is None
            when the input ran out first.
        """
        chars: list[str] = []
        while True:
            ch = self.read()
            if ch is None:
                return "".join(chars), None
            if ch in stop:
                return "".join(chars), ch
            if escapes and ch == "\\":
                escaped = self.read()
                if escaped is None:
                    return "".join(chars), None
                chars.append(escaped)
                continue
            chars.append(ch)
