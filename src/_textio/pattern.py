"""
A pattern recognizes a single boundary in a byte buffer. It is either a
literal byte string or a compiled (bytes) regular expression, never both.

Expressions are matched with the regex module rather than re, as it can tell
whether the tail of a buffer is the beginning of a match that more bytes
could complete (partial matching).
"""

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional

import regex

# Flags with the same value and meaning in re and regex.
PORTABLE_FLAGS = re.IGNORECASE | re.LOCALE | re.MULTILINE | re.DOTALL | re.VERBOSE


class Match(NamedTuple):
    start: int
    width: int

    @property
    def end(self):
        return self.start + self.width


def as_bytes(stringlike):
    """
    If given a str, encode it as utf-8, otherwise return the bytes unchanged.
    """
    if isinstance(stringlike, str):
        return stringlike.encode("utf-8")
    return bytes(stringlike)


def as_bytes_pattern(compiled):
    """
    Regular expressions matched against the scan buffer have to be regex
    bytes patterns. Anything else, ie. an re pattern or a str pattern, is
    recompiled from its source with the flags that are meaningful for bytes.
    """
    if isinstance(compiled, regex.Pattern):
        if isinstance(compiled.pattern, bytes):
            return compiled
        flags = compiled.flags & ~(regex.UNICODE | regex.ASCII)
    else:
        flags = compiled.flags & PORTABLE_FLAGS
    return regex.compile(as_bytes(compiled.pattern), flags)


@dataclass(frozen=True)
class Pattern:
    """
    A boundary recognizer. Use the constructors Pattern.literal,
    Pattern.regexp, Pattern.compiled and Pattern.disabled rather than
    giving both fields directly.

    >>> Pattern.literal(",").find(b"a,b")
    Match(start=1, width=1)
    """

    text: bytes = b""
    expression: Optional[regex.Pattern] = None

    def __post_init__(self):
        if self.text and self.expression is not None:
            raise ValueError("A pattern is either a literal or an expression")

    @classmethod
    def literal(cls, text):
        return cls(text=as_bytes(text))

    @classmethod
    def compiled(cls, expression):
        if expression is None:
            raise ValueError("Expected a compiled regular expression, got None")
        return cls(expression=as_bytes_pattern(expression))

    @classmethod
    def regexp(cls, source):
        """
        Compile the given expression source.

        :raises ValueError: if the expression is empty, regex.error if it
            does not compile.
        """
        if not source:
            raise ValueError("empty regexp is not allowed")
        return cls(expression=regex.compile(as_bytes(source)))

    @classmethod
    def disabled(cls):
        return cls()

    @property
    def enabled(self):
        return bool(self.text) or self.expression is not None

    @property
    def is_literal(self):
        return bool(self.text)

    def find(self, buffer):
        """
        :returns: The leftmost Match in buffer, or None.
        """
        if self.expression is not None:
            # Empty matches never split the stream.
            for found in self.expression.finditer(buffer):
                if found.end() > found.start():
                    return Match(found.start(), found.end() - found.start())
            return None

        if self.text:
            idx = buffer.find(self.text)
            if idx < 0:
                return None
            return Match(idx, len(self.text))

        return None

    def pending_start(self, buffer):
        """
        The earliest index at which the tail of buffer is an incomplete
        match, ie. where a match could still begin once more bytes are read.
        None if a complete match comes first or nothing could match, and
        always None for disabled patterns.

        >>> Pattern.literal("end").pending_start(b"hello\\ne")
        6
        """
        if self.expression is not None:
            return self._expression_pending_start(buffer)
        if not self.text:
            return None
        first = max(0, len(buffer) - len(self.text) + 1)
        for idx in range(first, len(buffer)):
            if self.text.startswith(buffer[idx:]):
                return idx
        return None

    def _expression_pending_start(self, buffer):
        pos = 0
        while pos <= len(buffer):
            found = self.expression.search(buffer, pos, partial=True)
            if found is None:
                return None
            if found.partial:
                return found.start() if found.start() < len(buffer) else None
            if found.end() > found.start():
                return None
            # Empty matches never split the stream, look further.
            pos = found.start() + 1
        return None

    def may_extend(self, buffer, match):
        """
        Whether reading more bytes could change the given match, which
        happens when an expression match runs up to the end of the buffer.
        """
        return self.expression is not None and match.end >= len(buffer)

    def __str__(self):
        if self.expression is not None:
            return f"re({self.expression.pattern!r})"
        if self.text:
            return repr(self.text)
        return "disabled"
