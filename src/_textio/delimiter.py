import warnings
from dataclasses import dataclass, field, replace

from _textio.pattern import Pattern

DEFAULT_TOKEN = "\n"


@dataclass(frozen=True)
class Delimiter:
    """
    Pairs the token pattern, which splits the stream into tokens, with an
    optional stop pattern, which terminates the stream. See
    _textio.scanner.step.scan for the precedence between the two.

    A Delimiter is immutable, the with_* methods return a modified copy:

    >>> d = Delimiter().with_token_str(",").with_stop_str("--")
    >>> d.token.text, d.stop.text
    (b',', b'--')

    """

    token: Pattern = field(default_factory=lambda: Pattern.literal(DEFAULT_TOKEN))
    stop: Pattern = field(default_factory=Pattern.disabled)

    def __post_init__(self):
        if not self.token.enabled:
            raise ValueError("The token pattern of a delimiter must be enabled")
        if self.stop.enabled and self.stop == self.token:
            warnings.warn(
                f"Token and stop boundaries are both {self.token}, "
                "scanning terminates at the first boundary."
            )

    def with_token_str(self, text):
        """
        Split tokens on a literal string. The empty string gives the default
        newline delimiter.
        """
        return replace(self, token=Pattern.literal(text or DEFAULT_TOKEN))

    def with_token_regexp(self, source):
        return replace(self, token=Pattern.regexp(source))

    def with_token_compiled(self, expression):
        return replace(self, token=Pattern.compiled(expression))

    def with_stop_str(self, text):
        return replace(self, stop=Pattern.literal(text))

    def with_stop_regexp(self, source):
        return replace(self, stop=Pattern.regexp(source))

    def with_stop_compiled(self, expression):
        return replace(self, stop=Pattern.compiled(expression))

    def without_stop(self):
        return replace(self, stop=Pattern.disabled())

    def __str__(self):
        return f"Delimiter(token={self.token}, stop={self.stop})"
