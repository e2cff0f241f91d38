from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from _textio.delimiter import Delimiter
from _textio.normalizers import normalize_trim_space
from _textio.scanner.incremental_scanner import DEFAULT_CHUNK_SIZE


@dataclass(frozen=True)
class ReaderConfig:
    """
    The configuration of one scan. ReaderConfig is immutable, use the
    with_* methods to get a modified copy.

    :param delimiter: Delimiter splitting (and possibly stopping) the stream.
    :param normalize: Applied to each token before filtering, None to
        leave tokens as read.
    :param filter: Decides whether a normalized token is valid, None to
        accept every token.
    :param fail_on_error: Raise ReaderError(ErrorKind.READ) if a source fails,
        otherwise the failure ends the stream.
    :param fail_on_invalid: Raise ReaderError(ErrorKind.INVALID) for tokens
        rejected by filter, otherwise they are skipped.
    :param user_context: Passed as second argument to normalize and filter.
    :param encoding: Encoding of the byte sources.
    :param chunk_size: Number of bytes read from the sources at a time.
    :param error_formatter: If given, ReaderErrors are passed through it
        and the returned exception is raised instead.
    """

    delimiter: Delimiter = field(default_factory=Delimiter)
    normalize: Optional[Callable[[str, Any], str]] = normalize_trim_space
    filter: Optional[Callable[[str, Any], bool]] = None
    fail_on_error: bool = True
    fail_on_invalid: bool = False
    user_context: Any = None
    encoding: str = "utf-8"
    chunk_size: int = DEFAULT_CHUNK_SIZE
    error_formatter: Optional[Callable[[Exception], Exception]] = None

    def __post_init__(self):
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    def with_delimiter(self, delimiter):
        return replace(self, delimiter=delimiter)

    def with_delimiter_str(self, text):
        return replace(self, delimiter=self.delimiter.with_token_str(text))

    def with_delimiter_regexp(self, source):
        return replace(self, delimiter=self.delimiter.with_token_regexp(source))

    def with_delimiter_compiled(self, expression):
        return replace(self, delimiter=self.delimiter.with_token_compiled(expression))

    def with_stop_str(self, text):
        return replace(self, delimiter=self.delimiter.with_stop_str(text))

    def with_stop_regexp(self, source):
        return replace(self, delimiter=self.delimiter.with_stop_regexp(source))

    def with_normalizer(self, normalize):
        return replace(self, normalize=normalize)

    def with_filter(self, filter):
        return replace(self, filter=filter)

    def with_fail_on_error(self, fail_on_error=True):
        return replace(self, fail_on_error=fail_on_error)

    def with_fail_on_invalid(self, fail_on_invalid=True):
        return replace(self, fail_on_invalid=fail_on_invalid)

    def with_user_context(self, user_context):
        return replace(self, user_context=user_context)

    def with_error_formatter(self, error_formatter):
        return replace(self, error_formatter=error_formatter)

    def with_chunk_size(self, chunk_size):
        return replace(self, chunk_size=chunk_size)
