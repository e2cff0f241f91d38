import textio.version
from _textio.config import ReaderConfig
from _textio.delimiter import Delimiter
from _textio.errors import ErrorKind, ReaderError
from _textio.filters import (
    all_of,
    any_of,
    filter_max_length,
    filter_min_length,
    filter_non_empty,
    filter_regexp,
    negate,
)
from _textio.normalizers import (
    chain_normalizers,
    normalize_lower,
    normalize_trim_space,
    normalize_upper,
)
from _textio.pattern import Match, Pattern
from _textio.reader import Reader
from _textio.reader_closer import ReaderCloser
from _textio.reading import lazy_read, read_tokens
from _textio.sources import MultiSource
from _textio.streaming import (
    Cancellation,
    Channel,
    ChannelClosed,
    DeadlineExceeded,
    StreamCancelled,
)

__version__ = textio.version.version

__all__ = [
    "Cancellation",
    "Channel",
    "ChannelClosed",
    "DeadlineExceeded",
    "Delimiter",
    "ErrorKind",
    "Match",
    "MultiSource",
    "Pattern",
    "Reader",
    "ReaderCloser",
    "ReaderConfig",
    "ReaderError",
    "StreamCancelled",
    "all_of",
    "any_of",
    "chain_normalizers",
    "filter_max_length",
    "filter_min_length",
    "filter_non_empty",
    "filter_regexp",
    "lazy_read",
    "negate",
    "normalize_lower",
    "normalize_trim_space",
    "normalize_upper",
    "read_tokens",
]
