import copy
import logging
import sys
from dataclasses import replace

from _textio.config import ReaderConfig
from _textio.errors import ReaderError
from _textio.pipeline import ProcessingPipeline, Verdict
from _textio.scanner import IncrementalScanner
from _textio.sources import MultiSource
from _textio.streaming import DEFAULT_POLL_INTERVAL, StreamingCoordinator

logger = logging.getLogger(__name__)


class Reader:
    """
    Reads tokens from one or more sources, normalizing and filtering them
    as given by its ReaderConfig.

    >>> Reader("hello\\n world \\n").read_tokens()
    ['hello', 'world']

    Tokens can be collected with read_tokens, iterated over lazily, or
    streamed to a conduit with stream_tokens. All three share the same
    scanning loop and error behavior.

    A Reader is not thread safe, it reads its sources from whichever thread
    calls it.
    """

    def __init__(self, *sources, config=None):
        """
        :param sources: File-like objects, str or bytes, read in the given
            order as one stream.
        :param config: The ReaderConfig, defaults to ReaderConfig().
        """
        self.config = config if config is not None else ReaderConfig()
        self.source = MultiSource(*sources, encoding=self.config.encoding)

    @classmethod
    def from_stdin(cls, config=None):
        return cls(sys.stdin.buffer, config=config)

    def set_sources(self, *sources):
        """
        Replace the sources of the reader, any previous source is discarded.
        """
        self.source = MultiSource(*sources, encoding=self.config.encoding)

    def add_sources(self, *sources):
        """
        Append sources, read after the sources already given.
        """
        self.source.extend(*sources)

    def _copy(self, config=None, **changes):
        new_reader = copy.copy(self)
        if config is None:
            config = replace(self.config, **changes)
        new_reader.config = config
        new_reader.source = self.source.copy(encoding=config.encoding)
        return new_reader

    def with_config(self, config):
        """
        :returns: A copy of the reader with the given config. Text streams
            are encoded with the encoding of the new config.
        """
        return self._copy(config=config)

    def with_sources(self, *sources):
        """
        :returns: A copy of the reader reading from the given sources.
            The original reader is not modified.
        """
        new_reader = self._copy()
        new_reader.set_sources(*sources)
        return new_reader

    def from_string(self, text):
        return self.with_sources(text)

    def from_bytes(self, data):
        return self.with_sources(bytes(data))

    def with_delimiter(self, delimiter):
        return self._copy(delimiter=delimiter)

    def with_delimiter_str(self, text):
        return self._copy(delimiter=self.config.delimiter.with_token_str(text))

    def with_delimiter_regexp(self, source):
        return self._copy(delimiter=self.config.delimiter.with_token_regexp(source))

    def with_normalizer(self, normalize):
        return self._copy(normalize=normalize)

    def with_filter(self, filter):
        return self._copy(filter=filter)

    def _raise(self, error):
        if self.config.error_formatter is None:
            raise error
        raise self.config.error_formatter(error) from error

    def _accepted_tokens(self, accumulated=()):
        """
        The scanning loop, yields accepted tokens.

        :param accumulated: The tokens collected so far by the caller,
            attached to any ReaderError raised.
        :raises ReaderError: on invalid tokens with fail_on_invalid set, or on
            source failures with fail_on_error set.
        """
        config = self.config
        logger.debug("Scanning %r with %s", self.source, config.delimiter)
        pipeline = ProcessingPipeline.from_config(config)
        raw_tokens = iter(
            IncrementalScanner(
                self.source,
                config.delimiter,
                chunk_size=config.chunk_size,
                fail_on_error=config.fail_on_error,
            )
        )
        while True:
            try:
                raw_token = next(raw_tokens)
            except StopIteration:
                return
            except Exception as err:
                self._raise(ReaderError.read(err, tokens=accumulated))

            processed = pipeline.process(raw_token)
            if processed.verdict is Verdict.REJECTED:
                self._raise(
                    ReaderError.invalid(
                        processed.text, processed.offset, tokens=accumulated
                    )
                )
            if processed.verdict is Verdict.ACCEPTED:
                yield processed.text

    def __iter__(self):
        return self._accepted_tokens()

    def read_tokens(self):
        """
        Read all tokens.

        :returns: List of the accepted tokens.
        :raises ReaderError: if a token is invalid and config.fail_on_invalid
            is set (ErrorKind.INVALID), or a source fails and
            config.fail_on_error is set (ErrorKind.READ). The tokens accepted
            before the failure are found in the tokens attribute of the error.
        """
        tokens = []
        for token in self._accepted_tokens(tokens):
            tokens.append(token)
        return tokens

    def stream_tokens(
        self, out, cancellation=None, poll_interval=DEFAULT_POLL_INTERVAL
    ):
        """
        Hand each accepted token off to out, one at a time.

        :param out: The conduit, see _textio.streaming. It is not closed.
        :param cancellation: Optional Cancellation, checked at every hand-off.
        :param poll_interval: Seconds to wait for a hand-off before checking
            the cancellation again.
        :raises StreamCancelled: if cancellation fired before a token could be
            handed off. Tokens already handed off stay with the consumer.
        :raises ReaderError: as for read_tokens, with no tokens attached.
        """
        coordinator = StreamingCoordinator(out, cancellation, poll_interval)
        tokens = self._accepted_tokens()
        try:
            for token in tokens:
                coordinator.deliver(token)
        finally:
            tokens.close()

    def read(self, size=-1):
        """
        Read raw bytes from the sources, bypassing tokenization.

        :raises ReaderError: (ErrorKind.READ) if a source fails.
        """
        try:
            return self.source.read(size)
        except Exception as err:
            self._raise(ReaderError.read(err))
