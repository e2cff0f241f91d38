import logging

from _textio.scanner.scan_kind import ScanKind
from _textio.scanner.step import scan
from _textio.sources import read_bytes

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 4096


class IncrementalScanner:
    """
    An iterable of raw tokens (bytes) for a given source and delimiter.

    >>> scanner = IncrementalScanner(io.BytesIO(b"a,b"), Delimiter().with_token_str(","))
    >>> list(scanner)
    [b'a', b'b']

    Once scanning has terminated, iterating the scanner again gives no
    further tokens.
    """

    def __init__(
        self, source, delimiter, chunk_size=DEFAULT_CHUNK_SIZE, fail_on_error=True
    ):
        """
        :param source: A file-like object, see _textio.sources.
        :param delimiter: The Delimiter separating tokens.
        :param chunk_size: The number of bytes to read whenever more data
            is needed.
        :param fail_on_error: If False, a failing source is treated as
            the end of input, otherwise its error propagates.
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.source = source
        self.delimiter = delimiter
        self.chunk_size = chunk_size
        self.fail_on_error = fail_on_error
        self.terminated = False
        self.bytes_read = 0

    def __iter__(self):
        return self.scan_tokens()

    def read_chunk(self):
        """
        :returns: The next chunk from the source, b"" at the end of input.
        """
        try:
            chunk = read_bytes(self.source, self.chunk_size)
        except Exception as err:
            if self.fail_on_error:
                raise
            logger.debug("Source failed after %d bytes: %s", self.bytes_read, err)
            return b""
        self.bytes_read += len(chunk)
        return chunk

    def scan_tokens(self):
        buffer = bytearray()
        at_eof = False
        while not self.terminated:
            step = scan(self.delimiter, buffer, at_eof)
            if step.kind == ScanKind.NEED_MORE:
                chunk = self.read_chunk()
                if chunk:
                    buffer += chunk
                else:
                    at_eof = True
                continue

            del buffer[: step.advance]
            if step.kind.terminates:
                self.terminated = True
                if buffer:
                    logger.debug(
                        "Scan stopped with %d unconsumed bytes", len(buffer)
                    )
            if step.token is not None:
                yield step.token
