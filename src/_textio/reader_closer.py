import logging

from _textio.errors import ReaderError
from _textio.reader import Reader

logger = logging.getLogger(__name__)


def open_file(path):
    """
    Open path for binary reading.

    :raises ReaderError: (ErrorKind.OPEN) if the file could not be opened.
    """
    try:
        return open(path, "rb")
    except OSError as err:
        raise ReaderError.open(err)


class ReaderCloser(Reader):
    """
    A Reader owning its sources: every source with a close method is
    tracked in the order it was given, and closed by close() or when
    leaving the reader as a context manager.

    Copies made by the with_* methods changing the config share the tracked
    sources with the original, closing either closes them. Copies made with
    with_sources only own their new sources.

    >>> with ReaderCloser().from_file("words.txt") as reader:
    ...     words = reader.read_tokens()

    """

    def __init__(self, *sources, config=None):
        self.closers = []
        super().__init__(config=config)
        self.set_sources(*sources)

    def with_sources(self, *sources):
        new_reader = self._copy()
        new_reader.closers = []
        new_reader.set_sources(*sources)
        return new_reader

    def _track(self, sources):
        self.closers.extend(s for s in sources if hasattr(s, "close"))

    def set_sources(self, *sources):
        """
        Replace the sources of the reader, closing the previous ones.
        """
        try:
            self.close()
        except ReaderError as err:
            logger.warning("Failed to release previous sources: %s", err)
        self._track(sources)
        super().set_sources(*sources)

    def add_sources(self, *sources):
        self._track(sources)
        super().add_sources(*sources)

    def from_file(self, *paths):
        """
        :returns: A copy of the reader reading the given files in order.
            The original reader is not modified.
        :raises ReaderError: (ErrorKind.OPEN) if any file could not be
            opened, files opened before it are closed again.
        """
        files = []
        try:
            for path in paths:
                files.append(open_file(path))
        except ReaderError:
            for f in files:
                f.close()
            raise
        return self.with_sources(*files)

    def close(self):
        """
        Close every tracked source, even if closing one of them fails.

        :raises ReaderError: (ErrorKind.CLOSE) wrapping the first failure.
        """
        first_error = None
        closers = list(self.closers)
        del self.closers[:]
        for closer in closers:
            try:
                closer.close()
            except Exception as err:
                if first_error is None:
                    first_error = err
                else:
                    logger.debug("Additional failure closing %r: %s", closer, err)
        if first_error is not None:
            self._raise(ReaderError.close(first_error))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
