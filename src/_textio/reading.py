import pathlib
from contextlib import contextmanager

from _textio.reader_closer import ReaderCloser, open_file


def read_tokens(*filelikes, config=None):
    """
    Reads the tokens of the given files and returns them as a list,
    ie. words = read_tokens("/my/words.txt")

    :param filelikes: Paths (str or pathlib.Path) or streams, read in
        order as one stream.
    :param config: The ReaderConfig to read with.
    """
    with lazy_read(*filelikes, config=config) as tokens:
        return list(tokens)


@contextmanager
def lazy_read(*filelikes, config=None):
    """
    Context manager giving an iterator over the tokens of the given files,
    files opened from paths are closed on exit.

    >>> with lazy_read("/my/words.txt") as words:
    ...     first = next(words)

    """
    reader = ReaderCloser(config=config)
    try:
        for filelike in filelikes:
            if isinstance(filelike, (str, pathlib.Path)):
                reader.add_sources(open_file(filelike))
            else:
                reader.source.extend(filelike)
        yield iter(reader)
    finally:
        reader.close()
