"""
Sources are file-like objects with a read(size) method. Several sources are
concatenated into one logical byte stream with MultiSource.
"""

import io


def as_source(sourcelike, encoding="utf-8"):
    """
    Wrap str, bytes and bytearray values in a binary stream, file-like
    objects are returned as is.
    """
    if isinstance(sourcelike, str):
        return io.BytesIO(sourcelike.encode(encoding))
    if isinstance(sourcelike, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(sourcelike))
    if not hasattr(sourcelike, "read"):
        raise TypeError(
            f"Expected a file-like object, str or bytes, got {type(sourcelike)}"
        )
    return sourcelike


def read_bytes(source, size, encoding="utf-8"):
    """
    Read at most size bytes from source. Text streams return str, which is
    encoded.
    """
    chunk = source.read(size)
    if not chunk:
        return b""
    if isinstance(chunk, str):
        return chunk.encode(encoding)
    return bytes(chunk)


class MultiSource:
    """
    Reads from each of the given sources in order, as if they were one
    stream. A source is left once it returns an empty read.

    >>> MultiSource("a\\nb\\n", "c\\n").read()
    b'a\\nb\\nc\\n'

    """

    def __init__(self, *sources, encoding="utf-8"):
        self.encoding = encoding
        self.sources = [as_source(s, encoding) for s in sources]
        self._current = 0

    def copy(self, encoding=None):
        """
        A MultiSource over the sources not yet exhausted, extending one of
        them leaves the other unchanged. The underlying streams are shared.

        str and bytes sources were encoded when given, a new encoding only
        applies to text streams and to sources given later.
        """
        new_source = MultiSource(encoding=encoding or self.encoding)
        new_source.sources = self.sources[self._current :]
        return new_source

    def extend(self, *sources):
        self.sources.extend(as_source(s, self.encoding) for s in sources)

    @property
    def exhausted(self):
        return self._current >= len(self.sources)

    def read(self, size=-1):
        if size is None or size < 0:
            return b"".join(iter(lambda: self.read(io.DEFAULT_BUFFER_SIZE), b""))

        while not self.exhausted:
            chunk = read_bytes(self.sources[self._current], size, self.encoding)
            if chunk:
                return chunk
            self._current += 1
        return b""

    def __repr__(self):
        return f"MultiSource({', '.join(repr(s) for s in self.sources)})"
