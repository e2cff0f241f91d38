import inspect
import os
from enum import Enum, unique


@unique
class ErrorKind(Enum):
    INVALID = "invalid token"
    READ = "read error"
    CLOSE = "close error"
    OPEN = "open error"


def caller_provenance(stacklevel):
    """
    :param stacklevel: 1 for the caller of the function calling
        caller_provenance, 2 for its caller, etc.
    :returns: Tuple of file name, function name and line number of that
        frame.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(stacklevel + 1):
            if frame.f_back is None:
                break
            frame = frame.f_back
        code = frame.f_code
        return os.path.basename(code.co_filename), code.co_name, frame.f_lineno
    finally:
        del frame


class ReaderError(Exception):
    """
    Raised by readers when a token is invalid (ErrorKind.INVALID), or when
    reading (ErrorKind.READ), closing (ErrorKind.CLOSE) or opening
    (ErrorKind.OPEN) a source fails.

    The error records where it was created (file_name, func_name and line),
    and, when raised by a batch read, the tokens accepted before the failure.
    """

    def __init__(
        self, kind, cause=None, token=None, offset=-1, tokens=(), stacklevel=1
    ):
        if not isinstance(kind, ErrorKind):
            raise TypeError(f"Expected an ErrorKind, got {kind!r}")
        self._kind = kind
        self._cause = cause
        self._token = token
        self._offset = offset
        self._tokens = tuple(tokens)
        self._file_name, self._func_name, self._line = caller_provenance(stacklevel)
        super().__init__(str(self))
        self.__cause__ = cause

    @classmethod
    def invalid(cls, token, offset, tokens=()):
        return cls(
            ErrorKind.INVALID, token=token, offset=offset, tokens=tokens, stacklevel=2
        )

    @classmethod
    def read(cls, cause, tokens=()):
        return cls(ErrorKind.READ, cause=cause, tokens=tokens, stacklevel=2)

    @classmethod
    def close(cls, cause):
        return cls(ErrorKind.CLOSE, cause=cause, stacklevel=2)

    @classmethod
    def open(cls, cause):
        return cls(ErrorKind.OPEN, cause=cause, stacklevel=2)

    @property
    def kind(self):
        return self._kind

    @property
    def cause(self):
        return self._cause

    @property
    def token(self):
        return self._token

    @property
    def offset(self):
        return self._offset

    @property
    def tokens(self):
        return self._tokens

    @property
    def file_name(self):
        return self._file_name

    @property
    def func_name(self):
        return self._func_name

    @property
    def line(self):
        return self._line

    def is_kind(self, kind):
        return self._kind is kind

    def unwrap(self):
        return self._cause

    def __str__(self):
        message = f"textio: {self._kind.value}"
        if self._kind is ErrorKind.INVALID:
            message += f" {self._token!r} at offset {self._offset}"
        if self._cause is not None:
            message += f": {self._cause}"
        return message

    def __repr__(self):
        return (
            f"ReaderError({self._kind}, cause={self._cause!r}, "
            f"token={self._token!r}, offset={self._offset}, "
            f"at={self._file_name}:{self._line} in {self._func_name})"
        )
