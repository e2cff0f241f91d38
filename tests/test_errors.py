import pytest

from _textio.errors import ErrorKind, ReaderError


def test_provenance_is_the_constructing_call_site():
    err = ReaderError(ErrorKind.READ, cause=OSError("gone"))
    assert err.file_name == "test_errors.py"
    assert err.func_name == "test_provenance_is_the_constructing_call_site"
    assert isinstance(err.line, int)


def test_factory_provenance_skips_the_factory():
    err = ReaderError.close(OSError("gone"))
    assert err.func_name == "test_factory_provenance_skips_the_factory"


def test_unwraps_to_cause():
    cause = OSError("gone")
    err = ReaderError.read(cause)
    assert err.unwrap() is cause
    assert err.cause is cause
    assert err.__cause__ is cause
    assert err.is_kind(ErrorKind.READ)
    assert not err.is_kind(ErrorKind.CLOSE)


def test_invalid_token_error():
    err = ReaderError.invalid("hi", 5, tokens=["hello"])
    assert err.kind is ErrorKind.INVALID
    assert err.token == "hi"
    assert err.offset == 5
    assert err.tokens == ("hello",)
    assert err.cause is None
    assert str(err) == "textio: invalid token 'hi' at offset 5"


def test_message_includes_cause():
    err = ReaderError.open(FileNotFoundError("no such file"))
    assert str(err) == "textio: open error: no such file"
    assert err.offset == -1


def test_fields_are_read_only():
    err = ReaderError.read(OSError())
    with pytest.raises(AttributeError):
        err.kind = ErrorKind.CLOSE


def test_kind_must_be_error_kind():
    with pytest.raises(TypeError):
        ReaderError("read")
