import io
import re

import pytest

from _textio.config import ReaderConfig
from _textio.delimiter import Delimiter
from _textio.errors import ErrorKind, ReaderError
from _textio.filters import filter_min_length, filter_regexp
from _textio.normalizers import (
    chain_normalizers,
    normalize_trim_space,
    normalize_upper,
)
from _textio.reader import Reader

only_letters = filter_regexp("^[A-Za-z]+$")


@pytest.fixture(params=[1, 3, 4096])
def make_reader(request):
    def make_reader(*sources, **config):
        return Reader(
            *sources, config=ReaderConfig(chunk_size=request.param, **config)
        )

    return make_reader


def test_default_config():
    config = Reader().config
    assert config.delimiter == Delimiter()
    assert config.normalize is normalize_trim_space
    assert config.filter is None
    assert config.fail_on_error
    assert not config.fail_on_invalid


def test_read_tokens(make_reader):
    assert make_reader("hello\nworld\ntest").read_tokens() == [
        "hello",
        "world",
        "test",
    ]


def test_empty_input(make_reader):
    assert make_reader("").read_tokens() == []


def test_default_normalizer_trims(make_reader):
    assert make_reader("hello \n world\n").read_tokens() == ["hello", "world"]


def test_blank_lines_are_tokens(make_reader):
    assert make_reader("hello\nworld\n\ntest\n  ").read_tokens() == [
        "hello",
        "world",
        "",
        "test",
        "",
    ]


def test_normalizer(make_reader):
    reader = make_reader(
        "  hello  \n  WORLD  \n  TeSt  ",
        normalize=chain_normalizers(normalize_trim_space, normalize_upper),
    )
    assert reader.read_tokens() == ["HELLO", "WORLD", "TEST"]


def test_skip_filter(make_reader):
    reader = make_reader("hello\nhi\nworld", filter=filter_min_length(3))
    assert reader.read_tokens() == ["hello", "world"]


def test_fail_fast_filter(make_reader):
    reader = make_reader(
        "hello\nhi\nworld", filter=filter_min_length(3), fail_on_invalid=True
    )
    with pytest.raises(ReaderError) as excinfo:
        reader.read_tokens()

    err = excinfo.value
    assert err.kind is ErrorKind.INVALID
    assert err.token == "hi"
    assert err.offset == len("hello")
    assert err.tokens == ("hello",)


def test_invalid_character_fails():
    config = ReaderConfig(filter=only_letters, fail_on_invalid=True)
    reader = Reader("hellé\n", config=config)
    with pytest.raises(ReaderError, match="invalid token"):
        reader.read_tokens()


def test_user_context():
    class Context:
        counter = 0

    def counting_normalizer(token, context):
        context.counter += 1
        return token.strip()

    context = Context()
    config = ReaderConfig(normalize=counting_normalizer, user_context=context)
    assert len(Reader("one\ntwo\nthree", config=config).read_tokens()) == 3
    assert context.counter == 3


@pytest.mark.parametrize(
    "delimiter, contents",
    [
        (Delimiter().with_token_str(","), "one,two,three"),
        (Delimiter().with_token_str(";"), "one;two;three"),
        (Delimiter().with_token_regexp(r"\s+"), "one  two   three"),
        (Delimiter().with_token_compiled(re.compile(r"\d+")), "one123two456three"),
        (Delimiter().with_token_str(""), "one\ntwo\nthree"),
    ],
)
def test_delimiters(make_reader, delimiter, contents):
    assert make_reader(contents, delimiter=delimiter).read_tokens() == [
        "one",
        "two",
        "three",
    ]


def test_word_delimiter():
    reader = Reader("hello next world nextnext").with_delimiter_str("next")
    assert reader.read_tokens() == ["hello", "world", ""]


def test_stop_boundary(make_reader):
    reader = make_reader(
        "hello\nworld\nend", delimiter=Delimiter().with_stop_str("end")
    )
    assert reader.read_tokens() == ["hello", "world"]


def test_stop_boundary_at_start(make_reader):
    reader = make_reader("end", delimiter=Delimiter().with_stop_str("end"))
    assert reader.read_tokens() == []


def test_sources_are_concatenated(make_reader):
    reader = make_reader("a\nb\n", io.BytesIO(b"c\nd\n"))
    assert reader.read_tokens() == ["a", "b", "c", "d"]


def test_add_sources():
    reader = Reader("first\nsecond\n")
    reader.add_sources(io.StringIO("third\nfourth\n"))
    assert reader.read_tokens() == ["first", "second", "third", "fourth"]


def test_add_sources_to_copy_leaves_original():
    reader = Reader("a\n")
    reader.with_delimiter_str(",").add_sources("zzz\n")
    assert reader.read_tokens() == ["a"]


def test_with_config_encodes_text_streams_with_new_encoding():
    reader = Reader(io.StringIO("é\n")).with_config(ReaderConfig(encoding="latin-1"))
    reader.add_sources(io.StringIO("ø\n"))
    assert reader.read_tokens() == ["é", "ø"]


def test_reading_exhausted_reader_gives_nothing():
    reader = Reader("a\nb")
    assert reader.read_tokens() == ["a", "b"]
    assert reader.read_tokens() == []


def test_iteration_is_lazy():
    reader = Reader("a\nb\nc", config=ReaderConfig(chunk_size=2))
    tokens = iter(reader)
    assert next(tokens) == "a"
    assert reader.read(2) == b"b\n"
    assert list(tokens) == ["c"]


def test_iteration_raises_without_tokens():
    config = ReaderConfig(filter=filter_min_length(3), fail_on_invalid=True)
    tokens = iter(Reader("hello\nhi", config=config))
    assert next(tokens) == "hello"
    with pytest.raises(ReaderError) as excinfo:
        next(tokens)
    assert excinfo.value.tokens == ()


def test_with_methods_do_not_modify_original():
    original = Reader("a,b")
    changed = original.with_delimiter_str(",").with_filter(filter_min_length(3))
    assert original.config == ReaderConfig()
    assert changed.config.delimiter.token.text == b","
    assert changed.config.filter is not None


def test_from_string_and_bytes():
    reader = Reader().with_delimiter_str(",")
    assert reader.from_string("a,b").read_tokens() == ["a", "b"]
    assert reader.from_bytes(b"c,d").read_tokens() == ["c", "d"]


class FailingSource:
    def __init__(self, contents=b""):
        self.contents = io.BytesIO(contents)

    def read(self, size=-1):
        chunk = self.contents.read(size)
        if not chunk:
            raise OSError("unexpected end of file")
        return chunk


def test_read_error():
    reader = Reader(FailingSource(b"a\nb\nc"))
    with pytest.raises(ReaderError) as excinfo:
        reader.read_tokens()

    err = excinfo.value
    assert err.kind is ErrorKind.READ
    assert isinstance(err.cause, OSError)
    assert err.tokens == ("a", "b")
    assert err.file_name == "reader.py"


def test_read_error_ignored():
    reader = Reader(
        FailingSource(b"a\nb\nc"), config=ReaderConfig(fail_on_error=False)
    )
    assert reader.read_tokens() == ["a", "b", "c"]


def test_both_policies_off_drops_silently():
    config = ReaderConfig(
        filter=filter_min_length(3), fail_on_error=False, fail_on_invalid=False
    )
    reader = Reader(FailingSource(b"hello\nhi\nworld"), config=config)
    assert reader.read_tokens() == ["hello", "world"]


def test_raw_read():
    reader = Reader("hello world")
    assert reader.read(5) == b"hello"
    assert reader.read(10) == b" world"
    assert reader.read(10) == b""


def test_raw_read_error():
    with pytest.raises(ReaderError) as excinfo:
        Reader(FailingSource()).read(10)
    assert excinfo.value.kind is ErrorKind.READ
    assert isinstance(excinfo.value.__cause__, OSError)


def test_error_formatter():
    def formatter(err):
        return RuntimeError(f"could not read: {err.kind.name}")

    config = ReaderConfig(error_formatter=formatter)
    with pytest.raises(RuntimeError, match="could not read: READ") as excinfo:
        Reader(FailingSource(), config=config).read_tokens()
    assert isinstance(excinfo.value.__cause__, ReaderError)


class BrokenSource:
    def read(self, size=-1):
        raise RuntimeError("broken source")


def test_any_source_failure_is_read_error():
    with pytest.raises(ReaderError) as excinfo:
        Reader("a\n", BrokenSource()).read_tokens()
    assert excinfo.value.kind is ErrorKind.READ
    assert isinstance(excinfo.value.cause, RuntimeError)
    assert excinfo.value.tokens == ("a",)


def test_any_source_failure_ignored():
    config = ReaderConfig(fail_on_error=False)
    assert Reader(BrokenSource(), config=config).read_tokens() == []


def test_any_raw_read_failure_is_read_error():
    with pytest.raises(ReaderError) as excinfo:
        Reader(BrokenSource()).read(10)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
