import time

import pytest

from splurge_safe_copy.constants import DEFAULT_BUFFER_SIZE, MIN_BUFFER_SIZE
from splurge_safe_copy.exceptions import (
    SplurgeSafeCopyFileDecodingError,
    SplurgeSafeCopyFileNotFoundError,
    SplurgeSafeCopyLookupError,
    SplurgeSafeCopyParameterError,
    SplurgeSafeCopyRuntimeError,
)
from splurge_safe_copy.path_validator import PathValidator
from splurge_safe_copy.safe_source_reader import SafeSourceReader


def test_iter_bytes_yields_single_bytes(input_file):
    p = input_file(b"ab\n\xff")
    with SafeSourceReader(p) as reader:
        units = list(reader.iter_bytes())
    assert units == [b"a", b"b", b"\n", b"\xff"]


def test_iter_chars_decodes_multibyte_across_blocks(input_file):
    # Place the two-byte "ü" so it straddles the first raw read
    text = "a" * (MIN_BUFFER_SIZE - 1) + "ü" + "z\r\n"
    p = input_file(text)
    with SafeSourceReader(p, buffer_size=MIN_BUFFER_SIZE) as reader:
        assert "".join(reader.iter_chars()) == text


def test_iter_lines_mixed_terminators(input_file):
    p = input_file("line1\r\nline2\nline3\rline4 ü\nline5")
    with SafeSourceReader(p) as reader:
        lines = list(reader.iter_lines())
    assert lines == [
        ("line1", "\r\n"),
        ("line2", "\n"),
        ("line3", "\r"),
        ("line4 ü", "\n"),
        ("line5", ""),
    ]


def test_iter_lines_blank_lines_preserved(input_file):
    p = input_file("\n\na\n")
    with SafeSourceReader(p) as reader:
        assert list(reader.iter_lines()) == [("", "\n"), ("", "\n"), ("a", "\n")]


def test_iter_lines_trailing_cr_at_eof(input_file):
    p = input_file("a\r")
    with SafeSourceReader(p, buffer_size=MIN_BUFFER_SIZE) as reader:
        assert list(reader.iter_lines()) == [("a", "\r")]


def _find_splitting_buffer(data: bytes, max_buf: int = 512):
    # Find a buffer size where some CR is the last byte of a raw read
    cr_positions = [i for i, b in enumerate(data) if b == 0x0D]
    for buf in range(MIN_BUFFER_SIZE, max_buf + 1):
        for pos in cr_positions:
            if pos % buf == (buf - 1):
                return buf
    return None


def test_crlf_split_across_reads_is_one_terminator(input_file):
    data = b"".join(f"{i},{'X' * 30}\r\n".encode() for i in range(200))
    p = input_file(data)
    buf = _find_splitting_buffer(data)
    assert buf is not None

    with SafeSourceReader(p, buffer_size=buf) as reader:
        lines = list(reader.iter_lines())

    assert len(lines) == 200
    assert all(term == "\r\n" for _, term in lines)
    assert lines[7] == (f"7,{'X' * 30}", "\r\n")


def test_long_line_spanning_many_reads(input_file):
    body = "y" * (MIN_BUFFER_SIZE * 10 + 3)
    p = input_file(body + "\nend")
    with SafeSourceReader(p, buffer_size=MIN_BUFFER_SIZE) as reader:
        assert list(reader.iter_lines()) == [(body, "\n"), ("end", "")]


def test_unterminated_long_line_is_linear(input_file):
    # Several default-sized blocks with no terminator at all
    body = "x" * (DEFAULT_BUFFER_SIZE * 8)
    p = input_file(body)
    started = time.perf_counter()
    with SafeSourceReader(p) as reader:
        lines = list(reader.iter_lines())
    elapsed = time.perf_counter() - started
    assert lines == [(body, "")]
    assert elapsed < 5.0


def test_long_lines_with_small_buffer_keep_content(input_file):
    first = "a" * 150_000
    second = "b" * 150_000
    p = input_file(first + "\r\n" + second + "\r")
    started = time.perf_counter()
    with SafeSourceReader(p, buffer_size=MIN_BUFFER_SIZE * 64) as reader:
        lines = list(reader.iter_lines())
    assert time.perf_counter() - started < 5.0
    assert lines == [(first, "\r\n"), (second, "\r")]


def test_cr_at_block_end_followed_by_plain_text(input_file):
    # CR is the last byte of the first read and the next read starts with a letter
    data = "a" * (MIN_BUFFER_SIZE - 1) + "\rb\n"
    p = input_file(data)
    with SafeSourceReader(p, buffer_size=MIN_BUFFER_SIZE) as reader:
        assert list(reader.iter_lines()) == [("a" * (MIN_BUFFER_SIZE - 1), "\r"), ("b", "\n")]


def test_cr_at_block_end_of_empty_line(input_file):
    data = "a" * (MIN_BUFFER_SIZE - 2) + "\n\r\nz"
    p = input_file(data)
    with SafeSourceReader(p, buffer_size=MIN_BUFFER_SIZE) as reader:
        assert list(reader.iter_lines()) == [("a" * (MIN_BUFFER_SIZE - 2), "\n"), ("", "\r\n"), ("z", "")]


def test_prevalidated_path_skips_policies(input_file):
    p = input_file("abc\n")
    seen = []
    PathValidator.register_pre_resolution_policy(seen.append)
    with SafeSourceReader(p.resolve(), prevalidated=True) as reader:
        assert list(reader.iter_lines()) == [("abc", "\n")]
    assert seen == []


def test_empty_source_yields_nothing(input_file):
    p = input_file(b"")
    with SafeSourceReader(p) as reader:
        assert list(reader.iter_lines()) == []


def test_stream_is_single_pass(input_file):
    p = input_file("abc")
    with SafeSourceReader(p) as reader:
        assert list(reader.iter_chars()) == ["a", "b", "c"]
        with pytest.raises(SplurgeSafeCopyRuntimeError) as excinfo:
            reader.iter_lines()
    assert excinfo.value.error_code == "stream-consumed"


def test_closed_reader_cannot_stream(input_file):
    reader = SafeSourceReader(input_file("abc"))
    reader.close()
    reader.close()
    assert reader.closed
    with pytest.raises(SplurgeSafeCopyRuntimeError):
        reader.iter_bytes()


def test_missing_source(tmp_path):
    with pytest.raises(SplurgeSafeCopyFileNotFoundError):
        SafeSourceReader(tmp_path / "missing.txt")


def test_invalid_utf8_raises_decoding_error(input_file):
    p = input_file(b"ok\n\xff\xfe")
    with SafeSourceReader(p) as reader:
        stream = reader.iter_chars()
        with pytest.raises(SplurgeSafeCopyFileDecodingError) as excinfo:
            list(stream)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_truncated_multibyte_at_eof_raises(input_file):
    p = input_file("ü".encode()[:1])
    with SafeSourceReader(p) as reader:
        with pytest.raises(SplurgeSafeCopyFileDecodingError):
            list(reader.iter_lines())


def test_utf16_source(input_file):
    p = input_file("a\nb\nc\n".encode("utf-16"))
    with SafeSourceReader(p, encoding="utf-16") as reader:
        assert [c for c, _ in reader.iter_lines()] == ["a", "b", "c"]


def test_bad_parameters(input_file):
    p = input_file("x")
    with pytest.raises(SplurgeSafeCopyParameterError):
        SafeSourceReader(p, buffer_size=MIN_BUFFER_SIZE - 1)
    with pytest.raises(SplurgeSafeCopyLookupError):
        SafeSourceReader(p, encoding="no-such-codec")
