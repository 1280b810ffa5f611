import pytest

from medit.line import Line, TextBuffer, Window
from medit.pipe import (
    PipeError,
    extract_dest_buffer,
    load_bytes,
    pipe_buffer,
    run_pipe,
)


def _buffer_with(name, *texts):
    buffer = TextBuffer(name)
    for text in texts:
        buffer.add_line(None, Line(text))
    return buffer


def test_extract_dest_buffer_found():
    assert extract_dest_buffer("pandoc -f markdown -t plain @render") == (
        "pandoc -f markdown -t plain",
        "render",
    )


@pytest.mark.parametrize("cmd", ["fmt -72", "sort @", "echo a@b c"])
def test_extract_dest_buffer_absent(cmd):
    assert extract_dest_buffer(cmd) == (cmd, None)


def test_run_pipe_cat_round_trip():
    data = b"hello\nworld\n"
    assert run_pipe(data, "cat") == data


def test_run_pipe_discards_stderr():
    data = b"keep\n"
    assert run_pipe(data, "echo noise >&2; cat") == data


def test_run_pipe_failure():
    with pytest.raises(PipeError, match="exited 3"):
        run_pipe(b"", "exit 3")


def test_load_bytes_replaces_and_resets():
    buffer = _buffer_with("b", b"old", b"text")
    window = Window(buffer)
    window.dot_line = buffer.lines[1]
    window.dot_offset = 2
    data = b"new\nlines"
    load_bytes(buffer, data)
    assert buffer.to_bytes() == data
    assert window.dot_line is buffer.first_line
    assert window.dot_offset == 0
    assert buffer.changed


def test_pipe_buffer_in_place():
    buffer = _buffer_with("b", b"hello")
    count = pipe_buffer(buffer, "tr a-z A-Z")
    assert buffer.to_bytes() == b"HELLO\n"
    assert count == len(b"HELLO\n")


def test_pipe_buffer_to_other_buffer():
    source = _buffer_with("src", b"b", b"a")
    dest = _buffer_with("dst", b"junk")
    pipe_buffer(source, "sort", dest)
    assert source.to_bytes() == b"b\na\n"
    assert dest.to_bytes() == b"a\nb\n"


def test_pipe_buffer_failure_leaves_buffer():
    buffer = _buffer_with("b", b"keep")
    with pytest.raises(PipeError):
        pipe_buffer(buffer, "exit 1")
    assert buffer.to_bytes() == b"keep\n"