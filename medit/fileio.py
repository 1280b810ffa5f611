"""Reading files into text buffers."""

from __future__ import annotations

import errno
import os
import stat as stat_module
from dataclasses import dataclass, field

from medit.line import Line
from medit.tracker import FileError, StatPurpose

# Files written encrypted start with this block.
ME_MAGIC = b"#ME1.42$"
MIN_ENCRYPTED_SIZE = 48
READ_CHUNK = 65536


@dataclass
class ReadResult:
    """What a read produced: the lines, how many ended in a newline, the size."""

    lines: list = field(default_factory=list)
    line_count: int = 0
    size: int = 0
    new_file: bool = False
    already_open: bool = False


def split_lines(data):
    """Split ``data`` into lines; only the last may lack a newline."""
    lines = []
    start = 0
    end = len(data)
    while start < end:
        nl = data.find(b"\n", start)
        if nl < 0:
            lines.append(Line(data[start:], newline=False))
            break
        lines.append(Line(data[start:nl], newline=True))
        start = nl + 1
    return lines


def is_encrypted(data):
    """Return True when ``data`` looks like an encrypted file."""
    return len(data) >= MIN_ENCRYPTED_SIZE and data.startswith(ME_MAGIC)


def _read_all(fd):
    chunks = []
    while True:
        chunk = os.read(fd, READ_CHUNK)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)


def read_file(path, tracker=None):
    """Read the whole of ``path`` and split it into lines.

    A missing file gives an empty result marked ``new_file``. Raises
    FileError for unreadable files, directories, other non-regular files and
    encrypted files.
    """
    path = os.fspath(path)
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError as exc:
        if exc.errno == errno.ENOENT:
            return ReadResult(new_file=True)
        raise FileError(f"[file {path} unreadable...] {exc.strerror}") from exc

    try:
        st = os.fstat(fd)
        already_open = False
        if tracker is not None:
            already_open = tracker.check(st, StatPurpose.READ)
        if stat_module.S_ISDIR(st.st_mode):
            raise FileError(f"{path}: directory")
        if not stat_module.S_ISREG(st.st_mode):
            raise FileError("Not a regular file!")
        try:
            data = _read_all(fd)
        except OSError as exc:
            raise FileError(f"Couldn't read file: {exc.strerror}") from exc
    finally:
        os.close(fd)

    if is_encrypted(data):
        raise FileError(
            "encrypted file; decryption not supported on this platform"
        )

    lines = split_lines(data)
    return ReadResult(
        lines=lines,
        line_count=sum(1 for line in lines if line.newline),
        size=len(data),
        already_open=already_open,
    )


def read_into(buffer, path, tracker=None):
    """Replace the contents of ``buffer`` with the file ``path``.

    On failure the buffer is left empty with no file name and the FileError
    propagates.
    """
    buffer.clear()
    buffer.filename = os.fspath(path)
    try:
        result = read_file(path, tracker)
    except FileError:
        buffer.filename = ""
        raise

    for line in result.lines:
        buffer.add_line(None, line)

    first = buffer.first_line
    buffer.dot_line = first
    buffer.dot_offset = 0
    for window in buffer.windows:
        window.top_line = first
        window.dot_line = first
        window.dot_offset = 0
        window.mark_line = None
        window.mark_offset = 0
        window.needs_update = True
    return result


def insert_file(buffer, window, path, tracker=None):
    """Insert the file ``path`` above the window's dot line.

    Dot moves to the first inserted line; the mark is left on the line just
    above the insertion (None when inserting at the top of the buffer).
    """
    buffer.changed = True
    buffer.change_count += 1

    anchor = window.dot_line
    if anchor is None:
        previous = buffer.lines[-1] if buffer.lines else None
    else:
        index = next(i for i, ln in enumerate(buffer.lines) if ln is anchor)
        previous = buffer.lines[index - 1] if index > 0 else None

    window.dot_offset = 0
    window.mark_line = previous
    window.mark_offset = 0

    try:
        result = read_file(path, tracker)
    except FileError:
        window.dot_line = anchor
        window.needs_update = True
        _copy_positions(buffer, window)
        raise

    for line in result.lines:
        buffer.add_line(anchor, line)

    window.dot_line = result.lines[0] if result.lines else anchor
    window.needs_update = True
    _copy_positions(buffer, window)
    return result


def _copy_positions(buffer, window):
    buffer.dot_line = window.dot_line
    buffer.dot_offset = window.dot_offset
    buffer.mark_line = window.mark_line
    buffer.mark_offset = window.mark_offset