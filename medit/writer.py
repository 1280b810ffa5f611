"""Writing text buffers back to files, with backups and change detection."""

from __future__ import annotations

import os
import stat as stat_module

from medit.tracker import FileError, StatPurpose, backup_name

IOBUFZ = 8192
COPY_CHUNK = 8192
NEW_FILE_MODE = 0o600


class LineWriter:
    """Collects output into blocks of ``size`` bytes before writing them."""

    def __init__(self, stream, size=IOBUFZ):
        if size <= 0:
            raise ValueError("buffer size must be positive")
        self.stream = stream
        self.size = size
        self._pending = bytearray()

    def __len__(self):
        return len(self._pending)

    def write(self, data, newline=False):
        """Queue ``data``, followed by a newline when asked.

        Writing nothing and no newline flushes what is pending.
        """
        if not data and not newline:
            self.flush()
            return
        self._pending += data
        if newline:
            self._pending += b"\n"
        while len(self._pending) > self.size:
            self.stream.write(bytes(self._pending[:self.size]))
            del self._pending[:self.size]

    def flush(self):
        """Write out everything pending."""
        if self._pending:
            self.stream.write(bytes(self._pending))
        self._pending = bytearray()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.flush()
        return False


def _line_parts(line):
    text = bytes(line.text)
    if line.newline and line.soft_newline:
        return text, b" ", False
    return text, b"", bool(line.newline)


def serialize_lines(lines):
    """Return the bytes a file holds for ``lines``.

    A hard newline ends its line with ``\\n``; a soft newline becomes a space.
    """
    out = bytearray()
    for line in lines:
        text, tail, newline = _line_parts(line)
        out += text
        out += tail
        if newline:
            out += b"\n"
    return bytes(out)


def _open_with_mode(path, flags, mode):
    old = os.umask(0)
    try:
        return os.open(path, flags, mode)
    finally:
        os.umask(old)


def _chown(path, st):
    try:
        os.chown(path, st.st_uid, st.st_gid)
    except OSError:
        pass


def _copy_fd(source, sink):
    os.lseek(source, 0, os.SEEK_SET)
    os.lseek(sink, 0, os.SEEK_SET)
    while True:
        chunk = os.read(source, COPY_CHUNK)
        if not chunk:
            return
        view = memoryview(chunk)
        while view:
            written = os.write(sink, view)
            view = view[written:]


def _make_backup_copy(fd, backup, st, mode):
    try:
        os.unlink(backup)
    except OSError:
        pass
    try:
        backup_fd = _open_with_mode(
            backup, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode
        )
    except OSError as exc:
        raise FileError(f"Error creating backup file: {exc.strerror}") from exc
    try:
        _chown(backup, st)
        _copy_fd(fd, backup_fd)
    except OSError as exc:
        raise FileError(f"Error copying to backup file: {exc.strerror}") from exc
    finally:
        os.close(backup_fd)


def _replace_existing(path, tracker, update):
    backup = backup_name(path)
    try:
        fd = os.open(path, os.O_RDWR)
    except OSError as exc:
        raise FileError(f"Error opening original file: {exc.strerror}") from exc

    try:
        st = os.fstat(fd)
        if tracker is not None:
            tracker.check(st, StatPurpose.WRITE)
        if not stat_module.S_ISREG(st.st_mode):
            raise FileError("Not a regular file!")
        mode = stat_module.S_IMODE(st.st_mode)
        if update:
            _make_backup_copy(fd, backup, st, mode)
        else:
            try:
                os.rename(path, backup)
            except OSError as exc:
                raise FileError(f"Error renaming file: {exc.strerror}") from exc
    finally:
        os.close(fd)

    if update:
        try:
            return os.open(path, os.O_WRONLY | os.O_TRUNC)
        except OSError as exc:
            raise FileError(
                f"Error rewriting original file: {exc.strerror}"
            ) from exc

    try:
        fd = _open_with_mode(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
    except OSError as exc:
        raise FileError(f"Error creating file: {exc.strerror}") from exc
    _chown(path, st)
    return fd


def write_buffer(buffer, path, tracker=None, update=True):
    """Write the lines of ``buffer`` to ``path`` and return the line count.

    A new file is created with mode 0600. An existing file is first backed
    up as ``,,name``: in update mode the old contents are copied to the
    backup and the file is rewritten in place, keeping its inode; otherwise
    the file is renamed to the backup and a new one is created with the same
    permissions. Raises ExternallyModifiedError when the tracker finds the
    file changed since it was last read or written, and FileError for other
    failures.
    """
    path = os.fspath(path)
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, NEW_FILE_MODE)
    except FileExistsError:
        fd = _replace_existing(path, tracker, update)
    except OSError as exc:
        raise FileError(f"Error: {exc.strerror}") from exc

    count = 0
    with os.fdopen(fd, "wb") as stream:
        try:
            stream.seek(0)
        except OSError as exc:
            raise FileError(f"Seek error during save: {exc.strerror}") from exc
        with LineWriter(stream) as writer:
            for line in buffer.lines:
                text, tail, newline = _line_parts(line)
                writer.write(text, newline)
                if tail:
                    writer.write(tail, False)
                if newline:
                    count += 1
        stream.flush()
        if tracker is not None:
            tracker.check(os.fstat(stream.fileno()), StatPurpose.UPDATE)
    return count