"""Tracking of file metadata between reads and writes, and file naming."""

from __future__ import annotations

import enum
import os

MAX_FILES = 256
MAX_BACKUP_NAME = 1020
BACKUP_PREFIX = ",,"


class FileError(Exception):
    """A file could not be read, written or tracked."""


class ExternallyModifiedError(FileError):
    """The file was changed by someone else since it was last seen."""


class StatPurpose(enum.Enum):
    """Why a file's metadata is being checked."""

    READ = 0
    WRITE = 1
    UPDATE = 2


class FileTracker:
    """Remembers the metadata of every file opened, keyed by inode."""

    def __init__(self, limit=MAX_FILES):
        self.limit = limit
        self._known = {}

    def __len__(self):
        return len(self._known)

    def __contains__(self, inode):
        return inode in self._known

    def get(self, inode):
        """Return the recorded metadata for ``inode``, or None."""
        return self._known.get(inode)

    def check(self, st, purpose):
        """Record ``st`` (an ``os.stat`` result) for the given purpose.

        Returns True when the inode was already known, which for a read means
        the file is open a second time. Raises ExternallyModifiedError when a
        write finds the file changed since it was last recorded, and FileError
        when too many files are being tracked.
        """
        purpose = StatPurpose(purpose)
        previous = self._known.get(st.st_ino)
        if previous is not None:
            if purpose is StatPurpose.WRITE:
                if st.st_mtime != previous.st_mtime:
                    self._known[st.st_ino] = st
                    raise ExternallyModifiedError(
                        "WARNING: file has been modified externally"
                    )
                return True
            self._known[st.st_ino] = st
            return True

        if len(self._known) >= self.limit:
            raise FileError("Too many files open")
        self._known[st.st_ino] = st
        return False


def backup_name(path):
    """Return the backup name for ``path``: its last component prefixed by ``,,``."""
    path = os.fspath(path)
    if len(path) > MAX_BACKUP_NAME:
        raise FileError("WARNING: backup filename too long")
    sep = "/" if isinstance(path, str) else b"/"
    prefix = BACKUP_PREFIX if isinstance(path, str) else BACKUP_PREFIX.encode()
    head, slash, tail = path.rpartition(sep)
    return head + slash + prefix + tail


def buffer_name(path):
    """Make a buffer name from a file name: its last component, cut at ``;``."""
    path = os.fspath(path)
    tail = path.rpartition("/")[2]
    return tail.partition(";")[0]