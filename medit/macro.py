"""Recording, playing back, saving and restoring keyboard macros."""

from __future__ import annotations

import os
import struct

from medit.config import CNTRL, CTLX

NKBDM = 256
_ENTRY = struct.Struct("<i")
_CONTROL_U = CNTRL | ord("U")
_RESERVE = 6


class KeyboardMacro:
    """One keyboard macro of at most ``size`` stored entries."""

    def __init__(self, size=NKBDM):
        if size <= _RESERVE:
            raise ValueError("macro size too small")
        self.size = size
        self.keys = []
        self._recording = None
        self.playing = False

    @property
    def recording(self):
        return self._recording is not None

    def start(self):
        """Begin recording. Raises RuntimeError when busy with a macro."""
        if self.recording or self.playing:
            raise RuntimeError("Not now")
        self._recording = []

    def record(self, key, f=False, n=1):
        """Store one keystroke with its argument.

        Returns False, and abandons the recording, when the macro is full.
        """
        if self._recording is None:
            raise RuntimeError("not recording")
        if len(self._recording) > self.size - _RESERVE:
            self.keys = [CTLX | ord(")")]
            self._recording = None
            return False
        if f:
            self._recording += [_CONTROL_U, n]
        self._recording.append(key)
        return True

    def abort(self):
        """Abandon a recording in progress."""
        if self._recording is not None:
            self.keys = [CTLX | ord(")")]
            self._recording = None

    def end(self):
        """Finish recording, dropping the keystroke that ended it."""
        if self._recording is None:
            raise RuntimeError("Not now")
        if self._recording:
            self._recording.pop()
        self.keys = self._recording
        self._recording = None

    def playback(self):
        """Yield the stored ``(key, f, n)`` triples in order."""
        if self.recording or self.playing:
            raise RuntimeError("Not now")
        self.playing = True
        try:
            entries = iter(self.keys)
            for key in entries:
                if key == 0:
                    return
                if key == _CONTROL_U:
                    n = next(entries, 1)
                    key = next(entries, 0)
                    if key == 0:
                        return
                    yield key, True, n
                else:
                    yield key, False, 1
        finally:
            self.playing = False

    def save(self, path):
        """Write the macro to ``path``; an empty macro is not written.

        Returns whether anything was written.
        """
        if not self.keys:
            return False
        entries = list(self.keys[:self.size])
        entries += [0] * (self.size - len(entries))
        data = b"".join(_ENTRY.pack(entry) for entry in entries)
        fd = os.open(os.fspath(path), os.O_RDWR | os.O_CREAT, 0o600)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        return True

    def restore(self, path):
        """Load the macro from ``path``; a missing file leaves it unchanged.

        Returns whether a macro was loaded.
        """
        try:
            with open(os.fspath(path), "rb") as handle:
                data = handle.read(self.size * _ENTRY.size)
        except OSError:
            return False
        usable = len(data) - len(data) % _ENTRY.size
        keys = []
        for (entry,) in _ENTRY.iter_unpack(data[:usable]):
            if entry == 0:
                break
            keys.append(entry)
        self.keys = keys
        return True