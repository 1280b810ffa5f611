"""Reading keystrokes and turning them into internal key codes."""

from __future__ import annotations

from medit.config import CNTRL, CTLX, META

METACH = 0x1B
CTRLCH = 0x1E
CTMECH = 0x1C

_CONTROL_X = CNTRL | ord("X")
_CONTROL_U = CNTRL | ord("U")


def _is_c0(c):
    return 0x00 <= c <= 0x1F


class KeyReader:
    """Reads raw characters from ``source`` and returns key codes.

    ``source`` is a callable that returns the next raw character code.
    """

    def __init__(self, source):
        self.source = source
        self._lookahead = None

    def push_key(self, c):
        """Make ``c`` the next key that ``read_key`` returns."""
        self._lookahead = c

    def _next_raw(self):
        if self._lookahead is not None:
            c, self._lookahead = self._lookahead, None
            return c
        return self.source()

    @property
    def has_pending(self):
        """True when a pushed key is waiting to be read."""
        return self._lookahead is not None

    def read_key(self):
        """Read one key, folding prefixes into META, CNTRL and CTLX bits."""
        c = self._next_raw()
        if c == METACH:
            return META | self.read_key()
        if c == CTRLCH:
            return CNTRL | self.read_control()
        if c == CTMECH:
            return CNTRL | META | self.read_control()
        if _is_c0(c):
            c = CNTRL | (c + ord("@"))
            if c == _CONTROL_X:
                c = CTLX | self.read_key()
        return c

    def read_control(self):
        """Read a raw character, upper-casing letters and marking controls."""
        c = self.source()
        if ord("a") <= c <= ord("z"):
            c -= 0x20
        if _is_c0(c):
            c = CNTRL | (c + ord("@"))
        return c


_F1_TO_F4 = {"P": "key_f1", "Q": "key_f2", "R": "key_f3", "S": "key_f4"}
_ARROWS = {
    "M": "mouse_event",
    "A": "backline",
    "B": "forwline",
    "C": "forwchar",
    "D": "backchar",
}
_PAGES = {"5": "backpage", "6": "forwpage"}
_F5_TO_F8 = {"5": "key_f5", "7": "key_f6", "8": "key_f7", "9": "key_f8"}
_F9_TO_F12 = {"0": "key_f9", "1": "key_f10", "3": "key_f11", "4": "key_f12"}


def _char(c):
    return chr(c) if 0 <= c < 0x110000 else ""


def decode_escape(c, read_key):
    """Decode an arrow, page or function key sequence that starts with ``c``.

    ``read_key`` supplies the following keys. Returns the name of the command
    to run, or None when ``c`` does not start such a sequence (keys already
    read are then lost).
    """
    if c == META | ord("O"):
        return _F1_TO_F4.get(_char(read_key()))
    if c != META | ord("["):
        return None

    first = _char(read_key())
    if first in _ARROWS:
        return _ARROWS[first]
    if first in _PAGES:
        read_key()
        return _PAGES[first]
    table = {"1": _F5_TO_F8, "2": _F9_TO_F12}.get(first)
    if table is None:
        return None
    name = table.get(_char(read_key()))
    if name is not None:
        read_key()
    return name


def _is_digit(c):
    return ord("0") <= c <= ord("9")


def read_argument(reader, c, vi_mode=False):
    """Collect a numeric argument that begins with key ``c``.

    Handles vi-mode count prefixes and ``^U`` arguments, and turns a bare
    ``^X`` into its prefixed key. Returns ``(key, f, n)`` where ``f`` tells
    whether a ``^U`` argument was given.
    """
    f = False
    n = 1

    if vi_mode and (c == ord("-") or _is_digit(c)):
        n = 0
        sign = 1
        if c == ord("-"):
            sign = -1
            c = reader.read_key()
        while _is_digit(c):
            n = n * 10 + (c - ord("0"))
            c = reader.read_key()
        if n == 0:
            n = 1
        n *= sign

    if c == _CONTROL_U:
        f = True
        n = 4
        sign = 0
        while True:
            c = reader.read_key()
            if c == _CONTROL_U:
                n *= 4
            elif c == ord("-"):
                if sign:
                    break
                n = 0
                sign = -1
            elif _is_digit(c):
                if not sign:
                    n = 0
                    sign = 1
                n = 10 * n + c - ord("0")
            else:
                break
        if sign == -1:
            if n == 0:
                n = 1
            n = -n

    if c == _CONTROL_X:
        c = CTLX | reader.read_control()
    return c, f, n