"""Function-key messages and decoding of xterm mouse reports."""

from __future__ import annotations

import enum
from dataclasses import dataclass

FUNCTION_KEYS = range(1, 13)

SCROLL_UP_BUTTON = 64
SCROLL_DOWN_BUTTON = 65
MOTION_FLAG = 0x20
BUTTON_MASK = 3

BUTTON_OFFSET = 32
POSITION_OFFSET = 33
DEFAULT_TABSIZE = 8

ENABLE_MOUSE = "\033[?1002h"
DISABLE_MOUSE = "\033[?1002l"


def function_key_message(number):
    """Return the message shown when function key ``number`` is pressed."""
    if number not in FUNCTION_KEYS:
        raise ValueError(f"no function key F{number}")
    return f"F{number}"


@dataclass(frozen=True)
class MouseEvent:
    """A decoded mouse report: button code and 0-based column and row."""

    button: int
    col: int
    row: int

    @property
    def is_motion(self):
        return bool(self.button & MOTION_FLAG)


def decode_mouse(button, col, row):
    """Decode the three raw bytes that follow ``ESC [ M`` in an X10 report."""
    return MouseEvent(
        button=button - BUTTON_OFFSET,
        col=max(col - POSITION_OFFSET, 0),
        row=max(row - POSITION_OFFSET, 0),
    )


def column_to_offset(text, col, tabsize):
    """Return the offset in ``text`` displayed at visual column ``col``."""
    step = tabsize if tabsize > 0 else DEFAULT_TABSIZE
    vcol = 0
    for offset, ch in enumerate(text):
        if vcol >= col:
            return offset
        if ch in (9, "\t"):
            vcol = (vcol // step + 1) * step
        else:
            vcol += 1
    return len(text)


class MouseAction(enum.Enum):
    """What the editor should do in response to a mouse event."""

    NONE = "none"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    PRESS = "press"
    START_SELECTION = "start_selection"
    EXTEND_SELECTION = "extend_selection"
    YANK = "yank"
    KILL = "kill"
    RELEASE = "release"


class MouseTracker:
    """Tracks button and selection state across mouse events."""

    def __init__(self):
        self.dragging = False
        self.selecting = False

    def handle(self, event):
        """Update the state for ``event`` and return the action to take."""
        if event.button == SCROLL_UP_BUTTON:
            return MouseAction.SCROLL_UP
        if event.button == SCROLL_DOWN_BUTTON:
            return MouseAction.SCROLL_DOWN

        if event.is_motion:
            if not self.dragging:
                return MouseAction.NONE
            if not self.selecting:
                self.selecting = True
                return MouseAction.START_SELECTION
            return MouseAction.EXTEND_SELECTION

        kind = event.button & BUTTON_MASK
        if kind == 0:
            self.selecting = False
            self.dragging = True
            return MouseAction.PRESS
        self.dragging = False
        if kind == 1:
            return MouseAction.YANK
        if kind == 2:
            self.selecting = False
            return MouseAction.KILL
        return MouseAction.RELEASE

    def reset(self):
        """Forget any drag or selection, as when mouse reporting is turned off."""
        self.dragging = False
        self.selecting = False