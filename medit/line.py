"""Lines, windows, text buffers and the kill buffer."""

from __future__ import annotations


class Line:
    """One text line: its bytes and how it is terminated."""

    __slots__ = ("text", "newline", "soft_newline")

    def __init__(self, text=b"", newline=True, soft_newline=False):
        self.text = bytearray(text)
        self.newline = newline
        self.soft_newline = soft_newline

    def __len__(self):
        return len(self.text)

    def __repr__(self):
        return (
            f"Line({bytes(self.text)!r}, newline={self.newline}, "
            f"soft_newline={self.soft_newline})"
        )


class Window:
    """A view on a buffer with its own dot, mark and top line.

    A line of ``None`` stands for the end of the buffer.
    """

    def __init__(self, buffer):
        self.buffer = buffer
        first = buffer.first_line
        self.top_line = first
        self.dot_line = first
        self.dot_offset = 0
        self.mark_line = None
        self.mark_offset = 0
        self.needs_update = True
        buffer.windows.append(self)


class KillBuffer:
    """Holds killed text for later yanking."""

    def __init__(self):
        self._data = bytearray()

    def __len__(self):
        return len(self._data)

    def append(self, c):
        """Add one byte to the end of the kill buffer."""
        self._data.append(c & 0xFF)

    def clear(self):
        """Discard everything held."""
        self._data = bytearray()

    def get(self, n):
        """Return byte ``n``, or None past the end."""
        if 0 <= n < len(self._data):
            return self._data[n]
        return None

    def text(self):
        return bytes(self._data)


class TextBuffer:
    """An ordered list of lines together with the windows showing them."""

    def __init__(self, name):
        self.name = name
        self.filename = ""
        self.lines = []
        self.windows = []
        self.changed = False
        self.change_count = 0
        self.dot_line = None
        self.dot_offset = 0
        self.mark_line = None
        self.mark_offset = 0

    def __iter__(self):
        return iter(self.lines)

    @property
    def first_line(self):
        return self.lines[0] if self.lines else None

    def _index(self, line):
        for index, candidate in enumerate(self.lines):
            if candidate is line:
                return index
        raise ValueError("line is not in this buffer")

    def next_line(self, line):
        """Return the line after ``line``, or None at the end of the buffer."""
        index = self._index(line) + 1
        return self.lines[index] if index < len(self.lines) else None

    def _touch(self):
        self.change_count += 1
        self.changed = True
        for window in self.windows:
            window.needs_update = True

    def add_line(self, before, line):
        """Insert ``line`` just above ``before`` (None appends) and return it."""
        if before is None:
            self.lines.append(line)
        else:
            self.lines.insert(self._index(before), line)
        return line

    def remove_line(self, line):
        """Unlink ``line``, moving every dot and mark on it to the next line."""
        index = self._index(line)
        following = self.lines[index + 1] if index + 1 < len(self.lines) else None
        for window in self.windows:
            if window.top_line is line:
                window.top_line = following
            if window.dot_line is line:
                window.dot_line, window.dot_offset = following, 0
            if window.mark_line is line:
                window.mark_line, window.mark_offset = following, 0
        if not self.windows:
            if self.dot_line is line:
                self.dot_line, self.dot_offset = following, 0
            if self.mark_line is line:
                self.mark_line, self.mark_offset = following, 0
        del self.lines[index]

    def _insert_char(self, line, offset, c):
        self._touch()
        line.text.insert(offset, c & 0xFF)
        for window in self.windows:
            if window.dot_line is line and window.dot_offset >= offset:
                window.dot_offset += 1
            if window.mark_line is line and window.mark_offset > offset:
                window.mark_offset += 1

    def insert(self, window, n, c):
        """Insert ``n`` copies of byte ``c`` at the window's dot."""
        if n <= 0:
            return False
        if window.dot_line is None:
            self.newline(window)
        for _ in range(n):
            self._insert_char(window.dot_line, window.dot_offset, c)
        return True

    def newline(self, window):
        """Split the line at the window's dot."""
        self._touch()
        first = window.dot_line
        split = window.dot_offset

        if first is None:
            window.dot_line = self.add_line(None, Line())
            window.dot_offset = 0
            return True

        second = Line(first.text[split:], first.newline, first.soft_newline)
        self.add_line(self.next_line(first), second)
        del first.text[split:]
        first.newline = True
        first.soft_newline = False

        for other in self.windows:
            if other.dot_line is first and other.dot_offset >= split:
                other.dot_line = second
                other.dot_offset -= split
            if other.mark_line is first and other.mark_offset > split:
                other.mark_line = second
                other.mark_offset -= split
        return True

    def delete(self, window, n, kill):
        """Delete ``n`` bytes at dot, saving them in ``kill`` unless it is None.

        Returns False if the end of the buffer was reached first.
        """
        while n > 0:
            line = window.dot_line
            start = window.dot_offset
            if line is None:
                return False

            chunk = min(len(line.text) - start, n)
            if chunk == 0:
                n -= 1
                if not self.delete_newline(window):
                    return False
                if kill is not None:
                    kill.append(ord("\n"))
                continue

            self._touch()
            removed = line.text[start:start + chunk]
            if kill is not None:
                for byte in removed:
                    kill.append(byte)
            del line.text[start:start + chunk]

            for other in self.windows:
                if other.dot_line is line and other.dot_offset >= start:
                    other.dot_offset = max(other.dot_offset - chunk, start)
                if other.mark_line is line and other.mark_offset >= start:
                    other.mark_offset = max(other.mark_offset - chunk, start)
            n -= chunk
        return True

    def delete_newline(self, window):
        """Join the dot line with the line after it.

        Returns False when there is no following line.
        """
        first = window.dot_line
        if first is None:
            return False
        second = self.next_line(first)
        if second is None:
            return False

        self._touch()
        if not second.text:
            soft = second.soft_newline
            self.remove_line(second)
            first.soft_newline = soft
            return True

        if not first.text:
            self.remove_line(first)
            return True

        join = len(first.text)
        first.text += second.text
        first.newline = True
        first.soft_newline = second.soft_newline
        for other in self.windows:
            if other.top_line is second:
                other.top_line = first
            if other.dot_line is second:
                other.dot_line = first
                other.dot_offset += join
            if other.mark_line is second:
                other.mark_line = first
                other.mark_offset += join
        self.remove_line(second)
        window.dot_line = first
        window.dot_offset = join
        return True

    def clear(self):
        """Drop all text and reset every position, without asking."""
        self.lines.clear()
        self.changed = False
        self.dot_line = None
        self.dot_offset = 0
        self.mark_line = None
        self.mark_offset = 0
        for window in self.windows:
            window.top_line = None
            window.dot_line = None
            window.dot_offset = 0
            window.mark_line = None
            window.mark_offset = 0
            window.needs_update = True

    def to_bytes(self):
        """Return the buffer's text, each line followed by its newline if any."""
        return b"".join(
            bytes(line.text) + (b"\n" if line.newline else b"")
            for line in self.lines
        )