"""Piping a buffer's text through a shell command."""

from __future__ import annotations

import subprocess
import tempfile

from medit.fileio import split_lines

SHELL = "/bin/sh"


class PipeError(Exception):
    """A pipe command could not be run or did not succeed."""


def extract_dest_buffer(cmd):
    """Split a trailing ``@buffername`` off ``cmd``.

    Returns ``(command, name)``; ``name`` is None when there is no valid
    suffix, and the command is then returned unchanged.
    """
    at = cmd.rfind("@")
    if at < 0:
        return cmd, None
    name = cmd[at + 1:]
    if not name or any(ch.isspace() for ch in name):
        return cmd, None
    return cmd[:at].rstrip(), name


def run_pipe(data, cmd):
    """Run ``cmd`` in the shell with ``data`` on stdin and return its stdout.

    Standard error is discarded. Raises PipeError when the command cannot be
    started or exits with a non-zero status.
    """
    try:
        with tempfile.TemporaryFile(prefix="me_pipe_") as source:
            source.write(data)
            source.flush()
            source.seek(0)
            completed = subprocess.run(
                [SHELL, "-c", cmd],
                stdin=source,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                check=False,
            )
    except OSError as exc:
        raise PipeError(f"pipe: {exc}") from exc

    if completed.returncode != 0:
        raise PipeError(f"pipe: command exited {completed.returncode}")
    return completed.stdout


def load_bytes(buffer, data):
    """Replace the text of ``buffer`` with ``data`` without asking."""
    buffer.clear()
    for line in split_lines(data):
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
    buffer.changed = True


def pipe_buffer(source, cmd, dest=None):
    """Pipe the text of ``source`` through ``cmd`` into ``dest``.

    ``dest`` defaults to ``source`` itself. Returns the number of bytes of
    output loaded.
    """
    output = run_pipe(source.to_bytes(), cmd)
    load_bytes(source if dest is None else dest, output)
    return len(output)