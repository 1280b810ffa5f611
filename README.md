# medit

`medit` is a library holding the building blocks of a small Emacs-style
text editor: the line store and kill buffer, reading files into buffers,
writing them back with a `,,name` backup, the `~/.me` init file, the
built-in key tables, key decoding, keyboard macros and piping a buffer
through a shell command.

It needs Python 3.10 or later and nothing outside the standard library.

## Modules

| Module            | Purpose                                                                   |
|-------------------|---------------------------------------------------------------------------|
| `medit.line`      | `TextBuffer`, `Line`, `Window` and `KillBuffer`                           |
| `medit.keys`      | `function_key_message`, mouse reports: `decode_mouse`, `MouseTracker`, `column_to_offset` |
| `medit.tracker`   | `FileTracker` for spotting external changes; `backup_name`, `buffer_name` |
| `medit.config`    | the init file: `InitConfig`, `Settings`, `UserKey`, `parse_keyname`, `init_rc_dir` |
| `medit.fileio`    | `read_file`, `read_into`, `insert_file`, `split_lines`, `is_encrypted`    |
| `medit.pipe`      | `pipe_buffer`, `run_pipe`, `load_bytes`, `extract_dest_buffer`            |
| `medit.writer`    | `write_buffer`, `LineWriter`, `serialize_lines`                           |
| `medit.bindings`  | the built-in key tables: `lookup`, `lookup_name`, `help_text`, `help_lines` |
| `medit.keyinput`  | `KeyReader`, `decode_escape`, `read_argument`                             |
| `medit.macro`     | `KeyboardMacro`: record, play back, `save` and `restore`                  |

## Editing text

```python
from medit.line import KillBuffer, TextBuffer, Window

buf = TextBuffer("main")
win = Window(buf)
buf.insert(win, 1, ord("a"))
buf.newline(win)
buf.insert(win, 3, ord("b"))
print(buf.to_bytes())        # b'a\nbbb\n'
```

`TextBuffer.delete(window, n, kill)` removes `n` bytes at dot; pass a
`KillBuffer` as `kill` to keep the removed text, or `None` to discard it.
Dots and marks in every window on the buffer follow the edits.

## Files and backups

```python
from medit.tracker import backup_name, buffer_name

backup_name("docs/notes.txt")    # 'docs/,,notes.txt'
buffer_name("/tmp/notes.txt;1")  # 'notes.txt'
```

`read_into` fills a buffer from a file; a missing file gives an empty
result marked `new_file`, while directories, other non-regular files and
unreadable files raise `FileError`. `insert_file` puts a file's lines
above the window's dot line.

`write_buffer` writes a buffer back. A new file is created with mode 0600.
When the file already exists its old contents are first saved under the
backup name: in update mode (the default) they are copied there and the
file is rewritten in place, otherwise the file is renamed to the backup
and recreated with the same permissions. Soft line breaks are written as a
space. A `FileTracker` passed to the read and write functions remembers
each file's metadata by inode; if the file was changed by someone else in
the meantime, writing raises `ExternallyModifiedError`.

## The init file

`InitConfig.read_file` reads `<rc_dir>/init` and `InitConfig.read_path`
reads a file or a directory's `init`, one directive per line, `#` starting
a comment:

```
set rmarg 72
set tabsize 4
bind M-r forwsearch
bind M-s | sort
bind M-g | pandoc -f markdown -t html @html
def fmt | fmt -72
macro mymacro
```

`set` changes the `Settings` fields `rmarg`, `lmarg`, `tabsize` and
`softtabs` (also `rm`, `lm`, `t`, `T`). `bind` records a `UserKey`, either
to a built-in command from the table given to `InitConfig` or to a shell
command. `def` adds a named macro, and `macro` notes a path under
`macros/` in `macro_files`. The first binding that shadows a built-in key
leaves a message in `warning`.

Key names run the prefix and the key together with no spaces: `M-x`,
`C-x` or `^x`, `C-Xx` or `^Xx`, and `C-X^x`. `parse_keyname` turns such a
name into a key code and raises `ValueError` for anything else.
`init_rc_dir` creates the state directory with its `macros/`
subdirectory and a README.

## Pipes

```python
from medit.pipe import extract_dest_buffer

extract_dest_buffer("pandoc -t plain @render")  # ('pandoc -t plain', 'render')
```

`pipe_buffer` feeds a buffer's text to `/bin/sh -c <command>` and loads
what the command prints into the destination buffer (the source buffer
itself by default). Standard error is discarded; a command that exits with
a non-zero status raises `PipeError`.

## Keys and macros

`KeyReader` turns raw character codes from a callable into key codes with
`META`, `CNTRL` and `CTLX` bits; `decode_escape` names the command for
arrow, page and function-key sequences, and `read_argument` collects `^U`
and vi-style numeric arguments. `bindings.lookup` finds the built-in
binding for a key code, in the normal or the vi table, and `help_text`
gives its one-line explanation. `KeyboardMacro` records keys with their
arguments, yields them back from `playback`, and stores them in a file
with `save` and `restore`.

## What the package does not do

There is no editor program here: no command to run, no terminal screen
and no loop that reads keys and runs commands. The key tables name their
commands but do not carry them out, so motion, search, paragraph filling
and the like are left to the caller. Encrypted files are recognised but
not decrypted; `read_file` raises `FileError` for them.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.