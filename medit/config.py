"""Init-file reading: editor variables, user key bindings and named macros."""

from __future__ import annotations

import os
import re
import stat as stat_module
from dataclasses import dataclass

CNTRL = 0x0100
META = 0x0200
CTLX = 0x0400

README_TEXT = """\
~/.me/ -- ME editor state and configuration directory

FILES
  init        startup configuration (read at launch)
  kbm_file    saved keystroke macro (persists across sessions)
  README      this file

SUBDIRECTORIES
  macros/     named keystroke macros, one file per macro
              loaded with the 'macro' directive in init,
              or saved/restored manually

INIT FILE SYNTAX
  One directive per line.  Lines beginning with # are comments.

  set varname value
      Set an editor variable.  Known variables:
        rmarg  (or rm)  right margin column        default 77
        lmarg  (or lm)  left margin column         default 0
        tabsize (or t)  tab display width           default 4
        softtabs (or T) use spaces for tabs (1/0)  default 1

  bind KEYNAME built-in-name
      Rebind a key to a built-in command, e.g.:
        bind M-r forwsearch
      Built-in names are listed in the M-h help screen.

  bind KEYNAME | shell command...
      Bind a key to pipe the current buffer through a shell command.
      Output replaces the current buffer by default.  Append
      @buffername to send output to a named buffer instead:
        bind M-r | pandoc -f markdown -t plain @render
        bind M-f | fmt -72
        bind M-s | sort
        bind M-g | ~/.me/render-html @html

  macro macroname
      Load a saved macro from ~/.me/macros/macroname at startup.

  def name | shell command...
      Define a named macro invokable with M-m.  Output replaces the
      current buffer by default; append @buffername to redirect:
        def fmt       | fmt -72
        def md-plain  | pandoc -f markdown -t plain
        def md-html   | pandoc -f markdown -t html @html

KEY NAME SYNTAX (no internal spaces -- run prefix and key together)
  M-x      Meta (ESC) + x
  C-x      Control + x  (also written ^x)
  C-Xx     C-X prefix then x  (also written ^Xx)
  C-X^x    C-X prefix then Control+x

INTERACTIVE PIPE COMMAND
  C-X |    prompts for a shell command, pipes current buffer through it.
           Append @buffername to output to a named buffer.
           Shell scripts in ~/.me/ can be invoked by path:
             | ~/.me/render-md @preview
"""

_VARIABLES = {
    "rmarg": "rmarg",
    "rm": "rmarg",
    "lmarg": "lmarg",
    "lm": "lmarg",
    "tabsize": "tabsize",
    "t": "tabsize",
    "softtabs": "softtabs",
    "T": "softtabs",
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Settings:
    """Editor variables that an init file may set."""

    rmarg: int = 77
    lmarg: int = 0
    tabsize: int = 4
    softtabs: int = 1


@dataclass
class UserKey:
    """A user binding: either a built-in command or a shell command."""

    code: int
    builtin: object = None
    command: str | None = None


def _atoi(text):
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _upper(ch):
    return ord(ch.upper()) if "a" <= ch <= "z" else ord(ch)


def _split_word(text):
    parts = text.split(maxsplit=1)
    if not parts:
        return "", ""
    return parts[0], parts[1] if len(parts) > 1 else ""


def parse_keyname(s):
    """Turn a key name such as ``M-x``, ``^a`` or ``C-X^s`` into a key code.

    Raises ValueError for a name that is not understood.
    """
    if not s:
        raise ValueError("empty key name")

    if s[0] in "Mm" and s[1:2] == "-" and len(s) > 2:
        return META | ord(s[2])

    rest = None
    if s[0] in "Cc" and s[1:2] == "-" and s[2:3] in ("X", "x"):
        rest = s[3:]
    elif s[0] == "^" and s[1:2] in ("X", "x"):
        rest = s[2:]

    if rest is not None:
        if not rest:
            return CTLX
        if rest[0] in "Cc" and rest[1:2] == "-" and len(rest) > 2:
            return CTLX | CNTRL | _upper(rest[2])
        if rest[0] == "^" and len(rest) > 1:
            return CTLX | CNTRL | _upper(rest[1])
        return CTLX | ord(rest[0])

    if s[0] in "Cc" and s[1:2] == "-" and len(s) > 2:
        return CNTRL | _upper(s[2])
    if s[0] == "^" and len(s) > 1:
        return CNTRL | _upper(s[1])

    raise ValueError(f"unknown key name: {s!r}")


class InitConfig:
    """The bindings, macros and settings gathered from init files.

    ``builtins`` is an iterable of ``(code, name, function)`` triples, the
    editor's own key table.
    """

    def __init__(self, settings=None, builtins=()):
        self.settings = settings if settings is not None else Settings()
        self.builtins = list(builtins)
        self.user_keys = []
        self.named_macros = {}
        self.macro_files = []
        self.warning = ""

    def _builtin_function(self, name):
        for _code, builtin_name, function in self.builtins:
            if builtin_name == name:
                return function
        return None

    def _builtin_name(self, code):
        for builtin_code, name, _function in self.builtins:
            if builtin_code == code and name:
                return name
        return None

    def bind(self, code, builtin=None, command=None):
        """Bind ``code`` to a built-in function or a shell command."""
        for key in self.user_keys:
            if key.code == code:
                key.builtin = builtin
                key.command = command
                return key
        key = UserKey(code, builtin, command)
        self.user_keys.append(key)
        return key

    def define(self, name, command):
        """Define or redefine the named macro ``name``."""
        self.named_macros[name] = command

    def set_variable(self, var, value):
        """Set an editor variable; unknown names are ignored."""
        field = _VARIABLES.get(var)
        if field is None:
            return False
        setattr(self.settings, field, _atoi(value))
        return True

    def lookup(self, code):
        """Return the user binding for ``code``, or None."""
        for key in self.user_keys:
            if key.code == code:
                return key
        return None

    def parse(self, lines, macro_dir=None):
        """Apply the directives in ``lines``, resolving macros in ``macro_dir``."""
        for raw in lines:
            line = raw.rstrip("\n\r ").lstrip()
            if not line or line.startswith("#"):
                continue
            keyword, rest = _split_word(line)

            if keyword == "set":
                var, value = _split_word(rest)
                if var and value:
                    self.set_variable(var, value)

            elif keyword == "bind":
                self._parse_bind(rest)

            elif keyword == "macro":
                if rest and macro_dir is not None:
                    self.macro_files.append(
                        os.path.join(macro_dir, "macros", rest)
                    )

            elif keyword == "def":
                name, command = _split_word(rest)
                if not name or not command:
                    continue
                if command.startswith("|"):
                    command = command[1:].lstrip()
                if command:
                    self.define(name, command)

    def _parse_bind(self, rest):
        keystr, target = _split_word(rest)
        if not keystr or not target:
            return
        try:
            code = parse_keyname(keystr)
        except ValueError:
            return

        if not self.warning:
            shadowed = self._builtin_name(code)
            if shadowed:
                self.warning = (
                    f"init: {keystr[:12]} shadows built-in '{shadowed[:32]}'"
                )

        if target.startswith("|"):
            command = target[1:].lstrip()
            if command:
                self.bind(code, None, command)
        else:
            function = self._builtin_function(target)
            if function is not None:
                self.bind(code, function, None)

    def read_file(self, rc_dir):
        """Read ``rc_dir/init`` if it exists; return whether it was read."""
        rc_dir = os.fspath(rc_dir)
        try:
            with open(os.path.join(rc_dir, "init"), encoding="utf-8",
                      errors="replace") as handle:
                self.parse(handle, rc_dir)
        except OSError:
            return False
        return True

    def read_path(self, path):
        """Read an init file, or ``path/init`` when ``path`` is a directory."""
        path = os.fspath(path)
        try:
            st = os.stat(path)
        except OSError:
            return False
        if stat_module.S_ISDIR(st.st_mode):
            return self.read_file(path)

        head, slash, _tail = path.rpartition("/")
        macro_dir = head if slash else "."
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                self.parse(handle, macro_dir)
        except OSError:
            return False
        return True


def init_rc_dir(rc_dir):
    """Create the state directory, its ``macros`` subdirectory and README.

    Returns True when the directory was newly created. Raises OSError when
    the directory cannot be created.
    """
    rc_dir = os.fspath(rc_dir)
    is_new = False
    if not os.access(rc_dir, os.R_OK | os.W_OK | os.X_OK):
        os.mkdir(rc_dir, 0o700)
        is_new = True

    macros = os.path.join(rc_dir, "macros")
    if not os.access(macros, os.R_OK | os.W_OK | os.X_OK):
        try:
            os.mkdir(macros, 0o700)
        except OSError:
            pass

    readme = os.path.join(rc_dir, "README")
    if is_new or not os.path.exists(readme):
        try:
            with open(readme, "w", encoding="utf-8") as handle:
                handle.write(README_TEXT)
        except OSError:
            pass
    return is_new