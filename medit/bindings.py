"""The built-in key tables: normal mode and vi mode."""

from __future__ import annotations

from dataclasses import dataclass

from medit.config import CNTRL, CTLX, META

HELP_HEADER = "[^Xn for next window; ^Xp for previous window]"


@dataclass(frozen=True)
class Binding:
    """A key code bound to a command, with its table name and help line."""

    code: int
    command: str
    name: str
    help: str


def _key(ch):
    return ord(ch) if isinstance(ch, str) else ch


def _table(entries):
    return tuple(
        Binding(code, command, name, help_line)
        for code, command, name, help_line in entries
    )


def _c(ch):
    return CNTRL | _key(ch)


def _x(ch):
    return CTLX | _key(ch)


def _xc(ch):
    return CTLX | CNTRL | _key(ch)


def _m(ch):
    return META | _key(ch)


def _mc(ch):
    return META | CNTRL | _key(ch)


KEYTAB = _table([
    (ord("."), "dot", "dot", ".       either . macro or insert a ."),
    (_c("@"), "setmark", "setmark", "^@      setmark"),
    (_c("A"), "gotobol", "gotobol", "^A      goto beginning of line"),
    (_c("B"), "backchar", "backchar", "^B      back character"),
    (_c("C"), "backpage", "backpage", "^C      back page"),
    (_c("D"), "forwdel", "forwdel", "^D      forward delete character"),
    (_c("E"), "gotoeol", "gotoeol", "^E      goto end of line"),
    (_c("F"), "forwchar", "forwchar", "^F      forward character"),
    (_c("G"), "ctrlg", "abort", "^G      abort"),
    (_c("H"), "backdel", "backdel", "^H      backward delete character"),
    (_c("I"), "tab", "tab", "^I      insert tab"),
    (_c("J"), "indent", "indent", "^J      indent"),
    (_c("K"), "killfw", "killfw", "^K      kill line"),
    (_c("L"), "refresh", "refresh", "^L      refresh screen"),
    (_c("M"), "newline", "newline", "^M      insert newline"),
    (_c("N"), "forwline", "forwline", "^N      forward line"),
    (_c("O"), "indent", "indent", "^O      indent"),
    (_c("P"), "backline", "backline", "^P      backward line"),
    (_c("Q"), "quote", "quote", "^Q      quote following character"),
    (_c("R"), "backsearch", "backsearch", "^R      reverse search"),
    (_c("S"), "forwsearch", "forwsearch", "^S      forward search"),
    (_c("T"), "twiddle", "twiddle", "^T      twiddle characters at point"),
    (_c("V"), "forwpage", "fowrpage", "^V      forward page"),
    (_c("Y"), "yank", "yank", "^Y      yank text back from kill buffer"),
    (_c("Z"), "spawncli", "spawncli", "^Z      spawn shell"),
    (_xc("B"), "listbuffers", "listbuffers", "^X^B    list buffers"),
    (_xc("C"), "quit", "quit", "^X^C    quit"),
    (_xc("F"), "fileread", "fileread", "^X^F    read file"),
    (_xc("I"), "insfile", "insfile", "^X^I    insert file"),
    (_xc("L"), "lowerregion", "lowerregion",
     "^X^L    lowercase marked region"),
    (_xc("M"), "deblank", "delblank", "^X^M    delete blank lines"),
    (_xc("O"), "deblank", "delblank", "^X^O    delete blank lines"),
    (_xc("N"), "mvdnwind", "mvdnwind", "^X^N    move window down one line"),
    (_xc("P"), "mvupwind", "mvupwind", "^X^P    move window up one line"),
    (_xc("R"), "filename", "filename", "^X^R    change file name"),
    (_xc("S"), "filesave", "filesave", "^X^S    save file"),
    (_xc("U"), "upperregion", "upperregion",
     "^X^U    uppercase marked region"),
    (_xc("V"), "filevisit", "filevisit", "^X^V    visit file"),
    (_xc("W"), "killregion", "killregion", "^X^W    kill region (wipe)"),
    (_xc("X"), "swapmark", "swapmark", "^X^X    swap mark"),
    (_xc("Z"), "shrinkwind", "shrinkwind", "^X^Z    shrink window"),
    (_x("!"), "spawn", "spawn", "^X!     spawn shell"),
    (_x("="), "showcpos", "showcpos", "^X=     show current position"),
    (_x("("), "ctlxlp", "ctlxlp", "^X(     open macro"),
    (_x(")"), "ctlxrp", "ctlxrp", "^X)     close macro"),
    (_x("["), "ctlxlp", "ctlxlp", "^X[     open macro"),
    (_x("]"), "ctlxrp", "ctlxrp", "^X]     close macro"),
    (_x("1"), "onlywind", "onlywind", "^X1     one window"),
    (_x("2"), "splitwind", "splitwind", "^X2     two windows"),
    (_x("b"), "usebuffer", "usebuffer", "^Xb     use buffer"),
    (_x("e"), "ctlxe", "ctlxe", "^Xe     execute macro"),
    (_x("f"), "setrmarg", "setrmarg", "^Xf     set right margin"),
    (_x("g"), "enlargewind", "enlargewind", "^Xg     grow window"),
    (_x("k"), "killbuffer", "killbuffer", "^Xk     kill buffer"),
    (_x("n"), "nextwind", "nextwind", "^Xn     next window"),
    (_x("p"), "prevwind", "prevwind", "^Xp     previous window"),
    (_x("x"), "swapmark", "swapmark", "^Xx     swap mark"),
    (_x("|"), "pipe_interactive", "pipe",
     "^X|     pipe buffer through shell command"),
    (_mc("H"), "delbword", "delbword", "M-^H    delete backward one word"),
    (_mc("["), "set_vi", "set_vi", "M-^[    set vi mode"),
    (_mc("N"), "nextfile", "nextfile", "M-^N    next file"),
    (_mc("R"), "reread", "reread", "M-^R    reread file"),
    (_mc("W"), "filewrite", "filewrite", "M-^W    write file"),
    (_m(" "), "setmark", "setmark", "M-Space set mark"),
    (_m("."), "ctlxedot", "ctlxedot", "M-.     set dot macro"),
    (_m("!"), "reposition", "reposition", "M-!     reposition"),
    (_m(">"), "gotoeob", "gotoeob", "M->     goto end of buffer"),
    (_m("<"), "gotobob", "gotobob", "M-<     goto beginning of buffer"),
    (_m("["), "ctlxlp", "ctlxlp", "M-[     open macro"),
    (_m("]"), "ctlxrp", "ctlxrp", "M-]     close macro"),
    (_m("B"), "bufchars", "bufchars", "M-B     change buffer"),
    (_m("C"), "capword", "capword", "M-C     capitalize word"),
    (_m("c"), "copyregion", "copyregion", "M-c     copy region"),
    (_m("d"), "delfword", "delfword", "M-d     delete forward word"),
    (_m("D"), "decryptb", "decryptb", "M-D     decrypt buffer"),
    (_m("E"), "encryptb", "encryptb", "M-E     encrypt buffer"),
    (_m("f"), "forwword", "forwword", "M-f     forward word"),
    (_m("h"), "helpkeys", "helpkeys", "M-h     print key mappings"),
    (_m("i"), "setindent", "setindent", "M-i     set indent"),
    (_m("l"), "lowerword", "lowerword", "M-l     lowercase word"),
    (_m("m"), "named_macro", "named_macro", "M-m     invoke named macro"),
    (_m("M"), "mouse_toggle", "mouse_toggle", "M-M     toggle mouse on/off"),
    (_m("n"), "gotoline", "gotoline", "M-n     goto line number"),
    (_m("p"), "pack", "pack", "M-p     pack buffer"),
    (_m("q"), "fillpara", "fillpara", "M-q     fill paragraph"),
    (_m("Q"), "fillbuf", "fillbuf", "M-Q     fill all paragraphs in buffer"),
    (_m("r"), "qreplace", "qreplace", "M-r     query replace"),
    (_m("8"), "asciify", "asciify",
     "M-8     convert 8-bit chars to 7-bit ASCII equivalents"),
    (_m("s"), "setvar", "setvar", "M-s     set value of variable"),
    (_m("u"), "upperword", "upperword", "M-u     uppercase word"),
    (_m("V"), "set_vi", "set_vi 'i' is clr", "M-V     set vi(ew) mode"),
    (_m("W"), "toggle_ww", "toggle_ww", "M-W     toggle word-wrap mode"),
    (_m("v"), "yank", "paste", "M-v     paste cut text"),
    (_m("w"), "copyregion", "copyregion", "M-w     copy region"),
    (_m("x"), "killregion", "cut region", "M-x     cut marked text"),
    (_m("?"), "help", "help", "M-?     explain following key"),
    (_m(0x7F), "delbword", "delbword", "M-DEL   delete backward word"),
    (0x7F, "backdel", "backdel", "DEL     delete backward character"),
])

VI_KEYTAB = _table([
    (ord("h"), "backchar", "backchar", "backward one character (vi)"),
    (ord("i"), "clr_vi", "clr_vi", "leave vi mode (vi)"),
    (ord("j"), "forwline", "forwline", "forward one line (vi)"),
    (ord("k"), "backline", "backline", "backward one line (vi)"),
    (ord("l"), "forwchar", "forwchar", "forward one character (vi)"),
    (ord("n"), "forwpage", "forwpage", "forward one page (vi)"),
    (_c("V"), "forwpage", "forwpage", "forward one page (vi)"),
    (ord("m"), "backpage", "backpage", "backward one page (vi)"),
    (ord("u"), "backpage", "backpage", "backward one page (vi)"),
    (ord("b"), "backpage", "backpage", "backward one page (vi)"),
    (_c("C"), "backpage", "backpage", "backward one page (vi)"),
    (ord("x"), "forwdel", "forwdel", "forward delete (vi)"),
    (ord("A"), "vi_A", "vi_A", "append at end of line (vi)"),
    (ord("s"), "vi_s", "vi_s", "substitute (vi)"),
    (ord("q"), "quit", "quit", "quit (vi)"),
    (ord("/"), "forwsearch", "forwsearch", "forward search (vi)"),
    (ord("\\"), "backsearch", "backsearch", "backward search (vi)"),
    (_c("S"), "forwsearch", "forwsearch", "forward search"),
    (_c("R"), "backsearch", "backsearch", "backward search"),
    (_mc("N"), "nextfile", "nextfile", "M-^N    next file"),
    (_xc("C"), "quit", "quit", "^X^C    quit"),
    (_c("G"), "clr_vi", "clr_vi", "leave vi(ew) mode (vi)"),
])


def _find(table, code):
    return next((binding for binding in table if binding.code == code), None)


def lookup(code, vi_mode=False):
    """Return the binding that runs for ``code``, or None.

    In vi mode only the vi table is searched.
    """
    return _find(VI_KEYTAB if vi_mode else KEYTAB, code)


def lookup_name(name):
    """Return the first normal-mode binding whose table name is ``name``."""
    return next((binding for binding in KEYTAB if binding.name == name), None)


def help_text(code, vi_mode=False):
    """Return the one-line explanation of what ``code`` does."""
    if vi_mode:
        binding = _find(VI_KEYTAB, code)
        if binding is not None:
            return binding.help
    binding = _find(KEYTAB, code)
    if binding is not None:
        return binding.help
    return "no action" if vi_mode else "self insert"


def help_lines():
    """Return the lines of the help buffer: a header and every key's help."""
    return [HELP_HEADER, *(binding.help for binding in KEYTAB)]