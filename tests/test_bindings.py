import pytest

from medit.bindings import (
    KEYTAB,
    VI_KEYTAB,
    HELP_HEADER,
    help_lines,
    help_text,
    lookup,
    lookup_name,
)
from medit.config import CNTRL, CTLX, META, parse_keyname


def test_lookup_control_key():
    binding = lookup(CNTRL | ord("A"), False)
    assert binding.command == "gotobol"
    assert binding.help == "^A      goto beginning of line"


def test_lookup_ctlx_key():
    assert lookup(CTLX | CNTRL | ord("S")).command == "filesave"


def test_lookup_meta_key():
    assert lookup(META | ord("q")).command == "fillpara"


def test_lookup_unbound_returns_none():
    assert lookup(ord("a")) is None


def test_vi_mode_uses_vi_table_only():
    assert lookup(ord("h"), True).command == "backchar"
    assert lookup(CNTRL | ord("A"), True) is None
    assert lookup(ord("h"), False) is None


def test_vi_ctrl_g_leaves_vi_mode():
    assert lookup(CNTRL | ord("G"), True).command == "clr_vi"
    assert lookup(CNTRL | ord("G"), False).command == "ctrlg"


def test_lookup_name():
    binding = lookup_name("quit")
    assert binding.code == CTLX | CNTRL | ord("C")
    assert lookup_name("no-such-command") is None


def test_lookup_name_returns_first_match():
    assert lookup_name("delblank").code == CTLX | CNTRL | ord("M")


@pytest.mark.parametrize("binding", KEYTAB)
def test_every_binding_found_by_lookup_matches_code(binding):
    assert lookup(binding.code).code == binding.code


def test_keynames_agree_with_table():
    assert lookup(parse_keyname("C-X^s")).command == "filesave"
    assert lookup(parse_keyname("M-h")).command == "helpkeys"


def test_help_text_known_keys():
    assert help_text(CTLX | ord("|")) == "^X|     pipe buffer through shell command"
    assert help_text(ord("h"), True) == "backward one character (vi)"


def test_help_text_vi_falls_back_to_keytab():
    assert help_text(CNTRL | ord("A"), True) == "^A      goto beginning of line"


def test_help_text_unbound():
    assert help_text(ord("z"), False) == "self insert"
    assert help_text(ord("z"), True) == "no action"


def test_help_lines():
    lines = help_lines()
    assert lines[0] == HELP_HEADER
    assert len(lines) == len(KEYTAB) + 1
    assert lines[1:] == [binding.help for binding in KEYTAB]


def test_vi_table_has_quit():
    assert any(b.command == "quit" for b in VI_KEYTAB)
    assert lookup(ord("q"), True).command == "quit"