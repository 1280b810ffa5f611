import pytest

from medit.config import CNTRL, CTLX, META
from medit.keyinput import KeyReader, decode_escape, read_argument


def reader_for(text):
    chars = iter([ord(ch) if isinstance(ch, str) else ch for ch in text])
    return KeyReader(lambda: next(chars))


def test_plain_key():
    assert reader_for("a").read_key() == ord("a")


def test_escape_prefix_gives_meta():
    assert reader_for(["\x1b", "x"]).read_key() == META | ord("x")


def test_repeated_escape_collapses():
    assert reader_for(["\x1b", "\x1b", "x"]).read_key() == META | ord("x")


def test_control_character():
    assert reader_for([0x01]).read_key() == CNTRL | ord("A")


def test_control_x_prefix():
    assert reader_for([0x18, "f"]).read_key() == CTLX | ord("f")


def test_control_x_control():
    key = reader_for([0x18, 0x06]).read_key()
    assert key == CTLX | CNTRL | ord("F")


def test_push_key_is_returned_first():
    reader = reader_for("b")
    reader.push_key(META | CNTRL | ord("N"))
    assert reader.has_pending
    assert reader.read_key() == META | CNTRL | ord("N")
    assert reader.read_key() == ord("b")


def test_read_control_uppercases():
    assert reader_for("s").read_control() == ord("S")


def test_read_control_marks_controls():
    assert reader_for([0x13]).read_control() == CNTRL | ord("S")


def test_decode_arrow_up():
    reader = reader_for("A")
    assert decode_escape(META | ord("["), reader.read_key) == "backline"


def test_decode_f1():
    reader = reader_for("P")
    assert decode_escape(META | ord("O"), reader.read_key) == "key_f1"


def test_decode_f5_consumes_tilde():
    reader = reader_for("15~z")
    assert decode_escape(META | ord("["), reader.read_key) == "key_f5"
    assert reader.read_key() == ord("z")


def test_decode_page_down_consumes_tilde():
    reader = reader_for("6~q")
    assert decode_escape(META | ord("["), reader.read_key) == "forwpage"
    assert reader.read_key() == ord("q")


def test_decode_other_key_is_none():
    reader = reader_for("")
    assert decode_escape(ord("a"), reader.read_key) is None


def test_decode_unknown_sequence_is_none():
    reader = reader_for("Z")
    assert decode_escape(META | ord("["), reader.read_key) is None


def test_no_argument():
    reader = reader_for("")
    assert read_argument(reader, ord("x")) == (ord("x"), False, 1)


def test_control_u_alone_is_four():
    reader = reader_for("x")
    assert read_argument(reader, CNTRL | ord("U")) == (ord("x"), True, 4)


def test_control_u_twice_multiplies():
    reader = reader_for([0x15, "x"])
    assert read_argument(reader, CNTRL | ord("U")) == (ord("x"), True, 16)


def test_control_u_digits():
    reader = reader_for("32x")
    assert read_argument(reader, CNTRL | ord("U")) == (ord("x"), True, 32)


def test_control_u_minus_is_minus_one():
    reader = reader_for("-x")
    assert read_argument(reader, CNTRL | ord("U")) == (ord("x"), True, -1)


def test_control_u_negative_number():
    reader = reader_for("-7x")
    assert read_argument(reader, CNTRL | ord("U")) == (ord("x"), True, -7)


def test_vi_count():
    reader = reader_for("2j")
    assert read_argument(reader, ord("1"), vi_mode=True) == (ord("j"), False, 12)


def test_vi_digits_ignored_outside_vi_mode():
    reader = reader_for("")
    assert read_argument(reader, ord("1")) == (ord("1"), False, 1)


def test_vi_minus_alone():
    reader = reader_for("j")
    assert read_argument(reader, ord("-"), vi_mode=True) == (ord("j"), False, -1)


def test_bare_control_x_is_prefixed():
    reader = reader_for("s")
    key, f, n = read_argument(reader, CNTRL | ord("X"))
    assert key == CTLX | ord("S")
    assert (f, n) == (False, 1)


def test_exhausted_source_raises():
    reader = reader_for("")
    with pytest.raises(StopIteration):
        reader.read_key()