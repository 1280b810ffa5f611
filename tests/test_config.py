import pytest

from medit.config import (
    CNTRL,
    CTLX,
    META,
    InitConfig,
    Settings,
    init_rc_dir,
    parse_keyname,
)


def forwsearch(f, n):
    return True


def forwword(f, n):
    return True


BUILTINS = [
    (CNTRL | ord("S"), "forwsearch", forwsearch),
    (META | ord("f"), "forwword", forwword),
]


def make_config():
    return InitConfig(Settings(), BUILTINS)


@pytest.mark.parametrize(
    "name, code",
    [
        ("M-x", META | ord("x")),
        ("m-Q", META | ord("Q")),
        ("C-a", CNTRL | ord("A")),
        ("^a", CNTRL | ord("A")),
        ("C-x", CTLX),
        ("^X", CTLX),
        ("C-Xb", CTLX | ord("b")),
        ("^Xb", CTLX | ord("b")),
        ("C-X^s", CTLX | CNTRL | ord("S")),
        ("C-XC-s", CTLX | CNTRL | ord("S")),
    ],
)
def test_parse_keyname(name, code):
    assert parse_keyname(name) == code


@pytest.mark.parametrize("name", ["", "x", "C-", "M-", "^"])
def test_parse_keyname_invalid(name):
    with pytest.raises(ValueError):
        parse_keyname(name)


def test_default_settings():
    settings = Settings()
    assert (settings.rmarg, settings.lmarg, settings.tabsize, settings.softtabs) == (
        77, 0, 4, 1,
    )


def test_set_directives_and_aliases():
    config = make_config()
    config.parse(["set rm 60\n", "set lmarg 5", "set t 8", "set T 0"])
    assert config.settings.rmarg == 60
    assert config.settings.lmarg == 5
    assert config.settings.tabsize == 8
    assert config.settings.softtabs == 0


def test_set_non_numeric_is_zero_and_unknown_ignored():
    config = make_config()
    config.parse(["set tabsize abc", "set colour 3", "set rmarg"])
    assert config.settings.tabsize == 0
    assert config.settings.rmarg == 77


def test_comments_and_blank_lines_skipped():
    config = make_config()
    config.parse(["# set rm 10", "   ", "", "bogus directive"])
    assert config.settings.rmarg == 77
    assert config.user_keys == []


def test_bind_shell_command():
    config = make_config()
    config.parse(["bind M-r | pandoc -f markdown -t plain @render"])
    key = config.lookup(META | ord("r"))
    assert key.command == "pandoc -f markdown -t plain @render"
    assert key.builtin is None


def test_bind_builtin():
    config = make_config()
    config.parse(["bind M-r forwsearch"])
    assert config.lookup(META | ord("r")).builtin is forwsearch


def test_bind_unknown_builtin_ignored():
    config = make_config()
    config.parse(["bind M-r nosuchcommand", "bind M-z |   "])
    assert config.lookup(META | ord("r")) is None
    assert config.lookup(META | ord("z")) is None


def test_rebind_replaces():
    config = make_config()
    config.parse(["bind M-r | sort", "bind M-r forwsearch"])
    assert len(config.user_keys) == 1
    key = config.lookup(META | ord("r"))
    assert key.builtin is forwsearch
    assert key.command is None


def test_shadow_warning_recorded_once():
    config = make_config()
    config.parse(["bind M-f | fmt -72", "bind ^s | sort"])
    assert config.warning == "init: M-f shadows built-in 'forwword'"


def test_def_named_macro():
    config = make_config()
    config.parse(["def fmt       | fmt -72", "def raw sort -r", "def empty |"])
    assert config.named_macros == {"fmt": "fmt -72", "raw": "sort -r"}


def test_macro_directive_uses_macro_dir(tmp_path):
    config = make_config()
    config.parse(["macro mine"], str(tmp_path))
    assert config.macro_files == [str(tmp_path / "macros" / "mine")]


def test_read_file(tmp_path):
    (tmp_path / "init").write_text("set rm 50\nmacro m1\n")
    config = make_config()
    assert config.read_file(tmp_path) is True
    assert config.settings.rmarg == 50
    assert config.macro_files == [str(tmp_path / "macros" / "m1")]


def test_read_file_missing(tmp_path):
    config = make_config()
    assert config.read_file(tmp_path) is False


def test_read_path_plain_file(tmp_path):
    path = tmp_path / "extra.conf"
    path.write_text("set lm 3\nmacro m2\n")
    config = make_config()
    assert config.read_path(str(path)) is True
    assert config.settings.lmarg == 3
    assert config.macro_files == [str(tmp_path / "macros" / "m2")]


def test_read_path_directory(tmp_path):
    (tmp_path / "init").write_text("def up | tr a-z A-Z\n")
    config = make_config()
    assert config.read_path(tmp_path) is True
    assert config.named_macros["up"] == "tr a-z A-Z"


def test_read_path_missing(tmp_path):
    config = make_config()
    assert config.read_path(tmp_path / "nothing") is False


def test_init_rc_dir(tmp_path):
    rc = tmp_path / ".me"
    assert init_rc_dir(rc) is True
    assert (rc / "macros").is_dir()
    assert "INIT FILE SYNTAX" in (rc / "README").read_text()
    assert init_rc_dir(rc) is False


def test_init_rc_dir_restores_readme(tmp_path):
    rc = tmp_path / ".me"
    init_rc_dir(rc)
    (rc / "README").unlink()
    init_rc_dir(rc)
    assert (rc / "README").exists()


def test_init_rc_dir_keeps_existing_readme(tmp_path):
    rc = tmp_path / ".me"
    rc.mkdir()
    (rc / "README").write_text("mine")
    assert init_rc_dir(rc) is False
    assert (rc / "README").read_text() == "mine"