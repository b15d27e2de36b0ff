import pytest

from rsdkcore.ini import ConfigItem, IniParser, ItemType


SAMPLE = "Name=Test Mod\n# hidden=1\n[Game]\nLanguage=2\nSpeed=1.5\nDebug=TRUE\n; note=x\n[Video]\nVSync=1\n"


def test_parse_sections_and_keys():
    ini = IniParser.parse(SAMPLE)
    assert ini.get_string("", "Name") == "Test Mod"
    assert ini.get_integer("Game", "Language") == 2
    assert ini.get_float("Game", "Speed") == 1.5
    assert ini.get_bool("Game", "Debug") is True
    assert ini.get_bool("Video", "VSync") is True


def test_hash_and_semicolon_lines_are_ignored():
    ini = IniParser.parse(SAMPLE)
    keys = [item.key for item in ini.items]
    assert "# hidden" not in keys
    assert "hidden" not in keys
    assert all(not key.startswith(";") for key in keys)
    assert len(ini.items) == 5


def test_section_flags():
    ini = IniParser.parse(SAMPLE)
    assert ini.items[0] == ConfigItem(section="", key="Name", value="Test Mod", has_section=False)
    assert ini.items[1].has_section is True
    assert ini.items[1].section == "Game"


def test_key_keeps_spaces_before_equals():
    ini = IniParser.parse("key = value\n")
    assert ini.get_string("", "key") is None
    assert ini.get_string("", "key ") == "value"


def test_value_stops_at_tab_and_cr():
    ini = IniParser.parse("a=one\ttwo\r\nb=three\r\n")
    assert ini.get_string("", "a") == "one"
    assert ini.get_string("", "b") == "three"


def test_empty_value_is_not_an_item():
    ini = IniParser.parse("a=\nb=2")
    assert ini.get_string("", "a") is None
    assert ini.get_integer("", "b") == 2


def test_missing_returns_default():
    ini = IniParser.parse(SAMPLE)
    assert ini.get_string("Game", "Nope", "fallback") == "fallback"
    assert ini.get_integer("Nope", "Language", 7) == 7
    assert ini.get_bool("", "Language", False) is False


def test_lookup_is_case_sensitive():
    ini = IniParser.parse(SAMPLE)
    assert ini.get_integer("game", "Language") is None
    assert ini.get_integer("Game", "language") is None


@pytest.mark.parametrize(
    "raw, expected",
    [("12abc", 12), ("  -4", -4), ("abc", 0), ("+9", 9)],
)
def test_integer_prefix_parsing(raw, expected):
    ini = IniParser.parse(f"v={raw}\n")
    assert ini.get_integer("", "v") == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("2.5x", 2.5), ("abc", 0.0), ("-3", -3.0), (".25", 0.25)],
)
def test_float_prefix_parsing(raw, expected):
    ini = IniParser.parse(f"v={raw}\n")
    assert ini.get_float("", "v") == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("True", True), ("1", True), ("false", False), ("yes", False), ("2", False)],
)
def test_bool_parsing(raw, expected):
    ini = IniParser.parse(f"v={raw}\n")
    assert ini.get_bool("", "v") is expected


def test_setters_replace_existing_item():
    ini = IniParser.parse("[s]\nk=old\n")
    ini.set_integer("s", "k", 42)
    assert len(ini.items) == 1
    assert ini.get_integer("s", "k") == 42
    assert ini.items[0].type == ItemType.INT


def test_setters_append_new_items():
    ini = IniParser()
    ini.set_bool("mods", "A", True)
    ini.set_bool("mods", "B", False)
    assert [item.value for item in ini.items] == ["true", "false"]
    assert ini.get_bool("mods", "A") is True
    assert ini.get_bool("mods", "B") is False


def test_set_float_formats_six_decimals():
    ini = IniParser()
    ini.set_float("s", "f", 0.5)
    assert ini.get_string("s", "f") == "0.500000"
    assert ini.items[0].type == ItemType.FLOAT


def test_dumps_layout():
    ini = IniParser()
    ini.set_integer("", "a", 1)
    ini.set_bool("s", "k", True)
    assert ini.dumps() == "a=1\n\n[s]\nk=true\n"


def test_dumps_comment():
    ini = IniParser()
    ini.set_comment("", "c", "hello")
    ini.set_string("", "x", "y")
    text = ini.dumps()
    assert "; hello\n" in text
    assert "x=y\n" in text


def test_dumps_groups_repeated_section_once():
    ini = IniParser()
    ini.set_string("a", "k1", "v1")
    ini.set_string("b", "k2", "v2")
    ini.set_string("a", "k3", "v3")
    text = ini.dumps()
    assert text.count("[a]") == 1
    assert text.count("[b]") == 1
    reparsed = IniParser.parse(text)
    assert reparsed.get_string("a", "k3") == "v3"


def test_dumps_parse_round_trip():
    ini = IniParser()
    ini.set_string("", "Name", "Thing")
    ini.set_integer("Game", "Level", 3)
    ini.set_bool("Game", "Fast", False)
    ini.set_string("Video", "Mode", "full")
    back = IniParser.parse(ini.dumps())
    assert back.get_string("", "Name") == "Thing"
    assert back.get_integer("Game", "Level") == 3
    assert back.get_bool("Game", "Fast") is False
    assert back.get_string("Video", "Mode") == "full"


def test_write_and_load(tmp_path):
    path = tmp_path / "settings.ini"
    ini = IniParser()
    ini.set_bool("mods", "MyMod", True)
    ini.set_integer("mods", "Count", 5)
    ini.write(path)
    loaded = IniParser.load(path)
    assert loaded.get_bool("mods", "MyMod") is True
    assert loaded.get_integer("mods", "Count") == 5


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        IniParser.load(tmp_path / "absent.ini")