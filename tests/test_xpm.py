import pytest

from cube3d.colornames import lookup_color
from cube3d.xpm import (
    XpmError,
    load_xpm,
    parse_color_spec,
    parse_xpm,
    parse_xpm_text,
    split_words,
    strip_comments,
)

SAMPLE_LINES = [
    "2 2 2 1",
    ". c #FF0000",
    "# c blue",
    ".#",
    "#.",
]

SAMPLE_FILE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"2 2 2 1",
". c #FF0000",
"# c blue",
// pixels
".#",
"#."
};
"""


def test_split_words_on_spaces_and_tabs():
    assert split_words("  a  b\tc ") == ["a", "b", "c"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_strip_comments_keeps_length_and_removes_text():
    text = 'a /* gone */ "b" // also gone\nc'
    stripped = strip_comments(text)
    assert len(stripped) == len(text)
    assert "gone" not in stripped
    assert stripped.startswith("a ")
    assert '"b"' in stripped
    assert stripped.endswith("c")


def test_strip_comments_ignores_markers_in_quotes():
    text = '"/* kept */"'
    assert strip_comments(text) == text


def test_parse_color_spec_hex():
    assert parse_color_spec("#ff0000", None) == 16711680


def test_parse_color_spec_named():
    assert parse_color_spec("Red", None) == lookup_color("red")


def test_parse_color_spec_two_word_name():
    assert parse_color_spec("ghost", "white") == lookup_color("ghost white")


def test_parse_color_spec_none_is_transparent():
    assert parse_color_spec("None", None) == -1


def test_parse_color_spec_unknown_is_black():
    assert parse_color_spec("nosuchcolour", None) == 0


def test_parse_xpm_pixels():
    img = parse_xpm(SAMPLE_LINES)
    assert (img.width, img.height) == (2, 2)
    assert img.get_pixel(0, 0) == 16711680
    assert img.get_pixel(1, 0) == lookup_color("blue")
    assert img.get_pixel(0, 1) == lookup_color("blue")
    assert img.get_pixel(1, 1) == 16711680


def test_parse_xpm_transparent_colour():
    img = parse_xpm(["1 1 1 1", "x c None", "x"])
    assert img.get_pixel(0, 0) == 0xFF000000


def test_parse_xpm_unknown_key_is_black():
    img = parse_xpm(["2 1 1 1", "a c #00ff00", "az"])
    assert img.get_pixel(0, 0) == parse_color_spec("#00ff00", None)
    assert img.get_pixel(1, 0) == 0


def test_parse_xpm_multi_char_keys():
    img = parse_xpm(["2 1 2 3", "aaa c red", "bbb c blue", "bbbaaa"])
    assert img.get_pixel(0, 0) == lookup_color("blue")
    assert img.get_pixel(1, 0) == lookup_color("red")


@pytest.mark.parametrize(
    "lines",
    [
        ["0 2 2 1"],
        ["2 2"],
        ["2 1 1 1", "a red", "aa"],
        ["2 1 1 1", "a c", "aa"],
        ["2 2 1 1", "a c red", "aa"],
        ["2 1 1 1", "a c red", "a"],
        [],
    ],
)
def test_parse_xpm_malformed_raises(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_parse_xpm_text_matches_lines():
    from_text = parse_xpm_text(SAMPLE_FILE)
    from_lines = parse_xpm(SAMPLE_LINES)
    assert from_text.rgb_bytes() == from_lines.rgb_bytes()


def test_load_xpm_from_file(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(SAMPLE_FILE)
    img = load_xpm(path)
    assert img.get_pixel(1, 0) == lookup_color("blue")


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "missing.xpm")