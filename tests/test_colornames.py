import pytest

from cube3d.colornames import lookup_color


def test_basic_names():
    assert lookup_color("red") == 0xff0000
    assert lookup_color("black") == 0x0
    assert lookup_color("blue") == 0xff


def test_case_insensitive():
    assert lookup_color("ReD") == lookup_color("red")
    assert lookup_color("GHOST WHITE") == lookup_color("ghost white")


def test_none_is_transparent():
    assert lookup_color("none") == -1
    assert lookup_color("NONE") == -1


def test_unknown_name_gives_none():
    assert lookup_color("not a colour") is None
    assert lookup_color("") is None


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == lookup_color("darkslategray")
    assert lookup_color("light slate") == lookup_color("lightslategray")
    assert lookup_color("light goldenrod") == lookup_color("lightgoldenrodyellow")


@pytest.mark.parametrize("n", range(101))
def test_gray_and_grey_agree(n):
    gray = lookup_color(f"gray{n}")
    assert gray == lookup_color(f"grey{n}")
    # Each channel of a numbered grey is the same byte.
    assert (gray >> 16) & 0xFF == (gray >> 8) & 0xFF == gray & 0xFF


@pytest.mark.parametrize(
    "spaced, joined",
    [
        ("navy blue", "navyblue"),
        ("misty rose", "mistyrose"),
        ("dark orange", "darkorange"),
        ("light green", "lightgreen"),
        ("dark red", "darkred"),
    ],
)
def test_spaced_and_joined_forms_match(spaced, joined):
    assert lookup_color(spaced) == lookup_color(joined)


def test_numbered_variant_one_matches_base():
    assert lookup_color("snow1") == lookup_color("snow")
    assert lookup_color("red1") == lookup_color("red")
    assert lookup_color("gray100") == lookup_color("white")


def test_values_fit_in_24_bits():
    for name in ["snow", "thistle4", "darkmagenta", "gold3", "cyan"]:
        value = lookup_color(name)
        assert 0 <= value <= 0xFFFFFF