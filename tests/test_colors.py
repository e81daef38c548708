import pytest

from cubraycast.colors import color_by_name


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("ghost white", 0xF8F8FF),
        ("black", 0x0),
        ("white", 0xFFFFFF),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("gray50", 0x7F7F7F),
        ("lightgreen", 0x90EE90),
    ],
)
def test_known_names(name, expected):
    assert color_by_name(name) == expected


def test_none_means_transparent():
    assert color_by_name("none") == -1


@pytest.mark.parametrize("name", ["SNOW", "Ghost White", "ReD", "NONE"])
def test_lookup_ignores_case(name):
    assert color_by_name(name) == color_by_name(name.lower())


def test_first_entry_wins_for_repeated_names():
    assert color_by_name("dark slate") == 0x2F4F4F
    assert color_by_name("light slate") == 0x778899
    assert color_by_name("light goldenrod") == 0xFAFAD2


@pytest.mark.parametrize("level", range(101))
def test_gray_and_grey_agree(level):
    gray = color_by_name(f"gray{level}")
    assert gray == color_by_name(f"grey{level}")
    assert gray is not None and 0 <= gray <= 0xFFFFFF


@pytest.mark.parametrize("name", ["", "sno", "snowy", " snow", "snow ", "#ff0000"])
def test_unknown_names(name):
    assert color_by_name(name) is None


def test_non_ascii_name_is_unknown():
    assert color_by_name("whit\u00e9") is None


def test_spaced_and_joined_forms_match():
    for spaced, joined in [
        ("sky blue", "skyblue"),
        ("dark orange", "darkorange"),
        ("medium purple", "mediumpurple"),
    ]:
        assert color_by_name(spaced) == color_by_name(joined)