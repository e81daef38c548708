import pytest

from cubraycast.xpm import (
    TRANSPARENT,
    Texture,
    XpmError,
    load_xpm,
    parse_xpm,
    strip_comments,
    text_to_rgb,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"2 2 3 1 ",
"a c #FF0000",
"b c blue",
". c None",
"ab",
".a"
};
"""


def test_parse_sample_dimensions():
    texture = parse_xpm(SAMPLE)
    assert (texture.width, texture.height) == (2, 2)


def test_parse_sample_pixels():
    texture = parse_xpm(SAMPLE)
    assert texture.pixel(0, 0) == 0xFF0000
    assert texture.pixel(1, 0) == 0xFF
    assert texture.pixel(0, 1) == TRANSPARENT
    assert texture.pixel(1, 1) == 0xFF0000


def test_pixel_outside_is_zero():
    texture = parse_xpm(SAMPLE)
    assert texture.pixel(-1, 0) == 0
    assert texture.pixel(0, 2) == 0
    assert texture.pixel(2, 0) == 0


def test_two_chars_per_pixel():
    texture = parse_xpm('"1 1 1 2", "ab c #00FF00", "ab"')
    assert texture.pixels == ((0x00FF00,),)


def test_none_colour_becomes_transparent_value():
    texture = parse_xpm('"1 1 1 1", ". c None", "."')
    assert texture.pixel(0, 0) == 0xFF000000


def test_text_to_rgb_hex():
    assert text_to_rgb("#00ff00", None) == 0x00FF00


def test_text_to_rgb_named_case_insensitive():
    assert text_to_rgb("RED", None) == 0xFF0000


def test_text_to_rgb_two_words():
    assert text_to_rgb("light", "blue") == 0xADD8E6


def test_text_to_rgb_unknown_is_zero():
    assert text_to_rgb("nosuchcolour", None) == 0


def test_text_to_rgb_none_is_minus_one():
    assert text_to_rgb("None", None) == -1


def test_strip_comments_keeps_length():
    text = '/* c */"a b"'
    stripped = strip_comments(text)
    assert len(stripped) == len(text)
    assert stripped.strip() == '"a b"'


def test_strip_comments_ignores_quoted():
    text = '"/* keep */"'
    assert strip_comments(text) == text


def test_strip_line_comment():
    stripped = strip_comments('x // note\n"q"')
    assert "//" not in stripped
    assert stripped.endswith('"q"')


def test_zero_header_raises():
    with pytest.raises(XpmError):
        parse_xpm('"0 1 1 1", "a c #000000", "a"')


def test_short_header_raises():
    with pytest.raises(XpmError):
        parse_xpm('"1 1 1"')


def test_missing_c_entry_raises():
    with pytest.raises(XpmError):
        parse_xpm('"1 1 1 1", "a s #000000", "a"')


def test_missing_rows_raises():
    with pytest.raises(XpmError):
        parse_xpm('"1 2 1 1", "a c #000000", "a"')


def test_load_round_trip(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(SAMPLE, encoding="latin-1")
    assert load_xpm(path) == parse_xpm(SAMPLE)


def test_load_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "absent.xpm")


def test_texture_is_comparable():
    texture = Texture(width=1, height=1, pixels=((5,),))
    assert texture.pixel(0, 0) == 5