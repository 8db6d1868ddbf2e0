import pytest

from campuslife.styles import MESSAGE_COLORS, message_background_color


def test_every_colour_comes_from_twelve_distinct_palette_entries():
    colours = {message_background_color(f"user{n}") for n in range(500)}
    assert colours <= set(MESSAGE_COLORS)
    assert len(MESSAGE_COLORS) == 12
    assert len(set(MESSAGE_COLORS)) == 12


def test_empty_name_uses_signed_first_byte():
    # md5("") starts with 0xd4, a negative signed byte.
    assert message_background_color("") == "#E8EAF6"


def test_single_letter_name():
    # md5("a") starts with 0x0c.
    assert message_background_color("a") == "#E3F2FD"


@pytest.mark.parametrize("name", ["alice", "bob", "张三", "user_42", "a b c"])
def test_same_name_always_same_colour(name):
    first = message_background_color(name)
    assert first == message_background_color(name)
    assert first in MESSAGE_COLORS


def test_colours_spread_over_many_users():
    colours = {message_background_color(f"student{n}") for n in range(300)}
    assert colours <= set(MESSAGE_COLORS)
    assert len(colours) >= 8