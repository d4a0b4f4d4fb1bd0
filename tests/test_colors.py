import pytest

from cubraycaster.colors import NAMED_COLORS, color_by_name


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("snow", 0xFFFAFA),
        ("white", 0xFFFFFF),
        ("black", 0x0),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("lightgoldenrodyellow", 0xFAFAD2),
        ("grey50", 0x7F7F7F),
    ],
)
def test_known_names(name, expected):
    assert color_by_name(name) == expected


def test_none_is_transparent():
    assert color_by_name("none") == -1


def test_lookup_ignores_case():
    assert color_by_name("SNOW") == color_by_name("snow")
    assert color_by_name("Ghost White") == color_by_name("ghost white")
    assert color_by_name("NoNe") == -1


def test_first_entry_wins_for_repeated_names():
    assert color_by_name("dark slate") == 0x2F4F4F
    assert color_by_name("light slate") == 0x778899
    assert color_by_name("light goldenrod") == 0xFAFAD2


def test_unknown_name_raises():
    with pytest.raises(KeyError):
        color_by_name("not a colour")


def test_empty_name_raises():
    with pytest.raises(KeyError):
        color_by_name("")


@pytest.mark.parametrize("level", range(101))
def test_gray_and_grey_agree(level):
    assert color_by_name(f"gray{level}") == color_by_name(f"grey{level}")


def test_gray_extremes_match_black_and_white():
    assert color_by_name("gray0") == color_by_name("black")
    assert color_by_name("gray100") == color_by_name("white")


def test_spaced_and_joined_names_agree():
    assert color_by_name("alice blue") == color_by_name("aliceblue")
    assert color_by_name("dark grey") == color_by_name("darkgray")


def test_numbered_variant_one_matches_base():
    for base in ("snow", "red", "green", "orange", "gold"):
        assert color_by_name(f"{base}1") == color_by_name(base)


def test_all_values_are_rgb_or_transparent():
    for name, value in NAMED_COLORS.items():
        if name == "none":
            assert value == -1
        else:
            assert 0 <= value <= 0xFFFFFF


def test_index_keys_are_lower_case():
    for name, value in NAMED_COLORS.items():
        assert name == name.lower()
        assert color_by_name(name) == value


def test_every_key_resolves_through_lookup():
    for name, value in NAMED_COLORS.items():
        assert color_by_name(name.upper()) == value