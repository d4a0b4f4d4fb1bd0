import pytest

from cubraycaster.mapcheck import (
    MapError,
    check_extended_row_enclosures,
    check_for_multiple_sections,
    check_horizontal_boundaries,
    check_player_position_surroundings,
    check_unprotected_spaces,
    check_vertical_boundaries,
    check_zeroes_below_in_second_to_last_row,
    is_row_completely_empty,
    validate_map,
    validate_section,
)
from cubraycaster.state import CubError

VALID = ["111111", "100001", "10N001", "111111"]


def test_valid_map_passes_and_broken_border_fails():
    rows = list(VALID)
    assert validate_map(rows) is None
    assert rows == VALID
    broken = list(VALID)
    broken[0] = "110111"
    with pytest.raises(MapError, match="top row"):
        validate_map(broken)


def test_map_error_is_cub_error():
    with pytest.raises(CubError):
        validate_map(["111"])


def test_too_few_rows():
    with pytest.raises(MapError, match="at least two rows"):
        validate_map(["111"])


def test_bottom_row_open():
    with pytest.raises(MapError, match="bottom row"):
        check_horizontal_boundaries(["111", "101"])


@pytest.mark.parametrize(
    "row, message",
    [
        ("  0 1", "at the start"),
        ("1 0  ", "in the end"),
        ("1 N", "right boundary"),
    ],
)
def test_vertical_boundaries(row, message):
    with pytest.raises(MapError, match=message):
        check_vertical_boundaries([row])


def test_zero_in_second_to_last_row_without_wall_below():
    with pytest.raises(MapError, match="2nd to last row"):
        check_zeroes_below_in_second_to_last_row(["1111", "1001", "11"])


def test_extended_row_downward():
    with pytest.raises(MapError, match="extended row"):
        check_extended_row_enclosures(["11", "100", "111"])


def test_extended_row_upward():
    with pytest.raises(MapError, match="extended row"):
        check_extended_row_enclosures(["11111", "10000", "111"])


def test_player_on_boundary():
    with pytest.raises(MapError, match="on map boundary"):
        check_player_position_surroundings(["N11", "111"])


def test_player_next_to_blank():
    with pytest.raises(MapError, match=r"\(left\)"):
        check_player_position_surroundings(["11111", "1 N01", "11111"])


def test_player_surrounded_by_walls_passes_but_edge_fails():
    assert check_player_position_surroundings(["111", "1N1", "111"]) is None
    with pytest.raises(MapError):
        check_player_position_surroundings(["111", "11N", "111"])


@pytest.mark.parametrize(
    "row, expected",
    [("   \t", True), ("", True), (" 1 ", False)],
)
def test_is_row_completely_empty(row, expected):
    assert is_row_completely_empty(row) is expected


def test_second_section_open_at_bottom():
    rows = ["1111", "1001", "1111", "    ", "1111", "1011"]
    with pytest.raises(MapError, match="not properly enclosed"):
        check_for_multiple_sections(rows)


def test_validate_section_left_boundary():
    with pytest.raises(MapError, match="left boundary"):
        validate_section(["111", "011", "111"], 0, 2)


def test_validate_section_right_boundary():
    with pytest.raises(MapError, match="right boundary"):
        validate_section(["111", "110", "111"], 0, 2)


@pytest.mark.parametrize(
    "rows, message",
    [
        (["1111", " 001", "1111"], "left of '0'"),
        (["11111", "1000 ", "11111"], "right of '0'"),
        (["1 11", "1011", "1111"], "above '0'"),
        (["1111", "1011", "1 11"], "below '0'"),
    ],
)
def test_unprotected_spaces(rows, message):
    with pytest.raises(MapError, match=message):
        check_unprotected_spaces(rows)


def test_space_backed_by_floor_is_allowed_but_backed_by_edge_is_not():
    assert check_unprotected_spaces(["1111111", "10 0001", "1111111"]) is None
    with pytest.raises(MapError):
        check_unprotected_spaces(["1111111", " 0 0001", "1111111"])