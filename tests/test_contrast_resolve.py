"""Tests for foreground choice and contrast adjustment."""

import itertools

import pytest

from color_convert import hex_to_hsl, rgb_to_hex
from color_metrics import contrast_ratio
from contrast_resolve import (
    BLACK,
    MAX_ADJUST_ATTEMPTS,
    WHITE,
    adjust_for_contrast,
    best_foreground,
    complementary,
    meets_contrast,
)


def test_best_foreground_extremes():
    assert best_foreground("#000000") == WHITE
    assert best_foreground("#FFFFFF") == BLACK
    assert best_foreground("#FFD700") == BLACK
    assert best_foreground("#102030") == WHITE


def test_best_foreground_prefers_higher_ratio_when_both_pass():
    # white clears 4.5 here, but black clears it by more
    assert contrast_ratio("#767676", WHITE) >= 4.5
    assert best_foreground("#767676") == BLACK


def test_best_foreground_falls_back_to_black():
    assert contrast_ratio("#777777", WHITE) < 4.5
    assert best_foreground("#777777") == BLACK


def test_best_foreground_always_meets_aa():
    levels = range(0, 256, 51)
    for rgb in itertools.product(levels, repeat=3):
        bg = rgb_to_hex(rgb)
        assert contrast_ratio(bg, best_foreground(bg)) >= 4.5


def test_adjust_grey_terminates():
    out = adjust_for_contrast("#808080", 4.5)
    assert out == "#808080" or meets_contrast(out, 4.5)


def test_adjust_walks_lightness_for_higher_target():
    out = adjust_for_contrast("#808080", 7.0)
    assert out != "#808080"
    assert meets_contrast(out, 7.0)


def test_adjust_walks_down_monotonically_from_light_start():
    # 0.502 -> 0.452 -> ... -> 0.302, never bouncing back over 0.5
    assert adjust_for_contrast("#808080", 7.0) == "#4d4d4d"


def test_adjust_walks_up_from_dark_start():
    out = adjust_for_contrast("#737373", 7.0)
    assert hex_to_hsl(out)[2] > hex_to_hsl("#737373")[2]
    assert contrast_ratio(out, BLACK) >= 7.0


def test_adjust_gives_back_original_when_unreachable():
    assert adjust_for_contrast("#808080", 22.0) == "#808080"
    assert MAX_ADJUST_ATTEMPTS == 20


def test_adjust_unparseable_passthrough():
    assert adjust_for_contrast("not-a-color") == "not-a-color"


def test_complementary_rotates_and_nudges():
    assert complementary("#ff0000") == "#33ff99"


@pytest.mark.parametrize("hex_color", ["#102030", "#e63946", "#f1fa8c"])
def test_complementary_moves_lightness_off_midpoint(hex_color):
    _, _, l0 = hex_to_hsl(hex_color)
    _, _, l1 = hex_to_hsl(complementary(hex_color))
    if l0 > 0.5:
        assert l1 < l0
    else:
        assert l1 > l0
