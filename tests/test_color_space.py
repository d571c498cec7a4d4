import numpy as np
import pytest

from colorguess.color_space import (
    Color, PLACEHOLDER_COLOR, clamp_to_surface, color_to_position, hsl_to_rgb,
    hsl_to_rgb_array, hue_distance, parse_color, position_to_color
)


@pytest.mark.parametrize("hue", [0, 45, 90, 180, 270, 359])
def test_zero_saturation_is_mid_gray(hue):
    r, g, b = hsl_to_rgb(hue, 0, 50)
    assert r == g == b
    assert abs(r - 127.5) <= 1


@pytest.mark.parametrize("hue", [0, 30, 120, 200, 300, 359])
def test_full_saturation_spans_channels(hue):
    rgb = hsl_to_rgb(hue, 100, 50)
    assert max(rgb) == 255
    assert min(rgb) == 0


def test_primary_hues():
    assert hsl_to_rgb(0, 100, 50) == (255, 0, 0)
    assert hsl_to_rgb(120, 100, 50) == (0, 255, 0)
    assert hsl_to_rgb(240, 100, 50) == (0, 0, 255)
    assert hsl_to_rgb(360, 100, 50) == (255, 0, 0)


def test_vectorised_matches_scalar():
    hues = np.array([0, 13.7, 90, 181.2, 275, 359.9])
    sats = np.array([0, 20, 45.5, 63, 90, 100])
    out = hsl_to_rgb_array(hues, sats, 50)
    for h, s, rgb in zip(hues, sats, out):
        assert tuple(int(c) for c in rgb) == hsl_to_rgb(h, s, 50)


def test_position_to_color_axes():
    c = position_to_color(200, 50, 400, 100)
    assert c.hue == pytest.approx(180)
    assert c.saturation == pytest.approx(50)
    assert c.lightness == 50

    # Right edge maps to 360, which is the same hue as 0
    edge = position_to_color(400, 0, 400, 100)
    assert edge.hue == 360
    assert hue_distance(edge.hue, 0) == 0


def test_position_to_color_monotonic():
    width, height = 640, 480
    hues = [position_to_color(x, 10, width, height).hue for x in range(0, width)]
    sats = [position_to_color(10, y, width, height).saturation for y in range(0, height)]
    assert all(a < b for a, b in zip(hues, hues[1:]))
    assert all(a < b for a, b in zip(sats, sats[1:]))


def test_color_to_position_inverts():
    c = position_to_color(123, 45, 500, 300)
    x, y = color_to_position(c, 500, 300)
    assert x == pytest.approx(123)
    assert y == pytest.approx(45)


def test_clamp_to_surface():
    assert clamp_to_surface(-5, 50, 100, 80) == (0, 50)
    assert clamp_to_surface(150, 90, 100, 80) == (100, 80)


def test_hue_distance_wraps():
    assert hue_distance(10, 350) == 20
    assert hue_distance(350, 10) == 20
    assert hue_distance(0, 180) == 180
    assert hue_distance(90, 90) == 0


def test_css_round_trip():
    c = Color(123.456789, 67.891011)
    assert parse_color(c.to_css()) == c
    assert parse_color("hsl(200, 40%, 50%)") == Color(200.0, 40.0, 50.0)


def test_parse_legacy_hex():
    c = parse_color("#e2e8f0")
    assert c is not None
    assert c.to_rgb() == pytest.approx((0xe2, 0xe8, 0xf0), abs=1)
    assert parse_color("#f00") == parse_color("#ff0000")


@pytest.mark.parametrize("text", ["", "red", "hsl(a, b, c)", "#12", None, 42, "hsl(nan, 1%, 1%)"])
def test_parse_rejects_garbage(text):
    assert parse_color(text) is None


def test_placeholder_is_light_slate():
    assert PLACEHOLDER_COLOR.to_rgb() == pytest.approx((0xe2, 0xe8, 0xf0), abs=2)


def test_hsl_to_rgb_clips_out_of_range_input():
    for rgb in (hsl_to_rgb(0, 150, 50), hsl_to_rgb(200, 50, 120), hsl_to_rgb(90, 50, -10)):
        assert all(0 <= channel <= 255 for channel in rgb)
    assert hsl_to_rgb(0, 150, 50) == (255, 0, 0)


@pytest.mark.parametrize("text", ["hsl(0, 150%, 50%)", "hsl(0, -1%, 50%)", "hsl(0, 50%, 101%)"])
def test_parse_rejects_out_of_range_percentages(text):
    assert parse_color(text) is None


def test_parse_wraps_hue():
    assert parse_color("hsl(-30, 50%, 50%)") == Color(330.0, 50.0, 50.0)
    assert parse_color("hsl(360, 50%, 50%)") == Color(360.0, 50.0, 50.0)
