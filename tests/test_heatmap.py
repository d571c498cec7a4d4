import numpy as np
import pygame
import pytest

from colorguess.color_space import hsl_to_rgb, position_to_color
from colorguess.constants import HEATMAP_RENDER_CAP, HEATMAP_RENDER_CAP_SMALL
from colorguess.heatmap import HeatmapRenderer, cap_for_screen, rasterize, render_size, upscale


def test_render_size_caps_width_and_keeps_aspect():
    assert render_size(1000, 500, 800) == (800, 400)
    assert render_size(600, 300, 800) == (600, 300)
    assert render_size(2000, 3000, 400) == (400, 600)


def test_cap_for_screen():
    assert cap_for_screen(800) == HEATMAP_RENDER_CAP_SMALL
    assert cap_for_screen(1920) == HEATMAP_RENDER_CAP


def test_rasterize_matches_position_mapping():
    buffer = rasterize(360, 100)
    assert buffer.shape == (100, 360, 4)
    assert buffer.dtype == np.uint8
    assert np.all(buffer[:, :, 3] == 255)

    for x, y in [(0, 0), (120, 50), (359, 99), (200, 13)]:
        color = position_to_color(x, y, 360, 100)
        assert tuple(buffer[y, x, :3]) == hsl_to_rgb(color.hue, color.saturation, 50)


def test_top_row_is_gray():
    buffer = rasterize(64, 32)
    top = buffer[0, :, :3]
    assert np.all(top == top[0, 0])


def test_upscale_exact_shape():
    buffer = rasterize(800, 333)
    for width, height in [(1000, 417), (1237, 515), (800, 333)]:
        assert upscale(buffer, width, height).shape == (height, width, 4)


def test_render_is_close_to_native():
    renderer = HeatmapRenderer(cap=800)
    scaled = renderer.render(1000, 600).astype(np.int16)
    native = rasterize(1000, 600).astype(np.int16)
    assert scaled.shape == native.shape
    diff = np.abs(scaled - native)
    assert diff.mean() < 2
    assert diff.max() <= 8


def test_render_is_repeatable():
    renderer = HeatmapRenderer(cap=200)
    assert np.array_equal(renderer.render(300, 150), renderer.render(300, 150))


def test_zero_size_is_skipped_then_retried():
    renderer = HeatmapRenderer()
    assert renderer.render(0, 400) is None
    assert renderer.pending
    assert renderer.render(400, 0) is None
    assert renderer.render(40, 20) is not None
    assert not renderer.pending


def test_draw_blits_heatmap():
    surface = pygame.Surface((300, 200))
    rect = pygame.Rect(10, 10, 200, 100)
    renderer = HeatmapRenderer(cap=800)

    assert renderer.draw(surface, rect)
    assert not renderer.using_fallback

    got = tuple(surface.get_at((rect.x + 100, rect.y + 50)))[:3]
    expected = hsl_to_rgb(180, 50, 50)
    assert got == pytest.approx(expected, abs=3)


def test_draw_zero_rect_is_noop():
    surface = pygame.Surface((50, 50))
    assert not HeatmapRenderer().draw(surface, pygame.Rect(0, 0, 0, 30))


def test_draw_falls_back_to_grid(monkeypatch):
    def boom(*args, **kwargs):
        raise pygame.error("raster failed")

    monkeypatch.setattr(pygame.surfarray, "make_surface", boom)

    surface = pygame.Surface((200, 120))
    rect = pygame.Rect(0, 0, 160, 80)
    renderer = HeatmapRenderer()

    assert renderer.draw(surface, rect)
    assert renderer.using_fallback

    # First cell is filled with the color at its center
    color = position_to_color(4, 4, rect.width, rect.height)
    assert tuple(surface.get_at((1, 1)))[:3] == hsl_to_rgb(color.hue, color.saturation, 50)
