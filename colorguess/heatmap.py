"""Hue x saturation heatmap rasterization and drawing."""

import logging
from typing import Optional, Tuple

import numpy as np
import pygame
from scipy.ndimage import zoom

from colorguess.color_space import hsl_to_rgb, hsl_to_rgb_array, position_to_color
from colorguess.constants import (
    HEATMAP_FALLBACK_CELL, HEATMAP_RENDER_CAP, HEATMAP_RENDER_CAP_SMALL,
    HUE_RANGE, LIGHTNESS, SATURATION_RANGE, SMALL_SCREEN_WIDTH
)

log = logging.getLogger(__name__)


def cap_for_screen(screen_width: int) -> int:
    """Lower the render ceiling on small (slow) displays."""
    if screen_width <= SMALL_SCREEN_WIDTH:
        return HEATMAP_RENDER_CAP_SMALL
    return HEATMAP_RENDER_CAP


def render_size(display_width: int, display_height: int, cap: int) -> Tuple[int, int]:
    """Render grid size: width capped, height keeping the display aspect ratio."""
    render_width = min(display_width, cap)
    render_height = min(display_height, cap * display_height / display_width)
    return max(1, int(render_width)), max(1, int(render_height))


def rasterize(width: int, height: int) -> np.ndarray:
    """
    RGBA pixel buffer (height x width x 4) of the full hue/saturation field.

    Pixel (x, y) holds position_to_color(x, y, width, height) at full alpha.
    """
    hue = HUE_RANGE * np.arange(width, dtype=np.float64) / width
    saturation = SATURATION_RANGE * np.arange(height, dtype=np.float64) / height
    rgb = hsl_to_rgb_array(hue[None, :], saturation[:, None], LIGHTNESS)

    buffer = np.empty((height, width, 4), dtype=np.uint8)
    buffer[:, :, :3] = rgb
    buffer[:, :, 3] = 255
    return buffer


def upscale(buffer: np.ndarray, width: int, height: int) -> np.ndarray:
    """Bilinear resize of an RGBA buffer to (height x width)."""
    src_height, src_width = buffer.shape[:2]
    if (src_width, src_height) == (width, height):
        return buffer

    scaled = zoom(buffer, (height / src_height, width / src_width, 1), order=1)

    # zoom rounds the output shape; pin it to the exact target
    if scaled.shape[:2] != (height, width):
        scaled = scaled[:height, :width]
        pad_y = height - scaled.shape[0]
        pad_x = width - scaled.shape[1]
        if pad_y or pad_x:
            scaled = np.pad(scaled, ((0, pad_y), (0, pad_x), (0, 0)), mode="edge")
    return scaled


class HeatmapRenderer:
    """Renders the heatmap for a display size and blits it onto a surface."""

    def __init__(self, cap: int = HEATMAP_RENDER_CAP):
        self.cap = cap
        self.pending = False  # A zero-size request is waiting for layout
        self._surface: Optional[pygame.Surface] = None
        self._surface_size: Optional[Tuple[int, int]] = None
        self.using_fallback = False

    def render(self, display_width: int, display_height: int) -> Optional[np.ndarray]:
        """
        Display-sized RGBA buffer, or None while the display has no area.

        A zero-size request is skipped and flagged so the next call with a
        real size renders.
        """
        if display_width <= 0 or display_height <= 0:
            log.warning(
                "Skipping heatmap render for %dx%d surface",
                display_width, display_height
            )
            self.pending = True
            return None

        self.pending = False
        render_width, render_height = render_size(display_width, display_height, self.cap)
        buffer = rasterize(render_width, render_height)
        return upscale(buffer, display_width, display_height)

    def invalidate(self):
        """Drop the cached surface, e.g. after a window resize."""
        self._surface = None
        self._surface_size = None

    def _build_surface(self, width: int, height: int) -> Optional[pygame.Surface]:
        buffer = self.render(width, height)
        if buffer is None:
            return None
        # surfarray is indexed (x, y)
        return pygame.surfarray.make_surface(np.ascontiguousarray(buffer[:, :, :3].swapaxes(0, 1)))

    def draw(self, surface: pygame.Surface, rect: pygame.Rect) -> bool:
        """Draw the heatmap into rect. Returns False if nothing could be drawn yet."""
        size = (rect.width, rect.height)
        try:
            if self._surface is None or self._surface_size != size:
                self._surface = self._build_surface(*size)
                self._surface_size = size if self._surface is not None else None
            if self._surface is None:
                return False
            surface.blit(self._surface, rect.topleft)
            self.using_fallback = False
            return True
        except (pygame.error, ValueError, MemoryError) as e:
            log.warning("Heatmap raster failed (%s); drawing coarse grid", e)
            self.invalidate()
            self.using_fallback = True
            return self.draw_fallback(surface, rect)

    def draw_fallback(self, surface: pygame.Surface, rect: pygame.Rect) -> bool:
        """Degraded path: fill a coarse grid of solid cells directly."""
        if rect.width <= 0 or rect.height <= 0:
            self.pending = True
            return False

        cell = HEATMAP_FALLBACK_CELL
        for y in range(0, rect.height, cell):
            cell_h = min(cell, rect.height - y)
            for x in range(0, rect.width, cell):
                cell_w = min(cell, rect.width - x)
                color = position_to_color(x + cell_w / 2, y + cell_h / 2, rect.width, rect.height)
                surface.fill(
                    hsl_to_rgb(color.hue, color.saturation, color.lightness),
                    pygame.Rect(rect.x + x, rect.y + y, cell_w, cell_h)
                )
        return True
