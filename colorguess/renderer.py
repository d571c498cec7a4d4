"""Main rendering logic for the game."""

import pygame
from typing import Tuple, Optional
import colorguess.constants as constants
from colorguess.constants import (
    COLOR_BACKGROUND, COLOR_BUTTON, COLOR_BUTTON_HOVER, COLOR_BUTTON_TEXT,
    COLOR_PANEL, COLOR_PANEL_BORDER, COLOR_TEXT
)


class Renderer:
    """Handles all rendering for the game."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._last_height = 0
        self._update_fonts()

    def _update_fonts(self):
        """Update font sizes based on current window height."""
        h = constants.WINDOW_HEIGHT
        if h == self._last_height:
            return  # No change needed

        self._last_height = h
        # Scale fonts relative to a reference height of 900px
        scale = h / 900.0
        self.font_large = pygame.font.Font(None, max(24, int(48 * scale)))
        self.font_medium = pygame.font.Font(None, max(20, int(36 * scale)))
        self.font_small = pygame.font.Font(None, max(16, int(28 * scale)))

    def set_screen(self, screen: pygame.Surface):
        """Point at a new display surface after a window resize."""
        self.screen = screen
        self._update_fonts()

    def clear(self):
        """Clear the screen with background color."""
        self.screen.fill(COLOR_BACKGROUND)

    def draw_text(
        self,
        text: str,
        position: Tuple[float, float],
        color: Tuple[int, int, int] = COLOR_TEXT,
        font_size: str = "medium",
        center: bool = False
    ):
        """Draw text on the screen."""
        # Update fonts if window size changed
        self._update_fonts()

        if font_size == "large":
            font = self.font_large
        elif font_size == "small":
            font = self.font_small
        else:
            font = self.font_medium

        text_surface = font.render(text, True, color)

        if center:
            rect = text_surface.get_rect(center=position)
            self.screen.blit(text_surface, rect)
        else:
            self.screen.blit(text_surface, position)

    def draw_button(
        self,
        rect: pygame.Rect,
        text: str,
        hovered: bool = False,
        color: Optional[Tuple[int, int, int]] = None,
        hover_color: Optional[Tuple[int, int, int]] = None
    ):
        """Draw a button."""
        # Update fonts if window size changed
        self._update_fonts()

        if color is None:
            color = COLOR_BUTTON
        if hover_color is None:
            hover_color = COLOR_BUTTON_HOVER

        current_color = hover_color if hovered else color

        # Draw button background
        pygame.draw.rect(self.screen, current_color, rect, border_radius=8)

        # Draw button border
        border_color = tuple(min(255, c + 30) for c in current_color)
        pygame.draw.rect(self.screen, border_color, rect, 2, border_radius=8)

        # Draw text
        text_surface = self.font_medium.render(text, True, COLOR_BUTTON_TEXT)
        text_rect = text_surface.get_rect(center=rect.center)
        self.screen.blit(text_surface, text_rect)

    def draw_progress_bar(
        self,
        position: Tuple[float, float],
        width: float,
        height: float,
        progress: float,
        color: Tuple[int, int, int] = (100, 200, 100)
    ):
        """Draw a progress bar."""
        # Background
        pygame.draw.rect(
            self.screen,
            (50, 50, 60),
            (position[0], position[1], width, height),
            border_radius=4
        )

        # Fill
        fill_width = width * min(1.0, max(0.0, progress))
        if fill_width > 0:
            pygame.draw.rect(
                self.screen,
                color,
                (position[0], position[1], fill_width, height),
                border_radius=4
            )

        # Border
        pygame.draw.rect(
            self.screen,
            (80, 80, 90),
            (position[0], position[1], width, height),
            2,
            border_radius=4
        )

    def draw_panel(self, rect: pygame.Rect):
        """Draw a semi-transparent overlay panel."""
        panel_surface = pygame.Surface(rect.size, pygame.SRCALPHA)
        panel_surface.fill(COLOR_PANEL)
        self.screen.blit(panel_surface, rect.topleft)

        pygame.draw.rect(self.screen, COLOR_PANEL_BORDER, rect, 2, border_radius=8)

    def draw_swatch(
        self,
        rect: pygame.Rect,
        rgb: Tuple[int, int, int],
        border: Tuple[int, int, int] = (60, 60, 70)
    ):
        """Draw a solid color square with a thin border."""
        pygame.draw.rect(self.screen, rgb, rect, border_radius=4)
        pygame.draw.rect(self.screen, border, rect, 1, border_radius=4)

    def draw_marker(
        self,
        center: Tuple[float, float],
        fill: Tuple[int, int, int],
        outline: Tuple[int, int, int],
        radius: int = None
    ):
        """Draw a ring marker at a heatmap position."""
        if radius is None:
            radius = constants.MARKER_RADIUS
        pygame.draw.circle(self.screen, fill, center, radius)
        pygame.draw.circle(self.screen, outline, center, radius, 3)

    def draw_line(
        self,
        start_pos: Tuple[float, float],
        end_pos: Tuple[float, float],
        color: Tuple[int, int, int] = (40, 40, 50)
    ):
        """Draw a line between two markers."""
        pygame.draw.line(self.screen, color, start_pos, end_pos, 2)
