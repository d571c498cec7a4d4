"""High score (leaderboard) screen."""

import pygame
from typing import List, Optional
import colorguess.constants as constants
from colorguess.constants import (
    COLOR_BUTTON_DANGER, COLOR_BUTTON_DANGER_HOVER, COLOR_TEXT, COLOR_TEXT_HIGHLIGHT,
    COLOR_TEXT_MUTED
)
from colorguess.leaderboard import LeaderboardEntry, display_colors


class ConfirmLatch:
    """Two-press confirmation that disarms itself after a timeout."""

    def __init__(self, timeout_ms: int = constants.CONFIRM_RESET_MS):
        self.timeout_ms = timeout_ms
        self.armed_at: Optional[int] = None

    @property
    def armed(self) -> bool:
        return self.armed_at is not None

    def update(self, now: int):
        if self.armed_at is not None and now - self.armed_at >= self.timeout_ms:
            self.armed_at = None

    def press(self, now: int) -> bool:
        """First press arms, second press within the timeout confirms."""
        self.update(now)
        if self.armed_at is None:
            self.armed_at = now
            return False
        self.armed_at = None
        return True


class ScoresScreen:
    """Ranked list of past games with their presented and guessed colors."""

    def __init__(self, renderer):
        self.renderer = renderer
        self.entries: List[LeaderboardEntry] = []
        self.highlight: Optional[LeaderboardEntry] = None
        self.clear_latch = ConfirmLatch()

        # Buttons will be created dynamically
        self.back_button = None
        self.clear_button = None

    def set_entries(self, entries: List[LeaderboardEntry], highlight: Optional[LeaderboardEntry] = None):
        """Set the entries to list; highlight marks the game just played."""
        self.entries = entries
        self.highlight = highlight
        self.clear_latch.armed_at = None

    def _create_buttons(self):
        """Create buttons based on current window size."""
        w = constants.WINDOW_WIDTH
        h = constants.WINDOW_HEIGHT
        btn_h = constants.MENU_BUTTON_HEIGHT

        self.back_button = pygame.Rect(20, h - btn_h - 20, 120, btn_h)
        self.clear_button = pygame.Rect(w - 240, h - btn_h - 20, 220, btn_h)

    def handle_event(self, event: pygame.event.Event, now: int) -> Optional[str]:
        """Handle input events. Returns 'back' or 'clear' (once confirmed)."""
        self._create_buttons()

        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return "back"

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.back_button.collidepoint(event.pos):
                return "back"

            if self.clear_button.collidepoint(event.pos) and self.entries:
                if self.clear_latch.press(now):
                    return "clear"

        return None

    def draw(self, now: int):
        """Draw the leaderboard."""
        self._create_buttons()
        self.clear_latch.update(now)

        self.renderer.clear()

        w = constants.WINDOW_WIDTH
        h = constants.WINDOW_HEIGHT

        self.renderer.draw_text(
            "High Scores",
            (w // 2, int(h * 0.07)),
            COLOR_TEXT_HIGHLIGHT,
            font_size="large",
            center=True
        )

        if not self.entries:
            self.renderer.draw_text(
                "No scores yet!",
                (w // 2, h // 2),
                COLOR_TEXT_MUTED,
                font_size="medium",
                center=True
            )
        else:
            self._draw_entries()

        mouse_pos = pygame.mouse.get_pos()
        self.renderer.draw_button(self.back_button, "Back", self.back_button.collidepoint(mouse_pos))

        if self.entries:
            label = "Click to confirm" if self.clear_latch.armed else "Clear Scores"
            self.renderer.draw_button(
                self.clear_button, label, self.clear_button.collidepoint(mouse_pos),
                color=COLOR_BUTTON_DANGER,
                hover_color=COLOR_BUTTON_DANGER_HOVER
            )

    def _draw_entries(self):
        w = constants.WINDOW_WIDTH
        h = constants.WINDOW_HEIGHT

        top = int(h * 0.13)
        bottom = h - constants.MENU_BUTTON_HEIGHT - 40
        row_h = max(30, (bottom - top) // constants.LEADERBOARD_SIZE)
        square = max(10, min(24, row_h // 2 - 2))

        for index, entry in enumerate(self.entries):
            y = top + index * row_h

            if self.highlight is not None and entry == self.highlight:
                pygame.draw.rect(
                    self.renderer.screen, (255, 240, 200),
                    (20, y, w - 40, row_h - 4), border_radius=6
                )

            self.renderer.draw_text(f"#{index + 1}", (40, y + 4), COLOR_TEXT_HIGHLIGHT, font_size="medium")
            self.renderer.draw_text(f"{entry.score} points", (110, y + 2), COLOR_TEXT, font_size="small")
            self.renderer.draw_text(
                f"{entry.timestamp}  ~{entry.mean_distance:.0f}% accuracy",
                (110, y + row_h // 2),
                COLOR_TEXT_MUTED,
                font_size="small"
            )

            # Presented colors on top, guessed colors below
            x0 = w - 40 - 5 * (square + 4)
            for row, colors in enumerate((entry.presented_colors, entry.guessed_colors)):
                for i, color in enumerate(display_colors(colors)):
                    rect = pygame.Rect(x0 + i * (square + 4), y + row * (square + 3), square, square)
                    self.renderer.draw_swatch(rect, color.to_rgb())
