"""In-game HUD (Heads-Up Display)."""

import pygame
from typing import Optional
import colorguess.constants as constants
from colorguess.color_space import Color
from colorguess.constants import COLOR_HUD, COLOR_HUD_LINE, COLOR_TEXT_HIGHLIGHT, COLOR_TEXT_LIGHT


class HUD:
    """In-game HUD showing round, score, the target color and a menu button."""

    def __init__(self, renderer):
        self.renderer = renderer

        # HUD area and buttons will be created dynamically
        self.rect = None
        self.menu_button = None
        self.target_rect = None

        # State
        self.score = 0
        self.round_number = 1
        self.max_rounds = constants.MAX_ROUNDS
        self.rounds_completed = 0
        self.target: Optional[Color] = None

    def _create_layout(self):
        """Create HUD layout based on current window size."""
        w = constants.WINDOW_WIDTH
        hud_h = constants.HUD_HEIGHT
        swatch = constants.SWATCH_SIZE

        self.rect = pygame.Rect(0, 0, w, hud_h)

        self.menu_button = pygame.Rect(
            w - 100, (hud_h - 40) // 2,
            80, 40
        )

        self.target_rect = pygame.Rect(
            w // 2 - swatch // 2, (hud_h - swatch) // 2,
            swatch, swatch
        )

    def reset(self):
        """Fully reset HUD state for a new game."""
        self.score = 0
        self.round_number = 1
        self.rounds_completed = 0
        self.target = None

    def update(self, score: int, round_number: int, max_rounds: int,
               rounds_completed: int, target: Optional[Color]):
        """Sync displayed values with the controller."""
        self.score = score
        self.round_number = round_number
        self.max_rounds = max_rounds
        self.rounds_completed = rounds_completed
        self.target = target

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Handle input events. Returns True if menu clicked."""
        # Ensure layout is created with current dimensions
        self._create_layout()

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.menu_button.collidepoint(event.pos):
                return True
        return False

    def draw(self):
        """Draw the HUD."""
        # Recreate layout each frame to handle dynamic sizing
        self._create_layout()

        w = constants.WINDOW_WIDTH
        hud_h = constants.HUD_HEIGHT
        hud_pad = constants.HUD_PADDING

        # Background
        pygame.draw.rect(self.renderer.screen, COLOR_HUD, self.rect)
        pygame.draw.line(self.renderer.screen, COLOR_HUD_LINE, (0, hud_h), (w, hud_h), 2)

        # Round and progress
        self.renderer.draw_text(
            f"Round: {self.round_number}/{self.max_rounds}",
            (hud_pad, hud_pad),
            COLOR_TEXT_LIGHT,
            font_size="small"
        )
        self.renderer.draw_progress_bar(
            (hud_pad, hud_pad + 28),
            int(w * 0.15), 12,
            self.rounds_completed / max(1, self.max_rounds)
        )

        # Score
        self.renderer.draw_text(
            f"Score: {self.score}",
            (hud_pad + int(w * 0.15) + 30, hud_pad),
            COLOR_TEXT_HIGHLIGHT,
            font_size="medium"
        )

        # Target color
        if self.target is not None:
            self.renderer.draw_text(
                "Find:",
                (self.target_rect.left - 40, hud_h // 2),
                COLOR_TEXT_LIGHT,
                font_size="small",
                center=True
            )
            self.renderer.draw_swatch(self.target_rect, self.target.to_rgb(), border=(200, 200, 210))

        # Menu button
        mouse_pos = pygame.mouse.get_pos()
        hovered = self.menu_button.collidepoint(mouse_pos)
        self.renderer.draw_button(self.menu_button, "Menu", hovered)
