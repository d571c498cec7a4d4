"""Main menu UI."""

import pygame
from typing import Optional
import colorguess.constants as constants
from colorguess.constants import COLOR_TEXT, COLOR_TEXT_HIGHLIGHT


class MainMenu:
    """Main menu screen."""

    def __init__(self, renderer):
        self.renderer = renderer
        self.buttons = []

    def _create_buttons(self):
        """Create menu buttons based on current window size."""
        self.buttons = []

        w = constants.WINDOW_WIDTH
        h = constants.WINDOW_HEIGHT
        btn_w = constants.MENU_BUTTON_WIDTH
        btn_h = constants.MENU_BUTTON_HEIGHT
        btn_spacing = constants.MENU_BUTTON_SPACING

        # Title position
        self.title_pos = (w // 2, int(h * 0.12))
        self.subtitle_pos = (w // 2, int(h * 0.18))

        start_y = int(h * 0.30)
        for i, (action, label) in enumerate((
            ("play", "Play Game"),
            ("scores", "High Scores"),
            ("quit", "Quit"),
        )):
            rect = pygame.Rect(
                w // 2 - btn_w // 2,
                start_y + i * (btn_h + btn_spacing),
                btn_w,
                btn_h
            )
            self.buttons.append((action, rect, label))

    def handle_event(self, event: pygame.event.Event) -> Optional[str]:
        """Handle input events. Returns action string if button clicked."""
        if not self.buttons:
            self._create_buttons()

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for action, rect, _ in self.buttons:
                if rect.collidepoint(event.pos):
                    return action
        return None

    def draw(self):
        """Draw the main menu."""
        # Recreate buttons each frame to handle dynamic sizing
        self._create_buttons()

        self.renderer.clear()

        # Title
        self.renderer.draw_text(
            "Color Guesser",
            self.title_pos,
            COLOR_TEXT_HIGHLIGHT,
            font_size="large",
            center=True
        )

        # Subtitle
        self.renderer.draw_text(
            f"Find the shown color on the hue/saturation map - {constants.MAX_ROUNDS} rounds",
            self.subtitle_pos,
            COLOR_TEXT,
            font_size="small",
            center=True
        )

        # Buttons
        mouse_pos = pygame.mouse.get_pos()
        for action, rect, text in self.buttons:
            hovered = rect.collidepoint(mouse_pos)
            self.renderer.draw_button(rect, text, hovered)
