"""Per-guess result panel and the game-over screen."""

import pygame
from typing import Optional
import colorguess.constants as constants
from colorguess.constants import (
    COLOR_BUTTON_GO, COLOR_BUTTON_GO_HOVER, COLOR_TEXT_HIGHLIGHT, COLOR_TEXT_LIGHT,
    COLOR_TEXT_MUTED
)
from colorguess.controller import GameSummary
from colorguess.round_engine import GuessResult, Tier, congratulatory_tier
from colorguess.utils import ease_out_quad

SLIDE_IN_MS = 250

TIER_COLORS = {
    Tier.PERFECT: (100, 255, 100),
    Tier.EXCELLENT: (150, 255, 100),
    Tier.GREAT: (255, 255, 100),
    Tier.GOOD: (255, 200, 100),
    Tier.ENCOURAGEMENT: (255, 150, 100),
}


def _panel_rect(slide: float = 1.0) -> pygame.Rect:
    """Right-hand overlay panel; slide < 1 shifts it off screen."""
    w = constants.WINDOW_WIDTH
    h = constants.WINDOW_HEIGHT

    panel_width = int(w * 0.32)
    panel_x = w - panel_width - 20
    panel_y = constants.HUD_HEIGHT + int(h * 0.04)
    panel_height = h - panel_y - int(h * 0.06)

    offset = int((1.0 - slide) * (panel_width + 20))
    return pygame.Rect(panel_x + offset, panel_y, panel_width, panel_height)


class ResultPanel:
    """Shows the outcome of one guess with a Continue button."""

    def __init__(self, renderer):
        self.renderer = renderer
        self.result: Optional[GuessResult] = None
        self.is_last_round = False
        self.shown_at = 0

        # Buttons will be created dynamically
        self.continue_button = None

    def set_result(self, result: GuessResult, is_last_round: bool, now: int):
        """Set the guess outcome to display."""
        self.result = result
        self.is_last_round = is_last_round
        self.shown_at = now

    def _create_buttons(self, panel: pygame.Rect):
        """Create buttons based on the panel position."""
        button_width = int(panel.width * 0.6)
        self.continue_button = pygame.Rect(
            panel.centerx - button_width // 2,
            panel.bottom - 70,
            button_width,
            45
        )

    def handle_event(self, event: pygame.event.Event) -> Optional[str]:
        """Handle input events. Returns 'continue'."""
        self._create_buttons(_panel_rect())

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.continue_button.collidepoint(event.pos):
                return "continue"

        if event.type == pygame.KEYDOWN and event.key in (pygame.K_RETURN, pygame.K_SPACE):
            return "continue"

        return None

    def draw(self, now: int):
        """Draw the result panel."""
        if self.result is None:
            return

        t = min(1.0, (now - self.shown_at) / SLIDE_IN_MS)
        panel = _panel_rect(ease_out_quad(t))
        self.renderer.draw_panel(panel)

        cx = panel.centerx
        tier = congratulatory_tier(self.result.score)
        tier_color = TIER_COLORS[tier]

        self.renderer.draw_text(tier.message, (cx, panel.y + 35), tier_color, font_size="large", center=True)
        self.renderer.draw_text(
            f"+{self.result.score} points",
            (cx, panel.y + 85),
            COLOR_TEXT_HIGHLIGHT,
            font_size="medium",
            center=True
        )
        self.renderer.draw_text(
            f"Accuracy: {round(self.result.accuracy)}%   Distance: {round(self.result.distance)}%",
            (cx, panel.y + 125),
            COLOR_TEXT_LIGHT,
            font_size="small",
            center=True
        )

        # Actual vs guessed
        swatch = constants.SWATCH_SIZE
        rows_y = panel.y + 165
        for i, (label, color) in enumerate((
            ("Actual", self.result.target),
            ("Your guess", self.result.guess),
        )):
            y = rows_y + i * (swatch + 15)
            swatch_rect = pygame.Rect(panel.x + 20, y, swatch, swatch)
            self.renderer.draw_swatch(swatch_rect, color.to_rgb(), border=(200, 200, 210))
            self.renderer.draw_text(label, (swatch_rect.right + 15, y + 6), COLOR_TEXT_MUTED, font_size="small")
            self.renderer.draw_text(color.describe(), (swatch_rect.right + 15, y + 28), COLOR_TEXT_LIGHT, font_size="small")

        self._create_buttons(panel)
        hovered = self.continue_button.collidepoint(pygame.mouse.get_pos())
        self.renderer.draw_button(
            self.continue_button,
            "See Results" if self.is_last_round else "Continue",
            hovered,
            color=COLOR_BUTTON_GO,
            hover_color=COLOR_BUTTON_GO_HOVER
        )


class EndScreen:
    """Game-over screen showing total score and options."""

    def __init__(self, renderer):
        self.renderer = renderer
        self.summary: Optional[GameSummary] = None

        # Buttons will be created dynamically
        self.play_again_button = None
        self.scores_button = None

    def set_results(self, summary: GameSummary):
        """Set the results to display."""
        self.summary = summary

    def _create_buttons(self):
        """Create buttons based on current window size."""
        panel = _panel_rect()

        button_width = int(panel.width * 0.42)
        button_height = 45
        button_y = panel.bottom - 70

        self.play_again_button = pygame.Rect(
            panel.x + 15,
            button_y,
            button_width,
            button_height
        )

        self.scores_button = pygame.Rect(
            panel.right - button_width - 15,
            button_y,
            button_width,
            button_height
        )

    def handle_event(self, event: pygame.event.Event) -> Optional[str]:
        """Handle input events. Returns 'play_again' or 'scores'."""
        # Ensure buttons are created with current dimensions
        self._create_buttons()

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.play_again_button.collidepoint(event.pos):
                return "play_again"

            if self.scores_button.collidepoint(event.pos):
                return "scores"

        return None

    def draw(self):
        """Draw the end screen as an overlay panel on the right side."""
        if self.summary is None:
            return

        panel = _panel_rect()
        self.renderer.draw_panel(panel)
        cx = panel.centerx

        self.renderer.draw_text("Game Over", (cx, panel.y + 35), COLOR_TEXT_HIGHLIGHT, font_size="large", center=True)

        self.renderer.draw_text(
            f"Final Score: {self.summary.total_score}",
            (cx, panel.y + 95),
            COLOR_TEXT_LIGHT,
            font_size="large",
            center=True
        )
        self.renderer.draw_text(
            f"Mean accuracy: {self.summary.mean_accuracy:.1f}%",
            (cx, panel.y + 140),
            COLOR_TEXT_LIGHT,
            font_size="small",
            center=True
        )

        if self.summary.is_new_top:
            self.renderer.draw_text(
                "New High Score!",
                (cx, panel.y + 190),
                TIER_COLORS[Tier.PERFECT],
                font_size="medium",
                center=True
            )

        self._create_buttons()
        mouse_pos = pygame.mouse.get_pos()

        hovered = self.play_again_button.collidepoint(mouse_pos)
        self.renderer.draw_button(
            self.play_again_button, "Play Again", hovered,
            color=COLOR_BUTTON_GO,
            hover_color=COLOR_BUTTON_GO_HOVER
        )

        hovered = self.scores_button.collidepoint(mouse_pos)
        self.renderer.draw_button(self.scores_button, "Scores", hovered)
