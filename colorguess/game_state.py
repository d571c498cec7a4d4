"""Main game loop: screens, input handling and drawing around the controller."""

import logging
import pygame
from enum import Enum, auto
from typing import Optional, Tuple

import colorguess.constants as constants
from colorguess.constants import (
    COLOR_BUTTON_GO, COLOR_BUTTON_GO_HOVER, COLOR_MARKER_GUESS, COLOR_MARKER_TARGET,
    COLOR_TEXT_MUTED, FPS, WINDOW_SCALE
)
from colorguess.color_space import clamp_to_surface, color_to_position, position_to_color
from colorguess.controller import EventKind, GameController, GuessPayload, Phase
from colorguess.heatmap import HeatmapRenderer, cap_for_screen
from colorguess.leaderboard import LeaderboardStore
from colorguess.renderer import Renderer
from colorguess.storage import JsonFileStorage
from colorguess.ui.end_screen import EndScreen, ResultPanel
from colorguess.ui.hud import HUD
from colorguess.ui.menu import MainMenu
from colorguess.ui.scores import ScoresScreen

log = logging.getLogger(__name__)


class Screen(Enum):
    """Top-level screen enumeration."""
    MENU = auto()
    PLAYING = auto()
    SCORES = auto()


def _apply_window_size(width: int, height: int):
    """Update constants module so UI components use correct sizes."""
    constants.WINDOW_WIDTH = width
    constants.WINDOW_HEIGHT = height
    constants.HUD_HEIGHT = max(60, int(height * 0.09))
    constants.HUD_PADDING = int(height * 0.02)
    constants.MENU_BUTTON_WIDTH = int(width * 0.25)
    constants.MENU_BUTTON_HEIGHT = int(height * 0.065)
    constants.MENU_BUTTON_SPACING = int(height * 0.02)


class Game:
    """Main game class managing screens and the game loop."""

    def __init__(self, controller: Optional[GameController] = None):
        pygame.init()
        pygame.display.set_caption("Color Guesser")

        # Calculate window size based on screen resolution
        display_info = pygame.display.Info()
        screen_w, screen_h = display_info.current_w, display_info.current_h

        window_width = max(constants.MIN_WINDOW_WIDTH, int(screen_w * WINDOW_SCALE))
        window_height = max(constants.MIN_WINDOW_HEIGHT, int(screen_h * WINDOW_SCALE))
        _apply_window_size(window_width, window_height)

        self.screen = pygame.display.set_mode((window_width, window_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.running = True

        self.renderer = Renderer(self.screen)
        self.heatmap = HeatmapRenderer(cap_for_screen(screen_w))

        if controller is None:
            store = LeaderboardStore(JsonFileStorage(constants.LEADERBOARD_PATH))
            controller = GameController(store)
        self.controller = controller

        # Initialize UI components
        self.main_menu = MainMenu(self.renderer)
        self.hud = HUD(self.renderer)
        self.result_panel = ResultPanel(self.renderer)
        self.end_screen = EndScreen(self.renderer)
        self.scores_screen = ScoresScreen(self.renderer)

        self.state = Screen.MENU

        # Pointer state
        self.hover_color = None
        self.hover_pos: Optional[Tuple[int, int]] = None
        self.pending_touch: Optional[Tuple[float, float]] = None  # heatmap-local
        self.touch_dragging = False
        self.confirm_button = None

    # Layout

    def heatmap_rect(self) -> pygame.Rect:
        """Heatmap area below the HUD."""
        margin = constants.HEATMAP_MARGIN
        top = constants.HUD_HEIGHT + margin
        return pygame.Rect(
            margin, top,
            max(0, constants.WINDOW_WIDTH - 2 * margin),
            max(0, constants.WINDOW_HEIGHT - top - margin)
        )

    def _create_confirm_button(self):
        rect = self.heatmap_rect()
        self.confirm_button = pygame.Rect(rect.centerx - 90, rect.bottom - 70, 180, 50)

    def _resize(self, width: int, height: int):
        width = max(constants.MIN_WINDOW_WIDTH, width)
        height = max(constants.MIN_WINDOW_HEIGHT, height)
        _apply_window_size(width, height)
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.renderer.set_screen(self.screen)
        self.heatmap.invalidate()
        log.debug("Window resized to %dx%d", width, height)

    # Game actions

    def start_game(self):
        """Begin a fresh game of rounds."""
        self.controller.dispatch(EventKind.RESTART)
        self.controller.dispatch(EventKind.START)
        self.hud.reset()
        self._clear_pointer()
        self.state = Screen.PLAYING

    def _clear_pointer(self):
        self.hover_color = None
        self.hover_pos = None
        self.pending_touch = None
        self.touch_dragging = False

    def _guess(self, local_x: float, local_y: float):
        rect = self.heatmap_rect()
        transition = self.controller.dispatch(
            EventKind.GUESS,
            GuessPayload(local_x, local_y, rect.width, rect.height)
        )
        if transition.changed:
            self._clear_pointer()
            self.result_panel.set_result(
                transition.result,
                self.controller.session.is_last_round,
                pygame.time.get_ticks()
            )

    def _advance(self):
        transition = self.controller.dispatch(EventKind.ADVANCE)
        if transition.current == Phase.GAME_OVER:
            self.end_screen.set_results(transition.result)

    def show_scores(self):
        store = self.controller.leaderboard
        self.scores_screen.set_entries(store.load(), store.last_recorded)
        self.state = Screen.SCORES

    # Events

    def _finger_to_local(self, event) -> Tuple[float, float]:
        rect = self.heatmap_rect()
        x = event.x * constants.WINDOW_WIDTH - rect.x
        y = event.y * constants.WINDOW_HEIGHT - rect.y
        return clamp_to_surface(x, y, rect.width, rect.height)

    def _handle_playing_event(self, event):
        phase = self.controller.phase
        rect = self.heatmap_rect()

        if phase == Phase.ROUND_RESOLVED:
            if self.result_panel.handle_event(event) == "continue":
                self._advance()
            return

        if phase == Phase.GAME_OVER:
            action = self.end_screen.handle_event(event)
            if action == "play_again":
                self.start_game()
            elif action == "scores":
                self.show_scores()
            return

        # Round active: mouse guesses directly, touch drags then confirms
        if event.type == pygame.MOUSEMOTION and not getattr(event, "touch", False):
            if rect.collidepoint(event.pos):
                local = (event.pos[0] - rect.x, event.pos[1] - rect.y)
                self.hover_color = position_to_color(local[0], local[1], rect.width, rect.height)
                self.hover_pos = event.pos
            else:
                self.hover_color = None
                self.hover_pos = None

        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, "touch", False):
            if self.pending_touch is not None and self.confirm_button.collidepoint(event.pos):
                self._guess(*self.pending_touch)
            else:
                # Out-of-bounds clicks are dropped by the controller
                self._guess(event.pos[0] - rect.x, event.pos[1] - rect.y)

        elif event.type == pygame.FINGERDOWN:
            self._create_confirm_button()
            px, py = event.x * constants.WINDOW_WIDTH, event.y * constants.WINDOW_HEIGHT
            if self.pending_touch is not None and self.confirm_button.collidepoint(px, py):
                self._guess(*self.pending_touch)
            else:
                self.touch_dragging = True
                self.pending_touch = self._finger_to_local(event)

        elif event.type == pygame.FINGERMOTION and self.touch_dragging:
            self.pending_touch = self._finger_to_local(event)

        elif event.type == pygame.FINGERUP:
            self.touch_dragging = False

    def handle_events(self):
        """Handle pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return

            if event.type == pygame.VIDEORESIZE:
                self._resize(event.w, event.h)
                continue

            if self.state == Screen.MENU:
                action = self.main_menu.handle_event(event)
                if action == "play":
                    self.start_game()
                elif action == "scores":
                    self.show_scores()
                elif action == "quit":
                    self.running = False

            elif self.state == Screen.PLAYING:
                if self.hud.handle_event(event):
                    # Abandon the current game
                    self.controller.dispatch(EventKind.RESTART)
                    self._clear_pointer()
                    self.state = Screen.MENU
                else:
                    self._create_confirm_button()
                    self._handle_playing_event(event)

            elif self.state == Screen.SCORES:
                action = self.scores_screen.handle_event(event, pygame.time.get_ticks())
                if action == "back":
                    if self.controller.phase == Phase.GAME_OVER:
                        self.state = Screen.PLAYING
                    else:
                        self.state = Screen.MENU
                elif action == "clear":
                    self.controller.dispatch(EventKind.CLEAR_LEADERBOARD)
                    self.scores_screen.set_entries(self.controller.leaderboard.load())

    # Drawing

    def update(self):
        """Sync HUD with the controller."""
        if self.state != Screen.PLAYING:
            return
        ctrl = self.controller
        rnd = ctrl.current_round
        completed = sum(1 for r in ctrl.session.rounds if r.is_resolved)
        self.hud.update(
            ctrl.total_score,
            ctrl.round_number,
            ctrl.max_rounds,
            completed,
            rnd.target_color if rnd is not None else None
        )

    def draw(self):
        """Draw the current screen."""
        now = pygame.time.get_ticks()

        if self.state == Screen.MENU:
            self.main_menu.draw()

        elif self.state == Screen.SCORES:
            self.scores_screen.draw(now)

        elif self.state == Screen.PLAYING:
            self._draw_game(now)

        pygame.display.flip()

    def _draw_game(self, now: int):
        """Draw the main game view."""
        self.renderer.clear()

        rect = self.heatmap_rect()
        if not self.heatmap.draw(self.screen, rect):
            self.renderer.draw_text(
                "Preparing color map...",
                rect.center,
                COLOR_TEXT_MUTED,
                font_size="small",
                center=True
            )

        self.hud.draw()

        phase = self.controller.phase
        if phase == Phase.ROUND_ACTIVE:
            self._draw_pointer(rect)
        elif phase == Phase.ROUND_RESOLVED:
            self._draw_result_markers(rect)
            self.result_panel.draw(now)
        elif phase == Phase.GAME_OVER:
            self.end_screen.draw()

    def _draw_pointer(self, rect: pygame.Rect):
        size = constants.PREVIEW_SWATCH_SIZE

        if self.hover_color is not None and self.hover_pos is not None:
            preview = pygame.Rect(self.hover_pos[0] + 12, self.hover_pos[1] - size - 12, size, size)
            self.renderer.draw_swatch(preview, self.hover_color.to_rgb(), border=(255, 255, 255))

        if self.pending_touch is not None:
            local_x, local_y = self.pending_touch
            color = position_to_color(local_x, local_y, rect.width, rect.height)
            self.renderer.draw_marker(
                (rect.x + local_x, rect.y + local_y),
                color.to_rgb(),
                COLOR_MARKER_TARGET,
                radius=constants.MARKER_RADIUS * 2
            )
            if not self.touch_dragging:
                self._create_confirm_button()
                hovered = self.confirm_button.collidepoint(pygame.mouse.get_pos())
                self.renderer.draw_button(
                    self.confirm_button, "Confirm", hovered,
                    color=COLOR_BUTTON_GO,
                    hover_color=COLOR_BUTTON_GO_HOVER
                )

    def _draw_result_markers(self, rect: pygame.Rect):
        result = self.controller.last_result
        if result is None:
            return

        tx, ty = color_to_position(result.target, rect.width, rect.height)
        gx, gy = color_to_position(result.guess, rect.width, rect.height)
        target_pos = (rect.x + tx, rect.y + ty)
        guess_pos = (rect.x + gx, rect.y + gy)

        self.renderer.draw_line(target_pos, guess_pos)
        self.renderer.draw_marker(target_pos, result.target.to_rgb(), COLOR_MARKER_TARGET)
        self.renderer.draw_marker(guess_pos, result.guess.to_rgb(), COLOR_MARKER_GUESS)

    def run(self):
        """Main game loop."""
        while self.running:
            self.handle_events()
            self.update()
            self.draw()
            self.clock.tick(FPS)

        pygame.quit()
