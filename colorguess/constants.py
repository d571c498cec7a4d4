"""Game constants and configuration."""

import os

# Window settings
# These are default/fallback values - actual size is calculated from screen
WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 900
WINDOW_SCALE = 0.80  # Use 80% of screen size
MIN_WINDOW_WIDTH = 480
MIN_WINDOW_HEIGHT = 360
FPS = 60

# Colors - Light theme
COLOR_BACKGROUND = (245, 245, 248)  # Almost white with hint of grey
COLOR_HUD = (30, 30, 40)
COLOR_HUD_LINE = (60, 60, 70)
COLOR_TEXT = (40, 40, 50)  # Dark text
COLOR_TEXT_LIGHT = (235, 235, 240)
COLOR_TEXT_MUTED = (120, 120, 130)
COLOR_TEXT_HIGHLIGHT = (180, 120, 0)  # Dark gold/amber for highlights
COLOR_BUTTON = (100, 130, 180)  # Blue-grey buttons
COLOR_BUTTON_HOVER = (120, 150, 200)
COLOR_BUTTON_TEXT = (255, 255, 255)  # White button text
COLOR_BUTTON_GO = (60, 120, 80)
COLOR_BUTTON_GO_HOVER = (80, 150, 100)
COLOR_BUTTON_DANGER = (120, 60, 60)
COLOR_BUTTON_DANGER_HOVER = (150, 80, 80)
COLOR_PANEL = (30, 30, 45, 230)
COLOR_PANEL_BORDER = (80, 80, 100)
COLOR_MARKER_TARGET = (255, 255, 255)
COLOR_MARKER_GUESS = (20, 20, 25)

# Game mechanics
MAX_ROUNDS = 5
LIGHTNESS = 50  # Fixed lightness for every color in the game
HUE_RANGE = 360
SATURATION_RANGE = 100
TARGET_SATURATION_MIN = 20
TARGET_SATURATION_MAX = 90
MAX_SCORE = 1000

# Congratulatory tiers (minimum points for each tier)
TIER_PERFECT = 800
TIER_EXCELLENT = 600
TIER_GREAT = 400
TIER_GOOD = 200

# Leaderboard persistence
LEADERBOARD_SIZE = 10
LEADERBOARD_KEY = "colorGuesserScores"
LEADERBOARD_PATH = os.path.join(os.path.expanduser("~"), ".colorguess", "storage.json")
LEADERBOARD_DISPLAY_COLORS = 5
# Neutral light slate (#e2e8f0) used for missing leaderboard swatches
PLACEHOLDER_HSL = (214, 32, 91)

# Heatmap rendering
HEATMAP_RENDER_CAP = 800  # Maximum render width before upscaling
HEATMAP_RENDER_CAP_SMALL = 400  # Used on small screens
SMALL_SCREEN_WIDTH = 1024
HEATMAP_FALLBACK_CELL = 8  # px per cell in the degraded fill-rect path

# UI timing
CONFIRM_RESET_MS = 3000  # Clear-scores confirmation reverts after this

# UI Layout
HUD_HEIGHT = 80
HUD_PADDING = 18
MENU_BUTTON_WIDTH = 300
MENU_BUTTON_HEIGHT = 60
MENU_BUTTON_SPACING = 20
HEATMAP_MARGIN = 20
SWATCH_SIZE = 56
PREVIEW_SWATCH_SIZE = 28
MARKER_RADIUS = 9
