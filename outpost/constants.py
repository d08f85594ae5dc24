"""Game-wide constants for Kerbal Outpost."""

# --- Display ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FPS = 60
TITLE = "Kerbal Outpost"

# --- Colors (RGB) ---
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
DARK_GREY = (30, 30, 40)
LIGHT_GREY = (180, 180, 190)
BACKGROUND = (10, 10, 26)
GROUND_DIM = (42, 42, 42)
DEPOSIT_GREEN = (27, 59, 27)

# HUD / UI accent colors
AMBER = (255, 191, 0)
CYAN = (0, 200, 220)
TERMINAL_GREEN = (0, 255, 0)
RED_ALERT = (200, 40, 40)
HULL_GREEN = (40, 200, 80)

# --- Tile colors (keyed by glyph) ---
TILE_COLORS: dict[str, tuple[int, int, int]] = {
    "C": (0, 255, 0),
    "H": (102, 255, 102),
    "G": (153, 255, 153),
    "L": (102, 204, 255),
    "S": (255, 255, 102),
    "M": (255, 204, 102),
    "A": (255, 102, 204),
    "O": (204, 102, 255),
    "B": (102, 255, 178),
    "F": (255, 230, 60),
    "Q": (153, 51, 255),
    "P": (255, 51, 153),
    "D": (51, 255, 255),
    "T": (255, 153, 51),
    "N": (153, 255, 51),
    "R": (255, 255, 200),
}

# --- UI Panel ---
PANEL_BG = (0, 0, 0, 140)
PANEL_BORDER = (0, 255, 0)
SIDEBAR_WIDTH = 350

# --- Game Metadata ---
GAME_TITLE = "KERBAL OUTPOST"
GAME_SUBTITLE = "Snacks, Science & Solar Panels"
GAME_VERSION = "0.4.0"

# --- World ---
GRID_WIDTH = 200
GRID_HEIGHT = 150
DEPOSIT_CHANCE = 0.02
BASE_TILE_SIZE = 24
MIN_ZOOM = 0.5
MAX_ZOOM = 3.0
ZOOM_STEP = 0.1

# --- Gameplay ---
PLACEMENT_RANGE = 3          # Chebyshev tiles from the avatar
MAX_TICK_SECONDS = 0.25      # Longest simulated step per update
MOVE_REPEAT_SECONDS = 0.12   # Held-key avatar step interval
OXYGEN_RANGE = 16            # Tiles from the command center before oxygen drains
OXYGEN_SECONDS = 16.0
