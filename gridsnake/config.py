import os
import json
from dataclasses import dataclass, asdict, replace
from . import utils

# --- ENVIRONMENT ---
IS_RASPBERRY_PI = os.uname().sysname == 'Linux' and 'arm' in os.uname().machine if hasattr(os, 'uname') else False

# Headless = draw into the framebuffer instead of a window
HEADLESS = IS_RASPBERRY_PI or os.environ.get("GRIDSNAKE_HEADLESS") == "1"

BASE_DIR = os.path.join(os.path.expanduser("~"), ".gridsnake")
CONFIG_FILE = os.environ.get("GRIDSNAKE_CONFIG", os.path.join(BASE_DIR, "settings.json"))

DEFAULT_FB_SIZE = (480, 320)


def parse_fb_size(value):
    """Parse WIDTHxHEIGHT, falling back to the default size if malformed."""
    try:
        width, height = (int(v) for v in value.lower().split("x"))
        if width < 1 or height < 1:
            raise ValueError("size must be positive")
    except (AttributeError, ValueError) as e:
        print(f"⚠️ Bad framebuffer size {value!r} ({e}), using 480x320")
        return DEFAULT_FB_SIZE
    return width, height


FB_DEVICE = os.environ.get("GRIDSNAKE_FB", "/dev/fb1")
FB_WIDTH, FB_HEIGHT = parse_fb_size(os.environ.get("GRIDSNAKE_FB_SIZE", "480x320"))
KEYBOARD_DEVICE = os.environ.get("GRIDSNAKE_KEYBOARD")  # None = autodetect
FONT_FILE = os.environ.get("GRIDSNAKE_FONT", "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf")

# --- COLORS ---
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GRAY = (127, 140, 141)
RED = (255, 0, 0)
HIGHLIGHT_COLOR = (241, 196, 15)
TEAL = (165, 215, 185)
GREEN = (46, 204, 113)

# Translucent overlays (RGBA)
PAUSED_OVERLAY = (0, 0, 0, 128)
GAME_OVER_OVERLAY = (255, 255, 255, 204)

# Choices offered by the settings menu color rows
COLOR_CHOICES = [
    "#00AA00", "#00FF00", "#FF0000", "#000000",
    "#FFFFFF", "#0000FF", "#00FFFF", "#FFFF00",
    "#FF00FF", "#FF8800", "#8800FF", "#888888",
]

# --- RUN STATES ---
RUNNING = "RUNNING"
PAUSED = "PAUSED"
GAME_OVER = "GAME_OVER"

# Why a round ended besides a collision
BOARD_FULL = "FULL"

# --- DIFFICULTY ---
SPEEDS = {"EASY": 200, "MEDIUM": 150, "HARD": 100}
DIFFICULTY_ORDER = ["EASY", "MEDIUM", "HARD"]


def difficulty_for_interval(interval_ms):
    if interval_ms == SPEEDS["EASY"]:
        return "EASY"
    if interval_ms == SPEEDS["MEDIUM"]:
        return "MEDIUM"
    return "HARD"


# --- SETTINGS ---
@dataclass(frozen=True)
class Settings:
    grid_size: int = 20
    tile_size: int = 20
    tick_interval_ms: int = SPEEDS["MEDIUM"]
    head_color: tuple = (0, 170, 0)
    tail_color: tuple = (0, 255, 0)
    food_color: tuple = (255, 0, 0)
    background_color: tuple = (0, 0, 0)
    walls_are_solid: bool = True
    zen_mode: bool = False

    @property
    def canvas_size(self):
        side = self.grid_size * self.tile_size
        return side, side

    def copy(self, **changes):
        return replace(self, **changes)

    def to_dict(self):
        """Serializable form, colors as hex strings."""
        data = asdict(self)
        for key in COLOR_FIELDS:
            data[key] = utils.rgb_to_hex(data[key])
        return data

    @classmethod
    def from_dict(cls, data):
        """Build a snapshot from a (partial) dict, missing keys take the defaults."""
        values = asdict(cls())
        for key in values:
            if key not in data:
                continue
            value = data[key]
            if key in COLOR_FIELDS:
                value = utils.hex_to_rgb(value) if isinstance(value, str) else tuple(value)
            values[key] = value
        return cls(**values)


COLOR_FIELDS = ("head_color", "tail_color", "food_color", "background_color")
DEFAULT_SETTINGS = Settings()


def validate_settings(settings):
    """Raise ValueError if the snapshot can't drive a game."""
    for key in ("grid_size", "tile_size", "tick_interval_ms"):
        value = getattr(settings, key)
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")
    for key in COLOR_FIELDS:
        color = getattr(settings, key)
        if (not isinstance(color, tuple) or len(color) != 3
                or not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in color)):
            raise ValueError(f"{key} must be an RGB triple, got {color!r}")
    for key in ("walls_are_solid", "zen_mode"):
        if not isinstance(getattr(settings, key), bool):
            raise ValueError(f"{key} must be a boolean")
    return settings


class SettingsStore:
    """Holds the active settings snapshot. Swapped whole, never edited in place."""

    def __init__(self, settings=None):
        self._settings = validate_settings(settings or DEFAULT_SETTINGS)

    def get(self):
        return self._settings

    def replace(self, settings):
        self._settings = validate_settings(settings)
        return self._settings


def load_config(path=None):
    """Load settings from file"""
    path = path or CONFIG_FILE
    if os.path.exists(path):
        try:
            with open(path, 'r') as f:
                return validate_settings(Settings.from_dict(json.load(f)))
        except (OSError, ValueError, TypeError) as e:
            print(f"⚠️ Could not read settings from {path}: {e}")
    return DEFAULT_SETTINGS


def save_config(settings, path=None):
    """Save settings to file"""
    path = path or CONFIG_FILE
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, 'w') as f:
            json.dump(settings.to_dict(), f, indent=2)
    except OSError as e:
        print(f"Error saving config: {e}")
