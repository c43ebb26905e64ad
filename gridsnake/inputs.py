import time
import pygame
from . import config
from . import utils
from .games import snake as snake_game
# evdev only exists on Linux; headless keyboard input is off without it
try:
    from evdev import InputDevice, ecodes
    HAS_EVDEV = True
except ImportError:
    HAS_EVDEV = False

MOVE_KEYS = {
    pygame.K_UP: snake_game.UP,
    pygame.K_w: snake_game.UP,
    pygame.K_DOWN: snake_game.DOWN,
    pygame.K_s: snake_game.DOWN,
    pygame.K_LEFT: snake_game.LEFT,
    pygame.K_a: snake_game.LEFT,
    pygame.K_RIGHT: snake_game.RIGHT,
    pygame.K_d: snake_game.RIGHT,
}
PAUSE_KEYS = (pygame.K_p, pygame.K_ESCAPE)
RESTART_KEYS = (pygame.K_SPACE,)
MENU_KEYS = (pygame.K_m, pygame.K_TAB)


def handle_key(game, key):
    """
    Apply one key press to the game.
    Returns "MENU" when the settings menu was requested, None otherwise.
    """
    if key in RESTART_KEYS:
        game.request_restart()
        return None

    if key in PAUSE_KEYS:
        game.toggle_pause()
        return None

    if key in MENU_KEYS:
        return "MENU"

    if key in MOVE_KEYS:
        # Ignored unless running, reversals dropped by the snake
        game.request_turn(MOVE_KEYS[key])
    return None


def evdev_keymap():
    """Linux key codes -> pygame keys for everything the game listens to."""
    if not HAS_EVDEV:
        return {}
    return {
        ecodes.KEY_UP: pygame.K_UP, ecodes.KEY_DOWN: pygame.K_DOWN,
        ecodes.KEY_LEFT: pygame.K_LEFT, ecodes.KEY_RIGHT: pygame.K_RIGHT,
        ecodes.KEY_W: pygame.K_w, ecodes.KEY_A: pygame.K_a,
        ecodes.KEY_S: pygame.K_s, ecodes.KEY_D: pygame.K_d,
        ecodes.KEY_P: pygame.K_p, ecodes.KEY_ESC: pygame.K_ESCAPE,
        ecodes.KEY_SPACE: pygame.K_SPACE, ecodes.KEY_ENTER: pygame.K_RETURN,
        ecodes.KEY_M: pygame.K_m, ecodes.KEY_TAB: pygame.K_TAB,
    }


def key_for_event(event, keymap):
    """
    pygame key to post for an evdev event, or None.
    Presses always count; autorepeats only for movement keys, so a held
    P or M toggles once like it does in the window.
    """
    if event.type != ecodes.EV_KEY or event.code not in keymap:
        return None
    key = keymap[event.code]
    if event.value == 1 or (event.value == 2 and key in MOVE_KEYS):
        return key
    return None


def keyboard_thread(running_event):
    """
    Background thread to read keyboard events and post them to the Pygame event queue.
    Only needed headless: with a window, Pygame already receives the keys.
    running_event: threading.Event to signal when to stop.
    """
    if not config.HEADLESS or not HAS_EVDEV:
        print("⌨️ Keyboard handled by Pygame")
        while running_event.is_set():
            time.sleep(1)
        return

    keyboard_path = config.KEYBOARD_DEVICE or utils.find_keyboard_device()
    if not keyboard_path:
        print("❌ No keyboard device found, input disabled")
        return

    keymap = evdev_keymap()
    try:
        dev = InputDevice(keyboard_path)
        print(f"⌨️ Keyboard thread started on {keyboard_path}")

        for event in dev.read_loop():
            if not running_event.is_set():
                break
            key = key_for_event(event, keymap)
            if key is not None:
                pygame.event.post(pygame.event.Event(pygame.KEYDOWN, {'key': key}))

    except OSError as e:
        print(f"Keyboard Error: {e}")
