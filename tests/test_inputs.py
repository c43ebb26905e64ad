import threading
from types import SimpleNamespace

import pygame
import pytest

from gridsnake import config
from gridsnake import inputs
from gridsnake.games.snake import UP, DOWN, LEFT


def test_wasd_and_arrows_turn(make_game):
    game = make_game()
    inputs.handle_key(game, pygame.K_w)
    assert game.snake.pending_heading == UP
    inputs.handle_key(game, pygame.K_DOWN)
    assert game.snake.pending_heading == DOWN


def test_reversal_key_is_ignored(make_game):
    game = make_game()
    inputs.handle_key(game, pygame.K_LEFT)
    inputs.handle_key(game, pygame.K_a)
    assert game.snake.pending_heading != LEFT


def test_pause_keys_toggle(make_game):
    game = make_game()
    inputs.handle_key(game, pygame.K_p)
    assert game.run_state == config.PAUSED
    inputs.handle_key(game, pygame.K_ESCAPE)
    assert game.run_state == config.RUNNING


def test_movement_ignored_while_paused(make_game):
    game = make_game()
    inputs.handle_key(game, pygame.K_p)
    inputs.handle_key(game, pygame.K_UP)
    assert game.snake.pending_heading != UP


def test_space_only_restarts_after_game_over(make_game):
    game = make_game()
    game.food = (0, 0)
    game.on_tick()
    inputs.handle_key(game, pygame.K_SPACE)
    assert game.snake.head == (11, 10)

    game.snake.body = [(19, 3)]
    game.on_tick()
    assert game.run_state == config.GAME_OVER
    inputs.handle_key(game, pygame.K_p)
    assert game.run_state == config.GAME_OVER
    inputs.handle_key(game, pygame.K_SPACE)
    assert game.run_state == config.RUNNING
    assert game.snake.body == [(10, 10)]


def test_menu_keys_and_unknown_keys(make_game):
    game = make_game()
    assert inputs.handle_key(game, pygame.K_m) == "MENU"
    assert inputs.handle_key(game, pygame.K_TAB) == "MENU"
    body = list(game.snake.body)
    assert inputs.handle_key(game, pygame.K_z) is None
    assert game.snake.body == body
    assert game.run_state == config.RUNNING


# Linux input codes, enough to drive the headless path without evdev installed
FAKE_ECODES = SimpleNamespace(
    EV_KEY=1, KEY_UP=103, KEY_DOWN=108, KEY_LEFT=105, KEY_RIGHT=106,
    KEY_W=17, KEY_A=30, KEY_S=31, KEY_D=32, KEY_P=25, KEY_ESC=1,
    KEY_SPACE=57, KEY_ENTER=28, KEY_M=50, KEY_TAB=15,
)


def key_event(code, value):
    return SimpleNamespace(type=FAKE_ECODES.EV_KEY, code=code, value=value)


class FakeInputDevice:
    events = []

    def __init__(self, path):
        self.path = path

    def read_loop(self):
        return iter(self.events)


@pytest.fixture
def fake_evdev(monkeypatch):
    monkeypatch.setattr(inputs, "HAS_EVDEV", True)
    monkeypatch.setattr(inputs, "ecodes", FAKE_ECODES, raising=False)
    monkeypatch.setattr(inputs, "InputDevice", FakeInputDevice, raising=False)
    monkeypatch.setattr(config, "HEADLESS", True)
    monkeypatch.setattr(config, "KEYBOARD_DEVICE", "/dev/input/event0")
    posted = []
    monkeypatch.setattr(pygame.event, "post", posted.append)
    return posted


def run_keyboard_thread(events):
    FakeInputDevice.events = events
    running = threading.Event()
    running.set()
    inputs.keyboard_thread(running)


def test_keymap_covers_game_keys(fake_evdev):
    keymap = inputs.evdev_keymap()
    assert keymap[FAKE_ECODES.KEY_P] == pygame.K_p
    assert keymap[FAKE_ECODES.KEY_UP] == pygame.K_UP
    assert keymap[FAKE_ECODES.KEY_M] == pygame.K_m


def test_keymap_is_empty_without_evdev(monkeypatch):
    monkeypatch.setattr(inputs, "HAS_EVDEV", False)
    assert inputs.evdev_keymap() == {}


def test_only_movement_keys_autorepeat(fake_evdev):
    keymap = inputs.evdev_keymap()
    assert inputs.key_for_event(key_event(FAKE_ECODES.KEY_P, 1), keymap) == pygame.K_p
    assert inputs.key_for_event(key_event(FAKE_ECODES.KEY_P, 2), keymap) is None
    assert inputs.key_for_event(key_event(FAKE_ECODES.KEY_M, 2), keymap) is None
    assert inputs.key_for_event(key_event(FAKE_ECODES.KEY_UP, 2), keymap) == pygame.K_UP
    assert inputs.key_for_event(key_event(FAKE_ECODES.KEY_UP, 0), keymap) is None
    other = SimpleNamespace(type=0, code=FAKE_ECODES.KEY_UP, value=1)
    assert inputs.key_for_event(other, keymap) is None


def test_held_pause_key_toggles_once(fake_evdev, make_game):
    run_keyboard_thread([
        key_event(FAKE_ECODES.KEY_P, 1),
        key_event(FAKE_ECODES.KEY_P, 2),
        key_event(FAKE_ECODES.KEY_P, 2),
        key_event(FAKE_ECODES.KEY_P, 0),
    ])
    assert [e.key for e in fake_evdev] == [pygame.K_p]
    assert all(e.type == pygame.KEYDOWN for e in fake_evdev)

    game = make_game()
    for e in fake_evdev:
        inputs.handle_key(game, e.key)
    assert game.run_state == config.PAUSED


def test_held_arrow_keeps_steering(fake_evdev):
    run_keyboard_thread([
        key_event(FAKE_ECODES.KEY_UP, 1),
        key_event(FAKE_ECODES.KEY_UP, 2),
        key_event(FAKE_ECODES.KEY_UP, 0),
        key_event(44, 1),  # KEY_Z, not mapped
    ])
    assert [e.key for e in fake_evdev] == [pygame.K_UP, pygame.K_UP]


def test_keyboard_thread_reports_device_errors(fake_evdev, monkeypatch, capsys):
    def broken(path):
        raise OSError("no such device")

    monkeypatch.setattr(inputs, "InputDevice", broken)
    run_keyboard_thread([])
    assert "Keyboard Error" in capsys.readouterr().out
    assert fake_evdev == []
