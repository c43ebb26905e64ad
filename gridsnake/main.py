import sys
import threading
import pygame
from . import config
from . import display
from . import inputs
from .game_loop import GameLoop, TICK_EVENT
from .modes import settings_menu


def save_settings(state, form):
    """Read the form, persist it and restart with the new settings"""
    settings = form.read()
    old_size = state["game"].settings.canvas_size
    config.save_config(settings)
    if settings.canvas_size != old_size:
        state["game"].screen = display.resize_display(settings.canvas_size)
    state["game"].apply_settings(settings)


def handle_key(state, form, key):
    game = state["game"]
    if state["current_mode"] == "SNAKE":
        if inputs.handle_key(game, key) == "MENU":
            form.populate(game.settings)
            state["current_mode"] = "SETTINGS"
        return

    action = form.handle_input(key)
    close_menu(state, form, action)


def close_menu(state, form, action):
    if action == "SAVE":
        save_settings(state, form)
    if action in ("SAVE", "BACK"):
        state["current_mode"] = "SNAKE"
        state["game"].render()


def main():
    print("🐍 Starting Snake...")

    store = config.SettingsStore(config.load_config())
    screen = display.init_display(store.get().canvas_size)

    game = GameLoop(store, screen, score_sink=display.show_score)
    form = settings_menu.SettingsForm(store.get())

    state = {
        "current_mode": "SNAKE",  # or SETTINGS
        "game": game,
        "loop_running": True,
    }

    # Headless keyboard reader posts into the same event queue
    running_event = threading.Event()
    running_event.set()
    t_keys = threading.Thread(target=inputs.keyboard_thread, args=(running_event,), daemon=True)
    t_keys.start()

    clock = pygame.time.Clock()
    game.restart()

    try:
        while state["loop_running"]:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    state["loop_running"] = False
                elif event.type == TICK_EVENT:
                    # The board is frozen while the menu is open
                    if state["current_mode"] == "SNAKE":
                        game.on_tick()
                elif event.type == pygame.KEYDOWN:
                    handle_key(state, form, event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN and state["current_mode"] == "SETTINGS":
                    close_menu(state, form, form.handle_touch(event.pos, game.screen.get_size()))

            if state["current_mode"] == "SETTINGS":
                form.draw(game.screen)
                game.needs_redraw = True

            if game.needs_redraw:
                display.update_framebuffer(game.screen)
                game.needs_redraw = False

            clock.tick(60)

    except KeyboardInterrupt:
        print("Stopping...")
    finally:
        running_event.clear()
        game.disarm_timer()
        display.cleanup()


if __name__ == "__main__":
    sys.exit(main())
