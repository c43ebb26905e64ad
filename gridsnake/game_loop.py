import random
import pygame
from . import config
from .games import snake as snake_game
from .modes import board

# Recurring timer event driving the ticks
TICK_EVENT = pygame.USEREVENT + 1


class GameLoop:
    """
    Owns one game: settings snapshot, snake, food, score and run state.

    Input only ever buffers a turn or flips pause/restart; the snake itself
    moves inside on_tick(). At most one tick timer is armed at a time.
    """

    def __init__(self, store, screen, set_timer=None, score_sink=None, rng=None):
        self.store = store
        self.screen = screen
        self.set_timer = set_timer or pygame.time.set_timer
        self.score_sink = score_sink
        self.rng = rng or random.Random()

        self.settings = store.get()
        self.snake = snake_game.Snake.from_settings(self.settings)
        self.food = None
        self.score = 0
        self.run_state = config.RUNNING
        self.end_reason = None
        self.timer_armed = False
        self.needs_redraw = True

    # --- TIMER ---

    def arm_timer(self):
        # At most one tick stream: disarm before re-arming
        self.disarm_timer()
        self.set_timer(TICK_EVENT, self.settings.tick_interval_ms)
        self.timer_armed = True

    def disarm_timer(self):
        self.set_timer(TICK_EVENT, 0)
        self.timer_armed = False

    # --- LIFECYCLE ---

    def restart(self):
        """Fresh snake, fresh food, score 0, timer re-armed at the configured interval."""
        self.disarm_timer()
        self.settings = self.store.get()
        self.snake = snake_game.Snake.from_settings(self.settings)
        self.run_state = config.RUNNING
        self.end_reason = None
        self._set_score(0)
        self._place_food()
        self.arm_timer()
        self.render()

    def apply_settings(self, settings):
        """Swap in a new settings snapshot; always restarts."""
        self.store.replace(settings)
        self.restart()

    def _set_score(self, score):
        self.score = score
        if self.score_sink:
            self.score_sink(score)

    def _place_food(self):
        try:
            self.food = snake_game.place_food(self.snake.body, self.settings.grid_size, self.rng)
        except snake_game.GridFullError:
            self.food = None
            self._end(config.BOARD_FULL)

    def _end(self, reason):
        self.run_state = config.GAME_OVER
        self.end_reason = reason

    # --- COMMANDS ---

    def request_turn(self, direction):
        if self.run_state != config.RUNNING:
            return False
        return self.snake.request_turn(direction)

    def toggle_pause(self):
        if self.run_state == config.GAME_OVER:
            return
        self.run_state = config.PAUSED if self.run_state == config.RUNNING else config.RUNNING
        self.render()

    def request_restart(self):
        if self.run_state != config.GAME_OVER:
            return False
        self.restart()
        return True

    # --- TICK ---

    def on_tick(self):
        if self.run_state == config.GAME_OVER:
            self.render()
            self.disarm_timer()
            return

        if self.run_state == config.PAUSED:
            self.render()
            return

        result = self.snake.tick(self.food)
        if result.outcome == snake_game.COLLIDED:
            self._end(result.reason)
        elif result.ate_food:
            self._set_score(self.score + 1)
            self._place_food()
        self.render()
        return result

    def render(self):
        board.draw_frame(self.screen, self)
        self.needs_redraw = True
