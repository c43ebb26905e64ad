from .. import config
from .. import ui_core
from .. import utils


def tile_rect(cell, tile_size):
    x, y = cell
    return (x * tile_size, y * tile_size, tile_size, tile_size)


def draw_board(screen, settings, body, food):
    """Background, gradient snake, then food."""
    tile = settings.tile_size
    ui_core.fill_rect(screen, settings.background_color, (0, 0, *screen.get_size()))

    length = len(body)
    for i, segment in enumerate(body):
        rect = tile_rect(segment, tile)
        color = utils.segment_color(i, length, settings.head_color, settings.tail_color)
        ui_core.fill_rect(screen, color, rect)
        # Outline keeps neighbouring segments apart
        ui_core.stroke_rect(screen, settings.background_color, rect)

    if food is not None:
        ui_core.fill_rect(screen, settings.food_color, tile_rect(food, tile))


def draw_paused_overlay(screen, text="PAUSED"):
    w, h = screen.get_size()
    ui_core.fill_overlay(screen, config.PAUSED_OVERLAY)
    ui_core.draw_text_centered(screen, text, 40, config.WHITE, (w // 2, h // 2))


def draw_game_over_overlay(screen, reason=None):
    w, h = screen.get_size()
    title = "YOU WIN" if reason == config.BOARD_FULL else "GAME OVER"
    ui_core.fill_overlay(screen, config.GAME_OVER_OVERLAY)
    ui_core.draw_text_centered(screen, title, 30, config.RED, (w // 2, h // 2 - 20))
    ui_core.draw_text_centered(screen, 'Press "Space" to Restart', 20, config.BLACK, (w // 2, h // 2 + 20))


def draw_frame(screen, game):
    """Paint the whole frame for the current game state. Never mutates the game."""
    draw_board(screen, game.settings, game.snake.body, game.food)
    if game.run_state == config.PAUSED:
        draw_paused_overlay(screen)
    elif game.run_state == config.GAME_OVER:
        draw_game_over_overlay(screen, game.end_reason)
