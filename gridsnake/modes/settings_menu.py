import pygame
from .. import config
from .. import ui_core
from .. import utils

# Form rows, top to bottom
ROWS = [
    {"label": "DIFFICULTY", "field": "difficulty"},
    {"label": "SOLID WALLS", "field": "walls"},
    {"label": "ZEN MODE", "field": "zen"},
    {"label": "HEAD COLOR", "field": "head"},
    {"label": "TAIL COLOR", "field": "tail"},
    {"label": "FOOD COLOR", "field": "food"},
    {"label": "BACKGROUND", "field": "background"},
    {"label": "SAVE", "action": "SAVE", "color": config.GREEN},
    {"label": "< BACK", "action": "BACK", "color": config.GRAY},
]

COLOR_ROWS = {
    "head": "head_color",
    "tail": "tail_color",
    "food": "food_color",
    "background": "background_color",
}

HEADER_H = 40
PAD = 10

UP_KEYS = (pygame.K_UP, pygame.K_w)
DOWN_KEYS = (pygame.K_DOWN, pygame.K_s)
LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
ENTER_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE)
CLOSE_KEYS = (pygame.K_m, pygame.K_TAB, pygame.K_ESCAPE)


class SettingsForm:
    """
    The settings menu. populate() fills it from a snapshot, read() turns
    the current form values back into a validated snapshot.
    """

    def __init__(self, settings=None):
        self.populate(settings or config.DEFAULT_SETTINGS)

    def populate(self, settings):
        self.base = settings
        self.values = {
            "difficulty": config.difficulty_for_interval(settings.tick_interval_ms),
            "walls": settings.walls_are_solid,
            "zen": settings.zen_mode,
        }
        # Per-row color choices; a color outside the palette stays first
        self.choices = {}
        for field, attr in COLOR_ROWS.items():
            value = utils.rgb_to_hex(getattr(settings, attr))
            self.values[field] = value
            if value in config.COLOR_CHOICES:
                self.choices[field] = config.COLOR_CHOICES
            else:
                self.choices[field] = [value] + config.COLOR_CHOICES
        self.selected = 0

    def read(self):
        colors = {attr: utils.hex_to_rgb(self.values[field]) for field, attr in COLOR_ROWS.items()}
        return config.validate_settings(self.base.copy(
            tick_interval_ms=config.SPEEDS[self.values["difficulty"]],
            walls_are_solid=self.values["walls"],
            zen_mode=self.values["zen"],
            **colors
        ))

    # --- EDITING ---

    def cycle(self, field, step=1):
        value = self.values[field]
        if field == "difficulty":
            choices = config.DIFFICULTY_ORDER
        elif isinstance(value, bool):
            self.values[field] = not value
            return
        else:
            choices = self.choices[field]
        self.values[field] = choices[(choices.index(value) + step) % len(choices)]

    def activate(self, index):
        row = ROWS[index]
        if "action" in row:
            return row["action"]
        self.cycle(row["field"])
        return None

    def handle_input(self, key):
        """Returns "SAVE" or "BACK" when the menu should close."""
        row = ROWS[self.selected]
        if key in UP_KEYS:
            self.selected = (self.selected - 1) % len(ROWS)
        elif key in DOWN_KEYS:
            self.selected = (self.selected + 1) % len(ROWS)
        elif key in LEFT_KEYS and "field" in row:
            self.cycle(row["field"], -1)
        elif key in RIGHT_KEYS and "field" in row:
            self.cycle(row["field"], 1)
        elif key in ENTER_KEYS:
            return self.activate(self.selected)
        elif key in CLOSE_KEYS:
            return "BACK"
        return None

    # --- LAYOUT ---

    def row_rects(self, size):
        w, h = size
        row_h = max(1, (h - HEADER_H - PAD) // len(ROWS))
        return [(PAD, HEADER_H + PAD // 2 + i * row_h, w - 2 * PAD, row_h - 4) for i in range(len(ROWS))]

    def handle_touch(self, pos, size):
        x, y = pos
        for i, (rx, ry, rw, rh) in enumerate(self.row_rects(size)):
            if rx <= x <= rx + rw and ry <= y <= ry + rh:
                self.selected = i
                return self.activate(i)
        return None

    def value_label(self, field):
        value = self.values[field]
        if isinstance(value, bool):
            return "ON" if value else "OFF"
        return value

    def draw(self, screen):
        w, h = screen.get_size()
        screen.fill(config.WHITE)

        # Header
        pygame.draw.rect(screen, config.BLACK, (0, 0, w, HEADER_H))
        ui_core.draw_text_centered(screen, "SETTINGS", 24, config.WHITE, (w // 2, HEADER_H // 2))

        for i, (row, rect) in enumerate(zip(ROWS, self.row_rects((w, h)))):
            rx, ry, rw, rh = rect
            color = config.HIGHLIGHT_COLOR if i == self.selected else row.get("color", config.TEAL)
            pygame.draw.rect(screen, color, rect, border_radius=6)
            text_size = max(10, rh // 2)
            cy = ry + rh // 2

            if "action" in row:
                ui_core.draw_text_centered(screen, row["label"], text_size, config.BLACK, (rx + rw // 2, cy))
                continue

            lbl = ui_core.render_text(row["label"], text_size, config.BLACK)
            screen.blit(lbl, lbl.get_rect(midleft=(rx + 8, cy)))

            value = ui_core.render_text(self.value_label(row["field"]), text_size, config.BLACK)
            value_rect = value.get_rect(midright=(rx + rw - 8, cy))
            screen.blit(value, value_rect)

            if row["field"] in COLOR_ROWS:
                swatch = (value_rect.left - rh, ry + 4, rh - 8, rh - 8)
                pygame.draw.rect(screen, utils.hex_to_rgb(self.values[row["field"]]), swatch)
                pygame.draw.rect(screen, config.BLACK, swatch, 1)
