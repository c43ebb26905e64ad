import random
from collections import namedtuple

# Directions as (dx, dy), y grows downwards
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

# Tick outcomes
MOVED = "MOVED"
BLOCKED = "BLOCKED"
COLLIDED = "COLLIDED"

# Collision reasons
WALL_HIT = "WALL"
SELF_HIT = "SELF"

TickResult = namedtuple("TickResult", ["outcome", "ate_food", "reason"])


class GridFullError(ValueError):
    pass


def opposite(direction):
    return (-direction[0], -direction[1])


def place_food(snake_cells, grid_size, rng=random):
    """Pick a random cell not covered by the snake."""
    occupied = set(snake_cells)
    if len(occupied) >= grid_size * grid_size:
        raise GridFullError("No free cell left for food")
    while True:
        cell = (rng.randrange(grid_size), rng.randrange(grid_size))
        if cell not in occupied:
            return cell


class Snake:
    def __init__(self, grid_size, walls_are_solid=True, zen_mode=False):
        self.grid_size = grid_size
        self.walls_are_solid = walls_are_solid
        self.zen_mode = zen_mode
        self.reset()

    @classmethod
    def from_settings(cls, settings):
        return cls(settings.grid_size, settings.walls_are_solid, settings.zen_mode)

    def reset(self):
        center = self.grid_size // 2
        self.body = [(center, center)]
        self.heading = RIGHT
        self.pending_heading = RIGHT

    @property
    def head(self):
        return self.body[0]

    def __len__(self):
        return len(self.body)

    def request_turn(self, direction):
        """Buffer a turn for the next tick. Reversals are ignored."""
        if direction not in DIRECTIONS:
            raise ValueError(f"Not a unit direction: {direction!r}")
        if direction == opposite(self.heading):
            return False
        self.pending_heading = direction
        return True

    def _in_bounds(self, cell):
        x, y = cell
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def tick(self, food):
        self.heading = self.pending_heading
        head_x, head_y = self.head
        new_head = (head_x + self.heading[0], head_y + self.heading[1])

        if self.walls_are_solid:
            if not self._in_bounds(new_head):
                if self.zen_mode:
                    return TickResult(BLOCKED, False, None)
                return TickResult(COLLIDED, False, WALL_HIT)
        else:
            new_head = (new_head[0] % self.grid_size, new_head[1] % self.grid_size)

        # Checked against the whole body, including the tail that would move away this tick
        if not self.zen_mode and new_head in self.body:
            return TickResult(COLLIDED, False, SELF_HIT)

        self.body.insert(0, new_head)
        if new_head == food:
            return TickResult(MOVED, True, None)
        self.body.pop()
        return TickResult(MOVED, False, None)
