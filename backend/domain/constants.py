"""
Game constants for Happy Snake.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Screen coordinates: y grows downwards
DIRECTION_VECTORS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

# Board settings
GRID_SIZE = 20
INITIAL_SNAKE = [(10, 10), (10, 11), (10, 12)]
INITIAL_DIRECTION = UP

# Food pools
FRUITS = ["🍎", "🍌", "🍓", "🍇", "🍒", "🍉", "🍍", "🍑"]
INSECTS = ["🐞", "🐝", "🦋", "🐛", "🦗", "🐜"]
FOOD_TYPES = ("fruits", "insects", "both")

# Speed level -> milliseconds per tick
SPEED_MAP = {
    1: 250,
    2: 200,
    3: 150,
    4: 100,
    5: 60,
}

LANGUAGES = ("en", "pt-BR")

AUTO_RESTART_DELAY_MS = 2000

# Terminal reasons
WALL_COLLISION = "WALL_COLLISION"
SELF_COLLISION = "SELF_COLLISION"
STALEMATE = "STALEMATE"

# Controller events
EVENT_EATEN = "eaten"
EVENT_GAME_OVER = "gameOver"

# Persistence keys
SETTINGS_KEY = "snake_settings"
HIGH_SCORE_KEY = "snake_highscore"
