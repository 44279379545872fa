"""Game configuration constants."""

# Board size presets: name -> (columns, rows)
BOARD_SIZES = {
    "small": (5, 4),
    "medium": (7, 6),
    "large": (9, 8),
}
DEFAULT_HEX_SIZE = 40.0  # Center-to-corner distance in pixels

# Difficulty
DIFFICULTY_RANGE = (1, 10)
DEFAULT_DIFFICULTY = 5
ENEMY_MIN_DIFFICULTY = 3  # No enemies below this difficulty

# Placement percentages (interpolated linearly across the difficulty range)
OBSTACLE_PCT_RANGE = (0.05, 0.20)  # difficulty 1 -> 10
POWERUP_PCT_RANGE = (0.15, 0.03)  # difficulty 1 -> 10
BLACK_HOLE_SHARE = 0.2
ENEMY_SHARE = 0.2
PLACEMENT_MAX_ATTEMPTS = 20

# Enemies
ENEMY_VISION_RANGE = (1, 6)

# Movement
MOVEMENT_POOL_FACTOR = 5  # Pool = (columns + rows) * factor
NUM_DIRECTIONS = 6

# Combat
DIE_SIDES = 6
DEFAULT_MAX_TURNS = 5  # Attacks per side before the player retreats
DEFAULT_HIT_THRESHOLD = 4  # Only used when a ship has no weapon component
PLAYER_POWER_LIMIT = 7
ENEMY_POWER_LIMIT = 4

# Galaxy
GALAXY_SIZE = 3
GALAXY_STORAGE_KEY = "galaxyProgress"

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing
