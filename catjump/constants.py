"""
constants.py: Centralized configuration for the game world and its tuning.
"""

from dataclasses import dataclass

# Simulation speed. All physics values below are per tick, not per second.
TICK_RATE = 60                  # Simulation ticks per second

# -------- Game World Config --------
SCREEN_WIDTH = 360
SCREEN_HEIGHT = 540

# -------- Player Config --------
PLAYER_WIDTH = 45
PLAYER_HEIGHT = 45
PLAYER_X = SCREEN_WIDTH / 4     # Fixed player X position
PLAYER_START_Y = SCREEN_HEIGHT / 2 - PLAYER_HEIGHT / 2

# -------- Physics Config (units / tick) --------
GRAVITY = 0.4                   # Added to vertical velocity each tick
JUMP_VELOCITY = -7.0            # Velocity set by a jump (not additive)
DIVE_VELOCITY = 5.0             # Velocity set by a dive

# -------- Pipe Config --------
PIPE_WIDTH = 70
PIPE_GAP = 140
PIPE_SPEED = 2.5
PIPE_SPAWN_INTERVAL = 100       # Spawn every 100 ticks
DOUBLE_GAP_PROBABILITY = 0.4
MIN_SEGMENT_HEIGHT = 30         # Smallest solid segment of a double-gap pipe
MIN_SOLID_HEIGHT = 40           # Smallest solid of a single-gap pipe

# Spawn counter thresholds
SINGLE_ONLY_UNTIL = 10          # Spawns 1..10 are always single-gap
ALTERNATE_UNTIL = 30            # Spawns 11..30 alternate, obstacles after 30

# -------- Obstacle Config --------
BIRD_WIDTH = 40
BIRD_HEIGHT = 30
CACTUS_WIDTH = 30
CACTUS_HEIGHT = 50

# -------- Rules --------
PAUSE_SCORE_THRESHOLD = 15


@dataclass(frozen=True)
class GameSettings:
    """Tuning values for one engine instance. Defaults mirror the constants above."""
    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT

    player_width: int = PLAYER_WIDTH
    player_height: int = PLAYER_HEIGHT
    gravity: float = GRAVITY
    jump_velocity: float = JUMP_VELOCITY
    dive_velocity: float = DIVE_VELOCITY

    pipe_width: int = PIPE_WIDTH
    pipe_gap: int = PIPE_GAP
    pipe_speed: float = PIPE_SPEED
    spawn_interval: int = PIPE_SPAWN_INTERVAL
    double_gap_probability: float = DOUBLE_GAP_PROBABILITY
    min_segment_height: int = MIN_SEGMENT_HEIGHT
    min_solid_height: int = MIN_SOLID_HEIGHT
    single_only_until: int = SINGLE_ONLY_UNTIL
    alternate_until: int = ALTERNATE_UNTIL

    bird_width: int = BIRD_WIDTH
    bird_height: int = BIRD_HEIGHT
    cactus_width: int = CACTUS_WIDTH
    cactus_height: int = CACTUS_HEIGHT

    pause_score_threshold: int = PAUSE_SCORE_THRESHOLD

    def __post_init__(self):
        if self.screen_width <= 0 or self.screen_height <= 0:
            raise ValueError("screen dimensions must be positive")
        if self.spawn_interval <= 0:
            raise ValueError("spawn_interval must be positive")
        if not 0.0 <= self.double_gap_probability <= 1.0:
            raise ValueError("double_gap_probability must be within [0, 1]")
        # A single-gap pipe is the fallback shape, so it must always fit.
        if self.single_gap_space < 0:
            raise ValueError(
                f"screen height {self.screen_height} cannot hold a gap of {self.pipe_gap} "
                f"between two solids of at least {self.min_solid_height}")
        if self.bird_height * 2 > self.screen_height:
            raise ValueError("screen height cannot hold the flying obstacle band")

    @property
    def single_gap_space(self) -> float:
        """Vertical room left for the random part of a single-gap pipe."""
        return self.screen_height - self.pipe_gap - self.min_solid_height * 2

    @property
    def player_x(self) -> float:
        """The player sits a quarter of the way across the screen."""
        return self.screen_width / 4

    @property
    def player_start_y(self) -> float:
        return self.screen_height / 2 - self.player_height / 2
