"""
physics_core.py: The deterministic kinematic functions and collision logic.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .constants import GameSettings
from .data_models import Player, Pipe, SingleGapPipe, DoubleGapPipe, Obstacle

# Collision causes, in the order they are evaluated
HIT_BOUNDS = "bounds"
HIT_PIPE = "pipe"
HIT_OBSTACLE = "obstacle"


@dataclass
class PhysicsCore:
    """
    Player kinematics and the collision predicates.
    Holds no world state of its own; everything is passed in.
    """
    settings: GameSettings = field(default_factory=GameSettings)

    def apply_gravity_and_movement(self, player: Player):
        """
        Advances the player by one tick.
        A pending skip-gravity flag keeps the velocity unchanged for this one tick.
        """
        if player.skip_gravity_once:
            player.skip_gravity_once = False
        else:
            player.velocity += self.settings.gravity
        player.y += player.velocity

    def jump(self, player: Player):
        """Instant upward impulse, independent of the current velocity."""
        player.velocity = self.settings.jump_velocity

    def dive(self, player: Player):
        player.velocity = self.settings.dive_velocity

    def out_of_bounds(self, player: Player) -> bool:
        return player.bottom > self.settings.screen_height or player.y < 0

    def clamp_to_screen(self, player: Player):
        """Pins the player inside the screen, used once the run has ended."""
        lowest = self.settings.screen_height - player.height
        player.y = max(0.0, min(player.y, lowest))

    @staticmethod
    def overlaps_horizontally(player: Player, left: float, right: float) -> bool:
        return player.right > left and player.x < right

    def hits_pipe(self, player: Player, pipe: Pipe) -> bool:
        if not self.overlaps_horizontally(player, pipe.x, pipe.right):
            return False

        if isinstance(pipe, SingleGapPipe):
            return player.y < pipe.top_height or player.bottom > pipe.gap_bottom

        if isinstance(pipe, DoubleGapPipe):
            # 1. Top solid
            if player.y < pipe.solid1_height:
                return True
            # 2. Middle solid band
            mid_y = pipe.mid_y
            if player.bottom > mid_y and player.y < mid_y + pipe.solid2_height:
                return True
            # 3. Bottom solid
            return player.bottom > pipe.bottom_y

        raise TypeError(f"unknown pipe type: {type(pipe).__name__}")

    @staticmethod
    def hits_obstacle(player: Player, obstacle: Obstacle) -> bool:
        """Axis-aligned bounding box overlap."""
        return (player.right > obstacle.x and player.x < obstacle.right and
                player.bottom > obstacle.y and player.y < obstacle.bottom)

    def collision_cause(self, player: Player, pipes: Iterable[Pipe],
                        obstacles: Iterable[Obstacle]) -> Optional[str]:
        """Returns the first collision found, or None. Bounds, then pipes, then obstacles."""

        # 1. Floor/Ceiling
        if self.out_of_bounds(player):
            return HIT_BOUNDS

        # 2. Pipes, in storage order
        for pipe in pipes:
            if self.hits_pipe(player, pipe):
                return HIT_PIPE

        # 3. Obstacles
        for obstacle in obstacles:
            if self.hits_obstacle(player, obstacle):
                return HIT_OBSTACLE

        return None

    def check_collision(self, player: Player, pipes: Iterable[Pipe],
                        obstacles: Iterable[Obstacle]) -> bool:
        """Checks for collisions with floor, ceiling, pipes or obstacles."""
        return self.collision_cause(player, pipes, obstacles) is not None
