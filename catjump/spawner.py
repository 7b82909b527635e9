"""
spawner.py: Decides when to spawn and which archetype comes next.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from .constants import GameSettings
from .data_models import Pipe, Obstacle
from .pipe_generator import PipeGenerator

logger = logging.getLogger(__name__)


@dataclass
class Spawn:
    """Everything produced by one spawn event."""
    pipe: Pipe
    obstacle: Optional[Obstacle] = None


@dataclass
class SpawnScheduler:
    """
    Two counters drive spawning:
    - frame_count ticks every simulation step and decides *when*.
    - spawn_count ticks once per spawn and decides *what*.
    """
    settings: GameSettings
    rng: random.Random
    frame_count: int = 0
    spawn_count: int = 0
    generator: PipeGenerator = field(init=False)

    def __post_init__(self):
        self.generator = PipeGenerator(self.settings, self.rng)

    def reset(self):
        self.frame_count = 0
        self.spawn_count = 0

    def wants_double_gap(self, n: int) -> bool:
        """Pipe shape policy for the n-th spawn (1-based)."""
        s = self.settings
        if n <= s.single_only_until:
            return False
        if n <= s.alternate_until:
            return n % 2 == 1
        return self.rng.random() < s.double_gap_probability

    def obstacles_enabled(self, n: int) -> bool:
        return n > self.settings.alternate_until

    def spawn(self) -> Spawn:
        """Unconditionally produces the next pipe, plus an obstacle once eligible."""
        self.spawn_count += 1
        n = self.spawn_count

        if self.wants_double_gap(n):
            pipe = self.generator.double_gap()
        else:
            pipe = self.generator.single_gap()

        obstacle = None
        if self.obstacles_enabled(n):
            obstacle = self.generator.random_obstacle()

        logger.debug("spawn #%d: %s%s", n, type(pipe).__name__,
                     f" + {obstacle.kind.value}" if obstacle else "")
        return Spawn(pipe=pipe, obstacle=obstacle)

    def tick(self) -> Optional[Spawn]:
        """Advances the frame counter; spawns on every `spawn_interval`-th frame."""
        self.frame_count += 1
        if self.frame_count % self.settings.spawn_interval == 0:
            return self.spawn()
        return None
