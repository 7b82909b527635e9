"""
world.py: The live pipes and obstacles and how they scroll.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .data_models import Pipe, Obstacle
from .spawner import Spawn

logger = logging.getLogger(__name__)


@dataclass
class WorldState:
    """Sole owner of the in-flight pipes and obstacles."""
    pipes: List[Pipe] = field(default_factory=list)
    obstacles: List[Obstacle] = field(default_factory=list)

    def clear(self):
        self.pipes.clear()
        self.obstacles.clear()

    def add(self, spawn: Optional[Spawn]):
        if spawn is None:
            return
        self.pipes.append(spawn.pipe)
        if spawn.obstacle is not None:
            self.obstacles.append(spawn.obstacle)

    def step(self, pipe_speed: float, player_x: float) -> int:
        """
        Scrolls everything left, awards pass events and drops off-screen entities.
        Returns the number of pipes passed this step.
        """
        passed = 0
        kept: List[Pipe] = []
        for pipe in self.pipes:
            pipe.x -= pipe_speed

            if not pipe.passed and pipe.right < player_x:
                pipe.passed = True
                passed += 1

            if pipe.right < 0:
                logger.debug("pipe left the screen at x=%.1f", pipe.x)
                continue
            kept.append(pipe)
        self.pipes = kept

        for obstacle in self.obstacles:
            obstacle.x -= obstacle.speed
        self.obstacles = [o for o in self.obstacles if o.right >= 0]

        return passed
