"""
game_engine.py: The authoritative single-player simulation.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .data_models import (
    Player, Pipe, Obstacle, RunState, GameEvent, TickResult
)
from .physics_core import PhysicsCore, HIT_BOUNDS
from .spawner import SpawnScheduler
from .world import WorldState

logger = logging.getLogger(__name__)

Listener = Callable[[GameEvent], None]


@dataclass
class GameEngine(PhysicsCore):
    """
    Owns the whole simulation context: player, world, counters, score and run state.
    Inherits kinematics and collision from PhysicsCore.

    The engine never raises from tick() or the command methods; commands issued
    in the wrong state are rejected by returning False.
    """
    seed: Optional[int] = None
    rng: Optional[random.Random] = None

    player: Player = field(init=False)
    world: WorldState = field(init=False, default_factory=WorldState)
    scheduler: SpawnScheduler = field(init=False)
    score: int = field(init=False, default=0)
    state: RunState = field(init=False, default=RunState.START)
    ready: bool = field(init=False, default=False)
    listeners: List[Listener] = field(init=False, default_factory=list)

    def __post_init__(self):
        if self.rng is None:
            self.rng = random.Random(self.seed)
        self.player = self._fresh_player()
        self.scheduler = SpawnScheduler(self.settings, self.rng)

    def _fresh_player(self) -> Player:
        s = self.settings
        return Player(x=s.player_x, y=s.player_start_y, velocity=0.0,
                      width=s.player_width, height=s.player_height)

    # ---------- Collaborators ----------

    def add_listener(self, listener: Listener):
        self.listeners.append(listener)

    def _emit(self, event: GameEvent, events: Optional[List[GameEvent]] = None):
        if events is not None:
            events.append(event)
        for listener in self.listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("listener %r failed on %s", listener, event.value)

    def mark_ready(self):
        """Called once the asset phase has finished, successfully or not."""
        self.ready = True
        logger.info("engine ready")

    # ---------- Read-only accessors ----------

    @property
    def pipes(self) -> Tuple[Pipe, ...]:
        return tuple(self.world.pipes)

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        return tuple(self.world.obstacles)

    @property
    def can_pause(self) -> bool:
        return self.score >= self.settings.pause_score_threshold

    # ---------- Commands ----------

    def reset(self):
        """Back to the initial state: fresh player, empty world, zeroed counters."""
        self.player = self._fresh_player()
        self.world.clear()
        self.scheduler.reset()
        self.score = 0
        self.state = RunState.START

    def start(self) -> bool:
        """Begins a new run from the start screen or after a game over."""
        if not self.ready:
            logger.warning("start requested before assets were ready")
            return False
        if self.state not in (RunState.START, RunState.GAME_OVER):
            return False
        self.reset()
        self.state = RunState.PLAYING
        logger.info("run started")
        return True

    def jump(self, player: Optional[Player] = None) -> bool:
        if self.state is not RunState.PLAYING:
            return False
        super().jump(player or self.player)
        self._emit(GameEvent.JUMP)
        return True

    def dive(self, player: Optional[Player] = None) -> bool:
        if self.state is not RunState.PLAYING:
            return False
        super().dive(player or self.player)
        return True

    def toggle_pause(self) -> bool:
        if self.state is RunState.PLAYING:
            if not self.can_pause:
                return False
            self.state = RunState.PAUSED
            logger.info("paused at score %d", self.score)
            return True

        if self.state is RunState.PAUSED:
            self.state = RunState.PLAYING
            # The first resumed tick keeps the velocity the player paused with.
            self.player.skip_gravity_once = True
            logger.info("resumed")
            return True

        return False

    # ---------- Simulation ----------

    def tick(self) -> TickResult:
        """
        The main simulation step.
        Mutates the player and world; a collision ends the run.
        """
        if self.state is not RunState.PLAYING:
            return TickResult(score=self.score, state=self.state)

        events: List[GameEvent] = []

        # 1. Player
        self.apply_gravity_and_movement(self.player)

        # 2. Spawn, then scroll and score
        self.world.add(self.scheduler.tick())
        passed = self.world.step(self.settings.pipe_speed, self.player.x)
        for _ in range(passed):
            self.score += 1
            self._emit(GameEvent.SCORE, events)

        # 3. Collisions
        cause = self.collision_cause(self.player, self.world.pipes, self.world.obstacles)
        if cause is not None:
            self._game_over(cause, events)
            return TickResult(score=self.score, state=self.state, game_over=True, events=events)

        return TickResult(score=self.score, state=self.state, events=events)

    def _game_over(self, cause: str, events: List[GameEvent]):
        if cause == HIT_BOUNDS:
            self.clamp_to_screen(self.player)
        self.state = RunState.GAME_OVER
        logger.info("game over (%s) with score %d after %d spawns",
                    cause, self.score, self.scheduler.spawn_count)
        self._emit(GameEvent.COLLISION, events)
