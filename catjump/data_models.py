"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

from .constants import PLAYER_START_Y, PLAYER_X, PLAYER_WIDTH, PLAYER_HEIGHT


class RunState(str, Enum):
    START = "start"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


class GameEvent(str, Enum):
    """Things the audio layer reacts to."""
    JUMP = "jump"
    SCORE = "score"
    COLLISION = "collision"


class ObstacleKind(str, Enum):
    FLYING = "bird"
    GROUND = "cactus"


@dataclass
class Player:
    """The cat. Only the vertical axis moves."""
    x: float = PLAYER_X
    y: float = PLAYER_START_Y
    velocity: float = 0.0
    width: int = PLAYER_WIDTH
    height: int = PLAYER_HEIGHT
    # Set on resume from pause so the first tick does not add gravity twice.
    skip_gravity_once: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class SingleGapPipe:
    """Top solid of `top_height`, then a gap, then a solid down to the floor."""
    x: float
    top_height: float
    gap: int
    width: int
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap_bottom(self) -> float:
        return self.top_height + self.gap


@dataclass
class DoubleGapPipe:
    """Three solids separated by two gaps; heights sum to the screen height."""
    x: float
    solid1_height: int
    gap1: int
    solid2_height: int
    gap2: int
    solid3_height: int
    width: int
    passed: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def mid_y(self) -> int:
        """Top edge of the middle solid."""
        return self.solid1_height + self.gap1

    @property
    def bottom_y(self) -> int:
        """Top edge of the bottom solid."""
        return self.mid_y + self.solid2_height + self.gap2

    @property
    def total_height(self) -> int:
        return (self.solid1_height + self.gap1 + self.solid2_height
                + self.gap2 + self.solid3_height)


Pipe = Union[SingleGapPipe, DoubleGapPipe]


@dataclass
class Obstacle:
    """A moving hazard. Collides, never scores."""
    kind: ObstacleKind
    x: float
    y: float
    width: int
    height: int
    speed: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class TickResult:
    """What one simulation step produced, for the rendering and audio layers."""
    score: int
    state: RunState
    game_over: bool = False
    events: List[GameEvent] = field(default_factory=list)
