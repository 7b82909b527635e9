"""
pipe_generator.py: Randomized pipe and obstacle geometry.

Every shape produced here satisfies the segment invariants: each solid is at
least the configured minimum and a double-gap pipe covers the screen height
exactly. When a double-gap split cannot satisfy them, a single-gap pipe is
produced instead.
"""

import logging
import math
import random
from typing import Optional, Tuple

from .constants import GameSettings
from .data_models import SingleGapPipe, DoubleGapPipe, Pipe, Obstacle, ObstacleKind

logger = logging.getLogger(__name__)

Segments = Tuple[int, int, int]


def secondary_gap(gap: int) -> int:
    """The lower gap of a double-gap pipe is two thirds of the primary one."""
    return math.floor(gap * 2 / 3)


def split_solid_height(total: int, min_segment: int,
                       draws: Tuple[float, float, float]) -> Optional[Segments]:
    """
    Splits `total` into three solids proportionally to `draws`.
    The third solid takes the exact remainder, so the sum is always `total`.
    Returns None for a degenerate draw (all zeros).
    """
    weight = sum(draws)
    if weight <= 0:
        return None

    spread = total - 3 * min_segment
    seg1 = min_segment + math.floor(draws[0] / weight * spread)
    seg2 = min_segment + math.floor(draws[1] / weight * spread)
    seg3 = total - seg1 - seg2
    return seg1, seg2, seg3


def repair_segments(segments: Segments, min_segment: int) -> Optional[Segments]:
    """
    Lifts a too-short third solid back to `min_segment` by borrowing the
    deficit from the first solid, or failing that the second one.
    Returns None when neither has enough slack or any solid is still too short.
    """
    seg1, seg2, seg3 = segments
    if seg3 < min_segment:
        deficit = min_segment - seg3
        if seg1 > min_segment + deficit:
            seg1 -= deficit
            seg3 += deficit
        elif seg2 > min_segment + deficit:
            seg2 -= deficit
            seg3 += deficit
        else:
            return None

    if min(seg1, seg2, seg3) < min_segment:
        return None
    return seg1, seg2, seg3


class PipeGenerator:
    """Builds new shapes at the right edge of the screen from an injected RNG."""

    def __init__(self, settings: GameSettings, rng: random.Random):
        self.settings = settings
        self.rng = rng

    def single_gap(self) -> SingleGapPipe:
        s = self.settings
        top_height = self.rng.random() * s.single_gap_space + s.min_solid_height
        return SingleGapPipe(
            x=float(s.screen_width),
            top_height=top_height,
            gap=s.pipe_gap,
            width=s.pipe_width,
        )

    def double_gap(self) -> Pipe:
        """A double-gap pipe, or a single-gap one if the random split is unusable."""
        s = self.settings
        gap1 = s.pipe_gap
        gap2 = secondary_gap(gap1)
        total_solid = s.screen_height - (gap1 + gap2)

        draws = (self.rng.random(), self.rng.random(), self.rng.random())
        segments = split_solid_height(total_solid, s.min_segment_height, draws)
        if segments is not None:
            segments = repair_segments(segments, s.min_segment_height)

        if segments is None:
            logger.debug("double-gap split %s unusable for %d px of solid; falling back to single-gap",
                         draws, total_solid)
            return self.single_gap()

        seg1, seg2, seg3 = segments
        return DoubleGapPipe(
            x=float(s.screen_width),
            solid1_height=seg1,
            gap1=gap1,
            solid2_height=seg2,
            gap2=gap2,
            solid3_height=seg3,
            width=s.pipe_width,
        )

    def obstacle(self, kind: ObstacleKind) -> Obstacle:
        s = self.settings
        if kind is ObstacleKind.FLYING:
            width, height = s.bird_width, s.bird_height
            # Central band, one obstacle height away from both edges
            y = self.rng.random() * (s.screen_height - height * 2) + height
        else:
            width, height = s.cactus_width, s.cactus_height
            # Flush to the ceiling or the floor
            y = 0.0 if self.rng.random() < 0.5 else float(s.screen_height - height)

        return Obstacle(
            kind=kind,
            x=float(s.screen_width),
            y=y,
            width=width,
            height=height,
            speed=s.pipe_speed,
        )

    def random_obstacle(self) -> Obstacle:
        kind = self.rng.choice([ObstacleKind.FLYING, ObstacleKind.GROUND])
        return self.obstacle(kind)
