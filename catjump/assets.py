"""
assets.py: Asynchronous image and sound loading.

Every file is loaded concurrently; a missing or unreadable file degrades to
None (placeholder drawing or silence). Only a missing asset directory is fatal.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pygame

from .data_models import GameEvent, ObstacleKind

logger = logging.getLogger(__name__)

PLAYER_IMAGE = "fat_cat.png"
IMAGE_FILES = {
    "player": PLAYER_IMAGE,
    ObstacleKind.FLYING.value: "bird.png",
    ObstacleKind.GROUND.value: "cactus.png",
}
SOUND_FILES = {
    GameEvent.JUMP: "jump.mp3",
    GameEvent.SCORE: "score.mp3",
    GameEvent.COLLISION: "hit.mp3",
}


class AssetLoadError(Exception):
    """The asset phase could not run at all."""


@dataclass
class Assets:
    images: Dict[str, Optional[Any]] = field(default_factory=dict)
    sounds: Dict[GameEvent, Optional[Any]] = field(default_factory=dict)

    def image(self, key: str):
        return self.images.get(key)

    def sound(self, event: GameEvent):
        return self.sounds.get(event)

    @property
    def missing(self) -> int:
        return (sum(1 for v in self.images.values() if v is None) +
                sum(1 for v in self.sounds.values() if v is None))


def init_mixer() -> bool:
    """Starts the mixer if possible. Sound is optional, so failure only disables it."""
    if pygame.mixer.get_init():
        return True
    try:
        pygame.mixer.init()
    except pygame.error as e:
        logger.warning("audio unavailable: %s", e)
        return False
    return True


def _load_image(path: Path):
    return pygame.image.load(str(path))


def _load_sound(path: Path):
    return pygame.mixer.Sound(str(path))


async def _load_file(loader, path: Path):
    if not path.is_file():
        logger.warning("asset not found: %s", path)
        return None
    try:
        return await asyncio.to_thread(loader, path)
    except (pygame.error, OSError) as e:
        logger.warning("could not load %s: %s", path, e)
        return None


async def load_assets(asset_dir: Union[str, Path], sound: bool = True) -> Assets:
    """
    Loads all images and sounds from `asset_dir`.
    Raises AssetLoadError only when the directory itself is unusable.
    """
    root = Path(asset_dir)
    if not root.is_dir():
        raise AssetLoadError(f"asset directory not found: {root}")

    image_keys = list(IMAGE_FILES)
    images = await asyncio.gather(
        *(_load_file(_load_image, root / IMAGE_FILES[k]) for k in image_keys))

    assets = Assets(images=dict(zip(image_keys, images)))

    if sound and init_mixer():
        events = list(SOUND_FILES)
        sounds = await asyncio.gather(
            *(_load_file(_load_sound, root / SOUND_FILES[e]) for e in events))
        assets.sounds = dict(zip(events, sounds))
    else:
        assets.sounds = {e: None for e in SOUND_FILES}

    logger.info("assets loaded from %s (%d missing)", root, assets.missing)
    return assets
