#!/usr/bin/env python3
"""
game_client.py

pygame front end: asset phase, input, fixed-timestep simulation and rendering.
All game rules live in GameEngine; this module only reads its accessors.
"""

import argparse
import asyncio
import logging
import sys
from typing import Dict, Optional

import pygame

from .assets import Assets, AssetLoadError, load_assets
from .constants import GameSettings, TICK_RATE
from .data_models import (
    GameEvent, RunState, SingleGapPipe, DoubleGapPipe, Obstacle
)
from .game_engine import GameEngine

logger = logging.getLogger(__name__)

# RENDER_FPS can be faster than TICK_RATE for smooth rendering
RENDER_FPS = 60

BACKGROUND_COLOR = (0x70, 0xC5, 0xCE)
PIPE_COLOR = (0xFF, 0xC0, 0xCB)
PIPE_CORNER_RADIUS = 10
PLAYER_PLACEHOLDER_COLOR = (255, 255, 0)
OBSTACLE_PLACEHOLDER_COLORS = {"bird": (90, 60, 40), "cactus": (40, 140, 60)}
TEXT_COLOR = (255, 255, 255)
OVERLAY_COLOR = (0, 0, 0, 150)


# ----------------- Audio -----------------

class SoundBoard:
    """Engine listener that plays one fire-and-forget sound per event."""

    def __init__(self, assets: Assets):
        self.assets = assets

    def __call__(self, event: GameEvent):
        sound = self.assets.sound(event)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            logger.debug("could not play %s: %s", event.value, e)


# ----------------- Game Client (rendering / input) -----------------

class GameClient:
    def __init__(self, engine: GameEngine, assets: Optional[Assets], init_error: Optional[str] = None):
        self.engine = engine
        self.settings = engine.settings
        self.assets = assets or Assets()
        self.init_error = init_error

        self.screen = pygame.display.set_mode(
            (self.settings.screen_width, self.settings.screen_height))
        pygame.display.set_caption("Cat Jump")

        self.sprites = self._prepare_sprites()
        self.engine.add_listener(SoundBoard(self.assets))
        if self.init_error is None:
            self.engine.mark_ready()

        # Time Management
        self.clock = pygame.time.Clock()
        self.tick_time = 1.0 / TICK_RATE
        self.tick_timer = 0.0

        self.large_font = pygame.font.Font(None, 40)
        self.font = pygame.font.Font(None, 24)

    def _prepare_sprites(self) -> Dict[str, pygame.Surface]:
        """Scales the loaded images to their hitbox sizes; missing ones are skipped."""
        s = self.settings
        sizes = {
            "player": (s.player_width, s.player_height),
            "bird": (s.bird_width, s.bird_height),
            "cactus": (s.cactus_width, s.cactus_height),
        }
        sprites = {}
        for key, size in sizes.items():
            image = self.assets.image(key)
            if image is None:
                continue
            sprites[key] = pygame.transform.scale(image.convert_alpha(), size)
        return sprites

    def run(self, fps: int = RENDER_FPS):
        """The main client execution loop."""
        running = True
        while running:
            delta = self.clock.tick(fps) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    self._handle_input(event)

            # --- Simulation Loop (Fixed Timestep) ---
            # Only accumulate while playing so pause and game over freeze the world.
            if self.engine.state is RunState.PLAYING:
                self.tick_timer += delta
                while self.tick_timer >= self.tick_time and self.engine.state is RunState.PLAYING:
                    self.tick_timer -= self.tick_time
                    self.engine.tick()
            else:
                self.tick_timer = 0.0

            self._draw_game()

        pygame.quit()

    def _handle_input(self, event):
        engine = self.engine
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if engine.state is RunState.START:
                engine.start()
            elif engine.state is RunState.PLAYING:
                engine.jump()
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                if engine.state in (RunState.START, RunState.GAME_OVER):
                    engine.start()
                else:
                    engine.toggle_pause()
            elif event.key in (pygame.K_UP, pygame.K_SPACE):
                engine.jump()
            elif event.key == pygame.K_DOWN:
                engine.dive()

    # ---------- Drawing (back to front) ----------

    def _draw_game(self):
        screen = self.screen
        screen.fill(BACKGROUND_COLOR)

        self._draw_pipes()
        for obstacle in self.engine.obstacles:
            self._draw_obstacle(obstacle)
        self._draw_player()
        self._draw_hud()

        pygame.display.flip()

    def _draw_pipes(self):
        width = self.settings.pipe_width
        height = self.settings.screen_height
        for pipe in self.engine.pipes:
            if isinstance(pipe, SingleGapPipe):
                self._solid(pipe.x, 0, width, pipe.top_height)
                self._solid(pipe.x, pipe.gap_bottom, width, height - pipe.gap_bottom)
            elif isinstance(pipe, DoubleGapPipe):
                self._solid(pipe.x, 0, width, pipe.solid1_height)
                self._solid(pipe.x, pipe.mid_y, width, pipe.solid2_height)
                bottom_height = height - pipe.bottom_y
                if bottom_height > 0:
                    self._solid(pipe.x, pipe.bottom_y, width, bottom_height)

    def _solid(self, x, y, w, h):
        rect = pygame.Rect(int(x), int(y), int(w), int(round(h)))
        pygame.draw.rect(self.screen, PIPE_COLOR, rect, border_radius=PIPE_CORNER_RADIUS)

    def _draw_obstacle(self, obstacle: Obstacle):
        sprite = self.sprites.get(obstacle.kind.value)
        if sprite is not None:
            self.screen.blit(sprite, (int(obstacle.x), int(obstacle.y)))
        else:
            color = OBSTACLE_PLACEHOLDER_COLORS[obstacle.kind.value]
            pygame.draw.rect(self.screen, color,
                             (int(obstacle.x), int(obstacle.y), obstacle.width, obstacle.height))

    def _draw_player(self):
        player = self.engine.player
        sprite = self.sprites.get("player")
        if sprite is not None:
            self.screen.blit(sprite, (int(player.x), int(player.y)))
        else:
            pygame.draw.rect(self.screen, PLAYER_PLACEHOLDER_COLOR,
                             (int(player.x), int(player.y), player.width, player.height))

    def _draw_hud(self):
        engine = self.engine
        w = self.settings.screen_width

        if engine.state in (RunState.PLAYING, RunState.PAUSED):
            score_text = self.large_font.render(f"Score: {engine.score}", True, TEXT_COLOR)
            self.screen.blit(score_text, (w // 2 - score_text.get_width() // 2, 20))
            if engine.state is RunState.PLAYING and engine.can_pause:
                hint = self.font.render("Enter = Pause", True, TEXT_COLOR)
                self.screen.blit(hint, (w - hint.get_width() - 10, 10))

        if self.init_error is not None:
            self._overlay(["Failed to load the game.", self.init_error, "Please restart."])
        elif engine.state is RunState.START:
            self._overlay(["Cat Jump", "Click / Enter to start",
                           "Up = Jump | Down = Dive"])
        elif engine.state is RunState.PAUSED:
            self._overlay(["Paused", "Enter to resume"])
        elif engine.state is RunState.GAME_OVER:
            self._overlay(["Game Over", f"Score: {engine.score}", "Enter to restart"])

    def _overlay(self, lines):
        w, h = self.settings.screen_width, self.settings.screen_height
        panel = pygame.Surface((w, h), pygame.SRCALPHA)
        panel.fill(OVERLAY_COLOR)
        self.screen.blit(panel, (0, 0))

        y = h // 2 - 30 * len(lines) // 2
        for i, line in enumerate(lines):
            font = self.large_font if i == 0 else self.font
            surf = font.render(line, True, TEXT_COLOR)
            self.screen.blit(surf, (w // 2 - surf.get_width() // 2, y))
            y += 40 if i == 0 else 28


# ----------------- Entry Point -----------------

def setup_logging(level: str = "info"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Cat Jump")
    p.add_argument("--seed", type=int, default=None,
                   help="RNG seed for reproducible pipe layouts. Omit for a random run.")
    p.add_argument("--assets", default=None,
                   help="Directory holding fat_cat.png, bird.png, cactus.png and the .mp3 sounds. "
                        "Omit to play with placeholder shapes and no sound.")
    p.add_argument("--fps", type=int, default=RENDER_FPS)
    p.add_argument("--log-level", default="info")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    pygame.init()
    settings = GameSettings()
    engine = GameEngine(settings=settings, seed=args.seed)

    assets: Optional[Assets] = None
    init_error: Optional[str] = None
    if args.assets is not None:
        try:
            assets = asyncio.run(load_assets(args.assets))
        except AssetLoadError as e:
            print(f"Failed to initialize game: {e}", file=sys.stderr)
            init_error = str(e)

    client = GameClient(engine, assets, init_error=init_error)
    client.run(fps=args.fps)


if __name__ == "__main__":
    main()
