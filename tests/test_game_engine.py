import pytest

from catjump.constants import GameSettings
from catjump.data_models import (
    RunState, GameEvent, SingleGapPipe, Obstacle, ObstacleKind
)
from catjump.game_engine import GameEngine


def run_until_game_over(engine, limit=1000):
    for _ in range(limit):
        result = engine.tick()
        if result.game_over:
            return result
    raise AssertionError("run never ended")


def passed_pipe():
    # After one 2.5 step its right edge sits at 87.5, left of the player at 90
    return SingleGapPipe(x=20.0, top_height=100.0, gap=140, width=70)


# ---------- Lifecycle ----------

def test_new_engine_waits_at_start(settings):
    engine = GameEngine(settings=settings, seed=1)
    assert engine.state is RunState.START
    result = engine.tick()
    assert result.state is RunState.START
    assert not result.game_over
    assert engine.scheduler.frame_count == 0


def test_start_requires_ready(settings):
    engine = GameEngine(settings=settings, seed=1)
    assert engine.start() is False
    assert engine.state is RunState.START

    engine.mark_ready()
    assert engine.start() is True
    assert engine.state is RunState.PLAYING


def test_start_is_rejected_mid_run(engine):
    engine.tick()
    assert engine.start() is False
    assert engine.scheduler.frame_count == 1


def test_player_starts_centered(engine, settings):
    assert engine.player.x == settings.screen_width / 4
    assert engine.player.y == settings.screen_height / 2 - settings.player_height / 2
    assert engine.player.velocity == 0.0


def test_reset_reinitializes_everything(engine):
    for _ in range(10):
        engine.tick()
    engine.world.pipes.append(passed_pipe())
    engine.score = 7

    engine.reset()
    assert engine.state is RunState.START
    assert engine.score == 0
    assert engine.pipes == ()
    assert engine.obstacles == ()
    assert engine.scheduler.frame_count == 0
    assert engine.scheduler.spawn_count == 0
    assert engine.player.velocity == 0.0


# ---------- Controls ----------

def test_jump_sets_fixed_velocity(engine):
    engine.player.velocity = 5.0
    assert engine.jump() is True
    assert engine.player.velocity == -7.0

    engine.jump()
    assert engine.player.velocity == -7.0


def test_dive_sets_fixed_velocity(engine):
    engine.player.velocity = -3.0
    assert engine.dive() is True
    assert engine.player.velocity == 5.0


def test_controls_ignored_outside_playing(settings):
    engine = GameEngine(settings=settings, seed=1)
    assert engine.jump() is False
    assert engine.dive() is False
    assert engine.player.velocity == 0.0


def test_jump_notifies_listeners(engine):
    heard = []
    engine.add_listener(heard.append)
    engine.jump()
    engine.dive()
    assert heard == [GameEvent.JUMP]


# ---------- Ticking ----------

def test_tick_applies_gravity(engine):
    y0 = engine.player.y
    engine.tick()
    assert engine.player.velocity == pytest.approx(0.4)
    assert engine.player.y == pytest.approx(y0 + 0.4)


def test_first_pipe_spawns_on_interval(engine, settings):
    for _ in range(settings.spawn_interval - 1):
        engine.tick()
        engine.player.y, engine.player.velocity = 200.0, 0.0
    assert engine.pipes == ()

    engine.tick()
    assert len(engine.pipes) == 1
    assert engine.pipes[0].x == settings.screen_width - settings.pipe_speed


def test_falling_ends_the_run(engine, settings):
    heard = []
    engine.add_listener(heard.append)

    result = run_until_game_over(engine)
    assert result.state is RunState.GAME_OVER
    assert GameEvent.COLLISION in result.events
    assert heard[-1] is GameEvent.COLLISION
    # clamped to the floor
    assert engine.player.bottom == settings.screen_height


def test_game_over_is_terminal_until_start(engine):
    run_until_game_over(engine)
    y = engine.player.y

    result = engine.tick()
    assert result.state is RunState.GAME_OVER
    assert not result.game_over
    assert engine.player.y == y
    assert engine.jump() is False
    assert engine.toggle_pause() is False

    assert engine.start() is True
    assert engine.state is RunState.PLAYING
    assert engine.score == 0


def test_passing_a_pipe_scores_once(engine):
    heard = []
    engine.add_listener(heard.append)
    pipe = passed_pipe()
    engine.world.pipes.append(pipe)

    result = engine.tick()
    assert result.score == 1
    assert result.events == [GameEvent.SCORE]
    assert heard == [GameEvent.SCORE]
    assert pipe.passed

    result = engine.tick()
    assert result.score == 1
    assert result.events == []


def test_pipe_collision_ends_the_run(engine):
    # Pipe right in front of the player with the gap far below it
    engine.world.pipes.append(
        SingleGapPipe(x=100.0, top_height=400.0, gap=140, width=70))
    result = engine.tick()
    assert result.game_over
    assert engine.state is RunState.GAME_OVER


def test_obstacle_collision_ends_the_run(engine):
    p = engine.player
    engine.world.obstacles.append(Obstacle(
        kind=ObstacleKind.FLYING, x=p.x + 10, y=p.y, width=40, height=30, speed=2.5))
    result = engine.tick()
    assert result.game_over


def test_scrolled_off_obstacle_is_removed_before_collision(engine):
    engine.world.obstacles.append(Obstacle(
        kind=ObstacleKind.GROUND, x=-29.0, y=0.0, width=30, height=50, speed=2.5))
    result = engine.tick()
    assert not result.game_over
    assert engine.obstacles == ()


def test_listener_failure_does_not_escape_tick(engine):
    def broken(event):
        raise RuntimeError("speaker on fire")

    engine.add_listener(broken)
    engine.world.pipes.append(passed_pipe())
    result = engine.tick()
    assert result.score == 1


# ---------- Pause ----------

def test_pause_requires_threshold_score(engine):
    engine.score = 14
    assert engine.can_pause is False
    assert engine.toggle_pause() is False
    assert engine.state is RunState.PLAYING

    engine.score = 15
    assert engine.can_pause is True
    assert engine.toggle_pause() is True
    assert engine.state is RunState.PAUSED


def test_paused_world_is_frozen(engine):
    engine.score = 15
    engine.toggle_pause()
    y, frames = engine.player.y, engine.scheduler.frame_count

    result = engine.tick()
    assert result.state is RunState.PAUSED
    assert engine.player.y == y
    assert engine.scheduler.frame_count == frames
    assert engine.jump() is False


def test_resume_skips_gravity_for_one_tick(engine):
    engine.tick()
    engine.tick()
    engine.score = 15
    engine.toggle_pause()
    v, y = engine.player.velocity, engine.player.y

    assert engine.toggle_pause() is True
    assert engine.state is RunState.PLAYING

    engine.tick()
    assert engine.player.velocity == pytest.approx(v)
    assert engine.player.y == pytest.approx(y + v)

    engine.tick()
    assert engine.player.velocity == pytest.approx(v + 0.4)


# ---------- Determinism ----------

def test_same_seed_same_world(settings):
    def play(seed):
        engine = GameEngine(settings=settings, seed=seed)
        engine.mark_ready()
        engine.start()
        for _ in range(1200):
            # hold the player in place so the run survives long enough to spawn
            engine.player.y, engine.player.velocity = 0.0, 0.0
            engine.world.pipes.clear()
            engine.world.obstacles.clear()
            engine.tick()
        return engine.scheduler.spawn_count, engine.rng.random()

    assert play(42) == play(42)


def test_custom_screen_is_honoured():
    settings = GameSettings(screen_width=480, screen_height=640)
    engine = GameEngine(settings=settings, seed=3)
    assert engine.player.y == 640 / 2 - settings.player_height / 2
    assert engine.player.x == 120
