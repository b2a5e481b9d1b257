import random

import pytest

from conftest import add_enemy, no_spawns

from game.roar.clock import FrameClock
from game.roar.config import PLAYER_HIT_COLOR
from game.roar.entities import Particle, Shockwave
from game.roar.render import RecordingSurface, Surface
from game.roar.session import GameSession, SessionPhase


def test_starts_idle(session):
    assert session.phase is SessionPhase.IDLE
    assert not session.running
    assert not session.clock.pending


def test_start_resets_and_schedules(session, hud):
    session.start()
    assert session.phase is SessionPhase.RUNNING
    assert session.running
    assert session.clock.pending
    assert (session.score, session.state.frames, session.state.difficulty) == (0, 0, 1.0)
    assert (session.player.x, session.player.y) == (400, 300)
    assert hud.overlay is None
    assert hud.health == 100


def test_start_while_running_is_ignored(running):
    add_enemy(running, 10, 10)
    running.start()
    assert len(running.enemies) == 1


def test_first_frame_spawns_and_counts(running):
    assert running.clock.tick()
    assert running.state.frames == 1
    assert len(running.enemies) == 1
    # frame 0 is a multiple of the difficulty period too
    assert running.state.difficulty == pytest.approx(1.1)
    assert running.clock.pending


def test_frame_draw_order(running):
    add_enemy(running, 100, 100)
    running.state.effects.append(Shockwave(x=1, y=1))
    running.clock.tick()
    cmds = [cmd for cmd, _ in running.surface.commands]
    assert cmds[0] == "clear"
    assert cmds[1] == "polygon"          # mane
    assert "ring" in cmds                # shockwave
    assert cmds.index("ring") < len(cmds) - 3


def test_three_hits_then_survive(running, hud):
    no_spawns(running)
    for expected in (85, 70, 55):
        add_enemy(running, running.player.x, running.player.y)
        running.clock.tick()
        assert running.player.health == expected
        assert running.enemies == []
    assert running.running
    assert hud.health == 55
    assert hud.flashes == 3
    blood = [fx for fx in running.state.effects if isinstance(fx, Particle) and fx.color == PLAYER_HIT_COLOR]
    assert len(blood) == 24


def test_defeat_ends_session_and_halts_loop(running, hud):
    no_spawns(running)
    running.state.score = 70
    for _ in range(8):
        add_enemy(running, running.player.x, running.player.y)
    running.clock.tick()

    # seventh hit is fatal; nothing lands after the session ended
    assert running.player.health == -5
    # the eighth enemy touched after the fatal hit and is left in place
    assert len(running.enemies) == 1
    assert running.enemies[0].x == running.player.x
    assert running.phase is SessionPhase.ENDED
    assert running.final_score == 70
    assert hud.overlay == "game_over"
    assert hud.final_score_text == "Score: 70"
    assert hud.health == 0
    assert not running.clock.pending

    frames = running.state.frames
    assert running.clock.tick() is False
    running.step()
    assert running.state.frames == frames
    assert running.score == 70


def test_health_stays_in_bounds_over_a_long_run():
    session = GameSession(800, 600, rng=random.Random(3))
    session.start()
    seen = []
    while session.clock.tick():
        seen.append(session.player.health)
    assert session.phase is SessionPhase.ENDED
    assert all(-15 <= h <= 100 for h in seen)
    assert max(0, session.player.health) == 0


def test_difficulty_after_2000_frames(running):
    no_spawns(running)
    assert running.clock.run(2000) == 2000
    assert running.state.frames == 2000
    assert running.state.difficulty == pytest.approx(1.4)


def test_expired_effects_are_retired(running):
    no_spawns(running)
    running.state.effects.append(Particle(x=0, y=0, vx=0, vy=0, radius=2, color=(1, 1, 1), alpha=0.0))
    running.state.effects.append(Particle(x=0, y=0, vx=0, vy=0, radius=2, color=(1, 1, 1), alpha=0.5))
    running.clock.tick()
    assert len(running.state.effects) == 1
    running.clock.run(60)
    assert running.state.effects == []


def test_restart_after_end(running, hud):
    no_spawns(running)
    running.state.score = 40
    running.player.health = 15
    add_enemy(running, running.player.x, running.player.y)
    running.clock.tick()
    assert running.phase is SessionPhase.ENDED

    running.restart()
    assert running.phase is SessionPhase.RUNNING
    assert running.score == 0
    assert running.player.health == 100
    assert running.enemies == []
    assert running.state.effects == []
    assert running.state.frames == 0
    assert running.final_score is None
    assert hud.overlay is None
    assert hud.score == 0


def test_resize_recentres_player(running):
    running.resize(1024, 768)
    assert (running.player.x, running.player.y) == (512, 384)
    assert (running.state.width, running.state.height) == (1024, 768)
    with pytest.raises(ValueError):
        running.resize(0, 768)


def test_rejects_empty_viewport():
    with pytest.raises(ValueError):
        GameSession(0, 600)


class BrokenSurface(RecordingSurface):
    def draw_circle(self, *args, **kwargs):
        raise RuntimeError("surface lost")


def test_render_failure_is_fatal():
    session = GameSession(800, 600, surface=BrokenSurface(), clock=FrameClock(), seed=1)
    session.start()
    with pytest.raises(RuntimeError):
        session.clock.tick()
    assert session.phase is SessionPhase.ENDED
    assert not session.clock.pending


def test_base_surface_is_abstract():
    with pytest.raises(NotImplementedError):
        Surface().clear()
