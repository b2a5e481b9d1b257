import random

import pytest

from game.roar.config import (
    ROAR_KILL_COLOR, PARTICLE_FADE, PARTICLE_FRICTION, SHOCKWAVE_GROWTH, SHOCKWAVE_FADE,
)
from game.roar.effects import EffectSpawner
from game.roar.entities import Enemy, Particle, Player, PlayerListener, Shockwave
from game.roar.session import SessionState


class Recorder(PlayerListener):
    def __init__(self):
        self.events = []

    def player_damaged(self, player):
        self.events.append(("damaged", player.health))

    def player_defeated(self, player):
        self.events.append(("defeated", player.health))

    def roar_changed(self, player):
        self.events.append(("roar", player.roar_power))


@pytest.fixture
def state():
    s = SessionState.fresh(800, 600)
    s.running = True
    return s


@pytest.fixture
def effects():
    return EffectSpawner(random.Random(7))


def test_take_damage_has_no_cooldown():
    rec = Recorder()
    p = Player(x=0, y=0, listener=rec)
    assert p.take_damage() is False
    assert p.take_damage() is False
    assert p.health == 70
    assert rec.events == [("damaged", 85), ("damaged", 70)]


def test_take_damage_signals_defeat_at_zero():
    rec = Recorder()
    p = Player(x=0, y=0, health=10, listener=rec)
    assert p.take_damage() is True
    assert p.health == -5
    assert p.health_percent == 0
    assert rec.events[-1] == ("defeated", -5)


def test_charge_roar_clamps_and_stops_at_max():
    rec = Recorder()
    p = Player(x=0, y=0, roar_power=95, listener=rec)
    p.charge_roar(10)
    assert p.roar_power == 100
    assert p.roar_ready
    p.charge_roar(10)
    assert p.roar_power == 100
    assert rec.events == [("roar", 100)]


def test_roar_not_ready_touches_nothing(state, effects):
    state.player.roar_power = 90
    state.enemies.append(Enemy(x=410, y=300, vx=0, vy=0))
    assert state.player.activate_roar(state, effects) is None
    assert state.score == 0
    assert len(state.enemies) == 1
    assert state.effects == []
    assert state.player.roar_power == 90


def test_roar_kills_everything_in_range_once(state, effects):
    player = state.player
    player.roar_power = 100
    near = [Enemy(x=player.x + d, y=player.y, vx=0, vy=0) for d in (0, 100, 399)]
    far = [Enemy(x=player.x + 400, y=player.y, vx=0, vy=0), Enemy(x=player.x, y=player.y - 450, vx=0, vy=0)]
    # interleave so removals are not contiguous
    state.enemies = [near[0], far[0], near[1], far[1], near[2]]

    victims = player.activate_roar(state, effects)

    assert [e.id for e in victims] == [e.id for e in near]
    assert state.enemies == far
    assert state.score == 30
    assert player.roar_power == 0
    shockwaves = [fx for fx in state.effects if isinstance(fx, Shockwave)]
    particles = [fx for fx in state.effects if isinstance(fx, Particle)]
    assert len(shockwaves) == 1
    assert (shockwaves[0].x, shockwaves[0].y) == (player.x, player.y)
    assert len(particles) == 24
    assert all(p.color == ROAR_KILL_COLOR for p in particles)


def test_enemy_moves_in_a_straight_line():
    e = Enemy(x=0, y=0, vx=1.5, vy=-0.5)
    for _ in range(4):
        e.update()
    assert (e.x, e.y) == pytest.approx((6.0, -2.0))


def test_enemy_ids_are_unique():
    a = Enemy(x=0, y=0, vx=0, vy=0)
    b = Enemy(x=0, y=0, vx=0, vy=0)
    assert a.id != b.id
    assert a != b


def test_particle_friction_and_fade():
    p = Particle(x=0, y=0, vx=2.0, vy=0.0, radius=3, color=(1, 2, 3))
    p.update()
    assert p.vx == pytest.approx(2.0 * PARTICLE_FRICTION)
    assert p.x == pytest.approx(2.0 * PARTICLE_FRICTION)
    assert p.alpha == pytest.approx(1.0 - PARTICLE_FADE)
    for _ in range(60):
        p.update()
    assert not p.alive


def test_shockwave_grows_and_fades():
    w = Shockwave(x=5, y=5)
    w.update()
    assert w.radius == pytest.approx(10 + SHOCKWAVE_GROWTH)
    assert w.alpha == pytest.approx(1 - SHOCKWAVE_FADE)


def test_explosion_burst(effects):
    burst = effects.explosion(10, 20, (9, 9, 9))
    assert len(burst) == 8
    for p in burst:
        assert (p.x, p.y) == (10, 20)
        assert 2 <= p.radius < 5
        assert -3 <= p.vx < 3 and -3 <= p.vy < 3
        assert p.alpha == 1.0
