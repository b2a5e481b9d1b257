import math
import random

import pytest

from game.roar.session import SessionState
from game.roar.spawner import SpawnController, ZONE_KEYS, spawn_interval, zone_key


@pytest.mark.parametrize("score,expected", [
    (0, 100), (49, 100), (50, 99), (2500, 50), (3500, 30), (10_000, 30),
])
def test_spawn_interval(score, expected):
    assert spawn_interval(score) == expected


def test_spawn_interval_never_increases_with_score():
    values = [spawn_interval(s) for s in range(0, 5000, 10)]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_fires_only_on_interval_frames():
    state = SessionState.fresh(800, 600)
    spawner = SpawnController(random.Random(0))
    fired = []
    for frame in range(301):
        state.frames = frame
        if spawner.maybe_spawn(state) is not None:
            fired.append(frame)
    assert fired == [0, 100, 200, 300]
    assert len(state.enemies) == 4


def test_spawns_just_outside_an_edge_aimed_at_player():
    state = SessionState.fresh(800, 600)
    state.difficulty = 1.3
    spawner = SpawnController(random.Random(42))
    player = state.player
    for _ in range(200):
        e = spawner.spawn_enemy(state)
        on_edge = (
            (e.y == -20 and 0 <= e.x < 800) or
            (e.y == 620 and 0 <= e.x < 800) or
            (e.x == -20 and 0 <= e.y < 600) or
            (e.x == 820 and 0 <= e.y < 600)
        )
        assert on_edge, (e.x, e.y)

        speed = math.hypot(e.vx, e.vy)
        assert 1.3 <= speed < 2.6 + 1e-9

        to_player = math.atan2(player.y - e.y, player.x - e.x)
        assert math.atan2(e.vy, e.vx) == pytest.approx(to_player)
        assert e.zone in ZONE_KEYS


def test_same_seed_same_enemies():
    a = SpawnController(random.Random(99)).spawn_enemy(SessionState.fresh(800, 600))
    b = SpawnController(random.Random(99)).spawn_enemy(SessionState.fresh(800, 600))
    assert (a.x, a.y, a.vx, a.vy) == (b.x, b.y, b.vx, b.vy)


@pytest.mark.parametrize("x,y,key", [
    (-20, 10, "top-left"),
    (400, -20, "top-center"),
    (820, 100, "top-right"),
    (100, 620, "bottom-left"),
    (400, 300, "bottom-center"),
    (700, 599, "bottom-right"),
])
def test_zone_key(x, y, key):
    assert zone_key(x, y, 800, 600) == key
