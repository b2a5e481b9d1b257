import random

import pytest

from game.roar.clock import FrameClock
from game.roar.entities import Enemy
from game.roar.render import RecordingSurface
from game.roar.session import GameSession
from game.roar.ui import HudState


@pytest.fixture
def hud():
    return HudState()


@pytest.fixture
def session(hud):
    return GameSession(
        800, 600,
        surface=RecordingSurface(),
        ui=hud,
        clock=FrameClock(),
        rng=random.Random(1234),
    )


@pytest.fixture
def running(session):
    session.start()
    return session


def add_enemy(session, x, y, vx=0.0, vy=0.0):
    enemy = Enemy(x=x, y=y, vx=vx, vy=vy)
    session.state.enemies.append(enemy)
    return enemy


def no_spawns(session):
    session.spawner.maybe_spawn = lambda state: None
