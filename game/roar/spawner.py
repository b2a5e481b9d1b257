"""
Spawn controller: when and where new enemies enter the arena
"""

from __future__ import annotations

import logging
import math
import random
from typing import Optional, TYPE_CHECKING

from .config import (
    ENEMY_RADIUS, SPAWN_INTERVAL_BASE, SPAWN_INTERVAL_MIN, SPAWN_SCORE_DIVISOR,
)
from .entities import Enemy
from .utils import angle_between

if TYPE_CHECKING:
    from .session import SessionState

logger = logging.getLogger(__name__)

SIDES = ("top", "right", "bottom", "left")
ZONE_KEYS = tuple(f"{v}-{h}" for v in ("top", "bottom") for h in ("left", "center", "right"))


def spawn_interval(score: int) -> int:
    """Frames between spawns. Shrinks as the score grows, never below the floor."""
    return max(SPAWN_INTERVAL_MIN, SPAWN_INTERVAL_BASE - math.floor(score / SPAWN_SCORE_DIVISOR))


def zone_key(x: float, y: float, width: float, height: float) -> str:
    """
    Sprite key for an enemy at (x, y), e.g. 'top-left' or 'bottom-center'.
    Screen y grows downwards; the width is split in thirds.
    """
    v_pos = "top" if y < height / 2 else "bottom"
    third = width / 3
    if x < third:
        h_pos = "left"
    elif x > third * 2:
        h_pos = "right"
    else:
        h_pos = "center"
    return f"{v_pos}-{h_pos}"


class SpawnController:
    """Introduces enemies just outside a random screen edge"""

    def __init__(self, rng: Optional[random.Random] = None, radius: float = ENEMY_RADIUS):
        self.rng = rng or random.Random()
        self.radius = radius

    def maybe_spawn(self, state: "SessionState") -> Optional[Enemy]:
        """Spawn one enemy if this frame falls on the current spawn interval"""
        if state.frames % spawn_interval(state.score) != 0:
            return None
        enemy = self.spawn_enemy(state)
        state.enemies.append(enemy)
        return enemy

    def spawn_enemy(self, state: "SessionState") -> Enemy:
        rng = self.rng
        r = self.radius
        w, h = state.width, state.height

        side = SIDES[rng.randrange(4)]
        if side == "top":
            x, y = rng.random() * w, -r
        elif side == "right":
            x, y = w + r, rng.random() * h
        elif side == "bottom":
            x, y = rng.random() * w, h + r
        else:
            x, y = -r, rng.random() * h

        # Aimed once at the player's current position, never re-targeted
        player = state.player
        angle = angle_between(x, y, player.x, player.y)
        speed = (1 + rng.random()) * state.difficulty

        logger.debug("spawn %s at (%.0f, %.0f) speed %.2f", side, x, y, speed)
        return Enemy(
            x=x,
            y=y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            radius=r,
            zone=zone_key(x, y, w, h),
        )
