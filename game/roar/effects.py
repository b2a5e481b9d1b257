"""
Effect spawner: particle bursts and roar shockwaves
"""

import random
from typing import List, Optional

from .config import (
    EXPLOSION_SIZE, PARTICLE_SPEED, PARTICLE_MIN_RADIUS, PARTICLE_RADIUS_SPREAD,
)
from .entities import Particle, Shockwave


class EffectSpawner:
    """Creates transient visual effects. Callers add them to the live effect list."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def explosion(self, x: float, y: float, color: tuple, count: int = EXPLOSION_SIZE) -> List[Particle]:
        rng = self.rng
        return [
            Particle(
                x=x,
                y=y,
                vx=(rng.random() - 0.5) * PARTICLE_SPEED,
                vy=(rng.random() - 0.5) * PARTICLE_SPEED,
                radius=rng.random() * PARTICLE_RADIUS_SPREAD + PARTICLE_MIN_RADIUS,
                color=color,
            )
            for _ in range(count)
        ]

    def shockwave(self, x: float, y: float) -> Shockwave:
        return Shockwave(x=x, y=y)
