"""
Game entity dataclasses
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from .config import (
    PLAYER_RADIUS, PLAYER_MAX_HEALTH, DAMAGE_PER_HIT, MAX_ROAR, ROAR_RADIUS,
    KILL_SCORE, ENEMY_RADIUS, ROAR_KILL_COLOR, PARTICLE_FRICTION, PARTICLE_FADE,
    SHOCKWAVE_START_RADIUS, SHOCKWAVE_GROWTH, SHOCKWAVE_FADE,
)
from .utils import distance

if TYPE_CHECKING:
    from .effects import EffectSpawner
    from .render import Surface
    from .session import SessionState

_enemy_ids = itertools.count(1)


class PlayerListener:
    """Receives the player's one-shot side effects. Every hook is a no-op here."""

    def player_damaged(self, player: "Player") -> None:
        pass

    def player_defeated(self, player: "Player") -> None:
        pass

    def roar_changed(self, player: "Player") -> None:
        pass


@dataclass
class Player:
    """The lion at the centre of the screen"""
    x: float
    y: float
    radius: float = PLAYER_RADIUS
    health: int = PLAYER_MAX_HEALTH
    roar_power: int = 0
    max_roar: int = MAX_ROAR
    listener: PlayerListener = field(default_factory=PlayerListener, repr=False, compare=False)

    @property
    def roar_ready(self) -> bool:
        return self.roar_power >= self.max_roar

    @property
    def health_percent(self) -> int:
        """Health as shown on the HUD (never below zero)"""
        return max(0, self.health)

    def take_damage(self) -> bool:
        """
        Apply one enemy hit. There is no invulnerability window, every call counts.

        Returns True when this hit brought health to zero or below.
        """
        self.health -= DAMAGE_PER_HIT
        self.listener.player_damaged(self)
        if self.health <= 0:
            self.listener.player_defeated(self)
            return True
        return False

    def charge_roar(self, amount: int):
        if self.roar_power >= self.max_roar:
            return
        self.roar_power = min(self.max_roar, self.roar_power + amount)
        self.listener.roar_changed(self)

    def activate_roar(self, state: "SessionState", effects: "EffectSpawner") -> Optional[List["Enemy"]]:
        """
        Release the roar if the meter is full.

        Every enemy closer than ROAR_RADIUS is killed and scores KILL_SCORE.
        Victims are picked from a snapshot of the live enemies and removed in
        one pass afterwards. Returns the killed enemies, or None when the meter
        was not full (in which case nothing is touched).
        """
        if not self.roar_ready:
            return None

        state.effects.append(effects.shockwave(self.x, self.y))

        victims = [
            e for e in tuple(state.enemies)
            if distance(self.x, self.y, e.x, e.y) < ROAR_RADIUS
        ]
        for e in victims:
            state.effects.extend(effects.explosion(e.x, e.y, ROAR_KILL_COLOR))
            state.score += KILL_SCORE
        state.remove_enemies(victims)

        self.roar_power = 0
        self.listener.roar_changed(self)
        return victims

    def render(self, surface: "Surface", style, frame: int = 0):
        style.draw_player(surface, self, frame)


@dataclass
class Enemy:
    """Shadow creature flying in a straight line towards where the player was"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = ENEMY_RADIUS
    zone: str = "top-center"  # sprite key, fixed at creation
    id: int = field(default_factory=lambda: next(_enemy_ids))

    def update(self):
        self.x += self.vx
        self.y += self.vy

    def render(self, surface: "Surface", style):
        style.draw_enemy(surface, self)


@dataclass
class Particle:
    """Explosion debris that slows down and fades out"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    color: tuple
    alpha: float = 1.0

    @property
    def alive(self) -> bool:
        return self.alpha > 0

    def update(self):
        self.vx *= PARTICLE_FRICTION
        self.vy *= PARTICLE_FRICTION
        self.x += self.vx
        self.y += self.vy
        self.alpha -= PARTICLE_FADE

    def render(self, surface: "Surface", style):
        style.draw_particle(surface, self)


@dataclass
class Shockwave:
    """Expanding ring drawn when the roar goes off. Purely cosmetic."""
    x: float
    y: float
    radius: float = SHOCKWAVE_START_RADIUS
    alpha: float = 1.0

    @property
    def alive(self) -> bool:
        return self.alpha > 0

    def update(self):
        self.radius += SHOCKWAVE_GROWTH
        self.alpha -= SHOCKWAVE_FADE

    def render(self, surface: "Surface", style):
        style.draw_shockwave(surface, self)
