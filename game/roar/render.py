"""
Drawing capability and the two entity styles.

The simulation draws through a Surface and never knows which style is active:
VectorStyle builds everything from shapes, SpriteStyle draws images keyed by
entity (and by spawn zone for enemies) and falls back to the shapes for any
image that is missing.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import (
    LION_COLOR, MANE_COLOR, ENEMY_COLOR, EYE_COLOR,
    AURA_COLOR, SHOCKWAVE_COLOR,
)

Point = Tuple[float, float]


class Surface:
    """A 2D drawing target in screen coordinates (y grows downwards)"""

    def clear(self):
        raise NotImplementedError

    def draw_circle(self, x: float, y: float, radius: float, color: tuple, alpha: float = 1.0):
        raise NotImplementedError

    def draw_ring(self, x: float, y: float, radius: float, color: tuple,
                  width: float = 1.0, alpha: float = 1.0):
        raise NotImplementedError

    def draw_polygon(self, points: Sequence[Point], color: tuple):
        raise NotImplementedError

    def draw_image(self, image: Any, x: float, y: float, size: float):
        raise NotImplementedError


class RecordingSurface(Surface):
    """Headless surface that remembers what was drawn since the last clear"""

    def __init__(self):
        self.commands: List[Tuple[str, tuple]] = []
        self.clears = 0

    def calls(self, name: str) -> List[tuple]:
        return [args for cmd, args in self.commands if cmd == name]

    def clear(self):
        self.clears += 1
        self.commands = [("clear", ())]

    def draw_circle(self, x, y, radius, color, alpha=1.0):
        self.commands.append(("circle", (x, y, radius, color, alpha)))

    def draw_ring(self, x, y, radius, color, width=1.0, alpha=1.0):
        self.commands.append(("ring", (x, y, radius, color, width, alpha)))

    def draw_polygon(self, points, color):
        self.commands.append(("polygon", (tuple(points), color)))

    def draw_image(self, image, x, y, size):
        self.commands.append(("image", (image, x, y, size)))

    def replay(self, target: Surface):
        """Draw the recorded frame again on another surface"""
        methods = {
            "clear": target.clear,
            "circle": target.draw_circle,
            "ring": target.draw_ring,
            "polygon": target.draw_polygon,
            "image": target.draw_image,
        }
        for cmd, args in self.commands:
            methods[cmd](*args)


class VectorStyle:
    """Everything drawn from shapes"""

    mane_spikes = 12

    def draw_aura(self, surface: Surface, player, frame: int):
        if not player.roar_ready:
            return
        alpha = 0.5 + math.sin(frame * 0.1) * 0.3
        surface.draw_ring(player.x, player.y, player.radius + 25, AURA_COLOR, width=5, alpha=alpha)

    def mane_points(self, player) -> List[Point]:
        points = []
        step = 2 * math.pi / self.mane_spikes
        for i in range(1, self.mane_spikes + 1):
            a = i * step
            cos_a, sin_a = math.cos(a), math.sin(a)
            for px, py in ((player.radius + 15, 0.0), (player.radius, 15.0)):
                points.append((player.x + px * cos_a - py * sin_a,
                               player.y + px * sin_a + py * cos_a))
        return points

    def draw_player(self, surface: Surface, player, frame: int = 0):
        surface.draw_polygon(self.mane_points(player), MANE_COLOR)
        surface.draw_circle(player.x, player.y, player.radius, LION_COLOR)
        self.draw_aura(surface, player, frame)

    def draw_enemy(self, surface: Surface, enemy):
        surface.draw_circle(enemy.x, enemy.y, enemy.radius, ENEMY_COLOR)
        surface.draw_circle(enemy.x - 5, enemy.y - 2, 3, EYE_COLOR)
        surface.draw_circle(enemy.x + 5, enemy.y - 2, 3, EYE_COLOR)

    def draw_particle(self, surface: Surface, particle):
        surface.draw_circle(particle.x, particle.y, particle.radius, particle.color, alpha=particle.alpha)

    def draw_shockwave(self, surface: Surface, wave):
        surface.draw_ring(wave.x, wave.y, wave.radius, SHOCKWAVE_COLOR, width=10, alpha=wave.alpha)


class SpriteStyle(VectorStyle):
    """
    Images for the lion and for each enemy zone ('top-left' ... 'bottom-right').

    `images` maps "player" and zone keys to whatever the surface's draw_image
    accepts. Absent keys fall back to plain shapes.
    """

    player_scale = 4.0
    enemy_scale = 3.5

    def __init__(self, images: Optional[Dict[str, Any]] = None):
        self.images = dict(images or {})

    def draw_player(self, surface: Surface, player, frame: int = 0):
        # aura sits behind the sprite
        self.draw_aura(surface, player, frame)
        image = self.images.get("player")
        if image is not None:
            surface.draw_image(image, player.x, player.y, player.radius * self.player_scale)
        else:
            surface.draw_circle(player.x, player.y, player.radius, LION_COLOR)

    def draw_enemy(self, surface: Surface, enemy):
        image = self.images.get(enemy.zone)
        if image is not None:
            surface.draw_image(image, enemy.x, enemy.y, enemy.radius * self.enemy_scale)
        else:
            super().draw_enemy(surface, enemy)


STYLES = {"vector": VectorStyle, "sprite": SpriteStyle}
