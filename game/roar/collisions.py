"""
Collision & interaction resolver
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from .config import (
    HIT_TOLERANCE, TAP_MARGIN, PLAYER_TAP_MARGIN, KILL_SCORE,
    ROAR_CHARGE_PER_KILL, PLAYER_HIT_COLOR, TAP_KILL_COLOR,
)
from .effects import EffectSpawner
from .entities import Enemy, Player
from .utils import circle_collide, distance

if TYPE_CHECKING:
    from .session import SessionState


class InputOutcome(enum.Enum):
    IGNORED = "ignored"      # session not running
    MISS = "miss"
    ENEMY_KILLED = "enemy_killed"
    ROAR = "roar"            # roar released
    ROAR_NOT_READY = "roar_not_ready"


def touches_player(enemy: Enemy, player: Player) -> bool:
    return circle_collide(enemy.x, enemy.y, enemy.radius,
                          player.x, player.y, player.radius,
                          tolerance=HIT_TOLERANCE)


class CollisionResolver:
    def __init__(self, effects: EffectSpawner):
        self.effects = effects

    def resolve_player_hit(self, state: "SessionState", enemy: Enemy) -> bool:
        """
        Damage the player if `enemy` touches it. The caller removes the enemy
        from the live set once its scan is over.
        """
        if not touches_player(enemy, state.player):
            return False
        state.player.take_damage()
        state.effects.extend(self.effects.explosion(enemy.x, enemy.y, PLAYER_HIT_COLOR))
        return True

    def handle_input(self, state: "SessionState", x: float, y: float) -> InputOutcome:
        """
        Resolve a pointer-down at (x, y).

        The newest enemy under the pointer (drawn on top) dies first and at most
        one enemy dies per tap. A tap that misses every enemy but lands on the
        player releases the roar.
        """
        if not state.running:
            return InputOutcome.IGNORED

        for enemy in reversed(tuple(state.enemies)):
            if distance(x, y, enemy.x, enemy.y) < enemy.radius + TAP_MARGIN:
                state.effects.extend(self.effects.explosion(enemy.x, enemy.y, TAP_KILL_COLOR))
                state.remove_enemies((enemy,))
                state.score += KILL_SCORE
                state.player.charge_roar(ROAR_CHARGE_PER_KILL)
                return InputOutcome.ENEMY_KILLED

        player = state.player
        if distance(x, y, player.x, player.y) < player.radius + PLAYER_TAP_MARGIN:
            if player.activate_roar(state, self.effects) is None:
                return InputOutcome.ROAR_NOT_READY
            return InputOutcome.ROAR
        return InputOutcome.MISS
