"""
Game session: run state, the start/end state machine and the per-frame loop.

    IDLE --start()--> RUNNING --player defeated--> ENDED --restart()--> RUNNING

The session owns every piece of mutable game state. Entities, the spawn
controller and the collision resolver receive the SessionState explicitly.
"""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Union

from .clock import FrameClock
from .collisions import CollisionResolver, InputOutcome
from .config import (
    DEFAULT_WIDTH, DEFAULT_HEIGHT, DIFFICULTY_START, DIFFICULTY_STEP, DIFFICULTY_EVERY,
)
from .effects import EffectSpawner
from .entities import Enemy, Particle, Player, PlayerListener, Shockwave
from .render import RecordingSurface, Surface, VectorStyle
from .spawner import SpawnController
from .ui import DisplaySink

logger = logging.getLogger(__name__)


class SessionPhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


@dataclass
class SessionState:
    """Everything one run mutates"""
    width: float
    height: float
    player: Player
    score: int = 0
    frames: int = 0
    difficulty: float = DIFFICULTY_START
    running: bool = False
    enemies: List[Enemy] = field(default_factory=list)
    effects: List[Union[Particle, Shockwave]] = field(default_factory=list)

    @classmethod
    def fresh(cls, width: float, height: float) -> "SessionState":
        return cls(width=width, height=height, player=Player(x=width / 2, y=height / 2))

    def remove_enemies(self, doomed: Iterable[Enemy]):
        """Drop the given enemies in a single pass, each at most once"""
        ids = {e.id for e in doomed}
        if ids:
            self.enemies = [e for e in self.enemies if e.id not in ids]


class GameSession(PlayerListener):
    """Runs one arena: owns the state, drives frames and routes input"""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        surface: Optional[Surface] = None,
        style=None,
        ui: Optional[DisplaySink] = None,
        clock: Optional[FrameClock] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport must be positive, got {width}x{height}")

        self.surface = surface if surface is not None else RecordingSurface()
        self.style = style if style is not None else VectorStyle()
        self.ui = ui if ui is not None else DisplaySink()
        self.clock = clock if clock is not None else FrameClock()
        self.rng = rng if rng is not None else random.Random(seed)

        self.effects = EffectSpawner(self.rng)
        self.spawner = SpawnController(self.rng)
        self.resolver = CollisionResolver(self.effects)

        self.phase = SessionPhase.IDLE
        self.final_score: Optional[int] = None
        self.state = SessionState.fresh(width, height)
        self.state.player.listener = self

    # ----------------------------
    # Convenience accessors
    # ----------------------------

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def player(self) -> Player:
        return self.state.player

    @property
    def enemies(self) -> List[Enemy]:
        return self.state.enemies

    @property
    def score(self) -> int:
        return self.state.score

    # ----------------------------
    # State machine
    # ----------------------------

    def start(self):
        """Reset everything and begin the frame loop. Ignored while running."""
        if self.phase is SessionPhase.RUNNING:
            logger.debug("start() ignored, session already running")
            return

        previous = self.phase
        self.state = SessionState.fresh(self.state.width, self.state.height)
        self.state.player.listener = self
        self.final_score = None

        self.ui.show_score(0)
        self.ui.show_health(self.state.player.health_percent)
        self.ui.show_roar(0)
        self.ui.show_roar_ready(False)
        self.ui.hide_overlays()

        self.state.running = True
        self.phase = SessionPhase.RUNNING
        logger.info("session %s (%dx%d)", "restarted" if previous is SessionPhase.ENDED else "started",
                    self.state.width, self.state.height)
        self.clock.request_frame(self.step)

    def restart(self):
        self.start()

    def end(self):
        """Stop the loop and publish the final score"""
        if not self.state.running:
            return
        self.state.running = False
        self.phase = SessionPhase.ENDED
        self.clock.cancel_frame()
        self.final_score = self.state.score
        self.ui.show_game_over(self.final_score)
        logger.info("session ended after %d frames, score %d", self.state.frames, self.final_score)

    # ----------------------------
    # Frame loop
    # ----------------------------

    def step(self):
        """One display refresh. Does nothing (and does not reschedule) once stopped."""
        if not self.state.running:
            return
        self.clock.request_frame(self.step)
        try:
            self._advance()
        except Exception:
            logger.exception("frame %d failed, ending session", self.state.frames)
            self.end()
            raise

    def _advance(self):
        state = self.state
        surface, style = self.surface, self.style

        surface.clear()
        state.player.render(surface, style, state.frames)

        live = [fx for fx in state.effects if fx.alive]
        for fx in live:
            fx.update()
            fx.render(surface, style)
        state.effects = live

        hits = []
        for enemy in tuple(state.enemies):
            enemy.update()
            enemy.render(surface, style)
            # a defeat earlier in this frame freezes further damage; enemies still
            # touching the lion stay in the live set, unexploded, until start()
            if state.running and self.resolver.resolve_player_hit(state, enemy):
                hits.append(enemy)
        state.remove_enemies(hits)

        self.spawner.maybe_spawn(state)

        if state.frames % DIFFICULTY_EVERY == 0:
            state.difficulty += DIFFICULTY_STEP
        state.frames += 1

    # ----------------------------
    # Host events
    # ----------------------------

    def handle_input(self, x: float, y: float) -> InputOutcome:
        outcome = self.resolver.handle_input(self.state, x, y)
        if outcome in (InputOutcome.ENEMY_KILLED, InputOutcome.ROAR):
            self.ui.show_score(self.state.score)
        if outcome is InputOutcome.ROAR:
            logger.debug("roar at frame %d, score now %d", self.state.frames, self.state.score)
        return outcome

    def resize(self, width: int, height: int):
        """Follow the viewport and keep the player centred"""
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport must be positive, got {width}x{height}")
        self.state.width = width
        self.state.height = height
        self.state.player.x = width / 2
        self.state.player.y = height / 2
        if hasattr(self.surface, "resize"):
            self.surface.resize(width, height)

    # ----------------------------
    # PlayerListener hooks
    # ----------------------------

    def player_damaged(self, player: Player):
        self.ui.show_health(player.health_percent)
        self.ui.flash_damage()

    def player_defeated(self, player: Player):
        self.end()

    def roar_changed(self, player: Player):
        self.ui.show_roar(int(100 * player.roar_power / player.max_roar))
        self.ui.show_roar_ready(player.roar_ready)
