"""
RoarEnv - the roar arena as a Gymnasium environment
---------------------------------------------------
- One env step = (optional) one tap + exactly one simulation frame
- MultiDiscrete action space: [tap(2), column(cols), row(rows)]
  a tap lands in the centre of the chosen grid cell; tapping the lion
  releases the roar once the meter is full
- Vector observation: player state + top-K nearest enemies
- Rendering: both modes replay the recorded frame through Arcade; "rgb_array"
  draws into a hidden window and reads the pixels back

Quick test:
    python -m game.roar.roar_env
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .clock import FrameClock
from .collisions import InputOutcome
from .config import DAMAGE_PER_HIT, DEFAULT_WIDTH, DEFAULT_HEIGHT, KILL_SCORE
from .render import RecordingSurface
from .session import GameSession, SessionPhase
from .ui import HudState
from .utils import clamp, distance, seed_everything

DEFAULT_REWARDS = {
    "R_KILL": 1.0,      # per tapped enemy
    "R_ROAR": 0.5,      # per enemy caught in a roar
    "R_DAMAGE": 1.0,    # per hit taken
    "R_ALIVE": 0.001,   # per frame survived
    "R_DEATH": 5.0,
}


class RoarEnv(gym.Env):
    """Tap-to-survive arena driven frame by frame"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 6,
        grid_cols: int = 16,
        grid_rows: int = 12,
        max_enemy_speed: float = 4.0,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.grid_cols = grid_cols
        self.grid_rows = grid_rows
        self.max_enemy_speed = max_enemy_speed
        self.rewards = dict(DEFAULT_REWARDS, **(reward_config or {}))

        # Action space:
        # tap: 0 wait, 1 tap
        # column/row: which grid cell to tap
        self.action_space = spaces.MultiDiscrete([2, grid_cols, grid_rows])

        # Observation space (vector)
        # Player: health(1) roar meter(1) roar ready(1) difficulty(1)
        # Each enemy: rel pos(2) vel(2)
        obs_dim = 4 + self.k_enemies * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._rng = random.Random()
        self._clock = FrameClock()
        self.hud = HudState()
        self._surface = RecordingSurface()
        self.session = GameSession(
            width, height, surface=self._surface, ui=self.hud, clock=self._clock, rng=self._rng
        )

        self._window = None
        self._step_count = 0
        self._totals: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is not None:
            self._rng.seed(seed)

        # a running session must be stopped before it can be reset
        self.session.end()
        self.session.start()

        self._step_count = 0
        self._totals = {"kills": 0, "roar_kills": 0, "damage_taken": 0, "roars": 0}

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self.action_space.contains(np.asarray(action, dtype=np.int64)), f"invalid action {action}"
        tap, col, row = int(action[0]), int(action[1]), int(action[2])

        state = self.session.state
        health_before = state.player.health
        kills = 0
        roar_kills = 0

        if tap:
            x, y = self.cell_center(col, row)
            score_before = state.score
            outcome = self.session.handle_input(x, y)
            if outcome is InputOutcome.ENEMY_KILLED:
                kills = 1
            elif outcome is InputOutcome.ROAR:
                roar_kills = (state.score - score_before) // KILL_SCORE
                self._totals["roars"] += 1

        # Advance exactly one frame
        self._clock.tick()

        hits = (health_before - state.player.health) // DAMAGE_PER_HIT
        self._totals["kills"] += kills
        self._totals["roar_kills"] += roar_kills
        self._totals["damage_taken"] += hits

        terminated = self.session.phase is SessionPhase.ENDED
        self._step_count += 1
        truncated = self._step_count >= self.max_steps and not terminated

        reward = self._compute_reward(kills, roar_kills, hits, terminated)
        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def cell_center(self, col: int, row: int):
        return ((col + 0.5) * self.width / self.grid_cols,
                (row + 0.5) * self.height / self.grid_rows)

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        state = self.session.state
        player = state.player

        obs_parts = [
            clamp(player.health / 100.0, 0.0, 1.0) * 2 - 1,
            player.roar_power / player.max_roar * 2 - 1,
            1.0 if player.roar_ready else -1.0,
            clamp(state.difficulty - 1.0, 0.0, 2.0) - 1.0,
        ]

        enemies_sorted = sorted(
            state.enemies,
            key=lambda e: distance(e.x, e.y, player.x, player.y)
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - player.x) / self.width, -1, 1),
                    clamp((e.y - player.y) / self.height, -1, 1),
                    clamp(e.vx / self.max_enemy_speed, -1, 1),
                    clamp(e.vy / self.max_enemy_speed, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, kills: int, roar_kills: int, hits: int, dead: bool) -> float:
        r = self.rewards
        reward = r["R_KILL"] * kills + r["R_ROAR"] * roar_kills
        reward -= r["R_DAMAGE"] * hits
        if dead:
            reward -= r["R_DEATH"]
        else:
            reward += r["R_ALIVE"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        state = self.session.state
        return {
            "score": state.score,
            "health": state.player.health_percent,
            "roar_power": state.player.roar_power,
            "num_enemies": len(state.enemies),
            "frame": state.frames,
            "difficulty": state.difficulty,
            "step": self._step_count,
            **self._totals,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            self._window = self._make_viewer(visible=self.render_mode == "human")

        if self.render_mode == "rgb_array":
            return self._window.capture()

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def _make_viewer(self, visible: bool):
        # arcade is only needed once something is rendered
        from .app import EnvViewer
        return EnvViewer(self._surface, self.hud, self.width, self.height, visible=visible)

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Run a random episode for testing"""
    env = RoarEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  score: {info['score']}  frames: {info['frame']}")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
