"""
Arcade host for the roar arena: window, pointer input, HUD and sprites.

Run:
    python -m game.roar --style sprite --assets assets
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Dict, Optional

import arcade
import numpy as np

from .clock import FrameClock
from .config import (
    BACKGROUND_COLOR, DAMAGE_FLASH_SECONDS, DEFAULT_HEIGHT, DEFAULT_WIDTH, PLAYER_HIT_COLOR,
)
from .render import RecordingSurface, STYLES, SpriteStyle, Surface
from .session import GameSession, SessionPhase
from .spawner import ZONE_KEYS
from .ui import HudState
from .utils import clamp

logger = logging.getLogger(__name__)

HUD_C = (220, 220, 220)
HEALTH_C = (80, 200, 120)
ROAR_C = (241, 196, 15)
BAR_BG = (60, 60, 60)


def _rgba(color: tuple, alpha: float = 1.0) -> tuple:
    return (color[0], color[1], color[2], int(255 * clamp(alpha, 0.0, 1.0)))


class ArcadeSurface(Surface):
    """Draws on an Arcade window. Arcade's y axis points up, so y is flipped."""

    def __init__(self, window: arcade.Window):
        self.window = window

    def _y(self, y: float) -> float:
        return self.window.height - y

    def clear(self):
        self.window.clear()

    def draw_circle(self, x, y, radius, color, alpha=1.0):
        arcade.draw_circle_filled(x, self._y(y), radius, _rgba(color, alpha))

    def draw_ring(self, x, y, radius, color, width=1.0, alpha=1.0):
        arcade.draw_circle_outline(x, self._y(y), radius, _rgba(color, alpha), width)

    def draw_polygon(self, points, color):
        arcade.draw_polygon_filled([(px, self._y(py)) for px, py in points], color)

    def draw_image(self, image, x, y, size):
        arcade.draw_texture_rect(image, arcade.XYWH(x, self._y(y), size, size))


def load_sprite_images(asset_dir: str) -> Dict[str, Any]:
    """
    Load lion.png and enemies/<zone>.png from `asset_dir`.
    Missing files are skipped so the style falls back to shapes.
    """
    wanted = {"player": os.path.join(asset_dir, "lion.png")}
    for key in ZONE_KEYS:
        wanted[key] = os.path.join(asset_dir, "enemies", f"{key}.png")

    images = {}
    for key, path in wanted.items():
        try:
            images[key] = arcade.load_texture(path)
        except FileNotFoundError:
            logger.warning("sprite %s not found, drawing shapes instead", path)
    return images


def draw_hud(hud: HudState, width: int, height: int):
    """Score, health and roar bars, plus the start / game over overlays"""
    arcade.draw_text(f"Score: {hud.score}", 12, height - 30, HUD_C, 16)

    bar_w, bar_h = 200, 12
    x0 = 12
    for i, (value, color) in enumerate(((hud.health, HEALTH_C), (hud.roar, ROAR_C))):
        y0 = height - 56 - i * 20
        arcade.draw_lrbt_rectangle_filled(x0, x0 + bar_w, y0, y0 + bar_h, BAR_BG)
        fill = bar_w * clamp(value, 0, 100) / 100
        if fill > 0:
            arcade.draw_lrbt_rectangle_filled(x0, x0 + fill, y0, y0 + bar_h, color)

    if hud.roar_ready:
        arcade.draw_text("ROAR READY - tap the lion!", width / 2, height - 40, ROAR_C, 20,
                         anchor_x="center")

    if hud.overlay == "start":
        arcade.draw_text("ROAR", width / 2, height / 2 + 20, ROAR_C, 48, anchor_x="center")
        arcade.draw_text("Click or press Enter to start", width / 2, height / 2 - 30, HUD_C, 18,
                         anchor_x="center")
    elif hud.overlay == "game_over":
        arcade.draw_text("GAME OVER", width / 2, height / 2 + 20, PLAYER_HIT_COLOR, 48,
                         anchor_x="center")
        arcade.draw_text(f"{hud.final_score_text} - click to restart", width / 2, height / 2 - 30,
                         HUD_C, 18, anchor_x="center")


class RoarWindow(arcade.Window):
    """Playable window. Each display refresh ticks the session's frame clock."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        style=None,
        seed: Optional[int] = None,
        title: str = "Roar",
    ):
        super().__init__(width, height, title, resizable=True)
        self.background_color = BACKGROUND_COLOR

        self.hud = HudState()
        self.clock = FrameClock()
        self.surface = ArcadeSurface(self)
        self.session = GameSession(
            width, height, surface=self.surface, style=style, ui=self.hud, clock=self.clock, seed=seed
        )
        self._flashes_seen = 0

    def on_draw(self):
        self._sync_flash()
        if not self.clock.tick():
            self.clear()
        draw_hud(self.hud, self.width, self.height)

    def _sync_flash(self):
        if self.hud.flashes == self._flashes_seen:
            return
        self._flashes_seen = self.hud.flashes
        self.background_color = PLAYER_HIT_COLOR
        arcade.schedule_once(self._end_flash, DAMAGE_FLASH_SECONDS)

    def _end_flash(self, delta_time: float):
        self.background_color = BACKGROUND_COLOR
        self.hud.clear_flash()

    def start_or_restart(self):
        if self.session.phase is SessionPhase.ENDED:
            self.session.restart()
        else:
            self.session.start()

    def on_mouse_press(self, x, y, button, modifiers):
        if self.session.running:
            self.session.handle_input(x, self.height - y)
        else:
            self.start_or_restart()

    def on_key_press(self, symbol, modifiers):
        if symbol in (arcade.key.ENTER, arcade.key.RETURN, arcade.key.SPACE) and not self.session.running:
            self.start_or_restart()
        elif symbol == arcade.key.ESCAPE:
            self.close()

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        session = getattr(self, "session", None)
        if session is not None and width > 0 and height > 0:
            session.resize(width, height)


class EnvViewer(arcade.Window):
    """
    Shows a headless session's last recorded frame (used by RoarEnv).
    With visible=False it serves as the offscreen target for rgb_array frames.
    """

    def __init__(self, recording: RecordingSurface, hud: HudState, width: int, height: int,
                 visible: bool = True):
        super().__init__(width, height, "RoarEnv - Arcade", visible=visible)
        self.background_color = BACKGROUND_COLOR
        self.recording = recording
        self.hud = hud
        self.surface = ArcadeSurface(self)

    def on_draw(self):
        self.clear()
        self.recording.replay(self.surface)
        draw_hud(self.hud, self.width, self.height)

    def capture(self) -> np.ndarray:
        """Draw the current frame and read it back as an (H, W, 3) uint8 array"""
        self.switch_to()
        self.on_draw()
        image = arcade.get_image(0, 0, self.width, self.height)
        return np.asarray(image.convert("RGB"), dtype=np.uint8)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Roar: keep the shadows off the lion")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Window width (default: %(default)s)")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Window height (default: %(default)s)")
    parser.add_argument(
        "--style",
        type=str,
        default="vector",
        choices=sorted(STYLES),
        help="How entities are drawn (default: vector)",
    )
    parser.add_argument("--assets", type=str, default="assets", help="Sprite folder for --style sprite")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for spawns")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level (default: INFO)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    window = RoarWindow(args.width, args.height, seed=args.seed)
    if args.style == "sprite":
        window.session.style = SpriteStyle(load_sprite_images(args.assets))
    arcade.run()


if __name__ == "__main__":
    main()
