"""
UI display sink: the write-only side of the HUD
"""

from dataclasses import dataclass
from typing import Optional


class DisplaySink:
    """Receives HUD updates from the session. Every method is a no-op here."""

    def show_score(self, score: int):
        pass

    def show_health(self, percent: int):
        pass

    def show_roar(self, percent: int):
        pass

    def show_roar_ready(self, visible: bool):
        pass

    def flash_damage(self):
        pass

    def show_game_over(self, final_score: int):
        pass

    def hide_overlays(self):
        pass


@dataclass
class HudState(DisplaySink):
    """Keeps the latest value of every HUD element for a window to draw"""
    score: int = 0
    health: int = 100
    roar: int = 0
    roar_ready: bool = False
    flashing: bool = False
    flashes: int = 0
    overlay: Optional[str] = "start"   # "start", "game_over" or None
    final_score_text: str = ""

    def show_score(self, score: int):
        self.score = score

    def show_health(self, percent: int):
        self.health = max(0, percent)

    def show_roar(self, percent: int):
        self.roar = percent

    def show_roar_ready(self, visible: bool):
        self.roar_ready = visible

    def flash_damage(self):
        self.flashing = True
        self.flashes += 1

    def clear_flash(self, *_):
        self.flashing = False

    def show_game_over(self, final_score: int):
        self.overlay = "game_over"
        self.final_score_text = f"Score: {final_score}"

    def hide_overlays(self):
        self.overlay = None
