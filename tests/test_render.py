import pytest

from game.roar.config import ENEMY_COLOR, LION_COLOR, AURA_COLOR
from game.roar.entities import Enemy, Player
from game.roar.render import RecordingSurface, SpriteStyle, VectorStyle


def test_vector_player_has_mane_and_aura_when_ready():
    surface = RecordingSurface()
    style = VectorStyle()
    player = Player(x=100, y=100)

    style.draw_player(surface, player)
    (points, _), = surface.calls("polygon")
    assert len(points) == 24
    assert surface.calls("ring") == []

    player.roar_power = 100
    surface.clear()
    style.draw_player(surface, player, frame=0)
    (ring,) = surface.calls("ring")
    assert ring[2] == player.radius + 25
    assert ring[3] == AURA_COLOR
    assert ring[5] == pytest.approx(0.5)


def test_sprite_style_uses_zone_image_and_falls_back():
    surface = RecordingSurface()
    style = SpriteStyle({"player": "lion-img", "top-left": "tl-img"})

    style.draw_enemy(surface, Enemy(x=10, y=10, vx=0, vy=0, zone="top-left"))
    style.draw_enemy(surface, Enemy(x=50, y=10, vx=0, vy=0, zone="bottom-right"))
    style.draw_player(surface, Player(x=400, y=300))

    images = surface.calls("image")
    assert images[0] == ("tl-img", 10, 10, 70.0)
    assert images[1] == ("lion-img", 400, 300, 160.0)
    # missing bottom-right sprite: body plus two eyes
    circles = surface.calls("circle")
    assert circles[0][3] == ENEMY_COLOR
    assert len(circles) == 3


def test_sprite_style_without_any_images_draws_shapes():
    surface = RecordingSurface()
    SpriteStyle().draw_player(surface, Player(x=1, y=2))
    assert surface.calls("image") == []
    assert surface.calls("circle")[0][3] == LION_COLOR


def test_recording_keeps_only_last_frame_and_replays():
    surface = RecordingSurface()
    surface.clear()
    surface.draw_circle(1, 1, 1, (1, 1, 1))
    surface.clear()
    surface.draw_ring(2, 2, 2, (2, 2, 2))
    assert [c for c, _ in surface.commands] == ["clear", "ring"]
    assert surface.clears == 2

    copy = RecordingSurface()
    surface.replay(copy)
    assert copy.commands == surface.commands
