import math

import pytest

from pinkdrift.app import DriftWindow, camera_view, light_parameters, sky_color
from pinkdrift.hud import slider_value
from pinkdrift.state import World


class FakeWindow:
    width = 1000
    height = 550

    def __init__(self):
        self.handlers = []
        self.closed = False

    def push_handlers(self, handler):
        self.handlers.append(handler)

    def close(self):
        self.closed = True


def make_game():
    window = FakeWindow()
    return DriftWindow(World(), window=window), window


def test_fixed_cameras():
    world = World()
    assert camera_view(world) == ((0.0, 24.0, 26.0), (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    world.camera_mode = 2
    assert camera_view(world)[0] == (0.0, 35.0, 0.1)


def test_chase_camera_follows_car():
    world = World(camera_mode=1, car_x=5.0, car_z=3.0, car_angle=37.0)
    eye, target, _ = camera_view(world)
    assert target == (5.0, 0.9, 3.0)
    assert math.hypot(eye[0] - 5.0, eye[2] - 3.0) == pytest.approx(9.5)


def test_sky_and_light_differ_by_mode():
    assert sky_color(False) == (0.55, 0.74, 0.92, 1.0)
    assert sky_color(True) != sky_color(False)
    assert light_parameters(True)["position"] == (8.0, 22.0, -12.0, 1.0)
    assert set(light_parameters(False)) == {"position", "ambient", "diffuse", "specular"}


def test_window_registers_handlers():
    game, window = make_game()
    assert window.handlers == [game]


def test_tick_advances_smoke_and_car():
    game, _ = make_game()
    game.world.normal_keys.add("w")
    game.tick(0.016)
    assert game.world.smoke_time == pytest.approx(0.06)
    assert game.world.car_speed > 0.0


def test_key_press_cycles_camera_and_escape_closes():
    game, window = make_game()
    game.on_key_press(ord("c"), 0)
    assert game.world.camera_mode == 1
    game.on_key_release(ord("c"), 0)
    assert "c" not in game.world.normal_keys
    game.on_key_press(0xFF1B, 0)
    assert window.closed is True


def test_mouse_on_slider_sets_multiplier():
    game, _ = make_game()
    game.on_mouse_press(875, 505, 1, 0)
    assert game.world.dragging_slider is True
    assert game.world.speed_multiplier == pytest.approx(slider_value(875))
    game.on_mouse_drag(950, 505, 0, 0, 1, 0)
    assert game.world.speed_multiplier == pytest.approx(slider_value(950))
    game.on_mouse_release(950, 505, 1, 0)
    assert game.world.dragging_slider is False