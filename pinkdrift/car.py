"""Drawing of the drift car, its tyre marks and tyre smoke."""

from __future__ import annotations

import math

from pinkdrift.canvas import Canvas
from pinkdrift.effects import SKID_LIFETIME
from pinkdrift.state import World

_FRONT_AXLE = -1.15
_REAR_AXLE = 1.15
_WHEEL_Y = 0.28
_TRACK_HALF = 0.93


def draw_skid_marks(canvas: Canvas, world: World) -> None:
    """Dark translucent tyre marks that fade out over their lifetime."""
    canvas.lighting(False)
    canvas.blend(True)
    for mark in world.skid_marks:
        if not mark.active:
            continue
        alpha = max((mark.life_time / SKID_LIFETIME) * 0.85, 0.0)
        canvas.set_color(0.012, 0.012, 0.012, alpha)
        with canvas.transform():
            canvas.translate(mark.x, 0.075, mark.z)
            canvas.rotate(mark.angle, 0, 1, 0)
            canvas.box(0.18, 0.01, 0.56)
    canvas.blend(False)
    canvas.lighting(True)


def draw_smoke(canvas: Canvas, world: World) -> None:
    """Tyre smoke trailing the car: thick while drifting, light while moving."""
    drifting = world.is_drifting
    if not drifting and abs(world.car_speed) < 0.10:
        return

    canvas.lighting(False)
    canvas.blend(True)
    with canvas.transform():
        canvas.translate(world.car_x, 0.18, world.car_z)
        canvas.rotate(world.car_angle, 0, 1, 0)

        count = 22 if drifting else 7
        shade = 0.78 if world.night_mode else 0.90
        for i in range(count):
            t = i / (count - 1)
            sx = 1.3 + t * 4.2
            sy = 0.20 + math.sin(world.smoke_time + i * 0.6) * 0.12
            sz = math.sin(t * 5.0 + world.smoke_time) * 0.48
            if drifting:
                size, alpha = 0.20 + t * 0.62, 0.50 - t * 0.28
            else:
                size, alpha = 0.14 + t * 0.30, 0.25 - t * 0.14
            canvas.set_color(shade, shade, shade - 0.02, alpha)
            with canvas.transform():
                canvas.translate(sx, sy, sz)
                canvas.scale(1.7, 0.75, 0.95)
                canvas.sphere(size, 14, 14)
    canvas.blend(False)
    canvas.lighting(True)


def draw_wheel(canvas: Canvas, world: World, x: float, y: float, z: float, steerable: bool) -> None:
    """One wheel: tyre, silver rim, hub and eight spokes."""
    with canvas.transform():
        canvas.translate(x, y, z)
        if steerable:
            canvas.rotate(world.steer_visual_angle, 0, 1, 0)
        canvas.rotate(world.wheel_rot, 0, 0, 1)

        canvas.set_material(0.05, 0.05, 0.05, 22.0)
        canvas.torus(0.10, 0.31, 18, 32)

        canvas.set_material(0.80, 0.80, 0.82, 95.0)
        canvas.torus(0.036, 0.15, 14, 24)

        canvas.set_material(0.88, 0.88, 0.90, 110.0)
        canvas.sphere(0.072, 14, 14)

        canvas.lighting(False)
        level = 0.80 if world.night_mode else 0.96
        canvas.set_color(level, level, level)
        spokes = []
        for i in range(8):
            a = i * 2.0 * math.pi / 8.0
            spokes.append((0.0, 0.0, 0.0))
            spokes.append((math.cos(a) * 0.20, math.sin(a) * 0.20, 0.0))
        canvas.lines(spokes)
        canvas.lighting(True)


def _block(canvas: Canvas, x: float, y: float, z: float, sx: float, sy: float, sz: float,
           tilt: float = 0.0) -> None:
    with canvas.transform():
        canvas.translate(x, y, z)
        if tilt:
            canvas.rotate(tilt, 0, 0, 1)
        canvas.box(sx, sy, sz)


def draw_car_body(canvas: Canvas, world: World) -> None:
    """The pink body with cabin, glass, lights, exhausts and spoiler."""
    braking = world.key_held("s", "S")
    night = world.night_mode
    f = 0.72 if night else 1.0

    canvas.set_material(1.0 * f, 0.02 * f, 0.55 * f, 68.0)
    _block(canvas, 0.0, 0.38, 0.0, 3.95, 0.52, 1.60)

    canvas.set_material(0.94 * f, 0.01 * f, 0.46 * f, 55.0)
    _block(canvas, -2.06, 0.25, 0.0, 0.22, 0.33, 1.68)
    _block(canvas, 2.06, 0.27, 0.0, 0.22, 0.34, 1.64)

    canvas.set_material(0.06 * f, 0.06 * f, 0.07 * f, 45.0)
    for side in (0.92, -0.92):
        _block(canvas, 0.0, 0.15, side, 3.75, 0.16, 0.12)

    canvas.set_material(0.03 * f, 0.03 * f, 0.03 * f, 72.0)
    _block(canvas, -1.02, 0.66, 0.0, 1.38, 0.08, 1.28)

    canvas.set_material(0.0, 0.0, 0.0, 25.0)
    for side in (-0.28, 0.28):
        _block(canvas, -1.05, 0.72, side, 0.46, 0.03, 0.12)

    canvas.set_material(1.0 * f, 0.02 * f, 0.55 * f, 68.0)
    _block(canvas, 1.20, 0.64, 0.0, 0.92, 0.12, 1.40)
    _block(canvas, 0.38, 0.90, 0.0, 1.58, 0.38, 1.28)
    _block(canvas, 0.34, 1.17, 0.0, 1.10, 0.12, 1.12)

    canvas.set_material(0.42 * f, 0.83 * f, 1.0 * f, 98.0)
    _block(canvas, -0.62, 0.94, 0.0, 0.12, 0.65, 1.26, tilt=-39.0)
    _block(canvas, 0.96, 0.98, 0.0, 0.12, 0.52, 1.15, tilt=30.0)
    for s in (-1, 1):
        _block(canvas, 0.18, 1.00, s * 0.67, 1.12, 0.27, 0.045)

    canvas.set_material(0.07 * f, 0.07 * f, 0.08 * f, 40.0)
    for s in (-1, 1):
        _block(canvas, -0.28, 1.00, s * 0.69, 0.05, 0.36, 0.05)
        _block(canvas, 0.34, 1.00, s * 0.69, 0.05, 0.36, 0.05)

    canvas.set_material(0.03 * f, 0.03 * f, 0.03 * f, 20.0)
    _block(canvas, -2.16, 0.35, 0.0, 0.05, 0.22, 0.74)

    if night:
        canvas.set_material(1.0, 1.0, 0.62, 130.0)
    else:
        canvas.set_material(0.96 * f, 0.88 * f, 0.42 * f, 98.0)
    for side in (-0.54, 0.54):
        _block(canvas, -2.12, 0.40, side, 0.07, 0.18, 0.30)

    if braking:
        canvas.set_material(1.0, 0.02, 0.02, 125.0)
    else:
        canvas.set_material(0.72 * f, 0.02 * f, 0.02 * f, 80.0)
    for side in (-0.50, 0.50):
        _block(canvas, 2.12, 0.38, side, 0.07, 0.18, 0.30)

    canvas.set_material(0.03 * f, 0.03 * f, 0.03 * f, 40.0)
    _block(canvas, 2.18, 0.16, 0.0, 0.10, 0.18, 1.08)

    canvas.set_material(0.76 * f, 0.76 * f, 0.78 * f, 105.0)
    for side in (-0.34, 0.34):
        with canvas.transform():
            canvas.translate(2.27, 0.18, side)
            canvas.rotate(90.0, 0, 1, 0)
            canvas.torus(0.025, 0.08, 14, 24)

    canvas.set_material(1.0 * f, 0.02 * f, 0.55 * f, 72.0)
    _block(canvas, 1.74, 1.08, 0.0, 0.16, 0.11, 1.82)

    canvas.set_material(0.05 * f, 0.05 * f, 0.06 * f, 45.0)
    for side in (-0.60, 0.60):
        _block(canvas, 1.65, 0.87, side, 0.07, 0.42, 0.07)

    canvas.set_material(1.0 * f, 1.0 * f, 1.0 * f, 52.0)
    for side in (0.82, -0.82):
        _block(canvas, 0.05, 0.67, side, 2.75, 0.07, 0.035)


def draw_car(canvas: Canvas, world: World) -> None:
    """The car body and its four wheels at the car's position and heading."""
    with canvas.transform():
        canvas.translate(world.car_x, 0.12, world.car_z)
        canvas.rotate(world.car_angle, 0, 1, 0)
        draw_car_body(canvas, world)
        draw_wheel(canvas, world, _FRONT_AXLE, _WHEEL_Y, _TRACK_HALF, True)
        draw_wheel(canvas, world, _FRONT_AXLE, _WHEEL_Y, -_TRACK_HALF, True)
        draw_wheel(canvas, world, _REAR_AXLE, _WHEEL_Y, _TRACK_HALF, False)
        draw_wheel(canvas, world, _REAR_AXLE, _WHEEL_Y, -_TRACK_HALF, False)