"""The circuit and its scenery: asphalt, kerbs, rails, stands, trees, sky."""

from __future__ import annotations

import itertools

from pinkdrift.canvas import Canvas, Vec3
from pinkdrift.state import (
    INNER_BOTTOM,
    INNER_LEFT,
    INNER_RIGHT,
    INNER_TOP,
    OUTER_BOTTOM,
    OUTER_LEFT,
    OUTER_RIGHT,
    OUTER_TOP,
)

ASPHALT = "asphalt"
GRASS = "grass"

_CURB_SEGMENT = 1.2
_RAIL_POST_SPACING = 1.8
_CHECKER_SIZE = 0.8
_MARKER_Y = 0.068
_STAR_COUNT = 180
_STAR_SEED = 7919

_TREES = (
    (-28.0, 2.0, 3.5),
    (-30.0, -4.0, 4.2),
    (-32.0, 6.0, 3.0),
    (28.0, 2.0, 3.8),
    (30.0, -4.0, 3.2),
    (32.0, 6.0, 4.0),
    (-15.0, -22.0, 3.5),
    (15.0, -22.0, 3.7),
    (0.0, -23.0, 4.2),
    (-6.0, 20.0, 3.0),
    (6.0, 20.0, 3.5),
)


def _env_material(canvas: Canvas, night: bool, r: float, g: float, b: float, shininess: float = 20.0) -> None:
    f = 0.40 if night else 1.0
    canvas.set_material(r * f, g * f, b * f, shininess)


def _tex_quad(canvas, night, texture, y, x1, z1, x2, z2, s_scale, t_scale) -> None:
    if night:
        canvas.set_color(0.45, 0.47, 0.62)
    else:
        canvas.set_color(0.95, 0.92, 0.88)
    canvas.lighting(False)
    canvas.textured_quad(texture, y, x1, z1, x2, z2, s_scale, t_scale)
    canvas.lighting(True)


def _flat_quad(x1: float, z1: float, x2: float, z2: float, y: float) -> list[Vec3]:
    return [(x1, y, z1), (x2, y, z1), (x2, y, z2), (x1, y, z2)]


def _curb_material(canvas: Canvas, night: bool, index: int) -> None:
    f = 0.55 if night else 1.0
    if index % 2 == 0:
        canvas.set_material(0.95 * f, 0.08 * f, 0.08 * f, 15.0)
    else:
        canvas.set_material(0.96 * f, 0.96 * f, 0.96 * f, 15.0)


def _curb_centres(start: float, end: float):
    count = int((end - start) / _CURB_SEGMENT)
    return ((i, start + i * _CURB_SEGMENT + _CURB_SEGMENT * 0.5) for i in range(count))


def draw_curb_horizontal(canvas: Canvas, night: bool, x1: float, x2: float, z: float, depth: float) -> None:
    """Red and white rumble strip along x at a fixed z."""
    for index, cx in _curb_centres(x1, x2):
        _curb_material(canvas, night, index)
        with canvas.transform():
            canvas.translate(cx, 0.040, z)
            canvas.box(_CURB_SEGMENT, 0.08, depth)


def draw_curb_vertical(canvas: Canvas, night: bool, x: float, z1: float, z2: float, width: float) -> None:
    """Red and white rumble strip along z at a fixed x."""
    for index, cz in _curb_centres(z1, z2):
        _curb_material(canvas, night, index)
        with canvas.transform():
            canvas.translate(x, 0.040, cz)
            canvas.box(width, 0.08, _CURB_SEGMENT)


def _post_positions(start: float, end: float):
    position = start
    while position <= end:
        yield position
        position += _RAIL_POST_SPACING


def _rail_material(canvas: Canvas, night: bool) -> None:
    _env_material(canvas, night, 0.70, 0.72, 0.75, 55.0)


def draw_guard_rail_horizontal(canvas: Canvas, night: bool, x1: float, x2: float, z: float) -> None:
    """Two-beam guard rail along x with posts."""
    _rail_material(canvas, night)
    cx, length = (x1 + x2) * 0.5, x2 - x1
    for height in (0.55, 0.90):
        with canvas.transform():
            canvas.translate(cx, height, z)
            canvas.box(length, 0.08, 0.10)
    for x in _post_positions(x1, x2):
        with canvas.transform():
            canvas.translate(x, 0.50, z)
            canvas.box(0.08, 1.0, 0.08)


def draw_guard_rail_vertical(canvas: Canvas, night: bool, x: float, z1: float, z2: float) -> None:
    """Two-beam guard rail along z with posts."""
    _rail_material(canvas, night)
    cz, length = (z1 + z2) * 0.5, z2 - z1
    for height in (0.55, 0.90):
        with canvas.transform():
            canvas.translate(x, height, cz)
            canvas.box(0.10, 0.08, length)
    for z in _post_positions(z1, z2):
        with canvas.transform():
            canvas.translate(x, 0.50, z)
            canvas.box(0.08, 1.0, 0.08)


def draw_cone(canvas: Canvas, night: bool, x: float, z: float) -> None:
    """Orange traffic cone with a white base."""
    f = 0.65 if night else 1.0
    with canvas.transform():
        canvas.translate(x, 0.02, z)
        canvas.set_material(1.0 * f, 0.35 * f, 0.05 * f, 20.0)
        with canvas.transform():
            canvas.rotate(-90.0, 1, 0, 0)
            canvas.cone(0.27, 0.75, 20, 12)
        canvas.set_material(0.98 * f, 0.98 * f, 0.98 * f, 10.0)
        with canvas.transform():
            canvas.translate(0.0, 0.22, 0.0)
            canvas.box(0.44, 0.07, 0.44)


def draw_checkered_line(
    canvas: Canvas, night: bool, min_x: float, max_x: float, min_z: float, max_z: float
) -> None:
    """Chequered finish-line pattern covering the rectangle."""
    x_count = int((max_x - min_x) / _CHECKER_SIZE + 0.1)
    z_count = int((max_z - min_z) / _CHECKER_SIZE + 0.1)
    f = 0.55 if night else 1.0

    canvas.lighting(False)
    for i, j in itertools.product(range(x_count), range(z_count)):
        if (i + j) % 2 == 0:
            canvas.set_color(0.95 * f, 0.95 * f, 0.95 * f)
        else:
            canvas.set_color(0.05, 0.05, 0.05)
        x1 = min_x + i * _CHECKER_SIZE
        z1 = min_z + j * _CHECKER_SIZE
        canvas.quads(_flat_quad(x1, z1, x1 + _CHECKER_SIZE, z1 + _CHECKER_SIZE, _MARKER_Y))
    canvas.lighting(True)


def draw_checkpoint_markers(canvas: Canvas, night: bool) -> None:
    """Finish line and translucent neon-blue checkpoint pads."""
    canvas.lighting(False)
    draw_checkered_line(canvas, night, -1.0, 1.0, -14.5, -6.0)

    canvas.blend(True)
    canvas.set_color(0.1, 0.8, 1.0, 0.40)
    canvas.quads(_flat_quad(-1.0, 6.0, 1.0, 14.5, _MARKER_Y))
    canvas.quads(_flat_quad(9.5, -1.0, 22.5, 1.0, _MARKER_Y))
    canvas.quads(_flat_quad(-22.5, -1.0, -9.5, 1.0, _MARKER_Y))
    canvas.blend(False)
    canvas.lighting(True)


def draw_start_gantry(canvas: Canvas, night: bool) -> None:
    """Start/finish gantry with pillars, beam, sign board and lamps."""
    f = 0.5 if night else 1.0

    def block(x, y, z, sx, sy, sz):
        with canvas.transform():
            canvas.translate(x, y, z)
            canvas.box(sx, sy, sz)

    canvas.set_material(0.82 * f, 0.82 * f, 0.86 * f, 70.0)
    block(0.0, 2.6, -14.0, 0.45, 5.2, 0.45)
    block(0.0, 2.6, -6.5, 0.45, 5.2, 0.45)
    block(0.0, 5.35, -10.25, 0.5, 0.5, 7.8)

    canvas.set_material(0.06 * f, 0.06 * f, 0.08 * f, 30.0)
    block(0.0, 4.65, -10.25, 0.22, 0.90, 6.0)

    canvas.set_material(1.0 * f, 0.22 * f, 0.60 * f, 90.0)
    block(0.0, 5.65, -10.25, 0.55, 0.30, 7.8)

    lamp = 1.0 if night else 0.8
    canvas.set_material(1.0 * lamp, 0.88 * lamp, 0.15 * lamp, 120.0)
    for z in (-14.3, -6.2):
        with canvas.transform():
            canvas.translate(0.0, 5.35, z)
            canvas.sphere(0.22, 14, 14)


def draw_grandstand(canvas: Canvas, night: bool, x: float, z: float, rot_y: float) -> None:
    """Four-tier grandstand with back frame and roof."""
    f = 0.5 if night else 1.0
    with canvas.transform():
        canvas.translate(x, 0.0, z)
        canvas.rotate(rot_y, 0, 1, 0)
        for row in range(4):
            if row % 2 == 0:
                canvas.set_material(1.0 * f, 0.22 * f, 0.60 * f, 20.0)
            else:
                canvas.set_material(0.90 * f, 0.90 * f, 0.90 * f, 15.0)
            with canvas.transform():
                canvas.translate(0.0, 0.55 + row * 0.55, -row * 0.85)
                canvas.box(7.5, 0.45, 0.70)

        canvas.set_material(0.50 * f, 0.50 * f, 0.52 * f, 40.0)
        with canvas.transform():
            canvas.translate(0.0, 1.2, -2.6)
            canvas.box(7.5, 2.4, 0.18)

        canvas.set_material(0.80 * f, 0.80 * f, 0.82 * f, 50.0)
        with canvas.transform():
            canvas.translate(0.0, 2.55, -1.0)
            canvas.box(8.0, 0.18, 3.5)


def draw_tree(canvas: Canvas, night: bool, x: float, z: float, height: float) -> None:
    """Trunk with three stacked cone layers of foliage."""
    f = 0.40 if night else 1.0
    with canvas.transform():
        canvas.translate(x, 0.0, z)

        canvas.set_material(0.40 * f, 0.26 * f, 0.10 * f, 10.0)
        with canvas.transform():
            canvas.translate(0.0, height * 0.28, 0.0)
            canvas.box(0.25, height * 0.55, 0.25)

        for k in range(3):
            layer_y = height * 0.45 + k * (height * 0.18)
            shade = 0.95 - k * 0.22
            canvas.set_material(
                0.18 * f * shade, (0.52 + k * 0.06) * f * shade, 0.15 * f * shade, 12.0
            )
            with canvas.transform():
                canvas.translate(0.0, layer_y, 0.0)
                canvas.rotate(-90.0, 1, 0, 0)
                canvas.cone(height * 0.32 - k * 0.06, height * 0.38, 18, 10)


def _draw_edge_lines(canvas: Canvas, night: bool) -> None:
    canvas.lighting(False)
    level = 0.70 if night else 0.98
    canvas.set_color(level, level, level)
    for i in range(-8, 9):
        left, right = i * 2.6 - 0.85, i * 2.6 + 0.85
        canvas.quads(_flat_quad(left, 8.4, right, 8.65, 0.05))
        canvas.quads(_flat_quad(left, -8.65, right, -8.4, 0.05))
    canvas.lighting(True)


def draw_track(canvas: Canvas, night: bool) -> None:
    """The whole circuit with its surroundings."""
    tex_s = 0.042
    tex_g = 0.080

    _tex_quad(canvas, night, GRASS, -0.05, -37.0, -27.0, 37.0, 27.0, tex_g, tex_g)

    asphalt_pieces = (
        (OUTER_LEFT, INNER_TOP, OUTER_RIGHT, OUTER_TOP),
        (OUTER_LEFT, OUTER_BOTTOM, OUTER_RIGHT, INNER_BOTTOM),
        (INNER_RIGHT, INNER_BOTTOM, OUTER_RIGHT, INNER_TOP),
        (OUTER_LEFT, INNER_BOTTOM, INNER_LEFT, INNER_TOP),
        (INNER_RIGHT, INNER_TOP, OUTER_RIGHT, OUTER_TOP),
        (OUTER_LEFT, INNER_TOP, INNER_LEFT, OUTER_TOP),
        (INNER_RIGHT, OUTER_BOTTOM, OUTER_RIGHT, INNER_BOTTOM),
        (OUTER_LEFT, OUTER_BOTTOM, INNER_LEFT, INNER_BOTTOM),
    )
    for x1, z1, x2, z2 in asphalt_pieces:
        _tex_quad(canvas, night, ASPHALT, 0.001, x1, z1, x2, z2, tex_s, tex_s)

    _tex_quad(canvas, night, GRASS, 0.022, INNER_LEFT, INNER_BOTTOM, INNER_RIGHT, INNER_TOP, tex_g, tex_g)

    _draw_edge_lines(canvas, night)
    draw_checkpoint_markers(canvas, night)
    draw_checkered_line(canvas, night, -1.0, 1.0, -14.5, -6.0)

    draw_curb_horizontal(canvas, night, -24.0, 24.0, -16.0, 0.58)
    draw_curb_horizontal(canvas, night, -24.0, 24.0, 16.0, 0.58)
    draw_curb_vertical(canvas, night, -24.0, -16.0, 16.0, 0.58)
    draw_curb_vertical(canvas, night, 24.0, -16.0, 16.0, 0.58)
    draw_curb_horizontal(canvas, night, -8.8, 8.8, -4.8, 0.52)
    draw_curb_horizontal(canvas, night, -8.8, 8.8, 4.8, 0.52)
    draw_curb_vertical(canvas, night, -8.8, -4.8, 4.8, 0.52)
    draw_curb_vertical(canvas, night, 8.8, -4.8, 4.8, 0.52)

    draw_guard_rail_horizontal(canvas, night, -25.6, 25.6, -17.8)
    draw_guard_rail_horizontal(canvas, night, -25.6, 25.6, 17.8)
    draw_guard_rail_vertical(canvas, night, -25.8, -17.8, 17.8)
    draw_guard_rail_vertical(canvas, night, 25.8, -17.8, 17.8)
    draw_guard_rail_horizontal(canvas, night, -9.7, 9.7, -5.8)
    draw_guard_rail_horizontal(canvas, night, -9.7, 9.7, 5.8)
    draw_guard_rail_vertical(canvas, night, -9.8, -5.8, 5.8)
    draw_guard_rail_vertical(canvas, night, 9.8, -5.8, 5.8)

    for x, z in ((-7.2, 7.5), (-3.0, 7.6), (3.0, 7.6), (7.2, 7.5),
                 (-7.2, -7.5), (-3.0, -7.6), (3.0, -7.6), (7.2, -7.5)):
        draw_cone(canvas, night, x, z)

    draw_start_gantry(canvas, night)

    draw_grandstand(canvas, night, -20.0, -19.5, 0.0)
    draw_grandstand(canvas, night, 14.0, -19.5, 0.0)
    draw_grandstand(canvas, night, 27.0, 3.0, 90.0)
    draw_grandstand(canvas, night, -27.0, 3.0, -90.0)

    for x, z, height in _TREES:
        draw_tree(canvas, night, x, z, height)


def draw_mountains(canvas: Canvas, night: bool) -> None:
    """Background mountain ranges, snow-capped by day."""
    r_n = 0.15 if night else 0.17
    g_n = 0.25 if night else 0.36
    b_n = 0.20

    canvas.set_material(r_n, g_n, b_n, 5.0)
    canvas.triangles(
        [
            (-36, 0, -26), (-26, 11, -26), (-15, 0, -26),
            (-19, 0, -26.5), (-8, 8, -26.5), (3, 0, -26.5),
            (-3, 0, -26), (9, 10, -26), (20, 0, -26),
            (14, 0, -26.5), (24, 7, -26.5), (35, 0, -26.5),
        ],
        (0.0, 1.0, 0.3),
    )

    canvas.set_material(r_n * 1.15, g_n * 1.1, b_n * 1.2, 5.0)
    canvas.triangles(
        [
            (-32, 0, 26), (-22, 8, 26), (-12, 0, 26),
            (10, 0, 26), (20, 7, 26), (30, 0, 26),
        ],
        (0.0, 1.0, -0.3),
    )

    if not night:
        canvas.set_material(0.95, 0.96, 0.98, 20.0)
        canvas.triangles(
            [
                (-28.0, 9.5, -26), (-26.0, 11.0, -26), (-24.0, 9.5, -26),
                (7.0, 8.5, -26), (9.0, 10.0, -26), (11.0, 8.5, -26),
            ]
        )


def star_positions() -> list[Vec3]:
    """Fixed pseudo-random star positions, the same on every call."""
    seed = _STAR_SEED

    def step() -> int:
        nonlocal seed
        seed = (seed * 1664525 + 1013904223) & 0xFFFFFFFF
        return seed

    stars = []
    for _ in range(_STAR_COUNT):
        x = (step() % 2000) / 2000.0 * 80.0 - 40.0
        y = 8.0 + (step() % 1000) / 1000.0 * 22.0
        z = (step() % 2000) / 2000.0 * 80.0 - 40.0
        stars.append((x, y, z))
    return stars


def draw_night_sky(canvas: Canvas, night: bool) -> None:
    """Stars, drawn only at night."""
    if not night:
        return
    canvas.lighting(False)
    canvas.set_color(0.95, 0.95, 1.0)
    canvas.points(star_positions(), 2.2)
    canvas.lighting(True)