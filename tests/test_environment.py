import pytest

from pinkdrift.canvas import RecordingCanvas
from pinkdrift.environment import (
    draw_checkered_line,
    draw_checkpoint_markers,
    draw_cone,
    draw_curb_horizontal,
    draw_curb_vertical,
    draw_grandstand,
    draw_guard_rail_horizontal,
    draw_guard_rail_vertical,
    draw_mountains,
    draw_night_sky,
    draw_start_gantry,
    draw_track,
    draw_tree,
    star_positions,
)
from pinkdrift.track import is_on_track


def _boxes(canvas):
    return canvas.of_kind("box")


def test_curb_horizontal_alternates_red_and_white():
    canvas = RecordingCanvas()
    draw_curb_horizontal(canvas, False, -24.0, 24.0, -16.0, 0.58)
    boxes = _boxes(canvas)
    assert boxes[0].material.diffuse[:3] == pytest.approx((0.95, 0.08, 0.08))
    assert boxes[1].material.diffuse[:3] == pytest.approx((0.96, 0.96, 0.96))
    assert boxes[0].args == (1.2, 0.08, 0.58)
    assert boxes[0].origin == pytest.approx((-23.4, 0.04, -16.0))
    for box in boxes:
        x, _, _ = box.origin
        assert -24.0 < x < 24.0


def test_curb_segments_are_evenly_spaced():
    canvas = RecordingCanvas()
    draw_curb_vertical(canvas, False, 8.8, -4.8, 4.8, 0.52)
    zs = [box.origin[2] for box in _boxes(canvas)]
    assert len(zs) > 1
    for a, b in zip(zs, zs[1:]):
        assert b - a == pytest.approx(1.2)
    assert all(box.args == (0.52, 0.08, 1.2) for box in _boxes(canvas))


def test_curb_shorter_than_a_segment_draws_nothing():
    canvas = RecordingCanvas()
    draw_curb_horizontal(canvas, False, 0.0, 1.0, 0.0, 0.5)
    assert _boxes(canvas) == []


def test_curb_is_darker_at_night():
    day, night = RecordingCanvas(), RecordingCanvas()
    draw_curb_horizontal(day, False, -8.8, 8.8, 4.8, 0.52)
    draw_curb_horizontal(night, True, -8.8, 8.8, 4.8, 0.52)
    for d, n in zip(_boxes(day), _boxes(night)):
        assert n.material.diffuse[:3] == pytest.approx(tuple(c * 0.55 for c in d.material.diffuse[:3]))


def test_guard_rail_has_two_beams_and_spaced_posts():
    canvas = RecordingCanvas()
    draw_guard_rail_horizontal(canvas, False, -9.7, 9.7, -5.8)
    boxes = _boxes(canvas)
    beams, posts = boxes[:2], boxes[2:]
    assert [beam.origin[1] for beam in beams] == pytest.approx([0.55, 0.90])
    assert beams[0].args[0] == pytest.approx(19.4)
    assert posts[0].origin[0] == pytest.approx(-9.7)
    for a, b in zip(posts, posts[1:]):
        assert b.origin[0] - a.origin[0] == pytest.approx(1.8)
    assert posts[-1].origin[0] <= 9.7


def test_guard_rail_vertical_runs_along_z():
    canvas = RecordingCanvas()
    draw_guard_rail_vertical(canvas, True, 25.8, -17.8, 17.8)
    boxes = _boxes(canvas)
    assert boxes[0].args[2] == pytest.approx(35.6)
    assert all(box.origin[0] == pytest.approx(25.8) for box in boxes)
    assert boxes[0].material.diffuse[:3] == pytest.approx((0.70 * 0.40, 0.72 * 0.40, 0.75 * 0.40))


def test_cone_points_up_with_white_band():
    canvas = RecordingCanvas()
    draw_cone(canvas, False, -7.2, 7.5)
    cone = canvas.of_kind("cone")[0]
    assert cone.args == (0.27, 0.75, 20, 12)
    tip = cone.apply((0.0, 0.0, 0.75))
    assert tip == pytest.approx((-7.2, 0.77, 7.5), abs=1e-9)
    band = _boxes(canvas)[0]
    assert band.origin == pytest.approx((-7.2, 0.24, 7.5))


def test_checkered_line_alternates_colours_unlit():
    canvas = RecordingCanvas()
    draw_checkered_line(canvas, False, -1.0, 1.0, -14.5, -6.0)
    quads = canvas.of_kind("quads")
    assert quads
    assert quads[0].color[:3] == pytest.approx((0.95, 0.95, 0.95))
    assert quads[1].color[:3] == pytest.approx((0.05, 0.05, 0.05))
    assert all(not quad.lighting for quad in quads)
    for quad in quads:
        assert all(y == pytest.approx(0.068) for _, y, _ in quad.args[0])
        assert all(-1.0 <= x <= 1.0 for x, _, _ in quad.args[0])
    assert canvas.calls[-1].kind == "lighting" and canvas.calls[-1].args == (True,)


def test_checkpoint_pads_are_translucent_and_on_the_track():
    canvas = RecordingCanvas()
    draw_checkpoint_markers(canvas, False)
    pads = [quad for quad in canvas.of_kind("quads") if quad.blend]
    assert len(pads) == 3
    for pad in pads:
        assert pad.color == (0.1, 0.8, 1.0, 0.40)
        xs = [x for x, _, _ in pad.args[0]]
        zs = [z for _, _, z in pad.args[0]]
        assert is_on_track(sum(xs) / 4, sum(zs) / 4)


def test_start_gantry_lamps_brighter_at_night():
    day, night = RecordingCanvas(), RecordingCanvas()
    draw_start_gantry(day, False)
    draw_start_gantry(night, True)
    day_lamps, night_lamps = day.of_kind("sphere"), night.of_kind("sphere")
    assert len(day_lamps) == len(night_lamps) == 2
    assert night_lamps[0].material.diffuse[0] > day_lamps[0].material.diffuse[0]
    assert [lamp.origin[2] for lamp in day_lamps] == pytest.approx([-14.3, -6.2])


def test_grandstand_rotation_moves_rows():
    canvas = RecordingCanvas()
    draw_grandstand(canvas, False, 27.0, 3.0, 90.0)
    boxes = _boxes(canvas)
    assert len(boxes) == 6
    first_row = boxes[0].origin
    assert first_row == pytest.approx((27.0, 0.55, 3.0))
    second_row = boxes[1].origin
    assert second_row[2] == pytest.approx(3.0, abs=1e-9)
    assert second_row[0] != pytest.approx(27.0)


def test_tree_has_trunk_and_three_shrinking_layers():
    canvas = RecordingCanvas()
    draw_tree(canvas, False, 6.0, 20.0, 3.5)
    cones = canvas.of_kind("cone")
    assert len(cones) == 3
    radii = [cone.args[0] for cone in cones]
    assert radii == sorted(radii, reverse=True)
    heights = [cone.origin[1] for cone in cones]
    assert heights == sorted(heights)
    assert _boxes(canvas)[0].origin == pytest.approx((6.0, 3.5 * 0.28, 20.0))


def test_track_lays_grass_asphalt_and_island():
    canvas = RecordingCanvas()
    draw_track(canvas, False)
    surfaces = canvas.of_kind("textured_quad")
    textures = [call.args[0] for call in surfaces]
    assert textures[0] == "grass"
    assert textures[-1] == "grass"
    assert set(textures[1:-1]) == {"asphalt"}
    assert all(not call.lighting for call in surfaces)
    assert surfaces[0].color[:3] == (0.95, 0.92, 0.88)
    traffic_cones = [cone for cone in canvas.of_kind("cone") if cone.args[0] == 0.27]
    assert len(traffic_cones) == 8
    assert canvas.depth == 0


def test_track_ground_tint_at_night():
    canvas = RecordingCanvas()
    draw_track(canvas, True)
    assert canvas.of_kind("textured_quad")[0].color[:3] == (0.45, 0.47, 0.62)


def test_mountains_have_snow_only_by_day():
    day, night = RecordingCanvas(), RecordingCanvas()
    draw_mountains(day, False)
    draw_mountains(night, True)
    assert len(day.of_kind("triangles")) == len(night.of_kind("triangles")) + 1
    north = day.of_kind("triangles")[0]
    assert north.args[1] == (0.0, 1.0, 0.3)
    assert north.material.diffuse[:3] == pytest.approx((0.17, 0.36, 0.20))


def test_star_positions_are_fixed_and_in_the_sky():
    stars = star_positions()
    assert stars == star_positions()
    assert len(stars) == 180
    for x, y, z in stars:
        assert -40.0 <= x < 40.0
        assert 8.0 <= y < 30.0
        assert -40.0 <= z < 40.0
    assert len(set(stars)) > 170


def test_night_sky_only_at_night():
    day, night = RecordingCanvas(), RecordingCanvas()
    draw_night_sky(day, False)
    draw_night_sky(night, True)
    assert day.calls == []
    points = night.of_kind("points")[0]
    assert points.args == (tuple(star_positions()), 2.2)
    assert points.lighting is False