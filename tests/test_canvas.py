import math

import pytest

from pinkdrift.canvas import (
    Canvas,
    Material,
    RecordingCanvas,
    box_mesh,
    cone_mesh,
    sphere_mesh,
    torus_mesh,
)


def _sub(a, b):
    return tuple(x - y for x, y in zip(a, b))


def _cross(a, b):
    return (a[1] * b[2] - a[2] * b[1], a[2] * b[0] - a[0] * b[2], a[0] * b[1] - a[1] * b[0])


def _dot(a, b):
    return sum(x * y for x, y in zip(a, b))


def _vertices(mesh):
    return [vertex for triangle in mesh for vertex in triangle]


def test_box_mesh_has_twelve_triangles_on_its_surface():
    mesh = box_mesh(2.0, 4.0, 6.0)
    assert len(mesh) == 12
    for (x, y, z), _ in _vertices(mesh):
        assert abs(x) == pytest.approx(1.0)
        assert abs(y) == pytest.approx(2.0)
        assert abs(z) == pytest.approx(3.0)


def test_box_mesh_triangles_face_their_normals():
    for a, b, c in box_mesh(1.0, 1.0, 1.0):
        face = _cross(_sub(b[0], a[0]), _sub(c[0], a[0]))
        assert _dot(face, a[1]) > 0.0


def test_sphere_mesh_points_lie_on_the_sphere():
    mesh = sphere_mesh(0.5, 8, 6)
    for position, normal in _vertices(mesh):
        assert math.dist(position, (0.0, 0.0, 0.0)) == pytest.approx(0.5)
        assert math.hypot(*normal) == pytest.approx(1.0)


def test_torus_mesh_points_lie_on_the_tube():
    inner, outer = 0.1, 0.31
    for (x, y, z), _ in _vertices(torus_mesh(inner, outer, 6, 10)):
        ring = math.hypot(x, y)
        assert math.hypot(ring - outer, z) == pytest.approx(inner)


def test_cone_mesh_stays_inside_the_cone():
    base, height = 0.27, 0.75
    for (x, y, z), normal in _vertices(cone_mesh(base, height, 12, 4)):
        assert -1e-9 <= z <= height + 1e-9
        assert math.hypot(x, y) <= base * (1.0 - z / height) + 1e-9
        assert math.hypot(*normal) == pytest.approx(1.0)


def test_material_from_color_uses_dim_ambient_and_grey_specular():
    material = Material.from_color(1.0, 0.5, 0.2, 68.0)
    assert material.diffuse == (1.0, 0.5, 0.2, 1.0)
    assert material.ambient == pytest.approx((0.30, 0.15, 0.06, 1.0))
    assert material.specular == (0.35, 0.35, 0.35, 1.0)
    assert material.shininess == 68.0


def test_set_material_default_shininess():
    canvas = RecordingCanvas()
    canvas.set_material(0.1, 0.2, 0.3)
    canvas.box(1.0, 1.0, 1.0)
    assert canvas.of_kind("box")[0].material.shininess == 30.0


def test_canvas_base_is_abstract():
    with pytest.raises(TypeError):
        Canvas()


def test_translate_moves_origin_and_transform_restores_it():
    canvas = RecordingCanvas()
    canvas.translate(1.0, 2.0, 3.0)
    with canvas.transform():
        canvas.translate(4.0, 0.0, 0.0)
        canvas.box(1.0, 1.0, 1.0)
        assert canvas.depth == 1
    canvas.box(1.0, 1.0, 1.0)
    first, second = canvas.of_kind("box")
    assert first.origin == pytest.approx((5.0, 2.0, 3.0))
    assert second.origin == pytest.approx((1.0, 2.0, 3.0))
    assert canvas.depth == 0


def test_transform_restores_after_exception():
    canvas = RecordingCanvas()
    with pytest.raises(KeyError):
        with canvas.transform():
            canvas.translate(9.0, 9.0, 9.0)
            raise KeyError("boom")
    canvas.box(1.0, 1.0, 1.0)
    assert canvas.of_kind("box")[0].origin == pytest.approx((0.0, 0.0, 0.0))


def test_rotation_about_y_turns_x_into_minus_z():
    canvas = RecordingCanvas()
    canvas.rotate(90.0, 0, 1, 0)
    canvas.translate(1.0, 0.0, 0.0)
    canvas.sphere(0.2, 8, 8)
    assert canvas.of_kind("sphere")[0].origin == pytest.approx((0.0, 0.0, -1.0), abs=1e-9)


def test_scale_applies_to_points():
    canvas = RecordingCanvas()
    canvas.scale(2.0, 3.0, 4.0)
    canvas.box(1.0, 1.0, 1.0)
    assert canvas.of_kind("box")[0].apply((1.0, 1.0, 1.0)) == pytest.approx((2.0, 3.0, 4.0))


def test_state_is_recorded_with_each_call():
    canvas = RecordingCanvas()
    canvas.lighting(False)
    canvas.blend(True)
    canvas.set_color(0.1, 0.8, 1.0, 0.40)
    canvas.quads([(0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1)])
    call = canvas.of_kind("quads")[0]
    assert call.lighting is False
    assert call.blend is True
    assert call.color == (0.1, 0.8, 1.0, 0.40)


@pytest.mark.parametrize(
    "method, count, valid",
    [("quads", 3, 4), ("triangles", 4, 3), ("lines", 3, 2)],
)
def test_primitives_reject_incomplete_vertex_lists(method, count, valid):
    canvas = RecordingCanvas()
    with pytest.raises(ValueError):
        getattr(canvas, method)([(0.0, 0.0, 0.0)] * count)
    assert len(canvas.of_kind(method)) == 0
    getattr(canvas, method)([(0.0, 0.0, 0.0)] * valid)
    assert len(canvas.of_kind(method)) == 1


def test_pop_without_push_is_an_error():
    canvas = RecordingCanvas()
    with pytest.raises(RuntimeError):
        canvas._pop()