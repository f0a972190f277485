import pytest

from pinkdrift.state import (
    INNER_LEFT,
    INNER_RIGHT,
    INNER_TOP,
    OUTER_BOTTOM,
    OUTER_LEFT,
    OUTER_RIGHT,
    OUTER_TOP,
    START_X,
    START_Z,
    TRACK_MARGIN,
)
from pinkdrift.track import Collision, clamp_to_track, is_inside_rect, is_on_track


def test_is_inside_rect_is_strict():
    assert is_inside_rect(0.5, 0.5, 0.0, 1.0, 0.0, 1.0)
    assert not is_inside_rect(0.0, 0.5, 0.0, 1.0, 0.0, 1.0)
    assert not is_inside_rect(0.5, 1.0, 0.0, 1.0, 0.0, 1.0)


def test_start_position_is_on_track():
    assert is_on_track(START_X, START_Z)


def test_island_and_outside_are_off_track():
    assert not is_on_track(0.0, 0.0)
    assert not is_on_track(OUTER_RIGHT + 5.0, 0.0)
    assert not is_on_track(0.0, OUTER_TOP)


def test_clamp_leaves_track_position_alone():
    result = clamp_to_track(START_X, START_Z)
    assert result == Collision(START_X, START_Z, 0.0, 0.0, False)


def test_clamp_outer_left_wall():
    result = clamp_to_track(OUTER_LEFT - 6.0, -12.0)
    assert result.hit
    assert result.x == pytest.approx(OUTER_LEFT + TRACK_MARGIN)
    assert result.z == -12.0
    assert (result.nx, result.nz) == (1.0, 0.0)


def test_clamp_outer_corner_combines_normals():
    result = clamp_to_track(OUTER_RIGHT + 1.0, OUTER_BOTTOM - 1.0)
    assert result.hit
    assert result.x == pytest.approx(OUTER_RIGHT - TRACK_MARGIN)
    assert result.z == pytest.approx(OUTER_BOTTOM + TRACK_MARGIN)
    assert (result.nx, result.nz) == (-1.0, 1.0)


def test_clamp_pushes_out_of_island_left_side():
    edge = INNER_LEFT - TRACK_MARGIN
    result = clamp_to_track(edge + 0.5, 0.0)
    assert result.hit
    assert result.x == pytest.approx(edge)
    assert (result.nx, result.nz) == (-1.0, 0.0)


def test_clamp_pushes_out_of_island_right_and_top():
    right = clamp_to_track(INNER_RIGHT + TRACK_MARGIN - 0.3, 1.0)
    assert right.x == pytest.approx(INNER_RIGHT + TRACK_MARGIN)
    assert right.nx == 1.0

    top = clamp_to_track(0.0, INNER_TOP + TRACK_MARGIN - 0.2)
    assert top.z == pytest.approx(INNER_TOP + TRACK_MARGIN)
    assert top.nz == 1.0


@pytest.mark.parametrize(
    "x, z",
    [(-40.0, 0.0), (40.0, 30.0), (0.0, 0.0), (-3.0, 2.0), (12.0, -20.0)],
)
def test_clamped_position_is_not_in_island_or_outside(x, z):
    result = clamp_to_track(x, z)
    assert result.hit
    assert OUTER_LEFT + TRACK_MARGIN <= result.x <= OUTER_RIGHT - TRACK_MARGIN
    assert OUTER_BOTTOM + TRACK_MARGIN <= result.z <= OUTER_TOP - TRACK_MARGIN
    assert not is_inside_rect(
        result.x, result.z,
        INNER_LEFT - TRACK_MARGIN, INNER_RIGHT + TRACK_MARGIN,
        -INNER_TOP - TRACK_MARGIN, INNER_TOP + TRACK_MARGIN,
    )