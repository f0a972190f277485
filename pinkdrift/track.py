"""Geometry of the rectangular circuit and wall collision."""

from __future__ import annotations

from dataclasses import dataclass

from pinkdrift.state import (
    INNER_BOTTOM,
    INNER_LEFT,
    INNER_RIGHT,
    INNER_TOP,
    OUTER_BOTTOM,
    OUTER_LEFT,
    OUTER_RIGHT,
    OUTER_TOP,
    TRACK_MARGIN,
)


@dataclass(frozen=True)
class Collision:
    """A position pushed back onto the track, with the wall normal that was hit."""

    x: float
    z: float
    nx: float = 0.0
    nz: float = 0.0
    hit: bool = False


def is_inside_rect(x: float, z: float, left: float, right: float, bottom: float, top: float) -> bool:
    """Return True if (x, z) lies strictly inside the rectangle."""
    return left < x < right and bottom < z < top


def is_on_track(x: float, z: float) -> bool:
    """Return True if (x, z) lies on the drivable corridor."""
    inside_outer = is_inside_rect(
        x,
        z,
        OUTER_LEFT + TRACK_MARGIN,
        OUTER_RIGHT - TRACK_MARGIN,
        OUTER_BOTTOM + TRACK_MARGIN,
        OUTER_TOP - TRACK_MARGIN,
    )
    inside_inner = is_inside_rect(
        x,
        z,
        INNER_LEFT - TRACK_MARGIN,
        INNER_RIGHT + TRACK_MARGIN,
        INNER_BOTTOM - TRACK_MARGIN,
        INNER_TOP + TRACK_MARGIN,
    )
    return inside_outer and not inside_inner


def clamp_to_track(x: float, z: float) -> Collision:
    """Push (x, z) back inside the outer walls and out of the inner island."""
    hit = False
    nx = nz = 0.0

    o_left = OUTER_LEFT + TRACK_MARGIN
    o_right = OUTER_RIGHT - TRACK_MARGIN
    o_bottom = OUTER_BOTTOM + TRACK_MARGIN
    o_top = OUTER_TOP - TRACK_MARGIN

    if x < o_left:
        x, nx, hit = o_left, nx + 1.0, True
    if x > o_right:
        x, nx, hit = o_right, nx - 1.0, True
    if z < o_bottom:
        z, nz, hit = o_bottom, nz + 1.0, True
    if z > o_top:
        z, nz, hit = o_top, nz - 1.0, True

    i_left = INNER_LEFT - TRACK_MARGIN
    i_right = INNER_RIGHT + TRACK_MARGIN
    i_bottom = INNER_BOTTOM - TRACK_MARGIN
    i_top = INNER_TOP + TRACK_MARGIN

    if is_inside_rect(x, z, i_left, i_right, i_bottom, i_top):
        # Push out through the side with the smallest penetration; ties favour
        # left, then right, then bottom, then top.
        penetrations = [x - i_left, i_right - x, z - i_bottom, i_top - z]
        side = min(range(4), key=penetrations.__getitem__)
        if side == 0:
            x, nx = i_left, nx - 1.0
        elif side == 1:
            x, nx = i_right, nx + 1.0
        elif side == 2:
            z, nz = i_bottom, nz - 1.0
        else:
            z, nz = i_top, nz + 1.0
        hit = True

    return Collision(x=x, z=z, nx=nx, nz=nz, hit=hit)