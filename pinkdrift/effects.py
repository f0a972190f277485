"""Skid marks and confetti particles."""

from __future__ import annotations

import math

from pinkdrift.state import MAX_CONFETTI, MAX_SKID, Confetti, SkidMark, World

FRAME_DT = 0.016
SKID_LIFETIME = 5.0
_REAR_AXLE = 1.25
_CONFETTI_SEED = 123


def add_skid_mark(world: World, local_z: float) -> None:
    """Drop a skid mark behind the rear axle at lateral offset local_z."""
    rad = math.radians(world.car_angle)
    world_x = world.car_x + _REAR_AXLE * math.cos(rad) + local_z * math.sin(rad)
    world_z = world.car_z - _REAR_AXLE * math.sin(rad) + local_z * math.cos(rad)
    world.skid_marks[world.skid_index] = SkidMark(
        x=world_x,
        z=world_z,
        angle=world.car_angle,
        active=True,
        life_time=SKID_LIFETIME,
    )
    world.skid_index = (world.skid_index + 1) % MAX_SKID


def update_skid_marks(world: World) -> None:
    """Age existing skid marks and lay new ones while drifting."""
    for mark in world.skid_marks:
        if not mark.active:
            continue
        mark.life_time -= FRAME_DT
        if mark.life_time <= 0.0:
            mark.active = False

    if world.is_drifting:
        world.skid_frame += 1
        if world.skid_frame % 3 == 0:
            add_skid_mark(world, 0.75)
            add_skid_mark(world, -0.75)


def _launch(rng, confetti: Confetti, y: float) -> None:
    confetti.x = float(rng.randrange(1000))
    confetti.y = y
    confetti.vx = (rng.randrange(60) - 30) * 0.08
    confetti.vy = -(1.8 + rng.randrange(35) * 0.1)


def spawn_confetti(world: World) -> None:
    """Fill the screen with a fresh, reproducible burst of confetti."""
    rng = world.rng
    rng.seed(_CONFETTI_SEED)
    # Draw order: x, y, vx, vy, r, g, b, size, rot, rot_speed.
    particles = []
    for _ in range(MAX_CONFETTI):
        particles.append(
            Confetti(
                x=float(rng.randrange(1000)),
                y=550.0 + rng.randrange(250),
                vx=(rng.randrange(60) - 30) * 0.08,
                vy=-(1.8 + rng.randrange(35) * 0.1),
                r=rng.randrange(100) / 100.0,
                g=rng.randrange(100) / 100.0,
                b=rng.randrange(100) / 100.0,
                size=5.0 + rng.randrange(8),
                rot=float(rng.randrange(360)),
                rot_speed=(rng.randrange(16) - 8) * 0.5,
            )
        )
    world.confetti = particles
    world.confetti_active = True


def update_confetti(world: World) -> None:
    """Advance confetti one frame, recycling pieces that fall off screen."""
    if not world.confetti_active:
        return
    for piece in world.confetti:
        piece.x += piece.vx
        piece.y += piece.vy
        piece.rot += piece.rot_speed
        piece.vx *= 0.995
        if piece.y < -20.0:
            _launch(world.rng, piece, 560.0)