"""Car handling, drifting, wall collision and the checkpoint/lap system."""

from __future__ import annotations

import math

from pinkdrift.effects import FRAME_DT, spawn_confetti, update_confetti, update_skid_marks
from pinkdrift.state import GameState, World
from pinkdrift.track import clamp_to_track

CHECKPOINT_COOLDOWN = 48
FINISH_CHECKPOINT = 2

# Checkpoints visited in order after the finish line: west, north, east, finish.
_NEXT_CHECKPOINT = {3: 0, 0: 1, 1: 2}


def checkpoint_zone(x: float, z: float) -> int:
    """Return the checkpoint zone (0 north, 1 east, 2 south/finish, 3 west) or -1."""
    if -2.5 < x < 2.5 and 6.0 < z < 15.5:
        return 0
    if -2.5 < z < 2.5 and 9.5 < x < 23.5:
        return 1
    if -2.5 < x < 2.5 and -15.5 < z < -6.0:
        return 2
    if -2.5 < z < 2.5 and -23.5 < x < -9.5:
        return 3
    return -1


def _finish_race(world: World) -> None:
    world.lap_count += 1
    world.game_state = GameState.FINISHED
    if world.best_time is None or world.race_time < world.best_time:
        world.best_time = world.race_time
        world.is_new_record = True
    else:
        world.is_new_record = False
    spawn_confetti(world)


def update_lap_system(world: World) -> None:
    """Advance the checkpoint sequence when the car enters the expected zone."""
    if world.game_state is GameState.FINISHED:
        return

    if world.checkpoint_cooldown > 0:
        world.checkpoint_cooldown -= 1

    zone = checkpoint_zone(world.car_x, world.car_z)
    if zone != world.next_checkpoint or world.checkpoint_cooldown > 0:
        return

    if world.next_checkpoint == FINISH_CHECKPOINT:
        if world.lap_started:
            _finish_race(world)
        else:
            world.lap_started = True
        world.next_checkpoint = 3
    else:
        world.next_checkpoint = _NEXT_CHECKPOINT[world.next_checkpoint]

    world.checkpoint_cooldown = CHECKPOINT_COOLDOWN


def _coast_after_finish(world: World) -> None:
    world.car_speed *= 0.94
    world.car_yaw_vel *= 0.88
    if abs(world.car_speed) < 0.001:
        world.car_speed = 0.0

    rad = math.radians(world.car_angle)
    next_x = world.car_x - math.cos(rad) * world.car_speed
    next_z = world.car_z + math.sin(rad) * world.car_speed
    if not clamp_to_track(next_x, next_z).hit:
        world.car_x = next_x
        world.car_z = next_z

    world.car_angle += world.car_yaw_vel
    world.wheel_rot += world.car_speed * 220.0
    update_skid_marks(world)
    update_confetti(world)


def _update_combo(world: World) -> None:
    if world.is_drifting:
        world.drift_frames += 1
        if world.drift_frames > 240:
            world.combo_multiplier = 4.0
        elif world.drift_frames > 160:
            world.combo_multiplier = 3.0
        elif world.drift_frames > 80:
            world.combo_multiplier = 2.0
        else:
            world.combo_multiplier = 1.0
    else:
        world.drift_frames = 0
        world.combo_multiplier = 1.0


def update_car(world: World) -> None:
    """Advance the car and everything attached to it by one frame."""
    if world.game_state is GameState.FINISHED:
        _coast_after_finish(world)
        return

    if world.lap_started:
        world.race_time += FRAME_DT

    mult = world.speed_multiplier
    max_fwd = 0.24 * mult
    max_rev = 0.09 * mult
    accel = 0.0056 * mult
    brake = 0.0078 * mult
    roll_friction = 0.986

    if world.key_held("w", "W"):
        world.car_speed = min(world.car_speed + accel, max_fwd)
    elif world.key_held("s", "S"):
        world.car_speed = max(world.car_speed - brake, -max_rev)
    else:
        world.car_speed *= roll_friction
        if abs(world.car_speed) < 0.001:
            world.car_speed = 0.0

    steer = 0.0
    if world.key_held("a", "A"):
        steer = 1.0
    if world.key_held("d", "D"):
        steer = -1.0

    handbrake = world.key_held(" ")
    speed_ratio = min(abs(world.car_speed) / max_fwd, 1.0)

    can_drift = abs(world.car_speed) > 0.06 * mult
    world.is_drifting = handbrake and can_drift
    _update_combo(world)

    world.steer_visual_angle += (steer * 26.0 - world.steer_visual_angle) * 0.15

    turn_pow = steer * (0.28 + speed_ratio * 0.46) * mult
    if world.car_speed < 0.0:
        turn_pow = -turn_pow * 0.65
    world.car_yaw_vel += turn_pow
    world.car_yaw_vel *= 0.955 if world.is_drifting else 0.82
    world.car_angle += world.car_yaw_vel

    if world.is_drifting:
        max_slip = 0.088 * mult
        lateral = world.lateral_speed + world.car_yaw_vel * speed_ratio * 0.022
        world.lateral_speed = max(-max_slip, min(lateral, max_slip))
    world.lateral_speed *= 0.986 if world.is_drifting else 0.82

    target_slip = world.lateral_speed * -162.0 if world.is_drifting else 0.0
    world.drift_slip_angle += (target_slip - world.drift_slip_angle) * 0.12
    if abs(world.drift_slip_angle) < 0.1:
        world.drift_slip_angle = 0.0

    rad = math.radians(world.car_angle)
    fwd_x, fwd_z = -math.cos(rad), math.sin(rad)
    side_x, side_z = math.sin(rad), math.cos(rad)

    next_x = world.car_x + fwd_x * world.car_speed + side_x * world.lateral_speed
    next_z = world.car_z + fwd_z * world.car_speed + side_z * world.lateral_speed

    if world.is_drifting:
        world.car_speed *= 0.995
        world.drift_score += (
            abs(world.car_speed) * 6.0 + abs(world.lateral_speed) * 26.0
        ) * world.combo_multiplier

    collision = clamp_to_track(next_x, next_z)
    world.car_x = collision.x
    world.car_z = collision.z

    if collision.hit:
        nx, nz = collision.nx, collision.nz
        length = math.hypot(nx, nz)
        if length > 0.0:
            nx /= length
            nz /= length
        if fwd_x * nx + fwd_z * nz < 0.0:
            world.car_speed *= 0.22
            world.car_yaw_vel *= 0.25
            world.lateral_speed *= -0.45
        world.drift_frames = 0
        world.combo_multiplier = 1.0
        world.is_drifting = False
        world.drift_slip_angle *= 0.30

    world.wheel_rot += world.car_speed * 222.0
    if world.wheel_rot > 360.0:
        world.wheel_rot -= 360.0
    if world.wheel_rot < -360.0:
        world.wheel_rot += 360.0

    update_skid_marks(world)
    update_lap_system(world)
    update_confetti(world)