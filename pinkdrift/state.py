"""Mutable game state shared by physics, effects, HUD and rendering."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass, field

# Track corridor: an outer rectangle with an inner island cut out of it.
OUTER_LEFT = -24.0
OUTER_RIGHT = 24.0
OUTER_BOTTOM = -16.0
OUTER_TOP = 16.0

INNER_LEFT = -8.8
INNER_RIGHT = 8.8
INNER_BOTTOM = -4.8
INNER_TOP = 4.8

TRACK_MARGIN = 1.20

MAX_CONFETTI = 200
MAX_SKID = 600

START_X = 20.0
START_Z = -12.0


class GameState(enum.Enum):
    """Whether the race is running or has been completed."""

    PLAYING = "playing"
    FINISHED = "finished"


@dataclass(slots=True)
class SkidMark:
    """A tyre mark left on the asphalt that fades over its lifetime."""

    x: float = 0.0
    z: float = 0.0
    angle: float = 0.0
    active: bool = False
    life_time: float = 0.0


@dataclass(slots=True)
class Confetti:
    """One piece of celebration confetti in 1000x550 screen space."""

    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    size: float = 0.0
    rot: float = 0.0
    rot_speed: float = 0.0


def _fresh_skid_marks() -> list[SkidMark]:
    return [SkidMark() for _ in range(MAX_SKID)]


@dataclass
class World:
    """Everything that changes while the game runs."""

    car_x: float = START_X
    car_z: float = START_Z
    car_angle: float = 0.0
    car_speed: float = 0.0

    wheel_rot: float = 0.0
    smoke_time: float = 0.0

    steer_visual_angle: float = 0.0
    car_yaw_vel: float = 0.0
    drift_slip_angle: float = 0.0
    lateral_speed: float = 0.0

    normal_keys: set[str] = field(default_factory=set)
    special_keys: set[int] = field(default_factory=set)
    is_drifting: bool = False

    camera_mode: int = 0
    night_mode: bool = False

    drift_score: float = 0.0
    combo_multiplier: float = 1.0
    drift_frames: int = 0

    lap_count: int = 0
    next_checkpoint: int = 0
    lap_started: bool = False
    checkpoint_cooldown: int = 0

    speed_multiplier: float = 1.0
    dragging_slider: bool = False

    game_state: GameState = GameState.PLAYING
    race_time: float = 0.0
    best_time: float | None = None
    is_new_record: bool = False

    confetti: list[Confetti] = field(default_factory=list)
    confetti_active: bool = False

    skid_marks: list[SkidMark] = field(default_factory=_fresh_skid_marks)
    skid_index: int = 0
    skid_frame: int = 0

    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def key_held(self, *keys: str) -> bool:
        """Return True if any of the given keyboard characters is held down."""
        return any(key in self.normal_keys for key in keys)

    def _reset_race(self) -> None:
        self.car_x = START_X
        self.car_z = START_Z
        self.car_angle = 0.0
        self.car_speed = 0.0

        self.wheel_rot = 0.0
        self.smoke_time = 0.0
        self.steer_visual_angle = 0.0
        self.car_yaw_vel = 0.0
        self.drift_slip_angle = 0.0
        self.is_drifting = False

        self.drift_score = 0.0
        self.combo_multiplier = 1.0
        self.drift_frames = 0

        self.lap_count = 0
        self.next_checkpoint = 0
        self.lap_started = False
        self.checkpoint_cooldown = 0

        self.game_state = GameState.PLAYING
        self.race_time = 0.0
        self.is_new_record = False
        self.confetti_active = False

        self.skid_marks = _fresh_skid_marks()
        self.skid_index = 0
        self.skid_frame = 0

    def reset(self) -> None:
        """Reset the whole scene, including the best lap time."""
        self._reset_race()
        self.best_time = None

    def restart(self) -> None:
        """Restart the race while keeping the best lap time."""
        self._reset_race()